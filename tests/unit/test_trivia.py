"""
Tests for trivia splitting, attachment and rendering.
"""

import pytest
from syntaxlens.frontend.transformers.trivia import split_trivia
from syntaxlens.shared import SyntaxLensImplementationError, TriviaKind, TriviaPiece
from syntaxlens.tree.trivia import render_trivia_piece
from tests.test_utils import parse, roundtrip_text


def kinds(pieces):
    return [piece.kind for piece in pieces]


class TestSplitTrivia:
    """Gap text to trivia pieces"""

    def test_whitespace_runs(self):
        pieces = split_trivia("  \n\t")
        assert kinds(pieces) == [TriviaKind.SPACES, TriviaKind.NEWLINES, TriviaKind.TABS]
        assert pieces[0].count == 2

    def test_crlf_counts_pairs(self):
        pieces = split_trivia("\r\n\r\n")
        assert kinds(pieces) == [TriviaKind.CARRIAGE_RETURN_LINE_FEEDS]
        assert pieces[0].count == 2

    def test_lone_carriage_return(self):
        assert kinds(split_trivia("\r")) == [TriviaKind.CARRIAGE_RETURNS]

    def test_comments(self):
        pieces = split_trivia("// a\n/// b\n/* c */ /** d */")
        assert kinds(pieces) == [
            TriviaKind.LINE_COMMENT, TriviaKind.NEWLINES,
            TriviaKind.DOC_LINE_COMMENT, TriviaKind.NEWLINES,
            TriviaKind.BLOCK_COMMENT, TriviaKind.SPACES, TriviaKind.DOC_BLOCK_COMMENT,
        ]
        assert pieces[0].text == "// a"

    def test_empty_block_comment_is_not_doc(self):
        assert kinds(split_trivia("/**/")) == [TriviaKind.BLOCK_COMMENT]

    def test_unrecognized_text_is_merged(self):
        pieces = split_trivia("@@ ")
        assert pieces[0] == TriviaPiece(TriviaKind.UNEXPECTED_TEXT, "@@")
        assert pieces[1].kind is TriviaKind.SPACES

    def test_skipped_token_is_one_piece(self):
        pieces = split_trivia(" ab ", base=10, skipped={11: 13})
        assert pieces == [
            TriviaPiece(TriviaKind.SPACES, " "),
            TriviaPiece(TriviaKind.UNEXPECTED_TEXT, "ab"),
            TriviaPiece(TriviaKind.SPACES, " "),
        ]

    def test_pieces_cover_text(self):
        text = " \t// x\r\n/* y */#\\"
        assert "".join(piece.text for piece in split_trivia(text)) == text


class TestTriviaPieceDescription:
    def test_counted_kind(self):
        assert str(TriviaPiece(TriviaKind.SPACES, "  ")) == "spaces(2)"

    def test_text_kind(self):
        assert str(TriviaPiece(TriviaKind.LINE_COMMENT, "// x")) == 'lineComment("// x")'


class TestAttachTrivia:
    """Trailing trivia stops at the first newline; the rest leads the next token"""

    def test_trailing_and_leading(self):
        parsed = parse("let x = 1 // one\n  let y = 2")
        tokens = list(parsed.root.tokens())
        one = next(token for token in tokens if token.text == "1")
        second_let = [token for token in tokens if token.text == "let"][1]
        assert kinds(one.trailing_trivia) == [TriviaKind.SPACES, TriviaKind.LINE_COMMENT]
        assert kinds(second_let.leading_trivia) == [TriviaKind.NEWLINES, TriviaKind.SPACES]

    def test_first_token_gets_everything_before_it(self):
        parsed = parse("\n// head\nlet x = 1")
        first = next(parsed.root.tokens())
        assert kinds(first.leading_trivia) == [
            TriviaKind.NEWLINES, TriviaKind.LINE_COMMENT, TriviaKind.NEWLINES,
        ]

    def test_end_of_file_takes_tail(self):
        parsed = parse("x\n\n/* end */")
        eof = list(parsed.root.tokens())[-1]
        assert eof.terminal == "EOF"
        assert kinds(eof.leading_trivia) == [TriviaKind.NEWLINES, TriviaKind.BLOCK_COMMENT]

    def test_positions_are_byte_offsets(self):
        parsed = parse('let s = "é"\nx')
        last = [token for token in parsed.root.tokens() if token.text == "x"][0]
        assert last.position == len('let s = "é"\n'.encode("utf-8"))

    @pytest.mark.parametrize("source", [
        "",
        "   ",
        "let x = 1\n",
        "let x = 1\r\nlet y = 2\r\n",
        "\tfunc f(a: Int) -> Int {\n\treturn a // id\n}\n",
        "/** doc */\nstruct S { var a: Int? }",
        'let s = "a \\" b"',
    ])
    def test_round_trip(self, source):
        assert roundtrip_text(parse(source).root) == source


class TestRenderTriviaPiece:
    def test_spaces(self):
        assert render_trivia_piece(TriviaPiece(TriviaKind.SPACES, "   ")) == "&nbsp;" * 3

    def test_tab_is_two_spaces(self):
        assert render_trivia_piece(TriviaPiece(TriviaKind.TABS, "\t")) == "&nbsp;&nbsp;"

    def test_newlines(self):
        assert render_trivia_piece(TriviaPiece(TriviaKind.CARRIAGE_RETURN_LINE_FEEDS, "\r\n\r\n")) == "<br/><br/>"
        assert render_trivia_piece(TriviaPiece(TriviaKind.NEWLINES, "\n")) == "<br/>"

    def test_invisible_kinds_render_empty(self):
        assert render_trivia_piece(TriviaPiece(TriviaKind.VERTICAL_TABS, "\v")) == ""
        assert render_trivia_piece(TriviaPiece(TriviaKind.FORMFEEDS, "\f\f")) == ""

    def test_backslashes_and_pounds(self):
        assert render_trivia_piece(TriviaPiece(TriviaKind.BACKSLASHES, "\\\\")) == "\\\\"
        assert render_trivia_piece(TriviaPiece(TriviaKind.POUNDS, "##")) == "##"

    def test_comment_is_wrapped(self):
        html = render_trivia_piece(TriviaPiece(TriviaKind.LINE_COMMENT, "// a<b"))
        assert html.startswith("<span class='lineComment' ")
        assert "data-type='Trivia'>" in html
        assert "data-title='lineComment(&quot;//␣a&lt;b&quot;)'" in html
        assert html.endswith(">//&nbsp;a&lt;b</span>")

    def test_unexpected_text_is_wrapped(self):
        html = render_trivia_piece(TriviaPiece(TriviaKind.UNEXPECTED_TEXT, "@"))
        assert "class='unexpectedText'" in html

    def test_unhandled_kind(self):
        class Fake:
            kind = "bogus"
            is_newline = False
            count = 1
        with pytest.raises(SyntaxLensImplementationError):
            render_trivia_piece(Fake())
