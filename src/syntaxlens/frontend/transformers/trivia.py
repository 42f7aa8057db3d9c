"""
Trivia Attachment

The lexer drops whitespace and comments. This module rebuilds them from the
gaps between consecutive tokens and attaches them to the tokens:

- trailing trivia of a token runs up to (not including) the next newline
- the rest of a gap is the leading trivia of the following token
- text after the last token belongs to the end-of-file token

It also converts token positions from character offsets to UTF-8 byte
offsets and places missing tokens after the trailing trivia of the previous
present token.
"""

import re
from itertools import accumulate
from typing import Dict, List, Optional

from ...shared import SyntaxNode, Token, TriviaKind, TriviaPiece

_TRIVIA_PATTERN = re.compile(r"""
      (?P<carriageReturnLineFeeds>(?:\r\n)+)
    | (?P<newlines>\n+)
    | (?P<carriageReturns>\r+)
    | (?P<spaces>[ ]+)
    | (?P<tabs>\t+)
    | (?P<verticalTabs>\v+)
    | (?P<formfeeds>\f+)
    | (?P<docLineComment>///[^\r\n]*)
    | (?P<lineComment>//[^\r\n]*)
    | (?P<docBlockComment>/\*\*(?!/)[\s\S]*?\*/)
    | (?P<blockComment>/\*[\s\S]*?\*/)
    | (?P<backslashes>\\+)
    | (?P<pounds>\#+)
""", re.VERBOSE)


def split_trivia(text: str, base: int = 0,
                 skipped: Optional[Dict[int, int]] = None) -> List[TriviaPiece]:
    """
    Split gap text into trivia pieces.

    `skipped` maps character offsets (relative to the whole source, `base`
    being the offset of `text`) of tokens dropped by error recovery to their
    end offsets; each becomes one unexpected-text piece. Any other text the
    trivia pattern does not recognize is unexpected text as well.
    """
    skipped = skipped or {}
    pieces: List[TriviaPiece] = []
    pos = 0
    while pos < len(text):
        end = skipped.get(base + pos)
        if end is not None:
            end = min(end - base, len(text))
            _append_unexpected(pieces, text[pos:end])
            pos = end
            continue
        match = _TRIVIA_PATTERN.match(text, pos)
        if match:
            pieces.append(TriviaPiece(TriviaKind(match.lastgroup), match.group()))
            pos = match.end()
        else:
            _append_unexpected(pieces, text[pos])
            pos += 1
    return pieces


def _append_unexpected(pieces: List[TriviaPiece], text: str) -> None:
    if pieces and pieces[-1].kind is TriviaKind.UNEXPECTED_TEXT:
        pieces[-1] = TriviaPiece(TriviaKind.UNEXPECTED_TEXT, pieces[-1].text + text)
    else:
        pieces.append(TriviaPiece(TriviaKind.UNEXPECTED_TEXT, text))


def _split_trailing(pieces: List[TriviaPiece]):
    for index, piece in enumerate(pieces):
        if piece.is_newline:
            return pieces[:index], pieces[index:]
    return pieces, []


def attach_trivia(root: SyntaxNode, source: str, skipped: Optional[Dict[int, int]] = None) -> None:
    """Attach trivia to every token of `root` and rewrite positions to UTF-8 offsets"""
    byte_offsets = list(accumulate((len(ch.encode("utf-8")) for ch in source), initial=0))

    previous: Optional[Token] = None
    consumed = 0
    missing: List[Token] = []
    for token in root.tokens():
        if token.is_missing:
            missing.append(token)
            continue
        start = len(source) if token.terminal == "EOF" else token.position
        pieces = split_trivia(source[consumed:start], consumed, skipped)
        if previous is None:
            trailing, leading = [], pieces
        else:
            trailing, leading = _split_trailing(pieces)
            previous.trailing_trivia = trailing
        token.leading_trivia = leading

        missing_at = consumed + sum(len(piece.text) for piece in trailing)
        for placeholder in missing:
            placeholder.position = byte_offsets[missing_at]
        missing.clear()

        token.position = byte_offsets[start]
        consumed = start + len(token.text)
        previous = token

    # Unreachable while the end-of-file token is the last token
    for placeholder in missing:
        placeholder.position = byte_offsets[consumed]
