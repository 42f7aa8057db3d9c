"""
Tests for label and trivia markup helpers.
"""

from syntaxlens.tree.markup import (
    display_text, escape_html, html_whitespace_to_symbols, invisibles_to_html, invisibles_to_symbols,
)
from syntaxlens.utils.config import NEWLINE_SPAN, WHITESPACE_SPAN


class TestEscapeHtml:
    def test_all_special_characters(self):
        assert escape_html("a&<b>\"'") == "a&amp;&lt;b&gt;&quot;&apos;"

    def test_ampersand_escaped_once(self):
        assert escape_html("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        assert escape_html("VariableDecl") == "VariableDecl"


class TestWhitespaceMarkup:
    def test_invisibles_to_html(self):
        assert invisibles_to_html("a b\n") == "a&nbsp;b<br/>"

    def test_invisibles_to_symbols(self):
        assert invisibles_to_symbols("a b\n") == "a␣b↲"

    def test_markers_become_spans(self):
        assert html_whitespace_to_symbols("&nbsp;<br/>") == WHITESPACE_SPAN + NEWLINE_SPAN


class TestDisplayText:
    """Token labels: escape first, then make whitespace visible"""

    def test_space_in_label(self):
        assert display_text("a b") == "a" + WHITESPACE_SPAN + "b"

    def test_escaped_before_spans(self):
        text = display_text("<a b>")
        assert text.startswith("&lt;a")
        assert text.endswith("b&gt;")
        assert WHITESPACE_SPAN in text

    def test_empty(self):
        assert display_text("") == ""
