"""
Markup helpers for display text
"""

from ..utils.config import (
    BREAK_MARKER, NBSP_MARKER, NEWLINE_SPAN, VISIBLE_NEWLINE_SYMBOL, VISIBLE_SPACE_SYMBOL,
    WHITESPACE_SPAN,
)

# Ampersand first so later entities are not escaped twice
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_html(text: str) -> str:
    for raw, entity in _HTML_ESCAPES:
        text = text.replace(raw, entity)
    return text


def invisibles_to_html(text: str) -> str:
    """Spaces to non-breaking-space markers, newlines to line breaks"""
    return text.replace(" ", NBSP_MARKER).replace("\n", BREAK_MARKER)


def invisibles_to_symbols(text: str) -> str:
    return text.replace(" ", VISIBLE_SPACE_SYMBOL).replace("\n", VISIBLE_NEWLINE_SYMBOL)


def html_whitespace_to_symbols(text: str) -> str:
    """Wrap rendered whitespace markers in spans showing a visible symbol"""
    return text.replace(NBSP_MARKER, WHITESPACE_SPAN).replace(BREAK_MARKER, NEWLINE_SPAN)


def display_text(text: str) -> str:
    """Token text as shown in a label"""
    return html_whitespace_to_symbols(invisibles_to_html(escape_html(text)))
