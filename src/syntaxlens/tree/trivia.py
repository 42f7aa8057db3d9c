"""
Trivia Renderer

Renders one trivia piece as display markup. Text is always HTML escaped
before whitespace is substituted.
"""

from ..shared import SyntaxLensImplementationError, TriviaKind, TriviaPiece
from ..utils.config import BREAK_MARKER, NBSP_MARKER, TAB_WIDTH
from .markup import escape_html, invisibles_to_html, invisibles_to_symbols

_SPAN_KINDS = frozenset({
    TriviaKind.LINE_COMMENT,
    TriviaKind.BLOCK_COMMENT,
    TriviaKind.DOC_LINE_COMMENT,
    TriviaKind.DOC_BLOCK_COMMENT,
    TriviaKind.UNEXPECTED_TEXT,
})


def wrap_with_span(piece: TriviaPiece) -> str:
    class_name = piece.kind.value
    return (
        f"<span class='{escape_html(class_name)}' "
        f"data-title='{invisibles_to_symbols(escape_html(str(piece)))}' "
        f"data-content='{invisibles_to_html(escape_html(class_name))}' "
        f"data-type='Trivia'>{invisibles_to_html(escape_html(piece.text))}</span>"
    )


def render_trivia_piece(piece: TriviaPiece) -> str:
    kind = piece.kind
    if kind is TriviaKind.SPACES:
        return NBSP_MARKER * piece.count
    if kind is TriviaKind.TABS:
        return NBSP_MARKER * (piece.count * TAB_WIDTH)
    if kind in (TriviaKind.VERTICAL_TABS, TriviaKind.FORMFEEDS):
        return ""
    if piece.is_newline:
        return BREAK_MARKER * piece.count
    if kind in _SPAN_KINDS:
        return wrap_with_span(piece)
    if kind is TriviaKind.BACKSLASHES:
        return "\\" * piece.count
    if kind is TriviaKind.POUNDS:
        return "#" * piece.count
    raise SyntaxLensImplementationError(f"Unhandled trivia kind: {kind}")
