"""
Position Mapper

Turns UTF-8 byte offsets into 1-based rows and columns, with columns
counted in UTF-16 code units as text renderers expect.
"""

from ..shared import SourceLocationConverter
from .records import SourceRange


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def display_column(converter: SourceLocationConverter, line: int, raw_column: int) -> int:
    """
    Re-measure a byte column in UTF-16 code units.

    Falls back to `raw_column` when the line does not exist or the byte
    prefix ends inside a multi-byte character.
    """
    if line < 1:
        return raw_column
    try:
        line_bytes = converter.source_lines[line - 1]
        prefix = line_bytes[:raw_column - 1].decode("utf-8")
    except (IndexError, UnicodeDecodeError):
        return raw_column
    return utf16_length(prefix) + 1


def map_range(converter: SourceLocationConverter, start_offset: int, end_offset: int) -> SourceRange:
    start = converter.location(start_offset)
    end = converter.location(end_offset)
    return SourceRange(
        start_row=start.line,
        start_column=display_column(converter, start.line, start.column),
        end_row=end.line,
        end_column=display_column(converter, end.line, end.column),
    )
