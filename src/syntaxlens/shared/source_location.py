"""
Source Location

Line/column locations and the UTF-8 offset converter used by the parser
and by the position mapper.
"""

from bisect import bisect_right
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location.

    Columns are 1-based UTF-8 byte columns, the unit the converter works in.
    Immutable (frozen) for hashability.
    """
    file: str
    line: int
    column: int
    offset: int = 0
    end_line: int = 0  # extension
    end_column: int = 0  # extension

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"


class SourceLocationConverter:
    """
    Converts UTF-8 byte offsets into (line, column) locations.

    `source_lines` holds each line as raw UTF-8 bytes including its line
    terminator. A trailing empty line is appended when the source ends with a
    newline (or is empty) so the end-of-file position always has a line.
    """

    def __init__(self, source: str, file_name: str = ""):
        self.file_name = file_name
        self.source_bytes: bytes = source.encode("utf-8")
        lines: List[bytes] = self.source_bytes.splitlines(keepends=True)
        if not lines or lines[-1].endswith((b"\n", b"\r")):
            lines.append(b"")
        self.source_lines: List[bytes] = lines

        self._line_starts: List[int] = []
        position = 0
        for line in lines:
            self._line_starts.append(position)
            position += len(line)

    def location(self, offset: int) -> SourceLocation:
        """Location of a UTF-8 byte offset, clamped to the source bounds."""
        offset = max(0, min(offset, len(self.source_bytes)))
        index = bisect_right(self._line_starts, offset) - 1
        return SourceLocation(
            file=self.file_name,
            line=index + 1,
            column=offset - self._line_starts[index] + 1,
            offset=offset,
        )
