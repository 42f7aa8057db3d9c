"""
Centralized file I/O utilities.

- Single place for encoding handling
- Use Path.read_text() consistently (no raw open/read)
"""

import sys
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_FILE_ENCODING


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def read_source_stream(stream: Optional[object] = None) -> str:
    """Read all of stdin (or the given binary stream) as UTF-8 text."""
    if stream is None:
        stream = sys.stdin.buffer
    data = stream.read()
    if isinstance(data, str):
        return data
    return data.decode(DEFAULT_FILE_ENCODING)
