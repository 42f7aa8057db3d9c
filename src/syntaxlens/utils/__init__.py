"""
syntaxlens utilities package
"""

from .io_utils import read_source_file, read_source_stream
from .base import Result, ResultTag

__all__ = ["read_source_file", "read_source_stream", "Result", "ResultTag"]
