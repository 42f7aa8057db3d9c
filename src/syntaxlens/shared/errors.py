"""
Error Reporting

Diagnostics for source errors (rustc-style snippets) and the exception
hierarchy used across syntaxlens.
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional
from .source_location import SourceLocation
from ..utils.config import ERROR_POINTER_CHAR


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("SYNTAXLENS_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return sys.stderr.isatty()

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """A single diagnostic."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic.

    Example output (plain, no color)::

        error[E0001]: expected one of RPAREN, COMMA
         --> main.swift:1:7
          |
        1 | f(1, ]
          |       ^ unexpected token
    """
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    if error.location is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    loc = error.location
    source = source_files.get(loc.file)
    if source is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.splitlines()
    gw = max(len(str(loc.line)), 1)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    # Byte column -> character column for the caret
    prefix = code_line.encode("utf-8")[:max(loc.column, 1) - 1].decode("utf-8", errors="ignore")
    if loc.end_column > loc.column and loc.end_line in (0, loc.line):
        span_len = loc.end_column - loc.column
    else:
        span_len = 1
    carets = " " * len(prefix) + ERROR_POINTER_CHAR * span_len
    label_suffix = f" {error.label}" if error.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_annotations(out, error, gw, color)
    return "\n".join(out)


def _append_annotations(
    out: List[str],
    error: Error,
    gw: int,
    color: bool,
) -> None:
    if not (error.help or error.note):
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    pad = " " * (gw + 1)
    if error.help:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("help: ", _BOLD, color=color)
            + error.help
        )
    if error.note:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("note: ", _BOLD, color=color)
            + error.note
        )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """Collects raised source errors and formats them against their sources."""

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report(self, error: 'SyntaxLensSourceError') -> None:
        """Record a raised source error, registering its text for the snippet."""
        if error.source_code is not None and error.location is not None:
            self.source_files.setdefault(error.location.file, error.source_code)
        self.errors.append(error.to_error())

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        return "\n\n".join(self.format_error(e, color=color) for e in self.errors)


# ============================================================================
# Exception Classes
# ============================================================================

class SyntaxLensError(Exception):
    """Base exception for all syntaxlens errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message} at {self.location}"
        return self.message


class SyntaxLensSourceError(SyntaxLensError):
    """
    Error in the user's source text.

    Use this for errors caused by the input being rendered (parse errors,
    folding failures). Carries the source so it can print a snippet.
    """
    def __init__(self,
                 message: str,
                 location: Optional[SourceLocation] = None,
                 error_code: str = "E0001",
                 source_code: Optional[str] = None,
                 help: Optional[str] = None,
                 label: Optional[str] = None,
                 note: Optional[str] = None):
        super().__init__(message, location)
        self.error_code = error_code
        self.source_code = source_code
        self.help_text = help
        self.label_text = label
        self.note_text = note

    def to_error(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            note=self.note_text,
            label=self.label_text,
        )

    def format(self, color: bool = False) -> str:
        """Rustc-style diagnostic with a source snippet when available."""
        reporter = ErrorReporter({})
        reporter.report(self)
        return reporter.format_all_errors(color=color)


class ParseError(SyntaxLensSourceError):
    """The parser rejected the source text."""


class FoldingError(SyntaxLensSourceError):
    """Operator folding failed (unknown operator, non-associative chain)."""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message, location, error_code="E0002")


class SyntaxLensImplementationError(Exception):
    """
    Error in the implementation, not in the user's source.

    Raised for contract violations: unknown node kinds, unsupported structural
    shapes, a malformed kind catalog. Never caught by the render driver.
    """
    def __init__(self, message: str, error_code: str = "E9999"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"
