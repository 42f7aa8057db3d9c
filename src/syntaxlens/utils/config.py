"""
Configuration constants to replace magic numbers throughout syntaxlens
"""

import os
import tempfile

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "syntaxlens_parser.cache")
DEFAULT_SOURCE_FILE = "<stdin>"

# Error recovery limits
MAX_RECOVERIES = 64  # Missing tokens the parser may insert before giving up

# Render option names (string option API)
FOLD_OPTION = "fold"
SHOW_MISSING_OPTION = "showmissing"

# Markup markers
NBSP_MARKER = "&nbsp;"
BREAK_MARKER = "<br/>"
TAB_WIDTH = 2  # A tab renders as this many NBSP markers
VISIBLE_SPACE_SYMBOL = "␣"
VISIBLE_NEWLINE_SYMBOL = "↲"
WHITESPACE_SPAN = "<span class='whitespace'>" + VISIBLE_SPACE_SYMBOL + "</span>"
NEWLINE_SPAN = "<span class='newline'>" + VISIBLE_NEWLINE_SYMBOL + "</span>" + BREAK_MARKER

# Node naming
SYNTAX_SUFFIX = "Syntax"
NIL_TEXT = "nil"
ELEMENT_PROPERTY = "Element"
COUNT_PROPERTY = "Count"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Debug dump directory (SYNTAXLENS_DUMP_CST=1)
CST_DUMP_DIR = "cst_dump"

# Error reporting constants
ERROR_POINTER_CHAR = "^"
