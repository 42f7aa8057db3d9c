"""
syntaxlens CST Transformers
===========================

Lark parse tree to concrete syntax tree conversion.
"""

from .base import CSTBuilder, build_layout
from .tokens import MissingToken, TokenFactory, token_kind, KEYWORD_TERMINALS, CANONICAL_TEXT
from .trivia import attach_trivia, split_trivia

__all__ = [
    'CSTBuilder',
    'build_layout',
    'MissingToken',
    'TokenFactory',
    'token_kind',
    'KEYWORD_TERMINALS',
    'CANONICAL_TEXT',
    'attach_trivia',
    'split_trivia',
]
