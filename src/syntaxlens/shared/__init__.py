"""
Shared data structures used across the frontend and the tree engine
"""

from .source_location import SourceLocation, SourceLocationConverter
from .errors import (
    SyntaxLensError, SyntaxLensSourceError, ParseError, FoldingError,
    SyntaxLensImplementationError, ErrorReporter, Error,
)
from .kinds import (
    SyntaxCategory, SyntaxShape, Field, NodeKindSpec, NODE_KINDS, spec_for, spec_for_rule,
)
from .nodes import (
    SourcePresence, TriviaKind, TriviaPiece, TokenKind, Token, SyntaxNode, Syntax, assign_spans,
)
from .cst_visitor import SyntaxVisitor

__all__ = [
    'SourceLocation', 'SourceLocationConverter',
    'SyntaxLensError', 'SyntaxLensSourceError', 'ParseError', 'FoldingError',
    'SyntaxLensImplementationError', 'ErrorReporter', 'Error',
    'SyntaxCategory', 'SyntaxShape', 'Field', 'NodeKindSpec', 'NODE_KINDS', 'spec_for', 'spec_for_rule',
    'SourcePresence', 'TriviaKind', 'TriviaPiece', 'TokenKind', 'Token', 'SyntaxNode', 'Syntax',
    'assign_spans', 'SyntaxVisitor',
]
