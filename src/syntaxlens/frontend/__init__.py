"""
Frontend: Swift subset parser, CST builder and operator folding
"""

from .parser import Parser, ParsedSource, RecoverySession
from .folding import OperatorTable, OperatorFolder, Associativity, PrecedenceGroup, fold_all

__all__ = [
    'Parser', 'ParsedSource', 'RecoverySession',
    'OperatorTable', 'OperatorFolder', 'Associativity', 'PrecedenceGroup', 'fold_all',
]
