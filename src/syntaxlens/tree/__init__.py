"""
Tree engine: turns a CST into a flat, display-ready node list
"""

from .records import SourceRange, StructureProperty, StructureValue, TokenInfo, TreeNode
from .positions import display_column, map_range
from .markup import escape_html, display_text
from .trivia import render_trivia_piece
from .structure import NodeStructure, reflect
from .visitor import TokenVisitor
from .serialization import encode_tree, node_to_dict, serialize_cst

__all__ = [
    'SourceRange', 'StructureProperty', 'StructureValue', 'TokenInfo', 'TreeNode',
    'display_column', 'map_range', 'escape_html', 'display_text', 'render_trivia_piece',
    'NodeStructure', 'reflect', 'TokenVisitor', 'encode_tree', 'node_to_dict', 'serialize_cst',
]
