"""
Tree Assembler

Walks a CST and emits one `TreeNode` per node (tokens included) in
pre-order, each linked to its parent by id.
"""

import logging
from typing import List

from ..shared import SourceLocationConverter, Syntax, SyntaxCategory, SyntaxVisitor, Token
from ..utils.config import SYNTAX_SUFFIX
from .markup import display_text, escape_html, html_whitespace_to_symbols
from .positions import map_range
from .records import TokenInfo, TreeNode
from .structure import reflect
from .trivia import render_trivia_piece

logger = logging.getLogger("syntaxlens.tree.visitor")


def class_name(kind_name: str) -> str:
    """Kind name without the Syntax suffix"""
    if kind_name.endswith(SYNTAX_SUFFIX):
        return kind_name[:-len(SYNTAX_SUFFIX)]
    return kind_name


class TokenVisitor(SyntaxVisitor[List[TreeNode]]):
    """
    Builds the flat node list for one tree.

    All traversal state (next id, open-node stack, output) lives on the
    instance; use a fresh visitor per render.
    """

    def __init__(self, converter: SourceLocationConverter, show_missing_tokens: bool = False):
        self.converter = converter
        self.show_missing_tokens = show_missing_tokens
        self.tree: List[TreeNode] = []
        self._stack: List[TreeNode] = []
        self._index = 0

    def visit(self, root: Syntax) -> List[TreeNode]:
        self.walk(root)
        logger.debug(f"Visited {len(self.tree)} nodes")
        return self.tree

    def visit_pre(self, node: Syntax) -> None:
        spec = node.spec
        structure = reflect(node, spec)
        category = SyntaxCategory.COLLECTION if structure.is_collection else spec.category

        tree_node = TreeNode(
            id=self._index,
            label=escape_html(class_name(spec.name)),
            range=map_range(self.converter, node.position, node.end_position),
            category=category,
            structure=structure.properties,
        )
        if self._stack:
            tree_node.parent = self._stack[-1].id

        self.tree.append(tree_node)
        self._index += 1
        self._stack.append(tree_node)

    def visit_token(self, token: Token) -> None:
        current = self._stack[-1]
        text = token.text if not token.is_missing or self.show_missing_tokens else ""
        current.label = display_text(text)

        info = TokenInfo(kind=str(token.kind))
        for piece in token.leading_trivia:
            info.leading_trivia += html_whitespace_to_symbols(render_trivia_piece(piece))
        for piece in token.trailing_trivia:
            info.trailing_trivia += html_whitespace_to_symbols(render_trivia_piece(piece))
        current.token_info = info

    def visit_post(self, node: Syntax) -> None:
        self._stack.pop()
