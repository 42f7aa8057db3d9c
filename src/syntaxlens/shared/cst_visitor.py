"""
CST Visitor

Depth-first walker over the concrete syntax tree. Every node, tokens
included, gets a pre-visit and a post-visit; tokens additionally get
`visit_token` between the two. Missing tokens are walked like present ones.
"""

from abc import ABC
from typing import Generic, TypeVar

from .nodes import Syntax, Token

T = TypeVar('T')


class SyntaxVisitor(ABC, Generic[T]):
    """
    Base class for CST visitors.

    Subclasses keep their traversal state on the instance and expose the
    result through `visit`.
    """

    def walk(self, node: Syntax) -> None:
        self.visit_pre(node)
        if node.is_token:
            self.visit_token(node)
        else:
            for child in node.children():
                self.walk(child)
        self.visit_post(node)

    def visit_pre(self, node: Syntax) -> None:
        pass

    def visit_token(self, token: Token) -> None:
        pass

    def visit_post(self, node: Syntax) -> None:
        pass

    def visit(self, root: Syntax) -> T:
        """Walk `root` and return the visitor's result"""
        raise NotImplementedError
