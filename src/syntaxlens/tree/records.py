"""
Node Records

Flat, display-ready records produced by the tree visitor. Field names
follow Python conventions; the JSON names are applied by
`tree.serialization`.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..shared import SyntaxCategory


@dataclass
class SourceRange:
    """1-based rows; columns in UTF-16 code units"""
    start_row: int
    start_column: int
    end_row: int
    end_column: int


@dataclass
class StructureValue:
    text: str
    kind: Optional[str] = None


@dataclass
class StructureProperty:
    """One structural slot of a node: inline value, child reference, or both"""
    name: str
    value: Optional[StructureValue] = None
    ref: Optional[str] = None


@dataclass
class TokenInfo:
    kind: str
    leading_trivia: str = ""
    trailing_trivia: str = ""


@dataclass
class TreeNode:
    """One visited CST node (container or token)"""
    id: int
    label: str
    range: SourceRange
    category: SyntaxCategory
    parent: Optional[int] = None
    structure: List[StructureProperty] = field(default_factory=list)
    token_info: Optional[TokenInfo] = None

    @property
    def is_token(self) -> bool:
        return self.token_info is not None

    def __str__(self) -> str:
        return (f"{self.id} {self.label} {self.range.start_row}:{self.range.start_column}"
                f"-{self.range.end_row}:{self.range.end_column} parent={self.parent}")
