"""
Operator Folding

Rewrites flat `SequenceExpr` nodes (operand, operator, operand, ...) into
nested `InfixOperatorExpr` nodes following the standard precedence groups.

Folding works on a deep copy: the parsed tree is never modified.
"""

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..shared import FoldingError, SourceLocationConverter, Syntax, SyntaxNode

logger = logging.getLogger("syntaxlens.frontend.folding")


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


@dataclass(frozen=True)
class PrecedenceGroup:
    """Named precedence group; higher rank binds tighter"""
    name: str
    rank: int
    associativity: Associativity


_STANDARD_GROUPS: Tuple[Tuple[str, Associativity, Tuple[str, ...]], ...] = (
    ("BitwiseShiftPrecedence", Associativity.NONE, ("<<", ">>", "&<<", "&>>")),
    ("MultiplicationPrecedence", Associativity.LEFT, ("*", "/", "%", "&*", "&")),
    ("AdditionPrecedence", Associativity.LEFT, ("+", "-", "&+", "&-", "|", "^")),
    ("RangeFormationPrecedence", Associativity.NONE, ("...", "..<")),
    ("NilCoalescingPrecedence", Associativity.RIGHT, ("??",)),
    ("ComparisonPrecedence", Associativity.NONE, ("<", "<=", ">", ">=", "==", "!=", "===", "!==", "~=")),
    ("LogicalConjunctionPrecedence", Associativity.LEFT, ("&&",)),
    ("LogicalDisjunctionPrecedence", Associativity.LEFT, ("||",)),
    ("AssignmentPrecedence", Associativity.RIGHT,
     ("=", "*=", "/=", "%=", "+=", "-=", "<<=", ">>=", "&=", "|=", "^=")),
)


class OperatorTable:
    """Infix operators and their precedence groups"""

    def __init__(self, groups: Iterable[Tuple[str, Associativity, Iterable[str]]]):
        """`groups` is ordered from tightest to loosest binding"""
        groups = list(groups)
        self._operators: Dict[str, PrecedenceGroup] = {}
        for index, (name, associativity, operators) in enumerate(groups):
            group = PrecedenceGroup(name, len(groups) - index, associativity)
            for operator in operators:
                self._operators[operator] = group

    @classmethod
    def standard_operators(cls) -> 'OperatorTable':
        return cls(_STANDARD_GROUPS)

    def group(self, operator: str) -> Optional[PrecedenceGroup]:
        return self._operators.get(operator)

    def __contains__(self, operator: str) -> bool:
        return operator in self._operators


class OperatorFolder:
    """Folds every sequence expression of a tree in place"""

    def __init__(self, table: OperatorTable, converter: Optional[SourceLocationConverter] = None):
        self.table = table
        self.converter = converter
        self.folded = 0

    def fold_in_place(self, node: SyntaxNode) -> None:
        for child in node.children():
            if child.is_token:
                continue
            self.fold_in_place(child)
            if child.kind == "SequenceExpr":
                node.replace_child(child, self.fold_sequence(child))

    def fold_sequence(self, sequence: SyntaxNode) -> Syntax:
        elements = sequence.child("elements").elements
        if len(elements) % 2 == 0:
            raise FoldingError("operator sequence must alternate operands and operators",
                               self._location(sequence))
        operands: List[Syntax] = [elements[0]]
        pending: List[SyntaxNode] = []
        for operator, operand in zip(elements[1::2], elements[2::2]):
            group = self._group(operator)
            while pending:
                top = self._group(pending[-1])
                if top.rank > group.rank or (top.rank == group.rank and group.associativity is Associativity.LEFT):
                    self._reduce(operands, pending)
                elif top is group and group.associativity is Associativity.NONE:
                    raise FoldingError(
                        f"adjacent operators are in non-associative precedence group '{group.name}'",
                        self._location(operator),
                    )
                else:
                    break
            pending.append(operator)
            operands.append(operand)
        while pending:
            self._reduce(operands, pending)
        self.folded += 1
        return operands[0]

    def _group(self, operator: SyntaxNode) -> PrecedenceGroup:
        text = operator_text(operator)
        group = self.table.group(text)
        if group is None:
            raise FoldingError(f"unknown infix operator '{text}'", self._location(operator))
        return group

    def _reduce(self, operands: List[Syntax], pending: List[SyntaxNode]) -> None:
        operator = pending.pop()
        right = operands.pop()
        left = operands.pop()
        infix = SyntaxNode.make_layout(
            "InfixOperatorExpr", leftOperand=left, operator=operator, rightOperand=right
        )
        infix.position, infix.end_position = left.position, right.end_position
        operands.append(infix)

    def _location(self, node: Syntax):
        if self.converter is None:
            return None
        return self.converter.location(node.position)


def operator_text(operator: SyntaxNode) -> str:
    """Spelling of a BinaryOperatorExpr or AssignmentExpr"""
    token = operator.child("operator") if operator.kind == "BinaryOperatorExpr" else operator.child("equal")
    return token.text if token is not None else ""


def fold_all(root: SyntaxNode, table: Optional[OperatorTable] = None,
             converter: Optional[SourceLocationConverter] = None) -> SyntaxNode:
    """
    Folded copy of `root`.

    Raises FoldingError for unknown operators and chained non-associative
    operators; `root` itself is left untouched either way.
    """
    folded = copy.deepcopy(root)
    folder = OperatorFolder(table or OperatorTable.standard_operators(), converter)
    folder.fold_in_place(folded)
    if folded.kind == "SequenceExpr":
        folded = folder.fold_sequence(folded)
    logger.debug(f"Folded {folder.folded} operator sequence(s)")
    return folded
