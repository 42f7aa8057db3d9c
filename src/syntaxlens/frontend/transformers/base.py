"""
CST Builder
Converts the lark parse tree into syntaxlens CST nodes
"""

import logging
from typing import List

from lark import Transformer
from lark.lexer import Token as LarkToken

from ...shared import (
    NodeKindSpec, SyntaxLensImplementationError, SyntaxNode, SyntaxShape, Syntax, Token,
    spec_for, spec_for_rule,
)
from .tokens import TokenFactory

logger: logging.Logger = logging.getLogger(__name__)


def build_layout(spec: NodeKindSpec, children: List[Syntax]) -> SyntaxNode:
    """
    Assign children to slots in declaration order.

    Each child goes to the next slot (at or after the previous assignment)
    that accepts it; optional slots the source left out stay empty.
    """
    node = SyntaxNode(spec.name)
    slot = 0
    for child in children:
        for index in range(slot, len(spec.fields)):
            field = spec.fields[index]
            if field.matches(child):
                node.set_child(field.name, child)
                slot = index + 1
                break
        else:
            raise SyntaxLensImplementationError(
                f"{spec.name}: no slot accepts {child!r} after slot {slot}"
            )
    return node


class CSTBuilder(Transformer):
    """
    Lark transformer producing the concrete syntax tree.

    Rules named after a catalog kind are built generically from the kind's
    shape; the methods below handle rules needing extra work (separators,
    operator sequences, string splitting).
    """

    def __default__(self, data, children, meta) -> Syntax:
        spec = spec_for_rule(data)
        if spec is None:
            raise SyntaxLensImplementationError(f"No syntax kind is registered for grammar rule '{data}'")
        if spec.shape is SyntaxShape.LAYOUT:
            return build_layout(spec, children)
        if spec.shape is SyntaxShape.COLLECTION:
            return SyntaxNode.make_collection(spec.name, children)
        if len(children) != 1:
            raise SyntaxLensImplementationError(
                f"{spec.name}: a choice holds exactly one node, got {len(children)}"
            )
        return SyntaxNode.make_choice(spec.name, children[0])

    def __default_token__(self, token: LarkToken) -> Token:
        return TokenFactory.from_lark(token)

    # ------------------------------------------------------------------
    # Rules with extra work
    # ------------------------------------------------------------------

    def source_file(self, children) -> SyntaxNode:
        statements, = children
        return SyntaxNode.make_layout(
            "SourceFile", statements=statements, endOfFileToken=TokenFactory.end_of_file()
        )

    def expression(self, children) -> Syntax:
        """Single operand, or a flat SequenceExpr of operands and operators"""
        if len(children) == 1:
            return children[0]
        elements = SyntaxNode.make_collection("ExprList", children)
        return SyntaxNode.make_layout("SequenceExpr", elements=elements)

    def prefix_operator_expr(self, children) -> SyntaxNode:
        operator, operand = children
        TokenFactory.as_prefix_operator(operator)
        return build_layout(spec_for("PrefixOperatorExpr"), [operator, operand])

    def string_literal_expr(self, children) -> SyntaxNode:
        string, = children
        opening, segment, closing = TokenFactory.split_string(string)
        content = SyntaxNode.make_layout("StringSegment", content=segment)
        segments = SyntaxNode.make_collection("StringLiteralSegmentList", [content])
        return SyntaxNode.make_layout(
            "StringLiteralExpr", openingQuote=opening, segments=segments, closingQuote=closing
        )

    def pattern_binding_list(self, children) -> SyntaxNode:
        return self._separated("PatternBindingList", children, "trailingComma")

    def function_parameter_list(self, children) -> SyntaxNode:
        return self._separated("FunctionParameterList", children, "trailingComma")

    def enum_case_element_list(self, children) -> SyntaxNode:
        return self._separated("EnumCaseElementList", children, "trailingComma")

    def condition_element_list(self, children) -> SyntaxNode:
        return self._separated("ConditionElementList", children, "trailingComma")

    def labeled_expr_list(self, children) -> SyntaxNode:
        return self._separated("LabeledExprList", children, "trailingComma")

    def array_element_list(self, children) -> SyntaxNode:
        return self._separated("ArrayElementList", children, "trailingComma")

    def import_path_component_list(self, children) -> SyntaxNode:
        return self._separated("ImportPathComponentList", children, "trailingPeriod")

    def _separated(self, kind: str, children, separator_slot: str) -> SyntaxNode:
        """Collection whose separators become a slot on the preceding element"""
        elements: List[SyntaxNode] = []
        for child in children:
            if child.is_token:
                if not elements:
                    raise SyntaxLensImplementationError(f"{kind}: separator before the first element")
                elements[-1].set_child(separator_slot, child)
            else:
                elements.append(child)
        return SyntaxNode.make_collection(kind, elements)
