"""
Node Kind Catalog

Explicit per-kind field tables for the CST. Each kind declares its display
category, its structural shape and either its ordered fields (layout), its
element kind (collection) or its alternatives (choice).

A `Field` lists what it accepts:
- UPPERCASE names are grammar terminals (tokens)
- CamelCase names are node kinds
- `<category>` accepts any node of that category
- `*` accepts any node
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .errors import SyntaxLensImplementationError
from ..utils.config import SYNTAX_SUFFIX


class SyntaxCategory(Enum):
    """Display category of a node record"""
    DECL = "declaration"
    EXPR = "expression"
    PATTERN = "pattern"
    TYPE = "type"
    COLLECTION = "collection"
    OTHER = "other"


class SyntaxShape(Enum):
    """Structural shape of a node kind"""
    LAYOUT = "layout"
    COLLECTION = "collection"
    CHOICE = "choices"


ANY_NODE = "*"
DECL = "<declaration>"
EXPR = "<expression>"
PATTERN = "<pattern>"
TYPE = "<type>"

MODIFIER_TERMINALS = (
    "STATIC", "PUBLIC", "PRIVATE", "FILEPRIVATE", "INTERNAL", "FINAL", "MUTATING", "OVERRIDE",
)


@dataclass(frozen=True)
class Field:
    name: str
    accepts: Tuple[str, ...]

    def matches(self, child) -> bool:
        if child.is_token:
            return child.terminal in self.accepts
        if ANY_NODE in self.accepts or child.kind in self.accepts:
            return True
        return f"<{child.spec.category.value}>" in self.accepts


@dataclass(frozen=True)
class NodeKindSpec:
    """Catalog entry for one node kind"""
    name: str
    category: SyntaxCategory
    shape: SyntaxShape
    fields: Tuple[Field, ...] = ()
    element: Optional[str] = None
    choices: Tuple[str, ...] = ()
    rule: Optional[str] = None

    @property
    def syntax_name(self) -> str:
        return self.name + SYNTAX_SUFFIX

    def field(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


def rule_name(kind: str) -> str:
    """Grammar rule building `kind`: VariableDecl -> variable_decl"""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', kind).lower()


def _f(name: str, *accepts: str) -> Field:
    return Field(name, accepts)


def _layout(name: str, category: SyntaxCategory, *fields: Field) -> NodeKindSpec:
    return NodeKindSpec(name, category, SyntaxShape.LAYOUT, fields=fields, rule=rule_name(name))


def _collection(name: str, element: str) -> NodeKindSpec:
    return NodeKindSpec(name, SyntaxCategory.COLLECTION, SyntaxShape.COLLECTION,
                        element=element, rule=rule_name(name))


def _choice(name: str, *choices: str) -> NodeKindSpec:
    return NodeKindSpec(name, SyntaxCategory.OTHER, SyntaxShape.CHOICE,
                        choices=choices, rule=rule_name(name))


D, E, P, T, O = (SyntaxCategory.DECL, SyntaxCategory.EXPR, SyntaxCategory.PATTERN,
                 SyntaxCategory.TYPE, SyntaxCategory.OTHER)

TOKEN_SPEC = NodeKindSpec("Token", O, SyntaxShape.LAYOUT)

_MODIFIERS = _f("modifiers", "DeclModifierList")

_CATALOG = (
    # Source file and blocks
    _layout("SourceFile", O, _f("statements", "CodeBlockItemList"), _f("endOfFileToken", "EOF")),
    _collection("CodeBlockItemList", "CodeBlockItem"),
    _layout("CodeBlockItem", O, _f("item", ANY_NODE), _f("semicolon", "SEMICOLON")),
    _layout("CodeBlock", O,
            _f("leftBrace", "LBRACE"), _f("statements", "CodeBlockItemList"), _f("rightBrace", "RBRACE")),

    # Declarations
    _collection("DeclModifierList", "DeclModifier"),
    _layout("DeclModifier", O, _f("name", *MODIFIER_TERMINALS)),
    _layout("VariableDecl", D,
            _MODIFIERS, _f("bindingSpecifier", "LET", "VAR"), _f("bindings", "PatternBindingList")),
    _collection("PatternBindingList", "PatternBinding"),
    _layout("PatternBinding", O,
            _f("pattern", PATTERN), _f("typeAnnotation", "TypeAnnotation"),
            _f("initializer", "InitializerClause"), _f("trailingComma", "COMMA")),
    _layout("TypeAnnotation", O, _f("colon", "COLON"), _f("type", TYPE)),
    _layout("InitializerClause", O, _f("equal", "EQUAL"), _f("value", EXPR)),
    _layout("FunctionDecl", D,
            _MODIFIERS, _f("funcKeyword", "FUNC"), _f("name", "IDENTIFIER"),
            _f("signature", "FunctionSignature"), _f("body", "CodeBlock")),
    _layout("FunctionSignature", O,
            _f("parameterClause", "FunctionParameterClause"), _f("returnClause", "ReturnClause")),
    _layout("FunctionParameterClause", O,
            _f("leftParen", "LPAREN"), _f("parameters", "FunctionParameterList"), _f("rightParen", "RPAREN")),
    _collection("FunctionParameterList", "FunctionParameter"),
    _layout("FunctionParameter", O,
            _f("firstName", "IDENTIFIER", "UNDERSCORE"), _f("secondName", "IDENTIFIER"),
            _f("colon", "COLON"), _f("type", TYPE), _f("defaultValue", "InitializerClause"),
            _f("trailingComma", "COMMA")),
    _layout("ReturnClause", O, _f("arrow", "ARROW"), _f("type", TYPE)),
    _layout("StructDecl", D,
            _MODIFIERS, _f("structKeyword", "STRUCT"), _f("name", "IDENTIFIER"),
            _f("memberBlock", "MemberBlock")),
    _layout("ClassDecl", D,
            _MODIFIERS, _f("classKeyword", "CLASS"), _f("name", "IDENTIFIER"),
            _f("memberBlock", "MemberBlock")),
    _layout("EnumDecl", D,
            _MODIFIERS, _f("enumKeyword", "ENUM"), _f("name", "IDENTIFIER"),
            _f("memberBlock", "MemberBlock")),
    _layout("MemberBlock", O,
            _f("leftBrace", "LBRACE"), _f("members", "MemberBlockItemList"), _f("rightBrace", "RBRACE")),
    _collection("MemberBlockItemList", "MemberBlockItem"),
    _layout("MemberBlockItem", O, _f("decl", DECL), _f("semicolon", "SEMICOLON")),
    _layout("EnumCaseDecl", D,
            _MODIFIERS, _f("caseKeyword", "CASE"), _f("elements", "EnumCaseElementList")),
    _collection("EnumCaseElementList", "EnumCaseElement"),
    _layout("EnumCaseElement", O,
            _f("name", "IDENTIFIER"), _f("rawValue", "InitializerClause"), _f("trailingComma", "COMMA")),
    _layout("ImportDecl", D, _f("importKeyword", "IMPORT"), _f("path", "ImportPathComponentList")),
    _collection("ImportPathComponentList", "ImportPathComponent"),
    _layout("ImportPathComponent", O, _f("name", "IDENTIFIER"), _f("trailingPeriod", "DOT")),

    # Statements
    _layout("ReturnStmt", O, _f("returnKeyword", "RETURN"), _f("expression", EXPR)),
    _layout("BreakStmt", O, _f("breakKeyword", "BREAK")),
    _layout("ContinueStmt", O, _f("continueKeyword", "CONTINUE")),
    _layout("WhileStmt", O,
            _f("whileKeyword", "WHILE"), _f("conditions", "ConditionElementList"), _f("body", "CodeBlock")),
    _layout("ForStmt", O,
            _f("forKeyword", "FOR"), _f("pattern", PATTERN), _f("inKeyword", "IN"),
            _f("sequence", EXPR), _f("body", "CodeBlock")),
    _collection("ConditionElementList", "ConditionElement"),
    _layout("ConditionElement", O, _f("condition", "Condition"), _f("trailingComma", "COMMA")),
    _choice("Condition", EXPR, "OptionalBindingCondition"),
    _layout("OptionalBindingCondition", O,
            _f("bindingSpecifier", "LET", "VAR"), _f("pattern", PATTERN),
            _f("initializer", "InitializerClause")),

    # Patterns
    _layout("IdentifierPattern", P, _f("identifier", "IDENTIFIER")),
    _layout("WildcardPattern", P, _f("wildcard", "UNDERSCORE")),

    # Expressions
    _layout("IfExpr", E,
            _f("ifKeyword", "IF"), _f("conditions", "ConditionElementList"), _f("body", "CodeBlock"),
            _f("elseKeyword", "ELSE"), _f("elseBody", "ElseBody")),
    _choice("ElseBody", "CodeBlock", "IfExpr"),
    _layout("DeclReferenceExpr", E, _f("baseName", "IDENTIFIER", "SELF")),
    _layout("IntegerLiteralExpr", E, _f("literal", "INTEGER")),
    _layout("FloatLiteralExpr", E, _f("literal", "FLOAT")),
    _layout("BooleanLiteralExpr", E, _f("literal", "TRUE", "FALSE")),
    _layout("NilLiteralExpr", E, _f("nilKeyword", "NIL")),
    _layout("StringLiteralExpr", E,
            _f("openingQuote", "STRING_QUOTE"), _f("segments", "StringLiteralSegmentList"),
            _f("closingQuote", "STRING_QUOTE")),
    _collection("StringLiteralSegmentList", "StringSegment"),
    _layout("StringSegment", O, _f("content", "STRING_SEGMENT")),
    _layout("SequenceExpr", E, _f("elements", "ExprList")),
    _collection("ExprList", "Expr"),
    _layout("BinaryOperatorExpr", E, _f("operator", "OPERATOR")),
    _layout("AssignmentExpr", E, _f("equal", "EQUAL")),
    _layout("PrefixOperatorExpr", E, _f("operator", "OPERATOR"), _f("expression", EXPR)),
    _layout("InfixOperatorExpr", E,
            _f("leftOperand", EXPR), _f("operator", "BinaryOperatorExpr", "AssignmentExpr"),
            _f("rightOperand", EXPR)),
    _layout("FunctionCallExpr", E,
            _f("calledExpression", EXPR), _f("leftParen", "LPAREN"),
            _f("arguments", "LabeledExprList"), _f("rightParen", "RPAREN")),
    _layout("SubscriptCallExpr", E,
            _f("calledExpression", EXPR), _f("leftSquare", "LSQUARE"),
            _f("arguments", "LabeledExprList"), _f("rightSquare", "RSQUARE")),
    _layout("MemberAccessExpr", E,
            _f("base", EXPR), _f("period", "DOT"), _f("declName", "DeclReferenceExpr")),
    _collection("LabeledExprList", "LabeledExpr"),
    _layout("LabeledExpr", O,
            _f("label", "IDENTIFIER"), _f("colon", "COLON"), _f("expression", EXPR),
            _f("trailingComma", "COMMA")),
    _layout("ArrayExpr", E,
            _f("leftSquare", "LSQUARE"), _f("elements", "ArrayElementList"), _f("rightSquare", "RSQUARE")),
    _collection("ArrayElementList", "ArrayElement"),
    _layout("ArrayElement", O, _f("expression", EXPR), _f("trailingComma", "COMMA")),
    _layout("TupleExpr", E,
            _f("leftParen", "LPAREN"), _f("elements", "LabeledExprList"), _f("rightParen", "RPAREN")),

    # Types
    _layout("IdentifierType", T, _f("name", "IDENTIFIER")),
    _layout("OptionalType", T, _f("wrappedType", TYPE), _f("questionMark", "QUESTION")),
    _layout("ArrayType", T,
            _f("leftSquare", "LSQUARE"), _f("element", TYPE), _f("rightSquare", "RSQUARE")),
)

NODE_KINDS: Dict[str, NodeKindSpec] = {spec.name: spec for spec in _CATALOG}
RULE_KINDS: Dict[str, NodeKindSpec] = {spec.rule: spec for spec in _CATALOG}


def spec_for(kind: str) -> NodeKindSpec:
    """Catalog entry for a node kind; unknown kinds are a contract violation"""
    try:
        return NODE_KINDS[kind]
    except KeyError:
        raise SyntaxLensImplementationError(f"Unknown syntax node kind: {kind}") from None


def spec_for_rule(rule: str) -> Optional[NodeKindSpec]:
    return RULE_KINDS.get(str(rule))
