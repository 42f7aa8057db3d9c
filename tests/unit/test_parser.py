#!/usr/bin/env python3
"""
Tests for the parser: CST shape, token kinds, error recovery and strict mode.
"""

import pytest
from syntaxlens.frontend.parser import Parser, describe_terminal
from syntaxlens.shared import ParseError, SourcePresence, TriviaKind
from tests.test_utils import find_kind, missing_tokens, roundtrip_text


class TestParseShapes:
    """Grammar rules build the expected node kinds"""

    def test_variable_decl(self, parser):
        root = parser.parse("let x: Int = 1").root
        decl = find_kind(root, "VariableDecl")
        assert decl.child("bindingSpecifier").text == "let"
        binding = decl.child("bindings").elements[0]
        assert binding.kind == "PatternBinding"
        assert binding.child("pattern").kind == "IdentifierPattern"
        assert binding.child("typeAnnotation").child("type").kind == "IdentifierType"
        assert binding.child("initializer").child("value").kind == "IntegerLiteralExpr"

    def test_separators_attach_to_previous_element(self, parser):
        root = parser.parse("var a = 1, b = 2").root
        first, second = find_kind(root, "PatternBindingList").elements
        assert first.child("trailingComma").text == ","
        assert second.child("trailingComma") is None

    def test_function_decl(self, parser):
        root = parser.parse("func add(_ a: Int, b: Int = 0) -> Int { return a + b }").root
        decl = find_kind(root, "FunctionDecl")
        assert decl.child("name").text == "add"
        params = find_kind(decl, "FunctionParameterList").elements
        assert params[0].child("firstName").text == "_"
        assert params[0].child("secondName").text == "a"
        assert params[1].child("defaultValue") is not None
        assert find_kind(decl, "ReturnClause") is not None
        assert find_kind(decl, "ReturnStmt") is not None

    def test_operator_sequence_stays_flat(self, parser):
        root = parser.parse("1 + 2 * 3").root
        sequence = find_kind(root, "SequenceExpr")
        kinds = [element.kind for element in sequence.child("elements").elements]
        assert kinds == [
            "IntegerLiteralExpr", "BinaryOperatorExpr", "IntegerLiteralExpr",
            "BinaryOperatorExpr", "IntegerLiteralExpr",
        ]

    def test_assignment_in_sequence(self, parser):
        root = parser.parse("x = y == 1").root
        elements = find_kind(root, "SequenceExpr").child("elements").elements
        assert elements[1].kind == "AssignmentExpr"
        assert elements[3].child("operator").text == "=="

    def test_if_else_chain(self, parser):
        root = parser.parse("if a { } else if b { } else { }").root
        outer = find_kind(root, "IfExpr")
        else_body = outer.child("elseBody")
        assert else_body.kind == "ElseBody"
        assert else_body.children()[0].kind == "IfExpr"

    def test_optional_binding(self, parser):
        root = parser.parse("while let v = next() { break }").root
        condition = find_kind(root, "Condition")
        assert condition.children()[0].kind == "OptionalBindingCondition"

    def test_postfix_chain(self, parser):
        root = parser.parse("a.b(c: 1)[0]").root
        subscript = find_kind(root, "SubscriptCallExpr")
        call = subscript.child("calledExpression")
        assert call.kind == "FunctionCallExpr"
        assert call.child("calledExpression").kind == "MemberAccessExpr"
        assert find_kind(call, "LabeledExpr").child("label").text == "c"

    def test_string_literal_is_split(self, parser):
        root = parser.parse('"hi"').root
        literal = find_kind(root, "StringLiteralExpr")
        assert literal.child("openingQuote").text == '"'
        assert find_kind(literal, "StringSegment").child("content").text == "hi"
        assert literal.child("closingQuote").text == '"'

    def test_declarations_and_statements(self, parser):
        source = (
            "import Foundation.Data\n"
            "public struct P { static let origin = P() }\n"
            "enum E { case a, b = 2 }\n"
            "class C { }\n"
            "for i in [1, 2] { continue }\n"
        )
        root = parser.parse(source).root
        for kind in ("ImportDecl", "StructDecl", "DeclModifier", "EnumDecl", "EnumCaseDecl",
                     "ClassDecl", "ForStmt", "ArrayExpr", "ContinueStmt"):
            assert find_kind(root, kind) is not None, kind
        path = find_kind(root, "ImportPathComponentList").elements
        assert path[0].child("trailingPeriod").text == "."

    def test_keyword_token_kinds(self, parser):
        tokens = list(parser.parse("let x = nil").root.tokens())
        assert [str(token.kind) for token in tokens] == [
            "keyword(.let)", 'identifier("x")', "equal", "keyword(.nil)", "endOfFile",
        ]

    def test_prefix_operator_kind(self, parser):
        tokens = list(parser.parse("-x").root.tokens())
        assert str(tokens[0].kind) == 'prefixOperator("-")'

    def test_spans(self, parser):
        root = parser.parse("let x = 1").root
        decl = find_kind(root, "VariableDecl")
        assert (decl.position, decl.end_position) == (0, 9)
        modifiers = decl.child("modifiers")
        assert (modifiers.position, modifiers.end_position) == (0, 0)


class TestRecovery:
    """Missing tokens are inserted, stray input becomes unexpected trivia"""

    def test_missing_closing_paren(self, parser):
        parsed = parser.parse("f(")
        missing = missing_tokens(parsed.root)
        assert [token.terminal for token in missing] == ["RPAREN"]
        assert missing[0].presence is SourcePresence.MISSING
        assert missing[0].text == ")"
        assert roundtrip_text(parsed.root) == "f("

    def test_missing_identifiers(self, parser):
        parsed = parser.parse("let = ")
        assert [token.terminal for token in missing_tokens(parsed.root)] == ["IDENTIFIER", "IDENTIFIER"]
        assert parsed.recoveries == 2

    def test_missing_brace_before_end(self, parser):
        parsed = parser.parse("func f() {\n  return 1\n")
        assert [token.terminal for token in missing_tokens(parsed.root)] == ["RBRACE"]
        assert roundtrip_text(parsed.root) == "func f() {\n  return 1\n"

    def test_missing_token_position(self, parser):
        parsed = parser.parse("g(1 // c\n")
        rparen = missing_tokens(parsed.root)[0]
        # After `1` and its trailing trivia, before the newline
        assert rparen.position == len("g(1 // c")
        assert rparen.end_position == rparen.position

    def test_unexpected_character_is_trivia(self, parser):
        parsed = parser.parse("let x = 1 @")
        assert parsed.recoveries == 1
        one = [token for token in parsed.root.tokens() if token.text == "1"][0]
        assert one.trailing_trivia[-1].kind is TriviaKind.UNEXPECTED_TEXT
        assert one.trailing_trivia[-1].text == "@"
        assert roundtrip_text(parsed.root) == "let x = 1 @"

    def test_stray_token_is_dropped(self, parser):
        parsed = parser.parse("let x = 1 )\nlet y = 2")
        assert find_kind(parsed.root, "VariableDecl") is not None
        pieces = [piece for token in parsed.root.tokens()
                  for piece in token.leading_trivia + token.trailing_trivia]
        assert any(p.kind is TriviaKind.UNEXPECTED_TEXT and p.text == ")" for p in pieces)
        assert roundtrip_text(parsed.root) == "let x = 1 )\nlet y = 2"

    def test_clean_source_has_no_recoveries(self, parser):
        parsed = parser.parse("let x = 1")
        assert parsed.recoveries == 0
        assert missing_tokens(parsed.root) == []

    def test_recovery_budget(self, parser):
        with pytest.raises(ParseError, match="too many syntax errors"):
            parser.parse(")" * 200)


class TestStrictMode:
    """max_recoveries=0 reports the first error"""

    def test_unexpected_token(self, strict_parser):
        with pytest.raises(ParseError) as exc_info:
            strict_parser.parse("let x = )", "t.swift")
        error = exc_info.value
        assert error.message == "unexpected ')'"
        assert (error.location.line, error.location.column) == (1, 9)
        assert error.help_text.startswith("expected one of: ")
        assert "too many" not in error.message

    def test_unexpected_end(self, strict_parser):
        with pytest.raises(ParseError) as exc_info:
            strict_parser.parse("f(")
        assert exc_info.value.message == "unexpected end of input"
        assert exc_info.value.location.column == 3

    def test_unexpected_character(self, strict_parser):
        with pytest.raises(ParseError, match="unexpected character '@'"):
            strict_parser.parse("@")

    def test_location_uses_bytes(self, strict_parser):
        with pytest.raises(ParseError) as exc_info:
            strict_parser.parse('"é" )')
        assert exc_info.value.location.column == len('"é" '.encode("utf-8")) + 1

    def test_valid_source_parses(self, strict_parser):
        assert strict_parser.parse("let x = [1, 2][0]").recoveries == 0


class TestDescribeTerminal:
    def test_names(self):
        assert describe_terminal("$END") == "end of input"
        assert describe_terminal("RPAREN") == "')'"
        assert describe_terminal("LET") == "'let'"
        assert describe_terminal("IDENTIFIER") == "identifier"


def test_parser_cache_file(tmp_path):
    cache = tmp_path / "grammar.cache"
    first = Parser(cache_file=str(cache))
    assert cache.exists()
    second = Parser(cache_file=str(cache))
    assert roundtrip_text(second.parse("x").root) == roundtrip_text(first.parse("x").root)
