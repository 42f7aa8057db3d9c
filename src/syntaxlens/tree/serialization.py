"""
Serialization
=============

- Node lists to the JSON interchange format
- CSTs to S-expressions (sexpdata) for debugging and tests
"""

import json
from typing import Any, Dict, List, Optional

import sexpdata

from ..shared import Syntax, SyntaxShape
from .records import StructureProperty, TreeNode


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def _property_to_dict(prop: StructureProperty) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": prop.name}
    if prop.value is not None:
        value: Dict[str, Any] = {"text": prop.value.text}
        if prop.value.kind is not None:
            value["kind"] = prop.value.kind
        data["value"] = value
    if prop.ref is not None:
        data["ref"] = prop.ref
    return data


def node_to_dict(node: TreeNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": node.id}
    if node.parent is not None:
        data["parent"] = node.parent
    data["label"] = node.label
    data["range"] = {
        "startRow": node.range.start_row,
        "startColumn": node.range.start_column,
        "endRow": node.range.end_row,
        "endColumn": node.range.end_column,
    }
    data["category"] = node.category.value
    data["structure"] = [_property_to_dict(prop) for prop in node.structure]
    if node.token_info is not None:
        data["tokenInfo"] = {
            "kind": node.token_info.kind,
            "leadingTrivia": node.token_info.leading_trivia,
            "trailingTrivia": node.token_info.trailing_trivia,
        }
    return data


def encode_tree(nodes: List[TreeNode], indent: Optional[int] = None) -> str:
    """JSON array of node records; compact unless `indent` is given"""
    separators = None if indent is not None else (",", ":")
    return json.dumps([node_to_dict(node) for node in nodes], ensure_ascii=False,
                      indent=indent, separators=separators)


# ---------------------------------------------------------------------------
# S-expressions
# ---------------------------------------------------------------------------

def _sym(name: str) -> sexpdata.Symbol:
    return sexpdata.Symbol(name)


def _quote(text: str) -> str:
    escaped = (text.replace("\\", "\\\\").replace('"', '\\"')
               .replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t"))
    return f'"{escaped}"'


def _is_slot(form: Any) -> bool:
    return isinstance(form, sexpdata.Symbol) and str(form).startswith(":")


class SexprPrinter:
    """
    Indented S-expression text.

    A list stays on one line while it fits in `width`; otherwise its items go
    one per line under the head, a `:slot` keyword sharing its line with the
    value that follows it. Closing parens stack Lisp-style.
    """

    def __init__(self, width: int = 100, step: str = "  "):
        self.width = width
        self.step = step

    def render(self, form: Any, depth: int = 0) -> str:
        if isinstance(form, sexpdata.Symbol):
            return str(form)
        if isinstance(form, str):
            return _quote(form)
        if not isinstance(form, list):
            return str(form)
        if not form:
            return "()"
        parts = [self.render(item, depth + 1) for item in form]
        flat = "(" + " ".join(parts) + ")"
        if "\n" not in flat and len(self.step) * depth + len(flat) <= self.width:
            return flat

        pad = self.step * (depth + 1)
        lines = [parts[0]]
        index = 1
        while index < len(form):
            pairs = (_is_slot(form[index]) and index + 1 < len(form)
                     and not _is_slot(form[index + 1]))
            if pairs:
                lines.append(f"{pad}{parts[index]} {parts[index + 1]}")
                index += 2
            else:
                lines.append(pad + parts[index])
                index += 1
        return "(" + "\n".join(lines) + ")"


class CSTSerializer:
    """
    CST to structured S-expression serializer.

    Layout nodes list their slots as `:name value` pairs (`nil` when
    absent); collections and choices list their children; tokens become
    `(token "<kind>" "<text>")`, flagged `:missing` when inserted by
    recovery.
    """

    def __init__(self, include_trivia: bool = False):
        self.include_trivia = include_trivia

    def serialize_to_sexpr(self, node: Syntax) -> List[Any]:
        if node.is_token:
            return self._token(node)
        spec = node.spec
        result: List[Any] = [_sym(spec.name)]
        if spec.shape is SyntaxShape.LAYOUT:
            for field in spec.fields:
                child = node.child(field.name)
                result.append(_sym(":" + field.name))
                result.append(_sym("nil") if child is None else self.serialize_to_sexpr(child))
        else:
            result.extend(self.serialize_to_sexpr(child) for child in node.children())
        return result

    def _token(self, token) -> List[Any]:
        result: List[Any] = [_sym("token"), str(token.kind), token.text]
        if token.is_missing:
            result.append(_sym(":missing"))
        if self.include_trivia:
            result.append(_sym(":leading"))
            result.append([str(piece) for piece in token.leading_trivia])
            result.append(_sym(":trailing"))
            result.append([str(piece) for piece in token.trailing_trivia])
        return result


def serialize_cst(node: Syntax, include_trivia: bool = False, pretty: bool = True) -> str:
    """
    Serialize a CST to an S-expression string (pretty-printed by default).

    Set pretty=False for the compact single-line form from sexpdata.
    """
    sexpr = CSTSerializer(include_trivia=include_trivia).serialize_to_sexpr(node)
    if pretty:
        return SexprPrinter().render(sexpr)
    return sexpdata.dumps(sexpr)
