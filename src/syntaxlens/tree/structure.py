"""
Structural Reflector

Describes a node's shape from the kind catalog: named slots for layout
kinds, element kind and count for collections, nothing for choices.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..shared import NodeKindSpec, Syntax, SyntaxLensImplementationError, SyntaxShape
from ..utils.config import COUNT_PROPERTY, ELEMENT_PROPERTY, NIL_TEXT, SYNTAX_SUFFIX
from .markup import escape_html
from .records import StructureProperty, StructureValue


@dataclass
class NodeStructure:
    properties: List[StructureProperty]
    is_collection: bool = False


def reflect(node: Syntax, spec: Optional[NodeKindSpec] = None) -> NodeStructure:
    """Structure of `node`; `spec` defaults to the node's catalog entry"""
    spec = spec or node.spec
    if spec.shape is SyntaxShape.LAYOUT:
        return NodeStructure(_layout_properties(node, spec))
    if spec.shape is SyntaxShape.COLLECTION:
        return NodeStructure(
            [
                StructureProperty(ELEMENT_PROPERTY, StructureValue(escape_html(spec.element + SYNTAX_SUFFIX))),
                StructureProperty(COUNT_PROPERTY, StructureValue(str(len(node.children())))),
            ],
            is_collection=True,
        )
    if spec.shape is SyntaxShape.CHOICE:
        return NodeStructure([])
    raise SyntaxLensImplementationError(f"Unsupported structural shape {spec.shape!r} for {spec.name}")


def _layout_properties(node: Syntax, spec: NodeKindSpec) -> List[StructureProperty]:
    properties: List[StructureProperty] = []
    if node.is_token:
        return properties
    for field in spec.fields:
        value = node.child(field.name)
        if value is None:
            properties.append(StructureProperty(field.name, StructureValue(NIL_TEXT)))
        elif getattr(value, "is_token", False):
            properties.append(StructureProperty(
                field.name, StructureValue(escape_html(value.text), str(value.kind))
            ))
        elif hasattr(value, "spec"):
            syntax_name = value.spec.syntax_name
            properties.append(StructureProperty(field.name, StructureValue(syntax_name), ref=syntax_name))
        else:
            properties.append(StructureProperty(field.name, StructureValue(escape_html(str(value)))))
    return properties
