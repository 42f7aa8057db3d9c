"""
Concrete Syntax Tree (CST) Definitions

Full-fidelity nodes produced by the frontend parser: every token (including
tokens inserted by error recovery) and every piece of whitespace/comment
trivia is kept, so the tree reproduces its source text exactly.

Node shapes come from the kind catalog in `shared.kinds`:
- layout nodes store named slots
- collection nodes store an ordered element list
- choice nodes store the single selected alternative
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from typing_extensions import TypeAlias

from .errors import SyntaxLensImplementationError
from .kinds import NodeKindSpec, SyntaxShape, TOKEN_SPEC, spec_for


class SourcePresence(Enum):
    """Whether a token was written in the source or inserted by recovery"""
    PRESENT = "present"
    MISSING = "missing"


class TriviaKind(Enum):
    """Trivia piece categories"""
    SPACES = "spaces"
    TABS = "tabs"
    VERTICAL_TABS = "verticalTabs"
    FORMFEEDS = "formfeeds"
    NEWLINES = "newlines"
    CARRIAGE_RETURNS = "carriageReturns"
    CARRIAGE_RETURN_LINE_FEEDS = "carriageReturnLineFeeds"
    LINE_COMMENT = "lineComment"
    BLOCK_COMMENT = "blockComment"
    DOC_LINE_COMMENT = "docLineComment"
    DOC_BLOCK_COMMENT = "docBlockComment"
    UNEXPECTED_TEXT = "unexpectedText"
    BACKSLASHES = "backslashes"
    POUNDS = "pounds"


# Kinds whose payload is a run length rather than text
COUNTED_TRIVIA = frozenset({
    TriviaKind.SPACES, TriviaKind.TABS, TriviaKind.VERTICAL_TABS, TriviaKind.FORMFEEDS,
    TriviaKind.NEWLINES, TriviaKind.CARRIAGE_RETURNS, TriviaKind.CARRIAGE_RETURN_LINE_FEEDS,
    TriviaKind.BACKSLASHES, TriviaKind.POUNDS,
})

NEWLINE_TRIVIA = frozenset({
    TriviaKind.NEWLINES, TriviaKind.CARRIAGE_RETURNS, TriviaKind.CARRIAGE_RETURN_LINE_FEEDS,
})


@dataclass(frozen=True)
class TriviaPiece:
    """One run of trivia; `text` is the exact source text of the run"""
    kind: TriviaKind
    text: str

    @property
    def count(self) -> int:
        if self.kind is TriviaKind.CARRIAGE_RETURN_LINE_FEEDS:
            return len(self.text) // 2
        return len(self.text)

    @property
    def is_newline(self) -> bool:
        return self.kind in NEWLINE_TRIVIA

    def __str__(self) -> str:
        """Debug description, e.g. spaces(2) or lineComment("// note")"""
        if self.kind in COUNTED_TRIVIA:
            return f"{self.kind.value}({self.count})"
        return f"{self.kind.value}({json.dumps(self.text, ensure_ascii=False)})"


@dataclass(frozen=True)
class TokenKind:
    """
    Token kind tag.

    `payload` is the keyword name for keywords and the literal text for
    identifier-like kinds; punctuation kinds have no payload.
    """
    name: str
    payload: Optional[str] = None

    @property
    def is_keyword(self) -> bool:
        return self.name == "keyword"

    def __str__(self) -> str:
        if self.is_keyword:
            return f"keyword(.{self.payload})"
        if self.payload is not None:
            return f"{self.name}({json.dumps(self.payload, ensure_ascii=False)})"
        return self.name


class Token:
    """
    Leaf token.

    `position` is the UTF-8 byte offset of the token text (after leading
    trivia). Missing tokens have zero width and no trivia.
    """
    __slots__ = ('terminal', 'kind', 'text', 'presence', 'leading_trivia', 'trailing_trivia', 'position')

    is_token = True

    def __init__(self, terminal: str, kind: TokenKind, text: str,
                 presence: SourcePresence = SourcePresence.PRESENT,
                 position: int = 0):
        self.terminal = terminal
        self.kind = kind
        self.text = text
        self.presence = presence
        self.leading_trivia: List[TriviaPiece] = []
        self.trailing_trivia: List[TriviaPiece] = []
        self.position = position

    @property
    def spec(self) -> NodeKindSpec:
        return TOKEN_SPEC

    @property
    def is_missing(self) -> bool:
        return self.presence is SourcePresence.MISSING

    @property
    def end_position(self) -> int:
        if self.is_missing:
            return self.position
        return self.position + len(self.text.encode("utf-8"))

    def children(self) -> List['Syntax']:
        return []

    def tokens(self) -> Iterator['Token']:
        yield self

    def full_text(self) -> str:
        """Source text of the token including its trivia"""
        if self.is_missing:
            return ""
        leading = "".join(piece.text for piece in self.leading_trivia)
        trailing = "".join(piece.text for piece in self.trailing_trivia)
        return leading + self.text + trailing

    def __repr__(self) -> str:
        flag = ", missing" if self.is_missing else ""
        return f"Token({self.kind}, {self.text!r}{flag})"


class SyntaxNode:
    """
    Container node.

    Compile-time optimization:
    - __slots__ for memory efficiency and attribute checking
    """
    __slots__ = ('kind', '_layout', '_elements', 'position', 'end_position')

    is_token = False

    def __init__(self, kind: str,
                 layout: Optional[Dict[str, Optional['Syntax']]] = None,
                 elements: Optional[List['Syntax']] = None):
        self.kind = kind
        self._layout: Dict[str, Optional[Syntax]] = {}
        self._elements: List[Syntax] = list(elements or [])
        self.position = 0
        self.end_position = 0
        for name, child in (layout or {}).items():
            self.set_child(name, child)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def make_layout(cls, kind: str, **slots: Optional['Syntax']) -> 'SyntaxNode':
        return cls(kind, layout=slots)

    @classmethod
    def make_collection(cls, kind: str, elements: List['Syntax']) -> 'SyntaxNode':
        return cls(kind, elements=elements)

    @classmethod
    def make_choice(cls, kind: str, selected: 'Syntax') -> 'SyntaxNode':
        return cls(kind, elements=[selected])

    # ------------------------------------------------------------------
    # Shape-aware access
    # ------------------------------------------------------------------

    @property
    def spec(self) -> NodeKindSpec:
        return spec_for(self.kind)

    @property
    def elements(self) -> List['Syntax']:
        return list(self._elements)

    def child(self, name: str) -> Optional['Syntax']:
        """Child stored in the named layout slot (None when absent)"""
        return self._layout.get(name)

    def set_child(self, name: str, child: Optional['Syntax']) -> None:
        spec = self.spec
        if spec.shape is not SyntaxShape.LAYOUT or spec.field(name) is None:
            raise SyntaxLensImplementationError(f"{self.kind} has no slot named '{name}'")
        if child is None:
            self._layout.pop(name, None)
        else:
            self._layout[name] = child

    def children(self) -> List['Syntax']:
        """Direct children in source order"""
        spec = self.spec
        if spec.shape is SyntaxShape.LAYOUT:
            return [self._layout[f.name] for f in spec.fields if self._layout.get(f.name) is not None]
        return list(self._elements)

    def replace_child(self, old: 'Syntax', new: 'Syntax') -> None:
        for name, child in self._layout.items():
            if child is old:
                self._layout[name] = new
                return
        for index, child in enumerate(self._elements):
            if child is old:
                self._elements[index] = new
                return
        raise SyntaxLensImplementationError(f"{self.kind} does not contain the node being replaced")

    def tokens(self) -> Iterator[Token]:
        for child in self.children():
            yield from child.tokens()

    def full_text(self) -> str:
        return "".join(token.full_text() for token in self.tokens())

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind}, {len(self.children())} children)"


Syntax: TypeAlias = Union[SyntaxNode, Token]


def assign_spans(root: SyntaxNode) -> None:
    """
    Compute node spans from token positions.

    A node spans from its first token to the end of its last token. Nodes
    without tokens (empty collections) get a zero-width span at the start
    of the next token in source order.
    """
    pending: List[SyntaxNode] = []

    def visit(node: Syntax) -> Optional[tuple]:
        if node.is_token:
            for empty in pending:
                empty.position = empty.end_position = node.position
            pending.clear()
            return node.position, node.end_position
        first = last = None
        for child in node.children():
            span = visit(child)
            if span is None:
                continue
            if first is None:
                first = span[0]
            last = span[1]
        if first is None:
            pending.append(node)
            return None
        node.position, node.end_position = first, last
        return first, last

    visit(root)
    # Only reachable for a tree without any token
    for empty in pending:
        empty.position = empty.end_position = root.end_position
