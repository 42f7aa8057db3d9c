"""
Render Driver

Orchestrates one render: parse, optional operator folding, tree visit,
JSON encoding. Parse failures come back as `Result.err`; folding is best
effort; anything else propagates.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional

from ..frontend.folding import fold_all
from ..frontend.parser import ParsedSource, Parser
from ..shared import FoldingError, ParseError, SyntaxNode
from ..tree import TokenVisitor, TreeNode, encode_tree, serialize_cst
from ..utils.base import Result
from ..utils.config import CST_DUMP_DIR, DEFAULT_SOURCE_FILE, FOLD_OPTION, SHOW_MISSING_OPTION

logger = logging.getLogger("syntaxlens.engine.driver")


@dataclass(frozen=True)
class RenderOptions:
    fold: bool = False
    show_missing_tokens: bool = False

    @classmethod
    def from_strings(cls, options: Iterable[str]) -> 'RenderOptions':
        """Options from their string names ("fold", "showmissing"); unknown names are ignored"""
        names = {option.lower() for option in options}
        return cls(fold=FOLD_OPTION in names, show_missing_tokens=SHOW_MISSING_OPTION in names)


@dataclass
class SyntaxResponse:
    """Rendered tree: JSON text plus the records it was encoded from"""
    syntax_json: str
    nodes: List[TreeNode] = field(default_factory=list, repr=False)


@lru_cache(maxsize=None)
def default_parser() -> Parser:
    """Shared parser; lark parsers are not modified by parsing"""
    return Parser()


class RenderDriver:
    """
    Render driver.

    Orchestrates all render phases:
    1. Parsing (source → CST, with recovery)
    2. Folding (flat operator sequences → infix trees), when requested
    3. Visiting (CST → node records)
    4. Encoding (node records → JSON)
    """

    def __init__(self, parser: Optional[Parser] = None):
        self.parser = parser or default_parser()

    def syntax_tree(self, source: str, options: RenderOptions = RenderOptions(),
                    source_file: str = DEFAULT_SOURCE_FILE) -> ParsedSource:
        """Parsed (and optionally folded) CST; raises ParseError"""
        parsed = self.parser.parse(source, source_file)
        self._dump("parsed", parsed.root)
        if options.fold:
            parsed.root = self._fold(parsed)
            self._dump("folded", parsed.root)
        return parsed

    def build_nodes(self, source: str, options: RenderOptions = RenderOptions(),
                    source_file: str = DEFAULT_SOURCE_FILE) -> List[TreeNode]:
        """Node records for `source`; raises ParseError"""
        parsed = self.syntax_tree(source, options, source_file)
        visitor = TokenVisitor(parsed.converter, show_missing_tokens=options.show_missing_tokens)
        return visitor.visit(parsed.root)

    def render(self, source: str, options: RenderOptions = RenderOptions(),
               source_file: str = DEFAULT_SOURCE_FILE) -> Result[SyntaxResponse, ParseError]:
        try:
            nodes = self.build_nodes(source, options, source_file)
        except ParseError as e:
            logger.debug(f"Parse failed: {e}")
            return Result.err(e)
        return Result.ok(SyntaxResponse(syntax_json=encode_tree(nodes), nodes=nodes))

    def _fold(self, parsed: ParsedSource) -> SyntaxNode:
        try:
            return fold_all(parsed.root, converter=parsed.converter)
        except FoldingError as e:
            logger.debug(f"Folding failed, keeping unfolded tree: {e}")
            return parsed.root

    def _dump(self, stage: str, root: SyntaxNode) -> None:
        if not os.environ.get("SYNTAXLENS_DUMP_CST"):
            return
        dump_dir = Path(CST_DUMP_DIR)
        try:
            dump_dir.mkdir(parents=True, exist_ok=True)
            (dump_dir / f"{stage}.sexpr").write_text(serialize_cst(root, include_trivia=True), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write CST dump for stage '{stage}': {e}")


def render(source: str, options: Optional[RenderOptions] = None,
           source_file: str = DEFAULT_SOURCE_FILE) -> Result[SyntaxResponse, ParseError]:
    """Render `source` to the JSON node list"""
    return RenderDriver().render(source, options or RenderOptions(), source_file)


class SyntaxParser:
    """String-option entry point: `SyntaxParser.parse(code, ["fold", "showmissing"])`"""

    @staticmethod
    def parse(code: str, options: Optional[Iterable[str]] = None) -> SyntaxResponse:
        """Raises ParseError when the code cannot be parsed"""
        result = RenderDriver().render(code, RenderOptions.from_strings(options or []))
        if result.is_err():
            raise result.unwrap_err()
        return result.unwrap()
