"""
Parser

Lark LALR parser for the Swift subset, producing a lossless concrete
syntax tree. Syntax errors are recovered where possible: missing closing
delimiters, identifiers, colons and `in` keywords are inserted as missing
tokens, stray tokens and unlexable characters are kept as unexpected-text
trivia.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Set

from lark import Lark
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from lark.lark import PostLex

from ..shared import ParseError, SourceLocationConverter, SyntaxNode, assign_spans
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_SOURCE_FILE, MAX_RECOVERIES
from .transformers import (
    CANONICAL_TEXT, CSTBuilder, KEYWORD_TERMINALS, MissingToken, attach_trivia,
)

logger = logging.getLogger("syntaxlens.frontend.parser")

# Terminals recovery may insert, in order of preference
RECOVERY_TERMINALS = ("RPAREN", "RSQUARE", "RBRACE", "LBRACE", "COLON", "IN", "IDENTIFIER")

END = "$END"


class KeywordPostLex(PostLex):
    """
    Keeps keyword terminals in every contextual lexer state.

    Without it a keyword in an unexpected place lexes as an identifier.
    """
    always_accept = tuple(KEYWORD_TERMINALS)

    def process(self, stream):
        return stream


@dataclass
class ParsedSource:
    """Parser output: the CST plus what is needed to map its offsets"""
    root: SyntaxNode
    source: str
    file_name: str
    converter: SourceLocationConverter
    recoveries: int = 0


class RecoverySession:
    """
    Error handler for one parse (lark `on_error` callback).

    Returns True to resume parsing, False to let lark raise the error.
    """

    def __init__(self, max_recoveries: int, source_length: int):
        self.max_recoveries = max_recoveries
        self.source_length = source_length
        self.recoveries = 0
        self.exhausted = False
        self.skipped: Dict[int, int] = {}
        self._identifier_positions: Set[int] = set()

    def __call__(self, error: UnexpectedInput) -> bool:
        if not self._spend():
            return False
        if isinstance(error, UnexpectedCharacters):
            logger.debug(f"Skipping unexpected character {error.char!r} at {error.line}:{error.column}")
            return True
        if isinstance(error, UnexpectedToken):
            if error.token.type == END:
                return self._complete_at_end(error)
            return self._recover_token(error)
        return False

    def _spend(self) -> bool:
        if self.recoveries >= self.max_recoveries:
            self.exhausted = self.max_recoveries > 0
            return False
        self.recoveries += 1
        return True

    def _position(self, token) -> int:
        return self.source_length if token.type == END else token.start_pos

    def _candidates(self, acceptable: Iterable[str], token) -> List[str]:
        position = self._position(token)
        return [
            terminal for terminal in RECOVERY_TERMINALS
            if terminal in acceptable
            and not (terminal == "IDENTIFIER" and position in self._identifier_positions)
        ]

    def _insert(self, interactive, terminal: str, token) -> None:
        if terminal == "IDENTIFIER":
            self._identifier_positions.add(self._position(token))
        logger.debug(f"Inserting missing {terminal} before {token.type}")
        interactive.feed_token(MissingToken.for_terminal(terminal, token))

    def _recover_token(self, error: UnexpectedToken) -> bool:
        interactive = error.interactive_parser
        token = error.token
        for terminal in self._candidates(interactive.accepts(), token):
            trial = interactive.copy()
            trial.feed_token(MissingToken.for_terminal(terminal, token))
            if token.type in trial.accepts():
                self._insert(interactive, terminal, token)
                interactive.feed_token(token)
                return True
        # Not fed back: the token text resurfaces as unexpected trivia
        logger.debug(f"Dropping unexpected {token.type} {str(token)!r} at {token.line}:{token.column}")
        self.skipped[token.start_pos] = token.end_pos
        return True

    def _complete_at_end(self, error: UnexpectedToken) -> bool:
        """Insert missing tokens until the input can end (lark resumes with $END only once)"""
        interactive = error.interactive_parser
        token = error.token
        first = True
        while True:
            acceptable = interactive.accepts()
            if END in acceptable:
                return True
            if not first and not self._spend():
                return False
            first = False
            candidates = self._candidates(acceptable, token)
            if not candidates:
                return False
            self._insert(interactive, candidates[0], token)


def describe_terminal(name: str) -> str:
    if name == END:
        return "end of input"
    text = CANONICAL_TEXT.get(name)
    if text:
        return f"'{text}'"
    return name.lower()


class Parser:
    """
    Parser for the Swift subset.

    Returns a `ParsedSource` whose CST carries trivia, missing tokens and
    UTF-8 byte positions. Raises `ParseError` when recovery gives up.
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE,
                 max_recoveries: int = MAX_RECOVERIES):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            grammar_path,
            start='source_file',
            parser='lalr',              # Required for caching and on_error
            lexer='contextual',
            postlex=KeywordPostLex(),
            cache=cache_file,
            maybe_placeholders=False,
        )
        self.max_recoveries = max_recoveries

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_FILE) -> ParsedSource:
        session = RecoverySession(self.max_recoveries, len(source))
        converter = SourceLocationConverter(source, source_file)
        try:
            tree = self.parser.parse(source, on_error=session)
        except UnexpectedInput as e:
            raise self._parse_error(e, session, source, converter) from e

        root = CSTBuilder().transform(tree)
        attach_trivia(root, source, session.skipped)
        assign_spans(root)
        if session.recoveries:
            logger.debug(f"Recovered from {session.recoveries} syntax error(s) in {source_file}")
        return ParsedSource(root, source, source_file, converter, session.recoveries)

    def _parse_error(self, error: UnexpectedInput, session: RecoverySession,
                     source: str, converter: SourceLocationConverter) -> ParseError:
        help_text = None
        label = "unexpected token"
        if isinstance(error, UnexpectedCharacters):
            offset = error.pos_in_stream
            message = f"unexpected character '{error.char}'"
            label = "unexpected character"
        elif isinstance(error, UnexpectedToken) and error.token.type != END:
            offset = error.token.start_pos
            message = f"unexpected '{error.token}'"
        else:
            offset = len(source)
            message = "unexpected end of input"
            label = "input ends here"

        expected = sorted(getattr(error, 'expected', None) or ())
        if expected:
            shown = ", ".join(describe_terminal(name) for name in expected[:8])
            more = ", ..." if len(expected) > 8 else ""
            help_text = f"expected one of: {shown}{more}"
        note = None
        if session.exhausted:
            message = f"too many syntax errors; {message}"
            note = f"recovery gave up after {session.recoveries} repairs"

        location = converter.location(len(source[:offset].encode("utf-8")))
        return ParseError(message, location, source_code=source, help=help_text, label=label,
                          note=note)
