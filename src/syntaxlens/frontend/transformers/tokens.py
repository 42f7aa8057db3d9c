"""
Token Factory - Maps lark terminals to CST tokens
Handles token kinds, missing-token placeholders and string literal splitting
"""

from typing import Dict, List, Optional

from lark.lexer import Token as LarkToken

from ...shared import SourcePresence, Token, TokenKind

KEYWORD_TERMINALS: Dict[str, str] = {
    "LET": "let", "VAR": "var", "FUNC": "func", "RETURN": "return",
    "IF": "if", "ELSE": "else", "FOR": "for", "IN": "in", "WHILE": "while",
    "STRUCT": "struct", "CLASS": "class", "ENUM": "enum", "CASE": "case",
    "IMPORT": "import", "TRUE": "true", "FALSE": "false", "NIL": "nil",
    "SELF": "self", "BREAK": "break", "CONTINUE": "continue",
    "STATIC": "static", "PUBLIC": "public", "PRIVATE": "private",
    "FILEPRIVATE": "fileprivate", "INTERNAL": "internal", "FINAL": "final",
    "MUTATING": "mutating", "OVERRIDE": "override",
}

PUNCTUATION_TERMINALS: Dict[str, str] = {
    "LPAREN": "leftParen", "RPAREN": "rightParen",
    "LBRACE": "leftBrace", "RBRACE": "rightBrace",
    "LSQUARE": "leftSquare", "RSQUARE": "rightSquare",
    "COLON": "colon", "COMMA": "comma", "DOT": "period", "SEMICOLON": "semicolon",
    "ARROW": "arrow", "EQUAL": "equal", "QUESTION": "postfixQuestionMark",
    "UNDERSCORE": "wildcard", "STRING_QUOTE": "stringQuote", "EOF": "endOfFile",
}

# Kinds that carry their source text as payload
PAYLOAD_TERMINALS: Dict[str, str] = {
    "IDENTIFIER": "identifier",
    "INTEGER": "integerLiteral",
    "FLOAT": "floatLiteral",
    "OPERATOR": "binaryOperator",
    "STRING_SEGMENT": "stringSegment",
    "STRING": "stringLiteral",
}

# Text a missing token of each terminal stands for
CANONICAL_TEXT: Dict[str, str] = {
    "LPAREN": "(", "RPAREN": ")", "LBRACE": "{", "RBRACE": "}",
    "LSQUARE": "[", "RSQUARE": "]", "COLON": ":", "COMMA": ",",
    "DOT": ".", "SEMICOLON": ";", "ARROW": "->", "EQUAL": "=",
    "QUESTION": "?", "UNDERSCORE": "_", "STRING_QUOTE": '"', "EOF": "",
    "IDENTIFIER": "",
    **{terminal: keyword for terminal, keyword in KEYWORD_TERMINALS.items()},
}


class MissingToken(LarkToken):
    """Zero-width token inserted by error recovery"""

    @classmethod
    def for_terminal(cls, terminal: str, borrowed: Optional[LarkToken] = None) -> 'MissingToken':
        text = CANONICAL_TEXT.get(terminal, "")
        if borrowed is not None:
            return cls.new_borrow_pos(terminal, text, borrowed)
        return cls(terminal, text)


def token_kind(terminal: str, text: str) -> TokenKind:
    """Kind tag of a token with the given terminal and text"""
    if terminal in KEYWORD_TERMINALS:
        return TokenKind("keyword", KEYWORD_TERMINALS[terminal])
    if terminal in PUNCTUATION_TERMINALS:
        return TokenKind(PUNCTUATION_TERMINALS[terminal])
    if terminal in PAYLOAD_TERMINALS:
        return TokenKind(PAYLOAD_TERMINALS[terminal], text)
    return TokenKind("unknown", text)


class TokenFactory:
    """Builds CST tokens from lark tokens"""

    @staticmethod
    def from_lark(token: LarkToken) -> Token:
        """
        Convert a lark token.

        Positions are lark character offsets at this point; trivia
        attachment rewrites them to UTF-8 byte offsets.
        """
        terminal = token.type
        text = str(token)
        if isinstance(token, MissingToken):
            return Token(terminal, token_kind(terminal, text), text, SourcePresence.MISSING)
        return Token(terminal, token_kind(terminal, text), text, position=token.start_pos)

    @staticmethod
    def end_of_file() -> Token:
        return Token("EOF", token_kind("EOF", ""), "")

    @staticmethod
    def split_string(token: Token) -> List[Token]:
        """Split a STRING token into opening quote, content segment and closing quote"""
        text = token.text
        start = token.position
        content = text[1:-1]
        opening = Token("STRING_QUOTE", token_kind("STRING_QUOTE", '"'), '"', position=start)
        segment = Token("STRING_SEGMENT", token_kind("STRING_SEGMENT", content), content,
                        position=start + 1)
        closing = Token("STRING_QUOTE", token_kind("STRING_QUOTE", '"'), '"',
                        position=start + 1 + len(content))
        return [opening, segment, closing]

    @staticmethod
    def as_prefix_operator(token: Token) -> Token:
        token.kind = TokenKind("prefixOperator", token.text)
        return token
