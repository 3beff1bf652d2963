from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    DEFINITION = "definition"
    RELATION = "relation"
    COLON = ":"
    OR = "|"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    HASH = "#"
    IDENTIFIER = "identifier"
    WILDCARD = "*"
    EOF = "end of input"
    INVALID = "invalid"


# Keywords are matched as plain prefixes of the remaining input, so
# "definitionFoo" lexes as DEFINITION followed by IDENTIFIER "Foo".
KEYWORDS: tuple[tuple[str, TokenKind], ...] = (
    ("definition", TokenKind.DEFINITION),
    ("relation", TokenKind.RELATION),
)

PUNCTUATION: dict[str, TokenKind] = {
    ":": TokenKind.COLON,
    "|": TokenKind.OR,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "#": TokenKind.HASH,
    "*": TokenKind.WILDCARD,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    offset: int = 0

    def describe(self) -> str:
        """Human-readable form used in syntax error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        return repr(self.value)


def line_column(text: str, offset: int) -> tuple[int, int]:
    """Convert a 0-based offset into a 1-based (line, column) pair."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


class Lexer:
    """Hand-written scanner over a schema source string.

    The lexer owns the cursor; `next_token()` advances it and returns one
    token at a time. Once the input is exhausted every call returns EOF.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _skip_space(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def next_token(self) -> Token:
        self._skip_space()

        start = self.pos
        if start >= len(self.text):
            return Token(TokenKind.EOF, "", start)

        for keyword, kind in KEYWORDS:
            if self.text.startswith(keyword, start):
                self.pos += len(keyword)
                return Token(kind, keyword, start)

        ch = self.text[start]
        kind = PUNCTUATION.get(ch)
        if kind is not None:
            self.pos += 1
            return Token(kind, ch, start)

        if ch.isalpha():
            end = start
            while end < len(self.text) and _is_ident_char(self.text[end]):
                end += 1
            self.pos = end
            return Token(TokenKind.IDENTIFIER, self.text[start:end], start)

        self.pos += 1
        return Token(TokenKind.INVALID, ch, start)


def _is_ident_char(ch: str) -> bool:
    return ch.isalpha() or ch.isdigit() or ch == "_"


def tokenize(text: str) -> list[Token]:
    """Return every token of `text`, ending with (and including) the first EOF."""
    lexer = Lexer(text)
    tokens: list[Token] = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.kind is TokenKind.EOF:
            return tokens
