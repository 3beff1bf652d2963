from __future__ import annotations

from .lexer import Lexer, Token, TokenKind, line_column
from .schema_model import (
    Definition,
    ObjectReference,
    ObjectSetReference,
    Relation,
    Schema,
    WildcardReference,
)

# Restricted Zanzibar grammar:
#
#   Schema     := Definition*
#   Definition := "definition" Identifier "{" Relation* "}"
#   Relation   := "relation" Identifier ":" SName ("|" SName)*
#   SName      := Identifier
#               | Identifier "#" Identifier
#               | Identifier ":" "*"


class SchemaSyntaxError(ValueError):
    """First grammar violation found while parsing a schema."""

    def __init__(
        self, expected: TokenKind, found: Token, line: int = 0, column: int = 0
    ) -> None:
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column
        where = f" at line {line}, column {column}" if line else ""
        super().__init__(
            f"expected {_describe_kind(expected)}, but got {found.describe()}{where}"
        )


def _describe_kind(kind: TokenKind) -> str:
    if kind in (TokenKind.IDENTIFIER, TokenKind.EOF):
        return kind.value
    return repr(kind.value)


class Parser:
    """Predictive recursive-descent parser with one token of lookahead."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.current = lexer.next_token()

    def _advance(self) -> Token:
        token = self.current
        self.current = self.lexer.next_token()
        return token

    def _expect(self, kind: TokenKind) -> Token:
        if self.current.kind is not kind:
            line, column = line_column(self.lexer.text, self.current.offset)
            raise SchemaSyntaxError(kind, self.current, line, column)
        return self._advance()

    def parse_schema(self) -> Schema:
        definitions: list[Definition] = []
        while self.current.kind is not TokenKind.EOF:
            definitions.append(self._parse_definition(len(definitions)))
        return Schema(definitions=tuple(definitions))

    def _parse_definition(self, index: int) -> Definition:
        start = self._expect(TokenKind.DEFINITION)
        name = self._expect(TokenKind.IDENTIFIER).value
        self._expect(TokenKind.LEFT_BRACE)

        relations: list[Relation] = []
        while self.current.kind is TokenKind.RELATION:
            relations.append(self._parse_relation(index))

        self._expect(TokenKind.RIGHT_BRACE)
        return Definition(name=name, relations=tuple(relations), offset=start.offset)

    def _parse_relation(self, owner: int) -> Relation:
        self._expect(TokenKind.RELATION)
        name = self._expect(TokenKind.IDENTIFIER).value
        self._expect(TokenKind.COLON)

        objects: list[ObjectReference] = []
        object_sets: list[ObjectSetReference] = []
        wildcards: list[WildcardReference] = []

        while True:
            target = self._expect(TokenKind.IDENTIFIER).value
            if self.current.kind is TokenKind.HASH:
                self._advance()
                relation = self._expect(TokenKind.IDENTIFIER).value
                object_sets.append(ObjectSetReference(target, relation))
            elif self.current.kind is TokenKind.COLON:
                self._advance()
                self._expect(TokenKind.WILDCARD)
                wildcards.append(WildcardReference(target))
            else:
                objects.append(ObjectReference(target))

            if self.current.kind is not TokenKind.OR:
                break
            self._advance()

        return Relation(
            name=name,
            owner=owner,
            objects=tuple(objects),
            object_sets=tuple(object_sets),
            wildcards=tuple(wildcards),
        )


def parse_schema(lexer: Lexer) -> Schema:
    """Parse every definition the lexer yields; raise SchemaSyntaxError on the first mismatch."""
    return Parser(lexer).parse_schema()


def parse(text: str) -> Schema:
    return parse_schema(Lexer(text))
