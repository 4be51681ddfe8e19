"""
Mutable parse position over an immutable Cursor.

Parsers peek through `stream.cursor` (never mutating it) and commit
progress with `seek` or the consuming helpers below.

Author: xwest
"""

from typing import List, Optional, Union

from ..lexer.tokens import Token, TokenType, SourceLocation, GROUP_DELIMITERS
from .cursor import Cursor, CLOSERS
from .errors import (
    ParseError, ParseWarning, create_unexpected_token_error,
    create_unexpected_eof_error, create_unclosed_delimiter_error
)


class TokenStream:
    """Single-owner parse position with peek/consume helpers."""

    def __init__(self, cursor: Cursor):
        self.cursor = cursor
        self.warnings: List[ParseWarning] = []

    @classmethod
    def from_tokens(cls, tokens: List[Token]) -> 'TokenStream':
        return cls(Cursor.from_tokens(tokens))

    def seek(self, cursor: Cursor) -> None:
        """Commit to a cursor obtained by lookahead."""
        self.cursor = cursor

    def peek(self) -> Optional[Token]:
        return self.cursor.token()

    def is_at_end(self) -> bool:
        return self.cursor.eof

    @property
    def location(self) -> SourceLocation:
        return self.cursor.location

    def check(self, token_type: TokenType) -> bool:
        token = self.peek()
        return token is not None and token.type == token_type

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise create_unexpected_eof_error("token", self.location)
        self.cursor = self.cursor.advance()
        return token

    def match(self, token_type: TokenType) -> Optional[Token]:
        """Consume and return the next token if it has the given type."""
        if self.check(token_type):
            return self.advance()
        return None

    def consume(self, token_type: TokenType, expected: Union[str, TokenType, None] = None) -> Token:
        """Consume a token of the given type or raise a ParseError."""
        expected = expected or token_type
        token = self.peek()
        if token is None:
            raise self.error_eof(expected)
        if token.type != token_type:
            raise create_unexpected_token_error(expected, token)
        return self.advance()

    def consume_ident(self, expected: str = "identifier") -> Token:
        return self.consume(TokenType.IDENTIFIER, expected)

    def skip_group(self) -> Cursor:
        """Consume a balanced (), [] or {} group and return the cursor past it."""
        end = self.cursor.skip_group()
        if end is None:
            raise group_error(self.cursor)
        self.cursor = end
        return end

    def error_eof(self, expected: Union[str, TokenType]) -> ParseError:
        return create_unexpected_eof_error(expected, self.location)

    def warn(self, warning: ParseWarning) -> None:
        self.warnings.append(warning)


def group_error(cursor: Cursor) -> ParseError:
    """Explain why the group opening at `cursor` could not be skipped."""
    open_token = cursor.token()
    closers = []
    while not cursor.eof:
        token = cursor.token()
        if token.type in GROUP_DELIMITERS:
            closers.append(GROUP_DELIMITERS[token.type])
        elif token.type in CLOSERS:
            if token.type != closers[-1]:
                return create_unexpected_token_error(f"`{CLOSING_LEXEMES[closers[-1]]}`", token)
            closers.pop()
        cursor = cursor.advance()
    return create_unclosed_delimiter_error(open_token, cursor.location)


CLOSING_LEXEMES = {
    TokenType.RIGHT_PAREN: ")",
    TokenType.RIGHT_BRACKET: "]",
    TokenType.RIGHT_BRACE: "}",
}
