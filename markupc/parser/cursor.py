"""
Immutable token cursor.

A Cursor is a read position into a token tuple, bounded by an exclusive end
index. Every lookahead method returns the matched token together with an
advanced *copy* of the cursor (or None), so speculative parsing never mutates
anything. Only TokenStream commits an advance.

Author: xwest
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..lexer.tokens import Token, TokenType, SourceLocation, GROUP_DELIMITERS

Step = Optional[Tuple[Token, 'Cursor']]


@dataclass(frozen=True)
class Cursor:
    """Read-only position in a token sequence."""
    tokens: Tuple[Token, ...]
    index: int
    end: int

    @classmethod
    def from_tokens(cls, tokens: Sequence[Token]) -> 'Cursor':
        """Cursor over a lexer token list; a trailing EOF token is excluded."""
        tokens = tuple(tokens)
        end = len(tokens)
        if end and tokens[-1].type == TokenType.EOF:
            end -= 1
        return cls(tokens, 0, end)

    @property
    def eof(self) -> bool:
        return self.index >= self.end

    def token(self) -> Optional[Token]:
        """Token at this position, or None past the end bound."""
        if self.eof:
            return None
        return self.tokens[self.index]

    @property
    def location(self) -> SourceLocation:
        """Location of the current token; at the end, of whatever follows the bound."""
        if self.index < len(self.tokens):
            return self.tokens[self.index].location
        return self.tokens[-1].location

    def advance(self, count: int = 1) -> 'Cursor':
        return Cursor(self.tokens, min(self.index + count, self.end), self.end)

    def bounded(self, end: 'Cursor') -> 'Cursor':
        """Sub-cursor from here up to (excluding) `end`."""
        return Cursor(self.tokens, self.index, end.index)

    def until(self, end: 'Cursor') -> Tuple[Token, ...]:
        """Tokens between this cursor and `end`."""
        return self.tokens[self.index:end.index]

    def punct(self, char: Optional[str] = None) -> Step:
        token = self.token()
        if token is None or not token.is_punct:
            return None
        if char is not None and token.lexeme != char:
            return None
        return token, self.advance()

    def ident(self, text: Optional[str] = None) -> Step:
        token = self.token()
        if token is None or token.type != TokenType.IDENTIFIER:
            return None
        if text is not None and token.lexeme != text:
            return None
        return token, self.advance()

    def literal(self) -> Step:
        token = self.token()
        if token is None or not token.is_literal:
            return None
        return token, self.advance()

    def skip_group(self) -> Optional['Cursor']:
        """
        Skip a balanced (), [] or {} group starting here.

        Returns the cursor just past the closing delimiter, or None when the
        current token does not open a group or the group never closes
        properly within the bound.
        """
        token = self.token()
        if token is None or token.type not in GROUP_DELIMITERS:
            return None

        closers = []
        cursor: Cursor = self
        while not cursor.eof:
            token = cursor.token()
            if token.type in GROUP_DELIMITERS:
                closers.append(GROUP_DELIMITERS[token.type])
            elif token.type in CLOSERS:
                if token.type != closers[-1]:
                    return None
                closers.pop()
                if not closers:
                    return cursor.advance()
            cursor = cursor.advance()

        return None

    def __repr__(self) -> str:
        return f"Cursor(index={self.index}, end={self.end}, token={self.token()})"


CLOSERS = frozenset(GROUP_DELIMITERS.values())
