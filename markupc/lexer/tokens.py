"""
Token definitions for the markupc lexer.

The markup grammar works on a deliberately small token vocabulary:
- Identifiers (component paths, property labels, keywords like `with`)
- Literals (strings, integers, floats, booleans)
- Single-character punctuation

Punctuation is never merged into multi-character operators. `::` is two
COLON tokens and `/>` is SLASH followed by GREATER_THAN, so the tag
classifier and the tag-suffix collector can reason about each character.

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types in the markup language.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals
    # ========================================================================
    INTEGER = auto()                # 42, 1_000
    FLOAT = auto()                  # 3.14, 1e-3
    STRING = auto()                 # "hello"
    TRUE = auto()                   # true
    FALSE = auto()                  # false

    # ========================================================================
    # Identifiers
    # ========================================================================
    IDENTIFIER = auto()             # Button, label, with, type

    # ========================================================================
    # Punctuation
    # ========================================================================
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    SLASH = auto()                  # /
    COLON = auto()                  # :
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    ASSIGN = auto()                 # =
    MINUS = auto()                  # -
    PLUS = auto()                   # +
    STAR = auto()                   # *
    PERCENT = auto()                # %
    BANG = auto()                   # !
    AMPERSAND = auto()              # &
    PIPE = auto()                   # |
    QUESTION = auto()               # ?
    SEMICOLON = auto()              # ;
    HASH = auto()                   # #
    AT = auto()                     # @

    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and diagnostics.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def join(self, other: 'SourceSpan') -> 'SourceSpan':
        """Return the smallest span covering both spans."""
        start = self.start if self.start.offset <= other.start.offset else other.start
        end = self.end if self.end.offset >= other.end.offset else other.end
        return SourceSpan(start, end)

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), semantic value,
    and source location for error reporting.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed value (e.g., int for INTEGER)
    location: SourceLocation        # Source location of the first character

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def span(self) -> SourceSpan:
        """Span covering the token's lexeme."""
        start = self.location
        newlines = self.lexeme.count('\n')
        if newlines:
            column = len(self.lexeme) - self.lexeme.rfind('\n')
        else:
            column = start.column + len(self.lexeme)
        end = SourceLocation(start.filename, start.line + newlines, column,
                             start.offset + len(self.lexeme))
        return SourceSpan(start, end)

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_punct(self) -> bool:
        """Check if this token is a punctuation character."""
        return self.type in PUNCTUATION_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer

KEYWORDS = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

PUNCTUATION = {
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "/": TokenType.SLASH,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "=": TokenType.ASSIGN,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "%": TokenType.PERCENT,
    "!": TokenType.BANG,
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
    "?": TokenType.QUESTION,
    ";": TokenType.SEMICOLON,
    "#": TokenType.HASH,
    "@": TokenType.AT,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
}

PUNCTUATION_TYPES = frozenset(PUNCTUATION.values())

LITERAL_TYPES = frozenset({
    TokenType.INTEGER, TokenType.FLOAT, TokenType.STRING,
    TokenType.TRUE, TokenType.FALSE,
})

# Matching delimiters for balanced-group scanning
GROUP_DELIMITERS = {
    TokenType.LEFT_PAREN: TokenType.RIGHT_PAREN,
    TokenType.LEFT_BRACKET: TokenType.RIGHT_BRACKET,
    TokenType.LEFT_BRACE: TokenType.RIGHT_BRACE,
}
