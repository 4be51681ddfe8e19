"""
markupc Lexer - turns markup source into a flat token list

Kept intentionally dumb: every punctuation character is its own token so the
parser can decide what `::`, `/>` and `->` mean in context.

xwest
"""

import math
import re
from typing import List, Optional

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, PUNCTUATION
from .errors import (
    LexerError, create_invalid_character_error,
    create_unterminated_string_error, create_invalid_number_error
)
from ..log import get_logger

logger = get_logger(__name__)


class Lexer:
    """
    Markup lexical analyzer.

    Converts source text into a list of tokens terminated by an EOF token.
    Errors are collected so several can be reported from one pass.
    """

    def __init__(self, source: str, filename: str = "<markup>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.integer_pattern = re.compile(r'\d[\d_]*')
        self.float_pattern = re.compile(
            r'\d[\d_]*\.\d[\d_]*(?:[eE][+-]?\d[\d_]*)?|'
            r'\d[\d_]*[eE][+-]?\d[\d_]*'
        )

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens including EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens.clear()
        self.errors.clear()

        while self.pos < len(self.source):
            try:
                self._skip_whitespace_and_comments()

                if self.pos >= len(self.source):
                    break

                token = self._next_token()
                if token:
                    self.tokens.append(token)

            except LexerError as e:
                self.errors.append(e)
                # Recover by skipping the problematic character
                self._advance()

        eof_location = SourceLocation(self.filename, self.line, self.column, self.pos)
        self.tokens.append(Token(TokenType.EOF, "", None, eof_location))

        logger.debug("lexed %d tokens from %s (%d errors)",
                     len(self.tokens), self.filename, len(self.errors))
        return self.tokens

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _next_token(self) -> Optional[Token]:
        """Get the next token from the source."""
        location = self._location()
        current_char = self.source[self.pos]

        if current_char.isdigit():
            return self._tokenize_number(location)

        if self._is_identifier_start(current_char):
            return self._tokenize_identifier_or_keyword(location)

        if current_char == '"':
            return self._tokenize_string(location)

        if current_char in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[current_char], current_char, None, location)

        raise create_invalid_character_error(current_char, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize integer or float literals."""
        remaining = self.source[self.pos:]

        float_match = self.float_pattern.match(remaining)
        if float_match:
            lexeme = float_match.group(0)
            self._advance_by(len(lexeme))
            try:
                value = float(lexeme.replace('_', ''))
            except ValueError:
                raise create_invalid_number_error(lexeme, location, "Cannot parse floating-point number")
            if math.isinf(value):
                raise create_invalid_number_error(lexeme, location, "Floating-point literal is out of range")
            return Token(TokenType.FLOAT, lexeme, value, location)

        lexeme = self.integer_pattern.match(remaining).group(0)
        self._advance_by(len(lexeme))
        if lexeme.endswith('_'):
            raise create_invalid_number_error(lexeme, location, "Numeric literals cannot end with '_'")
        return Token(TokenType.INTEGER, lexeme, int(lexeme.replace('_', '')), location)

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        """Tokenize an identifier or a boolean keyword."""
        start_pos = self.pos
        self._advance()

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)

        if token_type == TokenType.IDENTIFIER:
            value = lexeme
        else:
            value = token_type == TokenType.TRUE

        return Token(token_type, lexeme, value, location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """Tokenize a double-quoted string literal."""
        start_pos = self.pos
        self._advance()  # Skip opening quote

        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\':
                if self.pos + 1 >= len(self.source):
                    break
                self._advance()
                value_parts.append(self._handle_escape_sequence())
            else:
                value_parts.append(self.source[self.pos])
                self._advance()

        if self.pos >= len(self.source) or self.source[self.pos] != '"':
            raise create_unterminated_string_error(location)

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts), location)

    def _handle_escape_sequence(self) -> str:
        """Handle escape sequences in strings."""
        escape_char = self.source[self.pos]
        self._advance()

        escape_sequences = {
            'n': '\n',
            't': '\t',
            'r': '\r',
            '\\': '\\',
            '"': '"',
            "'": "'",
            '0': '\0',
        }

        if escape_char in escape_sequences:
            return escape_sequences[escape_char]
        elif escape_char == 'u':
            # Unicode escape \uHHHH
            hex_digits = self.source[self.pos:self.pos + 4]
            if len(hex_digits) == 4 and all(c in '0123456789abcdefABCDEF' for c in hex_digits):
                self._advance_by(4)
                return chr(int(hex_digits, 16))

        # Unknown escape - keep it literally
        return escape_char

    def _is_identifier_start(self, char: str) -> bool:
        return char.isalpha() or char == '_'

    def _is_identifier_continue(self, char: str) -> bool:
        return char.isalnum() or char == '_'

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and /* block */ comments."""
        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            if self.source.startswith('/*', self.pos):
                self._advance_by(2)
                while self.pos < len(self.source) and not self.source.startswith('*/', self.pos):
                    self._advance()
                self._advance_by(2)
                continue

            break

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        for _ in range(count):
            self._advance()

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<markup>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Raises:
        LexerError: If lexing fails (the first error encountered)
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        raise lexer.errors[0]

    return tokens
