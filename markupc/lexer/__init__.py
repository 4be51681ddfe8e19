"""
markupc Lexer Package

Implements the lexical analyzer (tokenizer) for the markup language.

Key Features:
- Single-character punctuation tokens (no operator merging)
- String, integer, float and boolean literals
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, SourceSpan
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "SourceSpan",
    "Diagnostic",
    "LexerError",
]
