"""
Error handling for the markupc parser.

Every syntax failure is a ParseError carrying a structured kind, so callers
can branch on what went wrong (for example re-anchoring an unexpected end of
input) without inspecting message text.

Author: xwest
"""

from enum import Enum
from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation, SourceSpan
from ..lexer.errors import Diagnostic


class ParseErrorKind(Enum):
    """Structured categories of syntax errors."""
    UNEXPECTED_TOKEN = "unexpected_token"
    UNEXPECTED_EOF = "unexpected_eof"
    UNCLOSED_DELIMITER = "unclosed_delimiter"
    MALFORMED_TAG = "malformed_tag"
    RESERVED_LABEL = "reserved_label"
    QUALIFIED_LABEL = "qualified_label"
    DUPLICATE_LABEL = "duplicate_label"
    DELEGATE_KEYWORD_MISMATCH = "delegate_keyword_mismatch"


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        kind: ParseErrorKind = ParseErrorKind.UNEXPECTED_TOKEN,
        span: Optional[SourceSpan] = None
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            span=span
        )
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def span(self) -> Optional[SourceSpan]:
        return self.diagnostic.span

    def reanchored(self, token: Token) -> 'ParseError':
        """Copy of this error reported at `token` instead of its original position."""
        return ParseError(
            message=self.message,
            location=token.location,
            token=token,
            code=self.diagnostic.code,
            help_text=self.diagnostic.help_text,
            suggestions=self.diagnostic.suggestions,
            kind=self.kind,
            span=token.span
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class ParseWarning:
    """
    Represents a parser warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        span: Optional[SourceSpan] = None
    ):
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text,
            span=span
        )
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


# Parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unclosed delimiter",
    "P010": "Unexpected end of input",
    "P020": "Component tag not self-closed",
    "P021": "Reserved property label",
    "P022": "Qualified property label",
    "P023": "Missing props delegate keyword",
    "P024": "Duplicate property label",
    "P030": "Overridden property label",
}


# Helper functions for creating common parser errors

def _describe(expected: Union[TokenType, str]) -> str:
    return expected.name if isinstance(expected, TokenType) else expected


def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = _describe(expected)

    return ParseError(
        message=f"expected {expected_str}, found `{found.lexeme}`",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position.",
        span=found.span
    )


def create_trailing_token_error(found: Token) -> ParseError:
    """Create an error for tokens left over after a complete parse."""
    return ParseError(
        message=f"unexpected token `{found.lexeme}`",
        location=found.location,
        token=found,
        code="P001",
        help_text="Component tags only accept a type path followed by properties.",
        span=found.span
    )


def create_unexpected_eof_error(expected: Union[TokenType, str], location: SourceLocation) -> ParseError:
    """Create an error for unexpected end of input."""
    expected_str = _describe(expected)

    return ParseError(
        message=f"unexpected end of input, expected {expected_str}",
        location=location,
        code="P010",
        help_text=f"The input ended while the parser was expecting {expected_str}.",
        suggestions=[f"Add the missing {expected_str}"],
        kind=ParseErrorKind.UNEXPECTED_EOF
    )


def create_unclosed_delimiter_error(open_token: Token, location: SourceLocation) -> ParseError:
    """Create an error for an unclosed delimiter."""
    closing_delimiters = {"(": ")", "[": "]", "{": "}"}
    closing = closing_delimiters.get(open_token.lexeme, open_token.lexeme)

    return ParseError(
        message=f"unclosed delimiter `{open_token.lexeme}`",
        location=location,
        token=open_token,
        code="P004",
        help_text=f"The opening '{open_token.lexeme}' at {open_token.location} was never closed.",
        suggestions=[f"Add a closing '{closing}'"],
        kind=ParseErrorKind.UNCLOSED_DELIMITER
    )


def create_malformed_tag_error(span: SourceSpan, token: Token) -> ParseError:
    """Create an error for a component tag that is not self-closed."""
    return ParseError(
        message="expected component tag be of form `< .. />`",
        location=span.start,
        token=token,
        code="P020",
        help_text="Component tags cannot have children; close them with `/>`.",
        kind=ParseErrorKind.MALFORMED_TAG,
        span=span
    )


def create_reserved_label_error(label_token: Token, span: SourceSpan, reserved: str) -> ParseError:
    """Create an error for a property named like the element type field."""
    return ParseError(
        message="expected identifier",
        location=span.start,
        token=label_token,
        code="P021",
        help_text=f"`{reserved}` is reserved for element tags and cannot be a component property.",
        kind=ParseErrorKind.RESERVED_LABEL,
        span=span
    )


def create_qualified_label_error(label_token: Token, span: SourceSpan, text: str) -> ParseError:
    """Create an error for a dashed property label."""
    return ParseError(
        message="expected identifier",
        location=span.start,
        token=label_token,
        code="P022",
        help_text=f"`{text}` is a dashed attribute name; component properties must be plain identifiers.",
        suggestions=[f"Use `{text.replace('-', '_')}`"],
        kind=ParseErrorKind.QUALIFIED_LABEL,
        span=span
    )


def create_duplicate_label_error(label_token: Token, span: SourceSpan, text: str,
                                 first: SourceLocation) -> ParseError:
    """Create an error for a property label that appears twice."""
    return ParseError(
        message=f"property `{text}` is declared more than once",
        location=span.start,
        token=label_token,
        code="P024",
        help_text=f"`{text}` was first declared at {first}.",
        suggestions=["Remove one of the declarations"],
        kind=ParseErrorKind.DUPLICATE_LABEL,
        span=span
    )


def create_delegate_keyword_error(found: Token, keyword: str) -> ParseError:
    """Create an error for a delegate form that does not start with the keyword."""
    return ParseError(
        message=f"expected to find `{keyword}` token",
        location=found.location,
        token=found,
        code="P023",
        help_text=f"Pass a pre-built properties value with `{keyword} <name>`.",
        kind=ParseErrorKind.DELEGATE_KEYWORD_MISMATCH,
        span=found.span
    )


def create_overridden_label_warning(label_token: Token, span: SourceSpan, text: str,
                                    winner: SourceLocation) -> ParseWarning:
    """Create a warning for a duplicate label dropped by the last-wins policy."""
    return ParseWarning(
        message=f"property `{text}` is overridden by a later declaration",
        location=span.start,
        token=label_token,
        code="P030",
        help_text=f"The declaration at {winner} is used instead.",
        span=span
    )
