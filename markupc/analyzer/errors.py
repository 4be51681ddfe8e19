"""
Semantic analysis error handling for markupc.

Covers the checks the static validator performs on a parsed component tag:
the referenced type must exist, must satisfy the component contract, and
every declared property must be a field of its properties schema.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation, SourceSpan
from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import ASTNode, TypePath, PropertyLabel


class SemanticError(Exception):
    """
    Exception raised when semantic analysis encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        node: Optional[ASTNode] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        related_locations: Optional[List[SourceLocation]] = None,
        span: Optional[SourceSpan] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            span=span
        )
        self.node = node
        self.related_locations = related_locations or []

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def span(self) -> Optional[SourceSpan]:
        return self.diagnostic.span

    def __str__(self) -> str:
        result = str(self.diagnostic)

        if self.related_locations:
            result += "\nRelated locations:\n"
            for loc in self.related_locations:
                result += f"  --> {loc}\n"

        return result


# Semantic error codes for categorization
SEMANTIC_ERROR_CODES = {
    "S002": "Undefined type",
    "S006": "Type is not a component",
    "S010": "Unknown property",
}


# Helper functions for creating specific semantic errors

def _did_you_mean(similar_names: Optional[List[str]]) -> List[str]:
    return [f"Did you mean '{name}'?" for name in (similar_names or [])[:3]]


def create_unknown_type_error(
    type_path: TypePath,
    similar_names: Optional[List[str]] = None
) -> SemanticError:
    """Create an error for a component path that resolves to nothing."""
    suggestions = _did_you_mean(similar_names)
    suggestions.append("Check that the component is registered and imported")

    return SemanticError(
        message=f"cannot find type `{type_path.path}` in this scope",
        location=type_path.span.start,
        node=type_path,
        code="S002",
        help_text=f"No type named '{type_path.path}' is known to the schema registry.",
        suggestions=suggestions,
        span=type_path.span
    )


def create_not_a_component_error(type_path: TypePath, kind: str) -> SemanticError:
    """Create an error for a type that exists but is not a component."""
    return SemanticError(
        message=f"the type `{type_path.path}` is not a component",
        location=type_path.span.start,
        node=type_path,
        code="S006",
        help_text=f"'{type_path.path}' is a {kind} type; only component types can be used as tags.",
        span=type_path.span
    )


def create_unknown_property_error(
    label: PropertyLabel,
    properties_name: str,
    similar_names: Optional[List[str]] = None
) -> SemanticError:
    """Create an error for a property label that is not a schema field."""
    suggestions = _did_you_mean(similar_names)

    return SemanticError(
        message=f"no field `{label.text}` on type `{properties_name}`",
        location=label.span.start,
        node=label,
        code="S010",
        help_text=f"'{properties_name}' does not declare a property named '{label.text}'.",
        suggestions=suggestions,
        span=label.span
    )
