"""
markupc Parser Package

Recursive-descent parsing of component tags over an immutable token cursor.

Key Features:
- Pure lookahead classification of component vs. element tags
- Property list and `with` delegate property forms
- Canonical (sorted) property order
- Structured error kinds with precise source spans

Author: xwest
"""

from .ast_nodes import *
from .cursor import Cursor
from .stream import TokenStream
from .tag import TagSuffix, parse_tag_suffix
from .props import (
    peek_property, peek_props_kind, parse_expression, parse_property,
    parse_property_list, parse_property_delegate
)
from .component import (
    ComponentParser, classify, peek_component, peek_type, parse_component,
    parse_type_path
)
from .errors import ParseError, ParseErrorKind, ParseWarning

__all__ = [
    # Cursor and stream
    "Cursor", "TokenStream",

    # Classification and parsing
    "classify", "peek_component", "peek_type",
    "ComponentParser", "parse_component", "parse_type_path",
    "TagSuffix", "parse_tag_suffix",
    "peek_property", "peek_props_kind", "parse_expression", "parse_property",
    "parse_property_list", "parse_property_delegate",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "PropsKind",
    "ComponentTag", "ComponentDescriptor", "TypePath", "TagBracket",
    "PropertyLabel", "Property", "PropertyList", "PropertyDelegate", "PropertySpec",
    "Expression", "Literal", "PathExpression", "CallExpression", "BlockExpression",

    # Error handling
    "ParseError", "ParseErrorKind", "ParseWarning",
]
