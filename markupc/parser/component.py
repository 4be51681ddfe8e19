"""
Component tag classification and parsing.

A tag is a component tag when the tokens after `<` form a type path whose
spelling is not entirely lowercase:

    <Button />            component
    <ui::Card />          component
    <ui::card />          element (all lowercase)
    <div />               element

Classification is pure lookahead over an immutable Cursor. Parsing then
consumes the whole `< ... />` tag and yields a ComponentTag.

Author: xwest
"""

from typing import List, Optional

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..lexer.tokens import Token, TokenType
from ..log import get_logger
from .ast_nodes import ComponentTag, TypePath, TagBracket, PropsKind, PropertySpec, span_of
from .cursor import Cursor
from .stream import TokenStream
from .tag import parse_tag_suffix
from .props import peek_props_kind, parse_property_list, parse_property_delegate
from .errors import (
    ParseError, ParseErrorKind, ParseWarning, create_malformed_tag_error,
    create_trailing_token_error
)

logger = get_logger(__name__)


# ============================================================================
# Classification
# ============================================================================

def double_colon(cursor: Cursor) -> Optional[Cursor]:
    """Cursor past two consecutive `:` tokens, or None."""
    for _ in range(2):
        step = cursor.punct(":")
        if step is None:
            return None
        cursor = step[1]

    return cursor


def peek_type(cursor: Cursor) -> Optional[str]:
    """
    Read a type path ahead of `cursor` and return its spelling if it names a
    component.

    Only the first `::` is optional; once a segment has been read every
    further segment must be introduced by `::`.
    """
    type_str = ""
    colons_optional = True

    while True:
        found_colons = False
        post_colons_cursor = cursor
        after_colons = double_colon(post_colons_cursor)
        if after_colons is not None:
            found_colons = True
            post_colons_cursor = after_colons
        elif not colons_optional:
            break

        step = post_colons_cursor.ident()
        if step is None:
            break
        ident, cursor = step
        if found_colons:
            type_str += "::"
        type_str += ident.lexeme

        colons_optional = False

    if not type_str:
        return None
    if type_str.lower() == type_str:
        return None
    return type_str


def classify(cursor: Cursor) -> bool:
    """True when the tokens after `<` name a component type."""
    is_component = peek_type(cursor) is not None
    logger.debug("classified tag at %s as %s", cursor.location,
                 "component" if is_component else "element")
    return is_component


def peek_component(cursor: Cursor) -> bool:
    """Same as `classify`, for a cursor positioned on the `<` itself."""
    step = cursor.punct("<")
    if step is None:
        return False
    return classify(step[1])


# ============================================================================
# Parsing
# ============================================================================

def parse_type_path(stream: TokenStream) -> TypePath:
    """Parse `[::]ident(::ident)*`."""
    first = stream.peek()
    leading_colon = False
    after_colons = double_colon(stream.cursor)
    if after_colons is not None:
        stream.seek(after_colons)
        leading_colon = True

    segments: List[Token] = [stream.consume_ident("type name")]
    while True:
        after_colons = double_colon(stream.cursor)
        if after_colons is None:
            break
        stream.seek(after_colons)
        segments.append(stream.consume_ident("identifier after `::`"))

    return TypePath(segments, leading_colon, span_of(first, segments[-1]))


class ComponentParser:
    """
    Parser for self-closing component tags.

    Warnings raised while parsing (for example overridden duplicate labels)
    are collected in `warnings`.
    """

    def __init__(self, config: Optional[CompilerConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.warnings: List[ParseWarning] = []

    def parse(self, stream: TokenStream) -> ComponentTag:
        """
        Consume `< Type props... />` from the stream.

        Raises:
            ParseError: MALFORMED_TAG when the tag is not self-closed; an
                unexpected end of the tag interior is reported at the `/`.
        """
        lt = stream.consume(TokenType.LESS_THAN, "`<`")
        suffix = parse_tag_suffix(stream)
        if suffix.div is None:
            bracket = TagBracket(lt, suffix.gt)
            raise create_malformed_tag_error(bracket.span, lt)

        inner = TokenStream(suffix.stream)
        try:
            component = self.parse_inner(inner, span_of(lt, suffix.gt))
        except ParseError as err:
            if err.kind == ParseErrorKind.UNEXPECTED_EOF:
                raise err.reanchored(suffix.div) from err
            raise

        self.warnings.extend(inner.warnings)
        stream.warnings.extend(inner.warnings)
        logger.debug("parsed component %r", component)
        return component

    def parse_inner(self, stream: TokenStream, span) -> ComponentTag:
        """Parse the interior of a component tag: type path and property spec."""
        type_path = parse_type_path(stream)
        # backwards compat
        stream.match(TokenType.COLON)

        props: PropertySpec = None
        prop_type = peek_props_kind(stream.cursor, self.config)
        if prop_type == PropsKind.LIST:
            props = parse_property_list(stream, self.config)
        elif prop_type == PropsKind.DELEGATE:
            props = parse_property_delegate(stream, self.config)

        if not stream.is_at_end():
            raise create_trailing_token_error(stream.peek())

        return ComponentTag(type_path, props, span)


def parse_component(stream: TokenStream, config: Optional[CompilerConfig] = None) -> ComponentTag:
    """Convenience wrapper around ComponentParser.parse."""
    return ComponentParser(config).parse(stream)
