"""
Property parsers for component tags.

Two forms are supported:

    <Button label="Save" disabled=false />      property list
    <Button with button_props />                 property delegate

A property list is parsed greedily until the next tokens no longer look like
`label =`; the remaining tokens belong to the caller. Labels are validated
after the whole list is read and the list is stored sorted by label so
emission order never depends on declaration order.

Author: xwest
"""

from typing import Dict, List, Optional, Tuple

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..lexer.tokens import Token, TokenType, SourceSpan
from ..log import get_logger
from .ast_nodes import (
    Expression, Literal, PathExpression, CallExpression, BlockExpression,
    PropertyLabel, Property, PropertyList, PropertyDelegate, PropsKind,
    LITERAL_TYPE_NAMES, span_of
)
from .cursor import Cursor
from .stream import TokenStream
from .errors import (
    create_unexpected_token_error, create_reserved_label_error,
    create_qualified_label_error, create_duplicate_label_error,
    create_delegate_keyword_error, create_overridden_label_warning
)

logger = get_logger(__name__)


# ============================================================================
# Lookahead
# ============================================================================

def peek_dashed_name(cursor: Cursor) -> Optional[Tuple[List[Token], Cursor]]:
    """Match `ident(-ident)*` without consuming anything."""
    step = cursor.ident()
    if step is None:
        return None
    first, cursor = step
    parts = [first]

    while True:
        dash = cursor.punct("-")
        if dash is None:
            break
        step = dash[1].ident()
        if step is None:
            break
        token, cursor = step
        parts.append(token)

    return parts, cursor


def peek_property(cursor: Cursor) -> bool:
    """True when the tokens ahead start a `label =` declaration."""
    step = peek_dashed_name(cursor)
    if step is None:
        return False
    _, cursor = step
    return cursor.punct("=") is not None


def peek_props_kind(cursor: Cursor, config: CompilerConfig = DEFAULT_CONFIG) -> Optional[PropsKind]:
    """Decide which property form follows: delegate, list, or none at all."""
    step = cursor.ident()
    if step is None:
        return None
    token, _ = step
    if token.lexeme == config.delegate_keyword:
        return PropsKind.DELEGATE
    return PropsKind.LIST


# ============================================================================
# Expressions
# ============================================================================

def parse_expression(stream: TokenStream) -> Expression:
    """
    Parse a property value.

    Grammar:
        expression := literal | "-" number | block | path [call]
        block      := "{" tokens "}"
        path       := ["::"] ident ("::" ident | "." ident)*
        call       := "(" tokens ")"
    """
    token = stream.peek()
    if token is None:
        raise stream.error_eof("expression")

    if token.type == TokenType.MINUS:
        return _parse_negative_number(stream)

    if token.is_literal:
        stream.advance()
        return Literal(token.value, LITERAL_TYPE_NAMES[token.type], token.span)

    if token.type == TokenType.LEFT_BRACE:
        return _parse_block(stream)

    if token.type in (TokenType.IDENTIFIER, TokenType.COLON):
        path = _parse_path_expression(stream)
        if stream.check(TokenType.LEFT_PAREN):
            start = stream.cursor
            end = stream.skip_group()
            arguments = start.advance().until(end)[:-1]
            close = start.until(end)[-1]
            return CallExpression(path, arguments, SourceSpan(path.span.start, close.span.end))
        return path

    raise create_unexpected_token_error("expression", token)


def _parse_negative_number(stream: TokenStream) -> Literal:
    minus = stream.advance()
    token = stream.peek()
    if token is None:
        raise stream.error_eof("number")
    if token.type not in (TokenType.INTEGER, TokenType.FLOAT):
        raise create_unexpected_token_error("number", token)
    stream.advance()
    return Literal(-token.value, LITERAL_TYPE_NAMES[token.type], span_of(minus, token))


def _parse_block(stream: TokenStream) -> BlockExpression:
    start = stream.cursor
    end = stream.skip_group()
    tokens = start.until(end)
    return BlockExpression(tokens[1:-1], span_of(tokens[0], tokens[-1]))


def _parse_path_expression(stream: TokenStream) -> PathExpression:
    first_token = stream.peek()
    leading_colon = False
    if stream.check(TokenType.COLON):
        stream.consume(TokenType.COLON, "`::`")
        stream.consume(TokenType.COLON, "`::`")
        leading_colon = True

    last = stream.consume_ident()
    segments = [last.lexeme]
    separators: List[str] = []

    while True:
        cursor = stream.cursor
        if cursor.punct(":") and cursor.advance().punct(":"):
            stream.seek(cursor.advance(2))
            separators.append("::")
        elif cursor.punct("."):
            stream.seek(cursor.advance())
            separators.append(".")
        else:
            break
        last = stream.consume_ident()
        segments.append(last.lexeme)

    return PathExpression(segments, separators, leading_colon, span_of(first_token, last))


# ============================================================================
# Property list
# ============================================================================

def parse_property_label(stream: TokenStream) -> PropertyLabel:
    step = peek_dashed_name(stream.cursor)
    if step is None:
        token = stream.peek()
        if token is None:
            raise stream.error_eof("property name")
        raise create_unexpected_token_error("property name", token)
    parts, cursor = step
    stream.seek(cursor)
    return PropertyLabel(parts[0], parts[1:], span_of(parts[0], parts[-1]))


def parse_property(stream: TokenStream) -> Property:
    """Parse `label = value` plus an optional trailing comma."""
    label = parse_property_label(stream)
    stream.consume(TokenType.ASSIGN, "`=`")
    value = parse_expression(stream)
    # backwards compat
    stream.match(TokenType.COMMA)
    return Property(label, value, SourceSpan(label.span.start, value.span.end))


def parse_property_list(stream: TokenStream, config: CompilerConfig = DEFAULT_CONFIG) -> PropertyList:
    """
    Parse property declarations until the input stops looking like one.

    Raises:
        ParseError: RESERVED_LABEL, QUALIFIED_LABEL or DUPLICATE_LABEL
    """
    start_location = stream.location
    props: List[Property] = []
    while peek_property(stream.cursor):
        props.append(parse_property(stream))

    seen: Dict[str, Property] = {}
    for prop in props:
        label = prop.label
        if label.text == config.reserved_label:
            raise create_reserved_label_error(label.name, label.span, config.reserved_label)
        if not label.is_plain:
            raise create_qualified_label_error(label.name, label.span, label.text)
        if label.text in seen and config.duplicate_labels == "error":
            raise create_duplicate_label_error(label.name, label.span, label.text,
                                               seen[label.text].label.span.start)
        seen[label.text] = prop

    if len(seen) != len(props):
        props = _drop_overridden(stream, props, seen)

    # alphabetize
    props = sorted(props, key=lambda prop: prop.label.text)

    if props:
        span = SourceSpan(min((p.span.start for p in props), key=lambda loc: loc.offset),
                          max((p.span.end for p in props), key=lambda loc: loc.offset))
    else:
        span = SourceSpan(start_location, start_location)

    logger.debug("parsed property list %s", [prop.label.text for prop in props])
    return PropertyList(props, span)


def _drop_overridden(stream: TokenStream, props: List[Property],
                     winners: Dict[str, Property]) -> List[Property]:
    """Keep only the last declaration of each label, warning about the rest."""
    kept = []
    for prop in props:
        winner = winners[prop.label.text]
        if prop is winner:
            kept.append(prop)
        else:
            stream.warn(create_overridden_label_warning(
                prop.label.name, prop.label.span, prop.label.text, winner.label.span.start
            ))
    return kept


# ============================================================================
# Property delegate
# ============================================================================

def parse_property_delegate(stream: TokenStream, config: CompilerConfig = DEFAULT_CONFIG) -> PropertyDelegate:
    """
    Parse `with name` plus an optional trailing comma.

    Raises:
        ParseError: DELEGATE_KEYWORD_MISMATCH if the keyword is missing
    """
    keyword = stream.consume_ident(f"`{config.delegate_keyword}`")
    if keyword.lexeme != config.delegate_keyword:
        raise create_delegate_keyword_error(keyword, config.delegate_keyword)

    name = stream.consume_ident()
    stream.match(TokenType.COMMA)

    logger.debug("parsed property delegate %s", name.lexeme)
    return PropertyDelegate(name, span_of(keyword, name))
