"""
Tag suffix collection shared by element and component tags.

After the opening `<` has been consumed, collects the interior tokens up to
the `>` that closes the tag and reports whether the tag was self-closed.

Author: xwest
"""

from dataclasses import dataclass
from typing import Optional

from ..lexer.tokens import Token, TokenType, GROUP_DELIMITERS
from .cursor import Cursor
from .stream import TokenStream, group_error
from .errors import create_unexpected_eof_error


@dataclass(frozen=True)
class TagSuffix:
    """Interior tokens of a tag plus its closing punctuation."""
    stream: Cursor          # bounded cursor over the interior
    div: Optional[Token]    # `/` of a self-closing `/>`
    gt: Token               # closing `>`


def parse_tag_suffix(stream: TokenStream) -> TagSuffix:
    """
    Collect a tag's interior.

    Nested `<`/`>` pairs (generic arguments, comparisons) are counted, balanced
    (), [] and {} groups are skipped whole, `->` is never taken as a closing
    bracket, and `/` directly followed by `>` at the top level marks a
    self-closing tag.
    """
    start = stream.cursor
    cursor = start
    angle_count = 1

    while True:
        token = cursor.token()
        if token is None:
            raise create_unexpected_eof_error("`>`", cursor.location)

        if token.type in GROUP_DELIMITERS:
            after = cursor.skip_group()
            if after is None:
                raise group_error(cursor)
            cursor = after
            continue

        following = cursor.advance().token()
        is_gt_next = following is not None and following.type == TokenType.GREATER_THAN

        if token.type == TokenType.GREATER_THAN:
            angle_count -= 1
            if angle_count == 0:
                stream.seek(cursor.advance())
                return TagSuffix(start.bounded(cursor), None, token)
        elif token.type == TokenType.LESS_THAN:
            angle_count += 1
        elif token.type == TokenType.SLASH and angle_count == 1 and is_gt_next:
            stream.seek(cursor.advance(2))
            return TagSuffix(start.bounded(cursor), token, following)
        elif token.type == TokenType.MINUS and is_gt_next:
            # `->` stays in the interior
            cursor = cursor.advance(2)
            continue

        cursor = cursor.advance()

