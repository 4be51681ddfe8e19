"""
Test suite for the component tag parser.

Tests cover:
- Type paths and the three property forms
- Canonical property order
- Reserved, qualified and duplicate labels
- Malformed tags and unexpected end of input inside a tag

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from markupc.config import CompilerConfig
from markupc.lexer import tokenize_string
from markupc.parser import (
    ComponentParser, TokenStream, ParseError, ParseErrorKind, PropsKind,
    PropertyList, PropertyDelegate, BlockExpression, CallExpression, Literal,
    parse_component, parse_tag_suffix
)
from markupc.lexer import TokenType


class ComponentParserTestCase(unittest.TestCase):

    def _parse(self, source: str, config: CompilerConfig = None):
        stream = TokenStream.from_tokens(tokenize_string(source))
        return ComponentParser(config).parse(stream)

    def _parse_error(self, source: str, config: CompilerConfig = None) -> ParseError:
        with self.assertRaises(ParseError) as ctx:
            self._parse(source, config)
        return ctx.exception


class TestComponentTags(ComponentParserTestCase):
    """Successful parses."""

    def test_no_props(self):
        component = self._parse("<Foo />")

        self.assertEqual(component.type_path.path, "Foo")
        self.assertIsNone(component.props)
        self.assertIsNone(component.props_kind)

    def test_no_space_before_close(self):
        self.assertEqual(self._parse("<Foo/>").type_path.name, "Foo")

    def test_qualified_type(self):
        component = self._parse("<a::b::Foo />")
        self.assertEqual(component.type_path.segment_names, ["a", "b", "Foo"])
        self.assertFalse(component.type_path.leading_colon)

    def test_leading_colon(self):
        component = self._parse("<::Foo />")
        self.assertTrue(component.type_path.leading_colon)
        self.assertEqual(component.type_path.path, "::Foo")

    def test_legacy_colon_after_type(self):
        component = self._parse("<Foo: a=1 />")
        self.assertEqual(component.props.labels, ["a"])

    def test_delegate(self):
        component = self._parse("<Foo with bag />")

        self.assertIsInstance(component.props, PropertyDelegate)
        self.assertEqual(component.props.text, "bag")
        self.assertEqual(component.props_kind, PropsKind.DELEGATE)

    def test_delegate_trailing_comma(self):
        component = self._parse("<Foo with bag, />")
        self.assertEqual(component.props.text, "bag")

    def test_property_list_is_sorted(self):
        first = self._parse("<Foo a=1 b=2 />")
        second = self._parse("<Foo b=2 a=1 />")

        self.assertEqual(first.props.labels, ["a", "b"])
        self.assertEqual(second.props.labels, ["a", "b"])
        self.assertEqual(second.props.as_dict()["a"].value, 1)
        self.assertEqual(second.props.as_dict()["b"].value, 2)

    def test_sorting_is_idempotent(self):
        component = self._parse('<Foo zeta=1, alpha="x", mid={y} />')
        labels = component.props.labels

        self.assertEqual(labels, ["alpha", "mid", "zeta"])
        self.assertEqual(sorted(labels), labels)

    def test_value_forms(self):
        component = self._parse(
            '<Foo label="Save" n=-3 ok=true onclick={move |_| Msg::Click} cb=link.callback(x) />'
        )
        values = component.props.as_dict()

        self.assertEqual(values["label"].value, "Save")
        self.assertEqual(values["n"].value, -3)
        self.assertIs(values["ok"].value, True)
        self.assertIsInstance(values["onclick"], BlockExpression)
        self.assertIsInstance(values["cb"], CallExpression)
        self.assertEqual(values["cb"].callee.text, "link.callback")

    def test_stream_is_left_after_tag(self):
        stream = TokenStream.from_tokens(tokenize_string("<Foo /> rest"))
        parse_component(stream)
        self.assertEqual(stream.peek().lexeme, "rest")

    def test_tag_suffix_keeps_arrow(self):
        stream = TokenStream.from_tokens(tokenize_string("<Fn -> X />"))
        stream.advance()
        suffix = parse_tag_suffix(stream)

        self.assertEqual(suffix.div.type, TokenType.SLASH)
        self.assertEqual(len(suffix.stream.until(suffix.stream.advance(10))), 4)

    def test_nested_angle_brackets(self):
        stream = TokenStream.from_tokens(tokenize_string("<Foo<T> />"))
        stream.advance()
        suffix = parse_tag_suffix(stream)

        self.assertIsNotNone(suffix.div)
        self.assertTrue(stream.is_at_end())


class TestComponentErrors(ComponentParserTestCase):
    """Every error kind the component parser reports."""

    def test_not_self_closed(self):
        err = self._parse_error("<Foo>")

        self.assertEqual(err.kind, ParseErrorKind.MALFORMED_TAG)
        self.assertEqual(err.message, "expected component tag be of form `< .. />`")
        self.assertEqual(err.diagnostic.code, "P020")
        self.assertEqual(err.span.start.offset, 0)
        self.assertEqual(err.span.end.offset, 5)

    def test_missing_value_is_reported_at_slash(self):
        err = self._parse_error("<Foo a= />")

        self.assertEqual(err.kind, ParseErrorKind.UNEXPECTED_EOF)
        self.assertEqual(err.message, "unexpected end of input, expected expression")
        self.assertEqual(err.location.offset, 8)
        self.assertEqual(err.location.column, 9)
        self.assertEqual(err.token.type, TokenType.SLASH)

    def test_missing_delegate_name_is_reported_at_slash(self):
        err = self._parse_error("<Foo with />")

        self.assertEqual(err.kind, ParseErrorKind.UNEXPECTED_EOF)
        self.assertEqual(err.token.lexeme, "/")

    def test_unterminated_tag(self):
        err = self._parse_error("<Foo a=1")
        self.assertEqual(err.kind, ParseErrorKind.UNEXPECTED_EOF)

    def test_unclosed_block(self):
        err = self._parse_error("<Foo a={1 />")

        self.assertEqual(err.kind, ParseErrorKind.UNCLOSED_DELIMITER)
        self.assertEqual(err.diagnostic.code, "P004")
        self.assertEqual(err.token.lexeme, "{")

    def test_reserved_label(self):
        err = self._parse_error('<Foo type="button" />')

        self.assertEqual(err.kind, ParseErrorKind.RESERVED_LABEL)
        self.assertEqual(err.message, "expected identifier")
        self.assertEqual(err.span.start.offset, 5)

    def test_reserved_label_anywhere_in_list(self):
        err = self._parse_error('<Foo a=1 b=2 type="x" />')
        self.assertEqual(err.kind, ParseErrorKind.RESERVED_LABEL)

    def test_qualified_label(self):
        err = self._parse_error("<Foo data-id=1 />")

        self.assertEqual(err.kind, ParseErrorKind.QUALIFIED_LABEL)
        self.assertEqual(err.message, "expected identifier")
        self.assertEqual(err.span.end.offset, 12)

    def test_duplicate_label(self):
        err = self._parse_error("<Foo a=1 a=2 />")

        self.assertEqual(err.kind, ParseErrorKind.DUPLICATE_LABEL)
        self.assertEqual(err.location.offset, 9)

    def test_trailing_tokens(self):
        err = self._parse_error("<Foo a=1 2 />")

        self.assertEqual(err.kind, ParseErrorKind.UNEXPECTED_TOKEN)
        self.assertEqual(err.message, "unexpected token `2`")

    def test_non_property_after_type(self):
        err = self._parse_error("<Foo 1 />")
        self.assertEqual(err.message, "unexpected token `1`")


class TestParserConfig(ComponentParserTestCase):
    """Configurable words and policies."""

    def test_last_wins_keeps_last_declaration(self):
        config = CompilerConfig(duplicate_labels="last_wins")
        parser = ComponentParser(config)
        stream = TokenStream.from_tokens(tokenize_string("<Foo a=1 b=0 a=2 />"))
        component = parser.parse(stream)

        self.assertEqual(component.props.labels, ["a", "b"])
        self.assertEqual(component.props.as_dict()["a"].value, 2)
        self.assertEqual(len(parser.warnings), 1)
        self.assertEqual(parser.warnings[0].diagnostic.code, "P030")

    def test_custom_reserved_label(self):
        config = CompilerConfig(reserved_label="kind")

        self.assertEqual(self._parse("<Foo type=1 />", config).props.labels, ["type"])
        err = self._parse_error("<Foo kind=1 />", config)
        self.assertEqual(err.kind, ParseErrorKind.RESERVED_LABEL)

    def test_custom_delegate_keyword(self):
        config = CompilerConfig(delegate_keyword="using")
        component = self._parse("<Foo using bag />", config)

        self.assertIsInstance(component.props, PropertyDelegate)
        self.assertIsInstance(self._parse("<Foo with=1 />", config).props, PropertyList)


if __name__ == '__main__':
    unittest.main()
