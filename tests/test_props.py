"""
Property parser tests: expressions, property lists and delegates parsed from
tag interiors.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from markupc.config import CompilerConfig, DEFAULT_CONFIG
from markupc.lexer import tokenize_string
from markupc.parser import (
    ComponentParser, TokenStream, ParseError, ParseErrorKind, PropsKind,
    Literal, PathExpression, CallExpression, BlockExpression, PropertyDelegate,
    peek_property, peek_props_kind, parse_expression, parse_property_list,
    parse_property_delegate
)


def stream_for(source: str) -> TokenStream:
    return TokenStream.from_tokens(tokenize_string(source))


class TestExpressions(unittest.TestCase):

    def test_literals(self):
        self.assertEqual(parse_expression(stream_for('"s"')).literal_type, "string")
        self.assertEqual(parse_expression(stream_for("-1.5")).value, -1.5)
        self.assertEqual(parse_expression(stream_for("42")).literal_type, "integer")
        self.assertEqual(parse_expression(stream_for("false")).literal_type, "boolean")

    def test_block(self):
        expr = parse_expression(stream_for("{ a + b } rest"))

        self.assertIsInstance(expr, BlockExpression)
        self.assertEqual([t.lexeme for t in expr.tokens], ["a", "+", "b"])

    def test_paths(self):
        expr = parse_expression(stream_for("::std::x"))
        self.assertIsInstance(expr, PathExpression)
        self.assertEqual(expr.text, "::std::x")

        expr = parse_expression(stream_for("self.state::Msg"))
        self.assertEqual(expr.segments, ["self", "state", "Msg"])
        self.assertEqual(expr.text, "self.state::Msg")

    def test_call(self):
        expr = parse_expression(stream_for("f(1, 2) rest"))

        self.assertIsInstance(expr, CallExpression)
        self.assertEqual(expr.callee.text, "f")
        self.assertEqual([t.lexeme for t in expr.arguments], ["1", ",", "2"])

    def test_negative_non_number(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression(stream_for("-x"))
        self.assertEqual(ctx.exception.message, "expected number, found `x`")

    def test_not_an_expression(self):
        with self.assertRaises(ParseError) as ctx:
            parse_expression(stream_for("="))
        self.assertEqual(ctx.exception.message, "expected expression, found `=`")


class TestPropertyList(unittest.TestCase):

    def test_peek_property(self):
        self.assertTrue(peek_property(stream_for("a = 1").cursor))
        self.assertTrue(peek_property(stream_for("data-id=1").cursor))
        self.assertFalse(peek_property(stream_for("a 1").cursor))
        self.assertFalse(peek_property(stream_for("1 = 1").cursor))

    def test_stops_at_first_non_property(self):
        stream = stream_for('b="x", a=1 rest')
        props = parse_property_list(stream)

        self.assertEqual(props.labels, ["a", "b"])
        self.assertEqual(stream.peek().lexeme, "rest")

    def test_empty_list(self):
        stream = stream_for("123")
        props = parse_property_list(stream)

        self.assertEqual(len(props), 0)
        self.assertEqual(stream.peek().lexeme, "123")

    def test_stable_pairing(self):
        props = parse_property_list(stream_for("c=3 a=1 b=2"))
        self.assertEqual([(p.label.text, p.value.value) for p in props], [("a", 1), ("b", 2), ("c", 3)])

    def test_reserved_label_always_fails(self):
        for source in ("type=1", "a=1 type=2", "type=1 z=2"):
            with self.assertRaises(ParseError) as ctx:
                parse_property_list(stream_for(source))
            self.assertEqual(ctx.exception.kind, ParseErrorKind.RESERVED_LABEL)


class TestDelegate(unittest.TestCase):

    def test_props_kind(self):
        self.assertEqual(peek_props_kind(stream_for("with x").cursor), PropsKind.DELEGATE)
        self.assertEqual(peek_props_kind(stream_for("a=1").cursor), PropsKind.LIST)
        self.assertIsNone(peek_props_kind(stream_for("1").cursor))
        using = CompilerConfig(delegate_keyword="using")
        self.assertEqual(peek_props_kind(stream_for("using x").cursor, using), PropsKind.DELEGATE)

    def test_interior_with_delegate(self):
        parser = ComponentParser()
        for source in ("Foo with bag", "Foo with bag,"):
            component = parser.parse_inner(stream_for(source), None)
            self.assertIsInstance(component.props, PropertyDelegate)
            self.assertEqual(component.props.text, "bag")

    def test_keyword_mismatch(self):
        with self.assertRaises(ParseError) as ctx:
            parse_property_delegate(stream_for("other bag"), DEFAULT_CONFIG)

        self.assertEqual(ctx.exception.kind, ParseErrorKind.DELEGATE_KEYWORD_MISMATCH)
        self.assertEqual(ctx.exception.message, "expected to find `with` token")


if __name__ == '__main__':
    unittest.main()
