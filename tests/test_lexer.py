"""
Test suite for the markupc lexer.

Tests cover:
- Single-character punctuation (no operator merging)
- Literal values
- Source locations
- Error collection and reporting

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from markupc.lexer import Lexer, tokenize_string, TokenType, LexerError


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _types(self, source: str):
        return [token.type for token in tokenize_string(source)]

    def test_self_closing_tag(self):
        self.assertEqual(
            self._types("<Foo />"),
            [TokenType.LESS_THAN, TokenType.IDENTIFIER, TokenType.SLASH,
             TokenType.GREATER_THAN, TokenType.EOF]
        )

    def test_double_colon_is_two_tokens(self):
        self.assertEqual(
            self._types("a::B"),
            [TokenType.IDENTIFIER, TokenType.COLON, TokenType.COLON,
             TokenType.IDENTIFIER, TokenType.EOF]
        )

    def test_arrow_is_two_tokens(self):
        self.assertEqual(
            self._types("->"),
            [TokenType.MINUS, TokenType.GREATER_THAN, TokenType.EOF]
        )

    def test_literal_values(self):
        tokens = tokenize_string('"hi\\n" 1_000 3.5 true false')

        self.assertEqual(tokens[0].type, TokenType.STRING)
        self.assertEqual(tokens[0].value, "hi\n")
        self.assertEqual(tokens[0].lexeme, '"hi\\n"')
        self.assertEqual(tokens[1].value, 1000)
        self.assertEqual(tokens[2].type, TokenType.FLOAT)
        self.assertEqual(tokens[2].value, 3.5)
        self.assertIs(tokens[3].value, True)
        self.assertIs(tokens[4].value, False)

    def test_identifiers_are_not_keywords(self):
        tokens = tokenize_string("with type _x")
        self.assertTrue(all(t.type == TokenType.IDENTIFIER for t in tokens[:-1]))
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["with", "type", "_x"])

    def test_source_locations(self):
        tokens = tokenize_string("<Foo\n  a=1 />", filename="view.markup")
        label = tokens[2]

        self.assertEqual(label.lexeme, "a")
        self.assertEqual(label.location.filename, "view.markup")
        self.assertEqual(label.location.line, 2)
        self.assertEqual(label.location.column, 3)
        self.assertEqual(label.location.offset, 7)
        self.assertEqual(label.span.end.offset, 8)

    def test_comments_are_skipped(self):
        tokens = tokenize_string("/* a comment */ <A />")
        self.assertEqual(tokens[0].type, TokenType.LESS_THAN)
        self.assertEqual(len(tokens), 5)

    def test_errors_are_collected(self):
        lexer = Lexer("$ <A />")
        tokens = lexer.tokenize()

        self.assertTrue(lexer.has_errors())
        self.assertEqual(lexer.errors[0].diagnostic.code, "L001")
        self.assertEqual(tokens[0].type, TokenType.LESS_THAN)

    def test_tokenize_string_raises_first_error(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string('<A label="open />')

        self.assertEqual(ctx.exception.diagnostic.code, "L002")
        self.assertEqual(ctx.exception.diagnostic.location.offset, 9)

    def test_float_out_of_range(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize_string("<A size=1e999 />")

        self.assertEqual(ctx.exception.diagnostic.code, "L003")
        self.assertEqual(ctx.exception.diagnostic.location.offset, 8)

    def test_large_float_in_range(self):
        token = tokenize_string("1.5e300")[0]
        self.assertEqual(token.type, TokenType.FLOAT)
        self.assertEqual(token.value, 1.5e300)


if __name__ == '__main__':
    unittest.main()
