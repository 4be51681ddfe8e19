"""
Test suite for construction IR emission.

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
from markupc.parser import ComponentParser, TokenStream
from markupc.analyzer import SchemaRegistry, ConversionKind
from markupc.ir import (
    Emitter, PropertiesBuilder, DefaultProperties, DelegateProperties,
    IRNodeType, render_tokens
)


SCHEMA = {
    "components": {
        "app::Button": {
            "properties": "ButtonProps",
            "fields": {
                "label": "String",
                "count": "i32",
                "onclick": "Option<Callback<ClickEvent>>",
                "theme": "Theme",
                "disabled": "bool",
            },
        },
    },
    "aliases": {"Button": "app::Button"},
}


class TestEmitter(unittest.TestCase):

    def setUp(self):
        self.registry = SchemaRegistry.from_dict(SCHEMA)

    def _emit(self, source: str, config: CompilerConfig = None):
        stream = TokenStream.from_tokens(tokenize_string(source))
        component = ComponentParser(config).parse(stream)
        return Emitter(self.registry, config).emit(component)

    def test_property_list_builds_properties(self):
        result = self._emit('<Button label="Save" count=3 />')
        properties = result.construction.properties

        self.assertTrue(result.ok)
        self.assertIsInstance(properties, PropertiesBuilder)
        self.assertEqual(properties.labels, ["count", "label"])
        self.assertEqual(
            [s.conversion.kind for s in properties.setters],
            [ConversionKind.IDENTITY, ConversionKind.OWNED_STRING]
        )
        self.assertEqual(
            properties.to_source(),
            "Button.Properties.builder().count(3).label(str('Save')).build()"
        )

    def test_rendered_component(self):
        result = self._emit('<Button label="Save" count=3 />')

        self.assertEqual(
            result.to_source(),
            "__vcomp_scope = vdom.ScopeHolder()\n"
            "vdom.VNode.VComp(vdom.VComp.new(Button, "
            "Button.Properties.builder().count(3).label(str('Save')).build(), __vcomp_scope))"
        )
        self.assertEqual(result.construction.node_type, IRNodeType.COMPONENT)
        self.assertEqual(result.construction.get_metadata("properties_type"), "ButtonProps")

    def test_no_props_uses_default(self):
        result = self._emit("<Button />")
        properties = result.construction.properties

        self.assertIsInstance(properties, DefaultProperties)
        self.assertEqual(properties.node_type, IRNodeType.DEFAULT_PROPERTIES)
        self.assertEqual(properties.to_source(), "Button.Properties.builder().build()")

    def test_delegate_is_used_verbatim(self):
        result = self._emit("<Button with props />")

        self.assertIsInstance(result.construction.properties, DelegateProperties)
        self.assertIn("vdom.VComp.new(Button, props, __vcomp_scope)", result.to_source())

    def test_qualified_type_and_callback(self):
        result = self._emit("<app::Button onclick={on_click} />")

        self.assertEqual(
            result.construction.properties.to_source(),
            "app.Button.Properties.builder()"
            ".onclick(vdom.VComp.callback(__vcomp_scope, (on_click))).build()"
        )

    def test_generic_conversion(self):
        result = self._emit("<Button theme=ctx::theme />")
        setter = result.construction.properties.setters[0]

        self.assertEqual(setter.conversion.kind, ConversionKind.GENERIC)
        self.assertEqual(setter.render_value(), "vdom.VComp.transform(__vcomp_scope, ctx.theme)")

    def test_runtime_names_from_config(self):
        config = CompilerConfig(runtime_module="", scope_variable="scope")
        result = self._emit("<Button />", config)

        self.assertEqual(
            result.to_source(),
            "scope = ScopeHolder()\n"
            "VNode.VComp(VComp.new(Button, Button.Properties.builder().build(), scope))"
        )

    def test_nothing_is_built_when_validation_fails(self):
        result = self._emit("<Button colour=1 />")

        self.assertFalse(result.ok)
        self.assertIsNone(result.construction)
        self.assertIsNone(result.to_source())
        self.assertEqual(result.validation.errors[0].code, "S010")

    def test_comparison_blocks_emit_valid_python(self):
        cases = [
            ("<Button disabled={a == b} />", "(a == b)"),
            ("<Button disabled={count >= 3} />", "(count >= 3)"),
            ("<Button disabled={a != b} />", "(a != b)"),
            ("<Button disabled={x<=y} />", "(x<=y)"),
        ]
        for source, rendered in cases:
            with self.subTest(source=source):
                result = self._emit(source)
                emitted = result.to_source()

                self.assertIn(rendered, emitted)
                compile(emitted, "<markup>", "exec")


class TestRenderTokens(unittest.TestCase):

    def test_call_with_path(self):
        tokens = tokenize_string('a::b(1, "x")')[:-1]
        self.assertEqual(render_tokens(tokens), "a.b(1, 'x')")

    def test_operators_are_spaced(self):
        tokens = tokenize_string("count + 1")[:-1]
        self.assertEqual(render_tokens(tokens), "count + 1")

    def test_attribute_access(self):
        tokens = tokenize_string("self.items[0]")[:-1]
        self.assertEqual(render_tokens(tokens), "self.items[0]")

    def test_adjacent_punctuation_is_joined(self):
        tokens = tokenize_string("x>=1 and y!=2")[:-1]
        self.assertEqual(render_tokens(tokens), "x>=1 and y!=2")


if __name__ == '__main__':
    unittest.main()
