"""
Emitter for markupc component tags.

Turns a parsed ComponentTag into construction IR. Validation runs first as a
side channel; construction is only built when the tag validated cleanly, so
no code is ever emitted for a tag that would not type-check.

Author: xwest
"""

from dataclasses import dataclass
from typing import List, Optional

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..lexer.tokens import Token, TokenType
from ..log import get_logger
from ..parser.ast_nodes import (
    ASTNode, ASTVisitor, ComponentTag, Literal, PathExpression, CallExpression,
    BlockExpression, PropertyList, PropertyDelegate
)
from ..analyzer.schema import SchemaRegistry, PropertiesSchema
from ..analyzer.conversions import ValueConverter
from ..analyzer.validator import StaticValidator, ValidationReport
from .ir_nodes import (
    RuntimeNames, FieldSetter, PropertiesValue, PropertiesBuilder,
    DefaultProperties, DelegateProperties, ScopeHolderInit, ComponentNode,
    python_path
)

logger = get_logger(__name__)


@dataclass
class EmitResult:
    """Validation report plus the construction IR (None if validation failed)."""
    validation: ValidationReport
    construction: Optional[ComponentNode] = None

    @property
    def ok(self) -> bool:
        return self.construction is not None

    def to_source(self) -> Optional[str]:
        return self.construction.to_source() if self.construction is not None else None


def render_tokens(tokens: List[Token]) -> str:
    """
    Render a verbatim token group as Python source; `::` becomes `.`.

    Tokens adjacent in the source stay adjacent, so split punctuation such
    as `>` `=` comes back out as `>=`; any gap becomes a single space.
    """
    parts: List[str] = []
    previous_end = None
    index = 0
    while index < len(tokens):
        token = tokens[index]
        last = token
        if (token.type == TokenType.COLON and index + 1 < len(tokens)
                and tokens[index + 1].type == TokenType.COLON):
            text = "."
            last = tokens[index + 1]
            index += 1
        else:
            text = _token_text(token)
        index += 1

        if previous_end is not None and token.location.offset != previous_end:
            parts.append(" ")
        parts.append(text)
        previous_end = last.span.end.offset

    return "".join(parts)


def _token_text(token: Token) -> str:
    if token.type == TokenType.STRING:
        return repr(token.value)
    if token.type in (TokenType.TRUE, TokenType.FALSE):
        return repr(token.value)
    return token.lexeme


class ExpressionRenderer(ASTVisitor):
    """Renders property value expressions as Python source."""

    def visit(self, node: ASTNode) -> str:
        if isinstance(node, Literal):
            return repr(node.value)
        if isinstance(node, PathExpression):
            return python_path(node.text)
        if isinstance(node, CallExpression):
            return f"{self.visit(node.callee)}({render_tokens(list(node.arguments))})"
        if isinstance(node, BlockExpression):
            return f"({render_tokens(list(node.tokens))})"
        raise TypeError(f"cannot render {node!r} as a property value")


class Emitter:
    """
    Builds construction IR for component tags.

    The emitter performs the following steps:
    - Validates the tag against the schema registry
    - Resolves one conversion per declared property
    - Chooses builder, delegate, or default properties
    - Wraps the properties with a fresh scope holder in a component node
    """

    def __init__(self, registry: SchemaRegistry, config: Optional[CompilerConfig] = None):
        self.registry = registry
        self.config = config or DEFAULT_CONFIG
        self.validator = StaticValidator(registry, self.config)
        self.converter = ValueConverter()
        self.renderer = ExpressionRenderer()
        self.names = RuntimeNames(self.config.runtime_module, self.config.scope_variable)

    def emit(self, component: ComponentTag) -> EmitResult:
        report = self.validator.validate(component)
        if report.has_errors:
            logger.debug("skipping construction of %s: validation failed",
                         component.type_path.path)
            return EmitResult(report)

        schema = report.type_info.properties
        properties = self._build_properties(component, schema)
        node = ComponentNode(component.type_path.path, properties,
                             ScopeHolderInit(self.names), self.names)
        node.set_metadata("properties_type", schema.name)
        logger.debug("emitted %r", node)
        return EmitResult(report, node)

    def _build_properties(self, component: ComponentTag, schema: PropertiesSchema) -> PropertiesValue:
        props = component.props
        component_type = component.type_path.path

        if isinstance(props, PropertyDelegate):
            return DelegateProperties(props.text, self.names)

        if isinstance(props, PropertyList):
            setters = []
            for prop in props:
                field_spec = schema.get(prop.label.text)
                conversion = self.converter.resolve(prop.value, field_spec.field_type)
                setters.append(FieldSetter(prop.label.text, prop.value.accept(self.renderer),
                                           conversion, self.names))
            return PropertiesBuilder(component_type, setters, self.names)

        return DefaultProperties(component_type, self.names)
