"""
Static validation of parsed component tags.

Checks a ComponentTag against the schema registry without building anything:

1. the tag's type path resolves to a registered type
2. that type is a component (it has a properties schema)
3. for the property list form, every label is a field of that schema

All problems are collected into a ValidationReport; nothing is raised unless
the caller asks for it with `raise_first()`.

Author: xwest
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..lexer.errors import ErrorRecovery
from ..log import get_logger
from ..parser.ast_nodes import ComponentTag, PropertyList
from .schema import SchemaRegistry, TypeInfo
from .errors import (
    SemanticError, create_unknown_type_error,
    create_not_a_component_error, create_unknown_property_error
)

logger = get_logger(__name__)


@dataclass
class ValidationReport:
    """Outcome of validating one component tag."""
    component: ComponentTag
    type_info: Optional[TypeInfo] = None
    errors: List[SemanticError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_first(self) -> None:
        """Raise the first collected error, if any."""
        if self.errors:
            raise self.errors[0]


class StaticValidator:
    """Type-checks component tags against a SchemaRegistry."""

    def __init__(self, registry: SchemaRegistry, config: Optional[CompilerConfig] = None):
        self.registry = registry
        self.config = config or DEFAULT_CONFIG

    def validate(self, component: ComponentTag) -> ValidationReport:
        report = ValidationReport(component)
        type_path = component.type_path

        info = self.registry.lookup(type_path.path)
        if info is None:
            similar = ErrorRecovery.suggest_similar(type_path.path, self.registry.known_paths)
            report.errors.append(create_unknown_type_error(type_path, similar))
        elif not info.is_component:
            report.errors.append(create_not_a_component_error(type_path, info.kind.value))
        else:
            report.type_info = info
            if isinstance(component.props, PropertyList):
                self._check_labels(component.props, info, report)

        logger.debug("validated %s: %d error(s)", type_path.path, len(report.errors))
        return report

    def _check_labels(self, props: PropertyList, info: TypeInfo, report: ValidationReport):
        schema = info.properties
        for prop in props:
            label = prop.label
            if schema.has_field(label.text):
                continue
            similar = ErrorRecovery.suggest_similar(label.text, schema.field_names)
            report.errors.append(create_unknown_property_error(label, schema.name, similar))
