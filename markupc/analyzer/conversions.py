"""
Value conversion between property expressions and field types.

Every property value is assigned to a typed field of the component's
properties schema. Instead of leaving that conversion implicit, the converter
decides it up front so the emitted code states exactly what happens:

    label="Save"           into String                -> OWNED_STRING
    count=3                into i32                   -> IDENTITY
    title="x"              into Option<String>        -> OPTIONAL(OWNED_STRING)
    onclick={on_click}     into Callback<ClickEvent>  -> CALLBACK
    anything else                                     -> GENERIC

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..parser.ast_nodes import (
    Expression, Literal, PathExpression, CallExpression, BlockExpression
)
from .schema import FieldType


class ConversionKind(Enum):
    """How a property value becomes a field value."""
    IDENTITY = "identity"
    OWNED_STRING = "owned_string"
    OPTIONAL = "optional"
    CALLBACK = "callback"
    GENERIC = "generic"


@dataclass(frozen=True)
class Conversion:
    """A resolved conversion; OPTIONAL wraps the conversion of the inner value."""
    kind: ConversionKind
    target: FieldType
    inner: Optional['Conversion'] = None

    def __str__(self) -> str:
        if self.inner is not None:
            return f"{self.kind.value}({self.inner})"
        return f"{self.kind.value}->{self.target}"

    @property
    def is_identity(self) -> bool:
        return self.kind == ConversionKind.IDENTITY


# Field type names a literal can be assigned to unchanged
PRIMITIVE_TARGETS = {
    "string": frozenset({"str"}),
    "integer": frozenset({"int", "i8", "i16", "i32", "i64", "i128", "isize",
                          "u8", "u16", "u32", "u64", "u128", "usize"}),
    "float": frozenset({"float", "f32", "f64"}),
    "boolean": frozenset({"bool"}),
}

OWNED_STRING_TARGETS = frozenset({"String", "AttrValue", "Cow"})


class ValueConverter:
    """Resolves the conversion for a (value expression, field type) pair."""

    def resolve(self, expr: Expression, field_type: FieldType) -> Conversion:
        if field_type.is_optional:
            return Conversion(ConversionKind.OPTIONAL, field_type,
                              self.resolve(expr, field_type.inner))

        if field_type.is_callback and isinstance(
                expr, (BlockExpression, PathExpression, CallExpression)):
            return Conversion(ConversionKind.CALLBACK, field_type)

        if isinstance(expr, Literal):
            if expr.literal_type == "string" and field_type.name in OWNED_STRING_TARGETS:
                return Conversion(ConversionKind.OWNED_STRING, field_type)
            if field_type.name in PRIMITIVE_TARGETS.get(expr.literal_type, ()):
                return Conversion(ConversionKind.IDENTITY, field_type)

        return Conversion(ConversionKind.GENERIC, field_type)
