"""
markupc Analyzer Package

Implements static checking of component tags:
- Schema registry of component types and their properties
- Existence and component-contract checks on the tag's type
- Property label checks against the properties schema
- Explicit value conversions from property expressions to field types

Author: xwest
"""

from .schema import (
    SchemaRegistry, PropertiesSchema, FieldSpec, FieldType, TypeInfo, TypeKind
)
from .conversions import Conversion, ConversionKind, ValueConverter
from .validator import StaticValidator, ValidationReport
from .errors import SemanticError

__all__ = [
    # Validation
    "StaticValidator", "ValidationReport",

    # Schema model
    "SchemaRegistry", "PropertiesSchema", "FieldSpec", "FieldType", "TypeInfo", "TypeKind",

    # Conversions
    "Conversion", "ConversionKind", "ValueConverter",

    # Error handling
    "SemanticError",
]
