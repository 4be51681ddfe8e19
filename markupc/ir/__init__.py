"""
markupc Construction IR Package

Construction IR for component tags and the emitter that builds it.

Author: xwest
"""

from .ir_nodes import (
    IRNode, IRNodeType, RuntimeNames, FieldSetter, PropertiesValue, PropertiesBuilder,
    DefaultProperties, DelegateProperties, ScopeHolderInit, ComponentNode, python_path
)
from .ir_generator import Emitter, EmitResult, ExpressionRenderer, render_tokens

__all__ = [
    # Emitter
    "Emitter", "EmitResult", "ExpressionRenderer", "render_tokens",

    # IR nodes
    "IRNode", "IRNodeType", "RuntimeNames", "FieldSetter", "PropertiesValue",
    "PropertiesBuilder", "DefaultProperties", "DelegateProperties",
    "ScopeHolderInit", "ComponentNode", "python_path",
]
