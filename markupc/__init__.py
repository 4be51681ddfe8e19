"""
markupc: Component Tag Compiler

Front end for component tags in a JSX-like markup language: classifies
`<Type ... />` tags as components, parses their properties, checks them
against a schema of component types, and emits construction code for the
virtual-tree runtime.

Architecture:
    markupc/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Tag classification and AST generation
    ├── analyzer/        # Schema registry and static validation
    ├── ir/              # Construction IR and emitter
    └── driver.py        # Single-tag compilation pipeline

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .config import CompilerConfig
from .lexer import Lexer
from .parser import classify, peek_component, parse_component, ComponentParser
from .analyzer import SchemaRegistry, StaticValidator
from .ir import Emitter
from .driver import compile_component, CompilationResult

__all__ = [
    # Pipeline
    "compile_component", "CompilationResult",

    # Core classes
    "Lexer",
    "ComponentParser",
    "StaticValidator",
    "Emitter",
    "SchemaRegistry",
    "CompilerConfig",

    # Classification and parsing
    "classify", "peek_component", "parse_component",

    # Version info
    "__version__",
]
