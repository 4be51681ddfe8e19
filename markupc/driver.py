"""
Compilation driver for a single component tag.

    result = compile_component('<Button label="Save" />', registry)
    print(result.source)

Runs lexer -> classifier -> parser -> validator -> emitter. A tag that does
not classify as a component returns None so the caller can hand it to the
element parser instead.

Author: xwest
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .config import CompilerConfig, DEFAULT_CONFIG
from .lexer import tokenize_string
from .log import get_logger
from .parser import ComponentParser, ComponentTag, ParseWarning, TokenStream, peek_component
from .parser.errors import create_trailing_token_error
from .analyzer import SchemaRegistry, ValidationReport
from .ir import ComponentNode, Emitter

logger = get_logger(__name__)


@dataclass
class CompilationResult:
    """Everything produced while compiling one component tag."""
    component: ComponentTag
    validation: ValidationReport
    construction: ComponentNode
    warnings: List[ParseWarning] = field(default_factory=list)

    @property
    def source(self) -> str:
        return self.construction.to_source()


def compile_component(
    source: str,
    registry: SchemaRegistry,
    filename: Optional[str] = None,
    config: Optional[CompilerConfig] = None
) -> Optional[CompilationResult]:
    """
    Compile one component tag to construction IR.

    Returns:
        CompilationResult, or None if the source does not start with a
        component tag

    Raises:
        LexerError: on invalid characters, unterminated strings or bad numbers
        ParseError: on malformed tags or property declarations
        SemanticError: the first validation error
    """
    config = config or DEFAULT_CONFIG
    filename = filename or config.filename

    tokens = tokenize_string(source, filename)
    stream = TokenStream.from_tokens(tokens)
    if not peek_component(stream.cursor):
        logger.debug("%s: not a component tag", filename)
        return None

    parser = ComponentParser(config)
    component = parser.parse(stream)
    if not stream.is_at_end():
        raise create_trailing_token_error(stream.peek())

    emitted = Emitter(registry, config).emit(component)
    emitted.validation.raise_first()

    return CompilationResult(component, emitted.validation, emitted.construction,
                             list(parser.warnings))
