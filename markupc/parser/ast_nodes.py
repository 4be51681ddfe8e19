"""
Abstract Syntax Tree node definitions for markupc component tags.

Each node carries a source span and supports the visitor pattern. Nodes are
built once per parsed tag and are not mutated afterwards.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any, Union, Dict, Tuple
from dataclasses import dataclass
from enum import Enum
import uuid

from ..lexer.tokens import SourceLocation, SourceSpan, Token, TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    COMPONENT_TAG = "ComponentTag"
    TYPE_PATH = "TypePath"

    # Properties
    PROPERTY_LABEL = "PropertyLabel"
    PROPERTY = "Property"
    PROPERTY_LIST = "PropertyList"
    PROPERTY_DELEGATE = "PropertyDelegate"

    # Expressions
    LITERAL = "Literal"
    PATH_EXPRESSION = "PathExpression"
    CALL_EXPRESSION = "CallExpression"
    BLOCK_EXPRESSION = "BlockExpression"


class PropsKind(Enum):
    """Which property form a component tag uses."""
    LIST = "list"
    DELEGATE = "with"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, span: SourceSpan):
        self.node_type = node_type
        self.span = span
        self.parent: Optional['ASTNode'] = None
        # Generate unique ID for hashability
        self._id = uuid.uuid4()

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def set_parent(self, parent: 'ASTNode'):
        self.parent = parent

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.span}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(span={self.span})"

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return self._id == other._id


def span_of(first: Token, last: Token) -> SourceSpan:
    """Span from the start of `first` to the end of `last`."""
    return SourceSpan(first.location, last.span.end)


# ============================================================================
# Type paths
# ============================================================================

class TypePath(ASTNode):
    """Possibly qualified component type reference (e.g. `a::B::C`)."""
    segments: List[Token]
    leading_colon: bool

    def __init__(self, segments: List[Token], leading_colon: bool, span: SourceSpan):
        super().__init__(ASTNodeType.TYPE_PATH, span)
        if not segments:
            raise ValueError("a type path needs at least one segment")
        self.segments = segments
        self.leading_colon = leading_colon

    @property
    def segment_names(self) -> List[str]:
        return [segment.lexeme for segment in self.segments]

    @property
    def name(self) -> str:
        """Final segment, the type's own name."""
        return self.segments[-1].lexeme

    @property
    def path(self) -> str:
        prefix = "::" if self.leading_colon else ""
        return prefix + "::".join(self.segment_names)

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"TypePath({self.path!r})"


# ============================================================================
# Expressions (property values)
# ============================================================================

class Expression(ASTNode):
    """Base class for property value expressions."""
    pass


class Literal(Expression):
    """Literal value expression."""
    value: Any
    literal_type: str  # "string", "integer", "float", "boolean"

    def __init__(self, value: Any, literal_type: str, span: SourceSpan):
        super().__init__(ASTNodeType.LITERAL, span)
        self.value = value
        self.literal_type = literal_type

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"


LITERAL_TYPE_NAMES = {
    TokenType.STRING: "string",
    TokenType.INTEGER: "integer",
    TokenType.FLOAT: "float",
    TokenType.TRUE: "boolean",
    TokenType.FALSE: "boolean",
}


class PathExpression(Expression):
    """Reference to a value by path, e.g. `count`, `self::link`, `state.title`."""
    segments: List[str]
    separators: List[str]  # "::" or "." between consecutive segments

    def __init__(self, segments: List[str], separators: List[str], leading_colon: bool,
                 span: SourceSpan):
        super().__init__(ASTNodeType.PATH_EXPRESSION, span)
        self.segments = segments
        self.separators = separators
        self.leading_colon = leading_colon

    @property
    def text(self) -> str:
        parts = ["::" if self.leading_colon else "", self.segments[0]]
        for separator, segment in zip(self.separators, self.segments[1:]):
            parts.append(separator)
            parts.append(segment)
        return "".join(parts)

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"PathExpression({self.text!r})"


class CallExpression(Expression):
    """Path followed by a parenthesized argument group, kept verbatim."""
    callee: PathExpression
    arguments: Tuple[Token, ...]

    def __init__(self, callee: PathExpression, arguments: Tuple[Token, ...], span: SourceSpan):
        super().__init__(ASTNodeType.CALL_EXPRESSION, span)
        self.callee = callee
        self.arguments = arguments
        callee.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.callee]


class BlockExpression(Expression):
    """Brace-delimited expression `{ ... }`; inner tokens are kept verbatim."""
    tokens: Tuple[Token, ...]

    def __init__(self, tokens: Tuple[Token, ...], span: SourceSpan):
        super().__init__(ASTNodeType.BLOCK_EXPRESSION, span)
        self.tokens = tokens

    def children(self) -> List[ASTNode]:
        return []


# ============================================================================
# Properties
# ============================================================================

class PropertyLabel(ASTNode):
    """Dashed property name; anything after the first identifier is the extended part."""
    name: Token
    extended: List[Token]

    def __init__(self, name: Token, extended: List[Token], span: SourceSpan):
        super().__init__(ASTNodeType.PROPERTY_LABEL, span)
        self.name = name
        self.extended = extended

    @property
    def text(self) -> str:
        return "-".join([self.name.lexeme] + [part.lexeme for part in self.extended])

    @property
    def is_plain(self) -> bool:
        return not self.extended

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.text


class Property(ASTNode):
    """One `label=value` declaration."""
    label: PropertyLabel
    value: Expression

    def __init__(self, label: PropertyLabel, value: Expression, span: SourceSpan):
        super().__init__(ASTNodeType.PROPERTY, span)
        self.label = label
        self.value = value
        label.set_parent(self)
        value.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.label, self.value]

    def __repr__(self) -> str:
        return f"Property({self.label.text}={self.value!r})"


class PropertyList(ASTNode):
    """Property declarations in canonical (label-sorted) order."""
    properties: List[Property]

    def __init__(self, properties: List[Property], span: SourceSpan):
        super().__init__(ASTNodeType.PROPERTY_LIST, span)
        self.properties = properties
        for prop in properties:
            prop.set_parent(self)

    @property
    def labels(self) -> List[str]:
        return [prop.label.text for prop in self.properties]

    def as_dict(self) -> Dict[str, Expression]:
        return {prop.label.text: prop.value for prop in self.properties}

    def __iter__(self):
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def children(self) -> List[ASTNode]:
        return list(self.properties)


class PropertyDelegate(ASTNode):
    """`with name`: a pre-built properties value used verbatim."""
    name: Token

    def __init__(self, name: Token, span: SourceSpan):
        super().__init__(ASTNodeType.PROPERTY_DELEGATE, span)
        self.name = name

    @property
    def text(self) -> str:
        return self.name.lexeme

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"PropertyDelegate({self.text!r})"


PropertySpec = Optional[Union[PropertyList, PropertyDelegate]]


# ============================================================================
# Component tag
# ============================================================================

class ComponentTag(ASTNode):
    """A parsed component tag: type reference plus optional property spec."""
    type_path: TypePath
    props: PropertySpec

    def __init__(self, type_path: TypePath, props: PropertySpec, span: SourceSpan):
        super().__init__(ASTNodeType.COMPONENT_TAG, span)
        self.type_path = type_path
        self.props = props
        type_path.set_parent(self)
        if props is not None:
            props.set_parent(self)

    @property
    def props_kind(self) -> Optional[PropsKind]:
        if isinstance(self.props, PropertyList):
            return PropsKind.LIST
        if isinstance(self.props, PropertyDelegate):
            return PropsKind.DELEGATE
        return None

    def children(self) -> List[ASTNode]:
        nodes: List[ASTNode] = [self.type_path]
        if self.props is not None:
            nodes.append(self.props)
        return nodes

    def __repr__(self) -> str:
        return f"ComponentTag({self.type_path.path!r}, props={self.props!r})"


@dataclass(frozen=True)
class TagBracket:
    """The `<` ... `>` pair of a tag, used to report malformed tags."""
    lt: Token
    gt: Token

    @property
    def span(self) -> SourceSpan:
        return span_of(self.lt, self.gt)

    @property
    def location(self) -> SourceLocation:
        return self.lt.location


# Alias for the parse result of one component tag
ComponentDescriptor = ComponentTag
