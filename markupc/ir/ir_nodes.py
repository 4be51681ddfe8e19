"""
markupc Construction IR Nodes

Describes what the emitted code for a component tag does, independent of how
it is rendered. A ComponentNode pairs a fresh scope holder with a properties
value and wraps both in a component virtual-tree node:

    ComponentNode
    ├── ScopeHolderInit
    └── PropertiesBuilder | DelegateProperties | DefaultProperties
            └── FieldSetter*   (label, rendered value, Conversion)

Every node renders itself to Python source with `to_source()`.

Author: xwest
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List
import uuid

from ..analyzer.conversions import Conversion, ConversionKind


class IRNodeType(Enum):
    """Enumeration of IR node types."""
    COMPONENT = "component"
    SCOPE_HOLDER = "scope_holder"
    PROPERTIES_BUILDER = "properties_builder"
    DELEGATE_PROPERTIES = "delegate_properties"
    DEFAULT_PROPERTIES = "default_properties"
    FIELD_SETTER = "field_setter"


def python_path(path: str) -> str:
    """Render a `::`-separated type path as a dotted Python name."""
    if path.startswith("::"):
        path = path[2:]
    return path.replace("::", ".")


class RuntimeNames:
    """Qualified names of the virtual-tree runtime used by emitted code."""

    def __init__(self, runtime_module: str = "vdom", scope_variable: str = "__vcomp_scope"):
        self.runtime_module = runtime_module
        self.scope_variable = scope_variable

    def qualify(self, name: str) -> str:
        if not self.runtime_module:
            return name
        return f"{self.runtime_module}.{name}"


class IRNode(ABC):
    """Base class for all IR nodes."""

    def __init__(self, node_type: IRNodeType, names: RuntimeNames):
        self.node_type = node_type
        self.names = names
        self.metadata: Dict[str, Any] = {}
        # Generate unique ID for hashability
        self._id = uuid.uuid4()

    @abstractmethod
    def to_source(self) -> str:
        pass

    def set_metadata(self, key: str, value: Any):
        """Set metadata for this node."""
        self.metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        """Get metadata for this node."""
        return self.metadata.get(key, default)

    def __str__(self) -> str:
        return self.to_source()

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IRNode):
            return False
        return self._id == other._id


class FieldSetter(IRNode):
    """Assignment of one property value to a field through its conversion."""

    def __init__(self, label: str, value: str, conversion: Conversion, names: RuntimeNames):
        super().__init__(IRNodeType.FIELD_SETTER, names)
        self.label = label
        self.value = value
        self.conversion = conversion

    def render_value(self) -> str:
        return self._convert(self.conversion)

    def _convert(self, conversion: Conversion) -> str:
        kind = conversion.kind
        if kind == ConversionKind.OPTIONAL:
            return self._convert(conversion.inner)
        if kind == ConversionKind.IDENTITY:
            return self.value
        if kind == ConversionKind.OWNED_STRING:
            return f"str({self.value})"
        scope = self.names.scope_variable
        if kind == ConversionKind.CALLBACK:
            return f"{self.names.qualify('VComp.callback')}({scope}, {self.value})"
        return f"{self.names.qualify('VComp.transform')}({scope}, {self.value})"

    def to_source(self) -> str:
        return f".{self.label}({self.render_value()})"

    def __repr__(self) -> str:
        return f"FieldSetter({self.label!r}, {self.value!r}, {self.conversion})"


class PropertiesValue(IRNode):
    """Base class for the properties argument of a component node."""
    pass


class PropertiesBuilder(PropertiesValue):
    """`Type.Properties.builder().a(..).b(..).build()`"""

    def __init__(self, component_type: str, setters: List[FieldSetter], names: RuntimeNames):
        super().__init__(IRNodeType.PROPERTIES_BUILDER, names)
        self.component_type = component_type
        self.setters = setters

    @property
    def labels(self) -> List[str]:
        return [setter.label for setter in self.setters]

    def to_source(self) -> str:
        chain = "".join(setter.to_source() for setter in self.setters)
        return f"{python_path(self.component_type)}.Properties.builder(){chain}.build()"


class DefaultProperties(PropertiesBuilder):
    """Builder with no setters, used when a tag declares no properties."""

    def __init__(self, component_type: str, names: RuntimeNames):
        super().__init__(component_type, [], names)
        self.node_type = IRNodeType.DEFAULT_PROPERTIES


class DelegateProperties(PropertiesValue):
    """A pre-built properties value passed through unchanged."""

    def __init__(self, name: str, names: RuntimeNames):
        super().__init__(IRNodeType.DELEGATE_PROPERTIES, names)
        self.name = name

    def to_source(self) -> str:
        return self.name


class ScopeHolderInit(IRNode):
    """Fresh scope holder shared by the component node and its callbacks."""

    def __init__(self, names: RuntimeNames):
        super().__init__(IRNodeType.SCOPE_HOLDER, names)

    @property
    def variable(self) -> str:
        return self.names.scope_variable

    def to_source(self) -> str:
        return f"{self.variable} = {self.names.qualify('ScopeHolder')}()"


class ComponentNode(IRNode):
    """Component virtual-tree node built from a type, its properties and a scope."""

    def __init__(self, component_type: str, properties: PropertiesValue,
                 scope: ScopeHolderInit, names: RuntimeNames):
        super().__init__(IRNodeType.COMPONENT, names)
        self.component_type = component_type
        self.properties = properties
        self.scope = scope

    @property
    def expression(self) -> str:
        vcomp = (f"{self.names.qualify('VComp')}.new({python_path(self.component_type)}, "
                 f"{self.properties.to_source()}, {self.scope.variable})")
        return f"{self.names.qualify('VNode')}.VComp({vcomp})"

    def to_source(self) -> str:
        return f"{self.scope.to_source()}\n{self.expression}"

    def __repr__(self) -> str:
        return f"ComponentNode({self.component_type!r}, {self.properties.node_type.value})"
