"""
Component schema registry.

The registry is the compiler's view of the types a markup file can refer to.
For each component type it records the associated properties type and that
type's fields, which is everything the static validator and the emitter need:

    registry = SchemaRegistry()
    registry.register_component("app::widgets::Button", PropertiesSchema(
        "ButtonProps",
        [FieldSpec("label", FieldType.parse("String")),
         FieldSpec("onclick", FieldType.parse("Option<Callback<ClickEvent>>"))],
    ))
    registry.alias("Button", "app::widgets::Button")

How schemas are derived from user code is not this module's concern.

Author: xwest
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..log import get_logger

logger = get_logger(__name__)


class TypeKind(Enum):
    """What a registered type is."""
    COMPONENT = "component"
    PROPERTIES = "properties"
    PLAIN = "plain"


@dataclass(frozen=True)
class FieldType:
    """Type of a properties field, e.g. `Option<Callback<ClickEvent>>`."""
    name: str
    parameters: Tuple['FieldType', ...] = ()

    def __str__(self) -> str:
        if self.parameters:
            param_str = ", ".join(str(p) for p in self.parameters)
            return f"{self.name}<{param_str}>"
        return self.name

    @property
    def is_optional(self) -> bool:
        return self.name in OPTIONAL_TYPE_NAMES and len(self.parameters) == 1

    @property
    def is_callback(self) -> bool:
        return self.name in CALLBACK_TYPE_NAMES

    @property
    def inner(self) -> Optional['FieldType']:
        """The wrapped type of a single-parameter type."""
        return self.parameters[0] if len(self.parameters) == 1 else None

    @classmethod
    def parse(cls, text: str) -> 'FieldType':
        """Parse `Name` or `Name<Param, ...>` (nested) into a FieldType."""
        tokens = _TYPE_TOKEN.findall(text)
        if "".join(tokens) != re.sub(r"\s+", "", text):
            raise ValueError(f"invalid field type: {text!r}")
        field_type, rest = cls._parse_tokens(tokens, text)
        if rest:
            raise ValueError(f"unexpected {''.join(rest)!r} in field type {text!r}")
        return field_type

    @classmethod
    def _parse_tokens(cls, tokens: List[str], text: str) -> Tuple['FieldType', List[str]]:
        if not tokens or not _TYPE_NAME.fullmatch(tokens[0]):
            raise ValueError(f"invalid field type: {text!r}")
        name, rest = tokens[0], tokens[1:]
        if not rest or rest[0] != "<":
            return cls(name), rest

        rest = rest[1:]
        parameters = []
        while True:
            param, rest = cls._parse_tokens(rest, text)
            parameters.append(param)
            if rest and rest[0] == ",":
                rest = rest[1:]
                continue
            if rest and rest[0] == ">":
                return cls(name, tuple(parameters)), rest[1:]
            raise ValueError(f"unbalanced '<' in field type {text!r}")


_TYPE_TOKEN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:::[A-Za-z_][A-Za-z0-9_]*)*|[<>,]")
_TYPE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_:]*")

OPTIONAL_TYPE_NAMES = frozenset({"Option", "Optional"})
CALLBACK_TYPE_NAMES = frozenset({"Callback", "Callable"})


@dataclass(frozen=True)
class FieldSpec:
    """One field of a properties schema."""
    name: str
    field_type: FieldType


class PropertiesSchema:
    """The properties type associated with a component."""

    def __init__(self, name: str, fields: Iterable[FieldSpec] = ()):
        self.name = name
        self.fields: Dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in self.fields:
                raise ValueError(f"field {spec.name!r} declared twice on {name}")
            self.fields[spec.name] = spec

    def __repr__(self) -> str:
        return f"PropertiesSchema({self.name!r}, {self.field_names})"

    @property
    def field_names(self) -> List[str]:
        return list(self.fields)

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str) -> Optional[FieldSpec]:
        return self.fields.get(name)


@dataclass
class TypeInfo:
    """A type known to the registry."""
    path: str
    kind: TypeKind
    properties: Optional[PropertiesSchema] = None

    @property
    def is_component(self) -> bool:
        return self.kind == TypeKind.COMPONENT and self.properties is not None


def normalize_path(path: str) -> str:
    """Canonical spelling of a type path (no leading `::`, no whitespace)."""
    path = re.sub(r"\s+", "", path)
    return path[2:] if path.startswith("::") else path


class SchemaRegistry:
    """
    Lookup of component types and their properties schemas.

    Paths are `::`-separated. `alias` lets a short name (or a module prefix)
    stand for a full path, the way a `use` import would.
    """

    def __init__(self):
        self._types: Dict[str, TypeInfo] = {}
        self._aliases: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_component(self, path: str, properties: PropertiesSchema) -> TypeInfo:
        """Register a component type together with its properties schema."""
        info = TypeInfo(normalize_path(path), TypeKind.COMPONENT, properties)
        self._register(info)
        return info

    def register_type(self, path: str, kind: TypeKind = TypeKind.PLAIN) -> TypeInfo:
        """Register a non-component type so it resolves but fails the component check."""
        if kind == TypeKind.COMPONENT:
            raise ValueError("use register_component for component types")
        info = TypeInfo(normalize_path(path), kind)
        self._register(info)
        return info

    def alias(self, name: str, path: str) -> None:
        """Make `name` (a type or module prefix) resolve to `path`."""
        name = normalize_path(name)
        if "::" in name:
            raise ValueError(f"alias names must be a single segment, got {name!r}")
        self._aliases[name] = normalize_path(path)

    def _register(self, info: TypeInfo) -> None:
        if info.path in self._types:
            raise ValueError(f"type {info.path!r} is already registered")
        self._types[info.path] = info
        logger.debug("registered %s type %s", info.kind.value, info.path)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> str:
        """Expand an alias in the first segment of `path`."""
        path = normalize_path(path)
        head, sep, tail = path.partition("::")
        if head in self._aliases and path not in self._types:
            target = self._aliases[head]
            return f"{target}{sep}{tail}" if sep else target
        return path

    def lookup(self, path: str) -> Optional[TypeInfo]:
        return self._types.get(self.resolve(path))

    def is_component(self, path: str) -> bool:
        info = self.lookup(path)
        return info is not None and info.is_component

    def properties_of(self, path: str) -> PropertiesSchema:
        """Properties schema of a component, raising KeyError otherwise."""
        info = self.lookup(path)
        if info is None or not info.is_component:
            raise KeyError(f"{path!r} is not a registered component")
        return info.properties

    @property
    def known_paths(self) -> List[str]:
        return sorted(set(self._types) | set(self._aliases))

    def __contains__(self, path: str) -> bool:
        return self.lookup(path) is not None

    def __len__(self) -> int:
        return len(self._types)

    # ------------------------------------------------------------------
    # Construction from plain data
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SchemaRegistry':
        """
        Build a registry from plain data:

            {
                "components": {
                    "app::Button": {
                        "properties": "ButtonProps",
                        "fields": {"label": "String", "size": "u32"}
                    }
                },
                "types": ["app::Theme"],
                "aliases": {"Button": "app::Button"}
            }
        """
        registry = cls()
        for path, component in data.get("components", {}).items():
            fields = [FieldSpec(name, FieldType.parse(type_text))
                      for name, type_text in component.get("fields", {}).items()]
            properties_name = component.get("properties", f"{normalize_path(path).split('::')[-1]}Props")
            registry.register_component(path, PropertiesSchema(properties_name, fields))
        for path in data.get("types", []):
            registry.register_type(path)
        for name, path in data.get("aliases", {}).items():
            registry.alias(name, path)
        return registry
