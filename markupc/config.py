"""
Compiler configuration for markupc.

All knobs have defaults matching the markup language; the environment can
override them through MARKUPC_* variables:

    MARKUPC_RESERVED_LABEL     reserved element type-field word ("type")
    MARKUPC_DELEGATE_KEYWORD   keyword introducing a props delegate ("with")
    MARKUPC_DUPLICATE_LABELS   "error" or "last_wins"
    MARKUPC_SCOPE_VARIABLE     name of the scope holder in emitted code
    MARKUPC_RUNTIME_MODULE     module prefix of the virtual-tree runtime
    MARKUPC_FILENAME           default filename used in diagnostics

Author: xwest
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

DUPLICATE_POLICIES = ("error", "last_wins")

ENV_PREFIX = "MARKUPC_"


@dataclass(frozen=True)
class CompilerConfig:
    """Settings shared by the parser, validator and emitter."""
    reserved_label: str = "type"
    delegate_keyword: str = "with"
    duplicate_labels: str = "error"
    scope_variable: str = "__vcomp_scope"
    runtime_module: str = "vdom"
    filename: str = "<markup>"

    def __post_init__(self):
        if self.duplicate_labels not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_labels must be one of {', '.join(DUPLICATE_POLICIES)}, "
                f"got {self.duplicate_labels!r}"
            )
        for name in ("reserved_label", "delegate_keyword", "scope_variable"):
            value = getattr(self, name)
            if not value.isidentifier():
                raise ValueError(f"{name} must be an identifier, got {value!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'CompilerConfig':
        """Build a config from MARKUPC_* environment variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key in environ:
                overrides[f.name] = environ[key].strip()
        return cls(**overrides)

    def with_overrides(self, **overrides) -> 'CompilerConfig':
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


DEFAULT_CONFIG = CompilerConfig()
