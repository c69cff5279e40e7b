"""Core data models shared across autoipc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

BROADCAST = "Broadcast"
UNICAST = "Unicast"
PORT = "Port"

RENDERER_TO_MAIN = "RendererToMain"
MAIN_TO_RENDERER = "MainToRenderer"
RENDERER_TO_RENDERER = "RendererToRenderer"

CHANNEL_KINDS: Tuple[str, ...] = (BROADCAST, UNICAST, PORT)
CHANNEL_DIRECTIONS: Tuple[str, ...] = (RENDERER_TO_MAIN, MAIN_TO_RENDERER, RENDERER_TO_RENDERER)

LISTENER_PREFIX = "on"


@dataclass(frozen=True)
class CallableParam:
    """A single parameter of a channel signature."""

    name: str
    type: str = "any"
    rest: bool = False
    optional: bool = False


@dataclass(frozen=True)
class CallableSignature:
    """Function type captured from a channel's ``signature`` property."""

    definition: str
    params: Tuple[CallableParam, ...] = ()
    return_type: str = "void"
    custom_types: Tuple[str, ...] = ()
    is_async: bool = False


@dataclass(frozen=True)
class ChannelSpec:
    """Declarative channel record; fields stay ``None`` when the source was malformed."""

    name: Optional[str] = None
    kind: Optional[str] = None
    direction: Optional[str] = None
    signature: Optional[CallableSignature] = None
    listeners: Optional[Tuple[str, ...]] = None
    trigger: Optional[str] = None

    def listener_names(self) -> Tuple[str, ...]:
        """Return the subscription callable names generated for this channel."""
        if self.listeners:
            return tuple(self.listeners)
        return (f"{LISTENER_PREFIX}{self.name}",)


@dataclass(frozen=True)
class TypeSpec:
    """Interface or type alias declared at the top level of a schema module."""

    name: str
    kind: str
    generics: Optional[str] = None
    is_exported: bool = False


@dataclass(frozen=True)
class ImportSpec:
    """Type-only or namespace import declared in a schema module."""

    from_path: str
    custom_types: Tuple[str, ...] = ()
    namespace: Optional[str] = None


@dataclass(frozen=True)
class SpecsCollection:
    """Everything the extractor recovered from one module."""

    channel_specs: Tuple[ChannelSpec, ...] = ()
    type_specs: Tuple[TypeSpec, ...] = ()
    import_specs: Tuple[ImportSpec, ...] = ()


@dataclass(frozen=True)
class ParsedFileSpecs:
    """Extraction result bound to the schema module it came from."""

    full_path: Path
    relative_path: str
    specs: SpecsCollection = field(default_factory=SpecsCollection)


__all__ = [
    "BROADCAST",
    "CHANNEL_DIRECTIONS",
    "CHANNEL_KINDS",
    "CallableParam",
    "CallableSignature",
    "ChannelSpec",
    "ImportSpec",
    "LISTENER_PREFIX",
    "MAIN_TO_RENDERER",
    "PORT",
    "ParsedFileSpecs",
    "RENDERER_TO_MAIN",
    "RENDERER_TO_RENDERER",
    "SpecsCollection",
    "TypeSpec",
    "UNICAST",
]
