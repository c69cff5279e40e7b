"""Shared rendering shell for the generated TypeScript artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from ..models import CallableParam, CallableSignature, ChannelSpec, ParsedFileSpecs
from .imports import ImportResolver

NOTICE = (
    "// NOTICE: THIS FILE WAS GENERATED BY AUTOIPC.\n"
    "// ANY CHANGES TO THIS FILE WILL NOT PERSIST BETWEEN GENERATIONS.\n"
)
ENTRY_PREFIX_ORDER = ("on", "send")
INDENT_LEVELS = 5


class ArtifactWriter(Protocol):
    """Capability implemented by every artifact renderer."""

    @property
    def target_path(self) -> Path:
        """Absolute path the artifact is written to."""

    def render_empty(self) -> str:
        """Return the stub contents used when the corpus holds no channels."""

    def render_full(self, corpus: Sequence[ParsedFileSpecs]) -> str:
        """Return the artifact contents for a non-empty, validated corpus."""


def code_indents(width: int) -> List[str]:
    """Return indentation strings for nesting levels one through five."""
    unit = " " * width
    return [unit * level for level in range(1, INDENT_LEVELS + 1)]


def _prefix_rank(entry: str) -> int:
    for rank, prefix in enumerate(ENTRY_PREFIX_ORDER):
        if entry.startswith(prefix):
            return rank
    return len(ENTRY_PREFIX_ORDER)


def sort_entries(entries: Iterable[str]) -> List[str]:
    """Order callable entries by prefix class (``on``, ``send``, rest) then alphabetically."""
    return sorted(entries, key=lambda entry: (_prefix_rank(entry), entry))


def render_params(params: Sequence[CallableParam]) -> str:
    """Render a typed parameter list such as ``a: string, b?: number, ...rest: T[]``."""
    rendered = []
    for param in params:
        prefix = "..." if param.rest else ""
        optional = "?" if param.optional else ""
        rendered.append(f"{prefix}{param.name}{optional}: {param.type or 'any'}")
    return ", ".join(rendered)


def render_args(params: Sequence[CallableParam]) -> str:
    """Render the argument list that forwards ``params`` to another call."""
    return ", ".join(f"...{param.name}" if param.rest else param.name for param in params)


def join_params(*groups: str) -> str:
    return ", ".join(group for group in groups if group)


def quote_channel(spec: ChannelSpec) -> str:
    return f"'{spec.name}'"


def add_unique(values: List[str], value: str) -> None:
    if value not in values:
        values.append(value)


def require_signature(spec: ChannelSpec) -> CallableSignature:
    """Return the signature of a validated channel."""
    if spec.signature is None:
        raise ValueError(f"Channel {spec.name!r} has no signature; validate the corpus before rendering")
    return spec.signature


def type_parameters(signature: CallableSignature) -> str:
    """Return the ``<T>`` clause that precedes the parameter list, if any."""
    definition = signature.definition
    index = definition.find("(")
    return definition[:index].strip() if index > 0 else ""


def render_signature(
    signature: CallableSignature,
    *,
    leading: str = "",
    return_type: Optional[str] = None,
) -> str:
    """Rebuild a function type, optionally with a leading parameter or another return type."""
    params = join_params(leading, render_params(signature.params))
    result = return_type if return_type is not None else signature.return_type
    return f"{type_parameters(signature)}({params}) => {result}"


def collect_import_lines(
    resolver: ImportResolver,
    corpus: Sequence[ParsedFileSpecs],
    include: Callable[[ChannelSpec], bool] = lambda spec: True,
) -> List[str]:
    """Resolve the custom types of the included channels into ``import type`` lines."""
    lines: List[str] = []
    for parsed in corpus:
        custom_types: List[str] = []
        for spec in parsed.specs.channel_specs:
            if spec.signature is None or not include(spec):
                continue
            for custom_type in spec.signature.custom_types:
                if custom_type not in custom_types:
                    custom_types.append(custom_type)
        for custom_type in custom_types:
            declaration = resolver.get_declaration(parsed, custom_type)
            if declaration:
                lines.append(declaration)
    return lines


def iter_channels(corpus: Sequence[ParsedFileSpecs]) -> Iterable[ChannelSpec]:
    for parsed in corpus:
        yield from parsed.specs.channel_specs


def render_artifact(writer: ArtifactWriter, corpus: Sequence[ParsedFileSpecs]) -> str:
    """Return the complete artifact text, banner included."""
    has_channels = any(True for _ in iter_channels(corpus))
    contents = writer.render_full(corpus) if has_channels else writer.render_empty()
    if not contents.endswith("\n"):
        contents += "\n"
    return f"{NOTICE}\n{contents}"


def write_artifact(writer: ArtifactWriter, corpus: Sequence[ParsedFileSpecs]) -> Path:
    """Render and write one artifact in a single write, creating parent directories."""
    contents = render_artifact(writer, corpus)
    target = Path(writer.target_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(contents, encoding="utf-8")
    return target


__all__ = [
    "add_unique",
    "ArtifactWriter",
    "NOTICE",
    "quote_channel",
    "code_indents",
    "collect_import_lines",
    "iter_channels",
    "join_params",
    "render_args",
    "render_artifact",
    "render_params",
    "render_signature",
    "require_signature",
    "sort_entries",
    "type_parameters",
    "write_artifact",
]
