"""Renderer for the global ``window.ipc`` type declarations (``window.d.ts``)."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..config import ResolvedConfig
from ..models import (
    MAIN_TO_RENDERER,
    RENDERER_TO_MAIN,
    RENDERER_TO_RENDERER,
    UNICAST,
    ChannelSpec,
    ParsedFileSpecs,
)
from .base import (
    code_indents,
    collect_import_lines,
    iter_channels,
    render_signature,
    require_signature,
    sort_entries,
)
from .imports import ImportResolver


def promised(return_type: str) -> str:
    """Wrap ``return_type`` in ``Promise<...>`` unless it already is one."""
    return return_type if return_type.startswith("Promise") else f"Promise<{return_type}>"


class RendererTypesWriter:
    """Declares the shape of ``window.ipc`` exposed by the preload bindings."""

    def __init__(self, config: ResolvedConfig) -> None:
        self._config = config
        self._indents = code_indents(config.code_indent)

    @property
    def target_path(self) -> Path:
        return self._config.renderer_types_path

    def render_empty(self) -> str:
        i = self._indents
        return "\n".join(
            [
                "declare global {",
                f"{i[0]}interface Window {{",
                f"{i[1]}ipc: {{}};",
                f"{i[0]}}}",
                "}",
                "",
                "export {};",
                "",
            ]
        )

    def render_full(self, corpus: Sequence[ParsedFileSpecs]) -> str:
        resolver = ImportResolver(self._config.project_uses_node_next, self.target_path)
        entries: List[str] = []
        ports: List[ChannelSpec] = []

        for spec in iter_channels(corpus):
            signature = require_signature(spec)
            if spec.direction == RENDERER_TO_MAIN:
                # ipcRenderer.invoke always resolves asynchronously.
                return_type = promised(signature.return_type) if spec.kind == UNICAST else "void"
                sender = render_signature(signature, return_type=return_type)
                entries.append(f"send{spec.name}: {sender};")
            elif spec.direction == MAIN_TO_RENDERER:
                entries.extend(
                    f"{name}: (callback: {signature.definition}) => void;"
                    for name in spec.listener_names()
                )
            elif spec.direction == RENDERER_TO_RENDERER:
                ports.append(spec)
        ports.sort(key=lambda spec: spec.name or "")

        i = self._indents
        lines = collect_import_lines(resolver, corpus)
        if lines:
            lines.append("")
        lines.extend(["declare global {", f"{i[0]}interface Window {{", f"{i[1]}ipc: {{"])
        lines.extend(f"{i[2]}{entry}" for entry in sort_entries(entries))
        if ports:
            lines.append(f"{i[2]}ports: {{")
            for spec in ports:
                signature = require_signature(spec)
                send = render_signature(signature, return_type="void")
                lines.extend(
                    [
                        f"{i[3]}{spec.name}: {{",
                        f"{i[4]}send: {send};",
                        f"{i[4]}receive: (callback: {signature.definition}) => void;",
                        f"{i[3]}}};",
                    ]
                )
            lines.append(f"{i[2]}}};")
        lines.extend([f"{i[1]}}};", f"{i[0]}}}", "}", "", "export {};"])
        return "\n".join(lines) + "\n"


__all__ = ["RendererTypesWriter", "promised"]
