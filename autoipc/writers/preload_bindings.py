"""Renderer for the preload bindings module (``preload.ts``)."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..config import ResolvedConfig
from ..models import (
    BROADCAST,
    MAIN_TO_RENDERER,
    RENDERER_TO_MAIN,
    RENDERER_TO_RENDERER,
    ChannelSpec,
    ParsedFileSpecs,
)
from .base import (
    code_indents,
    collect_import_lines,
    iter_channels,
    join_params,
    quote_channel,
    render_args,
    render_params,
    require_signature,
    sort_entries,
    type_parameters,
)
from .imports import ImportResolver

EXPOSED_KEY = "ipc"
LISTENER_FORWARDER = "(_event: any, ...args: any[]) => (callback as any)(...args)"


class PreloadBindingsWriter:
    """Exposes the channel API to renderer processes through ``contextBridge``."""

    def __init__(self, config: ResolvedConfig) -> None:
        self._config = config
        self._indents = code_indents(config.code_indent)

    @property
    def target_path(self) -> Path:
        return self._config.preload_bindings_path

    def render_empty(self) -> str:
        return (
            'import { contextBridge } from "electron";\n'
            "\n"
            f"contextBridge.exposeInMainWorld('{EXPOSED_KEY}', {{}});\n"
        )

    def render_full(self, corpus: Sequence[ParsedFileSpecs]) -> str:
        resolver = ImportResolver(self._config.project_uses_node_next, self.target_path)
        entries: List[str] = []
        ports: List[ChannelSpec] = []

        for spec in iter_channels(corpus):
            if spec.direction == RENDERER_TO_MAIN:
                entries.append(self._renderer_to_main_entry(spec))
            elif spec.direction == MAIN_TO_RENDERER:
                entries.extend(self._main_to_renderer_entries(spec))
            elif spec.direction == RENDERER_TO_RENDERER:
                ports.append(spec)
        ports.sort(key=lambda spec: spec.name or "")

        lines = ['import { contextBridge, ipcRenderer } from "electron";']
        lines.extend(collect_import_lines(resolver, corpus))
        if ports:
            lines.extend(self._port_table(ports))

        first = self._indents[0]
        lines.extend(["", f"contextBridge.exposeInMainWorld('{EXPOSED_KEY}', {{"])
        lines.extend(f"{first}{entry}," for entry in sort_entries(entries))
        if ports:
            lines.append(f"{first}ports: {{")
            lines.extend(self._port_entry(spec) for spec in ports)
            lines.append(f"{first}}},")
        lines.append("});")
        return "\n".join(lines) + "\n"

    def _renderer_to_main_entry(self, spec: ChannelSpec) -> str:
        signature = require_signature(spec)
        method = "send" if spec.kind == BROADCAST else "invoke"
        generics = type_parameters(signature)
        params = render_params(signature.params)
        args = join_params(quote_channel(spec), render_args(signature.params))
        sender = f"ipcRenderer.{method}({args})"
        return f"send{spec.name}: {generics}({params}) =>\n{self._indents[1]}{sender}"

    def _main_to_renderer_entries(self, spec: ChannelSpec) -> List[str]:
        definition = require_signature(spec).definition
        subscription = f"ipcRenderer.on({quote_channel(spec)}, {LISTENER_FORWARDER})"
        return [
            f"{name}: (callback: {definition}) =>\n{self._indents[1]}{subscription}"
            for name in spec.listener_names()
        ]

    def _port_table(self, ports: Sequence[ChannelSpec]) -> List[str]:
        """Endpoint table filled in when the main process posts a port for a channel."""
        i = self._indents
        lines = [
            "",
            "const ports: Record<string, MessagePort> = {};",
            "const portCallbacks: Record<string, (...args: any[]) => void> = {};",
            "",
            "const receivePort = (name: string) =>",
            f"{i[0]}ipcRenderer.on(name, (event: any) => {{",
            f"{i[1]}const port: MessagePort = event.ports[0];",
            f"{i[1]}port.onmessage = (message: MessageEvent) => portCallbacks[name]?.(...message.data);",
            f"{i[1]}ports[name] = port;",
            f"{i[0]}}});",
            "",
        ]
        lines.extend(f"receivePort({quote_channel(spec)});" for spec in ports)
        return lines

    def _port_entry(self, spec: ChannelSpec) -> str:
        signature = require_signature(spec)
        i = self._indents
        channel = quote_channel(spec)
        generics = type_parameters(signature)
        params = render_params(signature.params)
        args = render_args(signature.params)
        return "\n".join(
            [
                f"{i[1]}{spec.name}: {{",
                f"{i[2]}send: {generics}({params}) => ports[{channel}]?.postMessage([{args}]),",
                f"{i[2]}receive: (callback: {signature.definition}) => {{",
                f"{i[3]}portCallbacks[{channel}] = callback;",
                f"{i[2]}}},",
                f"{i[1]}}},",
            ]
        )


__all__ = ["PreloadBindingsWriter"]
