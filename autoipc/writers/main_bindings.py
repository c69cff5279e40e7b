"""Renderer for the main-process bindings module (``main.ts``)."""

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
    add_unique,
    code_indents,
    collect_import_lines,
    iter_channels,
    join_params,
    quote_channel,
    render_args,
    render_params,
    render_signature,
    require_signature,
    sort_entries,
    type_parameters,
)
from .imports import ImportResolver

MAIN_EVENT_PARAM = "event: IpcMainEvent"
HANDLER_FORWARDER = "(event: any, ...args: any[]) => (callback as any)(event, ...args)"


class MainBindingsWriter:
    """Builds the ``ipcMain`` object used by the Electron main process."""

    def __init__(self, config: ResolvedConfig) -> None:
        self._config = config
        self._indents = code_indents(config.code_indent)

    @property
    def target_path(self) -> Path:
        return self._config.main_bindings_path

    def render_empty(self) -> str:
        return "export const ipcMain = {};\n"

    def render_full(self, corpus: Sequence[ParsedFileSpecs]) -> str:
        resolver = ImportResolver(self._config.project_uses_node_next, self.target_path)
        electron_imports = ["ipcMain as electronIpcMain"]
        electron_types: List[str] = []
        entries: List[str] = []
        ports: List[str] = []

        for spec in iter_channels(corpus):
            if spec.direction == RENDERER_TO_MAIN:
                add_unique(electron_types, "IpcMainEvent")
                entries.extend(self._renderer_to_main_entries(spec))
            elif spec.direction == MAIN_TO_RENDERER:
                add_unique(electron_types, "BrowserWindow")
                entries.append(self._main_to_renderer_entry(spec))
            elif spec.direction == RENDERER_TO_RENDERER:
                add_unique(electron_imports, "MessageChannelMain")
                add_unique(electron_types, "BrowserWindow")
                ports.append(self._port_entry(spec))

        lines = [f'import {{ {", ".join(electron_imports)} }} from "electron";']
        if electron_types:
            lines.append(f'import type {{ {", ".join(electron_types)} }} from "electron";')
        # Port propagation never touches the signature, so its types are not imported.
        lines.extend(
            collect_import_lines(
                resolver, corpus, include=lambda spec: spec.direction != RENDERER_TO_RENDERER
            )
        )

        first = self._indents[0]
        body = ["", "export const ipcMain = {"]
        body.extend(f"{first}{entry}," for entry in sort_entries(entries))
        if ports:
            body.append(f"{first}ports: {{")
            body.extend(sorted(ports))
            body.append(f"{first}}},")
        body.append("};")
        return "\n".join(lines + body) + "\n"

    def _renderer_to_main_entries(self, spec: ChannelSpec) -> List[str]:
        method = "on" if spec.kind == BROADCAST else "handle"
        callback = render_signature(require_signature(spec), leading=MAIN_EVENT_PARAM)
        registration = f"electronIpcMain.{method}({quote_channel(spec)}, {HANDLER_FORWARDER})"
        return [
            f"{name}: (callback: {callback}) =>\n{self._indents[1]}{registration}"
            for name in spec.listener_names()
        ]

    def _main_to_renderer_entry(self, spec: ChannelSpec) -> str:
        signature = require_signature(spec)
        params = join_params("browserWindow: BrowserWindow", render_params(signature.params))
        args = join_params(quote_channel(spec), render_args(signature.params))
        sender = f"browserWindow.webContents.send({args})"
        if spec.trigger:
            sender = f'browserWindow.on("{spec.trigger}", () => {sender})'
        generics = type_parameters(signature)
        return f"send{spec.name}: {generics}({params}) =>\n{self._indents[1]}{sender}"

    def _port_entry(self, spec: ChannelSpec) -> str:
        i = self._indents
        channel = quote_channel(spec)
        return "\n".join(
            [
                f"{i[1]}{spec.name}: {{",
                f"{i[2]}propagate: (bwOne: BrowserWindow, bwTwo: BrowserWindow) => {{",
                f"{i[3]}const {{ port1, port2 }} = new MessageChannelMain();",
                f"{i[3]}bwOne.once('ready-to-show', () => {{",
                f"{i[4]}bwOne.webContents.postMessage({channel}, null, [port1]);",
                f"{i[3]}}});",
                f"{i[3]}bwTwo.once('ready-to-show', () => {{",
                f"{i[4]}bwTwo.webContents.postMessage({channel}, null, [port2]);",
                f"{i[3]}}});",
                f"{i[2]}}},",
                f"{i[1]}}},",
            ]
        )


__all__ = ["MainBindingsWriter"]
