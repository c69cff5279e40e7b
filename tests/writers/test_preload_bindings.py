"""Tests for autoipc.writers.preload_bindings."""

from __future__ import annotations

from dataclasses import replace

from autoipc.writers import NOTICE, PreloadBindingsWriter, render_artifact


def test_empty_corpus_renders_stub(resolved_config) -> None:
    writer = PreloadBindingsWriter(resolved_config())

    assert render_artifact(writer, []) == (
        f"{NOTICE}\n"
        'import { contextBridge } from "electron";\n'
        "\n"
        "contextBridge.exposeInMainWorld('ipc', {});\n"
    )


def test_exposes_ipc_object(resolved_config, corpus) -> None:
    text = render_artifact(PreloadBindingsWriter(resolved_config()), corpus)

    assert 'import { contextBridge, ipcRenderer } from "electron";' in text
    assert 'import type { User } from "./schema";' in text
    assert "contextBridge.exposeInMainWorld('ipc', {\n" in text
    assert text.endswith("});\n")


def test_renderer_to_main_senders(resolved_config, corpus) -> None:
    text = render_artifact(PreloadBindingsWriter(resolved_config()), corpus)

    assert "   sendUserChannel: (id: number) =>\n      ipcRenderer.invoke('UserChannel', id),\n" in text
    assert "   sendLog: (...lines: string[]) =>\n      ipcRenderer.send('Log', ...lines),\n" in text


def test_main_to_renderer_subscriptions(resolved_config, corpus) -> None:
    text = render_artifact(PreloadBindingsWriter(resolved_config()), corpus)

    assert (
        "   onNotify: (callback: (message: string, shape: Shapes.Circle) => void) =>\n"
        "      ipcRenderer.on('Notify', (_event: any, ...args: any[]) => (callback as any)(...args)),\n"
    ) in text


def test_ports_table_and_endpoints(resolved_config, corpus) -> None:
    text = render_artifact(PreloadBindingsWriter(resolved_config()), corpus)

    assert "const ports: Record<string, MessagePort> = {};" in text
    assert "receivePort('Chat');" in text
    assert "         send: (text: string) => ports['Chat']?.postMessage([text]),\n" in text
    assert "         receive: (callback: (text: string) => void) => {\n" in text
    assert "            portCallbacks['Chat'] = callback;\n" in text


def test_no_port_table_without_ports(resolved_config, corpus) -> None:
    parsed = corpus[0]
    channels = tuple(spec for spec in parsed.specs.channel_specs if spec.kind != "Port")
    without_ports = [replace(parsed, specs=replace(parsed.specs, channel_specs=channels))]

    text = render_artifact(PreloadBindingsWriter(resolved_config()), without_ports)

    assert "receivePort" not in text
    assert "ports:" not in text
