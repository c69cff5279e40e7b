from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from autoipc.config import IPCConfig, ResolvedConfig, resolve_config
from autoipc.models import (
    CallableParam,
    CallableSignature,
    ChannelSpec,
    ImportSpec,
    ParsedFileSpecs,
    SpecsCollection,
    TypeSpec,
)


@pytest.fixture
def resolved_config(tmp_path: Path) -> Callable[..., ResolvedConfig]:
    def factory(**overrides) -> ResolvedConfig:
        return resolve_config(tmp_path, IPCConfig(**overrides))

    return factory


@pytest.fixture
def corpus(tmp_path: Path) -> List[ParsedFileSpecs]:
    schema = tmp_path.resolve() / "src" / "autoipc" / "schema.ts"
    channels = (
        ChannelSpec(
            name="UserChannel",
            kind="Unicast",
            direction="RendererToMain",
            signature=CallableSignature(
                definition="(id: number) => Promise<User>",
                params=(CallableParam(name="id", type="number"),),
                return_type="Promise<User>",
                custom_types=("User",),
                is_async=True,
            ),
        ),
        ChannelSpec(
            name="Notify",
            kind="Broadcast",
            direction="MainToRenderer",
            signature=CallableSignature(
                definition="(message: string, shape: Shapes.Circle) => void",
                params=(
                    CallableParam(name="message", type="string"),
                    CallableParam(name="shape", type="Shapes.Circle"),
                ),
                custom_types=("Shapes.Circle",),
            ),
        ),
        ChannelSpec(
            name="Log",
            kind="Broadcast",
            direction="RendererToMain",
            listeners=("onLogLine", "onAudit"),
            signature=CallableSignature(
                definition="(...lines: string[]) => void",
                params=(CallableParam(name="lines", type="string[]", rest=True),),
            ),
        ),
        ChannelSpec(
            name="Chat",
            kind="Port",
            direction="RendererToRenderer",
            signature=CallableSignature(
                definition="(text: string) => void",
                params=(CallableParam(name="text", type="string"),),
            ),
        ),
    )
    specs = SpecsCollection(
        channel_specs=channels,
        type_specs=(TypeSpec(name="User", kind="interface", is_exported=True),),
        import_specs=(ImportSpec(from_path="./shapes", namespace="Shapes"),),
    )
    return [ParsedFileSpecs(full_path=schema, relative_path="src/autoipc/schema.ts", specs=specs)]
