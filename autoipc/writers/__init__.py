"""Writers that render the generated Electron IPC artifacts."""

from typing import List

from ..config import ResolvedConfig
from .base import NOTICE, ArtifactWriter, code_indents, render_artifact, sort_entries, write_artifact
from .imports import ImportResolver
from .main_bindings import MainBindingsWriter
from .preload_bindings import PreloadBindingsWriter
from .renderer_types import RendererTypesWriter


def build_writers(config: ResolvedConfig) -> List[ArtifactWriter]:
    """Return the writers for every artifact, in write order."""
    return [
        MainBindingsWriter(config),
        PreloadBindingsWriter(config),
        RendererTypesWriter(config),
    ]


__all__ = [
    "ArtifactWriter",
    "ImportResolver",
    "MainBindingsWriter",
    "NOTICE",
    "PreloadBindingsWriter",
    "RendererTypesWriter",
    "build_writers",
    "code_indents",
    "render_artifact",
    "sort_entries",
    "write_artifact",
]
