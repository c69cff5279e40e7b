"""Discovery of schema modules: a single ``schema.ts`` or a ``schema/`` tree."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

from .utils import is_path_inside

_EXCLUDED_DIRS = {
    "node_modules",
    "__pycache__",
}

_SCHEMA_SUFFIXES = (".ts", ".mts", ".cts")
_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")


@dataclass(frozen=True)
class SchemaFile:
    """A schema module read from disk."""

    full_path: Path
    relative_path: str
    contents: str


def is_schema_module(path: Path) -> bool:
    name = path.name
    return name.endswith(_SCHEMA_SUFFIXES) and not name.endswith(_DECLARATION_SUFFIXES)


def _iter_schema_modules(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            name for name in dirnames if name not in _EXCLUDED_DIRS and not name.startswith(".")
        )
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            path = current_dir / filename
            if is_schema_module(path):
                yield path


def _relative_to(path: Path, base: Path) -> str:
    if not is_path_inside(path, base):
        return path.as_posix()
    return path.relative_to(base).as_posix()


def scan_schema(path: str | Path, project_root: str | Path | None = None) -> List[SchemaFile]:
    """Read every schema module at ``path`` in a stable order.

    ``relative_path`` values are expressed against ``project_root`` when
    given, otherwise against ``path`` itself (or its parent for a file).
    A missing ``path`` yields an empty list.
    """
    schema_path = Path(path).expanduser().resolve()
    if not schema_path.exists():
        return []

    if schema_path.is_file():
        modules = [schema_path]
        base = schema_path.parent
    else:
        modules = list(_iter_schema_modules(schema_path))
        base = schema_path
    if project_root is not None:
        base = Path(project_root).expanduser().resolve()

    return [
        SchemaFile(
            full_path=module,
            relative_path=_relative_to(module, base),
            contents=module.read_text(encoding="utf-8"),
        )
        for module in modules
    ]


__all__ = ["SchemaFile", "is_schema_module", "scan_schema"]
