"""Filesystem helpers shared by configuration and scanning."""

from __future__ import annotations

import os
from pathlib import Path

from .stores import LRUCache


def search_upwards(
    target: str | Path,
    start_from: str | Path,
    *,
    cache: LRUCache | None = None,
) -> Path | None:
    """Return the first ``<dir>/<target>`` that exists, walking up from ``start_from``.

    ``start_from`` may be a file or a directory; a file starts the search in
    its parent. Results, including misses, are memoized in ``cache`` keyed by
    the ``(target, start)`` pair.
    """
    start = Path(start_from).expanduser().resolve()
    key = (str(target), str(start))
    if cache is not None:
        found, value = cache.get(key)
        if found:
            return value  # type: ignore[return-value]

    current = start if start.is_dir() else start.parent
    result: Path | None = None
    while True:
        candidate = current / target
        if candidate.exists():
            result = candidate
            break
        if current.parent == current:
            break
        current = current.parent

    if cache is not None:
        cache.put(key, result)
    return result


def is_path_inside(child: str | Path, parent: str | Path) -> bool:
    """Return True when ``child`` is strictly nested below ``parent``."""
    child_abs = os.path.abspath(child)
    parent_abs = os.path.abspath(parent)
    relative = os.path.relpath(child_abs, parent_abs)
    if relative == os.curdir:
        return False
    return not (relative == os.pardir or relative.startswith(os.pardir + os.sep))


def to_posix(path: str | Path) -> str:
    return str(path).replace("\\", "/")


__all__ = ["is_path_inside", "search_upwards", "to_posix"]
