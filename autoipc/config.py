"""Configuration loading for autoipc (.autoipc.yml or package.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .stores import LRUCache
from .utils import search_upwards

CONFIG_FILENAME = ".autoipc.yml"
PACKAGE_JSON = "package.json"

DEFAULT_IPC_DATA_DIR = "src/autoipc"
DEFAULT_CODE_INDENT = 3

MAIN_BINDINGS_FILENAME = "main.ts"
PRELOAD_BINDINGS_FILENAME = "preload.ts"
RENDERER_TYPES_FILENAME = "window.d.ts"
SCHEMA_FILENAME = "schema.ts"
SCHEMA_DIRNAME = "schema"

# package.json keys are camelCase, .autoipc.yml keys are snake_case.
_KEY_ALIASES = {
    "projectUsesNodeNext": "project_uses_node_next",
    "ipcDataDir": "ipc_data_dir",
    "codeIndent": "code_indent",
}


class ConfigError(RuntimeError):
    """Raised when a configuration source cannot be read or parsed."""


@dataclass(frozen=True)
class IPCConfig:
    """User-facing settings before path resolution."""

    project_uses_node_next: bool = False
    ipc_data_dir: str = DEFAULT_IPC_DATA_DIR
    code_indent: int = DEFAULT_CODE_INDENT


@dataclass(frozen=True)
class ResolvedConfig:
    """Settings with every path made absolute."""

    project_root: Path
    ipc_data_dir: Path
    schema_path: Path
    main_bindings_path: Path
    preload_bindings_path: Path
    renderer_types_path: Path
    code_indent: int = DEFAULT_CODE_INDENT
    project_uses_node_next: bool = False


def find_project_root(start: str | Path, cache: LRUCache | None = None) -> Path:
    """Return the nearest directory above ``start`` holding ``.git`` or ``package.json``.

    Falls back to ``start`` itself when neither marker exists.
    """
    start_path = Path(start).expanduser().resolve()
    marker = search_upwards(".git", start_path, cache=cache) or search_upwards(
        PACKAGE_JSON, start_path, cache=cache
    )
    if marker is not None:
        return marker.parent
    return start_path if start_path.is_dir() else start_path.parent


def load_config(project_root: Path) -> IPCConfig:
    """Load configuration from ``.autoipc.yml`` or the ``config.autoipc`` key of package.json."""
    root = Path(project_root)
    yaml_file = root / CONFIG_FILENAME
    if yaml_file.is_file():
        data = _read_yaml(yaml_file)
    else:
        data = _read_package_json(root / PACKAGE_JSON)

    normalised: Dict[str, Any] = {}
    for key, value in data.items():
        normalised[_KEY_ALIASES.get(key, key)] = value

    defaults = IPCConfig()
    node_next = normalised.get("project_uses_node_next", defaults.project_uses_node_next)
    data_dir = normalised.get("ipc_data_dir", defaults.ipc_data_dir)
    indent = normalised.get("code_indent", defaults.code_indent)

    coerced_bool = _as_bool(node_next)
    if coerced_bool is None:
        raise ConfigError(f"project_uses_node_next must be a boolean, got {node_next!r}")
    coerced_dir = _as_str(data_dir)
    if coerced_dir is None:
        raise ConfigError(f"ipc_data_dir must be a string, got {data_dir!r}")
    coerced_indent = _as_int(indent)
    if coerced_indent is None:
        raise ConfigError(f"code_indent must be an integer, got {indent!r}")

    return IPCConfig(
        project_uses_node_next=coerced_bool,
        ipc_data_dir=coerced_dir,
        code_indent=coerced_indent,
    )


def resolve_config(project_root: Path, config: IPCConfig) -> ResolvedConfig:
    """Resolve output and schema locations for an already validated config."""
    root = Path(project_root).resolve()
    data_dir = (root / config.ipc_data_dir).resolve()
    schema_dir = data_dir / SCHEMA_DIRNAME
    schema_file = data_dir / SCHEMA_FILENAME
    # A schema directory is only used when no schema.ts sits beside it.
    schema_path = schema_dir if schema_dir.is_dir() and not schema_file.exists() else schema_file
    return ResolvedConfig(
        project_root=root,
        ipc_data_dir=data_dir,
        schema_path=schema_path,
        main_bindings_path=data_dir / MAIN_BINDINGS_FILENAME,
        preload_bindings_path=data_dir / PRELOAD_BINDINGS_FILENAME,
        renderer_types_path=data_dir / RENDERER_TYPES_FILENAME,
        code_indent=config.code_indent,
        project_uses_node_next=config.project_uses_node_next,
    )


def _read_yaml(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _read_package_json(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    config = data.get("config") if isinstance(data, dict) else None
    section = config.get("autoipc") if isinstance(config, dict) else None
    return section if isinstance(section, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "ConfigError",
    "IPCConfig",
    "ResolvedConfig",
    "find_project_root",
    "load_config",
    "resolve_config",
]
