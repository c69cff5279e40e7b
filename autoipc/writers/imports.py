"""Relocation and de-duplication of type imports for one generated artifact."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from typing import List, Optional, Set, Tuple

from ..models import ImportSpec, ParsedFileSpecs
from ..utils import to_posix

# Longest suffix first so ``.d.ts`` wins over ``.ts``.
_SCRIPT_EXTENSIONS = (
    ".d.ts",
    ".d.mts",
    ".d.cts",
    ".ts",
    ".tsx",
    ".mts",
    ".cts",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
)


def split_type_namespace(type_name: str) -> Tuple[Optional[str], str]:
    """Split ``Space.Type`` into ``("Space", "Type")``; bare names get ``None``."""
    head, sep, tail = type_name.partition(".")
    if sep and tail:
        return head, tail
    return None, type_name


def strip_script_extension(path: str) -> str:
    for extension in _SCRIPT_EXTENSIONS:
        if path.endswith(extension) and len(path) > len(extension):
            return path[: -len(extension)]
    return path


def find_unexported_types(parsed_file_specs: ParsedFileSpecs) -> List[str]:
    """Return module-local types used by channel signatures that the module does not export."""
    specs = parsed_file_specs.specs
    unexported = {spec.name for spec in specs.type_specs if not spec.is_exported}
    found: List[str] = []
    for channel in specs.channel_specs:
        if channel.signature is None:
            continue
        for custom_type in channel.signature.custom_types:
            namespace, type_name = split_type_namespace(custom_type)
            if namespace is None and type_name in unexported and type_name not in found:
                found.append(type_name)
    return found


def is_relative_specifier(specifier: str) -> bool:
    return specifier in {".", ".."} or specifier.startswith(("./", "../"))


class ImportResolver:
    """Produces at most one ``import type`` line per type or namespace.

    A resolver belongs to exactly one rendering of one artifact: its seen sets
    are what keep the artifact free of duplicate imports.
    """

    def __init__(self, project_uses_node_next: bool, target_path: Path) -> None:
        self._node_next = project_uses_node_next
        self._target_dir = Path(target_path).parent
        self._seen_types: Set[str] = set()
        self._seen_namespaces: Set[str] = set()

    def get_declaration(self, parsed_file_specs: ParsedFileSpecs, custom_type: str) -> Optional[str]:
        """Return the import line for ``custom_type`` or ``None`` when none is needed."""
        namespace, type_name = split_type_namespace(custom_type)
        specs = parsed_file_specs.specs
        source_path = Path(parsed_file_specs.full_path)

        if namespace is None and any(spec.name == type_name for spec in specs.type_specs):
            if type_name in self._seen_types:
                return None
            self._seen_types.add(type_name)
            module_path = self.relocate("./" + source_path.name, source_path)
            return f'import type {{ {type_name} }} from "{module_path}";'

        import_spec = self._find_import_spec(specs.import_specs, namespace, type_name)
        if import_spec is None:
            return None
        module_path = self.relocate(import_spec.from_path, source_path)
        if namespace is not None:
            if namespace in self._seen_namespaces:
                return None
            self._seen_namespaces.add(namespace)
            return f'import type * as {namespace} from "{module_path}";'
        if type_name in self._seen_types:
            return None
        self._seen_types.add(type_name)
        return f'import type {{ {type_name} }} from "{module_path}";'

    def relocate(self, specifier: str, source_path: Path) -> str:
        """Rewrite ``specifier`` (relative to ``source_path``) relative to the target artifact."""
        if not is_relative_specifier(specifier):
            return specifier
        absolute = os.path.normpath(os.path.join(str(source_path.parent), specifier))
        relative = to_posix(os.path.relpath(absolute, str(self._target_dir)))
        relative = strip_script_extension(posixpath.normpath(relative))
        if self._node_next:
            relative = f"{relative}.js"
        if not relative.startswith(".."):
            relative = f"./{relative}"
        return relative

    @staticmethod
    def _find_import_spec(
        import_specs: Tuple[ImportSpec, ...], namespace: Optional[str], type_name: str
    ) -> Optional[ImportSpec]:
        for spec in import_specs:
            if namespace is not None:
                if spec.namespace == namespace:
                    return spec
            elif type_name in spec.custom_types:
                return spec
        return None


__all__ = [
    "ImportResolver",
    "find_unexported_types",
    "split_type_namespace",
    "strip_script_extension",
]
