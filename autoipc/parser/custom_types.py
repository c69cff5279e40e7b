"""Collection of custom type names referenced by a function type."""

from __future__ import annotations

from typing import FrozenSet, List, Set

from tree_sitter import Node

BUILTIN_TYPES: FrozenSet[str] = frozenset(
    {
        "string",
        "number",
        "boolean",
        "void",
        "any",
        "unknown",
        "null",
        "undefined",
        "never",
        "object",
        "Function",
        "Promise",
    }
)


def is_builtin_type(type_name: str) -> bool:
    return type_name in BUILTIN_TYPES


def node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


class CustomTypeCollector:
    """Recursive visitor that gathers non-builtin type names in encounter order.

    Names declared as type parameters of the visited signature (``<T>(a: T) => T``)
    are excluded since they never need an import.
    """

    def __init__(self, source_bytes: bytes) -> None:
        self._source = source_bytes
        self._names: List[str] = []
        self._seen: Set[str] = set()
        self._type_parameters: Set[str] = set()

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name in self._names if name not in self._type_parameters)

    def visit(self, node: Node) -> None:
        match node.type:
            case "type_identifier":
                self._add(node_text(node, self._source))
            case "nested_type_identifier":
                # Namespace.Type is kept whole; the resolver splits it later.
                self._add(node_text(node, self._source))
            case "type_parameter":
                for child in node.named_children:
                    if child.type == "type_identifier":
                        self._type_parameters.add(node_text(child, self._source))
                    else:
                        self.visit(child)
            case "pair_pattern":
                # ({ key: Type }) => void
                value = node.child_by_field_name("value")
                if value is not None and value.type == "identifier":
                    self._add(node_text(value, self._source))
                elif value is not None:
                    self.visit(value)
            case "literal_type" | "predefined_type" | "comment":
                return
            case _:
                for child in node.named_children:
                    self.visit(child)

    def _add(self, name: str) -> None:
        name = "".join(name.split())
        if not name or is_builtin_type(name) or name in self._seen:
            return
        self._seen.add(name)
        self._names.append(name)


def collect_custom_types(node: Node, source_bytes: bytes) -> tuple[str, ...]:
    """Return the custom type names referenced anywhere below ``node``."""
    collector = CustomTypeCollector(source_bytes)
    collector.visit(node)
    return collector.names


__all__ = [
    "BUILTIN_TYPES",
    "CustomTypeCollector",
    "collect_custom_types",
    "is_builtin_type",
    "node_text",
]
