"""Schema module parsing built on the tree-sitter TypeScript grammar."""

from .custom_types import BUILTIN_TYPES, collect_custom_types, is_builtin_type
from .extractor import SpecsExtractor

__all__ = [
    "BUILTIN_TYPES",
    "SpecsExtractor",
    "collect_custom_types",
    "is_builtin_type",
]
