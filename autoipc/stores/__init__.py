"""Process-lifetime stores used by autoipc."""

from .lru_cache import LRUCache

__all__ = ["LRUCache"]
