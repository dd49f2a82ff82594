# sports_mcp/cache/__init__.py
"""
Caching layer for Sports MCP.

Provides an in-memory LRU cache with TTL tiers for roster and player
index lookups.
"""

from .lru_cache import CacheTier, LRUCache, generate_cache_key

__all__ = [
    "LRUCache",
    "CacheTier",
    "generate_cache_key",
]
