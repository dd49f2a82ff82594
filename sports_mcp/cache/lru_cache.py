# sports_mcp/cache/lru_cache.py
"""
In-memory LRU cache with TTL tiers for Sports MCP.

The API clients use it for lookups that are expensive to rebuild and
change rarely: the MLB season player index and the NFL roster index.
Raw player stat payloads are never cached here.
"""

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# TTL TIERS
# ============================================================================


class CacheTier(Enum):
    """Cache TTL tiers based on data freshness requirements."""

    LIVE = 30  # 30 seconds - in-progress games
    DAILY = 3600  # 1 hour - current season player index
    HISTORICAL = 86400  # 24 hours - rosters, past seasons
    STATIC = 604800  # 7 days - team ids, static lookups

    def __str__(self):
        return self.name.lower()


# ============================================================================
# LRU CACHE
# ============================================================================


class LRUCache:
    """
    In-memory LRU cache with TTL support.

    Evicts the least recently used entry once max_size is exceeded and
    drops entries lazily when they are read after expiry.
    """

    def __init__(self, max_size: int = 256):
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of items to store
        """
        self.cache: OrderedDict = OrderedDict()
        self.max_size = max_size
        self.ttls: Dict[str, float] = {}  # key -> expiration timestamp
        self.stats = {"hits": 0, "misses": 0, "evictions": 0}
        self._lock = threading.Lock()
        logger.debug(f"In-memory LRU cache initialized (max_size={max_size})")

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found/expired
        """
        with self._lock:
            if key not in self.cache:
                self.stats["misses"] += 1
                return None

            if key in self.ttls and time.time() > self.ttls[key]:
                self.cache.pop(key)
                self.ttls.pop(key, None)
                self.stats["misses"] += 1
                return None

            # Move to end (mark as recently used)
            self.cache.move_to_end(key)
            self.stats["hits"] += 1
            return self.cache[key]

    def set(self, key: str, value: Any, ttl: int):
        """
        Set value in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds
        """
        with self._lock:
            if key in self.cache:
                self.cache.pop(key)

            self.cache[key] = value
            self.ttls[key] = time.time() + ttl

            if len(self.cache) > self.max_size:
                oldest_key = next(iter(self.cache))
                self.cache.pop(oldest_key)
                self.ttls.pop(oldest_key, None)
                self.stats["evictions"] += 1

    def delete(self, key: str):
        """Delete key from cache."""
        with self._lock:
            self.cache.pop(key, None)
            self.ttls.pop(key, None)

    def clear(self):
        """Clear all cache entries."""
        with self._lock:
            self.cache.clear()
            self.ttls.clear()

    def size(self) -> int:
        """Get current cache size."""
        return len(self.cache)

    def get_stats(self) -> Dict[str, Any]:
        """Hit/miss counters plus the hit ratio."""
        total = self.stats["hits"] + self.stats["misses"]
        return {
            **self.stats,
            "size": self.size(),
            "hit_ratio": self.stats["hits"] / total if total else 0.0,
        }


# ============================================================================
# CACHE KEY GENERATION
# ============================================================================


def generate_cache_key(namespace: str, params: Dict[str, Any], version: str = "v1") -> str:
    """
    Generate deterministic cache key from a namespace and parameters.

    Args:
        namespace: Logical owner of the entry (e.g., "mlb:players")
        params: Parameters the cached value depends on
        version: Key version for cache invalidation

    Returns:
        Cache key string

    Example:
        >>> generate_cache_key("mlb:players", {"season": 2024})
        "sports_mcp:v1:mlb:players:..."
    """
    param_str = json.dumps(params, sort_keys=True, default=str)
    param_hash = hashlib.md5(param_str.encode()).hexdigest()[:16]

    return f"sports_mcp:{version}:{namespace}:{param_hash}"
