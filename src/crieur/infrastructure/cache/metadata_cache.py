"""
In-memory cache of resolved NFT metadata.

Policy is chosen at construction:
- maxsize None: plain dict, entries live for the process lifetime
- maxsize set: cachetools LRUCache
- maxsize and ttl set: cachetools TTLCache (LRU eviction + expiry)

Only successful resolutions are ever stored; absence is never cached.
"""

import threading
from typing import Any, Dict, MutableMapping, Optional, Union

from cachetools import LRUCache, TTLCache
from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.entities import ResolvedMetadata

MintKey = Union[Pubkey, str]


class MetadataCache:
    """
    Thread-safe mint -> ResolvedMetadata map.

    Keys are normalised to base-58 strings so Pubkey and str lookups
    hit the same entry.
    """

    def __init__(
        self,
        maxsize: Optional[int] = None,
        ttl: Optional[float] = None,
    ):
        """
        Initialize cache.

        Args:
            maxsize: Max entries (None for unbounded)
            ttl: Entry lifetime in seconds (requires maxsize)
        """
        if ttl is not None and maxsize is None:
            raise ValueError("ttl requires maxsize")

        self.maxsize = maxsize
        self.ttl = ttl

        self._store: MutableMapping[str, ResolvedMetadata]
        if maxsize is None:
            self._store = {}
        elif ttl is None:
            self._store = LRUCache(maxsize=maxsize)
        else:
            self._store = TTLCache(maxsize=maxsize, ttl=ttl)

        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _key(mint: MintKey) -> str:
        return str(mint)

    def get(self, mint: MintKey) -> Optional[ResolvedMetadata]:
        """Return cached metadata for mint, None on miss."""
        with self._lock:
            value = self._store.get(self._key(mint))
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def set(self, mint: MintKey, metadata: ResolvedMetadata) -> None:
        """Store metadata for mint, replacing any previous entry."""
        with self._lock:
            self._store[self._key(mint)] = metadata

    def invalidate(self, mint: MintKey) -> bool:
        """
        Drop a single entry.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            return self._store.pop(self._key(mint), None) is not None

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._store.clear()

    def __contains__(self, mint: object) -> bool:
        with self._lock:
            return str(mint) in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._store),
                "maxsize": self.maxsize,
                "ttl": self.ttl,
                "hits": self._hits,
                "misses": self._misses,
            }
