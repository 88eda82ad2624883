"""Thread-safe key-value store with LRU/LFU eviction and per-entry TTL."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from kv_cache import metrics
from kv_cache.base import BaseCache
from kv_cache.eviction_policy import EvictionPolicyType, create_policy
from kv_cache.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Entry:
    """Cache entry; ``expiry`` is a monotonic deadline or None for no TTL."""
    value: str
    expiry: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expiry is not None and now >= self.expiry


class KVStore(BaseCache):
    """
    Thread-safe in-memory key-value store.

    One lock guards both the entry map and the eviction policy, and every
    public method holds it for its whole duration. Expiration is lazy:
    an entry past its deadline stays in memory until ``get``, ``delete``,
    ``size`` or ``purge_expired`` observes it. All removals (deletes,
    expiry purges and evictions) go through ``_remove_key`` so the map and
    the policy never disagree about which keys exist.
    """

    def __init__(
        self,
        capacity: int,
        policy: Union[EvictionPolicyType, str] = EvictionPolicyType.LRU,
        *,
        time_fn: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the store.

        Args:
            capacity: Maximum number of keys the store can hold
            policy: Eviction policy (LRU or LFU)
            time_fn: Monotonic clock used for TTL deadlines

        Raises:
            InvalidCapacityError: If capacity is invalid
            InvalidEvictionPolicyError: If the eviction policy is not supported
        """
        super().__init__(capacity, policy)
        self._time_fn = time_fn
        self._entries: dict[str, Entry] = {}
        self._eviction = create_policy(self._policy_type)
        self._lock = threading.Lock()

        logger.info(
            "Created key-value store",
            capacity=self._capacity,
            policy=self._policy_type.value
        )

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Insert or overwrite a key.

        Overwriting replaces value and expiry in place and never evicts.
        Inserting a new key into a full store evicts exactly one victim
        chosen by the policy.

        Args:
            key: The key to store
            value: The value to store
            ttl: Lifetime in seconds; None or negative means no expiry

        Returns:
            Always True
        """
        evicted = None
        with self._lock:
            expiry = None
            if ttl is not None and ttl >= 0:
                expiry = self._time_fn() + ttl

            entry = self._entries.get(key)
            if entry is not None:
                entry.value = value
                entry.expiry = expiry
            else:
                self._entries[key] = Entry(value, expiry)
            self._eviction.on_set(key)

            # Only inserts grow the map
            if entry is None and len(self._entries) > self._capacity:
                evicted = self._eviction.evict_key()
                self._remove_key(evicted)

        metrics.record_request("set", "ok")
        if evicted is not None:
            metrics.record_eviction(self._policy_type.value)
            logger.debug("Evicted key", key=evicted, policy=self._policy_type.value)
        return True

    def get(self, key: str) -> tuple[Optional[str], bool]:
        """
        Get a value from the cache by key.

        An expired entry is purged and reported as a miss.

        Args:
            key: The key to look up

        Returns:
            ``(value, True)`` on a live hit, ``(None, False)`` otherwise
        """
        expired = False
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                value = None
            elif entry.is_expired(self._time_fn()):
                self._remove_key(key)
                expired = True
                value = None
            else:
                self._eviction.on_get(key)
                value = entry.value
            found = entry is not None and not expired

        metrics.record_request("get", "hit" if found else "miss")
        if expired:
            metrics.record_expirations(1)
            logger.debug("Purged expired key", key=key, operation="get")
        return value, found

    def delete(self, key: str) -> bool:
        """
        Remove a key from the cache.

        An expired entry is purged as well but reported as absent.

        Args:
            key: The key to remove

        Returns:
            True if a live entry was removed, False otherwise
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                removed = False
                expired = False
            else:
                expired = entry.is_expired(self._time_fn())
                self._remove_key(key)
                removed = not expired

        metrics.record_request("delete", "hit" if removed else "miss")
        if expired:
            metrics.record_expirations(1)
            logger.debug("Purged expired key", key=key, operation="delete")
        return removed

    def size(self) -> int:
        """
        Get the number of live keys.

        Scans every entry and purges the expired ones, so the cost grows
        with the number of stored entries.

        Returns:
            The number of non-expired keys currently in the cache
        """
        with self._lock:
            purged = self._purge_expired_locked()
            count = len(self._entries)

        self._report_purge(purged, operation="size")
        return count

    def purge_expired(self) -> int:
        with self._lock:
            purged = self._purge_expired_locked()

        self._report_purge(purged, operation="purge")
        return purged

    def clear(self) -> None:
        """Clear all entries from the cache."""
        with self._lock:
            self._entries.clear()
            self._eviction.clear()

    def keys(self) -> list[str]:
        """
        Snapshot of the stored keys.

        Expired entries that no operation has purged yet are included.

        Returns:
            The keys in insertion order
        """
        with self._lock:
            return list(self._entries)

    def tracked_keys(self) -> list[str]:
        """
        Snapshot of the keys the eviction policy is tracking.

        Returns:
            The keys in the policy's own order (recency for LRU, first
            tracked for LFU)
        """
        with self._lock:
            return self._eviction.keys()

    def _purge_expired_locked(self) -> int:
        now = self._time_fn()
        expired_keys = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired_keys:
            self._remove_key(key)
        return len(expired_keys)

    def _report_purge(self, purged: int, operation: str) -> None:
        if purged:
            metrics.record_expirations(purged)
            logger.debug("Purged expired keys", count=purged, operation=operation)

    def _remove_key(self, key: str) -> None:
        """Drop a key from the map and the policy. Caller holds the lock."""
        self._entries.pop(key, None)
        self._eviction.on_del(key)
