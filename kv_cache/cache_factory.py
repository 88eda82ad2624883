"""Factory for creating cache instances based on eviction policy."""

import threading
from typing import Optional, Union

from kv_cache.base import BaseCache, validate_capacity
from kv_cache.config import settings
from kv_cache.eviction_policy import EvictionPolicyType, parse_policy_type
from kv_cache.exceptions import InvalidShardCountError
from kv_cache.logging_config import get_logger
from kv_cache.kv_store import KVStore
from kv_cache.reaper import ExpiryReaper
from kv_cache.sharded import ShardedKVStore

logger = get_logger(__name__)

# Singleton cache instance
_cache_instance: Optional[BaseCache] = None
_reaper: Optional[ExpiryReaper] = None
_cache_lock = threading.Lock()


def create_cache(
    eviction_policy: Union[EvictionPolicyType, str],
    capacity: int,
    *,
    shard_count: int = 1
) -> BaseCache:
    """
    Create a cache instance based on the specified eviction policy.

    Args:
        eviction_policy: The eviction policy to use (LRU or LFU), as an enum or
                        a case-insensitive string
        capacity: Maximum number of keys the cache can hold
        shard_count: Number of independently locked shards; 1 returns a plain KVStore

    Returns:
        A cache instance implementing the BaseCache interface

    Raises:
        InvalidEvictionPolicyError: If the eviction policy is not supported
        InvalidCapacityError: If capacity is invalid
        InvalidShardCountError: If shard_count is invalid
    """
    validate_capacity(capacity)
    policy_type = parse_policy_type(eviction_policy)

    if isinstance(shard_count, bool) or not isinstance(shard_count, int) or shard_count <= 0:
        raise InvalidShardCountError(shard_count)

    if shard_count == 1:
        return KVStore(capacity, policy_type)
    return ShardedKVStore(capacity, policy_type, shard_count)


def get_in_memory_cache(
    eviction_policy: Optional[Union[EvictionPolicyType, str]] = None,
    capacity: Optional[int] = None
) -> BaseCache:
    """
    Get the singleton in-memory cache instance.

    On first call, initializes the cache with the provided parameters.
    On subsequent calls, returns the same instance (parameters are ignored).
    Missing parameters, the shard count and the sweep interval come from
    ``kv_cache.config.settings``.

    Args:
        eviction_policy: Optional eviction policy to use (LRU or LFU).
                        Defaults to ``settings.eviction_policy`` on first call.
        capacity: Optional maximum number of keys the cache can hold.
                 Defaults to ``settings.capacity`` on first call.

    Returns:
        The singleton cache instance implementing the BaseCache interface

    Raises:
        InvalidEvictionPolicyError: If the eviction policy is not supported (only on first call)
        InvalidCapacityError: If capacity is invalid (only on first call)

    Example:
        # First call - initializes from settings (LRU, 1000 by default)
        cache = get_in_memory_cache()

        # Subsequent calls - returns same instance, parameters ignored
        cache2 = get_in_memory_cache(EvictionPolicyType.LFU, 2000)  # Same instance as cache
    """
    global _cache_instance, _reaper

    # Double-checked locking pattern for thread-safe singleton
    if _cache_instance is None:
        with _cache_lock:
            if _cache_instance is None:
                if eviction_policy is None:
                    eviction_policy = settings.eviction_policy
                if capacity is None:
                    capacity = settings.capacity

                cache = create_cache(eviction_policy, capacity, shard_count=settings.shard_count)
                if settings.sweep_interval_seconds is not None:
                    _reaper = ExpiryReaper(cache, settings.sweep_interval_seconds)
                    _reaper.start()
                _cache_instance = cache

    return _cache_instance


def reset_in_memory_cache() -> None:
    """Stop the singleton's reaper, if any, and drop the singleton."""
    global _cache_instance, _reaper

    with _cache_lock:
        if _reaper is not None:
            _reaper.stop()
            _reaper = None
        if _cache_instance is not None:
            logger.info("Reset in-memory cache singleton")
        _cache_instance = None
