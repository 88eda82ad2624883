"""In-memory key-value cache with LRU/LFU eviction and per-entry TTL."""

from kv_cache.base import BaseCache
from kv_cache.cache_factory import create_cache, get_in_memory_cache, reset_in_memory_cache
from kv_cache.config import CacheSettings, settings
from kv_cache.eviction_policy import EvictionPolicy, EvictionPolicyType, LFUPolicy, LRUPolicy
from kv_cache.exceptions import (
    CacheError,
    EmptyEvictionPolicyError,
    InvalidCapacityError,
    InvalidEvictionPolicyError,
    InvalidShardCountError
)
from kv_cache.kv_store import KVStore
from kv_cache.logging_config import configure_logging
from kv_cache.reaper import ExpiryReaper
from kv_cache.sharded import ShardedKVStore

__version__ = "1.0.0"

__all__ = [
    "create_cache",
    "get_in_memory_cache",
    "reset_in_memory_cache",
    "configure_logging",
    "CacheSettings",
    "settings",
    "BaseCache",
    "KVStore",
    "ShardedKVStore",
    "ExpiryReaper",
    "EvictionPolicy",
    "EvictionPolicyType",
    "LRUPolicy",
    "LFUPolicy",
    "CacheError",
    "EmptyEvictionPolicyError",
    "InvalidCapacityError",
    "InvalidEvictionPolicyError",
    "InvalidShardCountError",
]
