"""Custom exceptions for in-memory cache operations."""


class CacheError(Exception):
    """Base class for every error raised by the cache library."""


class InvalidEvictionPolicyError(CacheError):
    """Raised when an invalid eviction policy is provided."""

    def __init__(self, policy: str):
        self.policy = policy
        super().__init__(f"Invalid eviction policy: {policy}. Supported policies: LRU, LFU")


class InvalidCapacityError(CacheError):
    """Raised when an invalid capacity is provided."""

    def __init__(self, capacity):
        self.capacity = capacity
        super().__init__(f"Invalid capacity: {capacity!r}. Must be a positive integer greater than 0")


class InvalidShardCountError(CacheError):
    """Raised when a sharded cache is requested with fewer than one shard or more shards than keys."""

    def __init__(self, shard_count, capacity=None):
        self.shard_count = shard_count
        self.capacity = capacity
        if capacity is None:
            message = f"Invalid shard_count: {shard_count!r}. Must be a positive integer greater than 0"
        else:
            message = f"Invalid shard_count: {shard_count!r}. Must not exceed capacity {capacity}"
        super().__init__(message)


class EmptyEvictionPolicyError(CacheError):
    """Raised when an eviction victim is requested but no key is tracked."""

    def __init__(self, policy: str):
        self.policy = policy
        super().__init__(f"{policy} policy has no tracked keys to evict")
