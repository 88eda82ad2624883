"""Base cache interface for in-memory cache implementations."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from kv_cache.eviction_policy.eviction_policy import EvictionPolicyType, parse_policy_type
from kv_cache.exceptions import InvalidCapacityError


def validate_capacity(capacity) -> int:
    """
    Check that a capacity is a positive integer.

    Args:
        capacity: The requested capacity

    Returns:
        The capacity unchanged

    Raises:
        InvalidCapacityError: If capacity is not a positive int
    """
    # bool is an int subclass; True is not a meaningful capacity
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidCapacityError(capacity)
    return capacity


class BaseCache(ABC):
    """
    Abstract base class for cache implementations.

    Capacity and eviction policy are fixed at construction. Instances own
    their lock and policy bookkeeping, so they refuse to be copied; pass
    the reference around instead.
    """

    def __init__(self, capacity: int, policy: Union[EvictionPolicyType, str]):
        """
        Initialize the cache.

        Args:
            capacity: Maximum number of keys the cache can hold
            policy: Eviction policy (LRU or LFU)

        Raises:
            InvalidCapacityError: If capacity is invalid
            InvalidEvictionPolicyError: If the eviction policy is not supported
        """
        self._capacity = validate_capacity(capacity)
        self._policy_type = parse_policy_type(policy)

    @abstractmethod
    def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Insert or overwrite a key.

        Args:
            key: The key to store
            value: The value to store
            ttl: Lifetime in seconds; None or negative means no expiry

        Returns:
            True for every well-formed call
        """
        pass

    @abstractmethod
    def get(self, key: str) -> tuple[Optional[str], bool]:
        """
        Get a value from the cache by key.

        Args:
            key: The key to look up

        Returns:
            ``(value, True)`` on a live hit, ``(None, False)`` otherwise
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key from the cache.

        Args:
            key: The key to remove

        Returns:
            True if a live entry was removed
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Get the number of live keys, purging expired ones on the way.

        Returns:
            The number of non-expired keys currently in the cache
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all entries from the cache."""
        pass

    @abstractmethod
    def purge_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            How many entries were removed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """
        Snapshot of the stored keys, including expired ones not yet purged.

        Returns:
            The stored keys
        """
        pass

    @abstractmethod
    def tracked_keys(self) -> list[str]:
        """
        Snapshot of the keys the eviction policy is tracking.

        Returns:
            The tracked keys
        """
        pass

    @property
    def capacity(self) -> int:
        """Get the maximum number of keys the cache can hold."""
        return self._capacity

    @property
    def policy(self) -> EvictionPolicyType:
        """Get the eviction policy the cache was built with."""
        return self._policy_type

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied")
