"""Eviction policy definitions for in-memory cache."""

from abc import ABC, abstractmethod
from enum import Enum

from kv_cache.exceptions import InvalidEvictionPolicyError


class EvictionPolicyType(str, Enum):
    """Enumeration of supported eviction policies."""

    LRU = "LRU"  # Least Recently Used
    LFU = "LFU"  # Least Frequently Used


class EvictionPolicy(ABC):
    """
    Strategy that tracks per-key usage and picks eviction victims.

    The owning cache calls the hooks below while holding its lock, so
    implementations are not thread-safe on their own. A policy never
    touches the cache's entries: ``evict_key`` only names a victim and
    the cache removes it, which in turn calls ``on_del``.
    """

    policy_type: EvictionPolicyType

    @abstractmethod
    def on_get(self, key: str) -> None:
        """
        Record that a live key was just read.

        Args:
            key: A key currently stored in the cache
        """
        pass

    @abstractmethod
    def on_set(self, key: str) -> None:
        """
        Record that a key was just inserted or overwritten.

        Args:
            key: The key that was written
        """
        pass

    @abstractmethod
    def on_del(self, key: str) -> None:
        """
        Forget all bookkeeping for a key. Untracked keys are ignored.

        Args:
            key: The key that was removed
        """
        pass

    @abstractmethod
    def evict_key(self) -> str:
        """
        Choose the key to sacrifice under capacity pressure.

        The key stays tracked until the cache removes it.

        Returns:
            The victim key

        Raises:
            EmptyEvictionPolicyError: If no key is tracked
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget every tracked key."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """
        Get the tracked keys.

        Returns:
            A new list of tracked keys in the policy's own order
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        pass


def parse_policy_type(policy) -> EvictionPolicyType:
    """
    Normalize a policy selector.

    Args:
        policy: An EvictionPolicyType or a case-insensitive name ("lru", "LFU")

    Returns:
        The matching EvictionPolicyType

    Raises:
        InvalidEvictionPolicyError: If the policy is not supported
    """
    if isinstance(policy, EvictionPolicyType):
        return policy
    if isinstance(policy, str):
        try:
            return EvictionPolicyType(policy.strip().upper())
        except ValueError:
            raise InvalidEvictionPolicyError(policy)
    raise InvalidEvictionPolicyError(str(policy))
