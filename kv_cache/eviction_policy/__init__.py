"""Eviction policies for the in-memory cache."""

from kv_cache.eviction_policy.eviction_policy import (
    EvictionPolicy,
    EvictionPolicyType,
    parse_policy_type,
)
from kv_cache.eviction_policy.lfu_policy import LFUPolicy
from kv_cache.eviction_policy.lru_policy import LRUPolicy
from kv_cache.exceptions import InvalidEvictionPolicyError

__all__ = [
    "EvictionPolicy",
    "EvictionPolicyType",
    "LFUPolicy",
    "LRUPolicy",
    "create_policy",
    "parse_policy_type",
]


def create_policy(policy_type: EvictionPolicyType) -> EvictionPolicy:
    """
    Build a fresh policy instance for the given type.

    Args:
        policy_type: The eviction policy to instantiate

    Returns:
        An empty policy

    Raises:
        InvalidEvictionPolicyError: If the eviction policy is not supported
    """
    if policy_type == EvictionPolicyType.LRU:
        return LRUPolicy()
    elif policy_type == EvictionPolicyType.LFU:
        return LFUPolicy()
    else:
        raise InvalidEvictionPolicyError(str(policy_type))
