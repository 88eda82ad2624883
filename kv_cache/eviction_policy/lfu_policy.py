"""LFU (Least Frequently Used) eviction policy."""

from kv_cache.eviction_policy.eviction_policy import EvictionPolicy, EvictionPolicyType
from kv_cache.exceptions import EmptyEvictionPolicyError


class LFUPolicy(EvictionPolicy):
    """
    Least Frequently Used eviction policy.

    Keeps one access counter per key. Reads and writes both bump the
    counter; a freshly tracked key starts at 1.

    Picking a victim is a linear scan for the smallest counter. Ties go
    to the key that was tracked first, because the scan walks the counter
    dict in insertion order and only replaces the candidate on a strictly
    smaller count. Overwriting a key does not change its position; a key
    that is deleted and set again is tracked anew at the end.
    """

    policy_type = EvictionPolicyType.LFU

    def __init__(self):
        self._counts: dict[str, int] = {}

    def on_get(self, key: str) -> None:
        self._counts[key] = self._counts.get(key, 0) + 1

    def on_set(self, key: str) -> None:
        self._counts[key] = self._counts.get(key, 0) + 1

    def on_del(self, key: str) -> None:
        self._counts.pop(key, None)

    def evict_key(self) -> str:
        if not self._counts:
            raise EmptyEvictionPolicyError(self.policy_type.value)

        victim = None
        min_count = None
        for key, count in self._counts.items():
            if min_count is None or count < min_count:
                min_count = count
                victim = key
        return victim

    def clear(self) -> None:
        self._counts.clear()

    def count(self, key: str) -> int:
        """
        Get the access counter of a key.

        Args:
            key: The key to look up

        Returns:
            The counter, or 0 if the key is not tracked
        """
        return self._counts.get(key, 0)

    def keys(self) -> list[str]:
        """
        Get the tracked keys.

        Returns:
            Keys in first-tracked order, which is also the tie-break order
        """
        return list(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts
