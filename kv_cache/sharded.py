"""Key-space sharding across independently locked stores."""

import math
import time
import zlib
from typing import Callable, Optional, Union

from kv_cache.base import BaseCache
from kv_cache.eviction_policy import EvictionPolicyType
from kv_cache.exceptions import InvalidShardCountError
from kv_cache.logging_config import get_logger
from kv_cache.kv_store import KVStore

logger = get_logger(__name__)


class ShardedKVStore(BaseCache):
    """
    Spreads keys over several KVStore shards, each with its own lock.

    Keys are routed by CRC32, which is stable across processes (unlike
    ``hash()`` on str). Capacity and eviction are enforced per shard: each
    shard holds at most ``ceil(capacity / shard_count)`` keys and evicts
    only among its own keys, so the whole cache may hold slightly more than
    ``capacity`` keys when the division is not exact, and a busy shard can
    evict while another still has room. ``shard_count`` may not exceed
    ``capacity``.
    """

    def __init__(
        self,
        capacity: int,
        policy: Union[EvictionPolicyType, str] = EvictionPolicyType.LRU,
        shard_count: int = 4,
        *,
        time_fn: Callable[[], float] = time.monotonic,
    ):
        super().__init__(capacity, policy)
        if isinstance(shard_count, bool) or not isinstance(shard_count, int) or shard_count <= 0:
            raise InvalidShardCountError(shard_count)
        if shard_count > self._capacity:
            raise InvalidShardCountError(shard_count, capacity=self._capacity)

        self._shard_capacity = math.ceil(self._capacity / shard_count)
        self._shards = [
            KVStore(self._shard_capacity, self._policy_type, time_fn=time_fn)
            for _ in range(shard_count)
        ]

        logger.info(
            "Created sharded key-value store",
            capacity=self._capacity,
            shard_count=shard_count,
            shard_capacity=self._shard_capacity,
            policy=self._policy_type.value
        )

    @property
    def shard_count(self) -> int:
        return len(self._shards)

    @property
    def shard_capacity(self) -> int:
        """Get the capacity enforced on each shard."""
        return self._shard_capacity

    @property
    def shards(self) -> tuple[KVStore, ...]:
        """Get the shards in routing order."""
        return tuple(self._shards)

    def shard_for(self, key: str) -> KVStore:
        """
        Get the shard responsible for a key.

        Args:
            key: The key to route

        Returns:
            The shard storing the key
        """
        return self._shards[zlib.crc32(key.encode("utf-8")) % len(self._shards)]

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        return self.shard_for(key).set(key, value, ttl)

    def get(self, key: str) -> tuple[Optional[str], bool]:
        return self.shard_for(key).get(key)

    def delete(self, key: str) -> bool:
        return self.shard_for(key).delete(key)

    def size(self) -> int:
        """
        Sum of live keys over all shards.

        Shards are visited one after another, so the total is not a
        single atomic snapshot while writers are active.
        """
        return sum(shard.size() for shard in self._shards)

    def clear(self) -> None:
        for shard in self._shards:
            shard.clear()

    def purge_expired(self) -> int:
        return sum(shard.purge_expired() for shard in self._shards)

    def keys(self) -> list[str]:
        return [key for shard in self._shards for key in shard.keys()]

    def tracked_keys(self) -> list[str]:
        return [key for shard in self._shards for key in shard.tracked_keys()]
