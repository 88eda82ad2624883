import copy

import pytest

from kv_cache import EvictionPolicyType, KVStore
from kv_cache.exceptions import InvalidCapacityError, InvalidEvictionPolicyError


def test_basic_set_get():
    store = KVStore(10, EvictionPolicyType.LRU)
    assert store.set("a", "1") is True
    assert store.get("a") == ("1", True)
    assert store.get("missing") == (None, False)


def test_delete():
    store = KVStore(10, "LRU")
    store.set("a", "1")
    store.set("b", "2")

    assert store.delete("a") is True
    assert store.size() == 1
    assert store.get("a") == (None, False)

    assert store.delete("a") is False
    assert store.delete("never") is False
    assert store.size() == 1


def test_update_does_not_grow_size():
    store = KVStore(10)
    store.set("a", "1")
    store.set("a", "2")
    assert store.size() == 1
    assert store.get("a") == ("2", True)


def test_lru_eviction():
    store = KVStore(2, EvictionPolicyType.LRU)
    store.set("a", "1")
    store.set("b", "2")
    store.get("a")
    store.set("c", "3")

    assert store.get("a") == ("1", True)
    assert store.get("b") == (None, False)
    assert store.get("c") == ("3", True)
    assert store.size() == 2


def test_lfu_eviction():
    store = KVStore(2, EvictionPolicyType.LFU)
    store.set("a", "1")
    store.set("b", "2")
    store.get("a")
    store.get("a")
    store.set("c", "3")

    assert store.get("a") == ("1", True)
    assert store.get("b") == (None, False)
    assert store.get("c") == ("3", True)


def test_lfu_tie_evicts_first_inserted():
    store = KVStore(2, EvictionPolicyType.LFU)
    store.set("b", "1")
    store.set("a", "2")
    store.set("c", "3")

    assert store.get("b") == (None, False)
    assert store.get("a") == ("2", True)


def test_overwrite_at_capacity_does_not_evict():
    for policy in EvictionPolicyType:
        store = KVStore(2, policy)
        store.set("a", "1")
        store.set("b", "2")
        store.set("a", "3")
        assert store.get("a") == ("3", True)
        assert store.get("b") == ("2", True)


def test_capacity_never_exceeded():
    for policy in EvictionPolicyType:
        store = KVStore(5, policy)
        for i in range(50):
            store.set(f"k{i % 13}", str(i))
            if i % 3 == 0:
                store.get(f"k{i % 7}")
            assert store.size() <= 5


def test_ttl_expiry(clock):
    store = KVStore(10, time_fn=clock)
    store.set("temp", "123", ttl=1)

    clock.advance(0.5)
    assert store.get("temp") == ("123", True)

    clock.advance(0.5)
    assert store.get("temp") == (None, False)
    assert store.size() == 0


def test_size_purges_expired_without_get(clock):
    store = KVStore(10, time_fn=clock)
    store.set("short", "1", ttl=2)
    store.set("long", "2", ttl=100)
    store.set("forever", "3")

    clock.advance(5)
    assert store.size() == 2
    assert "short" not in store.keys()
    assert "short" not in store.tracked_keys()


def test_no_ttl_never_expires(clock):
    store = KVStore(10, time_fn=clock)
    store.set("a", "1")
    store.set("b", "2", ttl=-1)
    store.set("c", "3", ttl=None)

    clock.advance(10 ** 9)
    assert store.get("a") == ("1", True)
    assert store.get("b") == ("2", True)
    assert store.size() == 3


def test_zero_ttl_expires_immediately(clock):
    store = KVStore(10, time_fn=clock)
    store.set("a", "1", ttl=0)
    assert store.get("a") == (None, False)


def test_update_replaces_expiry(clock):
    store = KVStore(10, time_fn=clock)
    store.set("a", "1", ttl=1)
    store.set("a", "2")
    clock.advance(5)
    assert store.get("a") == ("2", True)

    store.set("a", "3", ttl=1)
    clock.advance(5)
    assert store.get("a") == (None, False)


def test_delete_of_expired_key_reports_absent_and_purges(clock):
    store = KVStore(10, time_fn=clock)
    store.set("a", "1", ttl=1)
    clock.advance(2)

    assert store.delete("a") is False
    assert "a" not in store.keys()
    assert store.tracked_keys() == []


def test_expired_purge_keeps_policy_in_sync(clock):
    store = KVStore(2, EvictionPolicyType.LRU, time_fn=clock)
    store.set("a", "1", ttl=1)
    store.set("b", "2")
    clock.advance(2)

    assert store.get("a") == (None, False)
    store.set("c", "3")
    store.set("d", "4")
    assert store.get("b") == (None, False)
    assert set(store.keys()) == set(store.tracked_keys()) == {"c", "d"}


def test_purge_expired_returns_count(clock):
    store = KVStore(10, EvictionPolicyType.LFU, time_fn=clock)
    store.set("a", "1", ttl=1)
    store.set("b", "2", ttl=1)
    store.set("c", "3")
    clock.advance(1)

    assert store.purge_expired() == 2
    assert store.purge_expired() == 0
    assert store.size() == 1


def test_clear():
    store = KVStore(3, EvictionPolicyType.LFU)
    store.set("a", "1")
    store.set("b", "2")
    store.clear()
    assert store.size() == 0
    assert store.tracked_keys() == []
    store.set("c", "3")
    assert store.get("c") == ("3", True)


def test_properties():
    store = KVStore(7, "lfu")
    assert store.capacity == 7
    assert store.policy is EvictionPolicyType.LFU


@pytest.mark.parametrize("capacity", [0, -1, 2.5, "10", None, True])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(InvalidCapacityError):
        KVStore(capacity)


def test_invalid_policy_rejected():
    with pytest.raises(InvalidEvictionPolicyError):
        KVStore(10, "MRU")


def test_store_cannot_be_copied():
    store = KVStore(10)
    with pytest.raises(TypeError):
        copy.copy(store)
    with pytest.raises(TypeError):
        copy.deepcopy(store)


def test_keys_include_unpurged_expired_entries(clock):
    store = KVStore(10, EvictionPolicyType.LRU, time_fn=clock)
    store.set("a", "1", ttl=1)
    store.set("b", "2")
    clock.advance(2)

    assert store.keys() == ["a", "b"]
    assert store.tracked_keys() == ["b", "a"]
    store.size()
    assert store.keys() == store.tracked_keys() == ["b"]
