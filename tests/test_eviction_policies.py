import pytest

from kv_cache.eviction_policy import (
    EvictionPolicyType,
    LFUPolicy,
    LRUPolicy,
    create_policy,
    parse_policy_type,
)
from kv_cache.exceptions import EmptyEvictionPolicyError, InvalidEvictionPolicyError


def test_lru_evicts_least_recently_touched():
    policy = LRUPolicy()
    policy.on_set("a")
    policy.on_set("b")
    policy.on_set("c")
    assert policy.evict_key() == "a"

    policy.on_get("a")
    assert policy.evict_key() == "b"
    assert policy.keys() == ["a", "c", "b"]


def test_lru_overwrite_counts_as_access():
    policy = LRUPolicy()
    policy.on_set("a")
    policy.on_set("b")
    policy.on_set("a")
    assert policy.evict_key() == "b"
    assert len(policy) == 2


def test_lru_evict_key_does_not_untrack():
    policy = LRUPolicy()
    policy.on_set("a")
    assert policy.evict_key() == "a"
    assert "a" in policy
    assert policy.evict_key() == "a"


def test_lru_delete_is_idempotent():
    policy = LRUPolicy()
    policy.on_set("a")
    policy.on_set("b")
    policy.on_del("a")
    policy.on_del("a")
    policy.on_del("never-seen")
    assert policy.keys() == ["b"]
    assert policy.evict_key() == "b"


def test_lru_clear():
    policy = LRUPolicy()
    policy.on_set("a")
    policy.clear()
    assert len(policy) == 0
    assert policy.keys() == []
    policy.on_set("b")
    assert policy.evict_key() == "b"


def test_lfu_counts_reads_and_writes():
    policy = LFUPolicy()
    policy.on_set("a")
    assert policy.count("a") == 1
    policy.on_get("a")
    policy.on_set("a")
    assert policy.count("a") == 3
    assert policy.count("missing") == 0


def test_lfu_evicts_lowest_count():
    policy = LFUPolicy()
    policy.on_set("a")
    policy.on_set("b")
    policy.on_get("a")
    policy.on_get("a")
    assert policy.evict_key() == "b"


def test_lfu_ties_go_to_first_tracked_key():
    policy = LFUPolicy()
    for key in ("m", "z", "a"):
        policy.on_set(key)
    assert policy.evict_key() == "m"

    policy.on_get("m")
    assert policy.evict_key() == "z"


def test_lfu_retracked_key_moves_to_end_of_tie_order():
    policy = LFUPolicy()
    policy.on_set("a")
    policy.on_set("b")
    policy.on_del("a")
    policy.on_set("a")
    assert policy.count("a") == 1
    assert policy.evict_key() == "b"


def test_lfu_delete_is_idempotent():
    policy = LFUPolicy()
    policy.on_set("a")
    policy.on_del("a")
    policy.on_del("a")
    assert len(policy) == 0
    assert "a" not in policy


@pytest.mark.parametrize("policy_cls", [LRUPolicy, LFUPolicy])
def test_evict_on_empty_policy_raises(policy_cls):
    with pytest.raises(EmptyEvictionPolicyError):
        policy_cls().evict_key()


def test_parse_policy_type():
    assert parse_policy_type("lru") is EvictionPolicyType.LRU
    assert parse_policy_type(" LFU ") is EvictionPolicyType.LFU
    assert parse_policy_type(EvictionPolicyType.LFU) is EvictionPolicyType.LFU

    with pytest.raises(InvalidEvictionPolicyError):
        parse_policy_type("FIFO")
    with pytest.raises(InvalidEvictionPolicyError):
        parse_policy_type(3)


def test_create_policy():
    assert isinstance(create_policy(EvictionPolicyType.LRU), LRUPolicy)
    assert isinstance(create_policy(EvictionPolicyType.LFU), LFUPolicy)


def test_lfu_keys_follow_tie_break_order():
    policy = LFUPolicy()
    for key in ("c", "a", "b"):
        policy.on_set(key)
    policy.on_get("c")
    assert policy.keys() == ["c", "a", "b"]
    assert policy.evict_key() == "a"
