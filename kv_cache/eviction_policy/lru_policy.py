"""LRU (Least Recently Used) eviction policy."""

from typing import Optional

from kv_cache.eviction_policy.eviction_policy import EvictionPolicy, EvictionPolicyType
from kv_cache.exceptions import EmptyEvictionPolicyError


class Node:
    """Node for the recency list."""

    __slots__ = ("key", "prev", "next")

    def __init__(self, key: str):
        self.key = key
        self.prev: Optional['Node'] = None
        self.next: Optional['Node'] = None


class LRUPolicy(EvictionPolicy):
    """
    Least Recently Used eviction policy.

    Keeps keys in a doubly linked list ordered from most recently used
    (head) to least recently used (tail), plus a dict from key to node,
    so touching, removing and picking the victim are all O(1).
    """

    policy_type = EvictionPolicyType.LRU

    def __init__(self):
        self._nodes: dict[str, Node] = {}
        # Dummy head and tail nodes for easier list manipulation
        self._head = Node("")
        self._tail = Node("")
        self._head.next = self._tail
        self._tail.prev = self._head

    def on_get(self, key: str) -> None:
        """Move the key to the head of the list."""
        self._touch(key)

    def on_set(self, key: str) -> None:
        """Writes count as a use: same as ``on_get``."""
        self._touch(key)

    def on_del(self, key: str) -> None:
        node = self._nodes.pop(key, None)
        if node is not None:
            self._unlink(node)

    def evict_key(self) -> str:
        """Return the key at the tail (least recently used)."""
        lru_node = self._tail.prev
        if lru_node is self._head:
            raise EmptyEvictionPolicyError(self.policy_type.value)
        return lru_node.key

    def clear(self) -> None:
        self._nodes.clear()
        self._head.next = self._tail
        self._tail.prev = self._head

    def keys(self) -> list[str]:
        """
        Get the tracked keys.

        Returns:
            Keys ordered from most recently used to least recently used
        """
        keys = []
        node = self._head.next
        while node is not self._tail:
            keys.append(node.key)
            node = node.next
        return keys

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def _touch(self, key: str) -> None:
        node = self._nodes.get(key)
        if node is None:
            node = Node(key)
            self._nodes[key] = node
        else:
            self._unlink(node)

        # Insert after head
        node.next = self._head.next
        node.prev = self._head
        self._head.next.prev = node
        self._head.next = node

    def _unlink(self, node: Node) -> None:
        prev_node = node.prev
        next_node = node.next

        if prev_node:
            prev_node.next = next_node
        if next_node:
            next_node.prev = prev_node
        node.prev = None
        node.next = None
