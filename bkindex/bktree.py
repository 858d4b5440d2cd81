from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from .keys import Distance, Key, coerce_key, coerce_tolerance
from .metrics import Metric, resolve_metric
from .models import IndexSettings, Match


class BKNode:
    __slots__ = ("key", "children")

    def __init__(self, key: Key):
        self.key = key
        self.children: Dict[Distance, "BKNode"] = {}  # distance to self.key -> BKNode

    def insert(self, new: Key, metric: Metric) -> bool:
        """Place new below this node. Returns True if a node was created."""
        node = self
        # Loop instead of recursion: chains of equal distances can be arbitrarily deep
        while True:
            if node.key == new:
                return False
            dist = metric(new, node.key)
            child = node.children.get(dist)
            if child is None:
                node.children[dist] = BKNode(new)
                return True
            node = child

    def walk(self, needle: Key, tolerance: Distance, metric: Metric) -> Iterator[Tuple[Key, Distance]]:
        """
        Yield (key, distance) for every key within tolerance of needle.

        Order is pre-order with children visited by ascending edge distance.
        A child at edge distance d can only hold matches if
        |d - d0| <= tolerance (triangle inequality).
        """
        stack = [self]
        while stack:
            node = stack.pop()
            d0 = metric(node.key, needle)
            if d0 <= tolerance:
                yield node.key, d0

            # Pushed in descending order so the smallest edge is popped first
            for dist in sorted(node.children, reverse=True):
                if dist + tolerance >= d0 and d0 + tolerance >= dist:
                    stack.append(node.children[dist])

    def find(self, needle: Key, tolerance: Distance, metric: Metric) -> List[Key]:
        return [key for key, _ in self.walk(needle, tolerance, metric)]

    def contains(self, key: Key, metric: Metric) -> bool:
        """Follow the path insert() would take for key."""
        node = self
        while node.key != key:
            node = node.children.get(metric(key, node.key))
            if node is None:
                return False
        return True

    def keys(self) -> Iterator[Key]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node.key
            for dist in sorted(node.children, reverse=True):
                stack.append(node.children[dist])


class BKTree:
    """
    BK-tree over fixed-width integer hashes.

    Starts empty; the first insert creates the root, after which the tree
    never becomes empty again. Not thread-safe: callers must not run
    find() while an insert() is in progress.
    """

    def __init__(self, metric=None, settings: Optional[IndexSettings] = None):
        self._metric = resolve_metric(metric)
        self.settings = settings or IndexSettings()
        self._root: Optional[BKNode] = None
        self._size = 0
        logger.debug(f"BKTree created: metric={self._metric!r}, key_bits={self.settings.key_bits}")

    @property
    def metric(self) -> Metric:
        return self._metric

    def insert(self, key) -> None:
        """Store key. Re-inserting an identical key is a no-op."""
        key = coerce_key(key, self.settings.key_bits)
        if self._root is None:
            self._root = BKNode(key)
            self._size = 1
            logger.debug(f"BKTree root set to {key:#x}")
            return

        if self._root.insert(key, self._metric):
            self._size += 1

    def extend(self, keys: Iterable) -> int:
        """Insert keys in order. Returns how many were new."""
        before = self._size
        for key in keys:
            self.insert(key)
        added = self._size - before
        logger.debug(f"BKTree extended with {added} new keys ({self._size} total)")
        return added

    def find(self, needle, tolerance: int) -> List[Key]:
        """
        Return all stored keys k with metric(k, needle) <= tolerance.
        Order is the deterministic tree traversal order, not sorted by distance.
        """
        needle = coerce_key(needle, self.settings.key_bits)
        tolerance = coerce_tolerance(tolerance)
        if self._root is None:
            return []
        return self._root.find(needle, tolerance, self._metric)

    def query(self, needle, tolerance: int) -> List[Match]:
        """Same as find(), but each hit carries its distance to needle."""
        needle = coerce_key(needle, self.settings.key_bits)
        tolerance = coerce_tolerance(tolerance)
        if self._root is None:
            return []
        key_bits = self.settings.key_bits
        return [Match(key=key, distance=dist, key_bits=key_bits)
                for key, dist in self._root.walk(needle, tolerance, self._metric)]

    def size(self) -> int:
        """Return number of keys in tree."""
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def __len__(self):
        return self._size

    def __contains__(self, key) -> bool:
        try:
            key = coerce_key(key, self.settings.key_bits)
        except ValueError:
            return False
        if self._root is None:
            return False
        return self._root.contains(key, self._metric)

    def __iter__(self) -> Iterator[Key]:
        if self._root is None:
            return iter(())
        return self._root.keys()

    def __repr__(self):
        return f"BKTree(metric={self._metric!r}, size={self._size})"


def linear_scan(keys: Iterable[Key], needle: Key, tolerance: Distance, metric=None) -> List[Key]:
    """Brute-force reference for BKTree.find: distinct keys within tolerance, first-seen order."""
    metric = resolve_metric(metric)
    seen = set()
    result = []
    for key in keys:
        if key in seen:
            continue
        seen.add(key)
        if metric(key, needle) <= tolerance:
            result.append(key)
    return result
