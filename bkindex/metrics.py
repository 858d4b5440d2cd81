"""
Distance Metrics Module.

A metric maps two keys to an unsigned distance. The tree relies on
d(a, a) == 0, symmetry and the triangle inequality to prune subtrees;
none of these are checked at runtime.
"""
from abc import ABC, abstractmethod
from typing import Callable, Sequence

from .keys import Distance, Key, KEY_BITS


def hamming_distance(a: Key, b: Key) -> Distance:
    """Number of differing bits between two integer hashes."""
    return (a ^ b).bit_count()


class Metric(ABC):
    """
    Strategy interface for distance functions.
    Subclasses must be pure: same inputs, same output, no side effects.
    """

    @abstractmethod
    def distance(self, a: Key, b: Key) -> Distance:
        """Return the distance between two keys."""
        pass

    def __call__(self, a: Key, b: Key) -> Distance:
        return self.distance(a, b)

    def __repr__(self):
        return f"{type(self).__name__}()"


class HammingMetric(Metric):
    """Popcount of XOR. Default metric for perceptual hashes."""

    def distance(self, a: Key, b: Key) -> Distance:
        return hamming_distance(a, b)


class WeightedHammingMetric(Metric):
    """
    Hamming distance where each differing bit contributes its own weight.

    weights[i] applies to bit i (bit 0 = least significant). Bits beyond
    len(weights) contribute nothing. A zero weight makes the metric a
    pseudometric: distinct keys can then sit at distance 0.
    """

    def __init__(self, weights: Sequence[int]):
        weights = tuple(weights)
        if len(weights) > KEY_BITS:
            raise ValueError(f"At most {KEY_BITS} weights allowed, got {len(weights)}")
        for i, w in enumerate(weights):
            if isinstance(w, bool) or not isinstance(w, int) or w < 0:
                raise ValueError(f"Weight for bit {i} must be a non-negative int, got {w!r}")
        self.weights = weights

    def distance(self, a: Key, b: Key) -> Distance:
        diff = a ^ b
        total = 0
        bit = 0
        while diff and bit < len(self.weights):
            if diff & 1:
                total += self.weights[bit]
            diff >>= 1
            bit += 1
        return total

    def __repr__(self):
        return f"WeightedHammingMetric(weights={list(self.weights)})"


class FunctionMetric(Metric):
    """Adapts a plain callable(a, b) -> int into a Metric."""

    def __init__(self, func: Callable[[Key, Key], Distance]):
        self.func = func

    def distance(self, a: Key, b: Key) -> Distance:
        return self.func(a, b)

    def __repr__(self):
        name = getattr(self.func, "__name__", repr(self.func))
        return f"FunctionMetric({name})"


def resolve_metric(metric=None) -> Metric:
    """
    Turn the user-facing metric argument into a Metric instance.
    None -> HammingMetric, Metric -> itself, callable -> FunctionMetric.
    """
    if metric is None:
        return HammingMetric()
    if isinstance(metric, Metric):
        return metric
    if isinstance(metric, type) and issubclass(metric, Metric):
        return metric()
    if callable(metric):
        return FunctionMetric(metric)
    raise TypeError(f"Metric must be a Metric or callable, got {type(metric).__name__}")
