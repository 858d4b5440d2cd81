import random

import pytest
from bkindex.metrics import (
    FunctionMetric,
    HammingMetric,
    Metric,
    WeightedHammingMetric,
    hamming_distance,
    resolve_metric,
)


class TestHammingMetric:
    def test_known_distances(self):
        m = HammingMetric()
        assert m.distance(0, 0) == 0
        assert m.distance(0x6bf6, 0x6af7) == 2
        assert m.distance(0x6bf6, 0x2af7) == 3
        assert m(0, 0xffffffffffffffff) == 64

    def test_function_form_matches(self):
        assert hamming_distance(0x1bf6, 0x2af7) == HammingMetric()(0x1bf6, 0x2af7) == 4

    def test_metric_axioms_on_samples(self):
        m = HammingMetric()
        rng = random.Random(3)
        for _ in range(200):
            a, b, c = (rng.getrandbits(64) for _ in range(3))
            assert m(a, a) == 0
            assert m(a, b) == m(b, a)
            assert m(a, c) <= m(a, b) + m(b, c)


class TestWeightedHammingMetric:
    def test_weights_apply_per_bit(self):
        m = WeightedHammingMetric([1, 10, 100])
        assert m(0b000, 0b001) == 1
        assert m(0b000, 0b110) == 110
        assert m(0b111, 0b000) == 111

    def test_bits_beyond_weights_are_ignored(self):
        m = WeightedHammingMetric([1, 1])
        assert m(0b100, 0) == 0
        assert m(0b101, 0) == 1

    def test_rejects_negative_weight(self):
        with pytest.raises(ValueError):
            WeightedHammingMetric([1, -1])

    def test_rejects_too_many_weights(self):
        with pytest.raises(ValueError):
            WeightedHammingMetric([1] * 65)

    def test_uniform_weights_equal_hamming(self):
        m = WeightedHammingMetric([1] * 64)
        rng = random.Random(5)
        for _ in range(100):
            a, b = rng.getrandbits(64), rng.getrandbits(64)
            assert m(a, b) == hamming_distance(a, b)


class TestResolveMetric:
    def test_none_gives_hamming(self):
        assert isinstance(resolve_metric(None), HammingMetric)

    def test_instance_passthrough(self):
        m = WeightedHammingMetric([2])
        assert resolve_metric(m) is m

    def test_callable_is_wrapped(self):
        m = resolve_metric(lambda a, b: abs(a - b))
        assert isinstance(m, FunctionMetric)
        assert m(3, 10) == 7

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            resolve_metric("hamming")

    def test_metric_is_abstract(self):
        with pytest.raises(TypeError):
            Metric()
