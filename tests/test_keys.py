import pytest
from bkindex.keys import (
    MAX_DISTANCE,
    MAX_KEY,
    InvalidKeyError,
    InvalidToleranceError,
    coerce_key,
    coerce_tolerance,
)


class TestCoerceKey:
    def test_int_passthrough(self):
        assert coerce_key(0) == 0
        assert coerce_key(MAX_KEY) == MAX_KEY

    def test_hex_strings(self):
        """Perceptual hashes are usually stored as 16-char hex strings."""
        assert coerce_key("ffd8e0c0c0e0f0f8") == 0xffd8e0c0c0e0f0f8
        assert coerce_key("0x6AF7") == 0x6af7
        assert coerce_key(" 2af7 ") == 0x2af7

    @pytest.mark.parametrize("value", ["", "0x", "xyz", "-1", "1_0", "12 34"])
    def test_bad_hex_strings(self, value):
        with pytest.raises(InvalidKeyError):
            coerce_key(value)

    @pytest.mark.parametrize("value", [-1, MAX_KEY + 1, True, 1.0, None, b"ff"])
    def test_out_of_domain(self, value):
        with pytest.raises(InvalidKeyError):
            coerce_key(value)

    def test_narrow_width(self):
        assert coerce_key(0xff, key_bits=8) == 0xff
        with pytest.raises(InvalidKeyError):
            coerce_key(0x100, key_bits=8)

    def test_is_value_error(self):
        assert issubclass(InvalidKeyError, ValueError)


class TestCoerceTolerance:
    def test_valid(self):
        assert coerce_tolerance(0) == 0
        assert coerce_tolerance(MAX_DISTANCE) == MAX_DISTANCE

    @pytest.mark.parametrize("value", [-1, MAX_DISTANCE + 1, 1.5, "2", False])
    def test_invalid(self, value):
        with pytest.raises(InvalidToleranceError):
            coerce_tolerance(value)
