"""
Key and Distance domain.

Keys are fixed-width unsigned integers (64-bit perceptual hashes by default).
Distances are unsigned integers wide enough for any metric output.
Hashes are often stored as hex strings, so those are accepted too.
"""
from typing import Union

Key = int
Distance = int

KEY_BITS = 64
MAX_KEY = (1 << KEY_BITS) - 1
MAX_DISTANCE = (1 << 32) - 1


class InvalidKeyError(ValueError):
    """Raised when a value cannot be used as a key of the configured width."""


class InvalidToleranceError(ValueError):
    """Raised when a tolerance is not a non-negative 32-bit integer."""


def coerce_key(value: Union[int, str], key_bits: int = KEY_BITS) -> Key:
    """
    Normalize an int or hex string (e.g. 'ffd8e0c0c0e0f0f8') into a Key.

    Raises:
        InvalidKeyError: value is not an integer/hex string or does not fit in key_bits.
    """
    if isinstance(value, bool):
        raise InvalidKeyError(f"Key must be an integer, got bool {value!r}")

    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0x"):
            text = text[2:]
        try:
            key = int(text, 16)
        except ValueError:
            raise InvalidKeyError(f"Key {value!r} is not a hex string") from None
        # int() tolerates '_' separators and signs; hashes never carry them
        if not text or any(c not in "0123456789abcdef" for c in text):
            raise InvalidKeyError(f"Key {value!r} is not a hex string")
    elif isinstance(value, int):
        key = value
    else:
        raise InvalidKeyError(f"Key must be int or hex str, got {type(value).__name__}")

    if key < 0 or key.bit_length() > key_bits:
        raise InvalidKeyError(f"Key {value!r} does not fit in {key_bits} unsigned bits")
    return key


def coerce_tolerance(value: int) -> Distance:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidToleranceError(f"Tolerance must be an integer, got {value!r}")
    if value < 0 or value > MAX_DISTANCE:
        raise InvalidToleranceError(f"Tolerance {value} outside [0, {MAX_DISTANCE}]")
    return value
