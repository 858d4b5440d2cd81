"""
Data Models Module.

Pydantic models for values that cross the public API: query matches and
per-tree settings.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .keys import KEY_BITS, MAX_DISTANCE, MAX_KEY


class Match(BaseModel):
    """
    A stored key found by a range query.

    Attributes:
        key: The stored key.
        distance: Metric distance between the key and the query needle (0 = identical).
        key_bits: Width of the tree that produced the match; sets the padding of `hex`.
    """
    model_config = ConfigDict(frozen=True)

    key: int = Field(ge=0, le=MAX_KEY)
    distance: int = Field(ge=0, le=MAX_DISTANCE)
    key_bits: int = Field(default=KEY_BITS, ge=1, le=KEY_BITS)

    @property
    def is_exact(self) -> bool:
        return self.distance == 0

    @property
    def hex(self) -> str:
        return f"{self.key:0{(self.key_bits + 3) // 4}x}"


class IndexSettings(BaseModel):
    """
    Per-tree configuration.

    Attributes:
        key_bits: Width of accepted keys. Keys wider than this are rejected on insert/find.
    """
    model_config = ConfigDict(frozen=True)

    key_bits: int = KEY_BITS

    @field_validator('key_bits')
    @classmethod
    def check_key_bits(cls, v: int) -> int:
        if not 1 <= v <= KEY_BITS:
            raise ValueError(f"key_bits must be within [1, {KEY_BITS}], got {v}")
        return v
