"""A running SHA-256 accumulator over field elements."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from plasmafold.curve import BASE_MODULUS


def _byte_length(modulus: int) -> int:
    # field elements are serialised as whole 64-bit limbs
    return (modulus.bit_length() + 63) // 64 * 8


@dataclass
class Sha256Accumulator:
    """Folds field elements into one with ``H(acc || value)``."""

    value: int = 0
    modulus: int = BASE_MODULUS

    def __post_init__(self) -> None:
        if not 0 <= self.value < self.modulus:
            raise ValueError("accumulator value must be a reduced field element")

    def update(self, value: int) -> None:
        """Absorb a field element into the accumulator."""
        size = _byte_length(self.modulus)
        left = self.value.to_bytes(size, "little")
        right = (value % self.modulus).to_bytes(size, "little")
        digest = hashlib.sha256(left + right).digest()
        # the last byte is dropped so the digest fits the field
        self.value = int.from_bytes(digest[:-1], "little") % self.modulus