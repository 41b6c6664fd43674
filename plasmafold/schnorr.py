"""Schnorr signatures over the Grumpkin curve with a Poseidon challenge."""

from __future__ import annotations

import random
from collections.abc import Sequence

from plasmafold.curve import SCALAR_BIT_SIZE, SCALAR_MODULUS, Point, generator, random_scalar
from plasmafold.poseidon import PoseidonConfig, poseidon_hash


def _to_scalar(value: int, bits: int) -> int | None:
    truncated = value & ((1 << bits) - 1)
    return truncated if truncated < SCALAR_MODULUS else None


def key_gen(rng: random.Random) -> tuple[int, Point]:
    """Return a fresh ``(secret_key, public_key)`` pair."""
    sk = random_scalar(rng)
    return sk, generator() * sk


def sign(
    config: PoseidonConfig, sk: int, message: Sequence[int], rng: random.Random
) -> tuple[int, int]:
    """Sign a message of base field elements; returns ``(s, e)``."""
    message = list(message)
    while True:
        k = random_scalar(rng)
        commitment = generator() * k
        if commitment.is_zero():
            continue
        h = poseidon_hash(config, [commitment.x, commitment.y, *message])
        e = _to_scalar(h, SCALAR_BIT_SIZE + 1)
        if e is not None:
            return (k - sk * e) % SCALAR_MODULUS, e


def verify(
    config: PoseidonConfig, pk: Point, message: Sequence[int], signature: tuple[int, int]
) -> bool:
    """Check a signature ``(s, e)`` on a message under a public key."""
    s, e = (v % SCALAR_MODULUS for v in signature)
    commitment = generator() * s + pk * e
    x, y = (0, 0) if commitment.is_zero() else (commitment.x, commitment.y)
    h = poseidon_hash(config, [x, y, *message])
    return _to_scalar(h, SCALAR_BIT_SIZE) == e