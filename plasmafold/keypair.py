"""Schnorr key material: secret keys, public keys, signatures and key pairs."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from plasmafold import schnorr
from plasmafold.curve import SCALAR_MODULUS, Point, generator, random_scalar
from plasmafold.poseidon import PoseidonConfig


@dataclass(frozen=True)
class Signature:
    """A Schnorr signature, the pair ``(s, e)`` of scalars."""

    s: int = 0
    e: int = 0


@dataclass(frozen=True)
class SecretKey:
    """A Schnorr secret key, a scalar field element."""

    key: int

    def __post_init__(self) -> None:
        if not 0 <= self.key < SCALAR_MODULUS:
            raise ValueError("secret key must be a reduced scalar field element")

    @classmethod
    def random(cls, rng: random.Random) -> SecretKey:
        """Draw a uniformly random secret key."""
        return cls(random_scalar(rng))

    def sign(
        self, config: PoseidonConfig, message: Sequence[int], rng: random.Random
    ) -> Signature:
        """Sign a message made of base field elements."""
        s, e = schnorr.sign(config, self.key, message, rng)
        return Signature(s, e)


@dataclass(frozen=True)
class PublicKey:
    """A Schnorr public key; the default is the point at infinity."""

    key: Point = field(default_factory=Point)

    @classmethod
    def from_secret_key(cls, sk: SecretKey) -> PublicKey:
        """The public key belonging to a secret key."""
        return cls(generator() * sk.key)

    def verify_signature(
        self, config: PoseidonConfig, message: Sequence[int], signature: Signature
    ) -> bool:
        """Check a signature on a message under this key."""
        return schnorr.verify(config, self.key, message, (signature.s, signature.e))


@dataclass(frozen=True)
class KeyPair:
    """A secret key together with its public key."""

    sk: SecretKey
    pk: PublicKey

    @classmethod
    def generate(cls, rng: random.Random) -> KeyPair:
        """Generate a fresh key pair."""
        sk, pk = schnorr.key_gen(rng)
        return cls(SecretKey(sk), PublicKey(pk))