"""Arithmetic on the Grumpkin curve ``y^2 = x^3 - 17``.

The base field of the curve is the BN254 scalar field and its group order is
the BN254 base field modulus, so points can be hashed with a Poseidon sponge
over the base field.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

BASE_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
SCALAR_MODULUS = 21888242871839275222246405745257275088696311157297823662689037894645226208583
SCALAR_BIT_SIZE = SCALAR_MODULUS.bit_length()
COEFF_B = BASE_MODULUS - 17

_Affine = tuple[int, int] | None


def _sqrt(value: int, p: int) -> int:
    """Square root modulo the prime ``p`` (Tonelli-Shanks)."""
    value %= p
    if value == 0:
        return 0
    if pow(value, (p - 1) // 2, p) != 1:
        raise ValueError("value is not a quadratic residue")
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1
    m, c, t, r = s, pow(z, q, p), pow(value, q, p), pow(value, (q + 1) // 2, p)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m, c, t, r = i, b * b % p, t * b * b % p, r * b % p
    return r


def _add(a: _Affine, b: _Affine) -> _Affine:
    if a is None:
        return b
    if b is None:
        return a
    p = BASE_MODULUS
    x1, y1 = a
    x2, y2 = b
    if x1 == x2:
        if (y1 + y2) % p == 0:
            return None
        lam = 3 * x1 * x1 * pow(2 * y1, -1, p) % p
    else:
        lam = (y2 - y1) * pow(x2 - x1, -1, p) % p
    x3 = (lam * lam - x1 - x2) % p
    y3 = (lam * (x1 - x3) - y1) % p
    return x3, y3


def _mul(point: _Affine, scalar: int) -> _Affine:
    result: _Affine = None
    addend = point
    k = scalar % SCALAR_MODULUS
    while k:
        if k & 1:
            result = _add(result, addend)
        addend = _add(addend, addend)
        k >>= 1
    return result


@dataclass(frozen=True)
class Point:
    """An affine point; the default value is the point at infinity."""

    x: int | None = None
    y: int | None = None

    def __post_init__(self) -> None:
        if (self.x is None) != (self.y is None):
            raise ValueError("both coordinates must be given, or neither")
        if self.x is None:
            return
        p = BASE_MODULUS
        if not (0 <= self.x < p and 0 <= self.y < p):
            raise ValueError("coordinates must be reduced base field elements")
        if (self.y * self.y - self.x * self.x * self.x - COEFF_B) % p:
            raise ValueError("point is not on the curve")

    @classmethod
    def _from_affine(cls, affine: _Affine) -> Point:
        return cls() if affine is None else cls(affine[0], affine[1])

    def _affine(self) -> _Affine:
        return None if self.x is None else (self.x, self.y)

    def is_zero(self) -> bool:
        """True for the point at infinity."""
        return self.x is None

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point._from_affine(_add(self._affine(), other._affine()))

    def __neg__(self) -> Point:
        if self.x is None:
            return self
        return Point(self.x, (-self.y) % BASE_MODULUS)

    def __sub__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: object) -> Point:
        if not isinstance(scalar, int) or isinstance(scalar, bool):
            return NotImplemented
        return Point._from_affine(_mul(self._affine(), scalar))

    def __rmul__(self, scalar: object) -> Point:
        return self.__mul__(scalar)

    def to_field_elements(self) -> tuple[int, int, int]:
        """Return ``(x, y, is_zero)`` as base field elements."""
        if self.x is None:
            return 0, 0, 1
        return self.x, self.y, 0


_GENERATOR_Y = _sqrt(1 + COEFF_B, BASE_MODULUS)
_GENERATOR = Point(1, min(_GENERATOR_Y, BASE_MODULUS - _GENERATOR_Y))


def generator() -> Point:
    """The fixed generator of the group."""
    return _GENERATOR


def random_scalar(rng: random.Random) -> int:
    """A uniform element of the scalar field."""
    return rng.randrange(SCALAR_MODULUS)


def random_point(rng: random.Random) -> Point:
    """A uniformly random group element."""
    return generator() * random_scalar(rng)