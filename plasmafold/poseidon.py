"""Poseidon permutation, sponge and hash functions over a prime field."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from plasmafold.curve import BASE_MODULUS

WIDTH = 5
FULL_ROUNDS = 8
PARTIAL_ROUNDS = 60
ALPHA = 5

_FIELD_TYPE = 1
_S_BOX_TYPE = 0
_GRAIN_STATE_SIZE = 80
_GRAIN_WARMUP = 160


@dataclass(frozen=True)
class PoseidonConfig:
    """Parameters of a Poseidon permutation and of the sponge built on it."""

    modulus: int
    full_rounds: int
    partial_rounds: int
    alpha: int
    mds: tuple[tuple[int, ...], ...]
    ark: tuple[tuple[int, ...], ...]
    rate: int
    capacity: int

    def __post_init__(self) -> None:
        width = self.rate + self.capacity
        if self.rate < 1:
            raise ValueError("rate must be positive")
        if self.full_rounds % 2:
            raise ValueError("the number of full rounds must be even")
        if len(self.ark) != self.full_rounds + self.partial_rounds:
            raise ValueError("one row of round constants is needed per round")
        if any(len(row) != width for row in self.ark):
            raise ValueError("round constant rows must match the state width")
        if len(self.mds) != width or any(len(row) != width for row in self.mds):
            raise ValueError("the MDS matrix must be square of the state width")


def _permute(config: PoseidonConfig, state: list[int]) -> list[int]:
    p = config.modulus
    half = config.full_rounds // 2
    for round_number, constants in enumerate(config.ark):
        state = [(s + c) % p for s, c in zip(state, constants)]
        if round_number < half or round_number >= half + config.partial_rounds:
            state = [pow(s, config.alpha, p) for s in state]
        else:
            state[0] = pow(state[0], config.alpha, p)
        state = [sum(m * s for m, s in zip(row, state)) % p for row in config.mds]
    return state


class PoseidonSponge:
    """A duplex sponge: absorb field elements, then squeeze some out."""

    def __init__(self, config: PoseidonConfig) -> None:
        self.config = config
        self._state = [0] * (config.rate + config.capacity)
        self._squeezing = False
        self._index = 0

    def _permute(self) -> None:
        self._state = _permute(self.config, self._state)

    def absorb(self, elements: Iterable[int]) -> None:
        """Absorb field elements into the rate part of the state."""
        p = self.config.modulus
        rate, capacity = self.config.rate, self.config.capacity
        pending = [e % p for e in elements]
        if not pending:
            return
        if self._squeezing or self._index == rate:
            self._permute()
            start = 0
        else:
            start = self._index
        self._squeezing = False
        while True:
            room = rate - start
            chunk, pending = pending[:room], pending[room:]
            for offset, element in enumerate(chunk):
                position = capacity + start + offset
                self._state[position] = (self._state[position] + element) % p
            if not pending:
                self._index = start + len(chunk)
                return
            self._permute()
            start = 0

    def squeeze(self, n: int) -> list[int]:
        """Squeeze ``n`` field elements out of the sponge."""
        if n < 0:
            raise ValueError("cannot squeeze a negative number of elements")
        if n == 0:
            return []
        rate, capacity = self.config.rate, self.config.capacity
        if not self._squeezing or self._index == rate:
            self._permute()
            start = 0
        else:
            start = self._index
        self._squeezing = True
        out: list[int] = []
        while True:
            wanted = n - len(out)
            room = rate - start
            if wanted <= room:
                out.extend(self._state[capacity + start : capacity + start + wanted])
                self._index = start + wanted
                return out
            out.extend(self._state[capacity + start : capacity + rate])
            self._permute()
            start = 0


class _Grain:
    """The Grain LFSR used to derive Poseidon constants."""

    def __init__(self, modulus: int, width: int, full_rounds: int, partial_rounds: int) -> None:
        header = (
            f"{_FIELD_TYPE:02b}{_S_BOX_TYPE:04b}{modulus.bit_length():012b}"
            f"{width:012b}{full_rounds:010b}{partial_rounds:010b}"
        )
        header += "1" * (_GRAIN_STATE_SIZE - len(header))
        if len(header) != _GRAIN_STATE_SIZE:
            raise ValueError("parameters do not fit the generator state")
        self._bits = [c == "1" for c in header]
        self._pos = 0
        for _ in range(_GRAIN_WARMUP):
            self._step()

    def _step(self) -> bool:
        bits, pos = self._bits, self._pos
        size = _GRAIN_STATE_SIZE
        bit = (
            bits[(pos + 62) % size]
            ^ bits[(pos + 51) % size]
            ^ bits[(pos + 38) % size]
            ^ bits[(pos + 23) % size]
            ^ bits[(pos + 13) % size]
            ^ bits[pos]
        )
        bits[pos] = bit
        self._pos = (pos + 1) % size
        return bit

    def next_int(self, nbits: int) -> int:
        value = 0
        for i in reversed(range(nbits)):
            while True:
                if self._step():
                    if self._step():
                        value |= 1 << i
                    break
                self._step()
        return value


def generate_parameters(
    modulus: int, width: int, full_rounds: int, partial_rounds: int
) -> tuple[tuple[tuple[int, ...], ...], tuple[tuple[int, ...], ...]]:
    """Derive ``(round_constants, mds_matrix)`` from the Grain LFSR."""
    grain = _Grain(modulus, width, full_rounds, partial_rounds)
    nbits = modulus.bit_length()

    def constant() -> int:
        while True:
            value = grain.next_int(nbits)
            if value < modulus:
                return value

    ark = tuple(
        tuple(constant() for _ in range(width)) for _ in range(full_rounds + partial_rounds)
    )

    while True:
        values = [grain.next_int(nbits) % modulus for _ in range(2 * width)]
        if len(set(values)) == 2 * width:
            break
    xs, ys = values[:width], values[width:]
    try:
        mds = tuple(tuple(pow(x + y, -1, modulus) for y in ys) for x in xs)
    except ValueError as exc:
        raise ValueError("MDS matrix entry is not invertible") from exc
    return ark, mds


@lru_cache(maxsize=None)
def canonical_config() -> PoseidonConfig:
    """The Poseidon configuration used throughout the package."""
    ark, mds = generate_parameters(BASE_MODULUS, WIDTH, FULL_ROUNDS, PARTIAL_ROUNDS)
    return PoseidonConfig(
        modulus=BASE_MODULUS,
        full_rounds=FULL_ROUNDS,
        partial_rounds=PARTIAL_ROUNDS,
        alpha=ALPHA,
        mds=mds,
        ark=ark,
        rate=WIDTH - 1,
        capacity=1,
    )


def poseidon_hash(config: PoseidonConfig, inputs: Iterable[int]) -> int:
    """Hash a sequence of field elements to one field element."""
    sponge = PoseidonSponge(config)
    sponge.absorb(inputs)
    return sponge.squeeze(1)[0]


def poseidon_two_to_one(config: PoseidonConfig, left: int, right: int) -> int:
    """Compress two field elements into one."""
    sponge = PoseidonSponge(config)
    sponge.absorb([left])
    sponge.absorb([right])
    return sponge.squeeze(1)[0]