"""Unspent transaction outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from plasmafold.keypair import PublicKey

_U64_LIMIT = 1 << 64


@dataclass(frozen=True)
class UTXO:
    """An amount owned by a public key; dummy outputs fill unused slots."""

    amount: int = 0
    pk: PublicKey = field(default_factory=PublicKey)
    is_dummy: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.amount < _U64_LIMIT:
            raise ValueError("amount must fit in an unsigned 64-bit integer")

    @classmethod
    def dummy(cls) -> UTXO:
        """A placeholder output of zero value."""
        return cls(0, PublicKey(), True)

    def __repr__(self) -> str:
        if self.is_dummy:
            return "UTXO(dummy)"
        return f"UTXO({self.pk!r}, {self.amount})"