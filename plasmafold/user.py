"""Rollup users: keys, balance and nonce."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from plasmafold.keypair import KeyPair, Signature
from plasmafold.noncemap import Nonce
from plasmafold.poseidon import PoseidonConfig
from plasmafold.transaction import Transaction

ROLLUP_CONTRACT_ID = 0
_U32_LIMIT = 1 << 32
_U64_LIMIT = 1 << 64

UserId = int


@dataclass
class User:
    """A rollup user and the state it keeps about itself."""

    keypair: KeyPair
    id: UserId
    balance: int = 0
    nonce: Nonce = field(default_factory=Nonce)
    acc: int = 0

    @classmethod
    def create(cls, rng: random.Random, user_id: UserId) -> User:
        """A user with a fresh key pair, zero balance and zero nonce."""
        return cls(keypair=KeyPair.generate(rng), id=user_id)

    def sign(
        self, config: PoseidonConfig, message: Sequence[int], rng: random.Random
    ) -> Signature:
        """Sign a message with the user's secret key."""
        return self.keypair.sk.sign(config, message, rng)

    def spend_transaction(self, tx: Transaction) -> None:
        """Deduct the real inputs of a sent transaction and bump the nonce."""
        spent = sum(u.amount for u in tx.inputs if not u.is_dummy)
        if spent > self.balance:
            raise ValueError("balance is too small for the transaction")
        self.balance -= spent
        self.nonce = Nonce(self.nonce.value + 1)

    def receive_transaction(self, tx: Transaction) -> None:
        """Credit the real outputs of a received transaction."""
        received = sum(u.amount for u in tx.outputs if not u.is_dummy)
        if self.balance + received >= _U64_LIMIT:
            raise ValueError("balance overflows an unsigned 64-bit integer")
        self.balance += received


def sample_user(rng: random.Random) -> User:
    """A user with random keys, a random id and a random nonce."""
    return User(
        keypair=KeyPair.generate(rng),
        id=rng.randrange(_U32_LIMIT),
        nonce=Nonce(rng.randrange(_U64_LIMIT)),
    )