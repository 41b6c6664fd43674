"""Transactions of the rollup and the tree that commits to a block's transactions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from plasmafold.errors import InvalidAmounts, InvalidPublicKey
from plasmafold.keypair import PublicKey
from plasmafold.poseidon import PoseidonConfig, poseidon_hash
from plasmafold.sparsemt import MerkleSparseTree
from plasmafold.sparsemt_path import SparseConfig
from plasmafold.utxo import UTXO

# maximum number of input and of output utxos in a transaction
TX_IO_SIZE = 4
TX_ARRAY_SIZE = TX_IO_SIZE * 4 + 1
USER_ID_ROLLUP = 0
TX_TREE_HEIGHT = 13


def _dummies() -> tuple[UTXO, ...]:
    return tuple(UTXO.dummy() for _ in range(TX_IO_SIZE))


@dataclass(frozen=True)
class Transaction:
    """A transfer from up to four inputs to up to four outputs.

    Unused slots hold dummy UTXOs; the default transaction is all dummies.
    """

    inputs: Sequence[UTXO] = field(default_factory=_dummies)
    outputs: Sequence[UTXO] = field(default_factory=_dummies)

    def __post_init__(self) -> None:
        inputs, outputs = tuple(self.inputs), tuple(self.outputs)
        if len(inputs) != TX_IO_SIZE or len(outputs) != TX_IO_SIZE:
            raise ValueError(f"a transaction has exactly {TX_IO_SIZE} inputs and outputs")
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "outputs", outputs)

    def _utxos(self) -> tuple[UTXO, ...]:
        return (*self.inputs, *self.outputs)

    def to_field_elements(self) -> list[int]:
        """``(amount, is_dummy, x, y, is_zero)`` for every input, then every output."""
        elements: list[int] = []
        for utxo in self._utxos():
            elements.extend((utxo.amount, int(utxo.is_dummy)))
            elements.extend(utxo.pk.key.to_field_elements())
        return elements

    def amount_elements(self) -> list[int]:
        """``(amount, is_dummy)`` for every input, then every output."""
        return [v for utxo in self._utxos() for v in (utxo.amount, int(utxo.is_dummy))]

    def get_hash(self, params: PoseidonConfig) -> int:
        """The Poseidon hash of the transaction."""
        return transaction_hash(params, self)

    def is_valid(self, sender: PublicKey | None = None) -> None:
        """Raise unless the sender owns every real input and amounts balance.

        Without a sender, the owner of the first input is taken as the sender.
        """
        if sender is None:
            sender = self.inputs[0].pk
        real_inputs = [u for u in self.inputs if not u.is_dummy]
        if any(u.pk.key != sender.key for u in real_inputs):
            raise InvalidPublicKey()
        spent = sum(u.amount for u in real_inputs)
        received = sum(u.amount for u in self.outputs if not u.is_dummy)
        if spent != received:
            raise InvalidAmounts()


def transaction_hash(params: PoseidonConfig, tx: Transaction) -> int:
    """Hash a transaction's field elements with Poseidon."""
    return poseidon_hash(params, tx.to_field_elements())


TransactionTree = MerkleSparseTree


def transaction_tree_config() -> SparseConfig:
    """Configuration of the tree of a block's transactions."""
    return SparseConfig(
        height=TX_TREE_HEIGHT, leaf_hash=transaction_hash, default_leaf=Transaction
    )