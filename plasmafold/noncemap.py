"""Per-user nonces and the sparse Merkle tree that commits to them."""

from __future__ import annotations

from dataclasses import dataclass

from plasmafold.crh import nonce_hash
from plasmafold.sparsemt import MerkleSparseTree
from plasmafold.sparsemt_path import SparseConfig

NONCE_TREE_HEIGHT = 32
_U64_LIMIT = 1 << 64


@dataclass(frozen=True)
class Nonce:
    """The number of transactions a user has sent."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value < _U64_LIMIT:
            raise ValueError("nonce must fit in an unsigned 64-bit integer")


NonceMap = dict[int, Nonce]
NonceTree = MerkleSparseTree


def nonce_tree_config() -> SparseConfig:
    """Configuration of the tree of user nonces."""
    return SparseConfig(height=NONCE_TREE_HEIGHT, leaf_hash=nonce_hash, default_leaf=Nonce)