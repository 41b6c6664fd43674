"""The tree of public keys that signed the transactions of a block."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from plasmafold.crh import public_key_hash
from plasmafold.keypair import PublicKey
from plasmafold.poseidon import PoseidonConfig
from plasmafold.sparsemt import MerkleSparseTree
from plasmafold.sparsemt_path import SparseConfig

SIGNER_TREE_HEIGHT = 13

SignerList = list[int]
SignerTree = MerkleSparseTree


def signer_tree_config() -> SparseConfig:
    """Configuration of the signer tree."""
    return SparseConfig(
        height=SIGNER_TREE_HEIGHT, leaf_hash=public_key_hash, default_leaf=PublicKey
    )


def signer_tree(
    params: PoseidonConfig, signers: Mapping[int, PublicKey] | Sequence[PublicKey]
) -> MerkleSparseTree:
    """Build a signer tree from public keys, by slot or in order."""
    leaves = dict(signers) if isinstance(signers, Mapping) else dict(enumerate(signers))
    config = signer_tree_config()
    if not leaves:
        return MerkleSparseTree.blank(config, params, params)
    return MerkleSparseTree(config, params, params, leaves)