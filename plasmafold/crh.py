"""Poseidon hashes of the rollup's data structures."""

from __future__ import annotations

from typing import Any

from plasmafold.block import Block
from plasmafold.keypair import PublicKey
from plasmafold.poseidon import PoseidonConfig, poseidon_hash
from plasmafold.utxo import UTXO


def public_key_hash(params: PoseidonConfig, pk: PublicKey) -> int:
    """Hash a public key as ``(x, y, is_zero)``."""
    return poseidon_hash(params, pk.key.to_field_elements())


def nonce_hash(params: PoseidonConfig, nonce: Any) -> int:
    """Hash a nonce, given as an integer or an object with a ``value``."""
    value = nonce if isinstance(nonce, int) else nonce.value
    return poseidon_hash(params, [value])


def utxo_hash(params: PoseidonConfig, utxo: UTXO) -> int:
    """Hash a UTXO as ``(amount, is_dummy, x, y, is_zero)``."""
    x, y, is_zero = utxo.pk.key.to_field_elements()
    return poseidon_hash(params, [utxo.amount, int(utxo.is_dummy), x, y, is_zero])


def block_hash(params: PoseidonConfig, block: Block) -> int:
    """Hash the tree roots and height of a block."""
    return poseidon_hash(
        params,
        [block.utxo_tree_root, block.tx_tree_root, block.signer_tree_root, block.height],
    )