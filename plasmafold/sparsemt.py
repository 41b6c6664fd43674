"""Sparse Merkle trees with membership and update proofs.

Only the nodes that differ from an empty tree are stored; every missing node
takes the hash of an empty subtree of its level.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from plasmafold.crh import utxo_hash
from plasmafold.poseidon import PoseidonConfig
from plasmafold.sparsemt_path import (
    MerkleSparseTreePath,
    MerkleSparseTreeTwoPaths,
    SparseConfig,
    SparseMTError,
)
from plasmafold.utxo import UTXO

UTXO_TREE_HEIGHT = 32


def _is_left_child(index: int) -> bool:
    return index % 2 == 1


def _left_child(index: int) -> int:
    return 2 * index + 1


def _right_child(index: int) -> int:
    return 2 * index + 2


def _parent(index: int) -> int:
    if index <= 0:
        raise SparseMTError("the root has no parent")
    return (index - 1) >> 1


def _sibling(index: int) -> int:
    if index <= 0:
        raise SparseMTError("the root has no sibling")
    return index + 1 if _is_left_child(index) else index - 1


def _leaf_node(config: SparseConfig, index: int) -> int:
    """Node index of the leaf at ``index``, checking that it is in range."""
    if not 0 <= index < 1 << (config.height - 1):
        raise ValueError(f"leaf index {index} is outside a tree of height {config.height}")
    return config.last_level_index + index


def _tree_height(tree_size: int) -> int:
    """Ceiling of log2 of the number of nodes."""
    return 0 if tree_size <= 1 else (tree_size - 1).bit_length()


def _gen_empty_hashes(
    config: SparseConfig,
    leaf_hash_params: PoseidonConfig,
    two_to_one_hash_params: PoseidonConfig,
) -> list[int]:
    empty_hash = config.leaf_hash(leaf_hash_params, config.default_leaf())
    hashes = [empty_hash]
    for _ in range(config.height):
        empty_hash = config.two_to_one_hash(two_to_one_hash_params, empty_hash, empty_hash)
        hashes.append(empty_hash)
    return hashes


class MerkleSparseTree:
    """A sparse Merkle tree of fixed height over the leaves of a config."""

    def __init__(
        self,
        config: SparseConfig,
        leaf_hash_params: PoseidonConfig,
        two_to_one_hash_params: PoseidonConfig,
        leaves: Mapping[int, Any],
    ) -> None:
        leaves = dict(leaves)
        last_level_size = 1 << (len(leaves) - 1).bit_length() if leaves else 1
        if _tree_height(2 * last_level_size - 1) > config.height:
            raise ValueError("too many leaves for the tree height")
        leaf_nodes = {i: _leaf_node(config, i) for i in leaves}

        self._setup(config, leaf_hash_params, two_to_one_hash_params)
        tree: dict[int, int] = {}
        for i, leaf in leaves.items():
            tree[leaf_nodes[i]] = config.leaf_hash(leaf_hash_params, leaf)

        middle_nodes = {_parent(node) for node in leaf_nodes.values()}
        for level in range(config.height):
            empty = self._empty_hashes[level]
            for current in sorted(middle_nodes):
                left_hash = tree.get(_left_child(current), empty)
                right_hash = tree.get(_right_child(current), empty)
                tree[current] = config.two_to_one_hash(
                    two_to_one_hash_params, left_hash, right_hash
                )
            middle_nodes = {_parent(i) for i in middle_nodes if i != 0}

        if 0 not in tree:
            raise SparseMTError("tree has no root; use MerkleSparseTree.blank for empty trees")
        self.tree = tree
        self.root = tree[0]

    def _setup(
        self,
        config: SparseConfig,
        leaf_hash_params: PoseidonConfig,
        two_to_one_hash_params: PoseidonConfig,
    ) -> None:
        self.config = config
        self._leaf_hash_params = leaf_hash_params
        self._two_to_one_hash_params = two_to_one_hash_params
        self._empty_hashes = _gen_empty_hashes(config, leaf_hash_params, two_to_one_hash_params)

    @classmethod
    def blank(
        cls,
        config: SparseConfig,
        leaf_hash_params: PoseidonConfig,
        two_to_one_hash_params: PoseidonConfig,
    ) -> MerkleSparseTree:
        """An empty tree, every leaf holding the default leaf."""
        tree = cls.__new__(cls)
        tree._setup(config, leaf_hash_params, two_to_one_hash_params)
        tree.tree = {}
        tree.root = tree._empty_hashes[config.height - 1]
        return tree

    def _walk_up(self, index: int) -> Iterator[tuple[int, int]]:
        """Yield ``(node, empty_hash_of_level)`` from a leaf up to below the root."""
        node = _leaf_node(self.config, index)
        for empty in self._empty_hashes:
            if node == 0:
                return
            yield node, empty
            node = _parent(node)

    def generate_membership_proof(self, index: int) -> MerkleSparseTreePath:
        """A membership proof for the slot at ``index``, whatever it holds."""
        path = []
        for node, empty in self._walk_up(index):
            current_hash = self.tree.get(node, empty)
            sibling_hash = self.tree.get(_sibling(node), empty)
            if _is_left_child(node):
                path.append((current_hash, sibling_hash))
            else:
                path.append((sibling_hash, current_hash))
        if len(path) != self.config.path_length:
            raise SparseMTError("membership path has the wrong length")
        return MerkleSparseTreePath(self.config, path)

    def generate_proof(self, index: int, leaf: Any) -> MerkleSparseTreePath:
        """A membership proof for ``leaf``, checked against the stored leaf."""
        leaf_hash = self.config.leaf_hash(self._leaf_hash_params, leaf)
        stored = self.tree.get(_leaf_node(self.config, index))
        if stored is not None and stored != leaf_hash:
            raise SparseMTError(f"leaf does not match the tree at index {index}")
        return self.generate_membership_proof(index)

    def update_and_prove(self, index: int, new_leaf: Any) -> MerkleSparseTreeTwoPaths:
        """Replace the leaf at ``index`` and return the update proof."""
        siblings = self.siblings(index)
        compress = self.config.two_to_one_hash
        params = self._two_to_one_hash_params
        digest = self.config.leaf_hash(self._leaf_hash_params, new_leaf)
        node = _leaf_node(self.config, index)
        for sibling in siblings:
            self.tree[node] = digest
            if _is_left_child(node):
                digest = compress(params, digest, sibling)
            else:
                digest = compress(params, sibling, digest)
            node = _parent(node)
        self.tree[0] = digest
        self.root = digest
        return MerkleSparseTreeTwoPaths(self.config, siblings)

    def siblings(self, index: int) -> list[int]:
        """Sibling hashes along the path from the leaf at ``index`` to the root."""
        return [self.tree.get(_sibling(node), empty) for node, empty in self._walk_up(index)]

    def validate(self) -> bool:
        """Check that every stored inner node hashes its children."""
        last_level_index = self.config.last_level_index
        middle_nodes = {_parent(k) for k in self.tree if k >= last_level_index and k != 0}
        compress = self.config.two_to_one_hash
        for level in range(self.config.height):
            empty = self._empty_hashes[level]
            for current in sorted(middle_nodes):
                left_hash = self.tree.get(_left_child(current), empty)
                right_hash = self.tree.get(_right_child(current), empty)
                expected = compress(self._two_to_one_hash_params, left_hash, right_hash)
                if self.tree.get(current) != expected:
                    return False
            middle_nodes = {_parent(i) for i in middle_nodes if i != 0}
        return True


def utxo_tree_config() -> SparseConfig:
    """Configuration of the tree of UTXOs."""
    return SparseConfig(height=UTXO_TREE_HEIGHT, leaf_hash=utxo_hash, default_leaf=UTXO.dummy)