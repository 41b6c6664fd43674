"""Configuration and proofs of sparse Merkle trees.

Nodes are numbered breadth first from the root (index 0); the children of
node ``i`` are ``2i + 1`` and ``2i + 2``, so left children have odd indices.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from plasmafold.poseidon import PoseidonConfig, poseidon_two_to_one

LeafHash = Callable[[PoseidonConfig, Any], int]
TwoToOneHash = Callable[[PoseidonConfig, int, int], int]


class SparseMTError(Exception):
    """A sparse Merkle tree operation failed."""

    def __init__(self, message: str = "SparseMTError") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class SparseConfig:
    """Shape and hash functions of a sparse Merkle tree.

    ``height`` counts the levels of the tree including leaves and root, so a
    tree of height ``h`` holds ``2 ** (h - 1)`` leaves and its proofs have
    ``h - 1`` levels. ``default_leaf`` builds the leaf of an empty slot.
    """

    height: int
    leaf_hash: LeafHash
    default_leaf: Callable[[], Any]
    two_to_one_hash: TwoToOneHash = poseidon_two_to_one

    def __post_init__(self) -> None:
        if self.height < 1:
            raise ValueError("tree height must be at least 1")

    @property
    def path_length(self) -> int:
        """Number of levels in a proof."""
        return self.height - 1

    @property
    def last_level_index(self) -> int:
        """Node index of the leftmost leaf."""
        return (1 << (self.height - 1)) - 1


def _check_index(index: int) -> None:
    if index < 0:
        raise ValueError("leaf index must not be negative")


@dataclass(frozen=True)
class MerkleSparseTreePath:
    """A membership proof: the ``(left, right)`` hashes from leaf level to root.

    Without a path, the proof holds default hashes for every level.
    """

    config: SparseConfig
    path: Sequence[tuple[int, int]] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.path is None:
            path = tuple((0, 0) for _ in range(self.config.path_length))
        else:
            path = tuple((left, right) for left, right in self.path)
        object.__setattr__(self, "path", path)

    def verify(
        self,
        leaf_hash_params: PoseidonConfig,
        two_to_one_hash_params: PoseidonConfig,
        root: int,
        leaf: Any,
    ) -> bool:
        """Check membership of a leaf, without checking its position."""
        config = self.config
        if len(self.path) != config.path_length or not self.path:
            return False
        claimed = config.leaf_hash(leaf_hash_params, leaf)
        if claimed not in self.path[0]:
            return False
        previous = claimed
        for left, right in self.path:
            if previous != left and previous != right:
                return False
            previous = config.two_to_one_hash(two_to_one_hash_params, left, right)
        return previous == root

    def verify_with_index(
        self,
        leaf_hash_params: PoseidonConfig,
        two_to_one_hash_params: PoseidonConfig,
        root: int,
        leaf: Any,
        index: int,
    ) -> bool:
        """Check membership of a leaf at the given leaf index."""
        _check_index(index)
        config = self.config
        if len(self.path) != config.path_length or not self.path:
            return False
        last_level_index = config.last_level_index
        tree_index = last_level_index + index

        claimed = config.leaf_hash(leaf_hash_params, leaf)
        expected_first = self.path[0][0] if tree_index % 2 == 1 else self.path[0][1]
        if claimed != expected_first:
            return False

        index_from_path = last_level_index
        offset = 1
        previous = claimed
        previous_index = tree_index
        for left, right in self.path:
            if previous_index % 2 == 1:
                if previous != left:
                    return False
            else:
                if previous != right:
                    return False
                index_from_path += offset
            offset *= 2
            previous_index = (previous_index - 1) // 2
            previous = config.two_to_one_hash(two_to_one_hash_params, left, right)

        return previous == root and index_from_path == tree_index


@dataclass(frozen=True)
class MerkleSparseTreeTwoPaths:
    """An update proof: the sibling hashes from leaf level to root.

    Without a path, the proof holds default hashes for every level.
    """

    config: SparseConfig
    path: Sequence[int] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.path is None:
            path = tuple(0 for _ in range(self.config.path_length))
        else:
            path = tuple(self.path)
        object.__setattr__(self, "path", path)

    def verify(
        self,
        leaf_hash_params: PoseidonConfig,
        two_to_one_hash_params: PoseidonConfig,
        old_root: int,
        new_root: int,
        old_leaf: Any,
        new_leaf: Any,
        index: int,
    ) -> bool:
        """Check that replacing ``old_leaf`` by ``new_leaf`` at ``index``
        turns ``old_root`` into ``new_root``."""
        _check_index(index)
        config = self.config
        if len(self.path) != config.path_length:
            return False
        tree_index = config.last_level_index + index
        compress = config.two_to_one_hash

        old_hash = config.leaf_hash(leaf_hash_params, old_leaf)
        new_hash = config.leaf_hash(leaf_hash_params, new_leaf)
        for neighbor in self.path:
            if tree_index % 2 == 1:
                old_hash = compress(two_to_one_hash_params, old_hash, neighbor)
                new_hash = compress(two_to_one_hash_params, new_hash, neighbor)
            else:
                old_hash = compress(two_to_one_hash_params, neighbor, old_hash)
                new_hash = compress(two_to_one_hash_params, neighbor, new_hash)
            tree_index = (tree_index - 1) // 2

        return old_root == old_hash and new_root == new_hash and tree_index == 0