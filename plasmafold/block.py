"""Block headers of the rollup."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Block:
    """Roots of the utxo, transaction and signer trees plus block contents."""

    utxo_tree_root: int = 0
    tx_tree_root: int = 0
    signer_tree_root: int = 0
    signers: list[int | None] = field(default_factory=list)
    height: int = 0
    deposits: list[tuple[int, int]] = field(default_factory=list)
    withdrawals: list[tuple[int, int]] = field(default_factory=list)