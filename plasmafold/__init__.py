"""Plasma-style rollup primitives: Grumpkin curve, Poseidon hashing, Schnorr signatures, UTXO transactions and sparse Merkle trees."""

__version__ = "0.1.0"