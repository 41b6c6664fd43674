"""Errors raised when a transaction is rejected."""

from __future__ import annotations


class TransactionError(Exception):
    """Base class for transaction failures."""


class InvalidNonce(TransactionError):
    """The transaction's nonce is not the one expected."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"Invalid nonce for transaction expected {expected}, got: {got}")


class InvalidAmounts(TransactionError):
    """Input amounts do not add up to output amounts."""

    def __init__(self) -> None:
        super().__init__("Inputs do not sum with outputs")


class InvalidPublicKey(TransactionError):
    """An input is owned by someone other than the sender."""

    def __init__(self) -> None:
        super().__init__("Inputs pk are not equal to the sender pk")


class TransactionTreeFailure(TransactionError):
    """The transaction tree could not be built."""

    def __init__(self) -> None:
        super().__init__("Failed to build transaction tree")