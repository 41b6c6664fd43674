import pytest

from plasmafold.errors import (
    InvalidAmounts,
    InvalidNonce,
    InvalidPublicKey,
    TransactionError,
    TransactionTreeFailure,
)


def test_invalid_nonce_message_and_fields():
    err = InvalidNonce(3, 5)
    assert str(err) == "Invalid nonce for transaction expected 3, got: 5"
    assert err.expected == 3
    assert err.got == 5


@pytest.mark.parametrize(
    "error_class, message",
    [
        (InvalidAmounts, "Inputs do not sum with outputs"),
        (InvalidPublicKey, "Inputs pk are not equal to the sender pk"),
        (TransactionTreeFailure, "Failed to build transaction tree"),
    ],
)
def test_messages(error_class, message):
    assert str(error_class()) == message


@pytest.mark.parametrize(
    "error, message",
    [
        (InvalidAmounts(), "Inputs do not sum with outputs"),
        (InvalidNonce(0, 1), "Invalid nonce for transaction expected 0, got: 1"),
        (InvalidPublicKey(), "Inputs pk are not equal to the sender pk"),
        (TransactionTreeFailure(), "Failed to build transaction tree"),
    ],
)
def test_all_errors_are_transaction_errors(error, message):
    with pytest.raises(TransactionError) as excinfo:
        raise error
    assert excinfo.value is error
    assert str(excinfo.value) == message