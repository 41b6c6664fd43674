import pytest

from plasmafold.accumulator import Sha256Accumulator
from plasmafold.curve import BASE_MODULUS


def test_update_changes_value():
    acc = Sha256Accumulator()
    initial = acc.value
    acc.update(1)
    assert acc.value != initial and 0 < acc.value < 2**248


def test_result_fits_in_31_bytes():
    acc = Sha256Accumulator()
    for v in range(20):
        acc.update(v)
        assert 0 <= acc.value < 2**248


def test_deterministic():
    a, b = Sha256Accumulator(), Sha256Accumulator()
    for v in (5, 9, 123456789):
        a.update(v)
        b.update(v)
    assert a.value == b.value


def test_order_matters():
    a, b = Sha256Accumulator(), Sha256Accumulator()
    a.update(1)
    a.update(2)
    b.update(2)
    b.update(1)
    assert a.value != b.value


def test_different_values_give_different_results():
    a, b = Sha256Accumulator(), Sha256Accumulator()
    a.update(10)
    b.update(11)
    assert a.value != b.value


def test_values_are_reduced_before_hashing():
    a, b = Sha256Accumulator(), Sha256Accumulator()
    a.update(7)
    b.update(7 + BASE_MODULUS)
    assert a.value == b.value


def test_initial_value_out_of_range():
    with pytest.raises(ValueError):
        Sha256Accumulator(BASE_MODULUS)