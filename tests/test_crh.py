import random

import pytest

from plasmafold.block import Block
from plasmafold.crh import block_hash, nonce_hash, public_key_hash, utxo_hash
from plasmafold.curve import Point, random_point
from plasmafold.keypair import KeyPair, PublicKey
from plasmafold.poseidon import canonical_config, poseidon_hash
from plasmafold.utxo import UTXO


@pytest.fixture(scope="module")
def pp():
    return canonical_config()


def test_public_key_crh(pp):
    rng = random.Random(99)
    for i in range(5):
        key = Point() if i == 0 else random_point(rng)
        public_key = PublicKey(key)
        res1 = public_key_hash(pp, public_key)
        assert res1 == public_key_hash(pp, PublicKey(key))
        random_pk = KeyPair.generate(rng).pk
        assert public_key_hash(pp, random_pk) != res1


def test_zero_public_key_uses_zero_flag(pp):
    assert public_key_hash(pp, PublicKey()) == poseidon_hash(pp, [0, 0, 1])


def test_nonzero_public_key_layout(pp):
    key = random_point(random.Random(4))
    assert public_key_hash(pp, PublicKey(key)) == poseidon_hash(pp, [key.x, key.y, 0])


def test_nonce_hash_distinguishes_nonces(pp):
    assert nonce_hash(pp, 0) != nonce_hash(pp, 1)
    assert nonce_hash(pp, 5) == poseidon_hash(pp, [5])


def test_utxo_hash_layout_and_dummy_flag(pp):
    pk = KeyPair.generate(random.Random(8)).pk
    utxo = UTXO(80, pk)
    assert utxo_hash(pp, utxo) == poseidon_hash(pp, [80, 0, pk.key.x, pk.key.y, 0])
    assert utxo_hash(pp, UTXO.dummy()) == poseidon_hash(pp, [0, 1, 0, 0, 1])
    assert utxo_hash(pp, UTXO(0, PublicKey())) != utxo_hash(pp, UTXO.dummy())


def test_utxo_hash_depends_on_amount(pp):
    assert utxo_hash(pp, UTXO(1, PublicKey())) != utxo_hash(pp, UTXO(2, PublicKey()))


def test_block_hash_ignores_lists_but_not_height(pp):
    a = Block(utxo_tree_root=1, tx_tree_root=2, signer_tree_root=3, height=4)
    b = Block(1, 2, 3, signers=[1, None], height=4, deposits=[(1, 5)])
    c = Block(1, 2, 3, height=5)
    assert block_hash(pp, a) == block_hash(pp, b)
    assert block_hash(pp, a) != block_hash(pp, c)
    assert block_hash(pp, a) == poseidon_hash(pp, [1, 2, 3, 4])