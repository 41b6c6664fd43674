import pytest

from plasmafold.crh import utxo_hash
from plasmafold.keypair import PublicKey
from plasmafold.poseidon import canonical_config
from plasmafold.sparsemt import MerkleSparseTree, utxo_tree_config
from plasmafold.sparsemt_path import SparseConfig, SparseMTError
from plasmafold.utxo import UTXO

PP = canonical_config()


def _small_config(height=4):
    return SparseConfig(height=height, leaf_hash=utxo_hash, default_leaf=UTXO.dummy)


def _leaves(indices, amount=lambda i: i):
    return {i: UTXO(amount(i), PublicKey()) for i in indices}


def _check_membership(leaves):
    tree = MerkleSparseTree(utxo_tree_config(), PP, PP, leaves)
    root = tree.root
    for i, leaf in leaves.items():
        proof = tree.generate_proof(i, leaf)
        assert proof.verify(PP, PP, root, leaf)
        assert proof.verify_with_index(PP, PP, root, leaf, i)
    assert tree.validate()


@pytest.mark.parametrize("end", [10, 100])
def test_good_root_membership(end):
    _check_membership(_leaves(range(1, end)))


def test_bad_root_membership():
    leaves = _leaves(range(1, 100))
    tree = MerkleSparseTree(utxo_tree_config(), PP, PP, leaves)
    for i in range(1, 100, 11):
        proof = tree.generate_proof(i, leaves[i])
        assert not proof.verify(PP, PP, 0, leaves[i])
        assert not proof.verify_with_index(PP, PP, 0, leaves[i], i)


def test_good_root_update():
    old_leaves = _leaves(range(1, 10))
    new_leaves = _leaves(range(1, 20), lambda i: i * 3)
    tree = MerkleSparseTree(utxo_tree_config(), PP, PP, old_leaves)
    for i, new_leaf in new_leaves.items():
        old_root = tree.root
        old_leaf = old_leaves.get(i)
        if old_leaf is not None:
            old_proof = tree.generate_proof(i, old_leaf)
            update_proof = tree.update_and_prove(i, new_leaf)
            new_proof = tree.generate_proof(i, new_leaf)
            new_root = tree.root
            assert old_proof.verify_with_index(PP, PP, old_root, old_leaf, i)
            assert not old_proof.verify_with_index(PP, PP, new_root, old_leaf, i)
            assert new_proof.verify_with_index(PP, PP, new_root, new_leaf, i)
            assert not new_proof.verify_with_index(PP, PP, new_root, old_leaf, i)
            assert update_proof.verify(PP, PP, old_root, new_root, old_leaf, new_leaf, i)
        else:
            update_proof = tree.update_and_prove(i, new_leaf)
            new_proof = tree.generate_proof(i, new_leaf)
            new_root = tree.root
            assert new_proof.verify_with_index(PP, PP, new_root, new_leaf, i)
            assert update_proof.verify(PP, PP, old_root, new_root, UTXO.dummy(), new_leaf, i)
    assert tree.validate()


def test_blank_root_matches_tree_of_default_leaves():
    config = _small_config()
    blank = MerkleSparseTree.blank(config, PP, PP)
    filled = MerkleSparseTree(config, PP, PP, {0: UTXO.dummy(), 5: UTXO.dummy()})
    assert blank.root == filled.root
    assert blank.tree == {}


def test_blank_tree_proves_default_leaf():
    config = _small_config()
    blank = MerkleSparseTree.blank(config, PP, PP)
    proof = blank.generate_membership_proof(5)
    assert len(proof.path) == config.height - 1
    assert proof.verify_with_index(PP, PP, blank.root, UTXO.dummy(), 5)


def test_update_blank_tree_matches_built_tree():
    config = _small_config()
    leaves = _leaves([1, 2, 6])
    tree = MerkleSparseTree.blank(config, PP, PP)
    for i, leaf in leaves.items():
        tree.update_and_prove(i, leaf)
    assert tree.root == MerkleSparseTree(config, PP, PP, leaves).root
    assert tree.validate()


def test_siblings_match_update_proof():
    config = _small_config()
    tree = MerkleSparseTree(config, PP, PP, _leaves([1, 2, 3]))
    siblings = tree.siblings(3)
    proof = tree.update_and_prove(3, UTXO(77, PublicKey()))
    assert list(proof.path) == siblings
    assert len(siblings) == config.height - 1


def test_generate_proof_with_wrong_leaf_raises():
    tree = MerkleSparseTree(_small_config(), PP, PP, _leaves([1, 2]))
    with pytest.raises(SparseMTError):
        tree.generate_proof(1, UTXO(2, PublicKey()))


def test_empty_leaves_raise():
    with pytest.raises(SparseMTError):
        MerkleSparseTree(_small_config(), PP, PP, {})


def test_index_out_of_range_raises():
    tree = MerkleSparseTree(_small_config(), PP, PP, _leaves([1]))
    with pytest.raises(ValueError):
        tree.generate_membership_proof(8)
    with pytest.raises(ValueError):
        tree.update_and_prove(-1, UTXO.dummy())


def test_too_many_leaves_raise():
    with pytest.raises(ValueError):
        MerkleSparseTree(_small_config(3), PP, PP, _leaves(range(5)))


def test_validate_detects_tampering():
    config = _small_config()
    tree = MerkleSparseTree(config, PP, PP, _leaves([1, 2, 3]))
    assert tree.validate()
    tree.tree[config.last_level_index + 1] += 1
    assert not tree.validate()


def test_proof_at_wrong_index_fails():
    config = _small_config()
    leaves = _leaves([1, 2, 3])
    tree = MerkleSparseTree(config, PP, PP, leaves)
    proof = tree.generate_proof(2, leaves[2])
    assert proof.verify_with_index(PP, PP, tree.root, leaves[2], 2)
    assert not proof.verify_with_index(PP, PP, tree.root, leaves[2], 3)


def test_utxo_tree_config():
    config = utxo_tree_config()
    assert config.height == 32
    assert config.default_leaf() == UTXO.dummy()