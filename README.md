# plasmafold

Plain-Python building blocks for a Plasma-style UTXO rollup. The package has
no runtime dependencies.

## What is in it

- `plasmafold.curve`: arithmetic on the Grumpkin curve `y^2 = x^3 - 17`,
  whose base field is the BN254 scalar field. `Point` is an immutable affine
  point (the default `Point()` is the point at infinity) supporting `+`, `-`,
  negation and multiplication by an integer scalar; `to_field_elements()`
  returns `(x, y, is_zero)`. Also `generator()`, `random_scalar(rng)` and
  `random_point(rng)`.
- `plasmafold.poseidon`: `PoseidonConfig`, a duplex `PoseidonSponge` with
  `absorb()` and `squeeze()`, `generate_parameters()` (round constants and MDS
  matrix derived from the Grain LFSR), `canonical_config()` (width 5, 8 full
  rounds, 60 partial rounds, alpha 5, rate 4), `poseidon_hash()` and
  `poseidon_two_to_one()`.
- `plasmafold.schnorr`: Schnorr signatures with a Poseidon challenge:
  `key_gen(rng)`, `sign(config, sk, message, rng)` returning `(s, e)`, and
  `verify(config, pk, message, signature)`.
- `plasmafold.keypair`: `SecretKey`, `PublicKey`, `Signature` and `KeyPair`.
- `plasmafold.utxo.UTXO`, `plasmafold.transaction.Transaction` (exactly four
  inputs and four outputs, unused slots filled with `UTXO.dummy()`),
  `plasmafold.block.Block`, `plasmafold.noncemap.Nonce` and
  `plasmafold.user.User` (with `create`, `sign`, `spend_transaction`,
  `receive_transaction`) plus `sample_user(rng)`.
- `plasmafold.crh`: Poseidon hashes of the data structures:
  `public_key_hash`, `nonce_hash`, `utxo_hash` and `block_hash`;
  `plasmafold.transaction.transaction_hash` hashes a transaction.
- `plasmafold.sparsemt.MerkleSparseTree`: a fixed-height sparse Merkle tree
  with `generate_membership_proof`, `generate_proof`, `update_and_prove`,
  `siblings` and `validate`, and `MerkleSparseTree.blank` for an empty tree.
  Proofs are `MerkleSparseTreePath` (membership, with `verify` and
  `verify_with_index`) and `MerkleSparseTreeTwoPaths` (update, with `verify`)
  from `plasmafold.sparsemt_path`, where `SparseConfig` describes a tree's
  height, leaf hash and default leaf.
- Tree configurations: `sparsemt.utxo_tree_config()` (height 32),
  `noncemap.nonce_tree_config()` (height 32),
  `signerlist.signer_tree_config()` (height 13) together with
  `signerlist.signer_tree(params, signers)`, and
  `transaction.transaction_tree_config()` (height 13).
- `plasmafold.accumulator.Sha256Accumulator`: folds field elements into one
  by hashing the 32-byte little-endian encodings of the current value and the
  new value with SHA-256, dropping the last digest byte and reducing modulo
  the field.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Signing a transaction

```python
import random

from plasmafold.poseidon import canonical_config
from plasmafold.transaction import Transaction
from plasmafold.user import User

rng = random.Random(7)
config = canonical_config()

alice = User.create(rng, 1)
tx = Transaction()                     # every input and output is a dummy UTXO
tx.is_valid(None)                      # raises a TransactionError subclass when invalid

message = tx.to_field_elements()
signature = alice.sign(config, message, rng)
assert alice.keypair.pk.verify_signature(config, message, signature)
```

`Transaction.is_valid(sender)` raises `InvalidPublicKey` when a non-dummy
input is not owned by the sender (by default the owner of the first input),
and `InvalidAmounts` when the non-dummy inputs and outputs do not sum to the
same amount. Both subclass `plasmafold.errors.TransactionError`, as do
`InvalidNonce` and `TransactionTreeFailure`.

## Sparse Merkle trees

```python
from plasmafold.keypair import PublicKey
from plasmafold.poseidon import canonical_config
from plasmafold.sparsemt import MerkleSparseTree, utxo_tree_config
from plasmafold.utxo import UTXO

config = canonical_config()
leaves = {i: UTXO(amount=i * 10, pk=PublicKey()) for i in range(1, 10)}
tree = MerkleSparseTree(utxo_tree_config(), config, config, leaves)

proof = tree.generate_proof(3, leaves[3])
assert proof.verify_with_index(config, config, tree.root, leaves[3], 3)

old_root = tree.root
new_leaf = UTXO(amount=300, pk=PublicKey())
update = tree.update_and_prove(3, new_leaf)
assert update.verify(config, config, old_root, tree.root, leaves[3], new_leaf, 3)
assert tree.validate()
```

`generate_proof` raises `plasmafold.sparsemt_path.SparseMTError` when the
given leaf does not match the one stored at that index, and leaf indices
outside the tree raise `ValueError`.

## What it does not do

The package works on native values only. It has no arithmetic-circuit
gadgets, constraint systems or folding proofs for these structures, no
aggregator or client, no network service and no persistent storage: trees,
users and blocks live in memory for as long as the Python objects do.