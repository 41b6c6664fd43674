[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plasmafold"
version = "0.1.0"
description = "Plasma-style rollup data structures: Schnorr signatures, Poseidon hashing and sparse Merkle trees"
requires-python = ">=3.10"
dependencies = []
keywords = ["rollup", "plasma", "schnorr", "poseidon", "merkle", "sparse-merkle-tree", "utxo", "grumpkin"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["plasmafold"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
