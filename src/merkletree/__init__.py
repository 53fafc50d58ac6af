"""Merkle tree construction over ordered data blocks."""

from merkletree.core import (
    DEFAULT_HASH_FUNCTION,
    HASH_FUNCTIONS,
    HashFunction,
    get_hash_function,
    keccak256,
    sha256,
    sha256_hex,
)
from merkletree.errors import (
    EmptyInputError,
    MerkleTreeError,
    TreeNotBuiltError,
    UnknownHashFunctionError,
)
from merkletree.merkle import (
    MerkleTree,
    Node,
    ProofStep,
    hash_leaf,
    hash_node,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_HASH_FUNCTION",
    "HASH_FUNCTIONS",
    "HashFunction",
    "get_hash_function",
    "keccak256",
    "sha256",
    "sha256_hex",
    "EmptyInputError",
    "MerkleTreeError",
    "TreeNotBuiltError",
    "UnknownHashFunctionError",
    "MerkleTree",
    "Node",
    "ProofStep",
    "hash_leaf",
    "hash_node",
    "verify_proof",
]
