"""Errors raised while building or reading a Merkle tree."""
from __future__ import annotations


class MerkleTreeError(Exception):
    """Base class for merkletree errors."""


class EmptyInputError(MerkleTreeError, ValueError):
    """A tree was requested over zero blocks."""


class TreeNotBuiltError(MerkleTreeError, LookupError):
    """The tree was read before a successful build."""


class UnknownHashFunctionError(MerkleTreeError, ValueError):
    """No hash function is registered under the requested name."""


__all__ = [
    "MerkleTreeError",
    "EmptyInputError",
    "TreeNotBuiltError",
    "UnknownHashFunctionError",
]
