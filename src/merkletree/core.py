"""Hash function capability used to build Merkle trees.

A hash function is any callable mapping ``bytes`` to a fixed-length digest.
Built-in functions:
- sha256-hex: lowercase hex text of SHA-256, as ASCII bytes (the default)
- sha256: raw 32-byte SHA-256 digest
- keccak256: raw 32-byte Keccak-256 digest

Supplied functions must be deterministic, pure, of fixed output length, and
collision-resistant for the caller's threat model. None of this is checked.
"""
from __future__ import annotations

import hashlib
from typing import Callable, Dict, FrozenSet, Union

from Crypto.Hash import keccak

from .errors import UnknownHashFunctionError

HashFunction = Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    """Return the raw 32-byte SHA-256 digest of data."""
    return hashlib.sha256(data).digest()


def sha256_hex(data: bytes) -> bytes:
    """Return the SHA-256 digest of data as 64 bytes of lowercase hex text.

    Roots published by rs-merkletree hash the hex text of child digests,
    so this is the function that reproduces them.
    """
    return hashlib.sha256(data).hexdigest().encode("ascii")


def keccak256(data: bytes) -> bytes:
    """Return the raw 32-byte Keccak-256 digest of data."""
    return keccak.new(digest_bits=256, data=data).digest()


HASH_FUNCTIONS: Dict[str, HashFunction] = {
    "sha256-hex": sha256_hex,
    "sha256": sha256,
    "keccak256": keccak256,
}

# Functions whose digests are already printable lowercase hex text
HEX_TEXT_FUNCTIONS: FrozenSet[HashFunction] = frozenset({sha256_hex})

DEFAULT_HASH_NAME = "sha256-hex"
DEFAULT_HASH_FUNCTION: HashFunction = sha256_hex


def get_hash_function(name: str) -> HashFunction:
    """Look up a built-in hash function by name.

    Raises:
        UnknownHashFunctionError: If name is not registered
    """
    try:
        return HASH_FUNCTIONS[name]
    except KeyError:
        raise UnknownHashFunctionError(f"Unknown algorithm: {name}") from None


def digest_is_hex_text(hash_fn: HashFunction) -> bool:
    return hash_fn in HEX_TEXT_FUNCTIONS


def resolve_hash_function(hash_fn: Union[HashFunction, str, None]) -> HashFunction:
    if hash_fn is None:
        return DEFAULT_HASH_FUNCTION
    if isinstance(hash_fn, str):
        return get_hash_function(hash_fn)
    return hash_fn


__all__ = [
    "HashFunction",
    "sha256",
    "sha256_hex",
    "keccak256",
    "HASH_FUNCTIONS",
    "DEFAULT_HASH_NAME",
    "DEFAULT_HASH_FUNCTION",
    "get_hash_function",
    "resolve_hash_function",
    "HEX_TEXT_FUNCTIONS",
    "digest_is_hex_text",
]
