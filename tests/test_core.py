"""Tests for the hash function registry."""
import hashlib

import pytest


def test_sha256_hex_is_ascii_hex_text():
    """sha256-hex digest is 64 bytes of ASCII hex."""
    from merkletree.core import sha256_hex

    result = sha256_hex(b"hello")
    assert isinstance(result, bytes)
    assert len(result) == 64
    assert result.decode("ascii") == hashlib.sha256(b"hello").hexdigest()


def test_sha256_produces_32_bytes():
    """Raw SHA-256 digest is 32 bytes."""
    from merkletree.core import sha256

    assert len(sha256(b"hello")) == 32


def test_keccak256_known_vector():
    """Keccak-256 of empty input (not NIST SHA3-256)."""
    from merkletree.core import keccak256

    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_default_is_sha256_hex():
    """Default hash function is sha256-hex."""
    from merkletree.core import DEFAULT_HASH_FUNCTION, get_hash_function, sha256_hex

    assert DEFAULT_HASH_FUNCTION is sha256_hex
    assert get_hash_function("sha256-hex") is sha256_hex


def test_only_sha256_hex_is_hex_text():
    """Only sha256-hex produces digests that are already hex text."""
    from merkletree.core import digest_is_hex_text, keccak256, sha256, sha256_hex

    assert digest_is_hex_text(sha256_hex)
    assert not digest_is_hex_text(sha256)
    assert not digest_is_hex_text(keccak256)
    assert not digest_is_hex_text(lambda data: data)


def test_unknown_hash_function():
    """Unknown names raise UnknownHashFunctionError."""
    from merkletree.core import get_hash_function
    from merkletree.errors import UnknownHashFunctionError

    with pytest.raises(UnknownHashFunctionError, match="Unknown algorithm: md5"):
        get_hash_function("md5")


def test_merkle_tree_rejects_unknown_name():
    """Trees reject unknown hash names as ValueError."""
    from merkletree.merkle import MerkleTree

    with pytest.raises(ValueError):
        MerkleTree("blake2")
