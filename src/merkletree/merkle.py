"""Binary Merkle tree construction.

- LeafHash(data) = H(data)
- NodeHash(left, right) = H(left || right)

No domain-separation prefixes are added. A level with an odd number of nodes
pairs its last node with itself (duplicate-last-node policy), and proofs
produced by :meth:`MerkleTree.proof` follow the same rule.

Nodes live in a per-level arena owned by the tree; a node is addressed by
``(level, index)`` and its children are found through the tree.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .core import DEFAULT_HASH_FUNCTION, HashFunction, digest_is_hex_text, resolve_hash_function
from .errors import EmptyInputError, TreeNotBuiltError

logger = logging.getLogger(__name__)

Block = Union[bytes, bytearray, memoryview, str]


def _to_bytes(block: Block) -> bytes:
    if isinstance(block, str):
        return block.encode("utf-8")
    if isinstance(block, (bytes, bytearray, memoryview)):
        return bytes(block)
    raise TypeError(f"Block must be bytes-like or str, not {type(block).__name__}")


def hash_leaf(data: Block, hash_fn: HashFunction = DEFAULT_HASH_FUNCTION) -> bytes:
    """Hash a leaf node: H(data).

    Args:
        data: Raw leaf data; text is encoded as UTF-8
        hash_fn: Hash function to apply

    Returns:
        Leaf digest
    """
    return hash_fn(_to_bytes(data))


def hash_node(left: bytes, right: bytes, hash_fn: HashFunction = DEFAULT_HASH_FUNCTION) -> bytes:
    """Hash an internal node: H(left || right).

    Args:
        left: Left child digest
        right: Right child digest
        hash_fn: Hash function to apply

    Returns:
        Parent digest
    """
    return hash_fn(left + right)


@dataclass(frozen=True)
class Node:
    """A node of a built tree, addressed by its level and position."""

    digest: bytes
    level: int
    index: int
    hex_text: bool = field(default=False, repr=False, compare=False)

    @property
    def is_leaf(self) -> bool:
        return self.level == 0

    def hexdigest(self) -> str:
        """Lowercase hex form of the digest.

        Digests that are already hex text (``sha256_hex``) are returned as-is.
        """
        if self.hex_text:
            return self.digest.decode("ascii")
        return self.digest.hex()


@dataclass(frozen=True)
class ProofStep:
    """One step of an audit path: a sibling digest and which side it is on."""

    sibling: bytes
    is_left: bool


Level = Tuple[Node, ...]


class MerkleTree:
    """Merkle tree over an ordered collection of blocks.

    Example:
        >>> tree = MerkleTree().build_tree(["Hello", "World", "From", "Rust"])
        >>> tree.root_node().digest.decode()
        '725367a8cee028cf3360c19d20c175733191562b01e60d093e81d8570e865f81'
    """

    def __init__(self, hash_fn: Union[HashFunction, str, None] = None) -> None:
        """
        Args:
            hash_fn: Hash function, registered name, or None for the default
        """
        self.hash_fn = resolve_hash_function(hash_fn)
        self.hex_text = digest_is_hex_text(self.hash_fn)
        self._levels: Optional[Tuple[Level, ...]] = None

    def __len__(self) -> int:
        return len(self._levels[0]) if self._levels else 0

    @property
    def levels(self) -> Tuple[Level, ...]:
        """All levels, leaves first and the root level last."""
        if self._levels is None:
            raise TreeNotBuiltError("Merkle tree has not been built")
        return self._levels

    def build_tree(self, blocks: Iterable[Block], workers: Optional[int] = None) -> "MerkleTree":
        """Build the tree from scratch over blocks, in order.

        Args:
            blocks: Ordered data blocks
            workers: Thread count for hashing within a level; None or 1
                hashes sequentially

        Returns:
            This tree, for chaining

        Raises:
            EmptyInputError: If blocks is empty
        """
        data = [_to_bytes(block) for block in blocks]
        if not data:
            raise EmptyInputError("Cannot build a Merkle tree with no blocks")
        logger.debug("Building Merkle tree over %d blocks", len(data))

        if workers is not None and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                levels = self._build_levels(data, executor.map)
        else:
            levels = self._build_levels(data, map)

        self._levels = levels
        return self

    def _build_levels(self, data: List[bytes], mapper) -> Tuple[Level, ...]:
        hash_fn = self.hash_fn
        digests = list(mapper(hash_fn, data))
        levels = [self._make_level(0, digests)]

        while len(digests) > 1:
            # odd trailing node is paired with itself
            pairs = [
                (digests[i], digests[i + 1] if i + 1 < len(digests) else digests[i])
                for i in range(0, len(digests), 2)
            ]
            digests = list(mapper(lambda pair: hash_node(pair[0], pair[1], hash_fn), pairs))
            levels.append(self._make_level(len(levels), digests))

        return tuple(levels)

    def _make_level(self, level: int, digests: Sequence[bytes]) -> Level:
        nodes = tuple(
            Node(digest, level, index, self.hex_text) for index, digest in enumerate(digests)
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Level %d (%d nodes): %s", level, len(nodes), [n.hexdigest() for n in nodes]
            )
        return nodes

    def root_node(self) -> Node:
        """Return the root node.

        Raises:
            TreeNotBuiltError: If the tree has not been built
        """
        return self.levels[-1][0]

    def root_hash(self) -> bytes:
        return self.root_node().digest

    def root_hex(self) -> str:
        """Printable lowercase hex form of the root digest."""
        return self.root_node().hexdigest()

    def depth(self) -> int:
        """Number of levels from the root down to the leaves, inclusive."""
        return len(self.levels)

    def count_leaves(self) -> int:
        return len(self.levels[0])

    def leaves(self) -> Level:
        return self.levels[0]

    def includes(self, digest: Union[bytes, str]) -> bool:
        """Check whether any node of the tree carries digest.

        Note: the argument is a digest, not the raw block. Text is compared
        as its UTF-8 bytes, which matches digests from ``sha256_hex``.
        """
        if isinstance(digest, str):
            digest = digest.encode("utf-8")
        return any(node.digest == digest for level in self.levels for node in level)

    def children(self, node: Node) -> Tuple[Node, ...]:
        """Return (left, right) for an internal node, () for a leaf.

        A duplicated trailing node is returned as both children.
        """
        if node.level == 0:
            return ()
        below = self.levels[node.level - 1]
        left = below[2 * node.index]
        right = below[2 * node.index + 1] if 2 * node.index + 1 < len(below) else left
        return left, right

    def sibling(self, node: Node) -> Optional[Node]:
        """Return the node paired with node when its parent was hashed.

        A duplicated trailing node is its own sibling; the root has none.
        """
        levels = self.levels
        if node.level == len(levels) - 1:
            return None
        level = levels[node.level]
        pos = node.index ^ 1
        return level[pos] if pos < len(level) else node

    def proof(self, index: int) -> List[ProofStep]:
        """Return the audit path for the leaf at index, bottom up.

        Raises:
            IndexError: If index is not a leaf position
            TreeNotBuiltError: If the tree has not been built
        """
        leaves = self.levels[0]
        if not 0 <= index < len(leaves):
            raise IndexError(f"Leaf index {index} out of range for {len(leaves)} leaves")

        path = []
        for level in self.levels[:-1]:
            sibling = self.sibling(level[index])
            path.append(ProofStep(sibling.digest, index % 2 == 1))
            index //= 2
        return path


def verify_proof(
    leaf: Block,
    proof: Sequence[ProofStep],
    root: bytes,
    hash_fn: HashFunction = DEFAULT_HASH_FUNCTION,
) -> bool:
    """Recompute the root from raw leaf data and its audit path.

    Args:
        leaf: Raw leaf data
        proof: Audit path from :meth:`MerkleTree.proof`
        root: Expected root digest
        hash_fn: Hash function the tree was built with

    Returns:
        True if the recomputed root equals root
    """
    current = hash_leaf(leaf, hash_fn)
    for step in proof:
        if step.is_left:
            current = hash_node(step.sibling, current, hash_fn)
        else:
            current = hash_node(current, step.sibling, hash_fn)
    return current == root


__all__ = [
    "Block",
    "Node",
    "ProofStep",
    "MerkleTree",
    "hash_leaf",
    "hash_node",
    "verify_proof",
]
