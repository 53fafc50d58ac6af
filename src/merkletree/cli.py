"""Command line entry point: print the Merkle root of the given blocks."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .core import DEFAULT_HASH_NAME, HASH_FUNCTIONS
from .errors import MerkleTreeError
from .merkle import MerkleTree


def read_blocks(args: argparse.Namespace) -> List[bytes]:
    if not args.files:
        return [block.encode("utf-8") for block in args.blocks]
    blocks = []
    for path in args.blocks:
        with open(path, "rb") as f:
            blocks.append(f.read())
    return blocks


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="merkletree", description="Print the Merkle root of ordered blocks")
    ap.add_argument("blocks", nargs="*", help="Text blocks, or file paths with --files")
    ap.add_argument("--hash", default=DEFAULT_HASH_NAME, choices=sorted(HASH_FUNCTIONS), help="Hash function")
    ap.add_argument("--files", action="store_true", help="Treat each argument as a file holding one block")
    ap.add_argument("--workers", type=int, default=None, help="Threads used for hashing")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log each tree level")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        blocks = read_blocks(args)
    except OSError as e:
        ap.error(str(e))

    try:
        tree = MerkleTree(args.hash).build_tree(blocks, workers=args.workers)
    except MerkleTreeError as e:
        ap.error(str(e))

    print(tree.root_hex())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
