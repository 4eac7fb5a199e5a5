"""
Command-line driver: fill an AVLTree with seeded random keys, then verify it.

Duplicate keys drawn by the generator are reported and skipped. Any
invariant violation found by the final verification is fatal and turns
into a nonzero exit status.
"""

import sys
from typing import Iterable, List

import numpy as np

from avl_tree import AVLTree, DuplicateKeyError, InvariantViolation

SEED = 20200705
KEY_COUNT = 1000
KEY_UPPER_BOUND = 10000


def random_keys(count: int = KEY_COUNT, upper: int = KEY_UPPER_BOUND, seed: int = SEED) -> List[int]:
    """Draw count keys uniformly from [0, upper); repeats are possible."""
    if count < 0:
        raise ValueError("count must be non-negative")
    if upper <= 0:
        raise ValueError("upper must be positive")
    rng = np.random.RandomState(seed)
    return [int(k) for k in rng.randint(0, upper, size=count)]


def populate(tree: AVLTree, keys: Iterable[int]) -> List[int]:
    """Insert keys in order and return the ones rejected as duplicates."""
    rejected: List[int] = []
    for key in keys:
        try:
            tree.insert(key)
        except DuplicateKeyError as e:
            print(e)
            rejected.append(e.key)
    return rejected


def run(seed: int = SEED, count: int = KEY_COUNT, upper: int = KEY_UPPER_BOUND) -> int:
    tree = AVLTree()
    rejected = populate(tree, random_keys(count, upper, seed))
    print(f"Inserted {len(tree)} keys, rejected {len(rejected)} duplicates")

    try:
        tree.verify()
    except InvariantViolation as e:
        print(f"Verification failed ({type(e).__name__}): {e}")
        return 1

    print("In-order traversal sorted: OK")
    print("Balance factors match subtree heights: OK")
    print("Balance factors within [-1, 1]: OK")
    print("Parent links consistent: OK")
    print(f"{tree!r}, fixups {tree.fixup_counts()}")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
