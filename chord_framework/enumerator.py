#!/usr/bin/env python3
"""
Candidate chord enumeration.

Produces every subset of a key sequence within a size range, ordered by
size and then by bitmask value (bit i set when the i-th key is included).
This order decides which of several equally small chords a word receives,
so it must stay stable across runs.
"""

from typing import Iterator, Sequence, Tuple


def enumerate_candidates(keys: Sequence[str], min_size: int,
                         max_size: int) -> Iterator[Tuple[str, ...]]:
    """
    Generate candidate chords from a key sequence.

    Args:
        keys: Ordered, duplicate-free key identifiers
        min_size: Smallest subset size to produce
        max_size: Largest subset size to produce

    Yields:
        Subsets as tuples keeping the input order of their keys,
        smallest first, ties broken by ascending bitmask
    """
    n = len(keys)
    if min_size > n:
        return

    upper = min(max_size, n)
    for size in range(max(min_size, 0), upper + 1):
        for mask in range(1 << n):
            if bin(mask).count('1') != size:
                continue
            yield tuple(key for i, key in enumerate(keys) if mask >> i & 1)

