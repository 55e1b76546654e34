"""
Sequential string permutation.

Pure recursive generation with no concurrency. This is also the leaf
computation of the concurrent permuter, so it stays a module-level
function that can be shipped to a process pool.
"""

from __future__ import annotations

from math import factorial


def permute(tail: str) -> list[str]:
    """
    Return every permutation of tail.

    Positions are distinct, so repeated characters yield repeated
    permutations: the result always holds len(tail)! entries.

    Uses a rotation scheme rather than swaps: on each pass the first
    character is fixed, the remainder is permuted, and the consumed
    character is moved to the end before the next pass.

    Example:
        >>> permute("abc")
        ['abc', 'acb', 'bca', 'bac', 'cab', 'cba']
    """
    if len(tail) <= 1:
        return [tail]

    permutations: list[str] = []
    for _ in range(len(tail)):
        new_head, new_tail = tail[0], tail[1:]
        permutations.extend(new_head + rest for rest in permute(new_tail))
        tail = new_tail + new_head
    return permutations


def permutation_count(text: str) -> int:
    """Number of permutations permute(text) produces."""
    return factorial(len(text))
