"""Longest-common-subsequence solver shared by line and character diffs."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def longest_common_subsequence(a: Sequence[T], b: Sequence[T]) -> list[tuple[int, int]]:
    """Return index pairs ``(i, j)`` of one longest common subsequence.

    Pairs are 0-based into ``a`` and ``b`` and increase in both indices.
    Tokens are compared with ``==``. Runs in O(len(a) * len(b)) time and
    space, so very large inputs degrade quadratically.

    When both neighbours of a backtrack cell carry the same LCS length the
    walk steps back through ``b``. Unmatched ``a`` tokens therefore stay
    earliest in document order, and deletions come before insertions in the
    rebuilt edit script. Output for inputs with repeated tokens depends on
    this rule.
    """
    m = len(a)
    n = len(b)
    if m == 0 or n == 0:
        return []

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = dp[i]
        prev_row = dp[i - 1]
        token = a[i - 1]
        for j in range(1, n + 1):
            if token == b[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])

    pairs: list[tuple[int, int]] = []
    i = m
    j = n
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            pairs.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    pairs.reverse()
    return pairs
