# -*- coding: utf-8 -*-
"""
Levenshtein distance over symbol sequences, plus the cutoff variant used to
prune the lexicon search.

Sequences can be strings or sequences of integer code points; symbols are
only compared with ``==``.
"""

from typing import Iterator, List, Optional, Sequence


def _rows(first: Sequence, second: Sequence, first_end: int) -> Iterator[List[int]]:
    """Yield the rows d[0] .. d[first_end] of the DP table."""
    prev = list(range(len(second) + 1))
    yield prev
    for i in range(1, first_end + 1):
        a = first[i - 1]
        cur = [i]
        for j, b in enumerate(second, 1):
            if a == b:
                cur.append(prev[j - 1])
            else:
                cur.append(1 + min(
                    prev[j],        # deletion
                    cur[j - 1],     # insertion
                    prev[j - 1],    # substitution
                ))
        yield cur
        prev = cur


def edit_distance(first: Sequence, second: Sequence, first_end: Optional[int] = None) -> int:
    """
    Minimum number of insertions, deletions and substitutions turning
    ``first[:first_end]`` into ``second``.

    ``first_end`` defaults to the full length of ``first``; the prefix is
    never copied.
    """
    if first is None or second is None:
        raise TypeError("edit_distance() needs two sequences, got None")
    if first_end is None:
        first_end = len(first)
    elif not 0 <= first_end <= len(first):
        raise ValueError(f"first_end {first_end} outside [0, {len(first)}]")

    last = None
    for last in _rows(first, second, first_end):
        pass
    return last[-1]


def cutoff_edit_distance(incorrect: Sequence, candidate: Sequence, threshold: int) -> int:
    """
    Smallest distance between ``candidate`` and a prefix of ``incorrect``
    whose length lies in [max(1, n - t), min(m, n + t)].

    If the candidate can no longer come within ``threshold`` edits of any
    such prefix the result is larger than ``threshold``. An empty window
    (candidate already too long, or nothing to compare against) returns
    ``threshold + 1``.
    """
    if incorrect is None or candidate is None:
        raise TypeError("cutoff_edit_distance() needs two sequences, got None")
    if threshold < 0:
        raise ValueError(f"threshold must be >= 0, got {threshold}")

    m = len(incorrect)
    n = len(candidate)
    lo = max(1, n - threshold)
    hi = min(m, n + threshold)
    if lo > hi:
        return threshold + 1

    # one pass: row i of the table ends in edit_distance(incorrect[:i], candidate)
    best = None
    for i, row in enumerate(_rows(incorrect, candidate, hi)):
        if i >= lo and (best is None or row[-1] < best):
            best = row[-1]
    return best
