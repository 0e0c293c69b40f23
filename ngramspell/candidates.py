# -*- coding: utf-8 -*-
import heapq
from typing import Iterator, List, NamedTuple, Set, Tuple


class Candidate(NamedTuple):
    word_id: int
    score: float  # smaller is better


class CandidateQueue:
    """
    Priority queue holding at most one candidate per word id.

    Iterating empties the queue, best candidate first.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int]] = []
        self._ids: Set[int] = set()

    def offer(self, candidate: Candidate) -> bool:
        if candidate.word_id in self._ids:
            return False
        self._ids.add(candidate.word_id)
        heapq.heappush(self._heap, (candidate.score, candidate.word_id))
        return True

    def __contains__(self, word_id) -> bool:
        return word_id in self._ids

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)

    def __iter__(self) -> Iterator[Candidate]:
        while self._heap:
            score, word_id = heapq.heappop(self._heap)
            self._ids.discard(word_id)
            yield Candidate(word_id, score)
