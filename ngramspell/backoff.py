# -*- coding: utf-8 -*-
"""
Back-off n-gram language model stored as a trie over word ids.

Keys are contexts with the most recent word first:
``[w_i, w_{i-1}, w_{i-2}, ...]``. Training only counts; ``lock_and_score``
turns the counts into weighted conditional log-probabilities in one
depth-first pass and freezes the trie.

The back-off factor is a fixed heuristic, not an estimated discount:
the full-length context keeps its MLE, shorter contexts are scaled by
0.5 / (levels left unmatched).
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Sequence, Tuple

from ngramspell.errors import InvalidConfigError

logger = logging.getLogger(__name__)

UNSET = math.inf  # log-probability before scoring


def backoff_weight(remaining: int) -> float:
    if remaining == 0:
        return 1.0
    return 0.5 / remaining


def _log(value: float) -> float:
    return math.log(value) if value > 0 else -math.inf


class BackOffNode:
    __slots__ = ("remaining", "count", "log_prob", "weight", "children")

    def __init__(self, remaining: int, weight: float):
        self.remaining = remaining
        self.count = 0
        self.log_prob = UNSET
        self.weight = weight
        self.children: Dict[int, "BackOffNode"] = {}

    def __repr__(self):
        return (f"BackOffNode(remaining={self.remaining}, count={self.count}, "
                f"log_prob={self.log_prob}, weight={self.weight})")


class BackOffTrie:
    def __init__(self, order: int, weight: Callable[[int], float] = backoff_weight):
        if not isinstance(order, int) or order < 1:
            raise InvalidConfigError(f"n-gram order must be a positive integer, got {order!r}")
        self.order = order
        self.weight = weight
        self.root = BackOffNode(order, weight(order))
        self.locked = False

    def _child(self, node: BackOffNode, word_id: int) -> BackOffNode:
        child = node.children.get(word_id)
        if child is None:
            remaining = node.remaining - 1
            child = BackOffNode(remaining, self.weight(remaining))
            node.children[word_id] = child
        return child

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def observe(self, context_ids: Sequence[int]):
        """Count one occurrence of ``context_ids`` and of all its prefixes."""
        if self.locked:
            logger.debug("Ignoring observation on a locked language model")
            return
        node = self.root
        node.count += 1
        for word_id in list(context_ids)[:self.order]:
            node = self._child(node, word_id)
            node.count += 1

    def observe_with_count(self, context_ids: Sequence[int], count: int):
        """Set the raw count of one context. Only meant for restoring a saved model."""
        if self.locked:
            logger.debug("Ignoring restored count on a locked language model")
            return
        ids = list(context_ids)
        if len(ids) > self.order:
            raise InvalidConfigError(
                f"context of length {len(ids)} does not fit an order-{self.order} model")
        node = self.root
        for word_id in ids:
            node = self._child(node, word_id)
        node.count = count

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------
    def lock_and_score(self):
        if self.locked:
            return
        self.locked = True
        self.root.log_prob = -math.inf
        stack: List[Tuple[BackOffNode, int]] = [
            (child, self.root.count) for child in self.root.children.values()]
        while stack:
            node, parent_count = stack.pop()
            if node.count <= 0 or parent_count <= 0:
                node.log_prob = -math.inf
            else:
                node.log_prob = _log(node.count) - _log(parent_count) + _log(node.weight)
            stack.extend((child, node.count) for child in node.children.values())
        logger.info("Language model scored and locked (order %d, %d contexts)",
                    self.order, self.root.count)

    def log_probability(self, context_ids: Sequence[int]) -> float:
        """
        Log-probability of the longest stored prefix of ``context_ids``.

        A missing continuation backs off to the value of the last node
        reached.
        """
        if not self.locked:
            logger.warning("log_probability() called before lock_and_score()")
        node = self.root
        for word_id in context_ids:
            child = node.children.get(word_id)
            if child is None:
                return node.log_prob
            node = child
        return node.log_prob

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    def contexts(self) -> Iterator[Tuple[Tuple[int, ...], BackOffNode]]:
        """Depth-first ``(ids, node)`` for the root and every stored context."""
        stack: List[Tuple[Tuple[int, ...], BackOffNode]] = [((), self.root)]
        while stack:
            ids, node = stack.pop()
            yield ids, node
            for word_id, child in reversed(list(node.children.items())):
                stack.append((ids + (word_id,), child))

    def __repr__(self):
        return f"BackOffTrie(order={self.order}, locked={self.locked}, observations={self.root.count})"
