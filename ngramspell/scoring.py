# -*- coding: utf-8 -*-
"""
Combination of edit distance and language-model probability into one
ranking score.

The formula is ad hoc: an exact match gets a large fixed bonus, other hits
get ``exponent * log(1/distance + 1)``. Any object with a compatible
``score(distance, log_prob)`` method can replace ``HeuristicScorer``.
"""

import math


class HeuristicScorer:
    def __init__(self, exact_match_bonus: float = 1000.0, distance_exponent: float = 20,
                 log_prob_floor: float = -500.0):
        self.exact_match_bonus = exact_match_bonus
        self.distance_exponent = distance_exponent
        self.log_prob_floor = log_prob_floor

    @classmethod
    def from_config(cls, cfg: dict) -> "HeuristicScorer":
        sc = cfg.get("scoring", {})
        return cls(
            exact_match_bonus=float(sc.get("exact_match_bonus", 1000.0)),
            distance_exponent=float(sc.get("distance_exponent", 20)),
            log_prob_floor=float(sc.get("log_prob_floor", -500.0)),
        )

    def score(self, distance: int, log_prob: float) -> float:
        """Lower is better."""
        # clamped so an impossible context cannot outweigh the distance terms
        log_prob = min(max(log_prob, self.log_prob_floor), 0.0)
        if distance == 0:
            weight = log_prob + self.exact_match_bonus
        else:
            weight = log_prob + self.distance_exponent * math.log(1.0 / distance + 1)
        return -weight

    __call__ = score
