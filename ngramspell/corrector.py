# -*- coding: utf-8 -*-
"""
Candidate search over the lexicon automaton (Oflazer's error-tolerant
recognition).

The search keeps an agenda of (partial candidate, automaton state) pairs.
A transition is only followed while the cutoff edit distance between the
misspelled word and the extended candidate stays within the error budget,
so the traversal never leaves the budget's edit ball. Every accepting
state within the budget is scored with the back-off language model for
the given context.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ngramspell.candidates import Candidate, CandidateQueue
from ngramspell.edit_distance import cutoff_edit_distance, edit_distance
from ngramspell.errors import InvalidConfigError
from ngramspell.lexicon import Word, to_symbols
from ngramspell.model import SpellModel
from ngramspell.scoring import HeuristicScorer

logger = logging.getLogger(__name__)

Suggestion = Tuple[str, float]


class Corrector:
    def __init__(self, model: SpellModel, max_threshold: int = 2, in_lexicon_threshold: int = 1,
                 min_candidates: int = 5, scorer=None):
        if max_threshold < 0 or in_lexicon_threshold < 0:
            raise InvalidConfigError("error thresholds must be >= 0")
        if min_candidates < 1:
            raise InvalidConfigError("min_candidates must be >= 1")
        if not model.finalized:
            logger.info("Finalizing language model before correction")
            model.finalize()
        self.model = model
        self.lexicon = model.lexicon
        self.max_threshold = max_threshold
        self.in_lexicon_threshold = in_lexicon_threshold
        self.min_candidates = min_candidates
        self.scorer = scorer if scorer is not None else HeuristicScorer()

    @classmethod
    def from_config(cls, model: SpellModel, cfg: dict) -> "Corrector":
        cc = cfg.get("corrector", {})
        return cls(
            model,
            max_threshold=cc.get("max_threshold", 2),
            in_lexicon_threshold=cc.get("in_lexicon_threshold", 1),
            min_candidates=cc.get("min_candidates", 5),
            scorer=HeuristicScorer.from_config(cfg),
        )

    # ==========================================================================
    # SEARCH
    # ==========================================================================
    def correct_word(self, misspelled: Word, context_ids: Sequence[int], threshold: int,
                     candidates: Optional[CandidateQueue] = None) -> CandidateQueue:
        """
        Collect every lexicon word within ``threshold`` edits of
        ``misspelled`` into ``candidates``.

        ``context_ids`` is the language-model key with slot 0 reserved for
        the candidate; the remaining slots hold the preceding words, most
        recent first.
        """
        if candidates is None:
            candidates = CandidateQueue()
        target = to_symbols(misspelled)
        key = list(context_ids) or [0]
        lexicon = self.lexicon

        agenda = [((), lexicon.root)]
        while agenda:
            prefix, state = agenda.pop()

            for symbol in lexicon.transitions_from(state):
                extended = prefix + (symbol,)
                if cutoff_edit_distance(target, extended, threshold) <= threshold:
                    agenda.append((extended, lexicon.child_at(state, symbol)))

            if not state.accepting:
                continue
            distance = edit_distance(target, prefix)
            if distance > threshold:
                continue
            key[0] = state.word_id
            log_prob = self.model.backoff.log_probability(key)
            score = self.scorer.score(distance, log_prob)
            candidates.offer(Candidate(state.word_id, score))

        return candidates

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================
    def correct_word_in_context(self, context: Sequence[str]) -> List[Suggestion]:
        """
        Ranked ``(word, score)`` suggestions for ``context[-1]``, best first.

        Earlier entries of ``context`` are the preceding tokens; only the
        last ``order`` entries are used. ``""`` stands for the start of the
        text.
        """
        if not context:
            return []
        context = list(context)[-self.model.order:]
        misspelled = context[-1]
        if not misspelled:
            return []

        # slot 0 is filled with each candidate during the search
        context_ids = [0] + [self.model.context_id(w) for w in reversed(context[:-1])]

        candidates = CandidateQueue()
        if self.lexicon.contains(misspelled):
            # probably correct; only look at close neighbours
            self.correct_word(misspelled, context_ids,
                              min(self.in_lexicon_threshold, self.max_threshold), candidates)
        else:
            for threshold in range(self.max_threshold + 1):
                self.correct_word(misspelled, context_ids, threshold, candidates)
                if len(candidates) >= self.min_candidates:
                    break

        out = [(self.lexicon.word_of(c.word_id), c.score) for c in candidates]
        logger.debug("%r -> %s", misspelled, out[:5])
        return out

    def correct(self, word: str) -> List[Suggestion]:
        return self.correct_word_in_context([word])

    def correct_tokens(self, tokens: Iterable[str]) -> Iterator[Tuple[str, List[Suggestion]]]:
        """Correct a token stream, each token in the context of the ones before it."""
        window = [""] * self.model.order
        for tok in tokens:
            if not tok:
                continue
            window = window[1:] + [tok]
            yield tok, self.correct_word_in_context(window)
