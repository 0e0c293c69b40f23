# -*- coding: utf-8 -*-
"""
SpellModel: lexicon automaton + back-off language model trained from one
token stream, with save/load to a gzip-compressed text file.

File layout::

    SpellCheckerDictionary
    ngram : 3
    #
    <next free word id>
    99,97,116:1            <- code points of a word : word id
    ...
    #
    :6                     <- raw count of the empty context (root)
    1,0,0:1                <- word ids, most recent first : raw count
    ...
"""

import gzip
import logging
from pathlib import Path
from typing import IO, Iterable, List, Optional, Sequence

from ngramspell.backoff import BackOffTrie
from ngramspell.errors import InvalidConfigError, ModelFormatError
from ngramspell.lexicon import DELIMITER_ID, MAX_SYMBOL, LexiconAutomaton, Word
from ngramspell.normalize import iter_tokens

logger = logging.getLogger(__name__)

HEADER = "SpellCheckerDictionary"
SECTION_END = "#"
NGRAM_PREFIX = "ngram : "

UNKNOWN_ID = -1  # id used in contexts for words missing from the lexicon


class SpellModel:
    def __init__(self, order: int = 3):
        if isinstance(order, bool) or not isinstance(order, int) or order < 1:
            raise InvalidConfigError(f"n-gram order must be a positive integer, got {order!r}")
        self.order = order
        self.lexicon = LexiconAutomaton()
        self.backoff = BackOffTrie(order)
        self._window: List[int] = [DELIMITER_ID] * order

    # ==========================================================================
    # TRAINING
    # ==========================================================================
    def add_word(self, word: Word) -> int:
        """Store a word in the lexicon only; the language model is untouched."""
        if self.finalized:
            logger.warning("Model is finalized; word %r not added", word)
            return self.lexicon.id_of(word)
        return self.lexicon.insert(word)

    def train_tokens(self, tokens: Iterable[str]) -> int:
        """
        Feed a token stream. Each token is added to the lexicon and the last
        ``order`` ids (most recent first) are counted in the language model.
        The window carries over between calls.
        """
        if self.finalized:
            logger.warning("Model is finalized; training input ignored")
            return 0
        seen = 0
        for tok in tokens:
            if not tok:
                continue
            word_id = self.lexicon.insert(tok)
            self._window = self._window[1:] + [word_id]
            self.backoff.observe(self._window[::-1])
            seen += 1
        return seen

    def fit(self, lines: Iterable[str]) -> "SpellModel":
        n = self.train_tokens(iter_tokens(lines))
        logger.info("Trained on %d tokens, lexicon has %d words", n, len(self.lexicon))
        return self

    def finalize(self):
        """Turn counts into probabilities. The model is read-only afterwards."""
        self.backoff.lock_and_score()

    @property
    def finalized(self) -> bool:
        return self.backoff.locked

    # ==========================================================================
    # LOOKUP
    # ==========================================================================
    def contains(self, word: Word) -> bool:
        return self.lexicon.contains(word)

    __contains__ = contains

    def id_of(self, word: Word) -> Optional[int]:
        return self.lexicon.id_of(word)

    def context_id(self, word: Word) -> int:
        """Like ``id_of`` but unknown words map to ``UNKNOWN_ID``."""
        word_id = self.lexicon.id_of(word)
        return UNKNOWN_ID if word_id is None else word_id

    def log_probability(self, words: Sequence[Word]) -> float:
        """Back-off log-probability of ``words`` given most recent first."""
        return self.backoff.log_probability([self.context_id(w) for w in words])

    # ==========================================================================
    # PERSISTENCE
    # ==========================================================================
    def dump(self, fh: IO[str]):
        fh.write(HEADER + "\n")
        fh.write(f"{NGRAM_PREFIX}{self.order}\n")
        fh.write(SECTION_END + "\n")

        fh.write(f"{self.lexicon.next_id}\n")
        for symbols, word_id in self.lexicon.words():
            fh.write(",".join(str(s) for s in symbols) + f":{word_id}\n")
        fh.write(SECTION_END + "\n")

        for ids, node in self.backoff.contexts():
            fh.write(",".join(str(i) for i in ids) + f":{node.count}\n")

    def save(self, path, encoding: str = "utf-8"):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with gzip.open(path, "wt", encoding=encoding, newline="\n") as fh:
            self.dump(fh)
        logger.info("Saved model to %s", path)

    @classmethod
    def restore(cls, fh: IO[str], finalize: bool = True) -> "SpellModel":
        lines = (ln.rstrip("\r\n") for ln in fh)
        numbered = enumerate(lines, 1)

        def next_line(what):
            for number, line in numbered:
                return number, line
            raise ModelFormatError(f"unexpected end of file, expected {what}")

        number, line = next_line("header")
        if line != HEADER:
            raise ModelFormatError(f"not a spell model (header {line!r})", number)

        number, line = next_line("n-gram order")
        if not line.startswith(NGRAM_PREFIX):
            raise ModelFormatError(f"expected '{NGRAM_PREFIX}<order>', got {line!r}", number)
        try:
            order = int(line[len(NGRAM_PREFIX):])
            obj = cls(order)
        except (ValueError, InvalidConfigError) as exc:
            raise ModelFormatError(f"bad n-gram order: {exc}", number) from exc

        number, line = next_line("end of configuration")
        if line != SECTION_END:
            raise ModelFormatError(f"expected '{SECTION_END}', got {line!r}", number)
        logger.info("Configuration restored (order %d)", order)

        number, line = next_line("next word id")
        try:
            next_id = int(line)
        except ValueError as exc:
            raise ModelFormatError(f"bad next word id {line!r}", number) from exc

        while True:
            number, line = next_line("lexicon entry")
            if line == SECTION_END:
                break
            word, word_id = _split_record(line, number)
            try:
                symbols = [int(s) for s in word.split(",")] if word else []
            except ValueError as exc:
                raise ModelFormatError(f"bad symbol list {word!r}", number) from exc
            if not symbols or min(symbols) <= 0 or max(symbols) > MAX_SYMBOL:
                raise ModelFormatError(f"empty or invalid word {word!r}", number)
            if word_id <= DELIMITER_ID:
                raise ModelFormatError(f"word id must be positive, got {word_id}", number)
            if obj.lexicon.symbols_of(word_id) is not None:
                raise ModelFormatError(f"word id {word_id} used twice", number)
            obj.lexicon.insert_with_id(symbols, word_id)
        obj.lexicon.counter.advance_past(next_id - 1)
        logger.info("Lexicon restored (%d words)", len(obj.lexicon))

        for number, line in numbered:
            if not line:
                continue
            key, count = _split_record(line, number)
            if count < 0:
                raise ModelFormatError(f"negative count {count}", number)
            try:
                ids = [int(i) for i in key.split(",")] if key else []
                obj.backoff.observe_with_count(ids, count)
            except (ValueError, InvalidConfigError) as exc:
                raise ModelFormatError(f"bad context {key!r}: {exc}", number) from exc
        logger.info("Language model restored (%d observations)", obj.backoff.root.count)

        if finalize:
            obj.finalize()
        return obj

    @classmethod
    def load(cls, path, encoding: str = "utf-8", finalize: bool = True) -> "SpellModel":
        path = Path(path)
        logger.info("Restoring model from %s", path)
        try:
            with gzip.open(path, "rt", encoding=encoding) as fh:
                return cls.restore(fh, finalize=finalize)
        except UnicodeDecodeError as exc:
            raise ModelFormatError(f"{path} cannot be read as {encoding}: {exc}") from exc

    def __repr__(self):
        return f"SpellModel(order={self.order}, words={len(self.lexicon)}, finalized={self.finalized})"


def _split_record(line: str, number: int):
    key, sep, value = line.rpartition(":")
    if not sep:
        raise ModelFormatError(f"missing ':' in {line!r}", number)
    try:
        return key, int(value)
    except ValueError as exc:
        raise ModelFormatError(f"bad number {value!r}", number) from exc
