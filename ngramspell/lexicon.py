# -*- coding: utf-8 -*-
"""
Lexicon automaton: a trie over code-point sequences whose accepting paths
are the vocabulary. Every word gets a unique integer id the first time it is
inserted; the id never changes afterwards.

Symbol 0 is reserved as delimiter and id 0 belongs to the empty word, which
the language model uses to pad the context at the start of a text.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

DELIMITER = 0
DELIMITER_ID = 0
MAX_SYMBOL = 0x10FFFF  # largest Unicode code point

Word = Union[str, Sequence[int]]


def to_symbols(word: Word) -> Tuple[int, ...]:
    """Code points of ``word``, cut at the first delimiter."""
    if isinstance(word, str):
        symbols = tuple(ord(c) for c in word)
    else:
        symbols = tuple(word)
    if DELIMITER in symbols:
        symbols = symbols[:symbols.index(DELIMITER)]
    return symbols


def from_symbols(symbols: Sequence[int]) -> str:
    return "".join(chr(s) for s in symbols)


class IdCounter:
    """Monotonic id source shared by all nodes of one automaton."""

    def __init__(self, start: int = DELIMITER_ID + 1):
        self.value = start

    def next_id(self) -> int:
        value = self.value
        self.value += 1
        return value

    def advance_past(self, used_id: int):
        if used_id >= self.value:
            self.value = used_id + 1


class LexiconNode:
    __slots__ = ("children", "word_id", "accepting")

    def __init__(self):
        self.children: Dict[int, "LexiconNode"] = {}
        self.word_id: Optional[int] = None
        self.accepting = False

    def __repr__(self):
        return f"LexiconNode(word_id={self.word_id}, accepting={self.accepting}, out={len(self.children)})"


class LexiconAutomaton:
    """
    Deterministic acceptor for the vocabulary.

    The automaton only grows; nothing is ever removed. Lookups
    (``contains``, ``id_of``, ``word_of``) never modify it.
    """

    def __init__(self):
        self.root = LexiconNode()
        self.counter = IdCounter()
        # word id -> symbols, for reverse lookup without walking the trie
        self._words: Dict[int, Tuple[int, ...]] = {DELIMITER_ID: ()}

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def _walk_or_create(self, symbols: Tuple[int, ...]) -> LexiconNode:
        node = self.root
        for symbol in symbols:
            child = node.children.get(symbol)
            if child is None:
                child = LexiconNode()
                node.children[symbol] = child
            node = child
        return node

    def insert(self, word: Word) -> int:
        """Add ``word`` and return its id (the existing one if already present)."""
        symbols = to_symbols(word)
        if not symbols:
            return DELIMITER_ID
        node = self._walk_or_create(symbols)
        if not node.accepting:
            node.word_id = self.counter.next_id()
            node.accepting = True
            self._words[node.word_id] = symbols
        return node.word_id

    def insert_with_id(self, word: Word, word_id: int):
        """Add ``word`` under a fixed id. Only meant for restoring a saved lexicon."""
        symbols = to_symbols(word)
        if not symbols:
            return
        node = self._walk_or_create(symbols)
        if node.accepting and node.word_id != word_id:
            logger.warning("Word %r re-identified from %d to %d",
                           from_symbols(symbols), node.word_id, word_id)
            self._words.pop(node.word_id, None)
        node.word_id = word_id
        node.accepting = True
        self._words[word_id] = symbols
        self.counter.advance_past(word_id)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def _find(self, symbols: Tuple[int, ...]) -> Optional[LexiconNode]:
        node = self.root
        for symbol in symbols:
            node = node.children.get(symbol)
            if node is None:
                return None
        return node

    def contains(self, word: Word) -> bool:
        node = self._find(to_symbols(word))
        return node is not None and node.accepting

    __contains__ = contains

    def id_of(self, word: Word) -> Optional[int]:
        """Id of ``word``; ``DELIMITER_ID`` for the empty word, ``None`` if unknown."""
        symbols = to_symbols(word)
        if not symbols:
            return DELIMITER_ID
        node = self._find(symbols)
        if node is None or not node.accepting:
            return None
        return node.word_id

    def word_of(self, word_id: int) -> Optional[str]:
        symbols = self._words.get(word_id)
        if symbols is None:
            return None
        return from_symbols(symbols)

    def symbols_of(self, word_id: int) -> Optional[Tuple[int, ...]]:
        return self._words.get(word_id)

    # ------------------------------------------------------------------
    # Automaton structure (used by the corrector)
    # ------------------------------------------------------------------
    def transitions_from(self, node: LexiconNode):
        return node.children.keys()

    def child_at(self, node: LexiconNode, symbol: int) -> Optional[LexiconNode]:
        return node.children.get(symbol)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    @property
    def next_id(self) -> int:
        return self.counter.value

    def words(self) -> Iterator[Tuple[Tuple[int, ...], int]]:
        """Depth-first ``(symbols, word_id)`` for every word."""
        stack: List[Tuple[Tuple[int, ...], LexiconNode]] = [((), self.root)]
        while stack:
            prefix, node = stack.pop()
            if node.accepting:
                yield prefix, node.word_id
            for symbol, child in reversed(list(node.children.items())):
                stack.append((prefix + (symbol,), child))

    def __len__(self):
        return len(self._words) - 1

    def __repr__(self):
        return f"LexiconAutomaton(words={len(self)}, next_id={self.next_id})"
