# -*- coding: utf-8 -*-
from ngramspell.lexicon import DELIMITER_ID, LexiconAutomaton, from_symbols, to_symbols


def test_insert_is_idempotent():
    lex = LexiconAutomaton()
    first = lex.insert("cat")
    assert lex.insert("cat") == first
    assert lex.id_of("cat") == first
    assert lex.id_of("cat") == first
    assert len(lex) == 1


def test_ids_are_unique_and_monotonic():
    lex = LexiconAutomaton()
    ids = [lex.insert(w) for w in ["the", "cat", "ca", "them", "a"]]
    assert len(set(ids)) == 5
    assert ids == sorted(ids)
    assert DELIMITER_ID not in ids


def test_prefix_is_not_a_word_until_inserted():
    lex = LexiconAutomaton()
    lex.insert("cat")
    assert lex.contains("cat")
    assert not lex.contains("ca")
    assert lex.id_of("ca") is None
    lex.insert("ca")
    assert "ca" in lex


def test_lookup_does_not_mutate():
    lex = LexiconAutomaton()
    lex.insert("cat")
    before = lex.next_id
    assert lex.id_of("dog") is None
    assert not lex.contains("dog")
    assert lex.next_id == before
    assert lex.child_at(lex.root, ord("d")) is None


def test_empty_word_is_the_delimiter():
    lex = LexiconAutomaton()
    assert lex.id_of("") == DELIMITER_ID
    assert lex.insert("") == DELIMITER_ID
    assert not lex.root.accepting
    assert lex.word_of(DELIMITER_ID) == ""


def test_delimiter_symbol_ends_a_word():
    lex = LexiconAutomaton()
    word_id = lex.insert([99, 97, 0, 116])
    assert lex.word_of(word_id) == "ca"
    assert to_symbols("ab\x00c") == (97, 98)


def test_reverse_lookup():
    lex = LexiconAutomaton()
    word_id = lex.insert("straße")
    assert lex.word_of(word_id) == "straße"
    assert lex.word_of(9999) is None
    assert from_symbols(to_symbols("straße")) == "straße"


def test_insert_with_id_restores_and_advances_counter():
    lex = LexiconAutomaton()
    lex.insert_with_id("cat", 7)
    assert lex.id_of("cat") == 7
    assert lex.word_of(7) == "cat"
    assert lex.insert("dog") == 8


def test_transitions():
    lex = LexiconAutomaton()
    for w in ["cat", "car", "dog"]:
        lex.insert(w)
    assert set(lex.transitions_from(lex.root)) == {ord("c"), ord("d")}
    ca = lex.child_at(lex.child_at(lex.root, ord("c")), ord("a"))
    assert set(lex.transitions_from(ca)) == {ord("t"), ord("r")}


def test_words_enumerates_every_word():
    lex = LexiconAutomaton()
    expected = {w: lex.insert(w) for w in ["the", "then", "cat", "a"]}
    found = {from_symbols(s): i for s, i in lex.words()}
    assert found == expected
