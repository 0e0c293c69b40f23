# -*- coding: utf-8 -*-
from ngramspell.graphviz import draw_lexicon, draw_model
from ngramspell.lexicon import LexiconAutomaton
from ngramspell.model import SpellModel


def test_draw_lexicon():
    lex = LexiconAutomaton()
    lex.insert("ab")
    lex.insert("a")
    dot = draw_lexicon(lex)
    assert dot.startswith("digraph finite_state_machine {")
    assert dot.endswith("}")
    assert '"T()" -> "T(a)" [ label = "a" ]' in dot
    assert '"T(a)" -> "T(ab)" [ label = "b" ]' in dot
    assert 'shape = doublecircle, label="T(ab)\\nid: 1"' in dot
    assert 'shape = circle, label="T()"' in dot


def test_draw_model_finalizes():
    model = SpellModel(2).fit(["the cat"])
    dot = draw_model(model)
    assert model.finalized
    assert '"T()" -> "T(the)"' in dot
    assert '"T(cat)" -> "T(cat|the)"' in dot
    assert "Counts: 2" in dot
