# -*- coding: utf-8 -*-
import pytest

from ngramspell.corrector import Corrector
from ngramspell.model import SpellModel

SENTENCE = "the cat sat on the mat"


@pytest.fixture
def cat_model():
    model = SpellModel(2).fit([SENTENCE])
    model.finalize()
    return model


@pytest.fixture
def cat_corrector(cat_model):
    return Corrector(cat_model)


@pytest.fixture
def trigram_model():
    text = [
        "the cat sat on the mat",
        "the cat ate the rat",
        "a dog sat on the log",
        "the dog ate the cat food",
    ]
    model = SpellModel(3).fit(text)
    model.finalize()
    return model
