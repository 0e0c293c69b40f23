# -*- coding: utf-8 -*-
import gzip
import io
import math

import pytest

from ngramspell.corpus import read_lines
from ngramspell.errors import InvalidConfigError, ModelFormatError
from ngramspell.lexicon import DELIMITER_ID
from ngramspell.model import UNKNOWN_ID, SpellModel
from ngramspell.normalize import tokenize


def test_tokenize_letters_only():
    assert tokenize("The cat, sat-on 2 mats!") == ["The", "cat", "sat", "on", "mats"]
    assert tokenize("Grüße aus Köln_42") == ["Grüße", "aus", "Köln"]
    assert tokenize("") == []


def test_training_builds_lexicon(cat_model):
    assert cat_model.contains("cat")
    assert "mat" in cat_model
    assert not cat_model.contains("dog")
    assert cat_model.id_of("dog") is None
    assert cat_model.context_id("dog") == UNKNOWN_ID
    assert cat_model.context_id("") == DELIMITER_ID
    assert len(cat_model.lexicon) == 5


def test_ids_are_stable_across_retraining():
    model = SpellModel(2)
    model.fit(["the cat"])
    cat = model.id_of("cat")
    model.fit(["a cat and the cat"])
    assert model.id_of("cat") == cat


def test_window_spans_lines():
    model = SpellModel(2).fit(["the", "cat"])
    model.finalize()
    # "cat" follows "the" although they were on different lines
    assert model.log_probability(["cat", "the"]) == pytest.approx(0.0)


def test_sentence_start_context(cat_model):
    # "the" opens the text once out of two occurrences
    assert cat_model.log_probability(["the", ""]) == pytest.approx(math.log(0.5))
    assert cat_model.log_probability(["the", "dog"]) == pytest.approx(math.log(2 / 6 * 0.5))


def test_invalid_order():
    with pytest.raises(InvalidConfigError):
        SpellModel(0)
    with pytest.raises(InvalidConfigError):
        SpellModel("3")


def test_finalized_model_ignores_training(cat_model):
    assert cat_model.train_tokens(["dog"]) == 0
    assert not cat_model.contains("dog")


def test_finalized_model_keeps_its_lexicon(cat_model):
    before = cat_model.lexicon.next_id
    assert cat_model.add_word("dog") is None
    assert cat_model.add_word("cat") == cat_model.id_of("cat")
    assert not cat_model.contains("dog")
    assert cat_model.lexicon.next_id == before


def _roundtrip(model):
    buf = io.StringIO()
    model.dump(buf)
    buf.seek(0)
    return SpellModel.restore(buf)


def test_dump_format(cat_model):
    buf = io.StringIO()
    cat_model.dump(buf)
    lines = buf.getvalue().splitlines()
    assert lines[:4] == ["SpellCheckerDictionary", "ngram : 2", "#", "6"]
    assert "99,97,116:2" in lines
    assert ":6" in lines
    assert "1,0:1" in lines


def test_restore_reproduces_answers(trigram_model):
    restored = _roundtrip(trigram_model)
    assert restored.finalized
    assert restored.order == 3
    for symbols, word_id in trigram_model.lexicon.words():
        assert restored.contains(symbols)
        assert restored.id_of(symbols) == word_id
        assert restored.lexicon.word_of(word_id) == trigram_model.lexicon.word_of(word_id)
    for ids, node in trigram_model.backoff.contexts():
        assert restored.backoff.log_probability(ids) == trigram_model.backoff.log_probability(ids)
    assert restored.lexicon.next_id == trigram_model.lexicon.next_id


def test_save_and_load_gzip(tmp_path, cat_model):
    path = tmp_path / "models" / "cat.spell"
    cat_model.save(path)
    loaded = SpellModel.load(path)
    assert loaded.contains("cat")
    assert not loaded.contains("dog")
    assert loaded.log_probability(["the", ""]) == cat_model.log_probability(["the", ""])


def test_load_without_finalize_allows_more_training(tmp_path, cat_model):
    path = tmp_path / "cat.spell"
    cat_model.save(path)
    loaded = SpellModel.load(path, finalize=False)
    assert not loaded.finalized
    loaded.add_word("dog")
    assert loaded.contains("dog")
    assert loaded.id_of("dog") == 6


@pytest.mark.parametrize("text", [
    "",
    "NotAModel\nngram : 2\n#\n1\n#\n",
    "SpellCheckerDictionary\nngram : zero\n#\n1\n#\n",
    "SpellCheckerDictionary\nngram : 0\n#\n1\n#\n",
    "SpellCheckerDictionary\nngram : 2\n",
    "SpellCheckerDictionary\nngram : 2\n#\nx\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n3\n99,97,116:1\n",
    "SpellCheckerDictionary\nngram : 2\n#\n3\n99,a:1\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n3\n99,97,116\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n3\n99:1\n#\n1,1,1:4\n",
    "SpellCheckerDictionary\nngram : 2\n#\n3\n99:1\n#\n1:many\n",
    "SpellCheckerDictionary\nngram : 2\n#\n3\n99,97,116:1\n100,111,103:1\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n2\n99,97,116:0\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n2\n99,97,116:-4\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n2\n99,1114112:1\n#\n",
    "SpellCheckerDictionary\nngram : 2\n#\n2\n99:1\n#\n:-3\n",
])
def test_malformed_files_are_rejected(text):
    with pytest.raises(ModelFormatError):
        SpellModel.restore(io.StringIO(text))


def test_restored_ids_are_unique(cat_model):
    restored = _roundtrip(cat_model)
    ids = [word_id for _, word_id in restored.lexicon.words()]
    assert len(ids) == len(set(ids)) == 5
    assert restored.lexicon.word_of(0) == ""


def test_load_with_wrong_encoding(tmp_path):
    path = tmp_path / "latin1.spell"
    with gzip.open(path, "wb") as fh:
        fh.write("SpellCheckerDictionary\nngram : 2\n#\n2\nStra\xdfe\n".encode("latin-1"))
    with pytest.raises(ModelFormatError):
        SpellModel.load(path, encoding="utf-8")


def test_read_csv_corpus(tmp_path):
    path = tmp_path / "corpus.csv"
    path.write_text("id,text\n1,the cat sat on the mat\n2,a dog\n", encoding="utf-8")
    lines = list(read_lines(path))
    assert lines == ["the cat sat on the mat", "a dog"]
    model = SpellModel(2).fit(lines)
    assert model.contains("dog")


def test_read_text_corpus(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("the cat\nsat on the mat\n", encoding="utf-8")
    assert list(read_lines(path)) == ["the cat", "sat on the mat"]
