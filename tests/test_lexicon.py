import logging
import random

import pytest

from wordgrid.errors import EmptyLexiconError
from wordgrid.lexicon import Lexicon, build_lexicon, load_lexicon, normalize_word


def _make_lexicon(words: list[str]) -> Lexicon:
    lexicon = Lexicon()
    for w in words:
        lexicon.insert(w.upper())
    return lexicon


def _walk(lexicon: Lexicon, text: str):
    cursor = lexicon.start_cursor()
    for ch in text:
        if not cursor.advance(ch):
            return None
    return cursor


WORDS = ["CAT", "CATS", "CATALOG", "DOG", "DOGMA", "TEA", "TEAPOT"]


def test_inserted_words_end_on_word_nodes():
    lexicon = _make_lexicon(WORDS)
    for w in WORDS:
        cursor = _walk(lexicon, w)
        assert cursor is not None
        assert cursor.is_word()


def test_prefix_is_word_only_when_inserted():
    lexicon = _make_lexicon(WORDS)
    for w in WORDS:
        for i in range(1, len(w)):
            prefix = w[:i]
            assert _walk(lexicon, prefix).is_word() == (prefix in WORDS)


def test_failed_advance_leaves_cursor_in_place():
    lexicon = _make_lexicon(["CAT"])
    cursor = lexicon.start_cursor()
    assert cursor.advance("C")
    assert not cursor.advance("X")
    assert cursor.prefix == "C"
    assert cursor.advance("A")
    assert cursor.advance("T")
    assert cursor.is_word()
    assert cursor.is_exhausted


def test_cursor_copies_are_independent():
    lexicon = _make_lexicon(["CAT", "COT"])
    cursor = lexicon.start_cursor()
    cursor.advance("C")
    branch = cursor.copy()
    assert branch.advance("A")
    assert cursor.prefix == "C"
    assert cursor.advance("O")
    assert branch.prefix == "CA"


def test_len_and_contains():
    lexicon = _make_lexicon(WORDS + ["CAT"])
    assert len(lexicon) == len(WORDS)
    assert "TEAPOT" in lexicon
    assert "TEAP" not in lexicon
    assert "" not in lexicon
    assert 42 not in lexicon


def test_insert_empty_is_noop():
    lexicon = Lexicon()
    lexicon.insert("")
    assert lexicon.is_empty
    assert not lexicon.root.terminal


def test_words_enumerates_everything():
    lexicon = _make_lexicon(WORDS)
    assert sorted(lexicon.words()) == sorted(WORDS)
    assert sorted(lexicon) == sorted(WORDS)


def test_random_long_word_is_always_a_word():
    lexicon = _make_lexicon(WORDS)
    rng = random.Random(1)
    for _ in range(200):
        assert lexicon.random_long_word(rng) in lexicon


def test_random_long_word_walks_to_a_leaf():
    # CAT is a prefix of CATS, so the walk never stops at it
    lexicon = _make_lexicon(["CAT", "CATS"])
    assert {lexicon.random_long_word(random.Random(s)) for s in range(20)} == {"CATS"}


def test_random_long_word_reaches_every_branch():
    lexicon = _make_lexicon(["ABC", "XYZ"])
    seen = {lexicon.random_long_word(random.Random(s)) for s in range(50)}
    assert seen == {"ABC", "XYZ"}


def test_random_long_word_on_empty_lexicon_fails():
    with pytest.raises(EmptyLexiconError):
        Lexicon().random_long_word()


def test_normalize_word():
    assert normalize_word("cat") == "CAT"
    assert normalize_word("  Cats\n") == "CATS"
    assert normalize_word("casa/ABC") == "CASA"
    assert normalize_word("gato po:noun") == "GATO"
    assert normalize_word("at") is None
    assert normalize_word("a" * 17) is None
    assert normalize_word("a" * 16) == "A" * 16
    assert normalize_word("ação") is None
    assert normalize_word("co-op") is None
    assert normalize_word("12345") is None
    assert normalize_word("") is None


def test_normalize_word_custom_limits():
    assert normalize_word("at", min_length=2) == "AT"
    assert normalize_word("teapot", max_length=5) is None


def test_build_lexicon_skips_bad_tokens():
    lexicon = build_lexicon(["cat", "CATS", "at", "ta", "ação", "x-ray", "dog/XY"])
    assert sorted(lexicon.words()) == ["CAT", "CATS", "DOG"]


def test_build_lexicon_all_short_is_empty(caplog):
    with caplog.at_level(logging.WARNING, logger="wordgrid"):
        lexicon = build_lexicon(["a", "b", "ab"])
    assert lexicon.is_empty
    assert len(lexicon) == 0
    assert "built empty" in caplog.text
    with pytest.raises(EmptyLexiconError):
        lexicon.random_long_word()


def test_load_lexicon_hunspell_file(tmp_path):
    dic = tmp_path / "pt.dic"
    dic.write_text("4\ncasa/ABp\ngato\nárvore/B\nmesa\n", encoding="utf-8")
    lexicon = load_lexicon(str(dic))
    assert sorted(lexicon) == ["CASA", "GATO", "MESA"]


def test_load_lexicon_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="wordgrid"):
        lexicon = load_lexicon(str(tmp_path / "nope.txt"))
    assert lexicon.is_empty
    assert "Could not read word list" in caplog.text
