"""Unit tests for text normalization and stop words."""

import pytest

from app.search.normalizer import normalize, tokenize
from app.search.stopwords import is_stopword, remove_stopwords


def test_lowercases_and_strips_punctuation():
    assert normalize("Hello, World!") == "hello world"


def test_collapses_whitespace_and_trims():
    assert normalize("  deep \n\t learning   ") == "deep learning"


def test_keeps_cjk_and_ascii_word_characters():
    assert normalize("深度学习：Deep-Learning") == "深度学习 deep learning"
    assert normalize("snake_case 42") == "snake_case 42"


def test_drops_non_ascii_latin_letters():
    assert normalize("café") == "caf"


@pytest.mark.parametrize(
    "text",
    ["", "   ", "Hello, World!", "深度学习：Deep-Learning", "café au lait", "a--b__c", "İstanbul", "x　y"],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_tokenize():
    assert tokenize("Machine learning, transforms healthcare.") == [
        "machine",
        "learning",
        "transforms",
        "healthcare",
    ]
    assert tokenize("  ...  ") == []


def test_remove_stopwords_keeps_order():
    assert remove_stopwords(["the", "deep", "and", "learning", "a"]) == ["deep", "learning"]
    assert is_stopword("the")
    assert not is_stopword("learning")


def test_cjk_run_stays_one_token():
    assert tokenize("深度学习方法 Deep") == ["深度学习方法", "deep"]
    assert "学习" not in tokenize("深度学习方法")
