"""
Tests for word list loading.
"""

from pathlib import Path

import pytest

import treeguessr.config
from treeguessr.services.word_source import (
    WordSourceError,
    get_word_statistics,
    load_word_list,
    parse_word_list,
)


def test_parse_word_list_normalizes_lines():
    text = "oak tree\n\n   Silver   Birch  \nYEW\r\nyew\n"
    assert parse_word_list(text) == ["OAK TREE", "SILVER BIRCH", "YEW"]


def test_parse_word_list_skips_non_alphabetic_lines():
    assert parse_word_list("ASH\nDRAGON'S BLOOD\nPINE 2\nELM\n") == ["ASH", "ELM"]


def test_load_word_list(tmp_path):
    path = tmp_path / "trees.txt"
    path.write_text("ash\nelm\n", encoding="utf-8")
    assert load_word_list(path) == ["ASH", "ELM"]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(WordSourceError):
        load_word_list(tmp_path / "missing.txt")


def test_load_blank_file_raises(tmp_path):
    path = tmp_path / "blank.txt"
    path.write_text("\n   \n", encoding="utf-8")
    with pytest.raises(WordSourceError):
        load_word_list(path)


def test_bundled_word_list_is_valid():
    path = Path(treeguessr.config.__file__).parent / "wordlist.txt"
    phrases = load_word_list(path)
    assert "OAK TREE" in phrases
    assert all(phrase == phrase.strip().upper() for phrase in phrases)


def test_word_statistics():
    stats = get_word_statistics(["OAK TREE", "ASH"])
    assert stats["total_phrases"] == 2
    assert stats["multi_word_phrases"] == 1
    assert stats["avg_length"] == 5.5
    assert ("E", 2) in stats["most_common_letters"]


def test_word_statistics_empty():
    assert "error" in get_word_statistics([])
