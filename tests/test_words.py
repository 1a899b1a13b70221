"""Tests for spelldrill.core.words – YAML word list loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from spelldrill.core.words import WordRepository


def _write(dir_path: Path, name: str, body: str) -> None:
    (dir_path / name).write_text(body, encoding="utf-8")


# ---------------------------------------------------------------------------
# Bundled data
# ---------------------------------------------------------------------------

class TestBundledLists:
    def test_loads_bundled_lists(self):
        repo = WordRepository()
        keys = [wl.key for wl in repo.all()]
        assert keys == sorted(keys)
        assert repo.first().key == keys[0]

    def test_every_bundled_word_is_typeable(self):
        for word_list in WordRepository().all():
            assert word_list.words
            for word in word_list.words:
                assert any(ch.isalpha() or ch == "'" for ch in word.text)

    def test_multi_word_entry_present(self):
        repo = WordRepository()
        texts = [w.text for wl in repo.all() for w in wl.words]
        assert any(" " in t for t in texts)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParsing:
    def test_mapping_entry(self, tmp_path):
        _write(tmp_path, "a.yaml", """
title: Test
words:
  - text: cat
    id: 42
    uk: /kæt/
    definitions:
      - pos: n.
        translation: an animal
    examples:
      - en: The cat sat.
""")
        word = WordRepository(tmp_path).get("a").words[0]
        assert word.id == 42
        assert word.pronunciation.uk.phonetic == "/kæt/"
        assert word.pronunciation.us is None
        assert word.definitions[0].translation == "an animal"
        assert word.examples[0].en == "The cat sat."
        assert word.examples[0].cn == ""

    def test_plain_string_entries_get_positional_ids(self, tmp_path):
        _write(tmp_path, "a.yaml", "title: Test\nwords: [cat, dog]\n")
        words = WordRepository(tmp_path).get("a").words
        assert [(w.id, w.text) for w in words] == [(1, "cat"), (2, "dog")]

    def test_text_is_stripped(self, tmp_path):
        _write(tmp_path, "a.yaml", "title: Test\nwords: ['  ice cream ']\n")
        assert WordRepository(tmp_path).first().words[0].text == "ice cream"

    def test_title_is_name(self, tmp_path):
        _write(tmp_path, "a.yaml", "title: ' Spaced '\nwords: [cat]\n")
        assert WordRepository(tmp_path).first().name == "Spaced"

    def test_unknown_key(self, tmp_path):
        _write(tmp_path, "a.yaml", "title: Test\nwords: [cat]\n")
        with pytest.raises(KeyError):
            WordRepository(tmp_path).get("missing")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WordRepository(tmp_path / "nope")

    def test_empty_directory(self, tmp_path):
        with pytest.raises(ValueError, match="No word list"):
            WordRepository(tmp_path)

    def test_not_a_mapping(self, tmp_path):
        _write(tmp_path, "bad.yaml", "- cat\n- dog\n")
        with pytest.raises(ValueError, match="bad.yaml"):
            WordRepository(tmp_path)

    def test_missing_title(self, tmp_path):
        _write(tmp_path, "bad.yaml", "words: [cat]\n")
        with pytest.raises(ValueError, match="title"):
            WordRepository(tmp_path)

    def test_empty_words(self, tmp_path):
        _write(tmp_path, "bad.yaml", "title: Test\nwords: []\n")
        with pytest.raises(ValueError, match="non-empty"):
            WordRepository(tmp_path)

    @pytest.mark.parametrize("text", ["'   '", "café", "well-known", "abc1", "''"])
    def test_invalid_text(self, tmp_path, text):
        _write(tmp_path, "bad.yaml", f"title: Test\nwords: [{text}]\n")
        with pytest.raises(ValueError, match="invalid text"):
            WordRepository(tmp_path)

    def test_duplicate_ids(self, tmp_path):
        _write(tmp_path, "dup.yaml", "title: Test\nwords: [cat, {text: dog, id: 1}]\n")
        with pytest.raises(ValueError, match="duplicate word id 1"):
            WordRepository(tmp_path)

    def test_same_id_in_different_lists(self, tmp_path):
        _write(tmp_path, "a.yaml", "title: A\nwords: [cat]\n")
        _write(tmp_path, "b.yaml", "title: B\nwords: [dog]\n")
        assert len(WordRepository(tmp_path).all()) == 2

    def test_bad_entry_type(self, tmp_path):
        _write(tmp_path, "bad.yaml", "title: Test\nwords: [[cat]]\n")
        with pytest.raises(ValueError, match="string or a mapping"):
            WordRepository(tmp_path)
