"""Tests for spelldrill.core.navigation – word cursor and review rounds."""

from __future__ import annotations

from typing import List

import pytest

from conftest import make_word

from spelldrill.core.navigation import SessionNavigator
from spelldrill.core.words import Word


WORDS = [make_word("cat", 1), make_word("dog", 2), make_word("owl", 3)]


class _Flag:
    def __init__(self) -> None:
        self.value = False

    def __call__(self) -> bool:
        return self.value


@pytest.fixture()
def flag() -> _Flag:
    return _Flag()


@pytest.fixture()
def nav(flag) -> SessionNavigator:
    return SessionNavigator(WORDS, mistake_flag=flag)


def _seen(nav: SessionNavigator) -> List[Word]:
    seen: List[Word] = []
    nav.add_word_listener(seen.append)
    return seen


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_empty_list_rejected(self):
        with pytest.raises(ValueError):
            SessionNavigator([])

    def test_starts_at_first_word(self, nav):
        assert nav.current_index == 0
        assert nav.current_word.text == "cat"
        assert nav.previous_word is None
        assert nav.next_word.text == "dog"

    def test_start_notifies_first_word(self, nav):
        seen = _seen(nav)
        nav.start()
        assert [w.text for w in seen] == ["cat"]

    def test_words_is_a_copy(self, nav):
        nav.words.append(make_word("bee", 4))
        assert len(nav.words) == 3


# ---------------------------------------------------------------------------
# prev / next
# ---------------------------------------------------------------------------

class TestPrevNext:
    def test_next_moves_and_notifies(self, nav):
        seen = _seen(nav)
        assert nav.next() is True
        assert nav.current_word.text == "dog"
        assert [w.text for w in seen] == ["dog"]

    def test_prev_at_first_word_is_noop(self, nav):
        seen = _seen(nav)
        assert nav.prev() is False
        assert nav.current_index == 0
        assert seen == []

    def test_next_at_last_word_is_noop(self, nav):
        nav.next()
        nav.next()
        seen = _seen(nav)
        assert nav.next() is False
        assert nav.current_index == 2
        assert seen == []

    def test_prev_after_next(self, nav):
        nav.next()
        assert nav.prev() is True
        assert nav.current_word.text == "cat"

    def test_has_prev_has_next(self, nav):
        assert not nav.has_prev and nav.has_next
        nav.next()
        nav.next()
        assert nav.has_prev and not nav.has_next


# ---------------------------------------------------------------------------
# Mistake collection
# ---------------------------------------------------------------------------

class TestMistakeCollection:
    def test_leaving_flagged_word_collects_it(self, nav, flag):
        flag.value = True
        nav.next()
        assert WORDS[0] in nav.mistakes

    def test_leaving_clean_word_collects_nothing(self, nav):
        nav.next()
        assert len(nav.mistakes) == 0

    def test_boundary_noop_collects_nothing(self, nav, flag):
        flag.value = True
        nav.prev()
        assert len(nav.mistakes) == 0

    def test_same_word_collected_once(self, nav, flag):
        flag.value = True
        nav.next()
        nav.prev()
        nav.next()
        nav.prev()
        assert len(nav.mistakes) == 2


# ---------------------------------------------------------------------------
# advance
# ---------------------------------------------------------------------------

class TestAdvance:
    def test_advance_mid_list_is_next(self, nav):
        assert nav.advance() is True
        assert nav.current_word.text == "dog"

    def test_advance_past_end_completes(self, nav):
        done = []
        nav.add_complete_listener(lambda: done.append(True))
        nav.advance()
        nav.advance()
        assert nav.advance() is False
        assert nav.is_complete
        assert done == [True]

    def test_completed_session_ignores_navigation(self, nav):
        for _ in range(3):
            nav.advance()
        assert nav.next() is False
        assert nav.prev() is False
        assert nav.advance() is False

    def test_review_round_appends_missed_words(self, nav, flag):
        seen = _seen(nav)
        flag.value = True
        nav.advance()
        flag.value = False
        nav.advance()
        assert nav.advance() is True
        assert nav.current_word.text == "cat"
        assert len(nav.words) == 4
        assert [w.text for w in seen] == ["dog", "owl", "cat"]
        assert len(nav.mistakes) == 0

    def test_missed_last_word_is_reviewed(self, nav, flag):
        nav.advance()
        nav.advance()
        flag.value = True
        assert nav.advance() is True
        assert nav.current_word.text == "owl"
        assert nav.current_index == 3

    def test_review_round_then_completion(self, nav, flag):
        flag.value = True
        nav.advance()
        flag.value = False
        nav.advance()
        nav.advance()
        assert nav.advance() is False
        assert nav.is_complete
