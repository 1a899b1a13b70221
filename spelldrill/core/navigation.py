from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from spelldrill.core.progress import MistakeCollector
from spelldrill.core.words import Word

logger = logging.getLogger(__name__)

WordListener = Callable[[Word], None]


class SessionNavigator:
    """Ordered word list with a cursor; notifies listeners when the word changes.

    ``prev()`` and ``next()`` are user navigation and stop at the ends of the
    list. ``advance()`` is what a finished word calls: past the last word it
    starts a review round of the words missed this session, or ends the
    session when there are none.
    """

    def __init__(
        self,
        words: Sequence[Word],
        mistakes: Optional[MistakeCollector] = None,
        mistake_flag: Callable[[], bool] = lambda: False,
    ) -> None:
        if not words:
            raise ValueError("A practice session needs at least one word")
        self._words: List[Word] = list(words)
        self._index = 0
        self._mistakes = mistakes if mistakes is not None else MistakeCollector()
        self._mistake_flag = mistake_flag
        self._complete = False
        self._word_listeners: List[WordListener] = []
        self._complete_listeners: List[Callable[[], None]] = []

    @property
    def words(self) -> List[Word]:
        return list(self._words)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_word(self) -> Word:
        return self._words[self._index]

    @property
    def previous_word(self) -> Optional[Word]:
        return self._words[self._index - 1] if self._index > 0 else None

    @property
    def next_word(self) -> Optional[Word]:
        return self._words[self._index + 1] if self._index + 1 < len(self._words) else None

    @property
    def has_prev(self) -> bool:
        return self._index > 0

    @property
    def has_next(self) -> bool:
        return self._index < len(self._words) - 1

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def mistakes(self) -> MistakeCollector:
        return self._mistakes

    def add_word_listener(self, listener: WordListener) -> None:
        self._word_listeners.append(listener)

    def add_complete_listener(self, listener: Callable[[], None]) -> None:
        self._complete_listeners.append(listener)

    def start(self) -> None:
        """Announce the first word so listeners can load it."""
        self._notify_word()

    def prev(self) -> bool:
        if self._complete or not self.has_prev:
            return False
        self._leave_current()
        self._index -= 1
        self._notify_word()
        return True

    def next(self) -> bool:
        if self._complete or not self.has_next:
            return False
        self._leave_current()
        self._index += 1
        self._notify_word()
        return True

    def advance(self) -> bool:
        """Move on after a finished word; returns False once the session is over."""
        if self._complete:
            return False
        if self.has_next:
            return self.next()
        self._leave_current()
        review = self._mistakes.drain()
        if review:
            logger.info("Starting a review round of %d missed word(s)", len(review))
            self._words.extend(review)
            self._index += 1
            self._notify_word()
            return True
        logger.info("Session complete after %d word(s)", len(self._words))
        self._complete = True
        for listener in list(self._complete_listeners):
            listener()
        return False

    def _leave_current(self) -> None:
        if self._mistake_flag():
            self._mistakes.add(self.current_word)

    def _notify_word(self) -> None:
        word = self.current_word
        for listener in list(self._word_listeners):
            listener(word)
