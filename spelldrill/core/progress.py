from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from spelldrill.core.words import Word

logger = logging.getLogger(__name__)

QUALITY_FAILED = 1
QUALITY_PASSED = 5


@dataclass(frozen=True)
class Stats:
    input_count: int = 0
    correct_count: int = 0
    elapsed_seconds: int = 0

    @property
    def accuracy(self) -> float:
        """Correct words per attempt as a percentage, one decimal place."""
        if self.input_count == 0:
            return 0.0
        return round(self.correct_count / self.input_count * 100.0, 1)

    @property
    def time(self) -> str:
        mins, secs = divmod(max(0, self.elapsed_seconds), 60)
        return f"{mins:02d}:{secs:02d}"


class ReviewScheduler:
    """Receives per-word outcomes for spaced-repetition scheduling."""

    def submit_quality(self, word: Word, quality: int) -> None:
        raise NotImplementedError

    def submit_mistake(self, word: Word) -> None:
        raise NotImplementedError


class LoggingReviewScheduler(ReviewScheduler):
    """Default scheduler when no review service is attached: only logs."""

    def submit_quality(self, word: Word, quality: int) -> None:
        logger.info("Word %s (%r) quality %d", word.id, word.text, quality)

    def submit_mistake(self, word: Word) -> None:
        logger.info("Word %s (%r) needed more than one attempt", word.id, word.text)


class MistakeCollector:
    """Words answered wrongly at least once in this session, in first-miss order."""

    def __init__(self) -> None:
        self._words: List[Word] = []

    def add(self, word: Word) -> bool:
        if any(w.id == word.id for w in self._words):
            return False
        logger.info("Added %r to this round's mistakes", word.text)
        self._words.append(word)
        return True

    def drain(self) -> List[Word]:
        words, self._words = self._words, []
        return words

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, Word) and any(w.id == word.id for w in self._words)


class ProgressEmitter:
    """Turns automaton outcomes into quality scores and session counters.

    ``input_count`` grows once per fresh word change and ``correct_count``
    once per completed word; neither ever decreases. Scores go to the
    scheduler unchanged unless *demo_mode* is on. Scheduler errors are logged
    and swallowed so a failing review service never blocks practice.
    """

    def __init__(
        self,
        scheduler: Optional[ReviewScheduler] = None,
        demo_mode: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._scheduler = scheduler or LoggingReviewScheduler()
        self._demo_mode = demo_mode
        self._clock = clock
        self._start_time = clock()
        self._input_count = 0
        self._correct_count = 0

    @property
    def demo_mode(self) -> bool:
        return self._demo_mode

    @property
    def stats(self) -> Stats:
        return Stats(
            input_count=self._input_count,
            correct_count=self._correct_count,
            elapsed_seconds=int(self._clock() - self._start_time),
        )

    def attempt_started(self) -> None:
        self._input_count += 1

    def word_completed(self) -> None:
        self._correct_count += 1

    def record_quality(self, word: Word, quality: int) -> None:
        if quality not in (QUALITY_FAILED, QUALITY_PASSED):
            raise ValueError(f"quality must be {QUALITY_FAILED} or {QUALITY_PASSED}, got {quality}")
        if self._demo_mode:
            logger.info("Demo mode: not sending quality %d for %r", quality, word.text)
            return
        try:
            self._scheduler.submit_quality(word, quality)
        except Exception as e:
            logger.warning("Could not submit quality %d for %r: %s", quality, word.text, e)

    def record_mistake(self, word: Word) -> None:
        if self._demo_mode:
            return
        try:
            self._scheduler.submit_mistake(word)
        except Exception as e:
            logger.warning("Could not submit mistake for %r: %s", word.text, e)
