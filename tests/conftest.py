"""Shared fakes for the practice engine tests."""

from __future__ import annotations

from typing import List, Tuple

import pytest

from spelldrill.core.audio import SoundEffect, SoundEffectPlayer, SpeechEngine, SpeechRequest
from spelldrill.core.progress import ReviewScheduler
from spelldrill.core.scheduler import ManualScheduler
from spelldrill.core.words import Pronunciation, PronunciationItem, Word


class FakeSpeech(SpeechEngine):
    def __init__(self, available: bool = True) -> None:
        self._available = available
        self.playing = False
        self.spoken: List[SpeechRequest] = []
        self.stops = 0
        self.closed = False
        self.fail_with: Exception | None = None

    @property
    def available(self) -> bool:
        return self._available

    @property
    def is_playing(self) -> bool:
        return self.playing

    def speak(self, request: SpeechRequest) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.spoken.append(request)

    def stop(self) -> None:
        self.stops += 1
        self.playing = False

    def close(self) -> None:
        self.closed = True


class FakeEffects(SoundEffectPlayer):
    def __init__(self) -> None:
        self.played: List[SoundEffect] = []
        self.closed = False

    def play(self, effect: SoundEffect) -> None:
        self.played.append(effect)

    def close(self) -> None:
        self.closed = True


class RecordingReviewScheduler(ReviewScheduler):
    def __init__(self) -> None:
        self.qualities: List[Tuple[int, int]] = []
        self.mistakes: List[int] = []

    def submit_quality(self, word: Word, quality: int) -> None:
        self.qualities.append((word.id, quality))

    def submit_mistake(self, word: Word) -> None:
        self.mistakes.append(word.id)


def make_word(text: str, word_id: int = 1, uk: str | None = None, us: str | None = None) -> Word:
    return Word(
        id=word_id,
        text=text,
        pronunciation=Pronunciation(
            uk=PronunciationItem(uk) if uk else None,
            us=PronunciationItem(us) if us else None,
        ),
    )


@pytest.fixture()
def speech() -> FakeSpeech:
    return FakeSpeech()


@pytest.fixture()
def effects() -> FakeEffects:
    return FakeEffects()


@pytest.fixture()
def clock() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def review() -> RecordingReviewScheduler:
    return RecordingReviewScheduler()
