from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from spelldrill.core.words import Word

logger = logging.getLogger(__name__)


class Accent(str, Enum):
    US = "en-US"
    UK = "en-GB"


class Gender(str, Enum):
    AUTO = "auto"
    MALE = "male"
    FEMALE = "female"


class SoundEffect(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class SpeechConfig:
    accent: Accent = Accent.UK
    rate: float = 0.8
    volume: float = 1.0
    pitch: float = 1.0
    gender: Gender = Gender.AUTO


@dataclass(frozen=True)
class SpeechRequest:
    text: str
    accent: Accent
    rate: float = 1.0
    volume: float = 1.0
    pitch: float = 1.0
    gender: Gender = Gender.AUTO

    @classmethod
    def build(cls, text: str, config: SpeechConfig, accent: Optional[Accent] = None) -> "SpeechRequest":
        """Request for *text* using *config*, with values clamped to engine ranges."""
        return cls(
            text=text,
            accent=accent or config.accent,
            rate=max(0.1, min(10.0, float(config.rate))),
            volume=max(0.0, min(1.0, float(config.volume))),
            pitch=max(0.0, min(2.0, float(config.pitch))),
            gender=config.gender,
        )


class SpeechEngine:
    """Pronunciation backend. ``available`` is False when the platform has no TTS."""

    @property
    def available(self) -> bool:
        return False

    @property
    def is_playing(self) -> bool:
        return False

    def speak(self, request: SpeechRequest) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        pass

    def close(self) -> None:
        pass


class SoundEffectPlayer:
    def play(self, effect: SoundEffect) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class SilentSpeechEngine(SpeechEngine):
    """Stand-in used when no speech backend could be created."""

    def speak(self, request: SpeechRequest) -> None:
        pass


class SilentSoundEffects(SoundEffectPlayer):
    def play(self, effect: SoundEffect) -> None:
        pass


def resolve_accent(word: Word, requested: Optional[Accent], default: Accent) -> Optional[Accent]:
    """Pick the accent to speak *word* in.

    With no *requested* accent the configured *default* is used. An explicitly
    requested accent wins when the word carries a phonetic entry for it;
    otherwise US then UK. Returns None when the word has phonetics but none
    usable, and *default* when it has none at all.
    """
    uk, us = word.pronunciation.uk, word.pronunciation.us
    if requested is None or (uk is None and us is None):
        return default
    if requested is Accent.UK and uk is not None and uk.phonetic:
        return Accent.UK
    if requested is Accent.US and us is not None and us.phonetic:
        return Accent.US
    if us is not None and us.phonetic:
        return Accent.US
    if uk is not None and uk.phonetic:
        return Accent.UK
    return None


class AudioCoordinator:
    """Serializes word pronunciation; sound effects play on their own channel.

    At most one pronunciation is audible at a time: replays are dropped while
    the engine reports playback in progress, with no queueing or retry. A
    word change stops whatever is still being spoken before starting the new
    word. Backend errors are logged and never raised.
    """

    def __init__(
        self,
        speech: SpeechEngine,
        effects: SoundEffectPlayer,
        config: SpeechConfig = SpeechConfig(),
    ) -> None:
        self._speech = speech
        self._effects = effects
        self._config = config
        self._closed = False

    @property
    def config(self) -> SpeechConfig:
        return self._config

    @config.setter
    def config(self, value: SpeechConfig) -> None:
        self._config = value

    @property
    def speech_supported(self) -> bool:
        return not self._closed and self._speech.available

    @property
    def is_playing(self) -> bool:
        try:
            return self._speech.is_playing
        except Exception as e:
            logger.warning("Could not query speech state: %s", e)
            return False

    def play_word(self, word: Word) -> bool:
        """Speak *word* for a fresh word change, cutting off any earlier utterance."""
        if not self.speech_supported:
            return False
        self.stop_speech()
        return self._speak(SpeechRequest.build(word.text, self._config))

    def replay_word(self, word: Word, accent: Optional[Accent] = None) -> bool:
        """Speak *word* again unless something is already playing.

        *accent* overrides the configured accent for this request only.
        """
        if not self.speech_supported or self.is_playing:
            logger.debug("Dropped pronunciation request for %r", word.text)
            return False
        chosen = resolve_accent(word, accent, self._config.accent)
        if chosen is None:
            logger.warning("No pronunciation found to play for %r (%s)", word.text, accent)
            return False
        return self._speak(SpeechRequest.build(word.text, self._config, accent=chosen))

    def stop_speech(self) -> None:
        try:
            self._speech.stop()
        except Exception as e:
            logger.warning("Could not stop speech playback: %s", e)

    def play_success(self) -> None:
        self._play_effect(SoundEffect.SUCCESS)

    def play_failure(self) -> None:
        self._play_effect(SoundEffect.FAILURE)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.stop_speech()
        for backend in (self._speech, self._effects):
            try:
                backend.close()
            except Exception as e:
                logger.warning("Error while closing audio backend %s: %s", type(backend).__name__, e)

    def _speak(self, request: SpeechRequest) -> bool:
        try:
            self._speech.speak(request)
        except Exception as e:
            logger.warning("Speech playback failed for %r: %s", request.text, e)
            return False
        logger.debug("Speaking %r in %s", request.text, request.accent.value)
        return True

    def _play_effect(self, effect: SoundEffect) -> None:
        if self._closed:
            return
        try:
            self._effects.play(effect)
        except Exception as e:
            logger.warning("Sound effect %s failed: %s", effect.value, e)
