"""Qt speech and sound-effect backends for the audio coordinator."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import QLocale, QObject, QUrl
from PySide6.QtMultimedia import QSoundEffect
from PySide6.QtTextToSpeech import QTextToSpeech, QVoice

from spelldrill.core.audio import (
    Gender,
    SoundEffect,
    SoundEffectPlayer,
    SpeechEngine,
    SpeechRequest,
)

logger = logging.getLogger(__name__)

SFX_DIR = Path(__file__).resolve().parent.parent / "assets" / "sfx"
SFX_FILES = {
    SoundEffect.SUCCESS: "success.wav",
    SoundEffect.FAILURE: "failed.wav",
}


def _to_qt_range(value: float) -> float:
    """Map a 1.0-centred web-speech rate/pitch onto Qt's -1..1 scale."""
    return max(-1.0, min(1.0, value - 1.0))


class QtSpeechEngine(SpeechEngine):
    """Pronunciation through QTextToSpeech; unavailable when Qt finds no engine."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._tts: Optional[QTextToSpeech] = None
        if not QTextToSpeech.availableEngines():
            logger.info("No text-to-speech engine installed")
            return
        self._tts = QTextToSpeech(parent)
        if self._tts.state() == QTextToSpeech.State.Error:
            logger.warning("Text-to-speech engine failed to start: %s", self._tts.errorString())
            self._tts = None
            return
        self._tts.errorOccurred.connect(self._on_error)

    @property
    def available(self) -> bool:
        return self._tts is not None

    @property
    def is_playing(self) -> bool:
        if self._tts is None:
            return False
        return self._tts.state() in (QTextToSpeech.State.Speaking, QTextToSpeech.State.Synthesizing)

    def speak(self, request: SpeechRequest) -> None:
        if self._tts is None:
            return
        self._tts.setLocale(QLocale(request.accent.value.replace("-", "_")))
        voice = self._pick_voice(request.gender)
        if voice is not None:
            self._tts.setVoice(voice)
        self._tts.setRate(_to_qt_range(request.rate))
        self._tts.setPitch(_to_qt_range(request.pitch))
        self._tts.setVolume(request.volume)
        self._tts.say(request.text)

    def stop(self) -> None:
        if self._tts is not None:
            self._tts.stop()

    def close(self) -> None:
        if self._tts is not None:
            self._tts.stop()
            self._tts.deleteLater()
            self._tts = None

    def _pick_voice(self, gender: Gender) -> Optional[QVoice]:
        assert self._tts is not None
        voices = self._tts.availableVoices()
        if not voices:
            return None
        if gender is Gender.AUTO:
            gender = random.choice((Gender.MALE, Gender.FEMALE))
        wanted = QVoice.Gender.Male if gender is Gender.MALE else QVoice.Gender.Female
        for voice in voices:
            if voice.gender() == wanted:
                return voice
        return voices[0]

    def _on_error(self, reason, message: str) -> None:
        logger.warning("Speech playback error (%s): %s", reason, message)


class QtSoundEffects(SoundEffectPlayer):
    """Success/failure chimes via QSoundEffect, loaded once from the assets folder."""

    def __init__(self, volume: float = 0.7, parent: Optional[QObject] = None, sfx_dir: Path = SFX_DIR) -> None:
        self._effects: Dict[SoundEffect, QSoundEffect] = {}
        for effect, file_name in SFX_FILES.items():
            path = sfx_dir / file_name
            if not path.exists():
                logger.warning("Sound effect file not found: %s", path)
                continue
            player = QSoundEffect(parent)
            player.setSource(QUrl.fromLocalFile(str(path)))
            player.setVolume(max(0.0, min(1.0, volume)))
            player.setLoopCount(1)
            self._effects[effect] = player

    def play(self, effect: SoundEffect) -> None:
        player = self._effects.get(effect)
        if player is None:
            return
        if player.status() == QSoundEffect.Status.Error:
            logger.warning("Sound effect %s could not be loaded", effect.value)
            return
        player.stop()
        player.play()

    def close(self) -> None:
        for player in self._effects.values():
            player.stop()
            player.deleteLater()
        self._effects.clear()
