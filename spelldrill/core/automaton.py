"""Per-word typed-input state machine for the spelling practice screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional

from spelldrill.core.audio import Accent, AudioCoordinator
from spelldrill.core.keys import KeyEvent
from spelldrill.core.progress import QUALITY_FAILED, QUALITY_PASSED, ProgressEmitter
from spelldrill.core.scheduler import ScheduledTask, Scheduler
from spelldrill.core.visibility import first_inputtable_at_or_after, is_inputtable, is_skippable
from spelldrill.core.words import Word

logger = logging.getLogger(__name__)

SUCCESS_DELAY_MS = 300
RECOVERY_DELAY_MS = 1000


class Status(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ERROR = "error"
    COMPLETE = "complete"


@dataclass
class InputState:
    """Typing progress on the displayed word.

    ``position`` is always the first inputtable index not yet typed
    correctly, or ``len(text)`` once the word is done.
    """

    position: int = 0
    entered: Dict[int, str] = field(default_factory=dict)
    error: bool = False
    complete: bool = False


@dataclass(frozen=True)
class Transition:
    kind: str
    position: int
    text: str


Listener = Callable[[Transition], None]


class SpellingAutomaton:
    """Matches keystrokes against the current word.

    ``ACTIVE`` moves to ``ERROR`` on a wrong letter and to ``COMPLETE`` when
    the last letter is typed. ``ERROR`` returns to ``ACTIVE`` on its own after
    *recovery_delay_ms*; ``COMPLETE`` asks for the next word through
    *on_advance* after *success_delay_ms*. Loading a word or disposing the
    automaton cancels whichever of those delays is still pending.
    """

    def __init__(
        self,
        audio: AudioCoordinator,
        progress: ProgressEmitter,
        scheduler: Scheduler,
        on_advance: Callable[[], None],
        success_delay_ms: int = SUCCESS_DELAY_MS,
        recovery_delay_ms: int = RECOVERY_DELAY_MS,
        speak_key: str = "Return",
    ) -> None:
        self._audio = audio
        self._progress = progress
        self._scheduler = scheduler
        self._on_advance = on_advance
        self._success_delay_ms = success_delay_ms
        self._recovery_delay_ms = recovery_delay_ms
        self._speak_key = speak_key
        self._word: Optional[Word] = None
        self._state = InputState()
        self._has_mistake = False
        self._pending: Optional[ScheduledTask] = None
        self._listeners: List[Listener] = []
        self._disposed = False

    @property
    def word(self) -> Optional[Word]:
        return self._word

    @property
    def state(self) -> InputState:
        return replace(self._state, entered=dict(self._state.entered))

    @property
    def status(self) -> Status:
        if self._word is None:
            return Status.IDLE
        if self._state.complete:
            return Status.COMPLETE
        if self._state.error:
            return Status.ERROR
        return Status.ACTIVE

    @property
    def has_mistake(self) -> bool:
        """True once the current word was mistyped and not yet completed."""
        return self._has_mistake

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def load_word(self, word: Word) -> None:
        """Start a fresh attempt at *word*."""
        if self._disposed:
            return
        self._cancel_pending()
        self._word = word
        self._state = InputState(position=first_inputtable_at_or_after(word.text, 0))
        self._has_mistake = False
        self._progress.attempt_started()
        self._emit("load")

        if self._state.position >= len(word.text):
            logger.warning("Word %s (%r) has nothing to type, skipping it", word.id, word.text)
            self._state.complete = True
            self._pending = self._scheduler.call_later(self._success_delay_ms, self._advance)
            return

        if self._audio.speech_supported:
            self._audio.play_word(word)

    def handle_key(self, event: KeyEvent) -> bool:
        """Handle a captured key press; returns True if it was used."""
        if self._word is None or self._disposed:
            return False
        if event.key == self._speak_key and not event.has_modifier:
            self.request_pronunciation()
            return True
        return self.handle_keystroke(event.text, modifiers=event.has_modifier)

    def handle_keystroke(self, char: str, modifiers: bool = False) -> bool:
        word = self._word
        state = self._state
        if word is None or self._disposed or state.complete or state.error:
            return False
        if modifiers or not is_inputtable(char):
            return False
        if state.position >= len(word.text):
            return False

        target = word.text[state.position]
        state.entered[state.position] = char

        if char.lower() != target.lower():
            self._fail()
            return True

        next_pos = first_inputtable_at_or_after(word.text, state.position + 1)
        for i in range(state.position + 1, next_pos):
            if is_skippable(word.text[i]):
                state.entered[i] = word.text[i]
        state.position = next_pos
        self._emit("advance")
        if next_pos == len(word.text):
            self._succeed()
        return True

    def request_pronunciation(self, accent: Optional[Accent] = None) -> bool:
        """Replay the current word, optionally in a specific accent."""
        if self._word is None or self._disposed:
            return False
        return self._audio.replay_word(self._word, accent)

    def dispose(self) -> None:
        self._cancel_pending()
        self._disposed = True
        self._listeners.clear()

    def _succeed(self) -> None:
        word = self._word
        assert word is not None
        self._state.complete = True
        self._audio.play_success()
        if self._has_mistake:
            self._progress.record_mistake(word)
        self._has_mistake = False
        self._progress.record_quality(word, QUALITY_PASSED)
        self._progress.word_completed()
        self._emit("complete")
        self._pending = self._scheduler.call_later(self._success_delay_ms, self._advance)

    def _fail(self) -> None:
        word = self._word
        assert word is not None
        self._state.error = True
        self._audio.play_failure()
        self._has_mistake = True
        self._progress.record_quality(word, QUALITY_FAILED)
        self._emit("error")
        self._pending = self._scheduler.call_later(self._recovery_delay_ms, self._recover)

    def _recover(self) -> None:
        self._pending = None
        word = self._word
        if word is None:
            return
        self._state = InputState(position=first_inputtable_at_or_after(word.text, 0))
        self._emit("recover")
        self._audio.replay_word(word)

    def _advance(self) -> None:
        self._pending = None
        self._on_advance()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _emit(self, kind: str) -> None:
        word = self._word
        transition = Transition(kind=kind, position=self._state.position, text=word.text if word else "")
        for listener in list(self._listeners):
            listener(transition)
