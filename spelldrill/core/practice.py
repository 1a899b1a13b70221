from __future__ import annotations

import logging
import random
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence

from spelldrill.core.audio import Accent, AudioCoordinator, SoundEffectPlayer, SpeechEngine
from spelldrill.core.automaton import InputState, SpellingAutomaton, Status, Transition
from spelldrill.core.keys import KeyEventSource
from spelldrill.core.navigation import SessionNavigator
from spelldrill.core.progress import MistakeCollector, ProgressEmitter, ReviewScheduler, Stats
from spelldrill.core.scheduler import Scheduler
from spelldrill.core.settings import Settings
from spelldrill.core.visibility import DisplayMode, masked_indices, preview_text, render_glyphs
from spelldrill.core.words import Word

logger = logging.getLogger(__name__)


class PracticeSession:
    """One spelling practice run over a list of words.

    Owns every collaborator for the run (audio, scheduler, key sources) and
    releases them in :meth:`dispose`. Observers registered with
    :meth:`add_listener` get every automaton transition; the UI redraws
    from :meth:`glyphs`, :attr:`stats` and the navigator.
    """

    def __init__(
        self,
        words: Sequence[Word],
        settings: Settings,
        speech: SpeechEngine,
        effects: SoundEffectPlayer,
        scheduler: Scheduler,
        review_scheduler: Optional[ReviewScheduler] = None,
        key_sources: Iterable[KeyEventSource] = (),
    ) -> None:
        self._settings = settings
        self._scheduler = scheduler
        self._rng = random.Random(settings.random_seed)
        self._display_mode = settings.display_mode
        self._mask: FrozenSet[int] = frozenset()
        self._revealed = False
        self._disposed = False
        self._complete_listeners: List[Callable[[], None]] = []

        self.audio = AudioCoordinator(speech, effects, settings.speech)
        self.progress = ProgressEmitter(review_scheduler, demo_mode=settings.demo_mode)
        self.mistakes = MistakeCollector()
        self.automaton = SpellingAutomaton(
            audio=self.audio,
            progress=self.progress,
            scheduler=scheduler,
            on_advance=self._on_word_finished,
            success_delay_ms=settings.success_delay_ms,
            recovery_delay_ms=settings.recovery_delay_ms,
            speak_key=settings.speak_key,
        )
        self.navigator = SessionNavigator(
            words,
            mistakes=self.mistakes,
            mistake_flag=lambda: self.automaton.has_mistake,
        )
        self.navigator.add_word_listener(self._on_word_changed)
        self.navigator.add_complete_listener(self._on_session_complete)

        self._key_sources = list(key_sources)
        for source in self._key_sources:
            source.subscribe(self.automaton.handle_key)

        if not self.audio.speech_supported:
            logger.info("Speech synthesis unavailable; practising without pronunciation")

    @property
    def display_mode(self) -> DisplayMode:
        return self._display_mode

    @display_mode.setter
    def display_mode(self, mode: DisplayMode) -> None:
        self._display_mode = mode
        self._recompute_mask()

    @property
    def mask(self) -> FrozenSet[int]:
        return self._mask

    @property
    def revealed(self) -> bool:
        return self._revealed

    @property
    def current_word(self) -> Word:
        return self.navigator.current_word

    @property
    def state(self) -> InputState:
        return self.automaton.state

    @property
    def status(self) -> Status:
        return self.automaton.status

    @property
    def stats(self) -> Stats:
        return self.progress.stats

    @property
    def is_complete(self) -> bool:
        return self.navigator.is_complete

    def add_listener(self, listener: Callable[[Transition], None]) -> None:
        self.automaton.add_listener(listener)

    def add_complete_listener(self, listener: Callable[[], None]) -> None:
        self._complete_listeners.append(listener)

    def start(self) -> None:
        self.navigator.start()

    def next(self) -> bool:
        return self.navigator.next()

    def prev(self) -> bool:
        return self.navigator.prev()

    def set_revealed(self, revealed: bool) -> None:
        """Hover/tap reveal of masked letters."""
        self._revealed = revealed

    def toggle_revealed(self) -> bool:
        self._revealed = not self._revealed
        return self._revealed

    def speak(self, accent: Optional[Accent] = None) -> bool:
        return self.automaton.request_pronunciation(accent)

    def glyphs(self) -> List[str]:
        return render_glyphs(self.current_word.text, self._mask, self.automaton.state.entered, self._revealed)

    def previous_word(self) -> Optional[Word]:
        """Word the back control leads to; None once the session is over."""
        return None if self.is_complete else self.navigator.previous_word

    def next_preview(self) -> str:
        upcoming = None if self.is_complete else self.navigator.next_word
        return preview_text(upcoming.text, self._display_mode) if upcoming else ""

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        for source in self._key_sources:
            source.unsubscribe(self.automaton.handle_key)
        self.automaton.dispose()
        self._scheduler.close()
        self.audio.close()
        logger.info(
            "Practice session closed: %d attempt(s), %d correct",
            self.stats.input_count,
            self.stats.correct_count,
        )

    def _on_word_changed(self, word: Word) -> None:
        self._revealed = False
        self._recompute_mask()
        self.automaton.load_word(word)

    def _on_word_finished(self) -> None:
        self.navigator.advance()

    def _on_session_complete(self) -> None:
        for listener in list(self._complete_listeners):
            listener()

    def _recompute_mask(self) -> None:
        self._mask = masked_indices(self.navigator.current_word.text, self._display_mode, self._rng)
