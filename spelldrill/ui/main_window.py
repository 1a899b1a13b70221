from __future__ import annotations

import logging
from typing import Optional, Sequence

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QVBoxLayout,
)

from spelldrill.core.audio import Accent
from spelldrill.core.automaton import Status, Transition
from spelldrill.core.practice import PracticeSession
from spelldrill.core.progress import ReviewScheduler
from spelldrill.core.settings import Settings
from spelldrill.core.visibility import DisplayMode
from spelldrill.core.words import Word
from spelldrill.ui.audio_backends import QtSoundEffects, QtSpeechEngine
from spelldrill.ui.colors import PracticeColors
from spelldrill.ui.key_capture import HiddenFieldKeyCapture, WindowKeyCapture
from spelldrill.ui.practice_widgets import (
    DefinitionLabel,
    GlassCard,
    PracticeBackground,
    PronunciationRow,
    StatsCard,
    WordNavigationBar,
)
from spelldrill.ui.qt_scheduler import QtScheduler
from spelldrill.ui.word_display import WordDisplayWidget

logger = logging.getLogger(__name__)

MODE_LABELS = {
    DisplayMode.FULL: "Show all letters",
    DisplayMode.HIDE_VOWELS: "Hide vowels",
    DisplayMode.HIDE_CONSONANTS: "Hide consonants",
    DisplayMode.HIDE_RANDOM: "Hide random letters",
    DisplayMode.HIDE_ALL: "Hide all letters",
}


class MainWindow(QMainWindow):
    """Spelling practice window for one word list.

    Builds the Qt backends (timers, speech, sound effects, key capture),
    hands them to a :class:`PracticeSession` and redraws on every transition.
    """

    def __init__(
        self,
        title: str,
        words: Sequence[Word],
        settings: Settings,
        review_scheduler: Optional[ReviewScheduler] = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"Spelldrill: {title}")
        self._settings = settings

        self._build_ui()

        self._window_keys = WindowKeyCapture(self)
        self._field_keys = HiddenFieldKeyCapture(self._practice_card)
        self._practice_card.layout().addWidget(self._field_keys.field)

        self._session = PracticeSession(
            words,
            settings,
            speech=QtSpeechEngine(self),
            effects=QtSoundEffects(settings.sfx_volume, self),
            scheduler=QtScheduler(self),
            review_scheduler=review_scheduler,
            key_sources=(self._field_keys, self._window_keys),
        )
        self._session.add_listener(self._on_transition)
        self._session.add_complete_listener(self._on_session_complete)

        self._stats_timer = QTimer(self)
        self._stats_timer.timeout.connect(self._refresh_stats)
        self._stats_timer.start(1000)

        self._mode_combo.setCurrentIndex(list(MODE_LABELS).index(settings.display_mode))
        self._mode_combo.currentIndexChanged.connect(self._on_mode_changed)

        self._session.start()
        self._field_keys.focus()

    def _build_ui(self) -> None:
        background = PracticeBackground()
        outer = QVBoxLayout(background)
        outer.setContentsMargins(32, 24, 32, 24)
        outer.setSpacing(18)

        header = QHBoxLayout()
        self._stats_card = StatsCard()
        header.addWidget(self._stats_card, 1)
        self._mode_combo = QComboBox()
        self._mode_combo.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        for mode, label in MODE_LABELS.items():
            self._mode_combo.addItem(label, mode.value)
        header.addWidget(self._mode_combo, 0, Qt.AlignTop)
        outer.addLayout(header)

        self._practice_card = GlassCard()
        card_layout = QVBoxLayout(self._practice_card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)
        self._word_display = WordDisplayWidget(on_reveal=self._on_reveal)
        card_layout.addWidget(self._word_display)
        self._pronunciation_row = PronunciationRow(on_play=self._on_play_accent)
        card_layout.addWidget(self._pronunciation_row)
        self._definition_label = DefinitionLabel()
        card_layout.addWidget(self._definition_label)
        self._status_label = QLabel("")
        self._status_label.setAlignment(Qt.AlignCenter)
        self._status_label.setStyleSheet(f"color: {PracticeColors.PRIMARY}; font-size: 18px; font-weight: 700;")
        card_layout.addWidget(self._status_label)
        outer.addWidget(self._practice_card, 1)

        self._navigation = WordNavigationBar(on_prev=self._on_prev, on_next=self._on_next)
        outer.addWidget(self._navigation)

        self.setCentralWidget(background)
        self.resize(960, 640)

    def _on_transition(self, transition: Transition) -> None:
        if transition.kind == "error":
            self._word_display.shake()
        if transition.kind == "load":
            self._refresh_word_details()
        self._field_keys.set_refocus_enabled(self._session.status is Status.ACTIVE)
        self._refresh_word()
        self._refresh_stats()

    def _refresh_word(self) -> None:
        word = self._session.current_word
        state = self._session.state
        self._word_display.set_display(
            word.text,
            self._session.glyphs(),
            state.entered,
            state.position,
            state.error,
        )

    def _refresh_word_details(self) -> None:
        word = self._session.current_word
        self._pronunciation_row.set_word(word, self._session.audio.speech_supported)
        self._definition_label.set_word(word)
        self._navigation.set_neighbours(self._session.previous_word(), self._session.next_preview())

    def _refresh_stats(self) -> None:
        self._stats_card.set_stats(self._session.stats)

    def _on_reveal(self, revealed: bool) -> None:
        self._session.set_revealed(revealed)
        self._refresh_word()

    def _on_play_accent(self, accent: Accent) -> None:
        self._session.speak(accent)
        self._field_keys.focus()

    def _on_prev(self) -> None:
        self._session.prev()
        self._field_keys.focus()

    def _on_next(self) -> None:
        self._session.next()
        self._field_keys.focus()

    def _on_mode_changed(self, index: int) -> None:
        mode = DisplayMode.parse(self._mode_combo.itemData(index))
        logger.info("Display mode changed to %s", mode.value)
        self._session.display_mode = mode
        self._refresh_word()
        self._navigation.set_neighbours(self._session.previous_word(), self._session.next_preview())

    def _on_session_complete(self) -> None:
        stats = self._session.stats
        self._status_label.setText(
            f"All done! {stats.correct_count} word(s) spelled, {stats.accuracy}% accuracy."
        )
        self._navigation.set_neighbours(self._session.previous_word(), self._session.next_preview())
        self._stats_timer.stop()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._stats_timer.stop()
        self._session.dispose()
        self._window_keys.close()
        self._field_keys.close()
        super().closeEvent(event)
