"""Practice screen widgets: glass card, stat tiles, navigation bar, pronunciation row."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QLinearGradient, QPainter
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from spelldrill.core.audio import Accent
from spelldrill.core.progress import Stats
from spelldrill.core.words import Word
from spelldrill.ui.colors import PracticeColors


class PracticeBackground(QWidget):
    """Plain vertical gradient behind the practice screen."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        gradient = QLinearGradient(0, 0, 0, self.height())
        gradient.setColorAt(0.0, QColor(PracticeColors.BG_TOP))
        gradient.setColorAt(1.0, QColor(PracticeColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)


class GlassCard(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("glassCard")
        self.setStyleSheet(
            f"""
            QFrame#glassCard {{
                background: {PracticeColors.CARD_BG};
                border: 1px solid {PracticeColors.CARD_BORDER};
                border-radius: 20px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 30, 70, 40))
        self.setGraphicsEffect(shadow)


class StatsCard(GlassCard):
    """Time, attempts, correct words and accuracy for the running session."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(18, 12, 18, 12)
        layout.setSpacing(24)
        self._values: dict[str, QLabel] = {}
        for key, caption in (("time", "Time"), ("input", "Attempts"), ("correct", "Correct"), ("accuracy", "Accuracy")):
            column = QVBoxLayout()
            column.setSpacing(2)
            value = QLabel("0")
            value.setAlignment(Qt.AlignCenter)
            value.setStyleSheet(f"color: {PracticeColors.TEXT_PRIMARY}; font-size: 22px; font-weight: 700;")
            label = QLabel(caption)
            label.setAlignment(Qt.AlignCenter)
            label.setStyleSheet(f"color: {PracticeColors.TEXT_MUTED}; font-size: 12px;")
            column.addWidget(value)
            column.addWidget(label)
            layout.addLayout(column)
            self._values[key] = value

    def set_stats(self, stats: Stats) -> None:
        self._values["time"].setText(stats.time)
        self._values["input"].setText(str(stats.input_count))
        self._values["correct"].setText(str(stats.correct_count))
        self._values["accuracy"].setText(f"{stats.accuracy}%")


class WordNavigationBar(QWidget):
    """Previous/next word buttons; a button is hidden at its end of the list."""

    def __init__(self, on_prev: Callable[[], None], on_next: Callable[[], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.prev_button = QPushButton()
        self.next_button = QPushButton()
        for button in (self.prev_button, self.next_button):
            button.setFlat(True)
            button.setCursor(Qt.PointingHandCursor)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.setStyleSheet(f"color: {PracticeColors.TEXT_MUTED}; font-size: 18px; text-align: left;")
        self.prev_button.clicked.connect(on_prev)
        self.next_button.clicked.connect(on_next)
        layout.addWidget(self.prev_button, 0, Qt.AlignLeft)
        layout.addStretch(1)
        layout.addWidget(self.next_button, 0, Qt.AlignRight)

    def set_neighbours(self, prev_word: Optional[Word], next_preview: str) -> None:
        self.prev_button.setVisible(prev_word is not None)
        self.next_button.setVisible(bool(next_preview))
        self.prev_button.setText(f"‹  {prev_word.text}" if prev_word else "")
        self.next_button.setText(f"{next_preview}  ›" if next_preview else "")


class PronunciationRow(QWidget):
    """Phonetic spelling with one play button per available accent."""

    def __init__(self, on_play: Callable[[Accent], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_play = on_play
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(16)
        layout.addStretch(1)
        self._buttons: dict[Accent, QPushButton] = {}
        for accent, caption in ((Accent.UK, "UK"), (Accent.US, "US")):
            button = QPushButton()
            button.setFlat(True)
            button.setCursor(Qt.PointingHandCursor)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.setStyleSheet(f"color: {PracticeColors.PRIMARY}; font-size: 15px;")
            button.setProperty("caption", caption)
            button.clicked.connect(lambda _=False, a=accent: self._on_play(a))
            layout.addWidget(button)
            self._buttons[accent] = button
        layout.addStretch(1)

    def set_word(self, word: Word, speech_supported: bool) -> None:
        items = {Accent.UK: word.pronunciation.uk, Accent.US: word.pronunciation.us}
        for accent, button in self._buttons.items():
            item = items[accent]
            button.setVisible(item is not None)
            button.setEnabled(speech_supported)
            if item is not None:
                button.setText(f"{button.property('caption')} {item.phonetic}  🔊")


class DefinitionLabel(QLabel):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setWordWrap(True)
        self.setStyleSheet(f"color: {PracticeColors.TEXT_PRIMARY}; font-size: 16px;")

    def set_word(self, word: Word) -> None:
        lines = [f"{d.pos} {d.translation}".strip() for d in word.definitions]
        if word.examples:
            lines.append(f"“{word.examples[0].en}”")
        self.setText("\n".join(lines))
