"""Spelling practice UI: the word being typed, one glyph per character."""

from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence

from PySide6.QtCore import QEasingCurve, Qt, QVariantAnimation
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import QSizePolicy, QWidget

from spelldrill.core.visibility import is_skippable
from spelldrill.ui.colors import PracticeColors, blend_hex


class WordDisplayWidget(QWidget):
    """Large letters: entered (green/red), current (dark), upcoming (gray).

    Hovering or tapping the word reports a reveal request through
    *on_reveal*; the owner decides what to show and calls :meth:`set_display`.
    """

    def __init__(self, on_reveal: Optional[Callable[[bool], None]] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_reveal = on_reveal
        self._text = ""
        self._glyphs: list[str] = []
        self._entered: dict[int, str] = {}
        self._position = 0
        self._error = False
        self._shake_offset = 0.0
        self._tap_revealed = False

        self._shake_anim = QVariantAnimation(self)
        self._shake_anim.setDuration(400)
        self._shake_anim.setStartValue(0.0)
        for step, value in ((0.1, -12.0), (0.3, 12.0), (0.5, -8.0), (0.7, 8.0), (0.9, -4.0)):
            self._shake_anim.setKeyValueAt(step, value)
        self._shake_anim.setEndValue(0.0)
        self._shake_anim.setEasingCurve(QEasingCurve.Type.Linear)
        self._shake_anim.valueChanged.connect(self._set_shake_offset)

        self.setMouseTracking(True)
        self.setMinimumHeight(120)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

    def set_display(
        self,
        text: str,
        glyphs: Sequence[str],
        entered: Mapping[int, str],
        position: int,
        error: bool,
    ) -> None:
        if text != self._text:
            self._tap_revealed = False
        self._text = text
        self._glyphs = list(glyphs)
        self._entered = dict(entered)
        self._position = position
        self._error = error
        self.update()

    def shake(self) -> None:
        self._shake_anim.stop()
        self._shake_anim.start()

    def enterEvent(self, event) -> None:
        super().enterEvent(event)
        if self._on_reveal is not None:
            self._on_reveal(True)

    def leaveEvent(self, event) -> None:
        super().leaveEvent(event)
        if self._on_reveal is not None and not self._tap_revealed:
            self._on_reveal(False)

    def mousePressEvent(self, event) -> None:
        super().mousePressEvent(event)
        # touch screens have no hover, a tap toggles instead
        self._tap_revealed = not self._tap_revealed
        if self._on_reveal is not None:
            self._on_reveal(self._tap_revealed)

    def _set_shake_offset(self, value) -> None:
        self._shake_offset = float(value)
        self.update()

    def _color_for(self, index: int, char: str) -> QColor:
        entered = index in self._entered
        if is_skippable(char):
            return QColor(PracticeColors.LETTER_CORRECT if entered else PracticeColors.LETTER_PENDING)
        if index < self._position and entered:
            ok = self._entered[index].lower() == char.lower()
            return QColor(PracticeColors.LETTER_CORRECT if ok else PracticeColors.LETTER_WRONG)
        if index == self._position:
            return QColor(PracticeColors.LETTER_WRONG if self._error else PracticeColors.LETTER_CURRENT)
        return QColor(PracticeColors.LETTER_PENDING)

    def _underline_for(self, index: int) -> QColor:
        if index == self._position and not self._error:
            return QColor(PracticeColors.PRIMARY)
        return QColor(blend_hex(PracticeColors.LETTER_PENDING, PracticeColors.BG_TOP, 0.6))

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._glyphs:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        font = QFont(self.font())
        font.setPointSize(max(18, min(54, int(self.width() / max(len(self._glyphs), 1) / 1.2))))
        font.setBold(True)
        painter.setFont(font)
        metrics = painter.fontMetrics()

        cell = metrics.horizontalAdvance("W") + 6
        space_cell = cell // 2
        widths = [space_cell if is_skippable(ch) else cell for ch in self._text]
        total_width = sum(widths)
        x = max(0, (self.width() - total_width) // 2) + int(self._shake_offset)
        y = (self.height() - metrics.height()) // 2

        for i, glyph in enumerate(self._glyphs):
            char = self._text[i] if i < len(self._text) else glyph
            painter.setPen(self._color_for(i, char))
            if not is_skippable(char):
                painter.drawText(x, y, widths[i], metrics.height(), Qt.AlignCenter, glyph)
                painter.fillRect(x + 4, y + metrics.height() + 4, widths[i] - 8, 3, self._underline_for(i))
            x += widths[i]
