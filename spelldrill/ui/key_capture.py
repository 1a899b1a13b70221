"""Two interchangeable ways of feeding Qt key presses to the practice engine.

``WindowKeyCapture`` filters key presses on the whole window, the way a
desktop user types. ``HiddenFieldKeyCapture`` keeps focus on a zero-height
line edit, which is what summons an on-screen keyboard on touch devices.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, QObject, Qt, QTimer
from PySide6.QtGui import QKeyEvent, QKeySequence
from PySide6.QtWidgets import QLineEdit, QSizePolicy, QWidget

from spelldrill.core.keys import KeyEvent, KeyEventSource


def key_event_from_qt(event: QKeyEvent) -> KeyEvent:
    """Translate a QKeyEvent into the engine's key event."""
    mods = event.modifiers()
    return KeyEvent(
        text=event.text(),
        key=QKeySequence(event.key()).toString(),
        ctrl=bool(mods & Qt.KeyboardModifier.ControlModifier),
        alt=bool(mods & Qt.KeyboardModifier.AltModifier),
        meta=bool(mods & Qt.KeyboardModifier.MetaModifier),
    )


class _KeyFilter(QObject):
    def __init__(self, capture: KeyEventSource, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._capture = capture

    def eventFilter(self, obj, event) -> bool:
        if event.type() == QEvent.Type.KeyPress and not event.isAutoRepeat():
            if self._capture.dispatch(key_event_from_qt(event)):
                return True
        return super().eventFilter(obj, event)


class WindowKeyCapture(KeyEventSource):
    """Key presses anywhere in *window*, except those aimed at other text inputs."""

    def __init__(self, window: QWidget) -> None:
        super().__init__()
        self._window = window
        self._filter = _KeyFilter(self, window)
        window.installEventFilter(self._filter)

    def dispatch(self, event: KeyEvent) -> bool:
        focused = self._window.focusWidget()
        if isinstance(focused, QLineEdit) and not isinstance(focused, _HiddenField):
            return False
        return super().dispatch(event)

    def close(self) -> None:
        self._window.removeEventFilter(self._filter)
        super().close()


class _HiddenField(QLineEdit):
    """Invisible, always-empty line edit that keeps keyboard focus."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.on_focus_lost = None
        self.setFixedHeight(0)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Fixed)
        self.setStyleSheet("background: transparent; border: none; color: transparent;")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_InputMethodEnabled, True)
        self.setReadOnly(True)

    def focusOutEvent(self, event) -> None:
        super().focusOutEvent(event)
        if self.on_focus_lost is not None:
            self.on_focus_lost()


class HiddenFieldKeyCapture(KeyEventSource):
    """Key presses delivered to a hidden field that re-takes focus when it loses it."""

    def __init__(self, parent: QWidget) -> None:
        super().__init__()
        self.field = _HiddenField(parent)
        self._filter = _KeyFilter(self, self.field)
        self.field.installEventFilter(self._filter)
        self.field.on_focus_lost = self.refocus
        self._refocus_enabled = True

    def set_refocus_enabled(self, enabled: bool) -> None:
        """Stop grabbing focus back, e.g. while the word is complete or in error."""
        self._refocus_enabled = enabled

    def refocus(self) -> None:
        # a short delay lets the widget that took focus settle first
        QTimer.singleShot(50, self._focus_if_enabled)

    def focus(self) -> None:
        self.field.setFocus()

    def _focus_if_enabled(self) -> None:
        if self._refocus_enabled and self.field.isVisible():
            self.field.setFocus()

    def close(self) -> None:
        self._refocus_enabled = False
        self.field.on_focus_lost = None
        self.field.removeEventFilter(self._filter)
        super().close()
