"""Key events as the practice engine sees them, independent of how they were captured."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

KeyHandler = Callable[["KeyEvent"], bool]


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    ``text`` is the produced character (may be empty), ``key`` the key name
    such as ``"Return"`` or ``"A"``.
    """

    text: str
    key: str = ""
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.ctrl or self.alt or self.meta


class KeyEventSource:
    """Delivers key events to subscribed handlers.

    A handler returns True when it consumed the event; delivery stops at the
    first handler that does. Capture backends call :meth:`dispatch`.
    """

    def __init__(self) -> None:
        self._handlers: List[KeyHandler] = []

    def subscribe(self, handler: KeyHandler) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: KeyHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def dispatch(self, event: KeyEvent) -> bool:
        for handler in list(self._handlers):
            if handler(event):
                return True
        return False

    def close(self) -> None:
        self._handlers.clear()
