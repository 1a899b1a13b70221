"""Which letters of a word are shown as placeholders while it is being spelled."""

from __future__ import annotations

import random
import string
from enum import Enum
from typing import FrozenSet, List, Mapping, Optional

VOWELS = frozenset("aeiou")
INPUTTABLE = frozenset(string.ascii_letters + "'")
PLACEHOLDER = "_"


class DisplayMode(str, Enum):
    FULL = "full"
    HIDE_VOWELS = "hideVowels"
    HIDE_CONSONANTS = "hideConsonants"
    HIDE_RANDOM = "hideRandom"
    HIDE_ALL = "hideAll"

    @classmethod
    def parse(cls, value: str) -> "DisplayMode":
        """Return the mode for a config string such as ``"hideVowels"``."""
        for mode in cls:
            if mode.value == value or mode.name.lower() == str(value).lower():
                return mode
        raise ValueError(f"Unknown display mode: {value!r}")


def is_inputtable(char: str) -> bool:
    """A letter or apostrophe, i.e. something the user has to type."""
    return char in INPUTTABLE


def is_skippable(char: str) -> bool:
    return char == " "


def first_inputtable_at_or_after(text: str, start: int) -> int:
    """Index of the first inputtable character at or after *start*, else ``len(text)``."""
    for i in range(max(0, start), len(text)):
        if is_inputtable(text[i]):
            return i
    return len(text)


def inputtable_indices(text: str) -> List[int]:
    return [i for i, ch in enumerate(text) if is_inputtable(ch)]


def masked_indices(
    text: str,
    mode: DisplayMode,
    rng: Optional[random.Random] = None,
) -> FrozenSet[int]:
    """Indices of *text* that render as a placeholder under *mode*.

    Only inputtable positions are ever masked. ``HIDE_RANDOM`` picks
    ``n // 2 + 1`` of the ``n`` inputtable positions, so strictly more than
    half are hidden; pass a seeded *rng* for a reproducible choice.
    """
    candidates = inputtable_indices(text)
    if mode is DisplayMode.FULL or not candidates:
        return frozenset()
    if mode is DisplayMode.HIDE_VOWELS:
        return frozenset(i for i in candidates if text[i].lower() in VOWELS)
    if mode is DisplayMode.HIDE_CONSONANTS:
        return frozenset(
            i for i in candidates if text[i].isalpha() and text[i].lower() not in VOWELS
        )
    if mode is DisplayMode.HIDE_ALL:
        return frozenset(candidates)
    if mode is DisplayMode.HIDE_RANDOM:
        rng = rng or random.Random()
        return frozenset(rng.sample(candidates, len(candidates) // 2 + 1))
    raise ValueError(f"Unsupported display mode: {mode!r}")


def render_glyphs(
    text: str,
    mask: FrozenSet[int],
    entered: Mapping[int, str],
    revealed: bool = False,
) -> List[str]:
    """Glyph to draw for each character of *text*."""
    glyphs: List[str] = []
    for i, ch in enumerate(text):
        if i in entered:
            glyphs.append(entered[i])
        elif i in mask and not revealed:
            glyphs.append(PLACEHOLDER)
        else:
            glyphs.append(ch)
    return glyphs


def preview_text(text: str, mode: DisplayMode) -> str:
    """Upcoming-word hint: shown as-is only when nothing is hidden."""
    if mode is DisplayMode.FULL:
        return text
    return PLACEHOLDER * len(text)
