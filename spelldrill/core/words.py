from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

_WORD_TEXT_RE = re.compile(r"^[A-Za-z' ]+$")


@dataclass(frozen=True)
class PronunciationItem:
    phonetic: str


@dataclass(frozen=True)
class Pronunciation:
    uk: Optional[PronunciationItem] = None
    us: Optional[PronunciationItem] = None


@dataclass(frozen=True)
class Definition:
    pos: str
    translation: str


@dataclass(frozen=True)
class Example:
    en: str
    cn: str = ""


@dataclass(frozen=True)
class Word:
    id: int
    text: str
    pronunciation: Pronunciation = field(default_factory=Pronunciation)
    definitions: Tuple[Definition, ...] = ()
    examples: Tuple[Example, ...] = ()


@dataclass(frozen=True)
class WordList:
    key: str
    name: str
    words: List[Word]


class WordRepository:
    """Loads word lists from ``data/words/*.yaml``.

    Each file holds a ``title`` and a ``words`` list. A word entry is either a
    bare string or a mapping with ``text`` and optional ``id``, ``uk``, ``us``,
    ``definitions`` and ``examples`` keys.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "words"
        self._lists = self._load_lists()

    def all(self) -> List[WordList]:
        return list(self._lists.values())

    def get(self, key: str) -> WordList:
        return self._lists[key]

    def first(self) -> WordList:
        return next(iter(self._lists.values()))

    def _load_lists(self) -> Dict[str, WordList]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Word list directory not found: {self._base_dir}")

        lists: Dict[str, WordList] = {}
        for list_path in sorted(self._base_dir.glob("*.yaml")):
            raw = yaml.safe_load(list_path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{list_path.name}: expected YAML with 'title' and 'words'")
            title = raw.get("title")
            entries = raw.get("words")
            if not title or not isinstance(title, str):
                raise ValueError(f"{list_path.name}: missing or invalid 'title'")
            if not isinstance(entries, list) or not entries:
                raise ValueError(f"{list_path.name}: 'words' must be a non-empty list")
            words = [_parse_word(list_path.name, i, entry) for i, entry in enumerate(entries)]
            seen_ids = set()
            for word in words:
                if word.id in seen_ids:
                    raise ValueError(f"{list_path.name}: duplicate word id {word.id}")
                seen_ids.add(word.id)
            lists[list_path.stem] = WordList(key=list_path.stem, name=title.strip(), words=words)

        if not lists:
            raise ValueError(f"No word list files (*.yaml) found in {self._base_dir}")
        return lists


def _parse_word(source: str, index: int, entry: object) -> Word:
    if isinstance(entry, str):
        entry = {"text": entry}
    if not isinstance(entry, dict):
        raise ValueError(f"{source}: word #{index} must be a string or a mapping")

    text = str(entry.get("text", "")).strip()
    if not text or not _WORD_TEXT_RE.match(text):
        raise ValueError(f"{source}: word #{index} has invalid text {text!r}")

    uk = entry.get("uk")
    us = entry.get("us")
    pronunciation = Pronunciation(
        uk=PronunciationItem(str(uk)) if uk else None,
        us=PronunciationItem(str(us)) if us else None,
    )
    definitions = tuple(
        Definition(pos=str(d.get("pos", "")), translation=str(d.get("translation", "")))
        for d in entry.get("definitions") or []
        if isinstance(d, dict)
    )
    examples = tuple(
        Example(en=str(e.get("en", "")), cn=str(e.get("cn", "")))
        for e in entry.get("examples") or []
        if isinstance(e, dict)
    )
    return Word(
        id=int(entry.get("id", index + 1)),
        text=text,
        pronunciation=pronunciation,
        definitions=definitions,
        examples=examples,
    )
