from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from spelldrill.core.audio import Accent, Gender, SpeechConfig
from spelldrill.core.automaton import RECOVERY_DELAY_MS, SUCCESS_DELAY_MS
from spelldrill.core.visibility import DisplayMode

logger = logging.getLogger(__name__)

SETTINGS_ENV = "SPELLDRILL_SETTINGS"
DISPLAY_MODE_ENV = "SPELLDRILL_DISPLAY_MODE"
DEMO_ENV = "SPELLDRILL_DEMO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_settings_path() -> Path:
    return Path.home() / ".spelldrill" / "settings.yaml"


@dataclass
class Settings:
    display_mode: DisplayMode = DisplayMode.HIDE_RANDOM
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    success_delay_ms: int = SUCCESS_DELAY_MS
    recovery_delay_ms: int = RECOVERY_DELAY_MS
    speak_key: str = "Return"
    random_seed: Optional[int] = None
    sfx_volume: float = 0.7
    word_list: Optional[str] = None
    demo_mode: bool = False
    log_level: str = "INFO"


def load_settings(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Read settings from YAML, then apply environment overrides.

    A missing file means defaults. An unreadable file, or a single bad value,
    is logged and replaced by its default rather than stopping the app.
    """
    env = os.environ if environ is None else environ
    if path is None:
        path = Path(env[SETTINGS_ENV]) if env.get(SETTINGS_ENV) else default_settings_path()

    raw: Dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", path, e)
            loaded = None
        if isinstance(loaded, dict):
            raw = loaded
        elif loaded is not None:
            logger.warning("Ignoring settings in %s: expected a mapping", path)

    if env.get(DISPLAY_MODE_ENV):
        raw["display_mode"] = env[DISPLAY_MODE_ENV]
    if env.get(DEMO_ENV):
        raw["demo_mode"] = env[DEMO_ENV] == "1"

    return _build(raw)


def _build(raw: Mapping[str, Any]) -> Settings:
    defaults = Settings()
    speech_raw = raw.get("speech") or {}
    if not isinstance(speech_raw, dict):
        logger.warning("Ignoring 'speech' settings: expected a mapping")
        speech_raw = {}

    speech = SpeechConfig(
        accent=_parse(speech_raw, "accent", Accent, defaults.speech.accent),
        rate=_parse(speech_raw, "rate", float, defaults.speech.rate),
        volume=_parse(speech_raw, "volume", float, defaults.speech.volume),
        pitch=_parse(speech_raw, "pitch", float, defaults.speech.pitch),
        gender=_parse(speech_raw, "gender", Gender, defaults.speech.gender),
    )
    seed = raw.get("random_seed")
    word_list = raw.get("word_list")
    return Settings(
        display_mode=_parse(raw, "display_mode", DisplayMode.parse, defaults.display_mode),
        speech=speech,
        success_delay_ms=max(0, _parse(raw, "success_delay_ms", int, defaults.success_delay_ms)),
        recovery_delay_ms=max(0, _parse(raw, "recovery_delay_ms", int, defaults.recovery_delay_ms)),
        speak_key=str(raw.get("speak_key") or defaults.speak_key),
        random_seed=_parse(raw, "random_seed", int, None) if seed is not None else None,
        sfx_volume=max(0.0, min(1.0, _parse(raw, "sfx_volume", float, defaults.sfx_volume))),
        word_list=str(word_list) if word_list else None,
        demo_mode=bool(raw.get("demo_mode", defaults.demo_mode)),
        log_level=_parse(raw, "log_level", _log_level, defaults.log_level),
    )


def _log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"expected one of {', '.join(LOG_LEVELS)}")
    return level


def _parse(raw: Mapping[str, Any], key: str, convert, default):
    if key not in raw or raw[key] is None:
        return default
    try:
        return convert(raw[key])
    except (TypeError, ValueError) as e:
        logger.warning("Invalid value for %r (%r): %s; using %r", key, raw[key], e, default)
        return default
