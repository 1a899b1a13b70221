"""Tests for spelldrill.core.settings – YAML settings with env overrides."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from spelldrill.core.audio import Accent, Gender
from spelldrill.core.settings import (
    DEMO_ENV,
    DISPLAY_MODE_ENV,
    SETTINGS_ENV,
    Settings,
    load_settings,
)
from spelldrill.core.visibility import DisplayMode


@pytest.fixture()
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "settings.yaml"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_missing_file(self, settings_file):
        settings = load_settings(settings_file, environ={})
        assert settings == Settings()

    def test_default_values(self):
        settings = Settings()
        assert settings.display_mode is DisplayMode.HIDE_RANDOM
        assert settings.speech.accent is Accent.UK
        assert settings.speech.rate == 0.8
        assert settings.success_delay_ms == 300
        assert settings.recovery_delay_ms == 1000
        assert settings.sfx_volume == 0.7
        assert settings.demo_mode is False

    def test_empty_file(self, settings_file):
        settings_file.write_text("", encoding="utf-8")
        assert load_settings(settings_file, environ={}) == Settings()


# ---------------------------------------------------------------------------
# YAML values
# ---------------------------------------------------------------------------

class TestYamlValues:
    def test_full_file(self, settings_file):
        settings_file.write_text(
            """
display_mode: hideVowels
speech:
  accent: en-US
  rate: 1.2
  gender: female
success_delay_ms: 150
random_seed: 7
sfx_volume: 0.4
word_list: 02_travel
demo_mode: true
log_level: debug
""",
            encoding="utf-8",
        )
        settings = load_settings(settings_file, environ={})
        assert settings.display_mode is DisplayMode.HIDE_VOWELS
        assert settings.speech.accent is Accent.US
        assert settings.speech.rate == 1.2
        assert settings.speech.gender is Gender.FEMALE
        assert settings.speech.pitch == 1.0
        assert settings.success_delay_ms == 150
        assert settings.recovery_delay_ms == 1000
        assert settings.random_seed == 7
        assert settings.sfx_volume == 0.4
        assert settings.word_list == "02_travel"
        assert settings.demo_mode is True
        assert settings.log_level == "DEBUG"

    def test_bad_value_falls_back(self, settings_file, caplog):
        settings_file.write_text("display_mode: sideways\nsuccess_delay_ms: soon\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            settings = load_settings(settings_file, environ={})
        assert settings.display_mode is DisplayMode.HIDE_RANDOM
        assert settings.success_delay_ms == 300
        assert "display_mode" in caplog.text

    @pytest.mark.parametrize("value", ["BASIC_FORMAT", "loud", "5"])
    def test_unknown_log_level_falls_back(self, settings_file, caplog, value):
        settings_file.write_text(f"log_level: {value}\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            settings = load_settings(settings_file, environ={})
        assert settings.log_level == "INFO"
        assert "log_level" in caplog.text

    def test_log_level_normalised(self, settings_file):
        settings_file.write_text("log_level: ' warning '\n", encoding="utf-8")
        assert load_settings(settings_file, environ={}).log_level == "WARNING"

    def test_values_clamped(self, settings_file):
        settings_file.write_text("recovery_delay_ms: -5\nsfx_volume: 4\n", encoding="utf-8")
        settings = load_settings(settings_file, environ={})
        assert settings.recovery_delay_ms == 0
        assert settings.sfx_volume == 1.0

    def test_malformed_yaml(self, settings_file, caplog):
        settings_file.write_text("display_mode: [unclosed\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_settings(settings_file, environ={}) == Settings()
        assert "Could not load settings" in caplog.text

    def test_non_mapping(self, settings_file, caplog):
        settings_file.write_text("- a\n- b\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_settings(settings_file, environ={}) == Settings()
        assert "expected a mapping" in caplog.text

    def test_speech_not_a_mapping(self, settings_file):
        settings_file.write_text("speech: loud\n", encoding="utf-8")
        assert load_settings(settings_file, environ={}).speech == Settings().speech


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

class TestEnvironment:
    def test_settings_path_from_env(self, settings_file):
        settings_file.write_text("display_mode: full\n", encoding="utf-8")
        settings = load_settings(environ={SETTINGS_ENV: str(settings_file)})
        assert settings.display_mode is DisplayMode.FULL

    def test_display_mode_override(self, settings_file):
        settings_file.write_text("display_mode: full\n", encoding="utf-8")
        settings = load_settings(settings_file, environ={DISPLAY_MODE_ENV: "hideAll"})
        assert settings.display_mode is DisplayMode.HIDE_ALL

    @pytest.mark.parametrize("value,expected", [("1", True), ("0", False)])
    def test_demo_override(self, settings_file, value, expected):
        settings = load_settings(settings_file, environ={DEMO_ENV: value})
        assert settings.demo_mode is expected
