"""Unit tests for configuration loading and rate clamping.

RULES:
- Environment overrides are read at import time, so tests reload the module
- The reload fixture restores the module after each test
"""

import importlib
import math

import pytest

import speedread.config as config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload speedread.config under a patched environment, then restore it."""
    # Keep a stray .env from leaking into these tests
    monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)

    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestClampWpm:
    """clamp_wpm() rounds and clamps any number into the supported rate range."""

    @pytest.mark.parametrize(
        "value,expected",
        [(300, 300), (60, 60), (1500, 1500), (59, 60), (0, 60), (-5, 60),
         (1501, 1500), (10 ** 9, 1500), (299.6, 300), (math.inf, 1500),
         (-math.inf, 60), (math.nan, 60)],
    )
    def test_clamps(self, value, expected):
        assert config.clamp_wpm(value) == expected

    def test_returns_int(self):
        assert isinstance(config.clamp_wpm(250.4), int)


class TestEnvironmentOverrides:
    """SPEEDREAD_* environment variables override the defaults at import."""

    def test_default_wpm_override(self, reload_config):
        cfg = reload_config(SPEEDREAD_DEFAULT_WPM="450")
        assert cfg.DEFAULT_WPM == 450

    def test_default_wpm_override_is_clamped(self, reload_config):
        cfg = reload_config(SPEEDREAD_DEFAULT_WPM="5")
        assert cfg.DEFAULT_WPM == cfg.MIN_WPM

    def test_invalid_wpm_raises(self, reload_config):
        with pytest.raises(ValueError, match="SPEEDREAD_DEFAULT_WPM"):
            reload_config(SPEEDREAD_DEFAULT_WPM="fast")

    def test_blank_override_uses_default(self, reload_config):
        cfg = reload_config(SPEEDREAD_DEFAULT_WPM="  ")
        assert cfg.DEFAULT_WPM == 300

    def test_font_size_override_is_clamped(self, reload_config):
        cfg = reload_config(SPEEDREAD_FONT_SIZE="500")
        assert cfg.DEFAULT_FONT_SIZE == cfg.MAX_FONT_SIZE

    def test_dark_mode_override(self, reload_config):
        cfg = reload_config(SPEEDREAD_DARK_MODE="false")
        assert cfg.DEFAULT_DARK_MODE is False


class TestConstants:
    """Pacing constants and the sample text."""

    def test_pause_punctuation(self):
        assert config.PAUSE_PUNCTUATION == frozenset(".,;!?")

    def test_sample_text_has_words(self):
        assert len(config.SAMPLE_TEXT.split()) > 20
