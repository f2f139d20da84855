"""
Tests for Settings and Config
=============================
Tests for app.yaml loading (langkit/settings.py) and the typed config views
(langkit/config.py).
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langkit import config, settings
from langkit.config import GenerationConfig, SentenceConfig, TranslatorConfig


@pytest.fixture
def fresh_settings():
    """Reload settings before and after the test."""
    settings.reload_settings()
    yield
    settings.reload_settings()


CUSTOM_APP_YAML = """
generation:
  hiatus_chance: 0.9
  max_attempts: 3
  sanity_patterns: ['qqq']
sentence:
  mid_punctuation: [";"]
  end_punctuation: ["!"]
  mid_punctuation_frequency: 0.5
  min_words: 2
  max_words: 4
translator:
  letters_per_syllable: 2
  min_syllables: 1
  max_syllables: 3
  min_length: 3
  max_attempts: 4
"""


class TestGetSetting:
    """Dotted lookups into app.yaml."""

    def test_nested_value(self, fresh_settings):
        assert settings.get_setting("generation.max_attempts") == 10
        assert settings.get_setting("translator.min_length") == 2

    def test_missing_returns_default(self, fresh_settings):
        assert settings.get_setting("generation.nope", 42) == 42
        assert settings.get_setting("nope.deeper.still") is None

    def test_section_is_dict(self, fresh_settings):
        assert isinstance(settings.get_setting("sentence"), dict)

    def test_env_override(self, fresh_settings, tmp_path, monkeypatch):
        custom = tmp_path / "app.yaml"
        custom.write_text(CUSTOM_APP_YAML, encoding="utf-8")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(custom))
        settings.reload_settings()

        assert settings.config_path() == custom
        assert settings.get_setting("generation.max_attempts") == 3
        assert config.generation_config().hiatus_chance == 0.9
        assert config.translator_config().min_length == 3

    def test_missing_override_file(self, fresh_settings, tmp_path, monkeypatch):
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
        settings.reload_settings()
        with pytest.raises(FileNotFoundError):
            settings.get_setting("generation")

    def test_resolve_path(self, tmp_path):
        assert settings.resolve_path("x.yaml", base=tmp_path) == (tmp_path / "x.yaml").resolve()
        assert settings.resolve_path(str(tmp_path)) == tmp_path


class TestGenerationConfig:
    """GenerationConfig fills from settings and validates."""

    def test_defaults_from_settings(self, fresh_settings):
        cfg = GenerationConfig()
        assert cfg.max_attempts == 10
        assert 0.0 <= cfg.hiatus_chance <= 1.0
        assert len(cfg.compiled_sanity) == len(cfg.sanity_patterns)

    def test_explicit_values_win(self, fresh_settings):
        cfg = GenerationConfig(max_attempts=2, sanity_patterns=["x"])
        assert cfg.max_attempts == 2
        assert cfg.is_unpronounceable("axe")
        assert not cfg.is_unpronounceable("abe")

    def test_triple_letters_unpronounceable(self, fresh_settings):
        cfg = GenerationConfig()
        assert cfg.is_unpronounceable("baaad")
        assert not cfg.is_unpronounceable("baad")

    def test_invalid_regex(self, fresh_settings):
        with pytest.raises(ValueError, match="invalid regex"):
            GenerationConfig(sanity_patterns=["("])

    def test_bad_attempts(self, fresh_settings):
        with pytest.raises(ValueError):
            GenerationConfig(max_attempts=0)

    def test_missing_section(self, fresh_settings, tmp_path, monkeypatch):
        custom = tmp_path / "app.yaml"
        custom.write_text("sentence: {}\n", encoding="utf-8")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(custom))
        settings.reload_settings()
        with pytest.raises(ValueError, match="max_attempts"):
            GenerationConfig()


class TestSentenceConfig:

    def test_defaults(self, fresh_settings):
        cfg = SentenceConfig()
        assert cfg.min_words <= cfg.max_words
        assert cfg.end_punctuation
        assert all(isinstance(p, str) for p in cfg.mid_punctuation)


class TestTranslatorConfig:
    """Syllable count derivation for pseudo-words."""

    def test_syllables_grow_with_length(self, fresh_settings):
        cfg = TranslatorConfig(letters_per_syllable=3, min_syllables=1, max_syllables=4)
        assert cfg.syllables_for("a") == 1
        assert cfg.syllables_for("abc") == 1
        assert cfg.syllables_for("abcd") == 2
        assert cfg.syllables_for("abcdefg") == 3
        assert cfg.syllables_for("a" * 40) == 4

    def test_monotonic(self, fresh_settings):
        cfg = TranslatorConfig()
        counts = [cfg.syllables_for("x" * n) for n in range(1, 30)]
        assert counts == sorted(counts)
        assert min(counts) >= 1

    def test_bad_bounds(self, fresh_settings):
        with pytest.raises(ValueError):
            TranslatorConfig(min_syllables=3, max_syllables=2)
        with pytest.raises(ValueError):
            TranslatorConfig(letters_per_syllable=0)

    def test_singletons_cached(self, fresh_settings):
        assert config.translator_config() is config.translator_config()
        first = config.generation_config()
        config.reset_config()
        assert config.generation_config() is not first
