#!/usr/bin/env python3
"""
Configuration Management
========================
Typed views over the ``generation``, ``sentence`` and ``translator`` sections
of app.yaml. Any field left as ``None`` is filled from the settings file.

Usage:
    from langkit.config import generation_config

    cfg = generation_config()
    cfg.max_attempts
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple

from langkit.settings import get_setting


def _fill_from_settings(obj, section: str, names: Tuple[str, ...]) -> None:
    cfg = get_setting(section, {}) or {}
    for name in names:
        if getattr(obj, name) is None:
            setattr(obj, name, cfg.get(name))
    missing = [name for name in names if getattr(obj, name) is None]
    if missing:
        raise ValueError(f"{section} settings missing in app.yaml: {', '.join(missing)}")


# =============================================================================
# Generation
# =============================================================================

@dataclass
class GenerationConfig:
    """Word generation parameters."""
    hiatus_chance: Optional[float] = None     # Default per-language hiatus breaking probability
    max_attempts: Optional[int] = None        # Sanity retries before accepting a candidate
    sanity_patterns: Optional[List[str]] = None

    compiled_sanity: List[Pattern] = field(default_factory=list, repr=False)

    def __post_init__(self):
        _fill_from_settings(self, "generation", ("hiatus_chance", "max_attempts", "sanity_patterns"))
        self.hiatus_chance = float(self.hiatus_chance)
        self.max_attempts = int(self.max_attempts)
        if self.max_attempts < 1:
            raise ValueError("generation.max_attempts must be at least 1")
        try:
            self.compiled_sanity = [re.compile(p) for p in self.sanity_patterns]
        except re.error as e:
            raise ValueError(f"generation.sanity_patterns contains an invalid regex: {e}") from e

    def is_unpronounceable(self, word: str) -> bool:
        """True if the word trips any sanity pattern."""
        return any(p.search(word) for p in self.compiled_sanity)


# =============================================================================
# Sentences
# =============================================================================

@dataclass
class SentenceConfig:
    """Default punctuation and length for generated sentences."""
    mid_punctuation: Optional[List[str]] = None
    end_punctuation: Optional[List[str]] = None
    mid_punctuation_frequency: Optional[float] = None
    min_words: Optional[int] = None
    max_words: Optional[int] = None

    def __post_init__(self):
        _fill_from_settings(self, "sentence", (
            "mid_punctuation", "end_punctuation", "mid_punctuation_frequency",
            "min_words", "max_words",
        ))
        self.mid_punctuation = [str(p) for p in self.mid_punctuation]
        self.end_punctuation = [str(p) for p in self.end_punctuation]
        self.mid_punctuation_frequency = float(self.mid_punctuation_frequency)
        self.min_words = int(self.min_words)
        self.max_words = int(self.max_words)


# =============================================================================
# Translator
# =============================================================================

@dataclass
class TranslatorConfig:
    """Pseudo-word shaping for the word cipher."""
    letters_per_syllable: Optional[int] = None
    min_syllables: Optional[int] = None
    max_syllables: Optional[int] = None
    min_length: Optional[int] = None     # Shortest accepted pseudo-word
    max_attempts: Optional[int] = None   # Collision retries before extending a candidate

    def __post_init__(self):
        _fill_from_settings(self, "translator", (
            "letters_per_syllable", "min_syllables", "max_syllables",
            "min_length", "max_attempts",
        ))
        self.letters_per_syllable = int(self.letters_per_syllable)
        self.min_syllables = int(self.min_syllables)
        self.max_syllables = int(self.max_syllables)
        self.min_length = int(self.min_length)
        self.max_attempts = int(self.max_attempts)
        if self.letters_per_syllable < 1:
            raise ValueError("translator.letters_per_syllable must be at least 1")
        if not 1 <= self.min_syllables <= self.max_syllables:
            raise ValueError("translator syllable bounds must satisfy 1 <= min <= max")

    def syllables_for(self, word: str) -> int:
        """Syllable count for a pseudo-word standing in for ``word``."""
        count = -(-len(word) // self.letters_per_syllable)
        return max(self.min_syllables, min(self.max_syllables, count))


# =============================================================================
# Singletons
# =============================================================================

_generation = None
_sentence = None
_translator = None


def generation_config() -> GenerationConfig:
    """Get the shared generation config."""
    global _generation
    if _generation is None:
        _generation = GenerationConfig()
    return _generation


def sentence_config() -> SentenceConfig:
    """Get the shared sentence defaults."""
    global _sentence
    if _sentence is None:
        _sentence = SentenceConfig()
    return _sentence


def translator_config() -> TranslatorConfig:
    """Get the shared translator config."""
    global _translator
    if _translator is None:
        _translator = TranslatorConfig()
    return _translator


def reset_config() -> None:
    """Forget the cached config views."""
    global _generation, _sentence, _translator
    _generation = None
    _sentence = None
    _translator = None


__all__ = [
    "GenerationConfig",
    "SentenceConfig",
    "TranslatorConfig",
    "generation_config",
    "sentence_config",
    "translator_config",
    "reset_config",
]
