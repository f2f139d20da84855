#!/usr/bin/env python3
"""
Word Cipher
===========
A reversible word-for-word substitution from natural language into an
invented Language.

Every alphabetic token is replaced by a pseudo-word generated from a seed
derived from ``(base_seed, lower-cased token)``; punctuation, whitespace and
digits pass through. The two maps ``forward`` (original -> pseudo) and
``reverse`` (pseudo -> original) stay exact inverses and only ever grow.

A Translator is not thread-safe while its maps grow; guard concurrent
``cipher``/``learn_translations`` calls on one instance with a lock.

Usage:
    from langkit.translator import Translator
    from langkit.generators import ELF

    t = Translator(ELF, 41041041)
    secret = t.cipher("The room is dark.")
    t.decipher(secret, t.reverse)          # -> "The room is dark."

    vocab = t.learn_translations({}, "room")
    t.decipher(secret, vocab)              # only "room" comes back
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import yaml

from langkit.config import translator_config
from langkit.generators.entropy import MASK64, SeededRandom, hash64, word_seed
from langkit.generators.language import Language
from langkit.text import split_markup

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[^\W\d_]+")

UPPER = "upper"
TITLE = "title"
LOWER = "lower"


# =============================================================================
# Case handling
# =============================================================================

def case_pattern(token: str) -> str:
    """Classify a token as all-upper (length > 1), leading-capital, or lower."""
    if len(token) > 1 and token.isupper():
        return UPPER
    if token[:1].isupper():
        return TITLE
    return LOWER


def apply_case(word: str, pattern: str) -> str:
    if pattern == UPPER:
        return word.upper()
    if pattern == TITLE:
        return word[:1].upper() + word[1:]
    return word


def _keep_letter(ch: str) -> bool:
    # Letters whose case mapping is not one-to-one (e.g. ß -> SS) would not
    # survive an upper-case round trip.
    upper = ch.upper()
    return ch.isalpha() and len(upper) == 1 and upper.lower() == ch


def _letters(word: str) -> str:
    return "".join(ch for ch in word.lower() if _keep_letter(ch))


# =============================================================================
# Translator
# =============================================================================

class Translator:
    """
    Reversible per-word cipher backed by a Language.

    Args:
        language: Language used to invent pseudo-words
        base_seed: 64-bit seed; defaults to a hash of the language name
    """

    def __init__(self, language: Language, base_seed: Optional[int] = None):
        self.language = language
        if base_seed is None:
            base_seed = hash64(language.name)
        self.base_seed = int(base_seed) & MASK64
        self.forward: Dict[str, str] = {}
        self.reverse: Dict[str, str] = {}

    def __repr__(self):
        return (f"Translator({self.language.name!r}, base_seed={self.base_seed}, "
                f"words={len(self.forward)})")

    def __eq__(self, other):
        if not isinstance(other, Translator):
            return NotImplemented
        return (self.language == other.language
                and self.base_seed == other.base_seed
                and self.forward == other.forward)

    __hash__ = None

    # -------------------------------------------------------------------------
    # Pseudo-word generation
    # -------------------------------------------------------------------------

    def _invent(self, key: str) -> str:
        """Generate a fresh pseudo-word for ``key`` that is not yet taken."""
        cfg = translator_config()
        rng = SeededRandom(word_seed(self.base_seed, key))
        syllables = cfg.syllables_for(key)

        candidate = ""
        for attempt in range(cfg.max_attempts):
            candidate = _letters(self.language.word(rng, False, syllables))
            if len(candidate) >= cfg.min_length and candidate not in self.reverse:
                return candidate
            if candidate in self.reverse:
                logger.debug("collision for %r: %r already means %r (attempt %d)",
                             key, candidate, self.reverse[candidate], attempt + 1)

        filler = _letters(self.language.inventory.longest_letters()) or "a"
        while len(candidate) < cfg.min_length or candidate in self.reverse:
            candidate += filler
        logger.debug("extended pseudo-word for %r to %r", key, candidate)
        return candidate

    def lookup(self, word: str) -> str:
        """Pseudo-word (lower-case) for one word, inventing it on first use."""
        key = word.lower()
        pseudo = self.forward.get(key)
        if pseudo is None:
            pseudo = self._invent(key)
            self.forward[key] = pseudo
            self.reverse[pseudo] = key
            logger.debug("new entry %r -> %r", key, pseudo)
        return pseudo

    # -------------------------------------------------------------------------
    # Cipher / decipher
    # -------------------------------------------------------------------------

    def _cipher_token(self, match) -> str:
        token = match.group(0)
        return apply_case(self.lookup(token), case_pattern(token))

    def cipher(self, text: str) -> str:
        """Replace every alphabetic run with its pseudo-word, keeping case shape."""
        return TOKEN_PATTERN.sub(self._cipher_token, text)

    def cipher_markup(self, text: str) -> str:
        """Like ``cipher``, but ``[...]`` markup spans and ``[[`` are copied verbatim."""
        return "".join(
            segment if is_markup else self.cipher(segment)
            for segment, is_markup in split_markup(text)
        )

    def decipher(self, text: str, vocabulary: Optional[Dict[str, str]] = None) -> str:
        """
        Translate pseudo-words back using ``vocabulary`` (pseudo -> original).

        Tokens missing from the vocabulary are left as they are. Without a
        vocabulary the full ``reverse`` map is used.
        """
        if vocabulary is None:
            vocabulary = self.reverse

        def replace(match):
            token = match.group(0)
            original = vocabulary.get(token.lower())
            if original is None:
                return token
            return apply_case(original, case_pattern(token))

        return TOKEN_PATTERN.sub(replace, text)

    def learn_translations(self, vocabulary: Dict[str, str], *words: str) -> Dict[str, str]:
        """
        Add ``pseudo -> original`` entries for ``words`` to ``vocabulary``.

        Words not seen before are invented exactly as ``cipher`` would.
        Returns the same mapping for chaining.
        """
        for word in words:
            for match in TOKEN_PATTERN.finditer(word):
                key = match.group(0).lower()
                vocabulary[self.lookup(key)] = key
        return vocabulary

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "language": self.language.to_dict(),
            "base_seed": self.base_seed,
            "forward": dict(self.forward),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Translator":
        missing = [k for k in ("language", "base_seed") if k not in data]
        if missing:
            raise ValueError(f"translator data missing: {', '.join(missing)}")
        translator = cls(Language.from_dict(data["language"], "translator.language"),
                         int(data["base_seed"]))
        for key, pseudo in (data.get("forward") or {}).items():
            key, pseudo = str(key).lower(), str(pseudo).lower()
            if key in translator.forward:
                raise ValueError(
                    f"translator data maps {key!r} to both {translator.forward[key]!r} and {pseudo!r}"
                )
            if pseudo in translator.reverse:
                raise ValueError(
                    f"translator data maps both {translator.reverse[pseudo]!r} and {key!r} to {pseudo!r}"
                )
            translator.forward[key] = pseudo
            translator.reverse[pseudo] = key
        return translator


def save_translator(translator: Translator, path: Union[str, Path]) -> Path:
    """Write a translator (language, seed and learned words) to YAML."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(translator.to_dict(), f, allow_unicode=True, sort_keys=False)
    return path


def load_translator(path: Union[str, Path]) -> Translator:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Translator state not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return Translator.from_dict(yaml.safe_load(f) or {})


def tokens(text: str) -> Iterable[str]:
    """Alphabetic tokens of ``text``, in order."""
    return TOKEN_PATTERN.findall(text)


__all__ = [
    "Translator",
    "TOKEN_PATTERN",
    "case_pattern",
    "apply_case",
    "save_translator",
    "load_translator",
    "tokens",
]
