#!/usr/bin/env python3
"""
Language Generator
==================
Pronounceable invented words and sentences from a phonotactic description.

A Language bundles a PhonemeInventory, an ordered list of rewrite rules, a
hiatus-breaking probability and a display name. Languages are immutable values:
``mix``, ``add_accents``, ``remove_accents`` and friends return new Languages.

Everything generated is a pure function of the random stream handed in, so
the same Language with the same seed always produces the same text.

Usage:
    from langkit.generators.language import ENGLISH, FRENCH, random_language

    ENGLISH.word(0xBEEF, capitalize=True)
    ENGLISH.mix(FRENCH.remove_accents(), 0.5).sentence(42, 5, 9)
    random_language(1234).mix_all(0.375, (ELF, 0.25), (GOBLIN, 0.375))
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import yaml

from langkit.config import generation_config, sentence_config
from langkit.settings import get_setting
from .entropy import MASK64, SeededRandom, make_rng, weighted_choice
from .inventory import FRAGMENT_POOLS, InventoryError, PhonemeInventory, is_vowel
from .modifiers import PRESETS, ModifierKind, RewriteRule
from .phonemes import (
    LanguageConfig,
    load_language_config,
    load_random_catalog,
    load_registry,
    parse_language_config,
)

logger = logging.getLogger(__name__)


def _share(value: float) -> str:
    """Format a blend share as a percentage for derived names."""
    return f"{round(value * 100, 2):g}%"


def _blend_rules(mine: Sequence[RewriteRule], theirs: Sequence[RewriteRule],
                 weight: float) -> Tuple[RewriteRule, ...]:
    """
    Blend two rule lists.

    Chances are scaled by each side's share; a rule on both sides (same
    pattern and replacement) sums its scaled chances, capped at 1.0. Rules that
    scale to zero are dropped. Order is first appearance, ``mine`` first.
    """
    merged: Dict[Tuple[str, str], List] = {}
    for rules, factor in ((mine, 1.0 - weight), (theirs, weight)):
        for rule in rules:
            key = (rule.pattern, rule.replacement)
            if key in merged:
                merged[key][1] += rule.chance * factor
            else:
                merged[key] = [rule, rule.chance * factor]
    return tuple(
        RewriteRule(rule.pattern, rule.replacement, min(1.0, chance), rule.kind)
        for rule, chance in merged.values() if chance > 0.0
    )


# =============================================================================
# Language
# =============================================================================

@dataclass(frozen=True, eq=False)
class Language:
    """
    An immutable phonotactic description that can generate words and sentences.

    ``hiatus_chance`` left as ``None`` takes ``generation.hiatus_chance`` from
    app.yaml at construction time.
    """
    name: str
    inventory: PhonemeInventory
    modifiers: Tuple[RewriteRule, ...] = ()
    hiatus_chance: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "modifiers", tuple(self.modifiers))
        for rule in self.modifiers:
            if not isinstance(rule, RewriteRule):
                raise TypeError(f"modifiers must be RewriteRule instances, got {rule!r}")
        chance = self.hiatus_chance
        if chance is None:
            chance = generation_config().hiatus_chance
        chance = float(chance)
        if not 0.0 <= chance <= 1.0:
            raise InventoryError(f"hiatus_chance must be in [0, 1], got {chance}")
        object.__setattr__(self, "hiatus_chance", chance)

    # -------------------------------------------------------------------------
    # Equality
    # -------------------------------------------------------------------------

    def structural_key(self) -> tuple:
        rules = tuple((r.pattern, r.replacement, r.chance) for r in self.modifiers)
        return (self.name, self.hiatus_chance, self.inventory.structural_key(), rules)

    def __eq__(self, other):
        if not isinstance(other, Language):
            return NotImplemented
        return languages_equal(self, other)

    def __hash__(self):
        return hash(self.structural_key())

    def __repr__(self):
        return f"Language({self.name!r})"

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _raw_word(self, rng, syllable_count: Optional[int]) -> str:
        inv = self.inventory
        count = syllable_count
        if count is None:
            count = weighted_choice(rng, inv.syllable_counts)

        word = ""
        for i in range(count):
            syllable = (weighted_choice(rng, inv.openings)
                        + weighted_choice(rng, inv.nuclei)
                        + weighted_choice(rng, inv.closings))
            if (i > 0 and inv.hiatus_breakers and word and syllable
                    and is_vowel(word[-1]) and is_vowel(syllable[0])):
                if rng.random() < self.hiatus_chance:
                    word += weighted_choice(rng, inv.hiatus_breakers)
            word += syllable
        return word

    def _apply_modifiers(self, rng, word: str) -> str:
        for rule in self.modifiers:
            word = rule.apply(rng, word)
        return word

    def word(self, rng, capitalize: bool = False, syllable_count: Optional[int] = None) -> str:
        """
        Generate one word.

        Args:
            rng: random stream (``random.Random``-like) or an integer seed
            capitalize: upper-case the first letter
            syllable_count: fixed syllable count; sampled from the language
                when omitted

        Candidates tripping a sanity pattern are regenerated up to
        ``generation.max_attempts`` times, after which the last one is kept.
        """
        if syllable_count is not None and syllable_count < 1:
            raise ValueError(f"syllable_count must be at least 1, got {syllable_count}")
        rng = make_rng(rng)
        cfg = generation_config()

        candidate = ""
        for _ in range(cfg.max_attempts):
            candidate = self._apply_modifiers(rng, self._raw_word(rng, syllable_count))
            if not cfg.is_unpronounceable(candidate):
                break
        else:
            logger.debug("%s: accepting %r after %d attempts", self.name, candidate, cfg.max_attempts)

        if capitalize:
            candidate = _capitalize(candidate)
        return candidate

    def sentence(self, rng, min_words: Optional[int] = None, max_words: Optional[int] = None,
                 mid_punctuation: Optional[Sequence[str]] = None,
                 end_punctuation: Optional[Sequence[str]] = None,
                 mid_punctuation_frequency: Optional[float] = None) -> str:
        """
        Generate a sentence of ``min_words`` to ``max_words`` words.

        The first word is capitalized. A mid-sentence mark may follow any word
        but the last, never two words in a row; one end mark always closes
        the sentence. Omitted arguments come from the ``sentence`` settings.
        """
        defaults = sentence_config()
        min_words = defaults.min_words if min_words is None else min_words
        max_words = max(defaults.max_words, min_words) if max_words is None else max_words
        mid = defaults.mid_punctuation if mid_punctuation is None else list(mid_punctuation)
        end = defaults.end_punctuation if end_punctuation is None else list(end_punctuation)
        frequency = (defaults.mid_punctuation_frequency
                     if mid_punctuation_frequency is None else mid_punctuation_frequency)

        if min_words < 1:
            raise ValueError(f"min_words must be at least 1, got {min_words}")
        if max_words < min_words:
            raise ValueError(f"max_words ({max_words}) must be >= min_words ({min_words})")
        if not end:
            raise ValueError("end_punctuation must not be empty")
        if not 0.0 <= frequency <= 1.0:
            raise ValueError(f"mid_punctuation_frequency must be in [0, 1], got {frequency}")

        rng = make_rng(rng)
        count = rng.randint(min_words, max_words)
        words = []
        marked = False
        for i in range(count):
            text = self.word(rng, capitalize=(i == 0))
            if i < count - 1 and mid and not marked and rng.random() < frequency:
                text += rng.choice(mid)
                marked = True
            else:
                marked = False
            words.append(text)
        return " ".join(words) + rng.choice(end)

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------

    def _blend(self, other: "Language", weight: float, name: str) -> "Language":
        return Language(
            name=name,
            inventory=self.inventory.blend(other.inventory, weight),
            modifiers=_blend_rules(self.modifiers, other.modifiers, weight),
            hiatus_chance=self.hiatus_chance * (1.0 - weight) + other.hiatus_chance * weight,
        )

    def mix(self, other: "Language", weight: float) -> "Language":
        """Blend with ``other``; ``weight`` is other's share in [0, 1]."""
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"mix weight must be in [0, 1], got {weight}")
        name = f"{self.name} {_share(1.0 - weight)}, {other.name} {_share(weight)}"
        return self._blend(other, weight, name)

    def mix_all(self, self_weight: float, *pairs: Tuple["Language", float]) -> "Language":
        """
        Blend this language with several others in one go.

        Weights are relative (normalized over ``self_weight`` plus every pair)
        and the blend is a left-to-right fold: each step mixes in the next
        language at ``w_i / (running total)``. Order matters.

        Usage:
            ENGLISH.mix_all(2, (FRENCH, 1), (SPANISH, 1))   # 50% / 25% / 25%
        """
        weights = [float(self_weight)] + [float(w) for _, w in pairs]
        if any(w < 0.0 for w in weights):
            raise ValueError("mix_all weights must be non-negative")
        total = sum(weights)
        if total <= 0.0:
            raise ValueError("mix_all weights must not all be zero")

        current = self
        running = weights[0]
        for (language, w) in pairs:
            w = float(w)
            running += w
            if running <= 0.0:
                continue
            current = current._blend(language, w / running, current.name)

        parts = [(self, weights[0])] + [(lang, float(w)) for lang, w in pairs]
        name = ", ".join(f"{lang.name} {_share(w / total)}" for lang, w in parts if w > 0.0)
        return current.renamed(name)

    def renamed(self, name: str) -> "Language":
        return Language(name, self.inventory, self.modifiers, self.hiatus_chance)

    def add_accents(self, vowel_strength: Optional[float] = None,
                    consonant_strength: Optional[float] = None) -> "Language":
        """Copy with accented variants added (strengths default to app.yaml)."""
        if vowel_strength is None:
            vowel_strength = float(get_setting("accents.vowel_strength", 0.5))
        if consonant_strength is None:
            consonant_strength = float(get_setting("accents.consonant_strength", 0.15))
        return Language(
            f"{self.name} with Accents",
            self.inventory.with_accents(vowel_strength, consonant_strength),
            self.modifiers,
            self.hiatus_chance,
        )

    def remove_accents(self) -> "Language":
        """Copy with every fragment stripped of diacritics."""
        return Language(f"{self.name} without Accents", self.inventory.without_accents(),
                        self.modifiers, self.hiatus_chance)

    def add_modifiers(self, *rules: Union[RewriteRule, Iterable[RewriteRule]]) -> "Language":
        """Copy with extra rewrite rules appended after the existing ones."""
        extra: List[RewriteRule] = []
        for rule in rules:
            if isinstance(rule, RewriteRule):
                extra.append(rule)
            else:
                extra.extend(rule)
        return Language(f"{self.name} (Modified)", self.inventory,
                        self.modifiers + tuple(extra), self.hiatus_chance)

    def remove_modifiers(self) -> "Language":
        """Copy without any rewrite rules."""
        return Language(self.name, self.inventory, (), self.hiatus_chance)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        data = {"name": self.name, "hiatus_chance": self.hiatus_chance}
        data.update(self.inventory.to_dict())
        data["modifiers"] = [rule.to_dict() for rule in self.modifiers]
        return data

    @classmethod
    def from_dict(cls, data: dict, source: str = "<dict>") -> "Language":
        return _from_config(parse_language_config(data, source))


def _capitalize(word: str) -> str:
    for i, ch in enumerate(word):
        if ch.isalpha():
            return word[:i] + ch.upper() + word[i + 1:]
    return word


def languages_equal(a: Language, b: Language) -> bool:
    """
    Structural equality: name, hiatus chance, every inventory pool entry in
    order, and every rule's pattern, replacement and chance in order.
    """
    return a.structural_key() == b.structural_key()


def _from_config(cfg: LanguageConfig) -> Language:
    try:
        inventory = PhonemeInventory(
            openings=cfg.openings,
            nuclei=cfg.nuclei,
            closings=cfg.closings,
            hiatus_breakers=cfg.hiatus_breakers,
            syllable_counts=cfg.syllable_counts,
        )
        return Language(
            name=cfg.name,
            inventory=inventory,
            modifiers=tuple(RewriteRule.from_dict(m) for m in cfg.modifiers),
            hiatus_chance=cfg.hiatus_chance,
        )
    except InventoryError as e:
        raise InventoryError(f"{cfg.source}: {e}") from e


def save_language(language: Language, path: Union[str, Path]) -> Path:
    """Write a language to YAML in the built-in file schema."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(language.to_dict(), f, allow_unicode=True, sort_keys=False)
    return path


def load_language(path: Union[str, Path]) -> Language:
    """Read a language YAML file written by ``save_language`` (or by hand)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Language file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return Language.from_dict(data, str(path))


# =============================================================================
# Sentence forms
# =============================================================================

@dataclass(frozen=True)
class SentenceForm:
    """A reusable sentence style for one language."""
    language: Language
    min_words: Optional[int] = None
    max_words: Optional[int] = None
    mid_punctuation: Optional[Tuple[str, ...]] = None
    end_punctuation: Optional[Tuple[str, ...]] = None
    mid_punctuation_frequency: Optional[float] = None

    def __post_init__(self):
        defaults = sentence_config()
        for name in ("min_words", "max_words", "mid_punctuation_frequency"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, getattr(defaults, name))
        for name in ("mid_punctuation", "end_punctuation"):
            value = getattr(self, name)
            object.__setattr__(self, name, tuple(getattr(defaults, name) if value is None else value))
        if self.min_words < 1 or self.max_words < self.min_words:
            raise ValueError(f"bad word range {self.min_words}..{self.max_words}")
        if not self.end_punctuation:
            raise ValueError("end_punctuation must not be empty")

    def sentence(self, rng) -> str:
        return self.language.sentence(
            rng, self.min_words, self.max_words,
            self.mid_punctuation, self.end_punctuation, self.mid_punctuation_frequency,
        )


# =============================================================================
# Random languages
# =============================================================================

def random_language(seed: int) -> Language:
    """
    Build a language from the fragment catalog, driven only by ``seed``.

    The same seed always yields an equal Language.
    """
    seed = int(seed) & MASK64
    rng = SeededRandom(seed)
    catalog = load_random_catalog()
    low_w, high_w = catalog.weight_range

    def weight() -> float:
        return round(rng.uniform(low_w, high_w), 3)

    pools = {}
    for name in FRAGMENT_POOLS:
        candidates = catalog.candidates(name)
        low, high = catalog.size_range(name)
        size = min(rng.randint(low, high), len(candidates))
        entries = [(fragment, weight()) for fragment in rng.sample(candidates, size)]
        if name in ("openings", "closings"):
            entries.append(("", weight()))
        pools[name] = tuple(entries)

    longest = rng.randint(*catalog.max_syllables)
    counts = tuple((n, weight()) for n in range(1, longest + 1))
    hiatus = round(rng.uniform(*catalog.hiatus_chance), 3)

    rules = []
    for preset_name, chance in catalog.preset_chances.items():
        if rng.random() < chance:
            rules.append(PRESETS[ModifierKind(preset_name)])

    return Language(
        name=f"Random Language {seed:016X}",
        inventory=PhonemeInventory(syllable_counts=counts, **pools),
        modifiers=tuple(rules),
        hiatus_chance=hiatus,
    )


# =============================================================================
# Built-in registry
# =============================================================================

@lru_cache(maxsize=None)
def builtin_language(key: str) -> Language:
    """Load a built-in language by its data file key."""
    return _from_config(load_language_config(key))


def _normalize(name: str) -> str:
    return " ".join(name.replace("_", " ").replace("-", " ").lower().split())


REGISTRY: Tuple[Tuple[str, Language], ...] = tuple(
    (builtin_language(key).name, builtin_language(key)) for key in load_registry()
)
REGISTERED_NAMES: Tuple[str, ...] = tuple(name for name, _ in REGISTRY)
REGISTERED: Tuple[Language, ...] = tuple(lang for _, lang in REGISTRY)

ENGLISH = builtin_language("english")
FRENCH = builtin_language("french")
SPANISH = builtin_language("spanish")
JAPANESE_ROMANIZED = builtin_language("japanese_romanized")
RUSSIAN_ROMANIZED = builtin_language("russian_romanized")
GREEK_ROMANIZED = builtin_language("greek_romanized")
SWAHILI = builtin_language("swahili")
NORSE = builtin_language("norse")
LOVECRAFT = builtin_language("lovecraft")
FANTASY_NAME = builtin_language("fantasy_name")
ELF = builtin_language("elf")
GOBLIN = builtin_language("goblin")
SIMPLISH = builtin_language("simplish")
INFERNAL = builtin_language("infernal")


def get_language(name: str) -> Language:
    """
    Look up a built-in language by display name or file key.

    Matching ignores case, and treats ``_``/``-`` like spaces.
    """
    wanted = _normalize(name)
    for key, (display, language) in zip(load_registry(), REGISTRY):
        if wanted in (_normalize(display), _normalize(key)):
            return language
    raise ValueError(f"Unknown language {name!r}. Available: {', '.join(REGISTERED_NAMES)}")


__all__ = [
    "Language",
    "SentenceForm",
    "languages_equal",
    "random_language",
    "save_language",
    "load_language",
    "builtin_language",
    "get_language",
    "REGISTRY",
    "REGISTERED_NAMES",
    "REGISTERED",
    "ENGLISH",
    "FRENCH",
    "SPANISH",
    "JAPANESE_ROMANIZED",
    "RUSSIAN_ROMANIZED",
    "GREEK_ROMANIZED",
    "SWAHILI",
    "NORSE",
    "LOVECRAFT",
    "FANTASY_NAME",
    "ELF",
    "GOBLIN",
    "SIMPLISH",
    "INFERNAL",
]
