#!/usr/bin/env python3
"""
Rewrite Rules
=============
Post-generation rewrite rules ("modifiers") applied to every generated word,
in list order.

Each rule is gated once per word: it either rewrites every match in the word
or leaves the word alone. A Bernoulli draw is taken for every rule, including
rules with ``chance == 1.0``, so the random stream advances the same way no
matter which rules fire.

Usage:
    from langkit.generators.modifiers import NO_DOUBLES, modifier

    soft = modifier(r"k", "c", 0.5)
    word = NO_DOUBLES.apply(rng, "tallo")   # -> "talo"
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Pattern

VOWEL_CLASS = "aeiouàáâãäåæāăąèéêëēĕėęěìíîïĩīĭįòóôõöøōŏőœùúûüũūŭůűų"


class ModifierKind(Enum):
    """Tag for a rewrite rule: one of the presets, or user supplied."""
    NO_DOUBLES = "no_doubles"
    DOUBLE_CONSONANTS = "double_consonants"
    DOUBLE_VOWELS = "double_vowels"
    LISP = "lisp"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RewriteRule:
    """
    A regex rewrite applied to whole words with probability ``chance``.

    ``replacement`` uses Python ``re.sub`` template syntax (``\\1``, ``\\g<name>``).
    Equality covers pattern, replacement and chance only.
    """
    pattern: str
    replacement: str
    chance: float = 1.0
    kind: ModifierKind = field(default=ModifierKind.CUSTOM, compare=False)
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"invalid rewrite pattern {self.pattern!r}: {e}") from e
        try:
            # The template is parsed up front, so bad group references fail here
            compiled.sub(self.replacement, "")
        except (re.error, IndexError) as e:
            raise ValueError(f"invalid replacement {self.replacement!r} for {self.pattern!r}: {e}") from e
        chance = float(self.chance)
        if not 0.0 < chance <= 1.0:
            raise ValueError(f"rewrite chance must be in (0, 1], got {self.chance}")
        object.__setattr__(self, "chance", chance)
        object.__setattr__(self, "regex", compiled)

    def apply(self, rng, word: str) -> str:
        """Rewrite every match in ``word`` if this rule fires."""
        fires = rng.random() < self.chance
        if not fires:
            return word
        return self.regex.sub(self.replacement, word)

    def to_dict(self) -> Dict[str, Any]:
        if self.kind is not ModifierKind.CUSTOM and self == preset(self.kind):
            return {"preset": self.kind.value}
        data: Dict[str, Any] = {"pattern": self.pattern, "replacement": self.replacement}
        if self.chance != 1.0:
            data["chance"] = self.chance
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RewriteRule":
        if "preset" in data:
            return preset(data["preset"])
        missing = [k for k in ("pattern", "replacement") if k not in data]
        if missing:
            raise ValueError(f"modifier {data!r} missing: {', '.join(missing)}")
        return cls(str(data["pattern"]), str(data["replacement"]), float(data.get("chance", 1.0)))


# =============================================================================
# Presets
# =============================================================================

NO_DOUBLES = RewriteRule(r"(.)\1", r"\1", 1.0, ModifierKind.NO_DOUBLES)
DOUBLE_CONSONANTS = RewriteRule(
    rf"([{VOWEL_CLASS}])([^{VOWEL_CLASS}\s'\-])(?=[{VOWEL_CLASS}])",
    r"\1\2\2", 0.4, ModifierKind.DOUBLE_CONSONANTS,
)
DOUBLE_VOWELS = RewriteRule(
    rf"([^{VOWEL_CLASS}\s'\-])([{VOWEL_CLASS}])(?=[^{VOWEL_CLASS}\s'\-])",
    r"\1\2\2", 0.4, ModifierKind.DOUBLE_VOWELS,
)
LISP = RewriteRule(r"[sśŝşšș]+|[zźżž]+", "th", 1.0, ModifierKind.LISP)

PRESETS = {
    ModifierKind.NO_DOUBLES: NO_DOUBLES,
    ModifierKind.DOUBLE_CONSONANTS: DOUBLE_CONSONANTS,
    ModifierKind.DOUBLE_VOWELS: DOUBLE_VOWELS,
    ModifierKind.LISP: LISP,
}


def preset(kind) -> RewriteRule:
    """Look up a preset rule by ``ModifierKind`` or its string value."""
    try:
        kind = ModifierKind(kind)
    except ValueError:
        names = ", ".join(k.value for k in PRESETS)
        raise ValueError(f"unknown modifier preset {kind!r}; available: {names}") from None
    if kind not in PRESETS:
        raise ValueError("custom modifiers need a pattern and replacement")
    return PRESETS[kind]


def modifier(pattern: str, replacement: str, chance: float = 1.0) -> RewriteRule:
    """Build a custom rewrite rule."""
    return RewriteRule(pattern, replacement, chance, ModifierKind.CUSTOM)


__all__ = [
    "ModifierKind",
    "RewriteRule",
    "NO_DOUBLES",
    "DOUBLE_CONSONANTS",
    "DOUBLE_VOWELS",
    "LISP",
    "PRESETS",
    "preset",
    "modifier",
]
