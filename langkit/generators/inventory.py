#!/usr/bin/env python3
"""
Phoneme Inventory
=================
Weighted fragment pools for each syllable position, plus the syllable-count
distribution. Inventories are immutable; every transform returns a new one.

A syllable is assembled as ``opening + nucleus + closing``. Hiatus breakers are
inserted between two syllables when a vowel meets a vowel.

Usage:
    from langkit.generators.inventory import PhonemeInventory

    inv = PhonemeInventory(
        openings=(("k", 2.0), ("", 1.0)),
        nuclei=(("a", 3.0), ("o", 1.0)),
        closings=(("", 4.0), ("n", 1.0)),
        hiatus_breakers=(("'", 1.0),),
        syllable_counts=((1, 1.0), (2, 2.0)),
    )
    blended = inv.blend(other, 0.25)
"""

import unicodedata
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from .entropy import hash64
from .phonemes import load_accents

Pool = Tuple[Tuple[str, float], ...]
CountPool = Tuple[Tuple[int, float], ...]

FRAGMENT_POOLS = ("openings", "nuclei", "closings", "hiatus_breakers")
REQUIRED_POOLS = ("openings", "nuclei", "closings")
VOWELS = frozenset("aeiou")


class InventoryError(ValueError):
    """Raised when a phoneme inventory is malformed."""


# =============================================================================
# Letter helpers
# =============================================================================

def remove_accents(text: str) -> str:
    """
    Strip diacritics from text.

    Combining marks are dropped after NFD decomposition; letters that do not
    decompose (æ, ø, ß, þ, ...) go through the accent table's special map.
    """
    special = load_accents().special
    if special:
        text = "".join(special.get(ch, ch) for ch in text)
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


def is_vowel(ch: str) -> bool:
    """True for a, e, i, o, u and their accented forms (either case)."""
    if not ch:
        return False
    base = remove_accents(ch)
    return bool(base) and base[0].lower() in VOWELS


def _merge(entries: Iterable[Tuple[object, float]]) -> tuple:
    """Sum weights of duplicate keys, keep first-seen order, drop zeros."""
    merged: Dict[object, float] = {}
    for key, weight in entries:
        merged[key] = merged.get(key, 0.0) + weight
    return tuple((k, w) for k, w in merged.items() if w > 0.0)


def _as_pool(entries, name: str) -> Pool:
    pool = []
    for entry in entries:
        try:
            fragment, weight = entry
        except (TypeError, ValueError):
            raise InventoryError(f"{name}: entry {entry!r} is not a (fragment, weight) pair") from None
        if not isinstance(fragment, str):
            raise InventoryError(f"{name}: fragment {fragment!r} is not a string")
        pool.append((fragment, float(weight)))
    return tuple(pool)


# =============================================================================
# Inventory
# =============================================================================

@dataclass(frozen=True, eq=False)
class PhonemeInventory:
    """Immutable weighted phoneme pools."""
    openings: Pool
    nuclei: Pool
    closings: Pool
    hiatus_breakers: Pool = ()
    syllable_counts: CountPool = ((1, 1.0),)

    def __post_init__(self):
        for name in FRAGMENT_POOLS:
            object.__setattr__(self, name, _as_pool(getattr(self, name), name))

        counts = []
        for entry in self.syllable_counts:
            try:
                count, weight = entry
            except (TypeError, ValueError):
                raise InventoryError(f"syllable_counts: entry {entry!r} is not a (count, weight) pair") from None
            if isinstance(count, bool) or int(count) != count or count < 1:
                raise InventoryError(f"syllable_counts: count {count!r} must be a positive integer")
            counts.append((int(count), float(weight)))
        object.__setattr__(self, "syllable_counts", tuple(counts))

        self._validate()

    def _validate(self) -> None:
        for name in REQUIRED_POOLS + ("syllable_counts",):
            if not getattr(self, name):
                raise InventoryError(f"{name} pool is empty")
        for name in FRAGMENT_POOLS + ("syllable_counts",):
            for key, weight in getattr(self, name):
                if not weight > 0.0:
                    raise InventoryError(f"{name}: weight for {key!r} must be positive, got {weight}")
        if not any(ch.isalpha() for name in REQUIRED_POOLS
                   for fragment, _ in getattr(self, name) for ch in fragment):
            raise InventoryError("inventory contains no letters")

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def pool(self, name: str) -> Pool:
        return getattr(self, name)

    def longest_letters(self) -> str:
        """Longest run of letters found in any fragment, lower-cased."""
        best = ""
        for name in FRAGMENT_POOLS:
            for fragment, _ in getattr(self, name):
                letters = "".join(ch for ch in fragment if ch.isalpha()).lower()
                if len(letters) > len(best):
                    best = letters
        return best

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def blend(self, other: "PhonemeInventory", weight: float) -> "PhonemeInventory":
        """
        Linear blend: self scaled by ``1 - weight``, other by ``weight``.

        Fragments present on both sides sum into one entry at the position of
        their first appearance. Entries whose weight scales to zero are dropped.
        """
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"blend weight must be in [0, 1], got {weight}")
        mine = 1.0 - weight

        def mix(a: Sequence, b: Sequence) -> tuple:
            return _merge([(k, w * mine) for k, w in a] + [(k, w * weight) for k, w in b])

        return PhonemeInventory(
            openings=mix(self.openings, other.openings),
            nuclei=mix(self.nuclei, other.nuclei),
            closings=mix(self.closings, other.closings),
            hiatus_breakers=mix(self.hiatus_breakers, other.hiatus_breakers),
            syllable_counts=mix(self.syllable_counts, other.syllable_counts),
        )

    def with_accents(self, vowel_strength: float, consonant_strength: float) -> "PhonemeInventory":
        """
        Add accented variants next to the original fragments.

        A fragment with an accentable vowel gains one variant weighted
        ``weight * vowel_strength``; one with an accentable consonant gains one
        weighted ``weight * consonant_strength``. Which letter and which accent
        is chosen is a fixed function of the pool and fragment.
        """
        if vowel_strength < 0 or consonant_strength < 0:
            raise ValueError("accent strengths must be non-negative")
        table = load_accents()

        def accent(pool_name: str, fragment: str, kind: str, letters: Dict[str, List[str]]) -> str:
            spots = [i for i, ch in enumerate(fragment) if ch.lower() in letters]
            if not spots:
                return ""
            h = hash64(pool_name, kind, fragment)
            i = spots[h % len(spots)]
            options = table.variants(fragment[i])
            return fragment[:i] + options[(h >> 16) % len(options)] + fragment[i + 1:]

        changes = {}
        for name in FRAGMENT_POOLS:
            entries: List[Tuple[str, float]] = []
            for fragment, weight in getattr(self, name):
                entries.append((fragment, weight))
                for kind, letters, strength in (("vowel", table.vowels, vowel_strength),
                                          ("consonant", table.consonants, consonant_strength)):
                    variant = accent(name, fragment, kind, letters)
                    if variant and strength > 0.0:
                        entries.append((variant, weight * strength))
            changes[name] = _merge(entries)
        return replace(self, **changes)

    def without_accents(self) -> "PhonemeInventory":
        """Strip diacritics from every fragment, merging fragments that collide."""
        changes = {
            name: _merge((remove_accents(f), w) for f, w in getattr(self, name))
            for name in FRAGMENT_POOLS
        }
        return replace(self, **changes)

    # -------------------------------------------------------------------------
    # Equality / serialization
    # -------------------------------------------------------------------------

    def structural_key(self) -> tuple:
        return (self.openings, self.nuclei, self.closings,
                self.hiatus_breakers, self.syllable_counts)

    def __eq__(self, other):
        if not isinstance(other, PhonemeInventory):
            return NotImplemented
        return inventories_equal(self, other)

    def __hash__(self):
        return hash(self.structural_key())

    def to_dict(self) -> dict:
        data = {name: [[f, w] for f, w in getattr(self, name)] for name in FRAGMENT_POOLS}
        data["syllable_counts"] = [[c, w] for c, w in self.syllable_counts]
        return data


def inventories_equal(a: PhonemeInventory, b: PhonemeInventory) -> bool:
    """Deep equality: every pool, every (fragment, weight) pair, in order."""
    return a.structural_key() == b.structural_key()


__all__ = [
    "PhonemeInventory",
    "InventoryError",
    "inventories_equal",
    "remove_accents",
    "is_vowel",
    "FRAGMENT_POOLS",
    "VOWELS",
]
