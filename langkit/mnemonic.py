#!/usr/bin/env python3
"""
Mnemonic Codec
==============
Turns 64-bit numbers into 24-letter gibberish strings and back, so that
numbers that look alike become strings that don't.

A seeded shuffle picks 256 of the catalog's three-letter syllables; each
syllable then stands for one byte. Encoding writes the least significant byte
first. Different seeds give different (overlapping) syllable sets, so a string
only decodes under the seed that produced it.

Usage:
    from langkit.mnemonic import Mnemonic

    m = Mnemonic(1)
    s = m.to_mnemonic(0xDEADBEEF, capitalize=True)
    assert m.from_mnemonic(s) == 0xDEADBEEF
"""

from typing import Dict, Tuple

from langkit.generators.entropy import MASK64, SeededRandom
from langkit.generators.phonemes import load_mnemonic_syllables

SYLLABLE_COUNT = 256
SYLLABLES_PER_NUMBER = 8
MNEMONIC_LENGTH = SYLLABLES_PER_NUMBER * 3


class Mnemonic:
    """Seeded byte <-> syllable table."""

    def __init__(self, seed: int = 1):
        self.seed = int(seed) & MASK64
        catalog = list(load_mnemonic_syllables())
        if len(set(catalog)) < SYLLABLE_COUNT:
            raise ValueError(f"mnemonic catalog needs at least {SYLLABLE_COUNT} distinct syllables")
        SeededRandom(self.seed).shuffle(catalog)

        items = []
        for syllable in catalog:
            if syllable not in items:
                items.append(syllable)
            if len(items) == SYLLABLE_COUNT:
                break
        self.items: Tuple[str, ...] = tuple(items)
        self._index: Dict[str, int] = {s: i for i, s in enumerate(self.items)}

    def __eq__(self, other):
        if not isinstance(other, Mnemonic):
            return NotImplemented
        return self.items == other.items

    def __hash__(self):
        return hash(self.items)

    def to_mnemonic(self, number: int, capitalize: bool = False) -> str:
        """Encode any integer (taken modulo 2**64) as 24 letters."""
        number = int(number) & MASK64
        text = "".join(
            self.items[(number >> (8 * i)) & 0xFF] for i in range(SYLLABLES_PER_NUMBER)
        )
        if capitalize:
            text = text[0].upper() + text[1:]
        return text

    def from_mnemonic(self, mnemonic: str) -> int:
        """Decode a string made by ``to_mnemonic``; case-insensitive."""
        text = mnemonic.strip().lower()
        if len(text) != MNEMONIC_LENGTH:
            raise ValueError(f"mnemonic must be {MNEMONIC_LENGTH} letters, got {len(text)}")
        result = 0
        for i in range(SYLLABLES_PER_NUMBER):
            syllable = text[i * 3:i * 3 + 3]
            try:
                result |= self._index[syllable] << (8 * i)
            except KeyError:
                raise ValueError(f"unknown mnemonic syllable {syllable!r} at position {i}") from None
        return result


__all__ = ["Mnemonic", "MNEMONIC_LENGTH"]
