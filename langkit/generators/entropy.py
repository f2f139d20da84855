#!/usr/bin/env python3
"""
Entropy Module for Language Generation
======================================
Deterministic randomness for phonotactic generation.

Everything a Language produces is a pure function of the random stream it is
handed, so this module provides:
- SeededRandom: a seedable stream with the ``random.Random`` surface
- hash64: a stable 64-bit hash (sha256 based, independent of PYTHONHASHSEED)
  used to derive seeds from text
- weighted_choice: proportional selection that works with any random.Random-like
  stream
"""

import hashlib
import random as _random
from typing import Any, List, Sequence, Tuple, Union

MASK64 = 0xFFFFFFFFFFFFFFFF


# =============================================================================
# Stable hashing
# =============================================================================

def hash64(*parts: Any) -> int:
    """
    Hash the given parts to an unsigned 64-bit integer.

    The result only depends on ``str()`` of each part, so it is identical
    across processes and interpreter runs.
    """
    joined = "\x1f".join(str(p) for p in parts)
    digest = hashlib.sha256(joined.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def word_seed(base_seed: int, word: str) -> int:
    """Seed for one word under a base seed."""
    return hash64(base_seed & MASK64, word)


# =============================================================================
# Weighted selection
# =============================================================================

def weighted_choice(rng, items: Sequence[Tuple[Any, float]]) -> Any:
    """
    Choose from items with weights.

    Args:
        rng: any object with a ``random()`` method returning [0.0, 1.0)
        items: sequence of (item, weight) tuples; weights need not sum to 1

    Returns:
        Randomly selected item, proportional to its weight
    """
    if not items:
        raise IndexError("Cannot choose from empty sequence")

    total = sum(w for _, w in items)
    r = rng.random() * total

    cumulative = 0.0
    for item, weight in items:
        cumulative += weight
        if r < cumulative:
            return item

    return items[-1][0]  # Float rounding can leave r == total


# =============================================================================
# Seeded Random Number Generator
# =============================================================================

class SeededRandom:
    """
    Reproducible random stream.

    Two instances built from the same seed produce the same sequence, which is
    what makes ``Language.word`` and ``Language.sentence`` repeatable.

    Usage:
        rng = SeededRandom(0xF00DF00)
        ENGLISH.word(rng, capitalize=True)
    """

    def __init__(self, seed: int = 0):
        self.seed = int(seed) & MASK64
        self._rng = _random.Random(self.seed)

    def set_seed(self, seed: int) -> None:
        """Restart the stream from a new seed."""
        self.seed = int(seed) & MASK64
        self._rng.seed(self.seed)

    def getstate(self):
        return self._rng.getstate()

    def setstate(self, state) -> None:
        self._rng.setstate(state)

    def copy(self) -> "SeededRandom":
        """Independent stream positioned where this one is."""
        twin = SeededRandom(self.seed)
        twin.setstate(self.getstate())
        return twin

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def choice(self, seq: Sequence) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return self._rng.choice(seq)

    def sample(self, population: Sequence, k: int) -> list:
        """Return k unique elements from population."""
        return self._rng.sample(list(population), k)

    def shuffle(self, seq: List) -> None:
        """Shuffle list in place."""
        self._rng.shuffle(seq)


RandomLike = Union[SeededRandom, _random.Random]


def make_rng(rng_or_seed) -> RandomLike:
    """Accept either a random stream or an integer seed."""
    if isinstance(rng_or_seed, bool):
        raise TypeError("expected a random stream or an integer seed, got bool")
    if isinstance(rng_or_seed, int):
        return SeededRandom(rng_or_seed)
    if rng_or_seed is None or not hasattr(rng_or_seed, "random"):
        raise TypeError(f"expected a random stream or an integer seed, got {rng_or_seed!r}")
    return rng_or_seed


__all__ = [
    "MASK64",
    "SeededRandom",
    "RandomLike",
    "hash64",
    "word_seed",
    "weighted_choice",
    "make_rng",
]
