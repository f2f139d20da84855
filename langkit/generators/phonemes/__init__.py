#!/usr/bin/env python3
"""
Phoneme Configuration Loader
============================
Loads phonotactic data from the YAML files in this directory.

Usage:
    from langkit.generators.phonemes import (
        load_language_config, load_registry, load_random_catalog,
        load_accents, load_mnemonic_syllables
    )

    english = load_language_config('english')
    order = load_registry()

Language file schema (one file per built-in language)::

    name: English
    hiatus_chance: 0.3            # optional, falls back to app.yaml
    openings:        [["th", 3], ["", 5], ...]
    nuclei:          [["a", 4], ["ea", 1], ...]
    closings:        [["n", 2], ["", 6], ...]
    hiatus_breakers: [["r", 1], ...]   # optional
    syllable_counts: [[1, 3], [2, 4], [3, 1]]
    modifiers:
      - preset: no_doubles
      - {pattern: 'ti', replacement: 'chi', chance: 1.0}

Fragments are always quoted: PyYAML reads bare ``no``/``on``/``off`` as booleans.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from functools import lru_cache


# =============================================================================
# Configuration Path
# =============================================================================

PHONEMES_DIR = Path(__file__).parent

POOL_KEYS = ("openings", "nuclei", "closings", "hiatus_breakers")
REQUIRED_POOLS = ("openings", "nuclei", "closings", "syllable_counts")


# =============================================================================
# Data Classes for Typed Access
# =============================================================================

@dataclass
class LanguageConfig:
    """Declarative description of one language, as read from YAML."""
    name: str
    openings: List[Tuple[str, float]]
    nuclei: List[Tuple[str, float]]
    closings: List[Tuple[str, float]]
    hiatus_breakers: List[Tuple[str, float]]
    syllable_counts: List[Tuple[int, float]]
    hiatus_chance: Optional[float] = None
    modifiers: List[Dict[str, Any]] = field(default_factory=list)
    source: str = "<dict>"


@dataclass
class RandomCatalog:
    """Candidate fragments and size ranges for ``random_language``."""
    openings: List[str]
    nuclei: List[str]
    closings: List[str]
    hiatus_breakers: List[str]
    sizes: Dict[str, Tuple[int, int]]
    weight_range: Tuple[float, float]
    max_syllables: Tuple[int, int]
    hiatus_chance: Tuple[float, float]
    preset_chances: Dict[str, float]
    raw: Dict[str, Any]

    def candidates(self, pool: str) -> List[str]:
        return getattr(self, pool)

    def size_range(self, pool: str) -> Tuple[int, int]:
        return self.sizes[pool]


@dataclass
class AccentTable:
    """Accented variants per base letter plus letters NFD cannot decompose."""
    vowels: Dict[str, List[str]]
    consonants: Dict[str, List[str]]
    special: Dict[str, str]

    def variants(self, letter: str) -> List[str]:
        lower = letter.lower()
        options = self.vowels.get(lower) or self.consonants.get(lower) or []
        if letter != lower:
            return [o.upper() for o in options]
        return list(options)


# =============================================================================
# Parsing
# =============================================================================

def _parse_pool(raw: Any, key: str, source: str) -> List[Tuple[str, float]]:
    if not isinstance(raw, list):
        raise ValueError(f"{source}: '{key}' must be a list of [fragment, weight] pairs")
    pool = []
    for entry in raw:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"{source}: '{key}' entry {entry!r} is not a [fragment, weight] pair")
        fragment, weight = entry
        if not isinstance(fragment, str):
            raise ValueError(
                f"{source}: '{key}' fragment {fragment!r} is not a string (quote it in YAML)"
            )
        pool.append((fragment, float(weight)))
    return pool


def parse_language_config(raw: Dict[str, Any], source: str = "<dict>") -> LanguageConfig:
    """Validate the shape of a language mapping and convert it to typed form."""
    if not isinstance(raw, dict):
        raise ValueError(f"{source}: language data must be a mapping")
    missing = [k for k in REQUIRED_POOLS if k not in raw]
    if missing:
        raise ValueError(f"{source}: missing required keys: {', '.join(missing)}")

    counts = []
    for entry in raw["syllable_counts"] or []:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"{source}: syllable_counts entry {entry!r} is not a [count, weight] pair")
        counts.append((int(entry[0]), float(entry[1])))

    modifiers = raw.get("modifiers") or []
    if not isinstance(modifiers, list):
        raise ValueError(f"{source}: 'modifiers' must be a list")

    hiatus = raw.get("hiatus_chance")
    return LanguageConfig(
        name=str(raw.get("name") or source),
        openings=_parse_pool(raw["openings"], "openings", source),
        nuclei=_parse_pool(raw["nuclei"], "nuclei", source),
        closings=_parse_pool(raw["closings"], "closings", source),
        hiatus_breakers=_parse_pool(raw.get("hiatus_breakers") or [], "hiatus_breakers", source),
        syllable_counts=counts,
        hiatus_chance=None if hiatus is None else float(hiatus),
        modifiers=[dict(m) for m in modifiers],
        source=source,
    )


# =============================================================================
# Loader Functions
# =============================================================================

def _load_yaml(filename: str) -> Dict[str, Any]:
    """Load a YAML file from the phonemes directory."""
    filepath = PHONEMES_DIR / filename
    if not filepath.exists():
        raise FileNotFoundError(f"Phoneme config not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=None)
def load_language_config(key: str) -> LanguageConfig:
    """Load a built-in language by file key (e.g. ``'english'``)."""
    filename = f"{key}.yaml"
    return parse_language_config(_load_yaml(filename), filename)


@lru_cache(maxsize=1)
def load_registry() -> Tuple[str, ...]:
    """File keys of the built-in languages, in registry order."""
    raw = _load_yaml('registry.yaml')
    keys = raw.get('languages') or []
    if not keys:
        raise ValueError("registry.yaml: 'languages' must list at least one language")
    return tuple(str(k) for k in keys)


@lru_cache(maxsize=1)
def load_random_catalog() -> RandomCatalog:
    """Load the fragment catalog used for seeded random languages."""
    raw = _load_yaml('random_catalog.yaml')
    sizes = {k: tuple(int(v) for v in raw['sizes'][k]) for k in POOL_KEYS}
    for pool, (low, high) in sizes.items():
        if not 1 <= low <= high:
            raise ValueError(f"random_catalog.yaml: bad size range for {pool}: {low}..{high}")

    return RandomCatalog(
        openings=[str(f) for f in raw['openings']],
        nuclei=[str(f) for f in raw['nuclei']],
        closings=[str(f) for f in raw['closings']],
        hiatus_breakers=[str(f) for f in raw['hiatus_breakers']],
        sizes=sizes,
        weight_range=tuple(float(v) for v in raw['weight_range']),
        max_syllables=tuple(int(v) for v in raw['max_syllables']),
        hiatus_chance=tuple(float(v) for v in raw['hiatus_chance']),
        preset_chances={str(k): float(v) for k, v in (raw.get('preset_chances') or {}).items()},
        raw=raw,
    )


@lru_cache(maxsize=1)
def load_accents() -> AccentTable:
    """Load the accent variant table."""
    raw = _load_yaml('accents.yaml')
    return AccentTable(
        vowels={str(k): [str(v) for v in vs] for k, vs in raw.get('vowels', {}).items()},
        consonants={str(k): [str(v) for v in vs] for k, vs in raw.get('consonants', {}).items()},
        special={str(k): str(v) for k, v in raw.get('special', {}).items()},
    )


@lru_cache(maxsize=1)
def load_mnemonic_syllables() -> Tuple[str, ...]:
    """The fixed catalog of three-letter mnemonic syllables."""
    raw = _load_yaml('mnemonic.yaml')
    joined = "".join(str(chunk) for chunk in raw['triplets'])
    if len(joined) % 3:
        raise ValueError("mnemonic.yaml: triplet text length is not a multiple of 3")
    return tuple(joined[i:i + 3] for i in range(0, len(joined), 3))


def clear_cache():
    """Clear all cached configurations (useful for testing)."""
    load_language_config.cache_clear()
    load_registry.cache_clear()
    load_random_catalog.cache_clear()
    load_accents.cache_clear()
    load_mnemonic_syllables.cache_clear()


__all__ = [
    # Data classes
    'LanguageConfig',
    'RandomCatalog',
    'AccentTable',
    # Parsing
    'parse_language_config',
    'POOL_KEYS',
    # Loaders
    'load_language_config',
    'load_registry',
    'load_random_catalog',
    'load_accents',
    'load_mnemonic_syllables',
    'clear_cache',
    'PHONEMES_DIR',
]
