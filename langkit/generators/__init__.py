#!/usr/bin/env python3
"""
Language Generators
===================
Phonotactic word and sentence generation:
- PhonemeInventory: weighted fragment pools per syllable position
- RewriteRule: post-generation regex rewrites (presets and custom)
- Language: generation, mixing and accent transforms, built-in registry
"""

from .entropy import (
    SeededRandom,
    hash64,
    make_rng,
    weighted_choice,
)
from .inventory import (
    InventoryError,
    PhonemeInventory,
    inventories_equal,
    remove_accents,
)
from .modifiers import (
    DOUBLE_CONSONANTS,
    DOUBLE_VOWELS,
    LISP,
    NO_DOUBLES,
    ModifierKind,
    RewriteRule,
    modifier,
    preset,
)
from .language import (
    ELF,
    ENGLISH,
    FANTASY_NAME,
    FRENCH,
    GOBLIN,
    GREEK_ROMANIZED,
    INFERNAL,
    JAPANESE_ROMANIZED,
    LOVECRAFT,
    NORSE,
    REGISTERED,
    REGISTERED_NAMES,
    REGISTRY,
    RUSSIAN_ROMANIZED,
    SIMPLISH,
    SPANISH,
    SWAHILI,
    Language,
    SentenceForm,
    get_language,
    languages_equal,
    load_language,
    random_language,
    save_language,
)

__all__ = [
    # Randomness
    'SeededRandom',
    'hash64',
    'make_rng',
    'weighted_choice',
    # Inventory
    'InventoryError',
    'PhonemeInventory',
    'inventories_equal',
    'remove_accents',
    # Rewrite rules
    'ModifierKind',
    'RewriteRule',
    'NO_DOUBLES',
    'DOUBLE_CONSONANTS',
    'DOUBLE_VOWELS',
    'LISP',
    'modifier',
    'preset',
    # Languages
    'Language',
    'SentenceForm',
    'languages_equal',
    'random_language',
    'save_language',
    'load_language',
    'get_language',
    'REGISTRY',
    'REGISTERED_NAMES',
    'REGISTERED',
    'ENGLISH',
    'FRENCH',
    'SPANISH',
    'JAPANESE_ROMANIZED',
    'RUSSIAN_ROMANIZED',
    'GREEK_ROMANIZED',
    'SWAHILI',
    'NORSE',
    'LOVECRAFT',
    'FANTASY_NAME',
    'ELF',
    'GOBLIN',
    'SIMPLISH',
    'INFERNAL',
]
