#!/usr/bin/env python3
"""
Langkit - Invented Language Generator & Word Cipher
===================================================

Procedurally generates pronounceable words and sentences for invented
languages, and ciphers natural-language text into them reversibly.

Quick Start
-----------
    from langkit import ELF, ENGLISH, FRENCH, Translator

    ENGLISH.word(42, capitalize=True)
    ENGLISH.mix(FRENCH, 0.4).sentence(7)

    t = Translator(ELF, 41041041)
    secret = t.cipher("The room is dark.")
    t.decipher(secret, t.reverse)

Modules
-------
    langkit.generators - Languages, inventories, rewrite rules
    langkit.translator - Reversible word cipher
    langkit.text       - Markup stripping and wrapping
    langkit.mnemonic   - Number <-> syllable-string codec
    langkit.config     - Typed settings views over configs/app.yaml

CLI Usage
---------
    python -m langkit words english -n 10
    python -m langkit cipher "The room" --language elf --seed 41041041
"""

__version__ = "0.1.0"

from .generators import *  # noqa: F401,F403
from .generators import __all__ as _generator_names
from .mnemonic import Mnemonic
from .text import strip_markup, wrap
from .translator import Translator, load_translator, save_translator

__all__ = list(_generator_names) + [
    'Mnemonic',
    'Translator',
    'load_translator',
    'save_translator',
    'strip_markup',
    'wrap',
    '__version__',
]
