#!/usr/bin/env python3
"""
Text Utilities
==============
Markup stripping and line wrapping for generated text.

Markup is any ``[...]`` span without nested brackets, e.g. ``[RED]`` or
``[]``. A doubled opening bracket ``[[`` is an escape for a literal ``[``.
The Translator's ``cipher_markup`` uses the same grammar.

Usage:
    from langkit.text import strip_markup, wrap

    strip_markup("[RED]Kitten[]! [[sic]")   # -> "Kitten! [sic]"
    wrap("a long line of text", 10)
"""

import re
import textwrap
from typing import Iterator, List, Tuple

MARKUP_PATTERN = re.compile(r"\[\[|\[[^\[\]]*\]")
ESCAPED_BRACKET = "[["


def split_markup(text: str) -> Iterator[Tuple[str, bool]]:
    """
    Partition text into (segment, is_markup) pairs, in order.

    Escapes (``[[``) count as markup segments so callers can copy them through
    untouched; empty plain segments are skipped.
    """
    pos = 0
    for match in MARKUP_PATTERN.finditer(text):
        if match.start() > pos:
            yield text[pos:match.start()], False
        yield match.group(0), True
        pos = match.end()
    if pos < len(text):
        yield text[pos:], False


def strip_markup(text: str) -> str:
    """Remove markup spans; ``[[`` becomes a literal ``[``."""
    return MARKUP_PATTERN.sub(lambda m: "[" if m.group(0) == ESCAPED_BRACKET else "", text)


def wrap(text: str, width: int) -> List[str]:
    """
    Wrap text to lines of at most ``width`` characters.

    Lines break on whitespace and after hyphens; a single word longer than
    ``width`` gets a line of its own. ``width <= 0`` yields no lines.
    """
    if width <= 0 or not text:
        return []
    return textwrap.wrap(text, width, break_long_words=False, break_on_hyphens=True)


__all__ = [
    "MARKUP_PATTERN",
    "split_markup",
    "strip_markup",
    "wrap",
]
