#!/usr/bin/env python3
"""
Terminal UI
===========
Rich-based rendering for CLI output: tables of languages, generated words,
and translator vocabularies.

Usage:
    from langkit.ui import TableView

    view = TableView()
    view.table("Words", ["#", "Word"], [(1, "Thalen"), (2, "Mirro")])
"""

import sys
from typing import Dict, Iterable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from langkit.generators.language import Language


class TableView:
    """Thin wrapper around a rich Console for the CLI."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(file=sys.stdout, highlight=False, emoji=False, soft_wrap=True)
        self.err_console = Console(file=sys.stderr, highlight=False, emoji=False)

    def table(self, title: Optional[str], headers: Sequence[str], rows: Iterable[Sequence]) -> None:
        table = Table(title=Text(title) if title else None, box=box.SIMPLE, title_justify="left")
        for i, header in enumerate(headers):
            table.add_column(str(header), justify="right" if i == 0 else "left", no_wrap=i == 0)
        for row in rows:
            table.add_row(*[Text(str(c)) for c in row])
        self.console.print(table)

    def line(self, text: str, style: Optional[str] = None) -> None:
        # Generated words may contain "[" and must not be read as rich markup
        self.console.print(text, style=style, markup=False)

    def error(self, msg: str) -> None:
        self.err_console.print(f"Error: {msg}", style="bold red", markup=False)


def language_rows(registry: Iterable, sample_seed: int = 0) -> List[tuple]:
    """Rows of (index, name, syllable range, rules, sample word)."""
    rows = []
    for i, (name, language) in enumerate(registry, 1):
        rows.append((i, name, _syllable_range(language), len(language.modifiers),
                     language.word(sample_seed, capitalize=True)))
    return rows


def vocabulary_rows(mapping: Dict[str, str]) -> List[tuple]:
    return [(i, original, pseudo) for i, (original, pseudo) in enumerate(sorted(mapping.items()), 1)]


def _syllable_range(language: Language) -> str:
    counts = [c for c, _ in language.inventory.syllable_counts]
    low, high = min(counts), max(counts)
    return str(low) if low == high else f"{low}-{high}"


__all__ = ["TableView", "language_rows", "vocabulary_rows"]
