#!/usr/bin/env python3
"""
Langkit CLI
===========
Command-line interface for invented-language generation and the word cipher.

Usage:
    langkit languages
    langkit words english -n 10 --seed 42
    langkit sentences elf -n 3 --seed 7
    langkit mix english:0.5 french:0.5 -n 5
    langkit cipher "The room is dark." --language elf --seed 41041041 --state vocab.yaml
    langkit decipher "Nai hírë ..." --state vocab.yaml --learn room
    langkit mnemonic 123456789
"""

import argparse
import logging
import sys
from pathlib import Path

from langkit import __version__

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        from langkit.ui import TableView
        self.quiet = quiet
        self.view = TableView()

    def print(self, text: str = "", style: str = None):
        """Non-essential output (headings, notes); silenced by --quiet."""
        if not self.quiet:
            self.view.line(text, style=style)

    def result(self, text: str):
        """Command output proper; always printed."""
        self.view.line(text)

    def error(self, msg: str):
        self.view.error(msg)

    def table(self, title: str, headers: list, rows: list):
        if self.quiet:
            for row in rows:
                self.view.line("\t".join(str(c) for c in row[1:]))
            return
        self.view.table(title, headers, rows)


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger from the ``logging`` section of app.yaml."""
    from langkit.settings import get_setting

    level_name = "DEBUG" if verbose else str(get_setting("logging.level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)
    fmt = get_setting("logging.format", "%(levelname)s %(name)s: %(message)s")
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr)


def seed_value(text: str) -> int:
    """Parse a seed given in decimal or with a 0x/0o/0b prefix."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {text!r}") from None


def parse_weighted(text: str):
    """Parse ``LANGUAGE:WEIGHT`` (weight defaults to 1)."""
    name, sep, weight = text.rpartition(":")
    if not sep or name.lower() == "random":
        return text, 1.0
    try:
        return name, float(weight)
    except ValueError:
        # A colon inside the language spec itself, e.g. random:42
        return text, 1.0


def resolve_language(spec: str):
    """
    Resolve a language argument.

    Accepts a built-in name (``english``, ``"Japanese Romanized"``),
    ``random:SEED``, or the path of a language YAML file.
    """
    from langkit.generators.language import get_language, load_language, random_language

    if spec.lower().startswith("random:"):
        return random_language(seed_value(spec.split(":", 1)[1]))
    path = Path(spec)
    if path.suffix.lower() in (".yaml", ".yml"):
        return load_language(path)
    return get_language(spec)


def read_text(value: str) -> str:
    """Positional text argument; ``-`` reads stdin."""
    if value == "-":
        return sys.stdin.read()
    return value


# =============================================================================
# Commands
# =============================================================================

def cmd_languages(args, out: Output):
    """List built-in languages."""
    from langkit.generators.language import REGISTRY
    from langkit.ui import language_rows

    out.table("Built-in languages", ["#", "Name", "Syllables", "Rules", "Sample"],
              language_rows(REGISTRY, args.seed))
    return 0


def cmd_words(args, out: Output):
    """Generate words."""
    from langkit.generators.entropy import SeededRandom

    language = resolve_language(args.language)
    rng = SeededRandom(args.seed)
    out.print(f"{language.name} (seed {args.seed})", style="bold")
    for _ in range(args.count):
        out.result(language.word(rng, capitalize=args.capitalize, syllable_count=args.syllables))
    return 0


def cmd_sentences(args, out: Output):
    """Generate sentences."""
    from langkit.generators.entropy import SeededRandom
    from langkit.text import wrap

    language = resolve_language(args.language)
    rng = SeededRandom(args.seed)
    out.print(f"{language.name} (seed {args.seed})", style="bold")
    for _ in range(args.count):
        sentence = language.sentence(rng, args.min_words, args.max_words)
        if args.width:
            for line in wrap(sentence, args.width):
                out.result(line)
        else:
            out.result(sentence)
    return 0


def _show_language(language, args, out: Output):
    from langkit.generators.entropy import SeededRandom
    from langkit.generators.language import save_language

    out.print(language.name, style="bold")
    rng = SeededRandom(args.seed)
    for _ in range(args.count):
        out.result(language.word(rng, capitalize=True))
    if args.save:
        path = save_language(language, args.save)
        out.print(f"Saved to {path}")


def cmd_random(args, out: Output):
    """Build a seeded random language."""
    from langkit.generators.language import random_language

    _show_language(random_language(args.language_seed), args, out)
    return 0


def cmd_mix(args, out: Output):
    """Blend languages."""
    pairs = [parse_weighted(p) for p in args.parts]
    first_spec, first_weight = pairs[0]
    base = resolve_language(first_spec)
    rest = [(resolve_language(spec), weight) for spec, weight in pairs[1:]]
    language = base.mix_all(first_weight, *rest) if rest else base
    if args.accents:
        language = language.add_accents()
    if args.strip_accents:
        language = language.remove_accents()
    _show_language(language, args, out)
    return 0


def _translator(args):
    """Translator from --state if the file exists, else from --language/--seed."""
    from langkit.generators.entropy import MASK64
    from langkit.translator import Translator, load_translator

    state = Path(args.state) if args.state else None
    if state is None or not state.exists():
        return Translator(resolve_language(args.language or "english"), args.seed)

    translator = load_translator(state)
    if args.language and resolve_language(args.language) != translator.language:
        raise ValueError(
            f"{state} was written for {translator.language.name!r}, not {args.language!r}"
        )
    if args.seed is not None and args.seed & MASK64 != translator.base_seed:
        raise ValueError(
            f"{state} was written with seed {translator.base_seed}, not {args.seed}"
        )
    return translator


def cmd_cipher(args, out: Output):
    """Cipher text into an invented language."""
    from langkit.translator import save_translator

    translator = _translator(args)
    text = read_text(args.text)
    result = translator.cipher_markup(text) if args.markup else translator.cipher(text)
    out.result(result)
    if args.state:
        save_translator(translator, args.state)
        out.print(f"Saved {len(translator.forward)} words to {args.state}")
    return 0


def cmd_decipher(args, out: Output):
    """Decipher text with the full vocabulary or a partial one."""
    from langkit.translator import load_translator

    translator = load_translator(args.state)
    if args.learn:
        words = [w.strip() for w in args.learn.split(",") if w.strip()]
        vocabulary = translator.learn_translations({}, *words)
    else:
        vocabulary = translator.reverse
    out.result(translator.decipher(read_text(args.text), vocabulary))
    return 0


def cmd_vocab(args, out: Output):
    """Show a saved translator's vocabulary."""
    from langkit.translator import load_translator
    from langkit.ui import vocabulary_rows

    translator = load_translator(args.state)
    out.table(f"{translator.language.name} (seed {translator.base_seed})",
              ["#", "Word", "Cipher"], vocabulary_rows(translator.forward))
    return 0


def cmd_strip(args, out: Output):
    """Strip markup (and optionally wrap)."""
    from langkit.text import strip_markup, wrap

    text = strip_markup(read_text(args.text))
    if args.width:
        for line in wrap(text, args.width):
            out.result(line)
    else:
        out.result(text)
    return 0


def cmd_mnemonic(args, out: Output):
    """Encode or decode a mnemonic."""
    from langkit.mnemonic import Mnemonic

    mnemonic = Mnemonic(args.seed)
    if args.decode:
        out.result(str(mnemonic.from_mnemonic(args.value)))
    else:
        out.result(mnemonic.to_mnemonic(seed_value(args.value), capitalize=args.capitalize))
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='langkit',
        description='Langkit - Invented Language Generator & Word Cipher',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s languages
  %(prog)s words english -n 10 --seed 42
  %(prog)s sentences "Japanese Romanized" -n 3
  %(prog)s random 0xC0FFEE -n 8 --save coffee.yaml
  %(prog)s mix english:0.5 french:0.3 elf:0.2 --strip-accents
  %(prog)s cipher "The room is dark." --language elf --state vocab.yaml
  %(prog)s decipher "..." --state vocab.yaml --learn room,dark
  %(prog)s mnemonic 123456789
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- languages ---
    p = subparsers.add_parser('languages', aliases=['langs', 'ls'], help='List built-in languages')
    p.add_argument('--seed', type=seed_value, default=0, help='Seed for sample words (default: 0)')

    # --- words ---
    p = subparsers.add_parser('words', aliases=['w'], help='Generate words')
    p.add_argument('language', help='Language name, random:SEED, or a .yaml file')
    p.add_argument('-n', '--count', type=int, default=10, help='Number of words (default: 10)')
    p.add_argument('--seed', '-s', type=seed_value, default=0, help='Random seed (default: 0)')
    p.add_argument('--syllables', type=int, help='Fixed syllable count')
    p.add_argument('--capitalize', '-c', action='store_true', help='Capitalize words')

    # --- sentences ---
    p = subparsers.add_parser('sentences', aliases=['s'], help='Generate sentences')
    p.add_argument('language', help='Language name, random:SEED, or a .yaml file')
    p.add_argument('-n', '--count', type=int, default=3, help='Number of sentences (default: 3)')
    p.add_argument('--seed', '-s', type=seed_value, default=0, help='Random seed (default: 0)')
    p.add_argument('--min-words', type=int, help='Minimum words per sentence')
    p.add_argument('--max-words', type=int, help='Maximum words per sentence')
    p.add_argument('--width', type=int, default=0, help='Wrap output to this width')

    # --- random ---
    p = subparsers.add_parser('random', help='Build a random language from a seed')
    p.add_argument('language_seed', type=seed_value, help='Language seed')
    p.add_argument('-n', '--count', type=int, default=8, help='Sample words (default: 8)')
    p.add_argument('--seed', '-s', type=seed_value, default=0, help='Seed for sample words')
    p.add_argument('--save', help='Write the language to a YAML file')

    # --- mix ---
    p = subparsers.add_parser('mix', help='Blend languages (LANGUAGE:WEIGHT ...)')
    p.add_argument('parts', nargs='+', help='Languages with relative weights, e.g. english:2 elf:1')
    p.add_argument('-n', '--count', type=int, default=8, help='Sample words (default: 8)')
    p.add_argument('--seed', '-s', type=seed_value, default=0, help='Seed for sample words')
    p.add_argument('--accents', action='store_true', help='Add accented variants')
    p.add_argument('--strip-accents', action='store_true', help='Remove accents from fragments')
    p.add_argument('--save', help='Write the language to a YAML file')

    # --- cipher ---
    p = subparsers.add_parser('cipher', aliases=['c'], help='Cipher text into an invented language')
    p.add_argument('text', help="Text to cipher ('-' reads stdin)")
    p.add_argument('--language', '-l', help='Language (default: english; must match --state if given)')
    p.add_argument('--seed', '-s', type=seed_value, help='Base seed (default: hash of language name; must match --state if given)')
    p.add_argument('--markup', '-m', action='store_true', help='Copy [markup] spans verbatim')
    p.add_argument('--state', help='Translator state file (read if present, then written)')

    # --- decipher ---
    p = subparsers.add_parser('decipher', aliases=['d'], help='Decipher text')
    p.add_argument('text', help="Text to decipher ('-' reads stdin)")
    p.add_argument('--state', required=True, help='Translator state file written by cipher')
    p.add_argument('--learn', help='Only use these comma-separated words as the vocabulary')

    # --- vocab ---
    p = subparsers.add_parser('vocab', help="Show a translator's vocabulary")
    p.add_argument('--state', required=True, help='Translator state file')

    # --- strip ---
    p = subparsers.add_parser('strip', help='Remove [markup] from text')
    p.add_argument('text', help="Text ('-' reads stdin)")
    p.add_argument('--width', type=int, default=0, help='Wrap output to this width')

    # --- mnemonic ---
    p = subparsers.add_parser('mnemonic', aliases=['mn'], help='Number <-> mnemonic string')
    p.add_argument('value', help='Number to encode, or mnemonic to decode with --decode')
    p.add_argument('--seed', '-s', type=seed_value, default=1, help='Syllable table seed (default: 1)')
    p.add_argument('--decode', '-d', action='store_true', help='Decode a mnemonic')
    p.add_argument('--capitalize', '-c', action='store_true', help='Capitalize the first letter')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'langs': 'languages', 'ls': 'languages',
        'w': 'words',
        's': 'sentences',
        'c': 'cipher',
        'd': 'decipher',
        'mn': 'mnemonic',
    }
    command = cmd_map.get(args.command, args.command)

    setup_logging(args.verbose)
    out = Output(quiet=args.quiet)

    commands = {
        'languages': cmd_languages,
        'words': cmd_words,
        'sentences': cmd_sentences,
        'random': cmd_random,
        'mix': cmd_mix,
        'cipher': cmd_cipher,
        'decipher': cmd_decipher,
        'vocab': cmd_vocab,
        'strip': cmd_strip,
        'mnemonic': cmd_mnemonic,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (ValueError, OSError) as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
