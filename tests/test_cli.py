"""
Tests for CLI Commands
======================
Tests for the langkit CLI interface in langkit/cli.py.
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langkit.cli import main, parse_weighted, resolve_language, seed_value
from langkit.generators import ELF, ENGLISH, SeededRandom, random_language, save_language


def run_cli(*args):
    """Run ``python -m langkit`` and capture its output as UTF-8."""
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    return subprocess.run(
        [sys.executable, "-m", "langkit", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=str(ROOT),
        env=env,
    )


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        result = run_cli("--version")
        assert result.returncode == 0
        assert "langkit 0.1.0" in result.stdout

    def test_help_flag(self):
        result = run_cli("--help")
        assert result.returncode == 0
        assert "cipher" in result.stdout
        assert "mnemonic" in result.stdout

    def test_no_command_prints_help(self):
        result = run_cli()
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()

    def test_words_help(self):
        result = run_cli("words", "--help")
        assert result.returncode == 0
        assert "--count" in result.stdout


class TestGenerationCommands:

    def test_words_match_library(self):
        result = run_cli("-q", "words", "english", "-n", "4", "--seed", "42")
        assert result.returncode == 0
        rng = SeededRandom(42)
        expected = [ENGLISH.word(rng) for _ in range(4)]
        assert result.stdout.splitlines() == expected

    def test_words_heading_unless_quiet(self):
        result = run_cli("w", "english", "-n", "1", "--seed", "0x10")
        assert result.returncode == 0
        assert result.stdout.splitlines()[0] == "English (seed 16)"

    def test_sentences(self):
        result = run_cli("-q", "sentences", "elf", "-n", "2", "--seed", "7")
        assert result.returncode == 0
        rng = SeededRandom(7)
        expected = [ELF.sentence(rng) for _ in range(2)]
        assert result.stdout.splitlines() == expected

    def test_random_language_save(self, tmp_path):
        path = tmp_path / "coffee.yaml"
        result = run_cli("-q", "random", "0xC0FFEE", "-n", "2", "--save", str(path))
        assert result.returncode == 0
        assert path.exists()

        words = run_cli("-q", "words", str(path), "-n", "3", "--seed", "1")
        assert words.returncode == 0
        rng = SeededRandom(1)
        lang = random_language(0xC0FFEE)
        assert words.stdout.splitlines() == [lang.word(rng) for _ in range(3)]

    def test_mix(self):
        result = run_cli("mix", "english:2", "french:1", "spanish:1", "-n", "1")
        assert result.returncode == 0
        assert "English 50%, French 25%, Spanish 25%" in result.stdout

    def test_languages_table(self):
        result = run_cli("languages")
        assert result.returncode == 0
        assert "English" in result.stdout
        assert "Infernal" in result.stdout

    def test_unknown_language(self):
        result = run_cli("words", "klingon")
        assert result.returncode == 1
        assert "Unknown language" in result.stderr


class TestCipherCommands:
    """cipher / decipher / vocab share a state file."""

    def test_cipher_decipher_round_trip(self, tmp_path):
        state = tmp_path / "vocab.yaml"
        text = "The room is dark."
        ciphered = run_cli("-q", "cipher", text, "--language", "elf",
                           "--seed", "41041041", "--state", str(state))
        assert ciphered.returncode == 0
        secret = ciphered.stdout.strip()
        assert secret and secret != text
        assert state.exists()

        deciphered = run_cli("-q", "decipher", secret, "--state", str(state))
        assert deciphered.returncode == 0
        assert deciphered.stdout.strip() == text

    def test_decipher_partial(self, tmp_path):
        state = tmp_path / "vocab.yaml"
        secret = run_cli("-q", "c", "The room is dark.", "-l", "elf", "-s", "41041041",
                         "--state", str(state)).stdout.strip()
        partial = run_cli("-q", "d", secret, "--state", str(state), "--learn", "room")
        assert partial.returncode == 0
        assert " room " in partial.stdout

    def test_cipher_markup(self):
        result = run_cli("-q", "cipher", "[RED]Kitten[]!", "--markup")
        assert result.returncode == 0
        out = result.stdout.strip()
        assert out.startswith("[RED]") and out.endswith("[]!")

    def test_vocab(self, tmp_path):
        state = tmp_path / "vocab.yaml"
        run_cli("-q", "cipher", "stone river", "--state", str(state))
        result = run_cli("-q", "vocab", "--state", str(state))
        assert result.returncode == 0
        originals = [line.split()[0] for line in result.stdout.splitlines()]
        assert originals == ["river", "stone"]

    def test_state_conflicts_rejected(self, tmp_path):
        state = tmp_path / "vocab.yaml"
        first = run_cli("-q", "cipher", "stone", "-l", "elf", "-s", "41041041", "--state", str(state))
        assert first.returncode == 0

        other_seed = run_cli("-q", "cipher", "river", "-s", "5", "--state", str(state))
        assert other_seed.returncode == 1
        assert "seed 41041041" in other_seed.stderr

        other_language = run_cli("-q", "cipher", "river", "-l", "goblin", "--state", str(state))
        assert other_language.returncode == 1
        assert "Elf" in other_language.stderr

    def test_state_matching_flags_accepted(self, tmp_path):
        state = tmp_path / "vocab.yaml"
        first = run_cli("-q", "cipher", "stone", "-l", "elf", "-s", "41041041", "--state", str(state))
        again = run_cli("-q", "cipher", "stone", "-l", "elf", "-s", "41041041", "--state", str(state))
        assert again.returncode == 0
        assert again.stdout == first.stdout

    def test_decipher_missing_state(self, tmp_path):
        result = run_cli("decipher", "abc", "--state", str(tmp_path / "none.yaml"))
        assert result.returncode == 1
        assert "not found" in result.stderr


class TestUtilityCommands:

    def test_strip(self):
        result = run_cli("strip", "[RED]Kitten[]! [[sic]")
        assert result.returncode == 0
        assert result.stdout.strip() == "Kitten! [sic]"

    def test_strip_stdin(self):
        result = subprocess.run(
            [sys.executable, "-m", "langkit", "strip", "-"],
            input="[b]bold[/b] text",
            capture_output=True,
            text=True,
            encoding="utf-8",
            cwd=str(ROOT),
            env=dict(os.environ, PYTHONIOENCODING="utf-8"),
        )
        assert result.returncode == 0
        assert result.stdout.strip() == "bold text"

    def test_mnemonic_round_trip(self):
        encoded = run_cli("mnemonic", "123456789", "--seed", "5")
        assert encoded.returncode == 0
        text = encoded.stdout.strip()
        assert len(text) == 24

        decoded = run_cli("mn", text, "--seed", "5", "--decode")
        assert decoded.returncode == 0
        assert decoded.stdout.strip() == "123456789"

    def test_mnemonic_bad_input(self):
        result = run_cli("mnemonic", "tooshort", "--decode")
        assert result.returncode == 1
        assert "24" in result.stderr


class TestHelpers:
    """Argument helpers, called in-process."""

    def test_seed_value(self):
        assert seed_value("42") == 42
        assert seed_value("0xff") == 255
        assert seed_value("0b101") == 5
        with pytest.raises(argparse.ArgumentTypeError):
            seed_value("forty")

    @pytest.mark.parametrize("text,expected", [
        ("english:0.5", ("english", 0.5)),
        ("elf", ("elf", 1.0)),
        ("random:42", ("random:42", 1.0)),
        ("lang.yaml:2", ("lang.yaml", 2.0)),
    ])
    def test_parse_weighted(self, text, expected):
        assert parse_weighted(text) == expected

    def test_resolve_language(self, tmp_path):
        assert resolve_language("english") == ENGLISH
        assert resolve_language("random:0x10") == random_language(16)
        path = save_language(ELF, tmp_path / "elf.yaml")
        assert resolve_language(str(path)) == ELF

    def test_main_in_process(self, capsys):
        assert main(["-q", "strip", "[x]plain"]) == 0
        assert capsys.readouterr().out.strip() == "plain"
