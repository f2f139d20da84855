"""
Tests for Phoneme Inventories
=============================
Tests for langkit/generators/inventory.py and the phoneme data loaders.
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from langkit.generators.inventory import (
    InventoryError,
    PhonemeInventory,
    inventories_equal,
    is_vowel,
    remove_accents,
)
from langkit.generators.language import FRENCH
from langkit.generators.phonemes import (
    load_accents,
    load_language_config,
    load_registry,
    parse_language_config,
)


def make_inventory(**overrides):
    fields = dict(
        openings=(("k", 2.0), ("", 1.0)),
        nuclei=(("a", 3.0), ("o", 1.0)),
        closings=(("", 4.0), ("n", 1.0)),
        hiatus_breakers=(("'", 1.0),),
        syllable_counts=((1, 1.0), (2, 2.0)),
    )
    fields.update(overrides)
    return PhonemeInventory(**fields)


class TestValidation:
    """Construction rejects malformed pools."""

    @pytest.mark.parametrize("pool", ["openings", "nuclei", "closings", "syllable_counts"])
    def test_empty_required_pool(self, pool):
        with pytest.raises(InventoryError, match=pool):
            make_inventory(**{pool: ()})

    def test_empty_hiatus_breakers_allowed(self):
        inv = make_inventory(hiatus_breakers=())
        assert inv.hiatus_breakers == ()

    @pytest.mark.parametrize("weight", [0, -1.0])
    def test_non_positive_weight(self, weight):
        with pytest.raises(InventoryError, match="positive"):
            make_inventory(nuclei=(("a", weight),))

    @pytest.mark.parametrize("count", [0, -2, 1.5, True])
    def test_bad_syllable_count(self, count):
        with pytest.raises(InventoryError):
            make_inventory(syllable_counts=((count, 1.0),))

    def test_non_string_fragment(self):
        with pytest.raises(InventoryError, match="not a string"):
            make_inventory(openings=((3, 1.0),))

    def test_not_a_pair(self):
        with pytest.raises(InventoryError, match="pair"):
            make_inventory(openings=("k",))

    def test_no_letters(self):
        with pytest.raises(InventoryError, match="no letters"):
            make_inventory(openings=(("", 1.0),), nuclei=(("'", 1.0),), closings=(("-", 1.0),))

    def test_inventory_error_is_value_error(self):
        assert issubclass(InventoryError, ValueError)


class TestBlend:
    """Linear blending of two inventories."""

    def test_weights_and_order(self):
        a = make_inventory(openings=(("k", 2.0), ("", 1.0)))
        b = make_inventory(openings=(("k", 1.0), ("t", 1.0)))
        blended = a.blend(b, 0.25)
        assert blended.openings == (("k", 1.75), ("", 0.75), ("t", 0.25))

    def test_zero_weight_keeps_self(self):
        a = make_inventory()
        b = make_inventory(nuclei=(("u", 1.0),))
        assert a.blend(b, 0.0) == a

    def test_full_weight_gives_other(self):
        a = make_inventory(nuclei=(("e", 1.0),))
        b = make_inventory(nuclei=(("u", 1.0),))
        assert a.blend(b, 1.0).nuclei == (("u", 1.0),)

    @pytest.mark.parametrize("weight", [-0.1, 1.5])
    def test_weight_out_of_range(self, weight):
        a = make_inventory()
        with pytest.raises(ValueError):
            a.blend(a, weight)

    def test_syllable_counts_blend(self):
        a = make_inventory(syllable_counts=((1, 1.0),))
        b = make_inventory(syllable_counts=((3, 1.0),))
        assert a.blend(b, 0.5).syllable_counts == ((1, 0.5), (3, 0.5))


class TestAccents:
    """Adding and stripping diacritics."""

    def test_remove_accents(self):
        assert remove_accents("éèêàç") == "eeeac"
        assert remove_accents("Ærø") == "AEro"
        assert remove_accents("straße") == "strasse"
        assert remove_accents("plain") == "plain"

    def test_is_vowel(self):
        assert is_vowel("a")
        assert is_vowel("É")
        assert is_vowel("ü")
        assert not is_vowel("k")
        assert not is_vowel("")
        assert not is_vowel("'")

    def test_without_accents_merges(self):
        nuclei = dict(FRENCH.inventory.without_accents().nuclei)
        assert nuclei["e"] == pytest.approx(11.5)
        assert "é" not in nuclei

    def test_with_accents_adds_variant(self):
        inv = make_inventory(nuclei=(("a", 2.0),))
        accented = inv.with_accents(0.5, 0.0)
        assert len(accented.nuclei) == 2
        original, variant = accented.nuclei
        assert original == ("a", 2.0)
        assert variant[0] in load_accents().vowels["a"]
        assert variant[1] == pytest.approx(1.0)

    def test_with_accents_is_deterministic(self):
        inv = FRENCH.inventory
        assert inv.with_accents(0.5, 0.2) == inv.with_accents(0.5, 0.2)

    def test_zero_strength_is_identity(self):
        inv = make_inventory()
        assert inv.with_accents(0.0, 0.0) == inv

    def test_consonant_variants(self):
        inv = make_inventory(openings=(("k", 1.0),))
        accented = inv.with_accents(0.0, 1.0)
        assert accented.openings[0] == ("k", 1.0)
        assert accented.openings[1] == (load_accents().consonants["k"][0], 1.0)

    def test_negative_strength(self):
        with pytest.raises(ValueError):
            make_inventory().with_accents(-1.0, 0.0)

    def test_strip_after_add_recovers_letters(self):
        inv = make_inventory(nuclei=(("a", 2.0),))
        stripped = inv.with_accents(0.5, 0.0).without_accents()
        assert stripped.nuclei == (("a", 3.0),)


class TestEquality:

    def test_equal_by_content(self):
        assert make_inventory() == make_inventory()
        assert inventories_equal(make_inventory(), make_inventory())
        assert hash(make_inventory()) == hash(make_inventory())

    def test_order_matters(self):
        a = make_inventory(nuclei=(("a", 1.0), ("o", 1.0)))
        b = make_inventory(nuclei=(("o", 1.0), ("a", 1.0)))
        assert a != b

    def test_weights_matter(self):
        assert make_inventory(nuclei=(("a", 1.0),)) != make_inventory(nuclei=(("a", 2.0),))

    def test_longest_letters(self):
        inv = make_inventory(closings=(("", 1.0), ("nth", 1.0)))
        assert inv.longest_letters() == "nth"


class TestPhonemeData:
    """Built-in language files load and validate."""

    def test_registry_order(self):
        keys = load_registry()
        assert keys[0] == "english"
        assert keys[-1] == "infernal"
        assert len(keys) == len(set(keys)) == 14

    @pytest.mark.parametrize("key", load_registry())
    def test_every_language_file_parses(self, key):
        cfg = load_language_config(key)
        assert cfg.name
        assert cfg.openings and cfg.nuclei and cfg.closings and cfg.syllable_counts
        assert all(isinstance(f, str) for f, _ in cfg.openings + cfg.nuclei + cfg.closings)

    def test_parse_missing_keys(self):
        with pytest.raises(ValueError, match="missing required keys"):
            parse_language_config({"name": "X", "openings": [["k", 1]]}, "x.yaml")

    def test_parse_unquoted_boolean_fragment(self):
        raw = {
            "openings": [[False, 1]],
            "nuclei": [["a", 1]],
            "closings": [["", 1]],
            "syllable_counts": [[1, 1]],
        }
        with pytest.raises(ValueError, match="quote it"):
            parse_language_config(raw, "x.yaml")
