"""Tests for spelling variant expansion and the individual variant rules."""

import pytest

from placefinder.services.normalizer import normalize
from placefinder.services.variants import (
    MAX_VARIANTS,
    VARIANT_RULES,
    expand,
)

RULES = {rule.name: rule for rule in VARIANT_RULES}


def _rule(name, query):
    return RULES[name].apply(query)


# ═══════════════════════════════════════════════════
# expand()
# ═══════════════════════════════════════════════════


class TestExpand:
    def test_base_forms_come_first(self):
        variants = expand("  G.Konduru ")
        assert variants[:3] == ["G.Konduru", "g konduru", "gkonduru"]

    def test_duplicates_removed(self):
        variants = expand("guntur")
        assert variants.count("guntur") == 1
        assert len(variants) == len(set(variants))

    @pytest.mark.parametrize(
        "query",
        [
            "vizag",
            "gunttur",
            "kaddapa",
            "shri kalahasthi",
            "dharmavaram",
            "vishakhapatnam",
            "bheemunipatnam",
            "chhattisgarh",
            "a",
            "ab",
            "x y",
            "peddapuram palle",
        ],
    )
    def test_bounded_and_min_length(self, query):
        variants = expand(query)
        assert len(variants) <= MAX_VARIANTS
        assert all(len(v) >= 2 for v in variants)
        assert all(v == v.strip() for v in variants)

    def test_cap_keeps_earliest(self):
        full = expand("dharmavaram", cap=50)
        capped = expand("dharmavaram", cap=5)
        assert capped == full[:5]

    def test_non_latin_query_is_passed_through(self):
        variants = expand("మంగళగిరి")
        assert variants[0] == "మంగళగిరి"
        # No rule table for non-ASCII queries: only raw and normalized forms
        assert len(variants) <= 3

    def test_empty_query(self):
        assert expand("") == []
        assert expand("   ") == []

    def test_single_letter_dropped(self):
        assert expand("a") == []

    def test_nickname(self):
        assert "visakhapatnam" in expand("vizag")
        assert "visakhapatnam" in expand("Vizag")

    def test_nickname_requires_full_match(self):
        assert "visakhapatnam" not in expand("vizag beach")

    def test_doubled_consonant_collapse(self):
        assert "guntur" in expand("gunttur")
        assert "kadapa" in expand("kaddapa")

    def test_vowel_substitution(self):
        assert "chittoor" in expand("chittor")

    def test_ul_ool(self):
        assert "kurnool" in expand("kurnul")

    def test_uses_given_normalized_form(self):
        variants = expand("Gunttur", normalize("Gunttur"))
        assert variants[:2] == ["Gunttur", "gunttur"]


# ═══════════════════════════════════════════════════
# Individual rules
# ═══════════════════════════════════════════════════


class TestRules:
    def test_rule_names_unique(self):
        assert len(RULES) == len(VARIANT_RULES)

    def test_trailing_y_i(self):
        assert _rule("trailing_y_i", "reddy") == ["reddi"]
        assert _rule("trailing_y_i", "reddi") == ["reddy"]
        assert _rule("trailing_y_i", "guntur") == []

    def test_initial_dot(self):
        assert _rule("initial_dot", "g konduru") == ["g. konduru"]
        assert _rule("initial_dot", "gk onduru") == []

    def test_double_consonant_collapse(self):
        assert _rule("double_consonant_collapse", "kaddappa") == ["kadapa"]
        assert _rule("double_consonant_collapse", "guntur") == []

    def test_consonant_doubling(self):
        variants = _rule("consonant_doubling", "kadapa")
        assert "kaddapa" in variants
        assert "kadappa" in variants
        # Word-initial consonants are never doubled
        assert "kkadapa" not in variants
        assert all(len(v) - len("kadapa") <= 3 for v in variants)

    def test_consonant_doubling_skips_clusters(self):
        # n is followed by t, and the tt pair is already doubled
        variants = _rule("consonant_doubling", "gunttur")
        assert "gunnttur" not in variants
        assert "guntttur" not in variants

    def test_consonant_doubling_only_short_queries(self):
        assert _rule("consonant_doubling", "visakhapatnam") == []

    def test_digraphs(self):
        assert "dharmavaram" in _rule("digraphs", "darmavaram")
        assert "darmavaram" in _rule("digraphs", "dharmavaram")
        assert "baranasi" in _rule("digraphs", "varanasi")
        assert "wijayawada" in _rule("digraphs", "vijayawada")
        assert "vijayavada" in _rule("digraphs", "vijayawada")
        assert "kammam" in _rule("digraphs", "khammam")
        assert "srikakulam" in _rule("digraphs", "shrikakulam")

    def test_digraphs_do_not_stack(self):
        # "dh" is not expanded into "dhh"
        assert not any("dhh" in v for v in _rule("digraphs", "dharmavaram"))

    def test_vowel_run_collapse(self):
        assert _rule("vowel_run_collapse", "bheemunipatnam") == ["bhemunipatnam"]

    def test_vowel_swaps(self):
        variants = _rule("vowel_swaps", "chittor")
        assert "chittoor" in variants
        assert "chettor" in variants
        assert "bhimunipatnam" in _rule("vowel_swaps", "bheemunipatnam")
        assert "kurnul" in _rule("vowel_swaps", "kurnool")

    def test_vowel_swaps_minimum_length(self):
        assert "u" not in _rule("vowel_swaps", "oo")

    def test_sha_sa(self):
        assert _rule("sha_sa", "vishakhapatnam") == ["visakhapatnam"]
        assert "vishakhapatnam" in _rule("sha_sa", "visakhapatnam")

    def test_ul_ool(self):
        assert _rule("ul_ool", "kurnul") == ["kurnool"]
        assert _rule("ul_ool", "kurnool") == ["kurnul"]

    def test_isha_isa_and_haka_akha(self):
        assert _rule("isha_isa", "vishakhapatnam") == ["visakhapatnam"]
        assert _rule("haka_akha", "vishakapatnam") == ["visakhapatnam"]
        assert _rule("haka_akha", "visakhapatnam") == ["vishakapatnam"]
        assert _rule("haka_akha", "vishaka") == ["visakha"]

    def test_sri_shri(self):
        assert _rule("sri_shri", "sri kalahasthi") == ["shri kalahasthi"]
        assert _rule("sri_shri", "shri kalahasthi") == ["sri kalahasthi"]
        assert _rule("sri_shri", "srikakulam") == []

    def test_suffixes(self):
        assert _rule("suffixes", "nizamabad") == ["nizambad"]
        assert _rule("suffixes", "nizambad") == ["nizamabad"]
        assert _rule("suffixes", "peddapuram") == ["peddapura"]
        assert _rule("suffixes", "peddapura") == ["peddapuram"]
        assert _rule("suffixes", "kothapalle") == ["kothapalli"]
        assert _rule("suffixes", "kothapalli") == ["kothapalle"]

    def test_nickname_rule(self):
        assert _rule("nickname", "vizag") == ["visakhapatnam"]
        assert _rule("nickname", "guntur") == []
