"""
Spelling variants for transliterated place names.

Latin spellings of Telugu/Hindi place names drift in predictable ways
(doubled consonants, dh/d, oo/u, -palle/-palli, ...). expand() turns one
query into a small ordered set of alternate spellings that are used only
to widen the store lookup. Variants are never shown to the user and are
never used for scoring.

The heuristics live in VARIANT_RULES, an ordered table of
(name, predicate, transform) entries, so each rule can be tested alone.
"""

import re
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from placefinder.configs import configs
from placefinder.services.normalizer import normalize, is_latin_query

logger = logging.getLogger(__name__)

MAX_VARIANTS = int((configs.get("search") or {}).get("max_variants", 20))
MIN_VARIANT_LENGTH = 2
MIN_VOWEL_VARIANT_LENGTH = 3
MAX_DOUBLING_QUERY_LENGTH = 10
MAX_DOUBLING_GROWTH = 3

CONSONANTS = "bcdfghjklmnpqrstvwxyz"

# Short forms that only apply on an exact match of the whole query
NICKNAMES: Dict[str, str] = {
    "vizag": "visakhapatnam",
    "vskp": "visakhapatnam",
    "vzm": "vizianagaram",
    "hyd": "hyderabad",
    "sec bad": "secunderabad",
    "bza": "vijayawada",
    "rjy": "rajahmundry",
    "tpt": "tirupati",
    "nlr": "nellore",
    "cuddapah": "kadapa",
    "bangalore": "bengaluru",
    "madras": "chennai",
}

# Each pair is substituted globally in both directions
DIGRAPH_PAIRS: List[Tuple[str, str]] = [
    ("dh", "d"),
    ("th", "t"),
    ("ph", "p"),
    ("v", "b"),
    ("v", "w"),
    ("kh", "k"),
    ("gh", "g"),
    ("ch", "c"),
    ("sh", "s"),
]

# (pattern, replacement), applied one at a time as global regex replaces
VOWEL_SWAPS: List[Tuple[str, str]] = [
    (r"oo", "u"),
    (r"u", "oo"),
    (r"ee", "i"),
    (r"i", "ee"),
    (r"i", "e"),
    (r"e(?!e)", "i"),
    (r"aa", "a"),
    (r"(?<!o)o(?!o)", "oo"),
    (r"oo", "o"),
]

PREFIX_PAIRS: List[Tuple[str, str]] = [("sri ", "shri ")]

SUFFIX_PAIRS: List[Tuple[str, str]] = [
    ("abad", "bad"),
    ("puram", "pura"),
    ("palle", "palli"),
]


@dataclass(frozen=True)
class VariantRule:
    name: str
    predicate: Callable[[str], bool]
    transform: Callable[[str], Iterable[str]]

    def apply(self, query: str) -> List[str]:
        """Variants this rule produces for query, excluding no-ops."""
        if not self.predicate(query):
            return []
        out = []
        for candidate in self.transform(query):
            if candidate and candidate != query:
                out.append(candidate)
        return out


def _always(query: str) -> bool:
    return True


def _nickname(query: str) -> Iterable[str]:
    full = NICKNAMES.get(query)
    return [full] if full else []


def _trailing_y_i(query: str) -> Iterable[str]:
    if query.endswith("y"):
        return [query[:-1] + "i"]
    if query.endswith("i"):
        return [query[:-1] + "y"]
    return []


def _initial_dot(query: str) -> Iterable[str]:
    match = re.match(r"^([a-z]) (.+)$", query)
    if not match:
        return []
    return [f"{match.group(1)}. {match.group(2)}"]


def _collapse_doubled_consonants(query: str) -> Iterable[str]:
    return [re.sub(rf"([{CONSONANTS}])\1+", r"\1", query)]


def _double_consonants(query: str) -> Iterable[str]:
    """One variant per isolated consonant, with that consonant doubled."""
    variants = []
    # Word-initial consonants are left alone
    for i, ch in enumerate(query):
        if i == 0 or ch not in CONSONANTS or query[i - 1] in (" ", ch):
            continue
        if i + 1 < len(query) and query[i + 1] in CONSONANTS:
            continue
        variant = query[: i + 1] + ch + query[i + 1 :]
        if len(variant) - len(query) <= MAX_DOUBLING_GROWTH:
            variants.append(variant)
    return variants


def _digraphs(query: str) -> Iterable[str]:
    variants = []
    for long_form, short_form in DIGRAPH_PAIRS:
        if long_form in query:
            variants.append(query.replace(long_form, short_form))
        # Short-to-long skips letters that already start the long form
        if len(short_form) == 1 and len(long_form) == 2 and long_form[0] == short_form:
            short_pattern = rf"{short_form}(?!{long_form[1]})"
        else:
            short_pattern = re.escape(short_form)
        if re.search(short_pattern, query):
            variants.append(re.sub(short_pattern, long_form, query))
    return variants


def _collapse_vowel_runs(query: str) -> Iterable[str]:
    return [re.sub(r"([aeiou])\1+", r"\1", query)]


def _vowel_swaps(query: str) -> Iterable[str]:
    variants = []
    for pattern, replacement in VOWEL_SWAPS:
        variant = re.sub(pattern, replacement, query)
        if variant != query and len(variant) >= MIN_VOWEL_VARIANT_LENGTH:
            variants.append(variant)
    return variants


def _swap_pairs(pairs: List[Tuple[str, str]]) -> Callable[[str], Iterable[str]]:
    def transform(query: str) -> Iterable[str]:
        variants = []
        for left, right in pairs:
            if left in query:
                variants.append(query.replace(left, right))
            if right in query:
                variants.append(query.replace(right, left))
        return variants

    return transform


def _prefixes(query: str) -> Iterable[str]:
    variants = []
    for short_prefix, long_prefix in PREFIX_PAIRS:
        if query.startswith(short_prefix):
            variants.append(long_prefix + query[len(short_prefix) :])
        elif query.startswith(long_prefix):
            variants.append(short_prefix + query[len(long_prefix) :])
    return variants


def _suffixes(query: str) -> Iterable[str]:
    variants = []
    for long_suffix, short_suffix in SUFFIX_PAIRS:
        if query.endswith(long_suffix):
            variants.append(query[: -len(long_suffix)] + short_suffix)
        elif query.endswith(short_suffix):
            variants.append(query[: -len(short_suffix)] + long_suffix)
    return variants


VARIANT_RULES: List[VariantRule] = [
    VariantRule("nickname", lambda q: q in NICKNAMES, _nickname),
    VariantRule("trailing_y_i", lambda q: q.endswith(("y", "i")), _trailing_y_i),
    VariantRule("initial_dot", lambda q: len(q) > 2 and q[1] == " ", _initial_dot),
    VariantRule("double_consonant_collapse", _always, _collapse_doubled_consonants),
    VariantRule(
        "consonant_doubling",
        lambda q: len(q) <= MAX_DOUBLING_QUERY_LENGTH,
        _double_consonants,
    ),
    VariantRule("digraphs", _always, _digraphs),
    VariantRule("vowel_run_collapse", _always, _collapse_vowel_runs),
    VariantRule("vowel_swaps", _always, _vowel_swaps),
    VariantRule("sha_sa", _always, _swap_pairs([("sha", "sa")])),
    VariantRule("ul_ool", _always, _swap_pairs([("ool", "ul")])),
    VariantRule("isha_isa", _always, _swap_pairs([("isha", "isa")])),
    VariantRule("haka_akha", _always, _swap_pairs([("haka", "akha")])),
    VariantRule("sri_shri", lambda q: q.startswith(("sri ", "shri ")), _prefixes),
    VariantRule("suffixes", _always, _suffixes),
]


class _VariantSet:
    """Insertion-ordered, capped, de-duplicated collection of variants."""

    def __init__(self, cap: int):
        self.cap = cap
        self.items: List[str] = []
        self._seen = set()

    @property
    def full(self) -> bool:
        return len(self.items) >= self.cap

    def add(self, value: Optional[str]) -> None:
        if value is None or self.full:
            return
        value = value.strip()
        if len(value) < MIN_VARIANT_LENGTH or value in self._seen:
            return
        self._seen.add(value)
        self.items.append(value)


def expand(
    raw: str,
    normalized: Optional[str] = None,
    rules: Optional[List[VariantRule]] = None,
    cap: int = MAX_VARIANTS,
) -> List[str]:
    """
    Expand a query into at most `cap` candidate spellings.

    The raw query, the normalized query and the normalized query without
    spaces always come first. The rule table is only applied to plain
    ASCII queries.

    Examples:
        >>> expand("vizag")[:3]
        ['vizag', 'visakhapatnam', 'vizzag']

        >>> "guntur" in expand("Gunttur")
        True
    """
    if normalized is None:
        normalized = normalize(raw)

    variants = _VariantSet(cap)
    variants.add(raw)
    variants.add(normalized)
    variants.add(normalized.replace(" ", ""))

    if not normalized or not is_latin_query(normalized):
        return variants.items

    for rule in VARIANT_RULES if rules is None else rules:
        if variants.full:
            break
        for candidate in rule.apply(normalized):
            variants.add(candidate)

    logger.debug(f"Expanded '{raw}' into {len(variants.items)} variants")
    return variants.items
