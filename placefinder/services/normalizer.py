"""
Query normalization for place search.

normalize() maps a raw query onto the form every comparison in the search
pipeline uses. It is pure and idempotent, so normalizing an already
normalized string returns it unchanged.
"""

import re
import unicodedata

_QUOTES = re.compile(r"[\"'`‘’“”]")
_SEPARATORS = re.compile(r"[._\-/]+")
_WHITESPACE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    """
    Decompose and drop non-spacing marks.

    Examples:
        >>> strip_diacritics("Kōṭa")
        'Kota'
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize(text: str) -> str:
    """
    Normalize a place query.

    Applies, in order:
    1. Trim and lowercase
    2. Strip diacritics
    3. Delete quotes; turn runs of . _ - / into a space
    4. Replace anything that is not a letter, digit or whitespace with a space
    5. Collapse whitespace and trim

    Examples:
        >>> normalize("  G.Konduru ")
        'g konduru'

        >>> normalize("Sri-Kakulam's")
        'sri kakulams'

        >>> normalize("   ")
        ''
    """
    if not text:
        return ""

    text = text.strip().lower()
    # Compatibility decomposition can surface uppercase letters (e.g. "ℌ")
    text = strip_diacritics(text).lower()
    text = _QUOTES.sub("", text)
    text = _SEPARATORS.sub(" ", text)
    text = "".join(ch if ch.isalnum() or ch.isspace() else " " for ch in text)
    text = _WHITESPACE.sub(" ", text).strip()

    return text


def is_latin_query(normalized: str) -> bool:
    """True when the normalized query is plain ASCII letters, digits and spaces."""
    return bool(re.fullmatch(r"[a-z0-9 ]+", normalized))
