"""Relevance scoring of assembled place results against the user's query."""

from typing import List

from placefinder.schemas.search import SearchResult

EXACT_SCORE = 1000.0
PREFIX_SCORE = 500.0
CONTAINS_SCORE = 250.0
OVERLAP_SCALE = 100.0


def character_overlap(name: str, query: str) -> float:
    """
    Share of the query's distinct characters found anywhere in name, divided
    by the longer of the two lengths. Both inputs are expected lowercased.

    Examples:
        >>> character_overlap("guntur", "gntr")
        0.6666666666666666
    """
    if not name or not query:
        return 0.0
    present = sum(1 for ch in set(query) if ch in name)
    return present / max(len(query), len(name))


def score_name(name: str, query: str) -> float:
    """
    Score a place name against the original query:
    1000 exact, 500 prefix, 250 substring, else overlap scaled to 0-100.
    Comparison is case-insensitive.
    """
    name = (name or "").strip().lower()
    query = (query or "").strip().lower()
    if not query or not name:
        return 0.0
    if name == query:
        return EXACT_SCORE
    if name.startswith(query):
        return PREFIX_SCORE
    if query in name:
        return CONTAINS_SCORE
    return character_overlap(name, query) * OVERLAP_SCALE


def rank(results: List[SearchResult], query: str) -> List[SearchResult]:
    """
    Scores results in place and returns them ordered by descending score,
    then case-insensitive name. The sort is stable, so merge order decides
    full ties.
    """
    for result in results:
        result.score = score_name(result.name, query)
    return sorted(results, key=lambda r: (-r.score, r.name.lower()))
