# placefinder/services/place_search_service.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set, Tuple

from placefinder.configs import configs
from placefinder.models.hierarchy import PlaceType
from placefinder.schemas.search import (
    CombinedSearchItem,
    PlaceRecord,
    PlaceRef,
    ResultType,
    SearchRequest,
    SearchResult,
)
from placefinder.services.gazetteer_store import GazetteerStore
from placefinder.services.normalizer import normalize
from placefinder.services.scoring import rank
from placefinder.services.variants import expand

logger = logging.getLogger(__name__)

_search_settings = configs.get("search") or {}
DEFAULT_LIMIT = int(_search_settings.get("default_limit", 20))
MAX_LIMIT = int(_search_settings.get("max_limit", 50))


def clamp_limit(limit: Any) -> int:
    """Coerces limit to an int in [1, MAX_LIMIT]; unusable values fall back to the default."""
    try:
        value = int(limit) if limit is not None else DEFAULT_LIMIT
    except (TypeError, ValueError):
        value = DEFAULT_LIMIT
    return max(1, min(value, MAX_LIMIT))


@dataclass
class LookupOutcome:
    """Result of one (type, variant) store lookup: records, or the error that replaced them."""

    place_type: PlaceType
    candidate: str
    records: List[PlaceRecord] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def shape_result(record: PlaceRecord) -> SearchResult:
    """Turns a store record into a SearchResult with ancestor fields and address."""
    state = record.ancestor(PlaceType.STATE)
    district = record.ancestor(PlaceType.DISTRICT)
    mandal = record.ancestor(PlaceType.MANDAL)

    result = SearchResult(
        type=ResultType(record.type.value),
        id=record.id,
        place_id=record.id,
        name=record.name,
        display_name=record.name,
        state_id=state.id if state else None,
        state_name=state.name if state else None,
        district_id=district.id if district else None,
        district_name=district.name if district else None,
        mandal_id=mandal.id if mandal else None,
        mandal_name=mandal.name if mandal else None,
    )

    # The entity also fills its own level
    if record.type == PlaceType.STATE:
        result.state_id, result.state_name = record.id, record.name
        result.address = record.name
    else:
        if record.type == PlaceType.DISTRICT:
            result.district_id, result.district_name = record.id, record.name
        elif record.type == PlaceType.MANDAL:
            result.mandal_id, result.mandal_name = record.id, record.name
        elif record.type == PlaceType.VILLAGE:
            result.village_id, result.village_name = record.id, record.name
            result.tenant_id = record.tenant_id
        result.address = ", ".join(a.name for a in record.ancestors if a.name)

    return result


def build_suggestion(query: str, tenant_id: Optional[str] = None) -> SearchResult:
    """Synthetic 'add this village' entry carrying the user's text."""
    return SearchResult(
        type=ResultType.SUGGESTION,
        id=None,
        place_id=None,
        name=query,
        display_name=query,
        village_name=query,
        tenant_id=tenant_id,
        address=None,
    )


def _place_ref(place_id: Optional[str], name: Optional[str]) -> Optional[PlaceRef]:
    return PlaceRef(id=place_id, name=name) if place_id else None


def combine_result(result: SearchResult) -> CombinedSearchItem:
    """Nests the flat ancestor fields of a result; `match` is the entity's own level."""
    levels = {
        ResultType.STATE: _place_ref(result.state_id, result.state_name),
        ResultType.DISTRICT: _place_ref(result.district_id, result.district_name),
        ResultType.MANDAL: _place_ref(result.mandal_id, result.mandal_name),
        ResultType.VILLAGE: _place_ref(result.village_id, result.village_name),
    }
    if result.type in levels:
        match = levels[result.type]
    else:
        match = _place_ref(result.id, result.name)
    return CombinedSearchItem(
        type=result.type,
        match=match,
        state=levels[ResultType.STATE],
        district=levels[ResultType.DISTRICT],
        mandal=levels[ResultType.MANDAL],
        village=levels[ResultType.VILLAGE],
    )


class PlaceSearchService:
    """
    Typo-tolerant place search over an injected gazetteer store.

    The query is normalized and expanded into spelling variants; every
    (type, variant) pair is looked up concurrently; hits are merged,
    deduplicated and ranked against the original query.
    """

    def __init__(self, store: GazetteerStore):
        self.store = store

    async def search_request(self, request: SearchRequest) -> List[SearchResult]:
        return await self.search(
            request.query,
            limit=request.limit,
            types=request.types,
            include_village_suggestion=request.include_village_suggestion,
            tenant_id=request.tenant_id,
        )

    async def search(
        self,
        query: str,
        limit: Any = DEFAULT_LIMIT,
        types: Optional[Iterable[Any]] = None,
        include_village_suggestion: bool = False,
        tenant_id: Optional[str] = None,
    ) -> List[SearchResult]:
        """Ranked matches for query; never raises for bad input."""
        raw = (query or "").strip()
        limit = clamp_limit(limit)
        place_types = PlaceType.parse_many(types)

        normalized = normalize(raw)
        # Nothing searchable, e.g. whitespace or punctuation only
        if not normalized:
            return []

        variants = expand(raw, normalized)
        results = await self.assemble(variants, place_types, tenant_id)
        ranked = rank(results, raw)

        if include_village_suggestion:
            ranked.insert(0, build_suggestion(raw, tenant_id))

        logger.info(
            f"Place search '{raw}': {len(variants)} variants, {len(results)} matches, "
            f"returning {min(limit, len(ranked))}"
        )
        return ranked[:limit]

    async def search_combined(
        self,
        query: str,
        limit: Any = DEFAULT_LIMIT,
        tenant_id: Optional[str] = None,
    ) -> List[CombinedSearchItem]:
        """Searches every level, without a suggestion, as nested hierarchy items."""
        results = await self.search(query, limit=limit, types=list(PlaceType), tenant_id=tenant_id)
        return [combine_result(result) for result in results]

    async def assemble(
        self,
        variants: List[str],
        place_types: List[PlaceType],
        tenant_id: Optional[str] = None,
    ) -> List[SearchResult]:
        """
        Looks up every (type, variant) pair concurrently, then merges in
        (type, variant) order keeping the first hit per (type, id).
        """
        pairs: List[Tuple[PlaceType, str]] = [
            (place_type, variant) for place_type in place_types for variant in variants
        ]
        outcomes = await asyncio.gather(
            *(
                self._lookup(
                    place_type,
                    variant,
                    tenant_id if place_type == PlaceType.VILLAGE else None,
                )
                for place_type, variant in pairs
            )
        )

        seen: Set[Tuple[PlaceType, str]] = set()
        results = []
        for outcome in outcomes:
            if not outcome.ok:
                continue
            for record in outcome.records:
                key = (record.type, record.id)
                if key in seen:
                    continue
                seen.add(key)
                results.append(shape_result(record))
        return results

    async def _lookup(
        self, place_type: PlaceType, candidate: str, tenant_id: Optional[str]
    ) -> LookupOutcome:
        try:
            records = await self.store.find_by_name_match(
                place_type, {candidate}, tenant_id=tenant_id
            )
            return LookupOutcome(place_type, candidate, records=list(records or []))
        except Exception as e:
            logger.error(
                f"Gazetteer lookup failed for {place_type.value} '{candidate}': {e}"
            )
            return LookupOutcome(place_type, candidate, error=e)
