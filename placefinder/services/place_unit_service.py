# placefinder/services/place_unit_service.py
import re
from typing import List, Dict, Optional, Any, Iterable
from beanie import PydanticObjectId
from beanie.operators import In
from placefinder.models.hierarchy import PlaceUnit, PlaceNameTranslation, PlaceType


def name_filter(candidates: Iterable[str]) -> Dict[str, Any]:
    """
    Mongo filter matching `name` case-insensitively against any candidate as
    exact, prefix or substring. Candidates are regex-escaped.
    """
    patterns = [re.escape(c) for c in candidates if c]
    if not patterns:
        return {"name": {"$in": []}}
    return {"name": {"$regex": "|".join(patterns), "$options": "i"}}


class PlaceUnitService:
    def __init__(self, languages: Optional[List[str]] = None):
        # Translation languages searched; None or empty means all
        self.languages = languages or []

    async def get_unit_by_id(self, unit_id: str) -> Optional[PlaceUnit]:
        """Fetches a single place unit by its ID."""
        try:
            return await PlaceUnit.get(PydanticObjectId(unit_id))
        except Exception:  # Catch invalid ObjectId format
            return None

    async def find_units_by_name(
        self,
        unit_type: PlaceType,
        candidates: Iterable[str],
        tenant_id: Optional[str] = None,
        limit: int = 50,
    ) -> List[PlaceUnit]:
        """Live units of a type whose canonical name matches any candidate."""
        query = {"type": unit_type.value, "is_deleted": False, **name_filter(candidates)}
        if tenant_id is not None:
            query["tenant_id"] = tenant_id
        return await PlaceUnit.find(query).sort("+name").limit(limit).to_list()

    async def find_units_by_translation(
        self,
        unit_type: PlaceType,
        candidates: Iterable[str],
        tenant_id: Optional[str] = None,
        limit: int = 50,
    ) -> List[PlaceUnit]:
        """
        Live units of a type with a translated name matching any candidate.
        At most one translation per language is read for each of `limit`
        entities.
        """
        query = {"entity_type": unit_type.value, **name_filter(candidates)}
        if self.languages:
            query["language"] = {"$in": self.languages}
        fetch_limit = limit * max(len(self.languages), 1)
        translations = (
            await PlaceNameTranslation.find(query).sort("+name").limit(fetch_limit).to_list()
        )
        entity_ids = []
        for translation in translations:
            try:
                entity_ids.append(PydanticObjectId(translation.entity_id))
            except Exception:  # Dangling or malformed entity_id
                continue
        if not entity_ids:
            return []

        unit_query = {"type": unit_type.value, "is_deleted": False}
        if tenant_id is not None:
            unit_query["tenant_id"] = tenant_id
        return (
            await PlaceUnit.find(In(PlaceUnit.id, entity_ids), unit_query)
            .sort("+name")
            .limit(limit)
            .to_list()
        )

    async def get_ancestor_units(
        self, unit: PlaceUnit, cache: Optional[Dict[str, Optional[PlaceUnit]]] = None
    ) -> List[PlaceUnit]:
        """
        Walks parent_id links up to the root. Returns ancestors ordered from
        the immediate parent to the state. `cache` is shared across calls of
        one lookup so common ancestors are fetched once.
        """
        if cache is None:
            cache = {}
        ancestors = []
        seen = {str(unit.id)}
        parent_id = unit.parent_id
        while parent_id and parent_id not in seen:
            seen.add(parent_id)
            if parent_id not in cache:
                cache[parent_id] = await self.get_unit_by_id(parent_id)
            parent = cache[parent_id]
            if parent is None:
                break
            ancestors.append(parent)
            parent_id = parent.parent_id
        return ancestors
