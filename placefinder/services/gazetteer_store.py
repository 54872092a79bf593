"""
Gazetteer store interface used by the place search engine, plus an
in-process implementation.

A store answers one question: which places of a given type have a
canonical or translated name that equals, starts with or contains one of
the candidate strings (case-insensitive). How it does that (index, regex,
SQL LIKE) is up to the store.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol, Set, runtime_checkable

from placefinder.configs import configs
from placefinder.models.hierarchy import PlaceType, PARENT_TYPE
from placefinder.schemas.search import AncestorRef, PlaceRecord

logger = logging.getLogger(__name__)

STORE_LOOKUP_LIMIT = int((configs.get("search") or {}).get("store_lookup_limit", 50))


@runtime_checkable
class GazetteerStore(Protocol):
    async def find_by_name_match(
        self,
        place_type: PlaceType,
        candidates: Set[str],
        tenant_id: Optional[str] = None,
    ) -> List[PlaceRecord]:
        """Records of place_type whose canonical or translated name matches any candidate."""
        ...


def name_matches(name: Optional[str], candidates: Iterable[str]) -> bool:
    """Case-insensitive exact, prefix or substring match against any candidate."""
    if not name:
        return False
    lowered = name.lower()
    return any(c and c.lower() in lowered for c in candidates)


@dataclass
class GazetteerEntry:
    id: str
    name: str
    type: PlaceType
    parent_id: Optional[str] = None
    tenant_id: Optional[str] = None
    is_deleted: bool = False
    # language code -> localized name
    translations: Dict[str, str] = field(default_factory=dict)

    def names(self) -> List[str]:
        return [self.name, *self.translations.values()]


class InMemoryGazetteerStore:
    """
    Gazetteer held in a dict. Used for tests, fixtures and local runs
    without MongoDB.
    """

    def __init__(self, lookup_limit: int = STORE_LOOKUP_LIMIT):
        self.lookup_limit = lookup_limit
        self._entries: Dict[str, GazetteerEntry] = {}

    def add(
        self,
        place_type: PlaceType,
        id: str,
        name: str,
        parent_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
        translations: Optional[Dict[str, str]] = None,
        is_deleted: bool = False,
    ) -> GazetteerEntry:
        """Adds a place. The parent, if any, must already be present and one level up."""
        place_type = PlaceType(place_type)
        expected_parent = PARENT_TYPE[place_type]
        if expected_parent is None and parent_id is not None:
            raise ValueError(f"A {place_type.value} cannot have a parent.")
        if expected_parent is not None:
            parent = self._entries.get(parent_id) if parent_id else None
            if parent is None or parent.type != expected_parent:
                raise ValueError(
                    f"A {place_type.value} needs a {expected_parent.value} parent, "
                    f"got '{parent_id}'."
                )
        entry = GazetteerEntry(
            id=id,
            name=name,
            type=place_type,
            parent_id=parent_id,
            tenant_id=tenant_id if place_type == PlaceType.VILLAGE else None,
            is_deleted=is_deleted,
            translations=dict(translations or {}),
        )
        self._entries[id] = entry
        return entry

    def ancestors_of(self, entry: GazetteerEntry) -> List[AncestorRef]:
        """Ancestor chain, nearest first."""
        chain = []
        current = self._entries.get(entry.parent_id) if entry.parent_id else None
        while current is not None:
            chain.append(AncestorRef(type=current.type, id=current.id, name=current.name))
            current = self._entries.get(current.parent_id) if current.parent_id else None
        return chain

    async def find_by_name_match(
        self,
        place_type: PlaceType,
        candidates: Set[str],
        tenant_id: Optional[str] = None,
    ) -> List[PlaceRecord]:
        matches = [
            entry
            for entry in self._entries.values()
            if entry.type == place_type
            and not entry.is_deleted
            and (tenant_id is None or entry.tenant_id == tenant_id)
            and any(name_matches(name, candidates) for name in entry.names())
        ]
        matches.sort(key=lambda e: e.name)
        return [
            PlaceRecord(
                type=entry.type,
                id=entry.id,
                name=entry.name,
                tenant_id=entry.tenant_id,
                ancestors=self.ancestors_of(entry),
            )
            for entry in matches[: self.lookup_limit]
        ]
