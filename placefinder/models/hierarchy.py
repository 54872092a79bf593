from enum import Enum
from typing import Optional, Dict, Any, Iterable, List
from beanie import Document, Indexed


# --- Place Types (fixed four-level hierarchy) ---
class PlaceType(str, Enum):
    """Levels of the administrative hierarchy, from the root down."""

    STATE = "state"
    DISTRICT = "district"
    MANDAL = "mandal"
    VILLAGE = "village"

    @classmethod
    def parse(cls, value: Any) -> Optional["PlaceType"]:
        """Case-insensitive lookup by value or member name; None if unknown."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return None

    @classmethod
    def parse_many(cls, values: Optional[Iterable[Any]]) -> List["PlaceType"]:
        """
        Parses requested types, silently dropping unknown ones. Returns the
        known types in hierarchy order; an empty input means all four.
        """
        requested = {cls.parse(v) for v in (values or [])}
        requested.discard(None)
        if not requested:
            return list(cls)
        return [member for member in cls if member in requested]


# Parent level of every non-root type
PARENT_TYPE: Dict[PlaceType, Optional[PlaceType]] = {
    PlaceType.STATE: None,
    PlaceType.DISTRICT: PlaceType.STATE,
    PlaceType.MANDAL: PlaceType.DISTRICT,
    PlaceType.VILLAGE: PlaceType.MANDAL,
}


# --- PlaceUnit Model ---
class PlaceUnit(Document):
    """
    A single gazetteer entry. States have no parent; villages are also
    scoped to a tenant, independently of their geographic ancestry.
    """

    name: Indexed(str)
    type: PlaceType
    parent_id: Optional[str] = None  # ID of the parent PlaceUnit
    tenant_id: Optional[str] = None  # villages only
    is_deleted: bool = False

    class Settings:
        name = "place_units"
        indexes = ["type", "parent_id", "tenant_id"]


class PlaceNameTranslation(Document):
    """Localized name of a PlaceUnit, one per entity per language."""

    entity_id: Indexed(str)
    entity_type: PlaceType
    language: str
    name: str

    class Settings:
        name = "place_name_translations"
