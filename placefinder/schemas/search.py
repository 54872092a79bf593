from enum import Enum
from typing import Optional, List, Set
from pydantic import BaseModel, ConfigDict, Field

from placefinder.models.hierarchy import PlaceType


class ResultType(str, Enum):
    """Type tag of a search result: a place level or the synthetic suggestion."""

    STATE = "state"
    DISTRICT = "district"
    MANDAL = "mandal"
    VILLAGE = "village"
    SUGGESTION = "suggestion"


# --- Store-facing records ---
class AncestorRef(BaseModel):
    type: PlaceType
    id: str
    name: str


class PlaceRecord(BaseModel):
    """A matched place with its resolved ancestors, nearest first."""

    type: PlaceType
    id: str
    name: str
    tenant_id: Optional[str] = None
    ancestors: List[AncestorRef] = Field(default_factory=list)

    def ancestor(self, place_type: PlaceType) -> Optional[AncestorRef]:
        for ref in self.ancestors:
            if ref.type == place_type:
                return ref
        return None


# --- Search API ---
class SearchRequest(BaseModel):
    query: str = ""
    limit: Optional[int] = 20
    types: Set[PlaceType] = Field(default_factory=set)
    include_village_suggestion: bool = False
    tenant_id: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class SearchResult(BaseModel):
    type: ResultType
    id: Optional[str] = None
    place_id: Optional[str] = None
    name: str
    display_name: str
    state_id: Optional[str] = None
    state_name: Optional[str] = None
    district_id: Optional[str] = None
    district_name: Optional[str] = None
    mandal_id: Optional[str] = None
    mandal_name: Optional[str] = None
    village_id: Optional[str] = None
    village_name: Optional[str] = None
    address: Optional[str] = None
    tenant_id: Optional[str] = None
    score: Optional[float] = None


class SearchResponse(BaseModel):
    q: str
    count: int
    items: List[SearchResult] = Field(default_factory=list)


# --- Combined search API ---
class PlaceRef(BaseModel):
    id: str
    name: Optional[str] = None


class CombinedSearchItem(BaseModel):
    """A match with every hierarchy level nested as an {id, name} reference."""

    type: ResultType
    match: Optional[PlaceRef] = None
    state: Optional[PlaceRef] = None
    district: Optional[PlaceRef] = None
    mandal: Optional[PlaceRef] = None
    village: Optional[PlaceRef] = None


class CombinedSearchResponse(BaseModel):
    q: str
    count: int
    items: List[CombinedSearchItem] = Field(default_factory=list)
