from fastapi import Depends

from placefinder.services.gazetteer_store import GazetteerStore
from placefinder.services.mongo_store import MongoGazetteerStore
from placefinder.services.place_search_service import PlaceSearchService

_store = MongoGazetteerStore()


def get_gazetteer_store() -> GazetteerStore:
    """Store backing place search. Override in tests via app.dependency_overrides."""
    return _store


def get_place_search_service(
    store: GazetteerStore = Depends(get_gazetteer_store),
) -> PlaceSearchService:
    return PlaceSearchService(store)
