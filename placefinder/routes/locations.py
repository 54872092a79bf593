# placefinder/routes/locations.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from placefinder.schemas.search import CombinedSearchResponse, SearchResponse
from placefinder.services.place_search_service import PlaceSearchService, DEFAULT_LIMIT
from placefinder.dependencies.search import get_place_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
async def search_locations(
    q: str = Query("", description='Search term, e.g. "ఆదిలాబాద్" or "Adilabad"'),
    limit: int = Query(DEFAULT_LIMIT, description="Clamped to 1..50"),
    types: Optional[str] = Query(
        None, description="Optional comma-separated types: STATE,DISTRICT,MANDAL,VILLAGE"
    ),
    include_village: bool = Query(
        False,
        alias="includeVillage",
        description="If true, prepends a village suggestion using the raw query.",
    ),
    tenant_id: Optional[str] = Query(
        None, alias="tenantId", description="Tenant scope for villages"
    ),
    search_service: PlaceSearchService = Depends(get_place_search_service),
):
    """
    Searches states, districts, mandals and villages by name, tolerating
    common misspellings and transliteration variants.
    """
    requested_types = [t.strip() for t in types.split(",") if t.strip()] if types else []
    try:
        items = await search_service.search(
            q,
            limit=limit,
            types=requested_types,
            include_village_suggestion=include_village,
            tenant_id=tenant_id,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"GET /locations/search failed for '{q}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search locations",
        )
    return SearchResponse(q=q.strip(), count=len(items), items=items)


@router.get("/search-combined", response_model=CombinedSearchResponse)
async def search_locations_combined(
    q: str = Query("", description="Search term across all levels"),
    limit: int = Query(DEFAULT_LIMIT, description="Clamped to 1..50"),
    tenant_id: Optional[str] = Query(
        None, alias="tenantId", description="Tenant scope for villages"
    ),
    search_service: PlaceSearchService = Depends(get_place_search_service),
):
    """
    Searches every level and returns each match with its full hierarchy
    nested as {id, name} references. Responds 404 when nothing matches.
    """
    query = q.strip()
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="q is required")
    try:
        items = await search_service.search_combined(query, limit=limit, tenant_id=tenant_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"GET /locations/search-combined failed for '{query}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search locations",
        )
    if not items:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Area Not adding contact admin",
        )
    return CombinedSearchResponse(q=query, count=len(items), items=items)
