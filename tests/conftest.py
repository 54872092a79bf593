"""Shared fixtures for the place search test suite."""

import pytest

from placefinder.models.hierarchy import PlaceType
from placefinder.services.gazetteer_store import InMemoryGazetteerStore
from placefinder.services.place_search_service import PlaceSearchService


# ═══════════════════════════════════════════════════
# Gazetteer fixtures
# ═══════════════════════════════════════════════════

CANONICAL_DISTRICTS = {
    "dst_vsp": "Visakhapatnam",
    "dst_gnt": "Guntur",
    "dst_ctr": "Chittoor",
    "dst_knl": "Kurnool",
    "dst_kdp": "YSR Kadapa",
}

# More Andhra Pradesh districts with transliteration-prone names
MORE_AP_DISTRICTS = {
    "dst_tpt": "Tirupati",
    "dst_nlr": "SPSR Nellore",
    "dst_sklm": "Srikakulam",
    "dst_atp": "Ananthapuramu",
    "dst_pksm": "Prakasam",
    "dst_elr": "Eluru",
    "dst_akp": "Anakapalli",
}


@pytest.fixture
def district_store():
    """Andhra Pradesh with the five canonical districts only."""
    store = InMemoryGazetteerStore()
    store.add(PlaceType.STATE, "st_ap", "Andhra Pradesh")
    for district_id, name in CANONICAL_DISTRICTS.items():
        store.add(PlaceType.DISTRICT, district_id, name, parent_id="st_ap")
    return store


@pytest.fixture
def gazetteer_store(district_store):
    """Canonical districts plus mandals, tenant-scoped villages and translations."""
    store = district_store
    store.add(PlaceType.STATE, "st_tg", "Telangana", translations={"te": "తెలంగాణ"})
    store.add(PlaceType.DISTRICT, "dst_hyd", "Hyderabad", parent_id="st_tg")

    store.add(PlaceType.MANDAL, "mdl_tenali", "Tenali", parent_id="dst_gnt")
    store.add(
        PlaceType.MANDAL,
        "mdl_mangalagiri",
        "Mangalagiri",
        parent_id="dst_gnt",
        translations={"te": "మంగళగిరి"},
    )
    store.add(PlaceType.MANDAL, "mdl_gkonduru", "G. Konduru", parent_id="dst_gnt")

    store.add(
        PlaceType.VILLAGE,
        "vil_kolakaluru",
        "Kolakaluru",
        parent_id="mdl_tenali",
        tenant_id="tenant_a",
    )
    store.add(
        PlaceType.VILLAGE,
        "vil_kolanukonda",
        "Kolanukonda",
        parent_id="mdl_mangalagiri",
        tenant_id="tenant_b",
    )
    store.add(
        PlaceType.VILLAGE,
        "vil_old",
        "Kolavennu",
        parent_id="mdl_tenali",
        tenant_id="tenant_a",
        is_deleted=True,
    )
    return store


@pytest.fixture
def search_service(gazetteer_store):
    return PlaceSearchService(gazetteer_store)


@pytest.fixture
def district_search(district_store):
    return PlaceSearchService(district_store)


@pytest.fixture
def ap_district_search(district_store):
    """Canonical districts plus the rest of the commonly misspelled ones."""
    for district_id, name in MORE_AP_DISTRICTS.items():
        district_store.add(PlaceType.DISTRICT, district_id, name, parent_id="st_ap")
    return PlaceSearchService(district_store)
