"""Tests for PlaceType parsing and the in-memory gazetteer store."""

import pytest

from placefinder.models.hierarchy import PlaceType, PlaceUnit
from placefinder.services.gazetteer_store import (
    GazetteerStore,
    InMemoryGazetteerStore,
    name_matches,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("STATE", PlaceType.STATE),
        ("district", PlaceType.DISTRICT),
        (" Mandal ", PlaceType.MANDAL),
        (PlaceType.VILLAGE, PlaceType.VILLAGE),
        ("taluka", None),
        (None, None),
        (3, None),
    ],
)
def test_place_type_parse(value, expected):
    assert PlaceType.parse(value) == expected


def test_parse_many_keeps_hierarchy_order():
    assert PlaceType.parse_many(["village", "STATE", "village"]) == [
        PlaceType.STATE,
        PlaceType.VILLAGE,
    ]


def test_parse_many_empty_means_all():
    assert PlaceType.parse_many(None) == list(PlaceType)
    assert PlaceType.parse_many([]) == list(PlaceType)
    assert PlaceType.parse_many(["nowhere"]) == list(PlaceType)


def test_place_unit_fields():
    assert set(PlaceUnit.model_fields) >= {"name", "type", "parent_id", "tenant_id", "is_deleted"}
    assert "metadata" not in PlaceUnit.model_fields


@pytest.mark.parametrize(
    "name, candidates, expected",
    [
        ("Guntur", ["guntur"], True),
        ("Guntur Rural", ["GUNTUR"], True),
        ("YSR Kadapa", ["kadapa"], True),
        ("Guntur", ["gunttur"], False),
        ("Guntur", [], False),
        (None, ["guntur"], False),
    ],
)
def test_name_matches(name, candidates, expected):
    assert name_matches(name, candidates) is expected


def test_store_satisfies_protocol():
    assert isinstance(InMemoryGazetteerStore(), GazetteerStore)


class TestInMemoryStore:
    def test_rejects_parent_of_wrong_level(self, district_store):
        with pytest.raises(ValueError):
            district_store.add(PlaceType.VILLAGE, "v1", "Nowhere", parent_id="dst_gnt")

    def test_rejects_state_with_parent(self, district_store):
        with pytest.raises(ValueError):
            district_store.add(PlaceType.STATE, "s2", "Odisha", parent_id="st_ap")

    def test_tenant_only_kept_for_villages(self, district_store):
        entry = district_store.add(
            PlaceType.MANDAL, "m1", "Tenali", parent_id="dst_gnt", tenant_id="t1"
        )
        assert entry.tenant_id is None

    @pytest.mark.asyncio
    async def test_results_sorted_and_limited(self, district_store):
        district_store.lookup_limit = 2
        records = await district_store.find_by_name_match(PlaceType.DISTRICT, {"u"})
        assert [r.name for r in records] == ["Guntur", "Kurnool"]

    @pytest.mark.asyncio
    async def test_translation_surface(self, gazetteer_store):
        records = await gazetteer_store.find_by_name_match(PlaceType.STATE, {"తెలంగాణ"})
        assert [r.id for r in records] == ["st_tg"]

    @pytest.mark.asyncio
    async def test_ancestors_nearest_first(self, gazetteer_store):
        records = await gazetteer_store.find_by_name_match(
            PlaceType.VILLAGE, {"kolakaluru"}, tenant_id="tenant_a"
        )
        assert [a.id for a in records[0].ancestors] == ["mdl_tenali", "dst_gnt", "st_ap"]
