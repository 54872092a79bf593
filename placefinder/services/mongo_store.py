"""MongoDB-backed gazetteer store built on the Beanie place documents."""

import logging
from typing import Dict, List, Optional, Set

from placefinder.configs import configs
from placefinder.models.hierarchy import PlaceType, PlaceUnit
from placefinder.schemas.search import AncestorRef, PlaceRecord
from placefinder.services.gazetteer_store import STORE_LOOKUP_LIMIT
from placefinder.services.place_unit_service import PlaceUnitService

logger = logging.getLogger(__name__)


class MongoGazetteerStore:
    def __init__(
        self,
        unit_service: Optional[PlaceUnitService] = None,
        lookup_limit: int = STORE_LOOKUP_LIMIT,
    ):
        languages = (configs.get("translations") or {}).get("languages")
        self.unit_service = unit_service or PlaceUnitService(languages=languages)
        self.lookup_limit = lookup_limit

    async def find_by_name_match(
        self,
        place_type: PlaceType,
        candidates: Set[str],
        tenant_id: Optional[str] = None,
    ) -> List[PlaceRecord]:
        by_name = await self.unit_service.find_units_by_name(
            place_type, candidates, tenant_id=tenant_id, limit=self.lookup_limit
        )
        by_translation = await self.unit_service.find_units_by_translation(
            place_type, candidates, tenant_id=tenant_id, limit=self.lookup_limit
        )

        units: Dict[str, PlaceUnit] = {}
        for unit in by_name + by_translation:
            units.setdefault(str(unit.id), unit)
        ordered = sorted(units.values(), key=lambda u: u.name)[: self.lookup_limit]

        cache: Dict[str, Optional[PlaceUnit]] = {}
        records = []
        for unit in ordered:
            ancestors = await self.unit_service.get_ancestor_units(unit, cache)
            records.append(
                PlaceRecord(
                    type=unit.type,
                    id=str(unit.id),
                    name=unit.name,
                    tenant_id=unit.tenant_id,
                    ancestors=[
                        AncestorRef(type=a.type, id=str(a.id), name=a.name)
                        for a in ancestors
                    ],
                )
            )
        logger.debug(
            f"{place_type.value} lookup for {sorted(candidates)} matched {len(records)} records"
        )
        return records
