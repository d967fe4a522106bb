"""Region service. The list endpoint is served through the read-through cache."""

from sqlalchemy.orm import Session

from volunteer_api.db.models import Region
from volunteer_api.schemas.lookup import RegionRead
from volunteer_api.services import cache_service, lookup_service

LABEL = "Region"


def _serialize(regions: list[Region]) -> list[dict]:
    return [RegionRead.model_validate(r).model_dump(mode="json", by_alias=True) for r in regions]


def list_regions(db: Session) -> list[dict]:
    return cache_service.read_through(
        cache_service.REGIONS_ALL_KEY,
        lambda: _serialize(lookup_service.list_named(db, Region)),
    )


def get_region(db: Session, region_id: int) -> Region:
    return lookup_service.get_named(db, Region, region_id, LABEL)


def create_region(db: Session, name: str) -> Region:
    return lookup_service.create_named(db, Region, LABEL, name)


def update_region(db: Session, region_id: int, values: dict) -> Region:
    return lookup_service.update_named(db, Region, LABEL, region_id, values)


def remove_region(db: Session, region_id: int) -> Region:
    return lookup_service.remove_named(db, Region, LABEL, region_id)
