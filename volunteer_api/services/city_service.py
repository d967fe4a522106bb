"""City service.

List reads go through the read-through cache (``cities:all`` and
``cities:region:<id>``) and return JSON-ready dicts.
"""

import logging

from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import ConflictError
from volunteer_api.db.models import City, Region
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.city import CityCreate, CityRead
from volunteer_api.services import cache_service
from volunteer_api.services.crud import (
    find_batch_duplicates,
    require,
    require_all_exist,
    require_exists,
)
from volunteer_api.utils.coordinates import format_coordinate, parse_coordinate

logger = logging.getLogger(__name__)

LABEL = "City"
COORDINATE_FIELDS = ("latitude", "longitude")


def city_to_read(city: City) -> CityRead:
    region = city.region
    return CityRead(
        id=city.id,
        name=city.name,
        latitude=parse_coordinate(city.latitude),
        longitude=parse_coordinate(city.longitude),
        region_id=city.region_id,
        region={"id": region.id, "name": region.name} if region is not None else None,
        record_status=city.record_status,
        created_at=city.created_at,
        updated_at=city.updated_at,
    )


def _serialize(cities: list[City]) -> list[dict]:
    return [city_to_read(c).model_dump(mode="json", by_alias=True) for c in cities]


def list_cities(db: Session, region_id: int | None = None) -> list[dict]:
    repo = Repository(db, City)
    if region_id is None:
        key = cache_service.CITIES_ALL_KEY
    else:
        key = cache_service.cities_by_region_key(region_id)
    return cache_service.read_through(key, lambda: _serialize(repo.list_all(region_id=region_id)))


def list_region_cities(db: Session, region_id: int) -> list[dict]:
    """Cities of an existing region; the region check only runs on a cache miss."""

    def load() -> list[dict]:
        require_exists(db, Region, region_id, "Region")
        return _serialize(Repository(db, City).list_all(region_id=region_id))

    return cache_service.read_through(cache_service.cities_by_region_key(region_id), load)


def get_city(db: Session, city_id: int) -> City:
    return require(Repository(db, City), city_id, LABEL)


def _column_values(values: dict) -> dict:
    """Convert numeric coordinates to their stored decimal-text form."""
    converted = dict(values)
    for field in COORDINATE_FIELDS:
        if field in converted:
            converted[field] = format_coordinate(converted[field])
    return converted


def create_city(db: Session, data: CityCreate) -> City:
    require_exists(db, Region, data.region_id, "Region")
    return Repository(db, City).add(City(**_column_values(data.model_dump())))


def create_cities(db: Session, items: list[CityCreate]) -> list[City]:
    """All-or-nothing insert; (name, region) pairs must be unique in the batch and store."""
    pairs = [(item.name, item.region_id) for item in items]
    duplicates = find_batch_duplicates(pairs)
    if duplicates:
        raise ConflictError(
            "City duplicate in request: " + ", ".join(f"{n} (region {r})" for n, r in duplicates)
        )
    require_all_exist(db, Region, {item.region_id for item in items}, "Region")

    repo = Repository(db, City)
    existing = {
        (c.name, c.region_id) for c in repo.find_many_by("name", {name for name, _ in pairs})
    }
    clashes = [pair for pair in pairs if pair in existing]
    if clashes:
        raise ConflictError(
            "City already exists: " + ", ".join(f"{n} (region {r})" for n, r in clashes)
        )
    cities = repo.add_all([City(**_column_values(item.model_dump())) for item in items])
    logger.info("Bulk created %d cities", len(cities))
    return cities


def update_city(db: Session, city_id: int, values: dict) -> City:
    repo = Repository(db, City)
    city = require(repo, city_id, LABEL)
    if "region_id" in values:
        require_exists(db, Region, values["region_id"], "Region")
    return repo.patch(city, _column_values(values))


def remove_city(db: Session, city_id: int) -> City:
    repo = Repository(db, City)
    return repo.soft_delete(require(repo, city_id, LABEL))
