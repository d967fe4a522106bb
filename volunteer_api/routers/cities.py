"""City API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body, validate_list_body
from volunteer_api.schemas.city import CityCreate, CityRead, CityUpdate
from volunteer_api.services import city_service

router = APIRouter()
bulk_router = APIRouter()


@router.get("", response_model=list[CityRead])
def list_cities(
    region_id: int | None = Query(None, alias="regionId", gt=0),
    db: Session = Depends(get_db),
):
    """List cities, optionally for one region (cached)."""
    return city_service.list_cities(db, region_id)


@router.get("/{city_id}", response_model=CityRead)
def get_city(city_id: int, db: Session = Depends(get_db)):
    return city_service.city_to_read(city_service.get_city(db, city_id))


@router.post(
    "",
    response_model=CityRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_city(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    data = validate_body(CityCreate, payload)
    city = city_service.create_city(db, data)
    db.commit()
    return city_service.city_to_read(city)


@router.patch(
    "/{city_id}",
    response_model=CityRead,
    dependencies=[Depends(get_current_user)],
)
def update_city(
    city_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    data = validate_body(CityUpdate, payload)
    city = city_service.update_city(db, city_id, data.patch_values())
    db.commit()
    return city_service.city_to_read(city)


@router.delete(
    "/{city_id}",
    response_model=CityRead,
    dependencies=[Depends(get_current_user)],
)
def delete_city(
    city_id: int,
    db: Session = Depends(get_db),
):
    city = city_service.remove_city(db, city_id)
    db.commit()
    return city_service.city_to_read(city)


# =============================================================================
# v2 bulk create
# =============================================================================


@bulk_router.post(
    "",
    response_model=list[CityRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_cities(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    """Create several cities at once; nothing is written if any item is rejected."""
    items = validate_list_body(CityCreate, payload)
    cities = city_service.create_cities(db, items)
    db.commit()
    return [city_service.city_to_read(c) for c in cities]
