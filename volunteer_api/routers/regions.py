"""Region API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.schemas.city import CityRead
from volunteer_api.schemas.lookup import RegionCreate, RegionRead, RegionUpdate
from volunteer_api.services import city_service, region_service

router = APIRouter()


# =============================================================================
# Reads (public, cached list)
# =============================================================================


@router.get("", response_model=list[RegionRead])
def list_regions(db: Session = Depends(get_db)):
    """List all regions (served from the short-TTL cache when warm)."""
    return region_service.list_regions(db)


@router.get("/{region_id}", response_model=RegionRead)
def get_region(region_id: int, db: Session = Depends(get_db)):
    return region_service.get_region(db, region_id)


@router.get("/{region_id}/cities", response_model=list[CityRead])
def list_region_cities(region_id: int, db: Session = Depends(get_db)):
    """List cities of a region."""
    return city_service.list_region_cities(db, region_id)


# =============================================================================
# Writes
# =============================================================================


@router.post(
    "",
    response_model=RegionRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_region(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    data = validate_body(RegionCreate, payload)
    region = region_service.create_region(db, data.name)
    db.commit()
    return region


@router.patch(
    "/{region_id}",
    response_model=RegionRead,
    dependencies=[Depends(get_current_user)],
)
def update_region(
    region_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    data = validate_body(RegionUpdate, payload)
    region = region_service.update_region(db, region_id, data.patch_values())
    db.commit()
    return region


@router.delete(
    "/{region_id}",
    response_model=RegionRead,
    dependencies=[Depends(get_current_user)],
)
def delete_region(
    region_id: int,
    db: Session = Depends(get_db),
):
    """Soft-delete a region."""
    region = region_service.remove_region(db, region_id)
    db.commit()
    return region
