"""Organization type API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.schemas.lookup import NamedCreate, NamedRead, NamedUpdate
from volunteer_api.services import organization_type_service

router = APIRouter()


@router.get("", response_model=list[NamedRead])
def list_organization_types(db: Session = Depends(get_db)):
    return organization_type_service.list_organization_types(db)


@router.get("/{type_id}", response_model=NamedRead)
def get_organization_type(type_id: int, db: Session = Depends(get_db)):
    return organization_type_service.get_organization_type(db, type_id)


@router.post(
    "",
    response_model=NamedRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_organization_type(payload: Any = Body(...), db: Session = Depends(get_db)):
    data = validate_body(NamedCreate, payload)
    org_type = organization_type_service.create_organization_type(db, data.name)
    db.commit()
    return org_type


@router.patch(
    "/{type_id}",
    response_model=NamedRead,
    dependencies=[Depends(get_current_user)],
)
def update_organization_type(type_id: int, payload: Any = Body(...), db: Session = Depends(get_db)):
    data = validate_body(NamedUpdate, payload)
    org_type = organization_type_service.update_organization_type(db, type_id, data.patch_values())
    db.commit()
    return org_type


@router.delete(
    "/{type_id}",
    response_model=NamedRead,
    dependencies=[Depends(get_current_user)],
)
def delete_organization_type(type_id: int, db: Session = Depends(get_db)):
    org_type = organization_type_service.remove_organization_type(db, type_id)
    db.commit()
    return org_type
