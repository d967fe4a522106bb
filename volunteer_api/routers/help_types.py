"""Help type API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.schemas.lookup import NamedCreate, NamedRead, NamedUpdate
from volunteer_api.services import help_type_service

router = APIRouter()


@router.get("", response_model=list[NamedRead])
def list_help_types(db: Session = Depends(get_db)):
    return help_type_service.list_help_types(db)


@router.get("/{help_type_id}", response_model=NamedRead)
def get_help_type(help_type_id: int, db: Session = Depends(get_db)):
    return help_type_service.get_help_type(db, help_type_id)


@router.post(
    "",
    response_model=NamedRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_help_type(payload: Any = Body(...), db: Session = Depends(get_db)):
    data = validate_body(NamedCreate, payload)
    help_type = help_type_service.create_help_type(db, data.name)
    db.commit()
    return help_type


@router.patch(
    "/{help_type_id}",
    response_model=NamedRead,
    dependencies=[Depends(get_current_user)],
)
def update_help_type(help_type_id: int, payload: Any = Body(...), db: Session = Depends(get_db)):
    data = validate_body(NamedUpdate, payload)
    help_type = help_type_service.update_help_type(db, help_type_id, data.patch_values())
    db.commit()
    return help_type


@router.delete(
    "/{help_type_id}",
    response_model=NamedRead,
    dependencies=[Depends(get_current_user)],
)
def delete_help_type(help_type_id: int, db: Session = Depends(get_db)):
    help_type = help_type_service.remove_help_type(db, help_type_id)
    db.commit()
    return help_type
