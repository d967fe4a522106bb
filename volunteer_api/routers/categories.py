"""Category API endpoints (all require authentication)."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body, validate_list_body
from volunteer_api.schemas.lookup import NamedCreate, NamedRead, NamedUpdate
from volunteer_api.services import category_service

router = APIRouter(dependencies=[Depends(get_current_user)])
bulk_router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[NamedRead])
def list_categories(db: Session = Depends(get_db)):
    return category_service.list_categories(db)


@router.get("/{category_id}", response_model=NamedRead)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return category_service.get_category(db, category_id)


@router.post("", response_model=NamedRead, status_code=status.HTTP_201_CREATED)
def create_category(payload: Any = Body(...), db: Session = Depends(get_db)):
    data = validate_body(NamedCreate, payload)
    category = category_service.create_category(db, data.name)
    db.commit()
    return category


@router.patch("/{category_id}", response_model=NamedRead)
def update_category(category_id: int, payload: Any = Body(...), db: Session = Depends(get_db)):
    data = validate_body(NamedUpdate, payload)
    category = category_service.update_category(db, category_id, data.patch_values())
    db.commit()
    return category


@router.delete("/{category_id}", response_model=NamedRead)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    category = category_service.remove_category(db, category_id)
    db.commit()
    return category


@bulk_router.post("", response_model=list[NamedRead], status_code=status.HTTP_201_CREATED)
def create_categories(payload: Any = Body(...), db: Session = Depends(get_db)):
    """
    Create several categories at once.

    The whole batch is rejected when a name repeats inside the request or
    already exists.
    """
    items = validate_list_body(NamedCreate, payload)
    categories = category_service.create_categories(db, [item.name for item in items])
    db.commit()
    return categories
