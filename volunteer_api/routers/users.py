"""User profile endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.db.models import User
from volunteer_api.schemas.user import UserRead, UserUpdate
from volunteer_api.services import user_service

router = APIRouter()


@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the caller's own profile."""
    data = validate_body(UserUpdate, payload)
    updated = user_service.update_user(db, user.id, user_id, data.patch_values())
    db.commit()
    return updated


@router.delete("/{user_id}", response_model=UserRead)
def delete_user(
    user_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    removed = user_service.remove_user(db, user.id, user_id)
    db.commit()
    return removed
