"""Organization progress post endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.db.models import User
from volunteer_api.schemas.post import (
    OrganizationUpdateCreate,
    OrganizationUpdatePatch,
    OrganizationUpdateRead,
)
from volunteer_api.services import organization_update_service

router = APIRouter()


@router.get("", response_model=list[OrganizationUpdateRead])
def list_organization_updates(
    organization_id: int | None = Query(None, alias="organizationId"),
    db: Session = Depends(get_db),
):
    """List posts, optionally for one organization."""
    return organization_update_service.list_updates(db, organization_id)


@router.get("/{update_id}", response_model=OrganizationUpdateRead)
def get_organization_update(update_id: int, db: Session = Depends(get_db)):
    return organization_update_service.get_update(db, update_id)


@router.post("", response_model=OrganizationUpdateRead, status_code=status.HTTP_201_CREATED)
def create_organization_update(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(OrganizationUpdateCreate, payload)
    post = organization_update_service.create_update(db, user.id, data)
    db.commit()
    return post


@router.patch("/{update_id}", response_model=OrganizationUpdateRead)
def update_organization_update(
    update_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(OrganizationUpdatePatch, payload)
    post = organization_update_service.update_update(db, user.id, update_id, data.patch_values())
    db.commit()
    return post


@router.delete("/{update_id}", response_model=OrganizationUpdateRead)
def delete_organization_update(
    update_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = organization_update_service.remove_update(db, user.id, update_id)
    db.commit()
    return post
