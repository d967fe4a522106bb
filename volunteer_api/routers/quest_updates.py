"""Quest progress post endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.db.models import User
from volunteer_api.schemas.post import QuestUpdateCreate, QuestUpdatePatch, QuestUpdateRead
from volunteer_api.services import quest_update_service

router = APIRouter()


@router.get("", response_model=list[QuestUpdateRead])
def list_quest_updates(
    quest_id: int | None = Query(None, alias="questId"),
    db: Session = Depends(get_db),
):
    return quest_update_service.list_updates(db, quest_id)


@router.get("/{update_id}", response_model=QuestUpdateRead)
def get_quest_update(update_id: int, db: Session = Depends(get_db)):
    return quest_update_service.get_update(db, update_id)


@router.post("", response_model=QuestUpdateRead, status_code=status.HTTP_201_CREATED)
def create_quest_update(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Publish a progress post; only the quest owner may do so."""
    data = validate_body(QuestUpdateCreate, payload)
    post = quest_update_service.create_update(db, user.id, data)
    db.commit()
    return post


@router.patch("/{update_id}", response_model=QuestUpdateRead)
def update_quest_update(
    update_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(QuestUpdatePatch, payload)
    post = quest_update_service.update_update(db, user.id, update_id, data.patch_values())
    db.commit()
    return post


@router.delete("/{update_id}", response_model=QuestUpdateRead)
def delete_quest_update(
    update_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = quest_update_service.remove_update(db, user.id, update_id)
    db.commit()
    return post
