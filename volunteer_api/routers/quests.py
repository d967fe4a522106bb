"""Quest API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.db.enums import QuestStatus
from volunteer_api.db.models import User
from volunteer_api.schemas.quest import (
    QuestCreate,
    QuestParticipant,
    QuestPatch,
    QuestRead,
    UserQuestRead,
)
from volunteer_api.services import quest_service
from volunteer_api.services.quest_service import quest_to_read

router = APIRouter()


# =============================================================================
# Reads
# =============================================================================


@router.get("", response_model=list[QuestRead])
def list_quests(
    city_id: int | None = Query(None, alias="cityId"),
    category_id: int | None = Query(None, alias="categoryId"),
    db: Session = Depends(get_db),
):
    """List quests, optionally filtered by city and category."""
    return [quest_to_read(q) for q in quest_service.list_quests(db, city_id, category_id)]


@router.get("/filter", response_model=list[QuestRead])
def filter_quests(
    quest_status: QuestStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return [quest_to_read(q) for q in quest_service.list_quests_by_status(db, quest_status)]


@router.get("/user/{user_id}", response_model=list[UserQuestRead])
def get_user_quests(user_id: int, db: Session = Depends(get_db)):
    """Quests a user has joined, with participation status."""
    return quest_service.get_user_quests(db, user_id)


@router.get("/available/{user_id}", response_model=list[QuestRead])
def get_available_quests(user_id: int, db: Session = Depends(get_db)):
    return [quest_to_read(q) for q in quest_service.get_available_quests(db, user_id)]


@router.get("/{quest_id}", response_model=QuestRead)
def get_quest(quest_id: int, db: Session = Depends(get_db)):
    return quest_to_read(quest_service.get_quest(db, quest_id))


@router.get("/{quest_id}/users", response_model=list[QuestParticipant])
def get_quest_users(quest_id: int, db: Session = Depends(get_db)):
    return [
        QuestParticipant(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            middle_name=user.middle_name,
            status=participation.status,
        )
        for user, participation in quest_service.get_quest_users(db, quest_id)
    ]


# =============================================================================
# Writes
# =============================================================================


@router.post("", response_model=QuestRead, status_code=status.HTTP_201_CREATED)
def create_quest(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a quest owned by the current user."""
    data = validate_body(QuestCreate, payload)
    quest = quest_service.create_quest(db, user.id, data)
    db.commit()
    return quest_to_read(quest)


@router.patch("/{quest_id}", response_model=QuestRead)
def update_quest(
    quest_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(QuestPatch, payload)
    quest = quest_service.update_quest(db, user.id, quest_id, data.patch_values(), data.steps)
    db.commit()
    return quest_to_read(quest)


@router.delete("/{quest_id}", response_model=QuestRead)
def delete_quest(
    quest_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    quest = quest_service.remove_quest(db, user.id, quest_id)
    db.commit()
    return quest_to_read(quest)


# =============================================================================
# Participation and lifecycle
# =============================================================================


@router.post(
    "/{quest_id}/join/{user_id}",
    response_model=UserQuestRead,
    status_code=status.HTTP_201_CREATED,
)
def join_quest(
    quest_id: int,
    user_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    participation = quest_service.join_quest(db, user.id, user_id, quest_id)
    db.commit()
    return participation


@router.post("/{quest_id}/leave/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def leave_quest(
    quest_id: int,
    user_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    quest_service.leave_quest(db, user.id, user_id, quest_id)
    db.commit()


@router.post("/{quest_id}/complete", response_model=QuestRead)
def complete_quest(
    quest_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Complete the quest and reward every participant still in progress."""
    quest = quest_service.complete_quest(db, user.id, quest_id)
    db.commit()
    return quest_to_read(quest)


@router.post("/{quest_id}/archive", response_model=QuestRead)
def archive_quest(
    quest_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    quest = quest_service.archive_quest(db, user.id, quest_id)
    db.commit()
    return quest_to_read(quest)
