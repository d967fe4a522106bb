"""Achievement API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.schemas.achievement import (
    AchievementCreate,
    AchievementRead,
    AchievementUpdate,
    UserAchievementRead,
)
from volunteer_api.services import achievement_service

router = APIRouter()


@router.get("", response_model=list[AchievementRead])
def list_achievements(db: Session = Depends(get_db)):
    return achievement_service.list_achievements(db)


@router.get("/user/{user_id}", response_model=list[UserAchievementRead])
def list_user_achievements(user_id: int, db: Session = Depends(get_db)):
    """Achievements a user has received, oldest first."""
    return achievement_service.list_user_achievements(db, user_id)


@router.get("/{achievement_id}", response_model=AchievementRead)
def get_achievement(achievement_id: int, db: Session = Depends(get_db)):
    return achievement_service.get_achievement(db, achievement_id)


@router.post(
    "",
    response_model=AchievementRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_achievement(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    data = validate_body(AchievementCreate, payload)
    achievement = achievement_service.create_achievement(db, data)
    db.commit()
    return achievement


@router.patch(
    "/{achievement_id}",
    response_model=AchievementRead,
    dependencies=[Depends(get_current_user)],
)
def update_achievement(
    achievement_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    data = validate_body(AchievementUpdate, payload)
    achievement = achievement_service.update_achievement(db, achievement_id, data.patch_values())
    db.commit()
    return achievement


@router.delete(
    "/{achievement_id}",
    response_model=AchievementRead,
    dependencies=[Depends(get_current_user)],
)
def delete_achievement(
    achievement_id: int,
    db: Session = Depends(get_db),
):
    achievement = achievement_service.remove_achievement(db, achievement_id)
    db.commit()
    return achievement


@router.post(
    "/{achievement_id}/assign/{user_id}",
    response_model=UserAchievementRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def assign_achievement(
    achievement_id: int,
    user_id: int,
    db: Session = Depends(get_db),
):
    """Award an achievement to a user; a second award returns 409."""
    award = achievement_service.assign_to_user(db, achievement_id, user_id)
    db.commit()
    return award
