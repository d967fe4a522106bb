"""Achievement catalogue and awards."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import ConflictError
from volunteer_api.db.enums import RecordStatus
from volunteer_api.db.models import Achievement, User, UserAchievement
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.achievement import AchievementCreate
from volunteer_api.services.crud import (
    conflict_on_integrity_error,
    ensure_unique,
    require,
    require_exists,
)

logger = logging.getLogger(__name__)

LABEL = "Achievement"
ALREADY_RECEIVED = "User has already received this achievement"


def list_achievements(db: Session) -> list[Achievement]:
    return Repository(db, Achievement).list_all()


def get_achievement(db: Session, achievement_id: int) -> Achievement:
    return require(Repository(db, Achievement), achievement_id, LABEL)


def create_achievement(db: Session, data: AchievementCreate) -> Achievement:
    repo = Repository(db, Achievement)
    ensure_unique(repo, "title", data.title, LABEL)
    values = data.model_dump()
    values["rarity"] = data.rarity.value
    with conflict_on_integrity_error(db, f"{LABEL} '{data.title}' already exists"):
        return repo.add(Achievement(**values))


def update_achievement(db: Session, achievement_id: int, values: dict) -> Achievement:
    repo = Repository(db, Achievement)
    achievement = require(repo, achievement_id, LABEL)
    if "title" in values:
        ensure_unique(repo, "title", values["title"], LABEL, exclude_id=achievement_id)
    if values.get("rarity") is not None:
        values = {**values, "rarity": values["rarity"].value}
    with conflict_on_integrity_error(db, f"{LABEL} '{values.get('title')}' already exists"):
        return repo.patch(achievement, values)


def remove_achievement(db: Session, achievement_id: int) -> Achievement:
    repo = Repository(db, Achievement)
    return repo.soft_delete(require(repo, achievement_id, LABEL))


def find_award(db: Session, achievement_id: int, user_id: int) -> UserAchievement | None:
    return db.execute(
        select(UserAchievement).where(
            UserAchievement.user_id == user_id,
            UserAchievement.achievement_id == achievement_id,
        )
    ).scalar_one_or_none()


def assign_to_user(db: Session, achievement_id: int, user_id: int) -> UserAchievement:
    """Award an achievement once; a second award is a ConflictError."""
    require_exists(db, User, user_id, "User")
    get_achievement(db, achievement_id)

    if find_award(db, achievement_id, user_id) is not None:
        raise ConflictError(ALREADY_RECEIVED)

    award = UserAchievement(user_id=user_id, achievement_id=achievement_id)
    with conflict_on_integrity_error(db, ALREADY_RECEIVED):
        db.add(award)
        db.flush()
    db.refresh(award)
    logger.info("Achievement %s assigned to user %s", achievement_id, user_id)
    return award


def list_user_achievements(db: Session, user_id: int) -> list[UserAchievement]:
    require_exists(db, User, user_id, "User")
    query = (
        select(UserAchievement)
        .join(Achievement, Achievement.id == UserAchievement.achievement_id)
        .where(
            UserAchievement.user_id == user_id,
            Achievement.record_status != RecordStatus.DELETED.value,
        )
        .order_by(UserAchievement.received_at, UserAchievement.id)
    )
    return list(db.execute(query).scalars().all())
