"""Quest service: CRUD, participation and completion rewards."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from volunteer_api.db.enums import QuestStatus, RecordStatus, UserQuestStatus
from volunteer_api.db.models import (
    Achievement,
    Category,
    City,
    OrganizationType,
    Quest,
    QuestCategory,
    User,
    UserQuest,
)
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.quest import QuestCreate, QuestRead
from volunteer_api.services import achievement_service, experience_service, message_queue_service
from volunteer_api.services.crud import (
    conflict_on_integrity_error,
    require,
    require_all_exist,
    require_exists,
)
from volunteer_api.utils.coordinates import format_coordinate, parse_coordinate

logger = logging.getLogger(__name__)

LABEL = "Quest"
QUEST_EVENTS_QUEUE = "quest.events"
COORDINATE_FIELDS = ("latitude", "longitude")


def quest_to_read(quest: Quest) -> QuestRead:
    return QuestRead(
        id=quest.id,
        title=quest.title,
        description=quest.description,
        status=quest.status,
        experience_reward=quest.experience_reward,
        achievement_id=quest.achievement_id,
        owner_id=quest.owner_id,
        city_id=quest.city_id,
        organization_type_id=quest.organization_type_id,
        latitude=parse_coordinate(quest.latitude),
        longitude=parse_coordinate(quest.longitude),
        address=quest.address,
        contacts=quest.contacts or [],
        cover_image=quest.cover_image,
        gallery=quest.gallery or [],
        steps=quest.steps or [],
        categories=[
            {"id": c.id, "name": c.name}
            for c in quest.categories
            if c.record_status != RecordStatus.DELETED.value
        ],
        record_status=quest.record_status,
        created_at=quest.created_at,
        updated_at=quest.updated_at,
    )


# =============================================================================
# Reads
# =============================================================================


def list_quests(
    db: Session, city_id: int | None = None, category_id: int | None = None
) -> list[Quest]:
    repo = Repository(db, Quest)
    query = repo.live()
    if city_id is not None:
        query = query.where(Quest.city_id == city_id)
    if category_id is not None:
        query = query.join(QuestCategory, QuestCategory.quest_id == Quest.id).where(
            QuestCategory.category_id == category_id
        )
    return repo.query("list_quests", query.order_by(Quest.id), city_id=city_id, category_id=category_id)


def list_quests_by_status(db: Session, status: QuestStatus | None = None) -> list[Quest]:
    return Repository(db, Quest).list_all(status=status.value if status else None)


def get_quest(db: Session, quest_id: int) -> Quest:
    return require(Repository(db, Quest), quest_id, LABEL)


def _require_owned_quest(db: Session, user_id: int, quest_id: int, action: str) -> Quest:
    quest = get_quest(db, quest_id)
    if quest.owner_id != user_id:
        raise ForbiddenError(f"Only the quest owner can {action} this quest")
    return quest


# =============================================================================
# Create / update / delete
# =============================================================================


def _check_references(db: Session, values: dict) -> None:
    if values.get("city_id") is not None:
        require_exists(db, City, values["city_id"], "City")
    if values.get("organization_type_id") is not None:
        require_exists(db, OrganizationType, values["organization_type_id"], "Organization type")
    if values.get("achievement_id") is not None:
        require_exists(db, Achievement, values["achievement_id"], "Achievement")
    if values.get("category_ids"):
        require_all_exist(db, Category, values["category_ids"], "Category")


def _column_values(values: dict, steps) -> dict:
    converted = dict(values)
    converted.pop("category_ids", None)
    for field in COORDINATE_FIELDS:
        if field in converted:
            converted[field] = format_coordinate(converted[field])
    if "steps" in converted:
        converted["steps"] = [
            step.model_dump(mode="json", by_alias=True) for step in steps or []
        ]
    return converted


def _set_categories(db: Session, quest_id: int, category_ids: list[int]) -> None:
    db.execute(delete(QuestCategory).where(QuestCategory.quest_id == quest_id))
    db.add_all(QuestCategory(quest_id=quest_id, category_id=c) for c in category_ids)
    db.flush()


def create_quest(db: Session, owner_id: int, data: QuestCreate) -> Quest:
    values = data.model_dump()
    _check_references(db, values)

    quest = Repository(db, Quest).add(
        Quest(owner_id=owner_id, **_column_values(values, data.steps))
    )
    if data.category_ids:
        with conflict_on_integrity_error(db, "Duplicate quest category"):
            _set_categories(db, quest.id, data.category_ids)
        db.refresh(quest)
    logger.info("Quest %s created by user %s", quest.id, owner_id)
    return quest


def update_quest(db: Session, user_id: int, quest_id: int, values: dict, steps=None) -> Quest:
    """Owner-only partial update. ``steps`` carries the validated step models when present."""
    quest = _require_owned_quest(db, user_id, quest_id, "update")
    _check_references(db, values)

    category_ids = values.get("category_ids")
    quest = Repository(db, Quest).patch(quest, _column_values(values, steps))
    if category_ids is not None:
        with conflict_on_integrity_error(db, "Duplicate quest category"):
            _set_categories(db, quest.id, category_ids)
        db.refresh(quest)
    return quest


def remove_quest(db: Session, user_id: int, quest_id: int) -> Quest:
    quest = _require_owned_quest(db, user_id, quest_id, "delete")
    return Repository(db, Quest).soft_delete(quest)


# =============================================================================
# Participation
# =============================================================================


def _get_participation(db: Session, user_id: int, quest_id: int) -> UserQuest | None:
    return db.execute(
        select(UserQuest).where(UserQuest.user_id == user_id, UserQuest.quest_id == quest_id)
    ).scalar_one_or_none()


def _require_self(actor_id: int, user_id: int) -> None:
    if actor_id != user_id:
        raise ForbiddenError("Users can only join or leave quests for themselves")


def join_quest(db: Session, actor_id: int, user_id: int, quest_id: int) -> UserQuest:
    _require_self(actor_id, user_id)
    require_exists(db, User, user_id, "User")
    quest = get_quest(db, quest_id)
    if quest.status != QuestStatus.ACTIVE.value:
        raise BadRequestError("Quest is not available")
    if _get_participation(db, user_id, quest_id) is not None:
        raise ConflictError("User has already joined this quest")

    participation = UserQuest(
        user_id=user_id, quest_id=quest_id, status=UserQuestStatus.IN_PROGRESS.value
    )
    with conflict_on_integrity_error(db, "User has already joined this quest"):
        db.add(participation)
        db.flush()
    db.refresh(participation)
    return participation


def leave_quest(db: Session, actor_id: int, user_id: int, quest_id: int) -> UserQuest:
    _require_self(actor_id, user_id)
    require_exists(db, User, user_id, "User")
    get_quest(db, quest_id)
    participation = _get_participation(db, user_id, quest_id)
    if participation is None:
        raise NotFoundError("User is not participating in this quest")
    if participation.status == UserQuestStatus.COMPLETED.value:
        raise BadRequestError("Cannot leave a completed quest")
    db.delete(participation)
    db.flush()
    return participation


def _reward_participant(db: Session, quest: Quest, participation: UserQuest) -> None:
    """Experience and achievement for one participant; failures never block completion."""
    if quest.experience_reward > 0:
        experience_service.add_experience(db, participation.user_id, quest.experience_reward)
    if quest.achievement_id is None:
        return
    try:
        achievement_service.assign_to_user(db, quest.achievement_id, participation.user_id)
    except ConflictError:
        logger.info(
            "User %s already has achievement %s, skipping",
            participation.user_id,
            quest.achievement_id,
        )
    except NotFoundError as exc:
        logger.warning(
            "Could not award achievement %s to user %s: %s",
            quest.achievement_id,
            participation.user_id,
            exc.message,
        )


def _publish_completion(quest: Quest, user_ids: list[int]) -> None:
    try:
        message_queue_service.send_to_queue(
            QUEST_EVENTS_QUEUE,
            {
                "type": "quest.completed",
                "questId": quest.id,
                "userIds": user_ids,
                "experienceReward": quest.experience_reward,
                "achievementId": quest.achievement_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    except Exception:
        logger.warning("Failed to publish completion of quest %s", quest.id, exc_info=True)


def complete_quest(db: Session, user_id: int, quest_id: int) -> Quest:
    """
    Owner marks the quest completed.

    Every live participant still in progress is completed and rewarded with
    the quest's experience and achievement.
    """
    quest = _require_owned_quest(db, user_id, quest_id, "complete")
    if quest.status == QuestStatus.COMPLETED.value:
        raise ConflictError("Quest is already completed")
    if quest.status == QuestStatus.ARCHIVED.value:
        raise BadRequestError("Archived quests cannot be completed")

    # Participants whose accounts were deleted are left untouched.
    participants = list(
        db.execute(
            select(UserQuest)
            .join(User, User.id == UserQuest.user_id)
            .where(
                UserQuest.quest_id == quest_id,
                UserQuest.status == UserQuestStatus.IN_PROGRESS.value,
                User.record_status != RecordStatus.DELETED.value,
            )
            .order_by(UserQuest.id)
        ).scalars()
    )
    now = datetime.now(timezone.utc)
    for participation in participants:
        participation.status = UserQuestStatus.COMPLETED.value
        participation.completed_at = now
    db.flush()
    for participation in participants:
        _reward_participant(db, quest, participation)

    quest = Repository(db, Quest).patch(quest, {"status": QuestStatus.COMPLETED.value})
    _publish_completion(quest, [p.user_id for p in participants])
    logger.info("Quest %s completed with %d participants", quest_id, len(participants))
    return quest


def archive_quest(db: Session, user_id: int, quest_id: int) -> Quest:
    quest = _require_owned_quest(db, user_id, quest_id, "archive")
    return Repository(db, Quest).patch(quest, {"status": QuestStatus.ARCHIVED.value})


def get_user_quests(db: Session, user_id: int) -> list[UserQuest]:
    require_exists(db, User, user_id, "User")
    query = (
        select(UserQuest)
        .join(Quest, Quest.id == UserQuest.quest_id)
        .where(
            UserQuest.user_id == user_id,
            Quest.record_status != RecordStatus.DELETED.value,
        )
        .order_by(UserQuest.id)
    )
    return list(db.execute(query).scalars().all())


def get_available_quests(db: Session, user_id: int) -> list[Quest]:
    """Active quests the user has not joined yet."""
    require_exists(db, User, user_id, "User")
    joined = select(UserQuest.quest_id).where(UserQuest.user_id == user_id)
    repo = Repository(db, Quest)
    query = (
        repo.live()
        .where(Quest.status == QuestStatus.ACTIVE.value, Quest.id.not_in(joined))
        .order_by(Quest.id)
    )
    return repo.query("get_available_quests", query, user_id=user_id)


def get_quest_users(db: Session, quest_id: int) -> list[tuple[User, UserQuest]]:
    get_quest(db, quest_id)
    query = (
        select(User, UserQuest)
        .join(UserQuest, UserQuest.user_id == User.id)
        .where(
            UserQuest.quest_id == quest_id,
            User.record_status != RecordStatus.DELETED.value,
        )
        .order_by(UserQuest.id)
    )
    return [(user, participation) for user, participation in db.execute(query).all()]
