"""Progress posts published by quest owners."""

from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import ForbiddenError
from volunteer_api.db.models import QuestUpdate
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.post import QuestUpdateCreate
from volunteer_api.services.crud import require
from volunteer_api.services.quest_service import get_quest

LABEL = "Quest update"


def _require_quest_owner(db: Session, user_id: int, quest_id: int) -> None:
    if get_quest(db, quest_id).owner_id != user_id:
        raise ForbiddenError("Only the quest owner can manage its updates")


def list_updates(db: Session, quest_id: int | None = None) -> list[QuestUpdate]:
    return Repository(db, QuestUpdate).list_all(quest_id=quest_id)


def get_update(db: Session, update_id: int) -> QuestUpdate:
    return require(Repository(db, QuestUpdate), update_id, LABEL)


def create_update(db: Session, user_id: int, data: QuestUpdateCreate) -> QuestUpdate:
    _require_quest_owner(db, user_id, data.quest_id)
    return Repository(db, QuestUpdate).add(QuestUpdate(**data.model_dump()))


def update_update(db: Session, user_id: int, update_id: int, values: dict) -> QuestUpdate:
    repo = Repository(db, QuestUpdate)
    post = require(repo, update_id, LABEL)
    _require_quest_owner(db, user_id, post.quest_id)
    return repo.patch(post, values)


def remove_update(db: Session, user_id: int, update_id: int) -> QuestUpdate:
    repo = Repository(db, QuestUpdate)
    post = require(repo, update_id, LABEL)
    _require_quest_owner(db, user_id, post.quest_id)
    return repo.soft_delete(post)
