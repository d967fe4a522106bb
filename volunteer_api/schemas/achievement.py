"""Achievement schemas."""

from datetime import datetime

from pydantic import Field

from volunteer_api.db.enums import AchievementRarity
from volunteer_api.schemas.common import CamelModel, PatchModel, RecordRead


class AchievementCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = None
    rarity: AchievementRarity
    quest_id: int | None = Field(None, gt=0)


class AchievementUpdate(PatchModel):
    NON_NULLABLE = frozenset({"title", "rarity"})

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = None
    rarity: AchievementRarity | None = None
    quest_id: int | None = Field(None, gt=0)


class AchievementRead(RecordRead):
    title: str
    description: str | None
    icon: str | None
    rarity: AchievementRarity
    quest_id: int | None


class UserAchievementRead(CamelModel):
    id: int
    user_id: int
    achievement_id: int
    received_at: datetime
    achievement: AchievementRead | None = None
