"""Quest schemas."""

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from volunteer_api.db.enums import QuestStatus, QuestStepStatus, QuestStepType, UserQuestStatus
from volunteer_api.schemas.common import CamelModel, NamedBrief, PatchModel, RecordRead
from volunteer_api.schemas.organization import Contact


class StepRequirement(CamelModel):
    current_value: float = Field(0, ge=0)
    target_value: float = Field(..., gt=0)


class QuestStep(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: QuestStepStatus = QuestStepStatus.PENDING
    progress: int = Field(0, ge=0, le=100)
    type: QuestStepType = QuestStepType.NO_REQUIRED
    requirement: StepRequirement | None = None
    deadline: datetime | None = None

    @model_validator(mode="after")
    def requirement_matches_type(self):
        if self.type != QuestStepType.NO_REQUIRED and self.requirement is None:
            raise ValueError(f"requirement is required for '{self.type.value}' steps")
        return self


def _unique_ids(values: list[int] | None) -> list[int] | None:
    if values is not None and len(set(values)) != len(values):
        raise ValueError("IDs must be unique")
    return values


class QuestCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    experience_reward: int = Field(0, ge=0)
    achievement_id: int | None = Field(None, gt=0)
    city_id: int = Field(..., gt=0)
    organization_type_id: int | None = Field(None, gt=0)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    address: str | None = None
    contacts: list[Contact] = Field(default_factory=list)
    cover_image: str | None = None
    gallery: list[str] = Field(default_factory=list)
    steps: list[QuestStep] = Field(default_factory=list)
    category_ids: list[int] = Field(default_factory=list)

    @field_validator("category_ids")
    @classmethod
    def unique_categories(cls, v: list[int]) -> list[int]:
        return _unique_ids(v)


class QuestPatch(PatchModel):
    NON_NULLABLE = frozenset({"title", "experience_reward", "city_id"})

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    experience_reward: int | None = Field(None, ge=0)
    achievement_id: int | None = Field(None, gt=0)
    city_id: int | None = Field(None, gt=0)
    organization_type_id: int | None = Field(None, gt=0)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    address: str | None = None
    contacts: list[Contact] | None = None
    cover_image: str | None = None
    gallery: list[str] | None = None
    steps: list[QuestStep] | None = None
    category_ids: list[int] | None = None

    @field_validator("category_ids")
    @classmethod
    def unique_categories(cls, v: list[int] | None) -> list[int] | None:
        return _unique_ids(v)


class QuestRead(RecordRead):
    title: str
    description: str | None
    status: QuestStatus
    experience_reward: int
    achievement_id: int | None
    owner_id: int
    city_id: int
    organization_type_id: int | None
    latitude: float | None
    longitude: float | None
    address: str | None
    contacts: list[Contact]
    cover_image: str | None
    gallery: list[str]
    steps: list[QuestStep]
    categories: list[NamedBrief] = []


class QuestBrief(CamelModel):
    id: int
    title: str
    description: str | None = None
    status: QuestStatus
    experience_reward: int


class UserQuestRead(CamelModel):
    id: int
    user_id: int
    quest_id: int
    status: UserQuestStatus
    started_at: datetime
    completed_at: datetime | None = None
    quest: QuestBrief | None = None


class QuestParticipant(CamelModel):
    id: int
    first_name: str
    last_name: str
    middle_name: str | None = None
    status: UserQuestStatus
