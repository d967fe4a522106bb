"""Progress posts attached to organizations and quests."""

from pydantic import Field

from volunteer_api.schemas.common import CamelModel, PatchModel, RecordRead

MAX_PHOTOS = 5


class OrganizationUpdateCreate(CamelModel):
    organization_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=255)
    text: str = Field(..., min_length=1)
    photos: list[str] = Field(default_factory=list, max_length=MAX_PHOTOS)


class OrganizationUpdatePatch(PatchModel):
    NON_NULLABLE = frozenset({"organization_id", "title", "text", "photos"})

    organization_id: int | None = Field(None, gt=0)
    title: str | None = Field(None, min_length=1, max_length=255)
    text: str | None = Field(None, min_length=1)
    photos: list[str] | None = Field(None, max_length=MAX_PHOTOS)


class OrganizationUpdateRead(RecordRead):
    organization_id: int
    title: str
    text: str
    photos: list[str]


class QuestUpdateCreate(CamelModel):
    quest_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=255)
    text: str = Field(..., min_length=1)
    photos: list[str] = Field(default_factory=list, max_length=MAX_PHOTOS)


class QuestUpdatePatch(PatchModel):
    NON_NULLABLE = frozenset({"title", "text", "photos"})

    title: str | None = Field(None, min_length=1, max_length=255)
    text: str | None = Field(None, min_length=1)
    photos: list[str] | None = Field(None, max_length=MAX_PHOTOS)


class QuestUpdateRead(RecordRead):
    quest_id: int
    title: str
    text: str
    photos: list[str]
