"""Schemas for name-unique lookup entities (regions, categories, help and organization types)."""

from pydantic import Field

from volunteer_api.schemas.common import CamelModel, PatchModel, RecordRead


class NamedCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class NamedUpdate(PatchModel):
    NON_NULLABLE = frozenset({"name"})

    name: str | None = Field(None, min_length=1, max_length=255)


class NamedRead(RecordRead):
    name: str


RegionCreate = NamedCreate
RegionUpdate = NamedUpdate
RegionRead = NamedRead
