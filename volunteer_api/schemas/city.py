"""City schemas."""

from pydantic import Field

from volunteer_api.schemas.common import CamelModel, NamedBrief, PatchModel, RecordRead


class CityCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    region_id: int = Field(..., gt=0)


class CityUpdate(PatchModel):
    NON_NULLABLE = frozenset({"name", "region_id"})

    name: str | None = Field(None, min_length=1, max_length=255)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    region_id: int | None = Field(None, gt=0)


class CityRead(RecordRead):
    name: str
    latitude: float | None
    longitude: float | None
    region_id: int
    region: NamedBrief | None = None


class CityBrief(CamelModel):
    id: int
    name: str
    latitude: float | None = None
    longitude: float | None = None
    region_id: int
