"""Organization schemas."""

from pydantic import Field, field_validator, model_validator

from volunteer_api.schemas.city import CityBrief
from volunteer_api.schemas.common import CamelModel, NamedBrief, PatchModel, RecordRead
from volunteer_api.schemas.user import UserBrief


class Contact(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    value: str = Field(..., min_length=1, max_length=500)


def _unique_ids(values: list[int]) -> list[int]:
    if len(set(values)) != len(values):
        raise ValueError("IDs must be unique")
    return values


class OrganizationCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    city_id: int = Field(..., gt=0)
    organization_type_id: int = Field(..., gt=0)
    help_type_ids: list[int] = Field(default_factory=list)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    summary: str | None = None
    mission: str | None = None
    description: str | None = None
    goals: list[str] = Field(default_factory=list)
    needs: list[str] = Field(default_factory=list)
    address: str | None = None
    contacts: list[Contact] = Field(default_factory=list)
    gallery: list[str] = Field(default_factory=list)

    @field_validator("help_type_ids")
    @classmethod
    def unique_help_types(cls, v: list[int]) -> list[int]:
        return _unique_ids(v)


class OrganizationBulkItem(OrganizationCreate):
    """
    Bulk import row.

    cityId may be 0, in which case the city is resolved from the address.
    At least one help type is required.
    """
    city_id: int = Field(..., ge=0)
    help_type_ids: list[int] = Field(..., min_length=1)

    @model_validator(mode="after")
    def address_required_without_city(self):
        if self.city_id == 0 and not self.address:
            raise ValueError("address is required when cityId is 0")
        return self


class OrganizationUpdate(PatchModel):
    NON_NULLABLE = frozenset({"name", "city_id", "organization_type_id"})

    name: str | None = Field(None, min_length=1, max_length=255)
    city_id: int | None = Field(None, gt=0)
    organization_type_id: int | None = Field(None, gt=0)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    summary: str | None = None
    mission: str | None = None
    description: str | None = None
    goals: list[str] | None = None
    needs: list[str] | None = None
    address: str | None = None
    contacts: list[Contact] | None = None
    gallery: list[str] | None = None


class OrganizationApproval(CamelModel):
    is_approved: bool


class OwnerAdd(CamelModel):
    user_id: int = Field(..., gt=0)


class HelpTypeAdd(CamelModel):
    help_type_id: int = Field(..., gt=0)


class OrganizationRead(RecordRead):
    name: str
    city_id: int
    organization_type_id: int
    latitude: float | None
    longitude: float | None
    summary: str | None
    mission: str | None
    description: str | None
    goals: list[str]
    needs: list[str]
    address: str | None
    contacts: list[Contact]
    gallery: list[str]
    is_approved: bool
    city: CityBrief | None = None
    organization_type: NamedBrief | None = None
    help_types: list[NamedBrief] = []
    owners: list[UserBrief] = []


class OwnerRead(CamelModel):
    organization_id: int
    user_id: int


class OrganizationHelpTypeRead(CamelModel):
    organization_id: int
    help_type_id: int
