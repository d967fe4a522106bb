"""Shared schema bases.

Wire format is camelCase; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from volunteer_api.db.enums import RecordStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class PatchModel(CamelModel):
    """
    Partial-update body. Only fields present in the payload are applied.

    Fields listed in NON_NULLABLE may be omitted but not sent as null.
    """

    NON_NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        nulls = sorted(
            name
            for name in self.model_fields_set & self.NON_NULLABLE
            if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields must not be null: {', '.join(nulls)}")
        return self

    def patch_values(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class RecordRead(CamelModel):
    """Columns every soft-deletable entity exposes."""

    id: int
    record_status: RecordStatus
    created_at: datetime
    updated_at: datetime


class NamedBrief(CamelModel):
    id: int
    name: str
