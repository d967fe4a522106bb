"""Support ticket schemas."""

from pydantic import Field

from volunteer_api.schemas.common import CamelModel, RecordRead


class TicketCreate(CamelModel):
    title: str | None = Field(None, max_length=255)


class TicketClose(CamelModel):
    id: int = Field(..., gt=0)


class TicketRead(RecordRead):
    user_id: int
    chat_id: str
    is_resolved: bool
