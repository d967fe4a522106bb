"""Message queue and upload schemas."""

from typing import Any

from pydantic import Field

from volunteer_api.db.enums import ExchangeType
from volunteer_api.schemas.common import CamelModel


class SendMessageRequest(CamelModel):
    queue: str = Field(..., min_length=1)
    message: Any


class PublishMessageRequest(CamelModel):
    exchange: str = Field(..., min_length=1)
    routing_key: str = Field(..., min_length=1)
    message: Any
    exchange_type: ExchangeType = ExchangeType.DIRECT


class SendMessageResult(CamelModel):
    success: bool
    queue: str


class PublishMessageResult(CamelModel):
    success: bool
    exchange: str
    routing_key: str


class BrokerHealth(CamelModel):
    connected: bool
    status: str


class UploadResult(CamelModel):
    keys: list[str]
    urls: list[str]
