"""Message queue endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from volunteer_api.core.deps import get_current_user
from volunteer_api.core.validation import validate_body
from volunteer_api.schemas.messaging import (
    BrokerHealth,
    PublishMessageRequest,
    PublishMessageResult,
    SendMessageRequest,
    SendMessageResult,
)
from volunteer_api.services import message_queue_service

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/health", response_model=BrokerHealth)
def broker_health():
    connected = message_queue_service.is_connected()
    return BrokerHealth(connected=connected, status="ok" if connected else "unavailable")


@router.post("/send", response_model=SendMessageResult)
def send_message(payload: Any = Body(...)):
    """Send a JSON message to a named queue."""
    data = validate_body(SendMessageRequest, payload)
    success = message_queue_service.send_to_queue(data.queue, data.message)
    return SendMessageResult(success=success, queue=data.queue)


@router.post("/publish", response_model=PublishMessageResult)
def publish_message(payload: Any = Body(...)):
    """Publish a JSON message to an exchange with a routing key."""
    data = validate_body(PublishMessageRequest, payload)
    success = message_queue_service.publish_to_exchange(
        data.exchange, data.routing_key, data.message, data.exchange_type
    )
    return PublishMessageResult(
        success=success, exchange=data.exchange, routing_key=data.routing_key
    )
