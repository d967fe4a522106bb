"""Client for the external chat service that backs support tickets."""

import logging

import httpx

from volunteer_api.core.config import settings
from volunteer_api.core.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


def _rooms_url() -> str:
    return f"{settings.CHATTY_URL.rstrip('/')}/rooms"


def create_room(*, user_id: int, user_name: str, title: str | None = None) -> str:
    """
    Create a chat room for a support ticket and return its identifier.

    Single attempt, no retries. Any failure raises ServiceUnavailableError so
    that no ticket is persisted without a room.
    """
    if not settings.chat_enabled:
        raise ServiceUnavailableError("Chat service is not configured")

    payload = {
        "title": title or f"Support ticket from {user_name}",
        "userId": user_id,
        "userName": user_name,
    }
    try:
        response = httpx.post(
            _rooms_url(),
            json=payload,
            headers={"X-API-Key": settings.CHATTY_API_KEY},
            timeout=settings.CHATTY_TIMEOUT_SECONDS,
        )
    except httpx.HTTPError as exc:
        logger.error("Chat service request failed for user %s: %s", user_id, exc)
        raise ServiceUnavailableError("Chat service is unavailable") from exc

    if response.status_code >= 400:
        logger.error(
            "Chat service returned %s for user %s: %s",
            response.status_code,
            user_id,
            response.text[:500],
        )
        raise ServiceUnavailableError("Chat service rejected room creation")

    try:
        data = response.json()
    except ValueError as exc:
        raise ServiceUnavailableError("Chat service returned an invalid response") from exc

    room_id = (data.get("id") or data.get("roomId")) if isinstance(data, dict) else None
    if not room_id:
        logger.error("Chat service response has no room id: %s", data)
        raise ServiceUnavailableError("Chat service returned no room id")
    return str(room_id)
