"""Support tickets. Each ticket is backed by a room in the external chat service."""

import logging

from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import NotFoundError
from volunteer_api.db.models import Ticket, User
from volunteer_api.db.repository import Repository
from volunteer_api.services import chat_service

logger = logging.getLogger(__name__)


def create_ticket(db: Session, user: User, title: str | None = None) -> Ticket:
    """Create the chat room first; no ticket is stored if that fails."""
    full_name = " ".join(part for part in (user.first_name, user.last_name) if part)
    chat_id = chat_service.create_room(user_id=user.id, user_name=full_name, title=title)
    ticket = Repository(db, Ticket).add(Ticket(user_id=user.id, chat_id=chat_id, is_resolved=False))
    logger.info("Ticket %s opened by user %s (chat %s)", ticket.id, user.id, chat_id)
    return ticket


def list_tickets(db: Session, user_id: int) -> list[Ticket]:
    return Repository(db, Ticket).list_all(user_id=user_id)


def close_ticket(db: Session, user_id: int, ticket_id: int) -> Ticket:
    repo = Repository(db, Ticket)
    ticket = repo.get(ticket_id)
    if ticket is None or ticket.user_id != user_id:
        raise NotFoundError(f"Ticket with ID {ticket_id} not found")
    return repo.patch(ticket, {"is_resolved": True})
