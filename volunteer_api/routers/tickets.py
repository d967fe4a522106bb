"""Support ticket endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.db.models import User
from volunteer_api.schemas.ticket import TicketClose, TicketCreate, TicketRead
from volunteer_api.services import ticket_service

router = APIRouter()


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: Any = Body(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Open a ticket backed by a new chat room. 503 when the chat service fails."""
    data = validate_body(TicketCreate, payload or {})
    ticket = ticket_service.create_ticket(db, user, data.title)
    db.commit()
    return ticket


@router.get("", response_model=list[TicketRead])
def list_tickets(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ticket_service.list_tickets(db, user.id)


@router.post("/close", response_model=TicketRead)
def close_ticket(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(TicketClose, payload)
    ticket = ticket_service.close_ticket(db, user.id, data.id)
    db.commit()
    return ticket
