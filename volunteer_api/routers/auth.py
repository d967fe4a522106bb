"""Authentication endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.db.models import User
from volunteer_api.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserRead
from volunteer_api.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: Any = Body(...), db: Session = Depends(get_db)):
    """Create an account. Emails are unique among non-deleted users."""
    data = validate_body(RegisterRequest, payload)
    user = auth_service.register(db, data)
    db.commit()
    return user


@router.post("/login", response_model=TokenResponse)
def login(payload: Any = Body(...), db: Session = Depends(get_db)):
    """
    Exchange email and password for a bearer token.

    Returns 401 without distinguishing unknown email from wrong password.
    """
    data = validate_body(LoginRequest, payload)
    user, token = auth_service.login(db, data)
    logger.info("User %s logged in", user.id)
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return user
