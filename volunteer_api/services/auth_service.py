"""Registration and password login."""

import logging

from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import UnauthorizedError
from volunteer_api.core.security import create_access_token, verify_password
from volunteer_api.db.models import User
from volunteer_api.schemas.user import LoginRequest, RegisterRequest
from volunteer_api.services import user_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def register(db: Session, data: RegisterRequest) -> User:
    user = user_service.create_user(db, data)
    logger.info("Registered user %s", user.id)
    return user


def login(db: Session, data: LoginRequest) -> tuple[User, str]:
    """Return the user and a fresh access token; 401 on any mismatch."""
    user = user_service.get_user_by_email(db, data.email)
    if user is None or not verify_password(data.password, user.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS)
    return user, create_access_token(user.id, user.email)
