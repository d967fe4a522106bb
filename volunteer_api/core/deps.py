"""FastAPI dependencies for authentication, authorization, and database access."""

from typing import Generator

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from volunteer_api.core.security import decode_access_token
from volunteer_api.db.enums import RecordStatus, UserRole
from volunteer_api.db.session import SessionLocal

BEARER_PREFIX = "bearer "


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX):].strip()
        return token or None
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)):
    """
    Get authenticated user from the Authorization bearer token.

    Validates:
    - Bearer token exists
    - JWT is valid and not expired
    - User exists and is not deleted

    Raises:
        HTTPException 401: Authentication failed
    """
    # Import here to avoid circular imports
    from volunteer_api.db.models import User

    token = _bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.get(User, user_id)
    if not user or user.record_status == RecordStatus.DELETED.value:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user_id = user.id
    return user


def require_admin(user=Depends(get_current_user)):
    """Allow only users with the ADMIN role."""
    if user.role != UserRole.ADMIN.value:
        raise HTTPException(status_code=403, detail="Admin role required")
    return user
