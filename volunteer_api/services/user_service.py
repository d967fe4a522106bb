"""User service. Password hashes never leave this layer through schemas."""

from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import ForbiddenError
from volunteer_api.core.security import hash_password
from volunteer_api.db.models import Organization, User
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.user import RegisterRequest
from volunteer_api.services.crud import (
    conflict_on_integrity_error,
    ensure_unique,
    require,
    require_exists,
)

LABEL = "User"


def list_users(db: Session) -> list[User]:
    return Repository(db, User).list_all()


def get_user(db: Session, user_id: int) -> User:
    return require(Repository(db, User), user_id, LABEL)


def get_user_by_email(db: Session, email: str) -> User | None:
    return Repository(db, User).find_by("email", email.lower())


def create_user(db: Session, data: RegisterRequest) -> User:
    repo = Repository(db, User)
    email = data.email.lower()
    ensure_unique(repo, "email", email, "User with email")
    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        middle_name=data.middle_name,
        email=email,
        password_hash=hash_password(data.password),
    )
    with conflict_on_integrity_error(db, f"User with email '{email}' already exists"):
        return repo.add(user)


def update_user(db: Session, actor_id: int, user_id: int, values: dict) -> User:
    """Profile update by the user themself."""
    if actor_id != user_id:
        raise ForbiddenError("You can only update your own profile")
    repo = Repository(db, User)
    user = require(repo, user_id, LABEL)
    if values.get("organisation_id") is not None:
        require_exists(db, Organization, values["organisation_id"], "Organization")
    return repo.patch(user, values)


def set_experience_and_level(db: Session, user: User, experience: int, level: int) -> User:
    """Only the experience service should call this."""
    return Repository(db, User).patch(user, {"experience": experience, "level": level})


def remove_user(db: Session, actor_id: int, user_id: int) -> User:
    if actor_id != user_id:
        raise ForbiddenError("You can only delete your own account")
    repo = Repository(db, User)
    return repo.soft_delete(require(repo, user_id, LABEL))
