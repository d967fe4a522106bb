"""User and authentication schemas."""

from pydantic import EmailStr, Field, field_validator, model_validator

from volunteer_api.db.enums import UserRole
from volunteer_api.schemas.common import CamelModel, PatchModel, RecordRead


class RegisterRequest(CamelModel):
    """
    Request schema for registration.

    Validates:
    - Email format (normalized to lowercase)
    - Password length and confirmation
    """
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    middle_name: str | None = Field(None, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower()

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class UserRead(RecordRead):
    """Public user representation; never carries the password hash."""
    first_name: str
    last_name: str
    middle_name: str | None
    email: str
    avatar_urls: dict[str, str] | None
    role: UserRole
    level: int
    experience: int
    organisation_id: int | None


class UserBrief(CamelModel):
    id: int
    first_name: str
    last_name: str
    middle_name: str | None = None


class UserUpdate(PatchModel):
    """Self-service profile update. Email, level and experience are not writable."""
    NON_NULLABLE = frozenset({"first_name", "last_name"})

    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    middle_name: str | None = Field(None, max_length=255)
    avatar_urls: dict[str, str] | None = None
    organisation_id: int | None = Field(None, gt=0)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class AddExperienceRequest(CamelModel):
    amount: int = Field(..., ge=1)


class ExperienceRead(CamelModel):
    level: int
    experience: int
