"""Platform users."""

from sqlalchemy import ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from volunteer_api.db.base import Base
from volunteer_api.db.enums import UserRole
from volunteer_api.db.models.common import JSONType, SoftDeleteMixin, unique_among_live


class User(SoftDeleteMixin, Base):
    """
    A volunteer account.

    level/experience only change through the experience service.
    """

    __tablename__ = "users"
    __table_args__ = (unique_among_live("users", "email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_urls: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.USER.value,
        server_default=text(f"'{UserRole.USER.value}'"),
        nullable=False,
    )
    level: Mapped[int] = mapped_column(Integer, default=1, server_default=text("1"), nullable=False)
    experience: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    organisation_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id"), nullable=True
    )
