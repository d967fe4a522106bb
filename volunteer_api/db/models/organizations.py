"""Organizations, their owners/help types and progress posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from volunteer_api.db.base import Base
from volunteer_api.db.models.common import JSONType, SoftDeleteMixin

if TYPE_CHECKING:
    from volunteer_api.db.models import City, HelpType, OrganizationType, User


class Organization(SoftDeleteMixin, Base):
    """
    A charity or volunteer organization.

    Owners are rows in organization_owners; any owner may mutate the
    organization and its sub-resources. gallery holds storage keys, not URLs.
    """

    __tablename__ = "organizations"
    __table_args__ = (
        Index("idx_organizations_city", "city_id"),
        Index("idx_organizations_approved", "is_approved"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city_id: Mapped[int] = mapped_column(ForeignKey("cities.id"), nullable=False)
    organization_type_id: Mapped[int] = mapped_column(
        ForeignKey("organization_types.id"), nullable=False
    )
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    mission: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    goals: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    needs: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    contacts: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    gallery: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    is_approved: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )

    city: Mapped["City"] = relationship()
    organization_type: Mapped["OrganizationType"] = relationship()
    help_types: Mapped[list["HelpType"]] = relationship(
        secondary="organization_help_types", order_by="HelpType.id", viewonly=True
    )
    owners: Mapped[list["User"]] = relationship(
        secondary="organization_owners", order_by="User.id", viewonly=True
    )


class OrganizationOwner(Base):
    """Join row granting a user mutation rights over an organization."""

    __tablename__ = "organization_owners"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_owner"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)


class OrganizationHelpType(Base):
    __tablename__ = "organization_help_types"
    __table_args__ = (
        UniqueConstraint("organization_id", "help_type_id", name="uq_organization_help_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    help_type_id: Mapped[int] = mapped_column(
        ForeignKey("help_types.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)


class OrganizationUpdate(SoftDeleteMixin, Base):
    """Progress post published by an organization owner."""

    __tablename__ = "organization_updates"
    __table_args__ = (Index("idx_organization_updates_org", "organization_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    photos: Mapped[list | None] = mapped_column(JSONType, nullable=True)
