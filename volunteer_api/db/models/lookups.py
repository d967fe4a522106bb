"""Name-unique lookup entities."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from volunteer_api.db.base import Base
from volunteer_api.db.models.common import SoftDeleteMixin, unique_among_live


class Category(SoftDeleteMixin, Base):
    __tablename__ = "categories"
    __table_args__ = (unique_among_live("categories", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class HelpType(SoftDeleteMixin, Base):
    __tablename__ = "help_types"
    __table_args__ = (unique_among_live("help_types", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class OrganizationType(SoftDeleteMixin, Base):
    __tablename__ = "organization_types"
    __table_args__ = (unique_among_live("organization_types", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
