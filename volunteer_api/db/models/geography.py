"""Regions and cities."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from volunteer_api.db.base import Base
from volunteer_api.db.models.common import SoftDeleteMixin, unique_among_live


class Region(SoftDeleteMixin, Base):
    __tablename__ = "regions"
    __table_args__ = (unique_among_live("regions", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    cities: Mapped[list["City"]] = relationship(back_populates="region")


class City(SoftDeleteMixin, Base):
    """
    A city inside a region.

    Coordinates are kept as decimal text exactly as submitted.
    """

    __tablename__ = "cities"
    __table_args__ = (Index("idx_cities_region", "region_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    region_id: Mapped[int] = mapped_column(ForeignKey("regions.id"), nullable=False)

    region: Mapped["Region"] = relationship(back_populates="cities")
