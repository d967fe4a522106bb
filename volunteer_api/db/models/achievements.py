"""Achievements and awards."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from volunteer_api.db.base import Base
from volunteer_api.db.models.common import SoftDeleteMixin, unique_among_live


class Achievement(SoftDeleteMixin, Base):
    __tablename__ = "achievements"
    __table_args__ = (unique_among_live("achievements", "title"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(Text, nullable=True)
    rarity: Mapped[str] = mapped_column(String(20), nullable=False)
    # Plain column: quests.achievement_id already points the other way
    quest_id: Mapped[int | None] = mapped_column(Integer, nullable=True)


class UserAchievement(Base):
    """An achievement received by a user; at most once per pair."""

    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    achievement_id: Mapped[int] = mapped_column(
        ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False
    )
    received_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)

    achievement: Mapped["Achievement"] = relationship()
