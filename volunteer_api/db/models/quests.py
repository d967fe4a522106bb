"""Quests (volunteer tasks), participation and progress posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
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
from volunteer_api.db.enums import QuestStatus, UserQuestStatus
from volunteer_api.db.models.common import JSONType, SoftDeleteMixin

if TYPE_CHECKING:
    from volunteer_api.db.models import Category, User


class Quest(SoftDeleteMixin, Base):
    """
    A volunteer task owned by a single user.

    steps is a JSON list of step dicts (title, status, progress, type,
    requirement, deadline).
    """

    __tablename__ = "quests"
    __table_args__ = (
        Index("idx_quests_city", "city_id"),
        Index("idx_quests_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        default=QuestStatus.ACTIVE.value,
        server_default=text(f"'{QuestStatus.ACTIVE.value}'"),
        nullable=False,
    )
    experience_reward: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    achievement_id: Mapped[int | None] = mapped_column(
        ForeignKey("achievements.id"), nullable=True
    )
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    city_id: Mapped[int] = mapped_column(ForeignKey("cities.id"), nullable=False)
    organization_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("organization_types.id"), nullable=True
    )
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    contacts: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    gallery: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    steps: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    categories: Mapped[list["Category"]] = relationship(
        secondary="quest_categories", order_by="Category.id", viewonly=True
    )


class QuestCategory(Base):
    __tablename__ = "quest_categories"
    __table_args__ = (
        UniqueConstraint("quest_id", "category_id", name="uq_quest_category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quest_id: Mapped[int] = mapped_column(
        ForeignKey("quests.id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )


class UserQuest(Base):
    """Participation of a user in a quest (one row per user+quest)."""

    __tablename__ = "user_quests"
    __table_args__ = (UniqueConstraint("user_id", "quest_id", name="uq_user_quest"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    quest_id: Mapped[int] = mapped_column(
        ForeignKey("quests.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=UserQuestStatus.IN_PROGRESS.value,
        server_default=text(f"'{UserQuestStatus.IN_PROGRESS.value}'"),
        nullable=False,
    )
    started_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    user: Mapped["User"] = relationship()
    quest: Mapped["Quest"] = relationship()


class QuestUpdate(SoftDeleteMixin, Base):
    """Progress post published by the quest owner."""

    __tablename__ = "quest_updates"
    __table_args__ = (Index("idx_quest_updates_quest", "quest_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quest_id: Mapped[int] = mapped_column(ForeignKey("quests.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    photos: Mapped[list | None] = mapped_column(JSONType, nullable=True)
