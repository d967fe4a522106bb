"""Support tickets backed by an external chat room."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from volunteer_api.db.base import Base
from volunteer_api.db.models.common import SoftDeleteMixin


class Ticket(SoftDeleteMixin, Base):
    __tablename__ = "tickets"
    __table_args__ = (Index("idx_tickets_user", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    chat_id: Mapped[str] = mapped_column(String(255), nullable=False)
    is_resolved: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=text("false"), nullable=False
    )
