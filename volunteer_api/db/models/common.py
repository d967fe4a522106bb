"""Shared column types and mixins for soft-deletable entities."""

from datetime import datetime

from sqlalchemy import JSON, Index, String, func, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from volunteer_api.db.enums import RecordStatus

# JSON everywhere, JSONB on Postgres
JSONType = JSON().with_variant(JSONB(), "postgresql")

NOT_DELETED_CLAUSE = f"record_status <> '{RecordStatus.DELETED.value}'"


def unique_among_live(table: str, column: str) -> Index:
    """Partial unique index: uniqueness only among non-deleted rows."""
    return Index(
        f"uq_{table}_{column}_live",
        column,
        unique=True,
        postgresql_where=text(NOT_DELETED_CLAUSE),
        sqlite_where=text(NOT_DELETED_CLAUSE),
    )


class SoftDeleteMixin:
    """record_status/created_at/updated_at carried by every entity table."""

    record_status: Mapped[str] = mapped_column(
        String(20),
        default=RecordStatus.CREATED.value,
        server_default=text(f"'{RecordStatus.CREATED.value}'"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )
