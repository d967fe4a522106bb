"""Generic data access for soft-deletable models.

Every read goes through ``live()`` so deleted rows never leak. Database
errors are logged with the operation name and identifying parameters, then
re-raised unchanged for the service layer to translate.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Generic, Iterable, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from volunteer_api.db.enums import RecordStatus

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def describe_db_error(exc: SQLAlchemyError) -> dict[str, Any]:
    """Extract driver error code/detail from a SQLAlchemy error when present."""
    orig = getattr(exc, "orig", None)
    info: dict[str, Any] = {"error": str(exc).splitlines()[0] if str(exc) else type(exc).__name__}
    if orig is not None:
        code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        if code:
            info["code"] = code
        diag = getattr(orig, "diag", None)
        detail = getattr(diag, "message_detail", None) if diag is not None else None
        if detail:
            info["detail"] = detail
        constraint = getattr(diag, "constraint_name", None) if diag is not None else None
        if constraint:
            info["constraint"] = constraint
    return info


def log_db_error(operation: str, exc: SQLAlchemyError, **params: Any) -> None:
    # Constraint violations are translated by services; still worth a trace
    level = logging.WARNING if isinstance(exc, IntegrityError) else logging.ERROR
    logger.log(
        level,
        "Database error in %s params=%s %s",
        operation,
        params,
        describe_db_error(exc),
    )


class Repository(Generic[ModelT]):
    """Soft-delete aware queries for one model class."""

    def __init__(self, db: Session, model: type[ModelT]):
        self.db = db
        self.model = model

    @property
    def _name(self) -> str:
        return self.model.__name__

    def live(self) -> Select:
        """SELECT over non-deleted rows."""
        return select(self.model).where(
            self.model.record_status != RecordStatus.DELETED.value
        )

    def _execute_all(self, operation: str, query: Select, **params: Any) -> list[ModelT]:
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as exc:
            log_db_error(f"{self._name}.{operation}", exc, **params)
            raise

    def _execute_one(self, operation: str, query: Select, **params: Any) -> ModelT | None:
        try:
            return self.db.execute(query).scalars().first()
        except SQLAlchemyError as exc:
            log_db_error(f"{self._name}.{operation}", exc, **params)
            raise

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, entity_id: int) -> ModelT | None:
        return self._execute_one(
            "get", self.live().where(self.model.id == entity_id), id=entity_id
        )

    def list_all(self, **filters: Any) -> list[ModelT]:
        """Non-deleted rows in insertion order, optionally filtered by equality."""
        query = self.live()
        for field, value in filters.items():
            if value is not None:
                query = query.where(getattr(self.model, field) == value)
        return self._execute_all("list_all", query.order_by(self.model.id), **filters)

    def find_by(self, field: str, value: Any, *, exclude_id: int | None = None) -> ModelT | None:
        """First non-deleted row where ``field == value`` (used for uniqueness checks)."""
        query = self.live().where(getattr(self.model, field) == value)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        return self._execute_one("find_by", query, field=field, value=value)

    def find_many_by(self, field: str, values: Iterable[Any]) -> list[ModelT]:
        values = list(values)
        if not values:
            return []
        query = self.live().where(getattr(self.model, field).in_(values))
        return self._execute_all("find_many_by", query, field=field, values=values)

    def existing_ids(self, ids: Iterable[int]) -> set[int]:
        """Subset of ``ids`` that exist among non-deleted rows, in one query."""
        ids = set(ids)
        if not ids:
            return set()
        query = select(self.model.id).where(
            self.model.id.in_(ids),
            self.model.record_status != RecordStatus.DELETED.value,
        )
        try:
            return set(self.db.execute(query).scalars().all())
        except SQLAlchemyError as exc:
            log_db_error(f"{self._name}.existing_ids", exc, ids=sorted(ids))
            raise

    def query(self, operation: str, query: Select, **params: Any) -> list[ModelT]:
        """Run a custom SELECT with the same error logging."""
        return self._execute_all(operation, query, **params)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def add(self, entity: ModelT) -> ModelT:
        try:
            self.db.add(entity)
            self.db.flush()
        except SQLAlchemyError as exc:
            log_db_error(f"{self._name}.add", exc)
            raise
        self.db.refresh(entity)
        return entity

    def add_all(self, entities: list[ModelT]) -> list[ModelT]:
        """Insert a batch in one flush; either every row is written or none."""
        try:
            self.db.add_all(entities)
            self.db.flush()
        except SQLAlchemyError as exc:
            log_db_error(f"{self._name}.add_all", exc, count=len(entities))
            raise
        for entity in entities:
            self.db.refresh(entity)
        return entities

    def patch(self, entity: ModelT, values: dict[str, Any]) -> ModelT:
        """Apply only the given fields and always bump updated_at."""
        for field, value in values.items():
            setattr(entity, field, value)
        entity.updated_at = datetime.now(timezone.utc)
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            log_db_error(f"{self._name}.patch", exc, id=entity.id, fields=sorted(values))
            raise
        self.db.refresh(entity)
        return entity

    def soft_delete(self, entity: ModelT) -> ModelT:
        return self.patch(entity, {"record_status": RecordStatus.DELETED.value})
