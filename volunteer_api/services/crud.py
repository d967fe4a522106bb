"""Building blocks shared by the entity services.

Every service follows the same contract: look up non-deleted rows, check
uniqueness and referenced ids, write through the repository, and translate
store-level constraint violations into ConflictError.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import ConflictError, NotFoundError
from volunteer_api.db.repository import Repository

ModelT = TypeVar("ModelT")


@contextmanager
def conflict_on_integrity_error(db: Session, message: str) -> Iterator[None]:
    """
    Run the block inside a savepoint and raise ConflictError when the store
    rejects a duplicate.

    Only the savepoint is rolled back; work flushed earlier in the request
    transaction stays intact.
    """
    try:
        with db.begin_nested():
            yield
    except IntegrityError as exc:
        raise ConflictError(message) from exc


def require(repo: Repository[ModelT], entity_id: int, label: str) -> ModelT:
    entity = repo.get(entity_id)
    if entity is None:
        raise NotFoundError(f"{label} with ID {entity_id} not found")
    return entity


def require_exists(db: Session, model: type, entity_id: int, label: str) -> Any:
    return require(Repository(db, model), entity_id, label)


def require_all_exist(db: Session, model: type, ids: Iterable[int], label: str) -> None:
    """Check a set of referenced ids in one query; NotFound lists the missing ones."""
    ids = set(ids)
    if not ids:
        return
    missing = sorted(ids - Repository(db, model).existing_ids(ids))
    if missing:
        raise NotFoundError(f"{label} with ID {', '.join(str(i) for i in missing)} not found")


def ensure_unique(
    repo: Repository[ModelT],
    field: str,
    value: Any,
    label: str,
    *,
    exclude_id: int | None = None,
) -> None:
    if repo.find_by(field, value, exclude_id=exclude_id) is not None:
        raise ConflictError(f"{label} '{value}' already exists")


def find_batch_duplicates(values: Iterable[Any]) -> list[Any]:
    seen: set[Any] = set()
    duplicates: list[Any] = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates


def ensure_batch_unique(repo: Repository[ModelT], field: str, values: list[Any], label: str) -> None:
    """Reject duplicates inside the batch, then duplicates already stored."""
    duplicates = find_batch_duplicates(values)
    if duplicates:
        raise ConflictError(
            f"{label} duplicate in request: {', '.join(str(v) for v in duplicates)}"
        )
    existing = repo.find_many_by(field, values)
    if existing:
        names = ", ".join(str(getattr(e, field)) for e in existing)
        raise ConflictError(f"{label} already exists: {names}")
