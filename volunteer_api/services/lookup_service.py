"""Generic create/read/update/soft-delete for name-unique lookup entities."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from volunteer_api.db.repository import Repository
from volunteer_api.services.crud import (
    conflict_on_integrity_error,
    ensure_batch_unique,
    ensure_unique,
    require,
)

ModelT = TypeVar("ModelT")


def list_named(db: Session, model: type[ModelT]) -> list[ModelT]:
    return Repository(db, model).list_all()


def get_named(db: Session, model: type[ModelT], entity_id: int, label: str) -> ModelT:
    return require(Repository(db, model), entity_id, label)


def create_named(db: Session, model: type[ModelT], label: str, name: str) -> ModelT:
    repo = Repository(db, model)
    ensure_unique(repo, "name", name, label)
    with conflict_on_integrity_error(db, f"{label} '{name}' already exists"):
        return repo.add(model(name=name))


def create_many_named(db: Session, model: type[ModelT], label: str, names: list[str]) -> list[ModelT]:
    """All-or-nothing insert of several names."""
    repo = Repository(db, model)
    ensure_batch_unique(repo, "name", names, label)
    with conflict_on_integrity_error(db, f"{label} already exists"):
        return repo.add_all([model(name=name) for name in names])


def update_named(
    db: Session, model: type[ModelT], label: str, entity_id: int, values: dict
) -> ModelT:
    repo = Repository(db, model)
    entity = require(repo, entity_id, label)
    if "name" in values:
        ensure_unique(repo, "name", values["name"], label, exclude_id=entity_id)
    with conflict_on_integrity_error(db, f"{label} '{values.get('name')}' already exists"):
        return repo.patch(entity, values)


def remove_named(db: Session, model: type[ModelT], label: str, entity_id: int) -> ModelT:
    repo = Repository(db, model)
    entity = require(repo, entity_id, label)
    return repo.soft_delete(entity)
