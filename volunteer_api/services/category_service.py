"""Category service, including the all-or-nothing bulk create."""

from sqlalchemy.orm import Session

from volunteer_api.db.models import Category
from volunteer_api.services import lookup_service

LABEL = "Category"


def list_categories(db: Session) -> list[Category]:
    return lookup_service.list_named(db, Category)


def get_category(db: Session, category_id: int) -> Category:
    return lookup_service.get_named(db, Category, category_id, LABEL)


def create_category(db: Session, name: str) -> Category:
    return lookup_service.create_named(db, Category, LABEL, name)


def create_categories(db: Session, names: list[str]) -> list[Category]:
    return lookup_service.create_many_named(db, Category, LABEL, names)


def update_category(db: Session, category_id: int, values: dict) -> Category:
    return lookup_service.update_named(db, Category, LABEL, category_id, values)


def remove_category(db: Session, category_id: int) -> Category:
    return lookup_service.remove_named(db, Category, LABEL, category_id)
