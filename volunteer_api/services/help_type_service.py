from sqlalchemy.orm import Session

from volunteer_api.db.models import HelpType
from volunteer_api.services import lookup_service

LABEL = "Help type"


def list_help_types(db: Session) -> list[HelpType]:
    return lookup_service.list_named(db, HelpType)


def get_help_type(db: Session, help_type_id: int) -> HelpType:
    return lookup_service.get_named(db, HelpType, help_type_id, LABEL)


def create_help_type(db: Session, name: str) -> HelpType:
    return lookup_service.create_named(db, HelpType, LABEL, name)


def update_help_type(db: Session, help_type_id: int, values: dict) -> HelpType:
    return lookup_service.update_named(db, HelpType, LABEL, help_type_id, values)


def remove_help_type(db: Session, help_type_id: int) -> HelpType:
    return lookup_service.remove_named(db, HelpType, LABEL, help_type_id)
