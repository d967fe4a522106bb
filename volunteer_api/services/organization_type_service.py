from sqlalchemy.orm import Session

from volunteer_api.db.models import OrganizationType
from volunteer_api.services import lookup_service

LABEL = "Organization type"


def list_organization_types(db: Session) -> list[OrganizationType]:
    return lookup_service.list_named(db, OrganizationType)


def get_organization_type(db: Session, type_id: int) -> OrganizationType:
    return lookup_service.get_named(db, OrganizationType, type_id, LABEL)


def create_organization_type(db: Session, name: str) -> OrganizationType:
    return lookup_service.create_named(db, OrganizationType, LABEL, name)


def update_organization_type(db: Session, type_id: int, values: dict) -> OrganizationType:
    return lookup_service.update_named(db, OrganizationType, LABEL, type_id, values)


def remove_organization_type(db: Session, type_id: int) -> OrganizationType:
    return lookup_service.remove_named(db, OrganizationType, LABEL, type_id)
