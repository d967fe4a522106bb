"""Progress posts published by organization owners."""

from sqlalchemy.orm import Session

from volunteer_api.db.models import Organization, OrganizationUpdate
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.post import OrganizationUpdateCreate
from volunteer_api.services.crud import require, require_exists
from volunteer_api.services.organization_service import require_owner

LABEL = "Organization update"


def list_updates(db: Session, organization_id: int | None = None) -> list[OrganizationUpdate]:
    return Repository(db, OrganizationUpdate).list_all(organization_id=organization_id)


def get_update(db: Session, update_id: int) -> OrganizationUpdate:
    return require(Repository(db, OrganizationUpdate), update_id, LABEL)


def create_update(db: Session, user_id: int, data: OrganizationUpdateCreate) -> OrganizationUpdate:
    require_owner(db, data.organization_id, user_id)
    require_exists(db, Organization, data.organization_id, "Organization")
    return Repository(db, OrganizationUpdate).add(OrganizationUpdate(**data.model_dump()))


def update_update(db: Session, user_id: int, update_id: int, values: dict) -> OrganizationUpdate:
    repo = Repository(db, OrganizationUpdate)
    post = require(repo, update_id, LABEL)
    require_owner(db, post.organization_id, user_id)
    if "organization_id" in values:
        # Moving a post requires ownership of the target as well
        require_owner(db, values["organization_id"], user_id)
        require_exists(db, Organization, values["organization_id"], "Organization")
    return repo.patch(post, values)


def remove_update(db: Session, user_id: int, update_id: int) -> OrganizationUpdate:
    repo = Repository(db, OrganizationUpdate)
    post = require(repo, update_id, LABEL)
    require_owner(db, post.organization_id, user_id)
    return repo.soft_delete(post)
