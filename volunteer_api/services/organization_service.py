"""Organization service: CRUD, owners, help types, gallery and bulk import.

Mutations are gated on the organization_owners join row. The ownership
check runs before anything else, so a non-owner gets ForbiddenError even
when the organization or the target entity does not exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from volunteer_api.db.enums import RecordStatus
from volunteer_api.db.models import (
    City,
    HelpType,
    Organization,
    OrganizationHelpType,
    OrganizationOwner,
    OrganizationType,
    User,
)
from volunteer_api.db.repository import Repository
from volunteer_api.schemas.organization import (
    OrganizationBulkItem,
    OrganizationCreate,
    OrganizationRead,
)
from volunteer_api.services import storage_service
from volunteer_api.services.crud import (
    conflict_on_integrity_error,
    find_batch_duplicates,
    require,
    require_all_exist,
    require_exists,
)
from volunteer_api.utils.coordinates import format_coordinate, parse_coordinate

logger = logging.getLogger(__name__)

LABEL = "Organization"
COORDINATE_FIELDS = ("latitude", "longitude")


@dataclass
class UploadedImage:
    data: bytes
    filename: str | None
    content_type: str | None


# =============================================================================
# Ownership
# =============================================================================


def is_owner(db: Session, organization_id: int, user_id: int) -> bool:
    return (
        db.execute(
            select(OrganizationOwner.id).where(
                OrganizationOwner.organization_id == organization_id,
                OrganizationOwner.user_id == user_id,
            )
        ).first()
        is not None
    )


def require_owner(db: Session, organization_id: int, user_id: int) -> None:
    if not is_owner(db, organization_id, user_id):
        raise ForbiddenError("Only organization owners can perform this action")


# =============================================================================
# Presentation
# =============================================================================


def _is_live(entity) -> bool:
    return entity.record_status != RecordStatus.DELETED.value


def organization_to_read(org: Organization) -> OrganizationRead:
    city = org.city
    org_type = org.organization_type
    return OrganizationRead(
        id=org.id,
        name=org.name,
        city_id=org.city_id,
        organization_type_id=org.organization_type_id,
        latitude=parse_coordinate(org.latitude),
        longitude=parse_coordinate(org.longitude),
        summary=org.summary,
        mission=org.mission,
        description=org.description,
        goals=org.goals or [],
        needs=org.needs or [],
        address=org.address,
        contacts=org.contacts or [],
        gallery=storage_service.get_public_urls(org.gallery),
        is_approved=org.is_approved,
        city=(
            {
                "id": city.id,
                "name": city.name,
                "latitude": parse_coordinate(city.latitude),
                "longitude": parse_coordinate(city.longitude),
                "region_id": city.region_id,
            }
            if city is not None
            else None
        ),
        organization_type=(
            {"id": org_type.id, "name": org_type.name} if org_type is not None else None
        ),
        help_types=[{"id": h.id, "name": h.name} for h in org.help_types if _is_live(h)],
        owners=[
            {
                "id": u.id,
                "first_name": u.first_name,
                "last_name": u.last_name,
                "middle_name": u.middle_name,
            }
            for u in org.owners
            if _is_live(u)
        ],
        record_status=org.record_status,
        created_at=org.created_at,
        updated_at=org.updated_at,
    )


# =============================================================================
# Reads
# =============================================================================


def list_organizations(db: Session, only_approved: bool = False) -> list[Organization]:
    repo = Repository(db, Organization)
    if only_approved:
        return repo.list_all(is_approved=True)
    return repo.list_all()


def list_user_organizations(db: Session, user_id: int) -> list[Organization]:
    repo = Repository(db, Organization)
    query = (
        repo.live()
        .join(OrganizationOwner, OrganizationOwner.organization_id == Organization.id)
        .where(OrganizationOwner.user_id == user_id)
        .order_by(Organization.id)
    )
    return repo.query("list_user_organizations", query, user_id=user_id)


def get_organization(db: Session, organization_id: int) -> Organization:
    return require(Repository(db, Organization), organization_id, LABEL)


# =============================================================================
# Create
# =============================================================================


def _column_values(values: dict) -> dict:
    converted = dict(values)
    converted.pop("help_type_ids", None)
    for field in COORDINATE_FIELDS:
        if field in converted:
            converted[field] = format_coordinate(converted[field])
    return converted


def _with_city_coordinates(values: dict, city: City) -> dict:
    """Organizations without explicit coordinates inherit the city's."""
    if values.get("latitude") is None:
        values["latitude"] = city.latitude
    if values.get("longitude") is None:
        values["longitude"] = city.longitude
    return values


def create_organization(db: Session, user_id: int, data: OrganizationCreate) -> Organization:
    """Create an organization; the creator becomes its first owner."""
    city = require_exists(db, City, data.city_id, "City")
    require_exists(db, OrganizationType, data.organization_type_id, "Organization type")
    require_all_exist(db, HelpType, data.help_type_ids, "Help type")

    values = _with_city_coordinates(_column_values(data.model_dump()), city)
    org = Repository(db, Organization).add(Organization(**values))

    with conflict_on_integrity_error(db, "Duplicate organization association"):
        db.add(OrganizationOwner(organization_id=org.id, user_id=user_id))
        db.add_all(
            OrganizationHelpType(organization_id=org.id, help_type_id=help_type_id)
            for help_type_id in data.help_type_ids
        )
        db.flush()
    db.refresh(org)
    logger.info("Organization %s created by user %s", org.id, user_id)
    return org


def find_city_by_address(db: Session, address: str) -> City:
    """Resolve the city whose name appears in ``address`` (longest match wins)."""
    haystack = address.lower()
    matches = [
        city
        for city in Repository(db, City).list_all()
        if city.name and city.name.lower() in haystack
    ]
    if not matches:
        raise NotFoundError(f"City not found for address '{address}'")
    return max(matches, key=lambda city: len(city.name))


def create_organizations(
    db: Session, user_id: int, items: list[OrganizationBulkItem]
) -> list[Organization]:
    """
    All-or-nothing bulk import.

    Every referenced id is checked with one batched query per table and
    intra-batch (name, city) duplicates are rejected before anything is
    written.
    """
    city_ids = [item.city_id if item.city_id else None for item in items]
    resolved: list[City | None] = [None] * len(items)
    for index, item in enumerate(items):
        if item.city_id == 0:
            resolved[index] = find_city_by_address(db, item.address or "")
            city_ids[index] = resolved[index].id

    duplicates = find_batch_duplicates(
        (item.name, city_id) for item, city_id in zip(items, city_ids)
    )
    if duplicates:
        raise ConflictError(
            "Organization duplicate in request: "
            + ", ".join(f"{name} (city {city_id})" for name, city_id in duplicates)
        )

    require_all_exist(db, City, set(city_ids), "City")
    require_all_exist(db, OrganizationType, {i.organization_type_id for i in items}, "Organization type")
    require_all_exist(
        db, HelpType, {h for item in items for h in item.help_type_ids}, "Help type"
    )

    cities = {c.id: c for c in Repository(db, City).find_many_by("id", set(city_ids))}
    organizations = []
    for item, city_id in zip(items, city_ids):
        values = _column_values(item.model_dump())
        values["city_id"] = city_id
        organizations.append(Organization(**_with_city_coordinates(values, cities[city_id])))

    with conflict_on_integrity_error(db, "Duplicate organization association"):
        Repository(db, Organization).add_all(organizations)
        for org, item in zip(organizations, items):
            db.add(OrganizationOwner(organization_id=org.id, user_id=user_id))
            db.add_all(
                OrganizationHelpType(organization_id=org.id, help_type_id=help_type_id)
                for help_type_id in item.help_type_ids
            )
        db.flush()
    for org in organizations:
        db.refresh(org)
    logger.info("Bulk created %d organizations for user %s", len(organizations), user_id)
    return organizations


# =============================================================================
# Update / delete
# =============================================================================


def update_organization(
    db: Session, user_id: int, organization_id: int, values: dict
) -> Organization:
    """
    Owner-only partial update.

    When the gallery changes, keys dropped from it are deleted from storage
    after the row is written; deletion failures are only logged.
    """
    require_owner(db, organization_id, user_id)
    repo = Repository(db, Organization)
    org = require(repo, organization_id, LABEL)

    if "city_id" in values:
        require_exists(db, City, values["city_id"], "City")
    if "organization_type_id" in values:
        require_exists(db, OrganizationType, values["organization_type_id"], "Organization type")

    removed_keys: list[str] = []
    if values.get("gallery") is not None:
        new_keys = set(values["gallery"])
        removed_keys = [key for key in (org.gallery or []) if key not in new_keys]

    org = repo.patch(org, _column_values(values))
    if removed_keys:
        storage_service.delete_files(removed_keys)
    return org


def set_approval(db: Session, organization_id: int, is_approved: bool) -> Organization:
    repo = Repository(db, Organization)
    org = require(repo, organization_id, LABEL)
    return repo.patch(org, {"is_approved": is_approved})


def remove_organization(db: Session, user_id: int, organization_id: int) -> Organization:
    require_owner(db, organization_id, user_id)
    repo = Repository(db, Organization)
    return repo.soft_delete(require(repo, organization_id, LABEL))


# =============================================================================
# Owners
# =============================================================================


def add_owner(db: Session, actor_id: int, organization_id: int, user_id: int) -> OrganizationOwner:
    require_owner(db, organization_id, actor_id)
    get_organization(db, organization_id)
    require_exists(db, User, user_id, "User")
    if is_owner(db, organization_id, user_id):
        raise ConflictError("User is already an owner of this organization")

    owner = OrganizationOwner(organization_id=organization_id, user_id=user_id)
    with conflict_on_integrity_error(db, "User is already an owner of this organization"):
        db.add(owner)
        db.flush()
    return owner


def remove_owner(db: Session, actor_id: int, organization_id: int, user_id: int) -> None:
    require_owner(db, organization_id, actor_id)
    get_organization(db, organization_id)
    owner_ids = list(
        db.execute(
            select(OrganizationOwner.user_id).where(
                OrganizationOwner.organization_id == organization_id
            )
        ).scalars()
    )
    if user_id not in owner_ids:
        raise NotFoundError(f"User {user_id} is not an owner of organization {organization_id}")
    if len(owner_ids) == 1:
        raise BadRequestError("Cannot remove the last owner of an organization")
    db.execute(
        delete(OrganizationOwner).where(
            OrganizationOwner.organization_id == organization_id,
            OrganizationOwner.user_id == user_id,
        )
    )
    db.flush()


# =============================================================================
# Help types
# =============================================================================


def has_help_type(db: Session, organization_id: int, help_type_id: int) -> bool:
    return db.execute(
        select(OrganizationHelpType.id).where(
            OrganizationHelpType.organization_id == organization_id,
            OrganizationHelpType.help_type_id == help_type_id,
        )
    ).first() is not None


def add_help_type(
    db: Session, actor_id: int, organization_id: int, help_type_id: int
) -> OrganizationHelpType:
    require_owner(db, organization_id, actor_id)
    get_organization(db, organization_id)
    require_exists(db, HelpType, help_type_id, "Help type")
    if has_help_type(db, organization_id, help_type_id):
        raise ConflictError("Help type is already assigned to this organization")

    link = OrganizationHelpType(organization_id=organization_id, help_type_id=help_type_id)
    with conflict_on_integrity_error(db, "Help type is already assigned to this organization"):
        db.add(link)
        db.flush()
    return link


def remove_help_type(db: Session, actor_id: int, organization_id: int, help_type_id: int) -> None:
    require_owner(db, organization_id, actor_id)
    result = db.execute(
        delete(OrganizationHelpType).where(
            OrganizationHelpType.organization_id == organization_id,
            OrganizationHelpType.help_type_id == help_type_id,
        )
    )
    if result.rowcount == 0:
        raise NotFoundError(
            f"Help type {help_type_id} is not assigned to organization {organization_id}"
        )
    db.flush()


# =============================================================================
# Gallery
# =============================================================================


def add_gallery_images(
    db: Session, actor_id: int, organization_id: int, images: list[UploadedImage]
) -> Organization:
    """Upload images under organizations/<id>/ and append their keys to the gallery."""
    require_owner(db, organization_id, actor_id)
    repo = Repository(db, Organization)
    org = require(repo, organization_id, LABEL)
    if not images:
        raise BadRequestError("At least one file is required")

    folder = storage_service.organization_folder(organization_id)
    uploaded: list[str] = []
    try:
        for image in images:
            uploaded.append(
                storage_service.upload_file(image.data, image.filename, image.content_type, folder)
            )
    except Exception:
        storage_service.delete_files(uploaded)
        raise

    return repo.patch(org, {"gallery": [*(org.gallery or []), *uploaded]})
