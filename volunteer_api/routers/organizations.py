"""Organization API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db, require_admin
from volunteer_api.core.exceptions import BadRequestError
from volunteer_api.core.validation import validate_body, validate_list_body
from volunteer_api.db.models import User
from volunteer_api.schemas.organization import (
    HelpTypeAdd,
    OrganizationApproval,
    OrganizationBulkItem,
    OrganizationCreate,
    OrganizationHelpTypeRead,
    OrganizationRead,
    OrganizationUpdate,
    OwnerAdd,
    OwnerRead,
)
from volunteer_api.services import organization_service
from volunteer_api.services.organization_service import UploadedImage, organization_to_read
from volunteer_api.utils.file_upload import MAX_IMAGES_PER_REQUEST

router = APIRouter()
bulk_router = APIRouter()

TRUTHY_QUERY_VALUES = {"true", "1"}


# =============================================================================
# Reads
# =============================================================================


@router.get("", response_model=list[OrganizationRead])
def list_organizations(
    only_approved: str | None = Query(None, alias="onlyApproved"),
    db: Session = Depends(get_db),
):
    """List organizations; ``onlyApproved=true`` (or ``1``) hides unapproved ones."""
    flag = (only_approved or "").strip().lower() in TRUTHY_QUERY_VALUES
    return [organization_to_read(o) for o in organization_service.list_organizations(db, flag)]


@router.get("/my", response_model=list[OrganizationRead])
def list_my_organizations(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Organizations the current user owns."""
    orgs = organization_service.list_user_organizations(db, user.id)
    return [organization_to_read(o) for o in orgs]


@router.get("/{organization_id}", response_model=OrganizationRead)
def get_organization(organization_id: int, db: Session = Depends(get_db)):
    return organization_to_read(organization_service.get_organization(db, organization_id))


# =============================================================================
# Writes
# =============================================================================


@router.post("", response_model=OrganizationRead, status_code=status.HTTP_201_CREATED)
def create_organization(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an organization owned by the current user."""
    data = validate_body(OrganizationCreate, payload)
    org = organization_service.create_organization(db, user.id, data)
    db.commit()
    return organization_to_read(org)


@router.patch("/{organization_id}", response_model=OrganizationRead)
def update_organization(
    organization_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(OrganizationUpdate, payload)
    org = organization_service.update_organization(
        db, user.id, organization_id, data.patch_values()
    )
    db.commit()
    return organization_to_read(org)


@router.delete("/{organization_id}", response_model=OrganizationRead)
def delete_organization(
    organization_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    org = organization_service.remove_organization(db, user.id, organization_id)
    db.commit()
    return organization_to_read(org)


@router.patch(
    "/{organization_id}/approval",
    response_model=OrganizationRead,
    dependencies=[Depends(require_admin)],
)
def set_organization_approval(
    organization_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    """Approve or un-approve an organization (admins only)."""
    data = validate_body(OrganizationApproval, payload)
    org = organization_service.set_approval(db, organization_id, data.is_approved)
    db.commit()
    return organization_to_read(org)


# =============================================================================
# Owners
# =============================================================================


@router.post(
    "/{organization_id}/owners",
    response_model=OwnerRead,
    status_code=status.HTTP_201_CREATED,
)
def add_owner(
    organization_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(OwnerAdd, payload)
    owner = organization_service.add_owner(db, user.id, organization_id, data.user_id)
    db.commit()
    return OwnerRead(organization_id=owner.organization_id, user_id=owner.user_id)


@router.delete("/{organization_id}/owners/{owner_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_owner(
    organization_id: int,
    owner_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    organization_service.remove_owner(db, user.id, organization_id, owner_id)
    db.commit()


# =============================================================================
# Help types
# =============================================================================


@router.post(
    "/{organization_id}/help-types",
    response_model=OrganizationHelpTypeRead,
    status_code=status.HTTP_201_CREATED,
)
def add_help_type(
    organization_id: int,
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = validate_body(HelpTypeAdd, payload)
    link = organization_service.add_help_type(db, user.id, organization_id, data.help_type_id)
    db.commit()
    return OrganizationHelpTypeRead(
        organization_id=link.organization_id, help_type_id=link.help_type_id
    )


@router.delete(
    "/{organization_id}/help-types/{help_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_help_type(
    organization_id: int,
    help_type_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    organization_service.remove_help_type(db, user.id, organization_id, help_type_id)
    db.commit()


# =============================================================================
# Gallery
# =============================================================================


@router.post("/{organization_id}/gallery", response_model=OrganizationRead)
async def upload_gallery(
    organization_id: int,
    files: Annotated[list[UploadFile], File()],
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Upload images and append them to the organization gallery."""
    if len(files) > MAX_IMAGES_PER_REQUEST:
        raise BadRequestError(f"At most {MAX_IMAGES_PER_REQUEST} files per request")
    images = [
        UploadedImage(data=await f.read(), filename=f.filename, content_type=f.content_type)
        for f in files
    ]
    org = organization_service.add_gallery_images(db, user.id, organization_id, images)
    db.commit()
    return organization_to_read(org)


# =============================================================================
# v2 bulk create
# =============================================================================


@bulk_router.post("", response_model=list[OrganizationRead], status_code=status.HTTP_201_CREATED)
def create_organizations(
    payload: Any = Body(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create several organizations at once, all owned by the current user."""
    items = validate_list_body(OrganizationBulkItem, payload)
    orgs = organization_service.create_organizations(db, user.id, items)
    db.commit()
    return [organization_to_read(o) for o in orgs]
