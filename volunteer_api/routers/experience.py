"""Experience endpoint."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_current_user, get_db
from volunteer_api.core.validation import validate_body
from volunteer_api.schemas.user import AddExperienceRequest, ExperienceRead
from volunteer_api.services import experience_service

router = APIRouter()


@router.patch(
    "/{user_id}",
    response_model=ExperienceRead,
    dependencies=[Depends(get_current_user)],
)
def add_experience(
    user_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
):
    """Add experience to a user and return the recalculated level."""
    data = validate_body(AddExperienceRequest, payload)
    result = experience_service.add_experience(db, user_id, data.amount)
    db.commit()
    return result
