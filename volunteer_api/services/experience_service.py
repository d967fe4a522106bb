"""Experience points and levels.

Level 1 is the base level. Reaching level N (N >= 2) requires at least
``100 * 1.5 ** (N - 1)`` experience: 150 for level 2, 225 for level 3,
337.5 for level 4, and so on.
"""

import logging

from sqlalchemy.orm import Session

from volunteer_api.core.exceptions import BadRequestError
from volunteer_api.services import user_service

logger = logging.getLogger(__name__)

BASE_EXPERIENCE = 100
GROWTH_FACTOR = 1.5


def required_experience(level: int) -> float:
    """Experience needed to reach ``level``."""
    if level <= 1:
        return 0
    return BASE_EXPERIENCE * GROWTH_FACTOR ** (level - 1)


def calculate_level(experience: int) -> int:
    if experience < 0:
        return 1
    level = 1
    while experience >= required_experience(level + 1):
        level += 1
    return level


def add_experience(db: Session, user_id: int, amount: int) -> dict[str, int]:
    """Add experience to a user, recompute the level and return both."""
    if amount < 1:
        raise BadRequestError("Experience amount must be at least 1")
    user = user_service.get_user(db, user_id)
    previous_level = user.level
    experience = user.experience + amount
    level = calculate_level(experience)
    user_service.set_experience_and_level(db, user, experience, level)
    if level != previous_level:
        logger.info("User %s reached level %s", user_id, level)
    return {"level": level, "experience": experience}
