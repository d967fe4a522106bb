"""SQLAlchemy ORM models."""

from volunteer_api.db.models.achievements import Achievement, UserAchievement
from volunteer_api.db.models.geography import City, Region
from volunteer_api.db.models.lookups import Category, HelpType, OrganizationType
from volunteer_api.db.models.organizations import (
    Organization,
    OrganizationHelpType,
    OrganizationOwner,
    OrganizationUpdate,
)
from volunteer_api.db.models.quests import Quest, QuestCategory, QuestUpdate, UserQuest
from volunteer_api.db.models.tickets import Ticket
from volunteer_api.db.models.users import User

__all__ = [
    "Achievement",
    "Category",
    "City",
    "HelpType",
    "Organization",
    "OrganizationHelpType",
    "OrganizationOwner",
    "OrganizationType",
    "OrganizationUpdate",
    "Quest",
    "QuestCategory",
    "QuestUpdate",
    "Region",
    "Ticket",
    "User",
    "UserAchievement",
    "UserQuest",
]
