"""Enum definitions for persisted lifecycle and status values."""

from enum import Enum


class RecordStatus(str, Enum):
    """Soft-delete lifecycle of every entity row: CREATED -> DELETED."""
    CREATED = "CREATED"
    DELETED = "DELETED"


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class AchievementRarity(str, Enum):
    COMMON = "common"
    EPIC = "epic"
    RARE = "rare"
    LEGENDARY = "legendary"
    PRIVATE = "private"


class QuestStatus(str, Enum):
    """Quest lifecycle. Only active quests accept participants."""
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class UserQuestStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuestStepStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuestStepType(str, Enum):
    NO_REQUIRED = "no_required"
    FINANCE = "finance"
    CONTRIBUTERS = "contributers"
    MATERIAL = "material"


class ExchangeType(str, Enum):
    DIRECT = "direct"
    TOPIC = "topic"
    FANOUT = "fanout"
    HEADERS = "headers"
