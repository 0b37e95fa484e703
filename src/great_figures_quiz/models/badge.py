"""Badge definition models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class BadgeConditionKind(StrEnum):
    """Kinds of rule that award a badge."""

    QUIZ_COMPLETED = "quiz_completed"
    PERFECT_QUIZ = "perfect_quiz"
    CORRECT_ANSWERS = "correct_answers"
    STREAK = "streak"
    CATEGORY_MASTER = "category_master"


class BadgeCondition(BaseModel):
    """Awarding rule: a kind plus its parameters."""

    model_config = ConfigDict(frozen=True)

    kind: BadgeConditionKind
    threshold: int = 0
    category: str | None = None


class Badge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    condition: BadgeCondition


class BadgeStatus(Badge):
    unlocked: bool = False
