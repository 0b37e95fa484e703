"""Experience curve, point scoring and badge awarding."""

from collections.abc import Iterable

import structlog

from great_figures_quiz.gamification.badges import (
    BADGE_CATALOG,
    SESSION_BADGE_ORDER,
    is_condition_met,
    master_badge_id,
)
from great_figures_quiz.models.badge import Badge, BadgeStatus
from great_figures_quiz.models.content import Figure
from great_figures_quiz.models.progress import UserProgress, required_experience
from great_figures_quiz.models.quiz import LevelUpInfo, SessionSummary
from great_figures_quiz.storage.progress import ProgressStore

logger = structlog.get_logger()

BASE_POINTS: dict[str, int] = {
    "beginner": 10,
    "intermediate": 20,
    "advanced": 30,
}
DEFAULT_BASE_POINTS = 10


def consecutive_bonus(consecutive_correct: int) -> int:
    """Bonus for an unbroken run of correct answers: 0, 10 (>=3) or 30 (>=5)."""
    if consecutive_correct >= 5:
        return 30
    if consecutive_correct >= 3:
        return 10
    return 0


def calculate_points(difficulty: str, is_correct: bool, consecutive_correct: int = 0) -> int:
    if not is_correct:
        return 0
    return BASE_POINTS.get(difficulty, DEFAULT_BASE_POINTS) + consecutive_bonus(consecutive_correct)


class ProgressionEngine:
    """Applies experience and badge rules to the persisted UserProgress.

    The ``apply_*`` / ``award_*`` methods mutate a record already loaded by the
    caller so several rules can share one transaction. The remaining public
    methods each run their own load/mutate/save transaction and raise
    ``ProgressSaveError`` when its write fails.

    Args:
        store: Persistent store holding the progress record.
    """

    required_experience = staticmethod(required_experience)
    calculate_points = staticmethod(calculate_points)
    consecutive_bonus = staticmethod(consecutive_bonus)

    def __init__(self, store: ProgressStore):
        self.store = store

    # In-memory rules

    def apply_experience(self, progress: UserProgress, amount: int) -> LevelUpInfo:
        old_level = progress.level
        progress.experience += amount
        while progress.experience >= required_experience(progress.level):
            progress.experience -= required_experience(progress.level)
            progress.level += 1

        leveled_up = progress.level > old_level
        if leveled_up:
            logger.info("level_up", old_level=old_level, new_level=progress.level)
        return LevelUpInfo(
            leveled_up=leveled_up,
            old_level=old_level,
            new_level=progress.level,
            current_experience=progress.experience,
            required_experience=required_experience(progress.level),
        )

    def award_session_badges(self, progress: UserProgress, summary: SessionSummary) -> list[Badge]:
        awarded = []
        for badge_id in SESSION_BADGE_ORDER:
            badge = BADGE_CATALOG[badge_id]
            if progress.has_badge(badge_id):
                continue
            if is_condition_met(badge.condition, progress, summary):
                progress.award_badge(badge_id)
                awarded.append(badge)
                logger.info("badge_awarded", badge=badge_id)
        return awarded

    def award_category_master(
        self, progress: UserProgress, category: str, all_figures: Iterable[Figure]
    ) -> Badge | None:
        badge = BADGE_CATALOG.get(master_badge_id(category))
        if badge is None or progress.has_badge(badge.id):
            return None
        if not is_condition_met(badge.condition, progress, figures=all_figures):
            return None
        progress.award_badge(badge.id)
        logger.info("badge_awarded", badge=badge.id, category=category)
        return badge

    # Transactional operations

    def add_experience(self, amount: int) -> LevelUpInfo:
        with self.store.transaction() as progress:
            if progress is None:
                return LevelUpInfo()
            return self.apply_experience(progress, amount)

    def check_badge_conditions(self, summary: SessionSummary) -> list[Badge]:
        with self.store.transaction() as progress:
            if progress is None:
                return []
            return self.award_session_badges(progress, summary)

    def check_category_master(self, category: str, all_figures: Iterable[Figure]) -> Badge | None:
        with self.store.transaction() as progress:
            if progress is None:
                return None
            return self.award_category_master(progress, category, all_figures)

    def get_all_badges(self) -> list[BadgeStatus]:
        progress = self.store.load()
        if progress is None:
            return []
        return [
            BadgeStatus(**badge.model_dump(), unlocked=progress.has_badge(badge_id))
            for badge_id, badge in BADGE_CATALOG.items()
        ]
