"""Static badge catalog and condition evaluation."""

from collections.abc import Iterable

from great_figures_quiz.models.badge import Badge, BadgeCondition, BadgeConditionKind
from great_figures_quiz.models.content import Figure
from great_figures_quiz.models.progress import UserProgress
from great_figures_quiz.models.quiz import SessionSummary

K = BadgeConditionKind


def _badge(badge_id: str, name: str, icon: str, kind: BadgeConditionKind, **params) -> Badge:
    return Badge(id=badge_id, name=name, icon=icon, condition=BadgeCondition(kind=kind, **params))


BADGE_CATALOG: dict[str, Badge] = {
    b.id: b
    for b in (
        _badge("beginner", "Beginner", "🎓", K.QUIZ_COMPLETED),
        _badge("learner", "Learner", "📖", K.CORRECT_ANSWERS, threshold=50),
        _badge("scholar", "Scholar", "🎯", K.CORRECT_ANSWERS, threshold=200),
        _badge("perfectionist", "Perfectionist", "💯", K.PERFECT_QUIZ),
        _badge("streak_7", "7-Day Streak", "🔥", K.STREAK, threshold=7),
        _badge("streak_30", "30-Day Streak", "⭐", K.STREAK, threshold=30),
        _badge("scientist_master", "Giant of Science", "🔬", K.CATEGORY_MASTER, category="scientist"),
        _badge("artist_master", "Master of the Arts", "🎨", K.CATEGORY_MASTER, category="artist"),
        _badge("politician_master", "Sage of Politics", "⚖️", K.CATEGORY_MASTER, category="politician"),
        _badge("inventor_master", "Genius Inventor", "💡", K.CATEGORY_MASTER, category="inventor"),
        _badge(
            "philosopher_master", "Seeker of Wisdom", "🧠", K.CATEGORY_MASTER, category="philosopher"
        ),
    )
}

# Evaluation order for badges checked at the end of every session
SESSION_BADGE_ORDER: tuple[str, ...] = (
    "beginner",
    "perfectionist",
    "learner",
    "scholar",
    "streak_7",
    "streak_30",
)


def master_badge_id(category: str) -> str:
    return f"{category}_master"


def is_condition_met(
    condition: BadgeCondition,
    progress: UserProgress,
    summary: SessionSummary | None = None,
    figures: Iterable[Figure] = (),
) -> bool:
    """Evaluate a badge condition against progress and the finished session."""
    kind = condition.kind
    if kind == K.QUIZ_COMPLETED:
        return True
    if kind == K.PERFECT_QUIZ:
        return summary is not None and summary.correct_answers == summary.total_questions
    if kind == K.CORRECT_ANSWERS:
        return progress.statistics.correct_answers >= condition.threshold
    if kind == K.STREAK:
        return progress.streak >= condition.threshold
    if kind == K.CATEGORY_MASTER:
        in_category = [f.id for f in figures if f.category == condition.category]
        return bool(in_category) and all(progress.is_unlocked(fid) for fid in in_category)
    raise ValueError(f"Unknown badge condition: {kind}")
