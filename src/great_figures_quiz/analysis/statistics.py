"""Progress summaries for the statistics and encyclopedia views."""

from collections.abc import Iterable

from great_figures_quiz.models.content import MAIN_CATEGORIES, Figure, category_name
from great_figures_quiz.models.progress import CategoryStats, UserProgress


def category_accuracy(progress: UserProgress) -> list[dict]:
    """Accuracy per main category, including categories never played."""
    rows = []
    for category in MAIN_CATEGORIES:
        stats = progress.statistics.category_stats.get(category, CategoryStats())
        rows.append({
            "category": str(category),
            "name": category_name(category),
            "total": stats.total,
            "correct": stats.correct,
            "accuracy_rate": stats.accuracy_rate,
        })
    return rows


def overview(progress: UserProgress) -> dict:
    """Headline numbers for the statistics screen."""
    return {
        "accuracy_rate": progress.statistics.accuracy_rate,
        "figures_learned": len(progress.unlocked_figures),
        "total_questions": progress.statistics.total_questions,
        "badges_earned": len(progress.badges),
    }


def figure_cards(figures: Iterable[Figure], progress: UserProgress) -> list[dict]:
    """Figures annotated with their unlocked state; locked ones expose no details."""
    cards = []
    for figure in figures:
        unlocked = progress.is_unlocked(figure.id)
        card = {
            "id": figure.id,
            "category": figure.category,
            "category_name": category_name(figure.category),
            "unlocked": unlocked,
        }
        if unlocked:
            card.update(figure.model_dump(exclude={"id", "category"}))
        cards.append(card)
    return cards
