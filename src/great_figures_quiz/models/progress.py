"""User progress model persisted across quiz sessions."""

import math
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

HISTORY_LIMIT = 50


def required_experience(level: int) -> int:
    """Experience needed to advance past `level`."""
    return 100 * level**2


def calculate_percentage(value: int, total: int) -> int:
    """Integer percentage of value/total, rounding halves up. 0 when total is 0."""
    if total == 0:
        return 0
    return math.floor(value / total * 100 + 0.5)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryStats(CamelModel):
    total: int = Field(default=0, ge=0)
    correct: int = Field(default=0, ge=0)

    @property
    def accuracy_rate(self) -> int:
        return calculate_percentage(self.correct, self.total)


class Statistics(CamelModel):
    total_questions: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    accuracy_rate: int = Field(default=0, ge=0, le=100)
    category_stats: dict[str, CategoryStats] = Field(default_factory=dict)

    def record(self, total: int, correct: int) -> None:
        """Add answered/correct counts and recompute the accuracy rate."""
        self.total_questions += total
        self.correct_answers += correct
        self.accuracy_rate = calculate_percentage(self.correct_answers, self.total_questions)

    def record_category(self, category: str, total: int, correct: int) -> None:
        stats = self.category_stats.setdefault(category, CategoryStats())
        stats.total += total
        stats.correct += correct


class QuizHistoryEntry(CamelModel):
    difficulty: str
    score: int
    correct_answers: int
    total_questions: int
    accuracy_rate: int
    date: date
    timestamp: int  # epoch milliseconds


class UserProgress(CamelModel):
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    total_points: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    last_play_date: date | None = None
    unlocked_figures: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)
    quiz_history: list[QuizHistoryEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_invariants(self) -> "UserProgress":
        if self.experience >= required_experience(self.level):
            raise ValueError(
                f"experience {self.experience} must be below {required_experience(self.level)} "
                f"at level {self.level}"
            )
        for name in ("unlocked_figures", "badges"):
            ids = getattr(self, name)
            if len(set(ids)) != len(ids):
                raise ValueError(f"{name} contains duplicate ids")
        return self

    def has_badge(self, badge_id: str) -> bool:
        return badge_id in self.badges

    def award_badge(self, badge_id: str) -> bool:
        """Add a badge id. Returns False if it was already held."""
        if badge_id in self.badges:
            return False
        self.badges.append(badge_id)
        return True

    def is_unlocked(self, figure_id: str) -> bool:
        return figure_id in self.unlocked_figures

    def unlock_figure(self, figure_id: str) -> bool:
        """Add a figure id. Returns False if it was already unlocked."""
        if figure_id in self.unlocked_figures:
            return False
        self.unlocked_figures.append(figure_id)
        return True

    def append_history(self, entry: QuizHistoryEntry, limit: int = HISTORY_LIMIT) -> None:
        """Append a session summary, keeping only the most recent `limit` entries."""
        self.quiz_history.append(entry)
        if len(self.quiz_history) > limit:
            self.quiz_history = self.quiz_history[-limit:]
