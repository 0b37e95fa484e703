"""Quiz session data models."""

from enum import StrEnum

from pydantic import BaseModel, Field

from great_figures_quiz.models.badge import Badge
from great_figures_quiz.models.progress import CamelModel


class SessionState(StrEnum):
    """Quiz session lifecycle states."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class WrongAnswer(CamelModel):
    question_text: str
    correct_answer_text: str
    user_answer_text: str | None = None


class AnswerFeedback(CamelModel):
    """Per-question feedback returned after an answer is checked."""

    is_correct: bool
    correct_answer: int
    explanation: str
    points: int


class SessionSummary(BaseModel):
    """Aggregated counts of a finished session used for badge evaluation."""

    difficulty: str
    correct_answers: int
    total_questions: int


class LevelUpInfo(CamelModel):
    leveled_up: bool = False
    old_level: int | None = None
    new_level: int | None = None
    current_experience: int | None = None
    required_experience: int | None = None


class QuizResults(CamelModel):
    score: int
    correct_answers: int
    total_questions: int
    accuracy_rate: int
    wrong_answers: list[WrongAnswer] = Field(default_factory=list)
    level_up_info: LevelUpInfo = Field(default_factory=LevelUpInfo)
    new_badges: list[Badge] = Field(default_factory=list)
    new_streak: int = 0
