"""Smoke tests for Pydantic models."""

from datetime import date

import pytest
from pydantic import ValidationError

from great_figures_quiz.models.content import Category, Difficulty, Question, category_name
from great_figures_quiz.models.progress import (
    QuizHistoryEntry,
    Statistics,
    UserProgress,
    calculate_percentage,
)
from great_figures_quiz.models.quiz import SessionState


def _entry(day: int) -> QuizHistoryEntry:
    return QuizHistoryEntry(
        difficulty="beginner",
        score=day,
        correct_answers=1,
        total_questions=1,
        accuracy_rate=100,
        date=date(2026, 1, 1),
        timestamp=day,
    )


class TestCalculatePercentage:
    def test_zero_total(self):
        assert calculate_percentage(0, 0) == 0

    def test_rounds_to_nearest(self):
        assert calculate_percentage(1, 3) == 33
        assert calculate_percentage(2, 3) == 67

    def test_half_rounds_up(self):
        assert calculate_percentage(1, 8) == 13
        assert calculate_percentage(1, 2) == 50


class TestQuestion:
    def test_parses_camel_case_json(self):
        q = Question.model_validate({
            "id": 7,
            "category": "artist",
            "difficulty": "beginner",
            "question": "Who painted it?",
            "options": ["A", "B"],
            "correctAnswer": 1,
            "explanation": "B did.",
            "figureId": 42,
        })
        assert q.id == "7"
        assert q.figure_id == "42"
        assert q.text == "Who painted it?"
        assert q.options == ("A", "B")
        assert q.correct_answer == 1

    def test_correct_answer_out_of_range(self):
        with pytest.raises(ValidationError):
            Question(
                id="1", category="artist", difficulty="beginner", text="?",
                options=("A", "B"), correct_answer=2, figure_id="x",
            )

    def test_option_text(self):
        q = Question(
            id="1", category="artist", difficulty="beginner", text="?",
            options=("A", "B"), correct_answer=0, figure_id="x",
        )
        assert q.option_text(1) == "B"
        assert q.option_text(5) is None
        assert q.option_text(-1) is None

    def test_frozen(self):
        q = Question(
            id="1", category="artist", difficulty="beginner", text="?",
            options=("A",), correct_answer=0, figure_id="x",
        )
        with pytest.raises(ValidationError):
            q.text = "changed"


class TestEnums:
    def test_difficulty_values(self):
        assert [d.value for d in Difficulty] == ["beginner", "intermediate", "advanced"]

    def test_category_names(self):
        assert Category.SCIENTIST.display_name == "Scientist"
        assert category_name("explorer") == "Explorer"
        assert category_name("unknown") == "unknown"

    def test_session_states(self):
        assert SessionState.IDLE == "idle"
        assert SessionState.IN_PROGRESS == "in_progress"
        assert SessionState.COMPLETED == "completed"


class TestStatistics:
    def test_record_recomputes_accuracy(self):
        stats = Statistics()
        stats.record(10, 7)
        assert stats.accuracy_rate == 70
        stats.record(10, 10)
        assert stats.total_questions == 20
        assert stats.correct_answers == 17
        assert stats.accuracy_rate == 85

    def test_record_category(self):
        stats = Statistics()
        stats.record_category("artist", 3, 2)
        stats.record_category("artist", 1, 1)
        assert stats.category_stats["artist"].total == 4
        assert stats.category_stats["artist"].correct == 3
        assert stats.category_stats["artist"].accuracy_rate == 75


class TestUserProgress:
    def test_defaults(self):
        progress = UserProgress()
        assert progress.level == 1
        assert progress.experience == 0
        assert progress.total_points == 0
        assert progress.streak == 0
        assert progress.last_play_date is None
        assert progress.unlocked_figures == []
        assert progress.badges == []
        assert progress.statistics.accuracy_rate == 0
        assert progress.quiz_history == []

    def test_unlock_figure_is_idempotent(self):
        progress = UserProgress()
        assert progress.unlock_figure("curie") is True
        assert progress.unlock_figure("curie") is False
        assert progress.unlocked_figures == ["curie"]

    def test_award_badge_once(self):
        progress = UserProgress()
        assert progress.award_badge("beginner") is True
        assert progress.award_badge("beginner") is False
        assert progress.badges == ["beginner"]

    def test_history_is_bounded(self):
        progress = UserProgress()
        for i in range(55):
            progress.append_history(_entry(i))
        assert len(progress.quiz_history) == 50
        assert [e.score for e in progress.quiz_history] == list(range(5, 55))

    def test_serializes_with_camel_case_keys(self):
        data = UserProgress(total_points=5).model_dump(by_alias=True)
        assert data["totalPoints"] == 5
        assert "lastPlayDate" in data
        assert "categoryStats" in data["statistics"]

    def test_rejects_negative_counters(self):
        with pytest.raises(ValidationError):
            UserProgress(experience=-1)
        with pytest.raises(ValidationError):
            UserProgress(level=0)

    def test_experience_must_stay_below_level_threshold(self):
        assert UserProgress(level=2, experience=399).experience == 399
        with pytest.raises(ValidationError):
            UserProgress(level=1, experience=100)
        with pytest.raises(ValidationError):
            UserProgress.model_validate({"level": 3, "experience": 5000})

    @pytest.mark.parametrize("field", ["unlockedFigures", "badges"])
    def test_rejects_duplicate_ids(self, field):
        with pytest.raises(ValidationError):
            UserProgress.model_validate({field: ["curie", "curie"]})
