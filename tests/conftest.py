"""Shared fixtures for quiz tests."""

import random
from datetime import date

import pytest

from great_figures_quiz.content.catalog import FigureCatalog, QuestionBank
from great_figures_quiz.gamification.engine import ProgressionEngine
from great_figures_quiz.models.content import Figure, Question
from great_figures_quiz.quiz.session import QuizSessionManager
from great_figures_quiz.storage.progress import ProgressStore


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "user_progress.json")


@pytest.fixture
def engine(store):
    return ProgressionEngine(store)


@pytest.fixture
def make_question():
    def _make(qid, difficulty="beginner", category="scientist", figure_id=None, correct=0):
        return Question(
            id=str(qid),
            category=category,
            difficulty=difficulty,
            text=f"Question {qid}?",
            options=("A", "B", "C", "D"),
            correct_answer=correct,
            explanation=f"Because {qid}.",
            figure_id=figure_id or f"figure-{qid}",
        )

    return _make


@pytest.fixture
def question_bank(make_question):
    questions = [make_question(i, "beginner", correct=i % 4) for i in range(12)]
    questions += [make_question(100 + i, "intermediate") for i in range(3)]
    return QuestionBank(questions)


@pytest.fixture
def figures():
    return FigureCatalog([
        Figure(id="einstein", name="Albert Einstein", name_en="Albert Einstein", category="scientist"),
        Figure(id="curie", name="Marie Curie", name_en="Marie Curie", category="scientist"),
        Figure(id="da_vinci", name="Leonardo da Vinci", category="artist"),
    ])


@pytest.fixture
def play_day():
    """Mutable 'today' for streak-sensitive tests."""
    return [date(2026, 3, 1)]


@pytest.fixture
def manager(engine, store, question_bank, figures, play_day):
    return QuizSessionManager(
        engine,
        store,
        question_bank,
        figures,
        rng=random.Random(0),
        today=lambda: play_day[0],
    )
