"""Quiz session lifecycle: question selection, answer checking and results."""

import random
import time
from collections.abc import Callable
from datetime import date

import structlog

from great_figures_quiz.content.catalog import FigureCatalog, QuestionBank
from great_figures_quiz.errors import ContentUnavailableError, ProgressSaveError
from great_figures_quiz.gamification.engine import ProgressionEngine, calculate_points
from great_figures_quiz.gamification.streak import update_streak
from great_figures_quiz.models.content import Question
from great_figures_quiz.models.progress import (
    HISTORY_LIMIT,
    CategoryStats,
    QuizHistoryEntry,
    calculate_percentage,
)
from great_figures_quiz.models.quiz import (
    AnswerFeedback,
    QuizResults,
    SessionState,
    SessionSummary,
    WrongAnswer,
)
from great_figures_quiz.storage.progress import ProgressStore

logger = structlog.get_logger()

QUESTIONS_PER_QUIZ = 10


class QuizSessionManager:
    """Runs one quiz attempt at a time.

    Idle -> InProgress on ``start_quiz``; InProgress -> Completed on
    ``get_results`` once every question has been passed. Nothing is written
    to the progress store until ``get_results``, so an abandoned session
    leaves no trace.

    Args:
        engine: Progression rules applied at completion.
        store: Persistent store holding the progress record.
        questions: Question catalog to draw from.
        figures: Figure catalog used for category-master badges.
        questions_per_quiz: Target session size.
        history_limit: Number of session summaries kept in progress.
        rng: Random source for shuffling.
        today: Returns the current calendar date.
    """

    def __init__(
        self,
        engine: ProgressionEngine,
        store: ProgressStore,
        questions: QuestionBank,
        figures: FigureCatalog | None = None,
        questions_per_quiz: int = QUESTIONS_PER_QUIZ,
        history_limit: int = HISTORY_LIMIT,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.engine = engine
        self.store = store
        self.questions = questions
        self.figures = figures
        self.questions_per_quiz = questions_per_quiz
        self.history_limit = history_limit
        self._rng = rng or random.Random()
        self._today = today

        self.state = SessionState.IDLE
        self.difficulty: str | None = None
        self.current_questions: list[Question] = []
        self._reset_counters()

    def _reset_counters(self) -> None:
        self.current_question_index = 0
        self.score = 0
        self.correct_answers = 0
        self.consecutive_correct = 0
        self.wrong_answers: list[WrongAnswer] = []
        self.is_answered = False
        self._category_stats: dict[str, CategoryStats] = {}

    def select_questions(self, difficulty: str, count: int) -> list[Question]:
        """Random selection of up to `count` questions of the given difficulty."""
        pool = self.questions.by_difficulty(difficulty)
        # random.shuffle is an in-place Fisher-Yates permutation
        self._rng.shuffle(pool)
        return pool[:count]

    def start_quiz(self, difficulty: str) -> bool:
        """Begin a new session. Returns False if no question matches `difficulty`.

        Raises:
            ContentUnavailableError: If the question catalog is empty.
        """
        if len(self.questions) == 0:
            raise ContentUnavailableError("Question catalog is empty; cannot start a quiz")

        selected = self.select_questions(difficulty, self.questions_per_quiz)
        if not selected:
            logger.warning("quiz_start_no_questions", difficulty=difficulty)
            return False

        self.difficulty = difficulty
        self.current_questions = selected
        self._reset_counters()
        self.state = SessionState.IN_PROGRESS
        logger.info("quiz_started", difficulty=difficulty, questions=len(selected))
        return True

    def abandon_quiz(self) -> None:
        """Drop the active session without committing anything."""
        if self.state == SessionState.IN_PROGRESS:
            logger.info(
                "quiz_abandoned",
                difficulty=self.difficulty,
                answered=self.current_question_index,
            )
        self.state = SessionState.IDLE
        self.current_questions = []
        self._reset_counters()

    @property
    def total_questions(self) -> int:
        return len(self.current_questions)

    def get_current_question(self) -> Question | None:
        if self.state != SessionState.IN_PROGRESS:
            return None
        if self.current_question_index >= len(self.current_questions):
            return None
        return self.current_questions[self.current_question_index]

    def check_answer(self, selected_option: int) -> AnswerFeedback | None:
        """Score the answer to the current question.

        Returns None when there is no current question or it was already answered.
        """
        question = self.get_current_question()
        if question is None or self.is_answered:
            logger.warning(
                "answer_rejected",
                state=self.state.value,
                already_answered=self.is_answered,
            )
            return None

        self.is_answered = True
        is_correct = selected_option == question.correct_answer
        stats = self._category_stats.setdefault(question.category, CategoryStats())
        stats.total += 1

        points = 0
        if is_correct:
            self.correct_answers += 1
            self.consecutive_correct += 1
            stats.correct += 1
            points = calculate_points(self.difficulty, True, self.consecutive_correct)
            self.score += points
            logger.debug("answer_correct", points=points, consecutive=self.consecutive_correct)
        else:
            self.consecutive_correct = 0
            self.wrong_answers.append(
                WrongAnswer(
                    question_text=question.text,
                    correct_answer_text=question.options[question.correct_answer],
                    user_answer_text=question.option_text(selected_option),
                )
            )
            logger.debug("answer_incorrect", question_id=question.id)

        return AnswerFeedback(
            is_correct=is_correct,
            correct_answer=question.correct_answer,
            explanation=question.explanation,
            points=points,
        )

    def next_question(self) -> bool:
        """Advance the cursor. Returns True while another question remains."""
        if self.state != SessionState.IN_PROGRESS:
            return False
        self.is_answered = False
        if self.current_question_index < len(self.current_questions):
            self.current_question_index += 1
        return self.current_question_index < len(self.current_questions)

    @property
    def results_ready(self) -> bool:
        """True once every question of the running session has been passed."""
        return (
            self.state == SessionState.IN_PROGRESS
            and bool(self.current_questions)
            and self.current_question_index >= len(self.current_questions)
        )

    def get_progress(self) -> int:
        """Display progress through the session as a whole percentage."""
        return calculate_percentage(self.current_question_index + 1, len(self.current_questions))

    def get_results(self) -> QuizResults | None:
        """Commit the finished session to progress and return its summary.

        Returns None unless a session is in progress with every question passed.
        Also returns None when the progress record cannot be written; the
        session then stays in progress so the call can be retried.
        """
        if not self.results_ready:
            logger.warning(
                "results_not_ready",
                state=self.state.value,
                index=self.current_question_index,
                total=len(self.current_questions),
            )
            return None

        today = self._today()
        total = len(self.current_questions)
        accuracy = calculate_percentage(self.correct_answers, total)
        summary = SessionSummary(
            difficulty=self.difficulty,
            correct_answers=self.correct_answers,
            total_questions=total,
        )

        try:
            with self.store.transaction(create_missing=True) as progress:
                level_up_info = self.engine.apply_experience(progress, self.score)
                progress.total_points += self.score

                progress.statistics.record(total, self.correct_answers)
                for category, stats in self._category_stats.items():
                    progress.statistics.record_category(category, stats.total, stats.correct)

                new_streak = update_streak(progress, today)
                new_badges = self.engine.award_session_badges(progress, summary)

                for figure_id in dict.fromkeys(q.figure_id for q in self.current_questions):
                    if progress.unlock_figure(figure_id):
                        logger.info("figure_unlocked", figure_id=figure_id)

                if self.figures is not None:
                    for category in dict.fromkeys(q.category for q in self.current_questions):
                        badge = self.engine.award_category_master(progress, category, self.figures)
                        if badge is not None:
                            new_badges.append(badge)

                progress.append_history(
                    QuizHistoryEntry(
                        difficulty=self.difficulty,
                        score=self.score,
                        correct_answers=self.correct_answers,
                        total_questions=total,
                        accuracy_rate=accuracy,
                        date=today,
                        timestamp=int(time.time() * 1000),
                    ),
                    limit=self.history_limit,
                )
        except ProgressSaveError as e:
            logger.error("results_not_persisted", difficulty=self.difficulty, error=str(e))
            return None

        self.state = SessionState.COMPLETED
        logger.info(
            "quiz_completed",
            difficulty=self.difficulty,
            score=self.score,
            correct=self.correct_answers,
            total=total,
            new_badges=[b.id for b in new_badges],
        )
        return QuizResults(
            score=self.score,
            correct_answers=self.correct_answers,
            total_questions=total,
            accuracy_rate=accuracy,
            wrong_answers=list(self.wrong_answers),
            level_up_info=level_up_info,
            new_badges=new_badges,
            new_streak=new_streak,
        )
