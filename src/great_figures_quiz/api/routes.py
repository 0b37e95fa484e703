"""REST API routes exposing the quiz to a browser front end."""

import functools
import random

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from great_figures_quiz.analysis.statistics import category_accuracy, figure_cards, overview
from great_figures_quiz.config import get_settings
from great_figures_quiz.content.catalog import (
    FigureCatalog,
    QuestionBank,
    load_figures,
    load_questions,
)
from great_figures_quiz.errors import ContentLoadError, ContentUnavailableError
from great_figures_quiz.gamification.engine import ProgressionEngine
from great_figures_quiz.models.content import Difficulty
from great_figures_quiz.quiz.session import QuizSessionManager
from great_figures_quiz.storage.progress import ProgressStore

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


class AppState:
    """Collaborators shared by every request of this single-user installation."""

    def __init__(self, store: ProgressStore, questions: QuestionBank, figures: FigureCatalog,
                 questions_per_quiz: int = 10, history_limit: int = 50):
        self.store = store
        self.figures = figures
        self.engine = ProgressionEngine(store)
        self.quiz = QuizSessionManager(
            self.engine,
            store,
            questions,
            figures,
            questions_per_quiz=questions_per_quiz,
            history_limit=history_limit,
        )


@functools.lru_cache
def get_app_state() -> AppState:
    settings = get_settings()
    store = ProgressStore(settings.progress_path)
    store.initialize()
    try:
        questions = load_questions(settings.questions_path)
        figures = load_figures(settings.figures_path)
    except ContentLoadError as e:
        # Quizzes stay unavailable (503) until content is fixed and the app restarted
        logger.error("content_load_failed", path=str(e.path), reason=e.reason)
        questions, figures = QuestionBank(), FigureCatalog()
    return AppState(
        store,
        questions,
        figures,
        questions_per_quiz=settings.questions_per_quiz,
        history_limit=settings.history_limit,
    )


class StartQuizRequest(BaseModel):
    difficulty: Difficulty


class AnswerRequest(BaseModel):
    option_index: int


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def _start(state: AppState, difficulty: str) -> dict:
    try:
        started = state.quiz.start_quiz(difficulty)
    except ContentUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not started:
        raise HTTPException(status_code=409, detail=f"No questions for difficulty '{difficulty}'")
    return {"difficulty": difficulty, "totalQuestions": state.quiz.total_questions}


def _load_progress(state: AppState):
    progress = state.store.load()
    if progress is None:
        progress = state.store.initialize()
    return progress


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/quiz/start")
async def start_quiz(body: StartQuizRequest) -> dict:
    return _start(get_app_state(), body.difficulty.value)


@router.post("/quiz/daily")
async def start_daily_challenge() -> dict:
    """Start a quiz at a randomly picked difficulty."""
    return _start(get_app_state(), random.choice(list(Difficulty)).value)


@router.get("/quiz/question")
async def current_question() -> dict:
    quiz = get_app_state().quiz
    question = quiz.get_current_question()
    if question is None:
        raise HTTPException(status_code=409, detail="No active question")
    return {
        "index": quiz.current_question_index,
        "totalQuestions": quiz.total_questions,
        "progress": quiz.get_progress(),
        "score": quiz.score,
        "question": question.text,
        "category": question.category,
        "options": list(question.options),
    }


@router.post("/quiz/answer")
async def answer(body: AnswerRequest) -> dict:
    feedback = get_app_state().quiz.check_answer(body.option_index)
    if feedback is None:
        raise HTTPException(status_code=409, detail="Question already answered or no active quiz")
    return _dump(feedback)


@router.post("/quiz/next")
async def next_question() -> dict:
    has_next = get_app_state().quiz.next_question()
    return {"hasNext": has_next}


@router.get("/quiz/results")
async def results() -> dict:
    quiz = get_app_state().quiz
    quiz_results = quiz.get_results()
    if quiz_results is None:
        if quiz.results_ready:
            # Commit failed; the session is still open for a retry
            raise HTTPException(status_code=503, detail="Could not save progress")
        raise HTTPException(status_code=409, detail="Quiz is not finished")
    return _dump(quiz_results)


@router.post("/quiz/abandon")
async def abandon() -> dict:
    get_app_state().quiz.abandon_quiz()
    return {"status": "idle"}


@router.get("/progress")
async def get_progress() -> dict:
    return _dump(_load_progress(get_app_state()))


@router.get("/badges")
async def list_badges() -> list[dict]:
    state = get_app_state()
    _load_progress(state)
    return [_dump(b) for b in state.engine.get_all_badges()]


@router.get("/statistics")
async def statistics() -> dict:
    progress = _load_progress(get_app_state())
    return {"overview": overview(progress), "categories": category_accuracy(progress)}


@router.get("/figures")
async def list_figures(category: str | None = None, q: str | None = None) -> list[dict]:
    state = get_app_state()
    figures = state.figures.search(q) if q else list(state.figures)
    if category and category != "all":
        figures = [f for f in figures if f.category == category]
    return figure_cards(figures, _load_progress(state))


@router.get("/progress/export", response_class=PlainTextResponse)
async def export_progress() -> str:
    data = get_app_state().store.export_data()
    if data is None:
        raise HTTPException(status_code=404, detail="No progress recorded")
    return data


@router.post("/progress/import")
async def import_progress(request: Request) -> dict:
    raw = await request.body()
    if not get_app_state().store.import_data(raw):
        raise HTTPException(status_code=400, detail="Invalid progress data")
    return {"status": "imported"}


@router.post("/progress/reset")
async def reset_progress() -> dict:
    state = get_app_state()
    state.quiz.abandon_quiz()
    return _dump(state.store.reset())
