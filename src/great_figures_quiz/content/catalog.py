"""Question and figure catalogs loaded from JSON files at startup."""

import json
from collections.abc import Iterator
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from great_figures_quiz.errors import ContentLoadError
from great_figures_quiz.models.content import Figure, Question

logger = structlog.get_logger()

_QUESTIONS = TypeAdapter(list[Question])
_FIGURES = TypeAdapter(list[Figure])


class QuestionBank:
    """Immutable, ordered collection of questions."""

    def __init__(self, questions: list[Question] | tuple[Question, ...] = ()):
        self._questions = tuple(questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def by_difficulty(self, difficulty: str) -> list[Question]:
        return [q for q in self._questions if q.difficulty == difficulty]


class FigureCatalog:
    """Immutable collection of figures with lookup helpers."""

    def __init__(self, figures: list[Figure] | tuple[Figure, ...] = ()):
        self._figures = tuple(figures)
        self._by_id = {f.id: f for f in self._figures}

    def __len__(self) -> int:
        return len(self._figures)

    def __iter__(self) -> Iterator[Figure]:
        return iter(self._figures)

    def get(self, figure_id: str) -> Figure | None:
        return self._by_id.get(figure_id)

    def by_category(self, category: str) -> list[Figure]:
        return [f for f in self._figures if f.category == category]

    def search(self, query: str) -> list[Figure]:
        """Case-insensitive match on the name or English name. Blank query returns all."""
        needle = query.strip().lower()
        if not needle:
            return list(self._figures)
        return [
            f for f in self._figures
            if needle in f.name.lower() or needle in f.name_en.lower()
        ]


def _read_items(path: Path, key: str) -> list:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ContentLoadError(path, "file not found")
    except (OSError, json.JSONDecodeError) as e:
        raise ContentLoadError(path, str(e)) from e
    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise ContentLoadError(path, f"expected an object with a '{key}' list")
    return data[key]


def load_questions(path: Path) -> QuestionBank:
    """Load the question catalog.

    Raises:
        ContentLoadError: If the file is missing, unreadable or malformed.
    """
    items = _read_items(path, "questions")
    try:
        questions = _QUESTIONS.validate_python(items)
    except ValidationError as e:
        raise ContentLoadError(path, f"{e.error_count()} invalid question field(s)") from e
    logger.info("questions_loaded", count=len(questions), path=str(path))
    return QuestionBank(questions)


def load_figures(path: Path) -> FigureCatalog:
    """Load the figure catalog.

    Raises:
        ContentLoadError: If the file is missing, unreadable or malformed.
    """
    items = _read_items(path, "figures")
    try:
        figures = _FIGURES.validate_python(items)
    except ValidationError as e:
        raise ContentLoadError(path, f"{e.error_count()} invalid figure field(s)") from e
    logger.info("figures_loaded", count=len(figures), path=str(path))
    return FigureCatalog(figures)
