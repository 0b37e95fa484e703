"""Tests for question and figure catalog loading."""

import json
from pathlib import Path

import pytest

from great_figures_quiz.content.catalog import FigureCatalog, load_figures, load_questions
from great_figures_quiz.errors import ContentLoadError
from great_figures_quiz.models.content import MAIN_CATEGORIES, Difficulty, Figure

DATA_DIR = Path(__file__).parent.parent / "data"


class TestBundledContent:
    def test_questions_load(self):
        bank = load_questions(DATA_DIR / "questions.json")
        assert len(bank) > 0
        for difficulty in Difficulty:
            assert bank.by_difficulty(difficulty), difficulty

    def test_every_question_links_to_a_figure(self):
        bank = load_questions(DATA_DIR / "questions.json")
        figures = load_figures(DATA_DIR / "figures.json")
        for question in bank:
            assert figures.get(question.figure_id) is not None, question.id
            assert figures.get(question.figure_id).category == question.category

    def test_every_main_category_has_figures(self):
        figures = load_figures(DATA_DIR / "figures.json")
        for category in MAIN_CATEGORIES:
            assert figures.by_category(category), category


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ContentLoadError, match="file not found"):
            load_questions(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text("{broken")
        with pytest.raises(ContentLoadError):
            load_questions(path)

    def test_missing_key(self, tmp_path):
        path = tmp_path / "figures.json"
        path.write_text(json.dumps({"people": []}))
        with pytest.raises(ContentLoadError, match="'figures'"):
            load_figures(path)

    def test_invalid_question(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps({"questions": [{"id": 1, "question": "?"}]}))
        with pytest.raises(ContentLoadError) as exc_info:
            load_questions(path)
        assert exc_info.value.path == path


class TestFigureCatalog:
    @pytest.fixture
    def catalog(self):
        return FigureCatalog([
            Figure(id="einstein", name="Albert Einstein", name_en="Einstein", category="scientist"),
            Figure(id="curie", name="Marie Curie", name_en="Curie", category="scientist"),
            Figure(id="monet", name="Claude Monet", name_en="Monet", category="artist"),
        ])

    def test_by_category(self, catalog):
        assert [f.id for f in catalog.by_category("scientist")] == ["einstein", "curie"]
        assert catalog.by_category("inventor") == []

    def test_search_case_insensitive(self, catalog):
        assert [f.id for f in catalog.search("MARIE")] == ["curie"]
        assert [f.id for f in catalog.search("monet")] == ["monet"]

    def test_blank_search_returns_all(self, catalog):
        assert len(catalog.search("   ")) == 3

    def test_get(self, catalog):
        assert catalog.get("curie").name == "Marie Curie"
        assert catalog.get("nobody") is None
