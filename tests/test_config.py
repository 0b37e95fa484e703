"""Tests for settings resolution."""

from great_figures_quiz.config import Settings


def test_defaults_point_into_data_dir(tmp_path):
    settings = Settings(project_root=tmp_path)
    assert settings.questions_path == tmp_path / "data" / "questions.json"
    assert settings.figures_path == tmp_path / "data" / "figures.json"
    assert settings.progress_path == tmp_path / "data" / "user_progress.json"
    assert settings.questions_per_quiz == 10
    assert settings.history_limit == 50


def test_data_dir_override(tmp_path):
    settings = Settings(data_dir=tmp_path / "content")
    assert settings.progress_path == tmp_path / "content" / "user_progress.json"


def test_env_override(monkeypatch):
    monkeypatch.setenv("QUIZ_QUESTIONS_PER_QUIZ", "5")
    monkeypatch.setenv("QUIZ_PORT", "9001")
    settings = Settings()
    assert settings.questions_per_quiz == 5
    assert settings.port == 9001
