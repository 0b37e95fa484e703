"""Tests for the daily streak rule."""

from datetime import date

from great_figures_quiz.gamification.streak import update_streak
from great_figures_quiz.models.progress import UserProgress

TODAY = date(2026, 3, 10)


def test_first_play_starts_streak():
    progress = UserProgress()
    assert update_streak(progress, TODAY) == 1
    assert progress.last_play_date == TODAY


def test_same_day_unchanged():
    progress = UserProgress(streak=4, last_play_date=TODAY)
    assert update_streak(progress, TODAY) == 4
    assert progress.streak == 4


def test_next_day_increments():
    progress = UserProgress(streak=4, last_play_date=date(2026, 3, 9))
    assert update_streak(progress, TODAY) == 5
    assert progress.last_play_date == TODAY


def test_gap_resets():
    progress = UserProgress(streak=12, last_play_date=date(2026, 3, 8))
    assert update_streak(progress, TODAY) == 1


def test_long_gap_resets():
    progress = UserProgress(streak=12, last_play_date=date(2025, 3, 10))
    assert update_streak(progress, TODAY) == 1


def test_month_boundary_counts_as_consecutive():
    progress = UserProgress(streak=2, last_play_date=date(2026, 2, 28))
    assert update_streak(progress, date(2026, 3, 1)) == 3


def test_future_last_play_date_leaves_streak():
    progress = UserProgress(streak=3, last_play_date=date(2026, 3, 11))
    assert update_streak(progress, TODAY) == 3
    assert progress.last_play_date == TODAY


def test_many_sessions_one_day():
    progress = UserProgress()
    for _ in range(5):
        update_streak(progress, TODAY)
    assert progress.streak == 1
