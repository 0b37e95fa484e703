"""Daily play streak computation."""

from datetime import date

import structlog

from great_figures_quiz.models.progress import UserProgress

logger = structlog.get_logger()


def update_streak(progress: UserProgress, today: date) -> int:
    """Apply one completed session played on `today` to the streak.

    Same day: unchanged. First play: 1. Next day: +1. Longer gap: back to 1.
    A last play date in the future leaves the streak alone.

    Returns:
        The streak after the update.
    """
    last = progress.last_play_date
    if last == today:
        return progress.streak

    if last is None:
        progress.streak = 1
    else:
        diff_days = (today - last).days
        if diff_days == 1:
            progress.streak += 1
        elif diff_days > 1:
            progress.streak = 1
        else:
            logger.warning("streak_clock_skew", last_play_date=str(last), today=str(today))

    progress.last_play_date = today
    logger.debug("streak_updated", streak=progress.streak)
    return progress.streak
