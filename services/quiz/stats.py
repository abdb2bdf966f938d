"""Profile statistics over a user's quiz history."""

import logging
from typing import List, Optional

from config.models import ProfileStats, QuizResult
from config.settings import get_quiz_config

logger = logging.getLogger(__name__)


class ProfileAggregator:
    """Summarises a user's graded quizzes into ProfileStats."""

    def __init__(self, recent_limit: Optional[int] = None):
        if recent_limit is None:
            recent_limit = get_quiz_config().recent_results_limit
        self.recent_limit = recent_limit

    def aggregate(self, user: str, history: List[QuizResult]) -> ProfileStats:
        """`history` must already be ordered most recent first."""
        total_score = sum(r.score for r in history)
        total_questions = sum(r.total for r in history)

        average = 0.0
        if total_questions > 0:
            average = round(100.0 * total_score / total_questions, 2)

        logger.debug(f"Profile for {user}: {len(history)} quizzes, average {average}%")
        return ProfileStats(
            user=user,
            total_quizzes=len(history),
            total_questions=total_questions,
            total_score=total_score,
            average_score=average,
            recent_results=history[: self.recent_limit],
        )
