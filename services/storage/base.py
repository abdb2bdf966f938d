import abc
import hashlib
from typing import List, Optional

from config.models import QuizResult

ANONYMOUS_SEGMENT = "anonymous"


def user_segment(user: Optional[str]) -> str:
    """Filesystem- and key-safe segment for a username, distinct per username."""
    if user is None:
        return ANONYMOUS_SEGMENT
    return hashlib.sha256(user.encode("utf-8")).hexdigest()


class ResultStore(abc.ABC):
    """Persists graded quiz results and reads a user's history back."""

    @abc.abstractmethod
    def save(self, result: QuizResult) -> str:
        """Persist `result` and return where it was written."""
        raise NotImplementedError()

    @abc.abstractmethod
    def find_by_user_order_by_time_desc(self, user: str) -> List[QuizResult]:
        """Return every result for `user`, most recent first."""
        raise NotImplementedError()

    @staticmethod
    def _owned_recent_first(user: Optional[str], results: List[QuizResult]) -> List[QuizResult]:
        owned = [r for r in results if r.user == user]
        return sorted(owned, key=lambda r: r.timestamp, reverse=True)
