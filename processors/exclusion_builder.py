"""Builds the list of previously-asked questions to keep out of a new quiz."""

import logging
from typing import List

logger = logging.getLogger(__name__)


class ExclusionBuilder:
    """Reads a user's quiz history and collects question texts for a topic."""

    def __init__(self, history_store):
        # any object exposing find_by_user_order_by_time_desc(user)
        self.history_store = history_store

    def build(self, user: str, topic: str) -> List[str]:
        """Return past question texts for `user` on `topic`, first-seen order, no repeats."""
        history = self.history_store.find_by_user_order_by_time_desc(user)
        wanted = topic.casefold()

        seen = set()
        excluded: List[str] = []
        for result in history:
            if (result.topic or "").casefold() != wanted:
                continue
            for qr in result.question_results:
                if qr.question_text not in seen:
                    seen.add(qr.question_text)
                    excluded.append(qr.question_text)

        logger.info(f"Excluding {len(excluded)} past questions for user={user} topic={topic!r}")
        return excluded
