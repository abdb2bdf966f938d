import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from config.models import QuizResult
from .base import ResultStore, user_segment

logger = logging.getLogger(__name__)


class LocalResultStore(ResultStore):
    """Filesystem-based result store: one JSON file per graded quiz."""

    def __init__(self, base_dir: str = "local_store"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _user_dir(self, user: str) -> Path:
        return self.base_dir / "results" / user_segment(user)

    def save(self, result: QuizResult) -> str:
        file_path = self._user_dir(result.user) / f"{result.result_id}.json"
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(result.model_dump_json(indent=2))
        logger.info(f"[LOCAL] Saved quiz result → {file_path}")
        return str(file_path)

    def find_by_user_order_by_time_desc(self, user: str) -> List[QuizResult]:
        user_dir = self._user_dir(user)
        if not user_dir.exists():
            return []

        results = []
        for file_path in user_dir.glob("*.json"):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    results.append(QuizResult.model_validate_json(f.read()))
            except (OSError, ValidationError) as e:
                logger.error(f"Failed to load local result {file_path}: {e}")

        return self._owned_recent_first(user, results)
