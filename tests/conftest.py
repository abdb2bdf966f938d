import json
from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from config.models import QuestionResult, QuizResult
from processors.ai_client import AIGateway
from services.storage import LocalResultStore


class FakeGateway(AIGateway):
    """Returns canned text (or raises) and records every prompt it sees."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakeHistoryStore:
    def __init__(self, results: List[QuizResult]):
        self.results = results
        self.calls: List[str] = []

    def find_by_user_order_by_time_desc(self, user: str) -> List[QuizResult]:
        self.calls.append(user)
        return [r for r in self.results if r.user == user]


def make_result(user: str, topic: str, questions: List[str], minutes_ago: int = 0,
                score: int = 0) -> QuizResult:
    return QuizResult(
        topic=topic,
        user=user,
        question_results=[QuestionResult(question_text=q, correct_answer="x") for q in questions],
        score=score,
        total=len(questions),
        timestamp=datetime(2026, 1, 1, 12, 0) - timedelta(minutes=minutes_ago),
    )


def mc_payload(n: int = 2) -> str:
    return json.dumps({
        "questions": [
            {
                "question": f"Question {i}?",
                "options": ["Paris", "London", "Rome", "Berlin"],
                "correctOptionIndex": 0,
            }
            for i in range(n)
        ]
    })


@pytest.fixture
def local_store(tmp_path):
    return LocalResultStore(str(tmp_path / "store"))
