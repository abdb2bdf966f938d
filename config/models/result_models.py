"""Grading result models."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .quiz_models import QuestionType

NOT_ANSWERED = "Not Answered"


def _utc_now() -> datetime:
    """Naive UTC timestamp."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class QuestionResult(BaseModel):
    """One graded quiz item."""
    model_config = ConfigDict(frozen=True)

    question_text: str
    user_answer: str = NOT_ANSWERED
    correct_answer: Optional[str] = None
    is_correct: bool = False
    explanation: Optional[str] = None


class QuizResult(BaseModel):
    """Outcome of grading one submitted quiz."""
    model_config = ConfigDict(frozen=True)

    result_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    topic: Optional[str] = None
    user: Optional[str] = None
    question_type: Optional[QuestionType] = None
    difficulty: Optional[str] = None
    question_results: List[QuestionResult] = Field(default_factory=list)
    score: int = 0
    total: int = 0
    timestamp: datetime = Field(default_factory=_utc_now)


class ProfileStats(BaseModel):
    """Lifetime statistics for a single user."""
    user: str
    total_quizzes: int = 0
    total_questions: int = 0
    total_score: int = 0
    average_score: float = Field(0.0, ge=0, le=100)
    recent_results: List[QuizResult] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "user": "alice",
            "total_quizzes": 3,
            "total_questions": 15,
            "total_score": 11,
            "average_score": 73.33,
            "recent_results": [],
        }
    })
