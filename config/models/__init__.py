from .quiz_models import (
    BLANK_MARKER,
    QuestionType,
    BaseQuestion,
    MultipleChoiceQuestion,
    FillInBlankQuestion,
    Question,
    question_adapter,
    Quiz,
    UploadedFile,
)
from .result_models import (
    NOT_ANSWERED,
    QuestionResult,
    QuizResult,
    ProfileStats,
)

__all__ = [
    "BLANK_MARKER",
    "QuestionType",
    "BaseQuestion",
    "MultipleChoiceQuestion",
    "FillInBlankQuestion",
    "Question",
    "question_adapter",
    "Quiz",
    "UploadedFile",
    "NOT_ANSWERED",
    "QuestionResult",
    "QuizResult",
    "ProfileStats",
]
