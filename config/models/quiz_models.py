"""Quiz data models for QuizForge."""

import re
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

BLANK_MARKER = "____"


# ----------------------------------------------------------------------
# ENUMERATIONS
# ----------------------------------------------------------------------

class QuestionType(str, Enum):
    """Question types a quiz can be generated with."""
    MULTIPLE_CHOICE = "Multiple Choice"
    FILL_IN_BLANK = "Fill in the Blank"

    @classmethod
    def parse(cls, value: Any) -> "QuestionType":
        """Map a free-form type selector onto a QuestionType.

        Anything that is not recognisably fill-in-the-blank is multiple choice.
        """
        if isinstance(value, cls):
            return value
        key = re.sub(r"[\s_\-]+", "", str(value or "")).lower()
        if key in ("fillintheblank", "fillinblank", "fillblank", "fib"):
            return cls.FILL_IN_BLANK
        return cls.MULTIPLE_CHOICE


# ----------------------------------------------------------------------
# QUESTIONS
# ----------------------------------------------------------------------

class BaseQuestion(BaseModel):
    """Fields shared by every question variant."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    text: str = Field(alias="question", min_length=1)
    explanation: Optional[str] = None

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question text is blank")
        return v

    @field_validator("explanation", mode="before")
    @classmethod
    def _explanation_text_or_none(cls, v: Any) -> Optional[str]:
        # non-text explanations are discarded, the question is kept
        return v if isinstance(v, str) else None

    def correct_answer_text(self) -> Optional[str]:
        raise NotImplementedError()


class MultipleChoiceQuestion(BaseQuestion):
    """A question answered by picking one of several options."""
    type: Literal[QuestionType.MULTIPLE_CHOICE] = QuestionType.MULTIPLE_CHOICE
    options: List[str] = Field(min_length=1)
    correct_option_index: int = Field(alias="correctOptionIndex")

    @field_validator("options", mode="before")
    @classmethod
    def _options_as_text(cls, v: Any) -> Any:
        if isinstance(v, list):
            if any(o is None for o in v):
                raise ValueError("options must not contain null entries")
            return [o if isinstance(o, str) else str(o) for o in v]
        return v

    @model_validator(mode="after")
    def _index_in_range(self) -> "MultipleChoiceQuestion":
        if not 0 <= self.correct_option_index < len(self.options):
            raise ValueError(
                f"correctOptionIndex {self.correct_option_index} outside 0..{len(self.options) - 1}"
            )
        return self

    def correct_answer_text(self) -> Optional[str]:
        return self.options[self.correct_option_index]


class FillInBlankQuestion(BaseQuestion):
    """A sentence with a blank marker and a single expected word or phrase."""
    type: Literal[QuestionType.FILL_IN_BLANK] = QuestionType.FILL_IN_BLANK
    answer: str = Field(min_length=1)

    @field_validator("text")
    @classmethod
    def _has_blank(cls, v: str) -> str:
        if BLANK_MARKER not in v:
            raise ValueError(f"question text must contain the blank marker {BLANK_MARKER!r}")
        return v

    @field_validator("answer", mode="before")
    @classmethod
    def _answer_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("answer")
    @classmethod
    def _answer_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("answer is blank")
        return v

    def correct_answer_text(self) -> Optional[str]:
        return self.answer


Question = Annotated[
    Union[MultipleChoiceQuestion, FillInBlankQuestion],
    Field(discriminator="type"),
]

question_adapter: TypeAdapter = TypeAdapter(Question)


# ----------------------------------------------------------------------
# QUIZ
# ----------------------------------------------------------------------

class Quiz(BaseModel):
    """Immutable bundle produced by one generation request."""
    model_config = ConfigDict(frozen=True)

    topic: Optional[str] = None
    difficulty: str
    question_type: QuestionType
    questions: List[Question] = Field(min_length=1)
    is_fallback: bool = False
    note: Optional[str] = None


class UploadedFile(BaseModel):
    """A document uploaded alongside a generation request."""
    filename: str
    content: bytes = b""

    @property
    def is_empty(self) -> bool:
        return not self.content
