"""Exception hierarchy for the quiz generation pipeline."""

from typing import Optional


class QuizError(Exception):
    """Base class for every quiz pipeline failure."""


class InvalidRequest(QuizError):
    """The caller supplied neither a topic nor a file."""


# ----------------------------------------------------------------------
# Document stage
# ----------------------------------------------------------------------

class ContextExtractionFailed(QuizError):
    """Text could not be extracted from the uploaded document."""


class UnsupportedFileType(ContextExtractionFailed):
    """The uploaded document has an extension we cannot read."""

    def __init__(self, filename: Optional[str]):
        self.filename = filename
        super().__init__(f"Unsupported file type: {filename}")


# ----------------------------------------------------------------------
# AI stage
# ----------------------------------------------------------------------

class GenerationFailed(QuizError):
    """The AI service did not produce usable text."""


class UpstreamCallFailed(GenerationFailed):
    """Transport failure or non-200 response from the AI service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ContentBlocked(GenerationFailed):
    """The AI service refused the prompt on safety grounds."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"The request was blocked by the AI for safety reasons: {reason}")


class EmptyOrInvalidResponse(GenerationFailed):
    """The AI service answered 200 but without candidate text."""


# ----------------------------------------------------------------------
# Validation stage
# ----------------------------------------------------------------------

class ResponseValidationError(QuizError):
    """The AI text does not satisfy the quiz JSON contract."""


class MalformedJson(ResponseValidationError):
    """The AI text is not a JSON object."""


class MissingQuestionsArray(ResponseValidationError):
    """The JSON object has no `questions` array."""


class NoValidQuestions(ResponseValidationError):
    """Every item in the `questions` array was rejected."""
