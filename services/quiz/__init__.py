"""Quiz generation and grading service for QuizForge."""

from .main import QuizService
from .stats import ProfileAggregator

__all__ = ["QuizService", "ProfileAggregator"]
