"""Quiz generation and grading components for QuizForge."""

from .ai_client import AIGateway, GeminiGateway, OpenAIGateway, get_ai_gateway
from .context_extractor import ContextExtractor, DocumentExtractor
from .exclusion_builder import ExclusionBuilder
from .prompt_composer import PromptComposer
from .response_validator import ResponseValidator
from .fallback_generator import create_fallback_quiz
from .grading import GradingEngine
from .quiz_pipeline import QuizPipeline

__all__ = [
    "AIGateway", "GeminiGateway", "OpenAIGateway", "get_ai_gateway",
    "ContextExtractor", "DocumentExtractor",
    "ExclusionBuilder", "PromptComposer", "ResponseValidator",
    "create_fallback_quiz", "GradingEngine", "QuizPipeline",
]
