"""
Quiz generation pipeline.

context → exclusions → prompt → AI call → validation → Quiz. Every stage
failure is raised to the caller as a QuizError subclass.
"""

import logging
import time
from typing import Optional

from config.models import QuestionType, Quiz, UploadedFile
from .ai_client import AIGateway
from .context_extractor import ContextExtractor
from .exclusion_builder import ExclusionBuilder
from .prompt_composer import PromptComposer
from .response_validator import ResponseValidator

logger = logging.getLogger(__name__)


class QuizPipeline:
    """Runs one generation request through every stage."""

    def __init__(
        self,
        gateway: AIGateway,
        history_store=None,
        context_extractor: Optional[ContextExtractor] = None,
        composer: Optional[PromptComposer] = None,
        validator: Optional[ResponseValidator] = None,
    ):
        self.gateway = gateway
        self.context_extractor = context_extractor or ContextExtractor()
        self.exclusion_builder = ExclusionBuilder(history_store) if history_store is not None else None
        self.composer = composer or PromptComposer()
        self.validator = validator or ResponseValidator()

    def run(
        self,
        topic: Optional[str],
        count: int,
        difficulty: str,
        question_type: QuestionType,
        file: Optional[UploadedFile] = None,
        user: Optional[str] = None,
    ) -> Quiz:
        start = time.time()
        logger.info(
            f"→ START generation type={question_type.value} count={count} "
            f"topic={topic!r} file={file.filename if file else None}"
        )

        context, from_document = self.context_extractor.extract_context(topic, file)

        excluded = []
        if topic and topic.strip() and user and self.exclusion_builder is not None:
            excluded = self.exclusion_builder.build(user, topic)

        prompt = self.composer.compose(
            context=context,
            difficulty=difficulty,
            question_type=question_type,
            excluded=excluded,
            count=count,
            from_document=from_document,
        )

        raw_text = self.gateway.generate(prompt)
        questions = self.validator.validate(raw_text, question_type)

        quiz = Quiz(
            topic=topic,
            difficulty=difficulty,
            question_type=question_type,
            questions=questions,
        )
        logger.info(
            f"✓ DONE generation in {int((time.time() - start) * 1000)}ms "
            f"({len(questions)} questions)"
        )
        return quiz
