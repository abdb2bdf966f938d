"""Validation of raw AI output against the quiz JSON contract."""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config.models import Question, QuestionType, question_adapter
from .errors import MalformedJson, MissingQuestionsArray, NoValidQuestions

logger = logging.getLogger(__name__)


class ResponseValidator:
    """
    Parses AI text into Question models.

    Individual malformed items are dropped with a warning; the batch only
    fails when nothing survives.
    """

    def validate(self, raw_text: str, question_type: QuestionType) -> List[Question]:
        cleaned = self._strip_code_fences(raw_text)

        if not cleaned.startswith("{") or not cleaned.endswith("}"):
            logger.error(f"AI did not return a valid JSON object. Raw text: {cleaned[:500]}")
            raise MalformedJson("AI did not return a valid JSON object.")

        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"AI returned unparseable JSON: {e}")
            raise MalformedJson(f"AI did not return a valid JSON object: {e}") from e

        items = payload.get("questions") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            logger.error(f"AI response JSON is missing 'questions' array. JSON: {cleaned[:500]}")
            raise MissingQuestionsArray("AI response JSON is missing 'questions' array.")

        questions: List[Question] = []
        for position, item in enumerate(items):
            question = self._validate_item(item, question_type, position)
            if question is not None:
                questions.append(question)

        if not questions:
            logger.error(f"Failed to parse any valid questions from AI response ({len(items)} items).")
            raise NoValidQuestions("Failed to parse any questions from AI response.")

        dropped = len(items) - len(questions)
        if dropped:
            logger.info(f"Kept {len(questions)} of {len(items)} questions ({dropped} dropped).")
        return questions

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _strip_code_fences(raw_text: str) -> str:
        return (raw_text or "").replace("```json", "").replace("```", "").strip()

    def _validate_item(
        self, item: Any, question_type: QuestionType, position: int
    ) -> Optional[Question]:
        if not isinstance(item, dict):
            logger.warning(f"Skipping question #{position}: not a JSON object ({item!r})")
            return None

        data: Dict[str, Any] = dict(item)
        data["type"] = question_type

        try:
            return question_adapter.validate_python(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'][1:]) or 'item'}: {err['msg']}"
                for err in e.errors()
            )
            logger.warning(f"Skipping {question_type.value} question #{position} ({problems}): {item}")
            return None
