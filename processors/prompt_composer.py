"""Prompt construction for quiz generation."""

import json
from typing import Any, Dict, Optional, Sequence

from config.models import BLANK_MARKER, QuestionType

FILL_IN_BLANK_PROMPT = (
    "Generate a quiz with exactly {count} 'Fill in the Blank' questions. "
    "The quiz is {context}. Difficulty: '{difficulty}'. "
    "IMPORTANT: You must only output a JSON object. Do not add any other text or markdown. "
    "Follow this exact JSON structure: "
    '{{"questions":[{{"question":"A question with a {blank} in it.","answer":"The missing word"}}]}}. '
    "The 'question' field MUST contain '{blank}' as the blank."
)

MULTIPLE_CHOICE_PROMPT = (
    "Generate a quiz with exactly {count} 'Multiple Choice' questions. "
    "The quiz is {context}. Difficulty: '{difficulty}'. "
    "Output ONLY a strict JSON object (no markdown). "
    'The JSON structure MUST be: {{"questions":[{{"question":"...",'
    '"options":["A","B","C","D"],"correctOptionIndex":0}}]}}. '
    "The 'correctOptionIndex' MUST be the 0-based index of the factually correct option."
)

EXCLUSION_CLAUSE = "CRITICAL: Do NOT repeat any of the following questions: {questions}"


class PromptComposer:
    """Builds the single instruction string sent to the AI service."""

    def compose(
        self,
        context: str,
        difficulty: str,
        question_type: QuestionType,
        excluded: Optional[Sequence[str]] = None,
        count: int = 5,
        from_document: bool = False,
    ) -> str:
        framed = self._frame_context(context, from_document)

        if question_type == QuestionType.FILL_IN_BLANK:
            prompt = FILL_IN_BLANK_PROMPT.format(
                count=count, context=framed, difficulty=difficulty, blank=BLANK_MARKER
            )
        else:
            prompt = MULTIPLE_CHOICE_PROMPT.format(
                count=count, context=framed, difficulty=difficulty
            )

        if excluded:
            prompt += " " + EXCLUSION_CLAUSE.format(
                questions=json.dumps(list(excluded), ensure_ascii=False)
            )
        return prompt

    @staticmethod
    def _frame_context(context: str, from_document: bool) -> str:
        if from_document:
            return f"based on the provided document: {context}"
        return f"on the topic of '{context}'"


def build_gemini_payload(prompt: str) -> Dict[str, Any]:
    """Wrap a prompt in the generateContent envelope.

    The envelope is sent as a JSON body, so quotes, backslashes and newlines in
    the prompt are escaped by the serializer.
    """
    return {"contents": [{"parts": [{"text": prompt}]}]}
