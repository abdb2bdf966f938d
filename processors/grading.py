"""Grading engine for submitted quiz answers."""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from config.models import (
    NOT_ANSWERED, Question, QuestionResult, QuestionType, Quiz, QuizResult
)

logger = logging.getLogger(__name__)

_ANSWER_KEY_RE = re.compile(r"^\s*q?(\d+)\s*$", re.IGNORECASE)


class GradingEngine:
    """Scores a submission against the quiz it was answering. Never raises."""

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def grade(
        self,
        quiz: Quiz,
        submitted_answers: Any,
        user: Optional[str] = None,
    ) -> QuizResult:
        answers = self._index_answers(submitted_answers)

        results: List[QuestionResult] = []
        score = 0
        for index, question in enumerate(quiz.questions):
            result = self._grade_question(question, answers.get(index))
            if result.is_correct:
                score += 1
            results.append(result)

        logger.info(
            f"Graded quiz topic={quiz.topic!r} user={user}: {score}/{len(quiz.questions)} correct"
        )

        return QuizResult(
            topic=quiz.topic,
            user=user,
            question_type=quiz.question_type,
            difficulty=quiz.difficulty,
            question_results=results,
            score=score,
            total=len(quiz.questions),
        )

    # ------------------------------------------------------------------
    # Per-question comparison
    # ------------------------------------------------------------------
    def _grade_question(self, question: Question, user_answer: Optional[str]) -> QuestionResult:
        correct_answer = question.correct_answer_text()

        if user_answer is None or not user_answer.strip():
            return QuestionResult(
                question_text=question.text,
                user_answer=NOT_ANSWERED,
                correct_answer=correct_answer,
                is_correct=False,
                explanation=question.explanation,
            )

        if question.type == QuestionType.FILL_IN_BLANK:
            is_correct = correct_answer is not None and user_answer.casefold() == correct_answer.casefold()
        else:
            # exact match, no case or whitespace normalisation
            is_correct = user_answer == correct_answer

        return QuestionResult(
            question_text=question.text,
            user_answer=user_answer,
            correct_answer=correct_answer,
            is_correct=is_correct,
            explanation=question.explanation,
        )

    # ------------------------------------------------------------------
    # Submission normalisation
    # ------------------------------------------------------------------
    @staticmethod
    def _index_answers(submitted: Any) -> Dict[int, str]:
        """
        Key answers by question position.

        Mappings accept 0, "0" and "q0" style keys; a list or tuple is read
        positionally. Any other submission counts as no answers.
        """
        indexed: Dict[int, str] = {}
        if not submitted:
            return indexed

        if isinstance(submitted, Mapping):
            pairs = submitted.items()
        elif isinstance(submitted, Sequence) and not isinstance(submitted, (str, bytes)):
            pairs = enumerate(submitted)
        else:
            logger.warning(f"Ignoring submission of unsupported type {type(submitted).__name__}")
            return indexed

        for key, value in pairs:
            if isinstance(key, bool):
                continue
            if isinstance(key, int):
                index = key
            else:
                match = _ANSWER_KEY_RE.match(str(key))
                if not match:
                    logger.debug(f"Ignoring answer with unrecognised key {key!r}")
                    continue
                index = int(match.group(1))

            if value is None:
                continue
            indexed[index] = value if isinstance(value, str) else str(value)
        return indexed
