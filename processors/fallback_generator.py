"""Hardcoded quizzes served whenever AI generation fails."""

from typing import List, Optional

from config.models import (
    FillInBlankQuestion, MultipleChoiceQuestion, Question, QuestionType, Quiz
)

FALLBACK_NOTE = "AI service unavailable. Showing a fallback quiz."


def _fill_in_blank_questions() -> List[Question]:
    return [
        FillInBlankQuestion(
            text="The capital of France is ____.",
            answer="Paris",
            explanation="Paris is the capital and most populous city of France.",
        ),
        FillInBlankQuestion(
            text="Water is made of hydrogen and ____.",
            answer="oxygen",
            explanation="A water molecule has two hydrogen atoms and one oxygen atom.",
        ),
    ]


def _multiple_choice_questions() -> List[Question]:
    return [
        MultipleChoiceQuestion(
            text="What does AI stand for?",
            options=["Artificial Intelligence", "Automated Input", "None"],
            correct_option_index=0,
            explanation="'AI' is the acronym for 'Artificial Intelligence'.",
        ),
        MultipleChoiceQuestion(
            text="Which planet is known as the Red Planet?",
            options=["Venus", "Mars", "Jupiter", "Saturn"],
            correct_option_index=1,
            explanation="Iron oxide on its surface gives Mars its reddish colour.",
        ),
    ]


def create_fallback_quiz(
    topic: Optional[str], difficulty: str, question_type: QuestionType
) -> Quiz:
    """Return an always-valid quiz of the requested type."""
    if question_type == QuestionType.FILL_IN_BLANK:
        questions = _fill_in_blank_questions()
    else:
        question_type = QuestionType.MULTIPLE_CHOICE
        questions = _multiple_choice_questions()

    return Quiz(
        topic=topic,
        difficulty=difficulty,
        question_type=question_type,
        questions=questions,
        is_fallback=True,
        note=FALLBACK_NOTE,
    )
