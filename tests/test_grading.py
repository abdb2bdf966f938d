import pytest

from config.models import (
    NOT_ANSWERED, FillInBlankQuestion, MultipleChoiceQuestion, QuestionType, Quiz
)
from processors.grading import GradingEngine


def _mc_quiz(n=1):
    questions = [
        MultipleChoiceQuestion(
            text=f"Capital of France #{i}?",
            options=["Paris", "Rome", "Berlin"],
            correct_option_index=0,
            explanation="Paris is the capital.",
        )
        for i in range(n)
    ]
    return Quiz(topic="France", difficulty="Easy", question_type=QuestionType.MULTIPLE_CHOICE,
                questions=questions)


def _fib_quiz():
    return Quiz(
        topic="France",
        difficulty="Easy",
        question_type=QuestionType.FILL_IN_BLANK,
        questions=[FillInBlankQuestion(text="The capital of France is ____.", answer="Paris")],
    )


def test_multiple_choice_exact_match_is_correct():
    result = GradingEngine().grade(_mc_quiz(), {0: "Paris"}, user="alice")

    assert result.score == 1 and result.total == 1
    qr = result.question_results[0]
    assert qr.is_correct
    assert qr.user_answer == "Paris"
    assert qr.correct_answer == "Paris"
    assert qr.explanation == "Paris is the capital."
    assert result.user == "alice"
    assert result.topic == "France"


def test_multiple_choice_is_case_and_whitespace_sensitive():
    result = GradingEngine().grade(_mc_quiz(2), {0: "paris", 1: " Paris"})
    assert result.score == 0
    assert [qr.user_answer for qr in result.question_results] == ["paris", " Paris"]


def test_fill_in_blank_ignores_case():
    result = GradingEngine().grade(_fib_quiz(), {"0": "paris"})
    assert result.score == 1
    assert result.question_results[0].is_correct


def test_missing_answers_are_not_answered():
    answers = {"q0": "Paris", "q2": "Paris", "q4": "Paris"}
    result = GradingEngine().grade(_mc_quiz(5), answers)

    assert result.total == 5
    assert result.score == 3
    missing = [result.question_results[1], result.question_results[3]]
    assert all(qr.user_answer == NOT_ANSWERED and not qr.is_correct for qr in missing)


def test_grading_is_total_over_odd_submissions():
    answers = {7: "Paris", -1: "Paris", "bogus": "Paris", "q0": "   ", True: "Paris"}
    result = GradingEngine().grade(_mc_quiz(2), answers)

    assert result.score == 0
    assert result.total == 2
    assert all(qr.user_answer == NOT_ANSWERED for qr in result.question_results)


def test_no_submission_at_all():
    result = GradingEngine().grade(_mc_quiz(3), None)
    assert (result.score, result.total) == (0, 3)


def test_positional_list_submission():
    result = GradingEngine().grade(_mc_quiz(3), ["Paris", None, "Rome"])

    assert (result.score, result.total) == (1, 3)
    assert [qr.user_answer for qr in result.question_results] == ["Paris", NOT_ANSWERED, "Rome"]


@pytest.mark.parametrize("submission", ["Paris", 42, object(), b"Paris"])
def test_unsupported_submission_counts_as_unanswered(submission):
    result = GradingEngine().grade(_mc_quiz(2), submission)

    assert (result.score, result.total) == (0, 2)
    assert all(qr.user_answer == NOT_ANSWERED for qr in result.question_results)
