import json

from config.models import QuestionType
from processors.prompt_composer import PromptComposer, build_gemini_payload


def test_fill_in_blank_template():
    prompt = PromptComposer().compose("Chemistry", "Hard", QuestionType.FILL_IN_BLANK, [], 7)

    assert "exactly 7 'Fill in the Blank' questions" in prompt
    assert "on the topic of 'Chemistry'" in prompt
    assert "Difficulty: 'Hard'" in prompt
    assert '{"questions":[{"question":"A question with a ____ in it.","answer":"The missing word"}]}' in prompt
    assert "MUST contain '____'" in prompt
    assert "correctOptionIndex" not in prompt
    assert "CRITICAL" not in prompt


def test_multiple_choice_template():
    prompt = PromptComposer().compose("Chemistry", "Easy", QuestionType.MULTIPLE_CHOICE, None, 3)

    assert "exactly 3 'Multiple Choice' questions" in prompt
    assert '"correctOptionIndex":0' in prompt
    assert "0-based index" in prompt
    assert "no markdown" in prompt


def test_document_context_is_framed_as_document():
    prompt = PromptComposer().compose("Cells divide by mitosis.", "Easy", QuestionType.MULTIPLE_CHOICE,
                                      count=2, from_document=True)
    assert "based on the provided document: Cells divide by mitosis." in prompt
    assert "on the topic of" not in prompt


def test_exclusion_clause_lists_every_question():
    excluded = ["Who founded Rome?", "When was Rome founded?"]
    prompt = PromptComposer().compose("Rome", "Medium", QuestionType.MULTIPLE_CHOICE, excluded, 5)

    marker = "CRITICAL: Do NOT repeat any of the following questions: "
    listed = json.loads(prompt[prompt.index(marker) + len(marker):])
    assert listed == excluded


def test_payload_survives_quotes_and_newlines():
    prompt = PromptComposer().compose('The "Roman"\nEmpire \\ Republic', "Medium",
                                      QuestionType.FILL_IN_BLANK, ['Say "hi"?'], 2)

    body = json.dumps(build_gemini_payload(prompt))

    assert "\n" not in body
    assert json.loads(body)["contents"][0]["parts"][0]["text"] == prompt
