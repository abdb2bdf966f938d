"""Main quiz service for QuizForge."""

import json
import logging
import os
from typing import Any, List, Optional

import click

from config.models import ProfileStats, QuestionType, Quiz, QuizResult, UploadedFile
from config.settings import get_logging_config, get_quiz_config
from processors.ai_client import AIGateway, get_ai_gateway
from processors.errors import InvalidRequest, QuizError
from processors.fallback_generator import create_fallback_quiz
from processors.grading import GradingEngine
from processors.quiz_pipeline import QuizPipeline
from services.storage import ResultStore, get_result_store
from .stats import ProfileAggregator

logger = logging.getLogger(__name__)


class QuizService:
    """Generation boundary, grading/persistence and history lookups."""

    def __init__(
        self,
        gateway: Optional[AIGateway] = None,
        result_store: Optional[ResultStore] = None,
        grading_engine: Optional[GradingEngine] = None,
        pipeline: Optional[QuizPipeline] = None,
    ):
        self.quiz_config = get_quiz_config()
        self.result_store = result_store or get_result_store()
        self.grading_engine = grading_engine or GradingEngine()
        self.profiles = ProfileAggregator(self.quiz_config.recent_results_limit)
        self.pipeline = pipeline or QuizPipeline(
            gateway=gateway or get_ai_gateway(),
            history_store=self.result_store,
        )

        logger.info("Quiz service initialized")

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate_quiz(
        self,
        topic: Optional[str],
        count: Optional[int],
        difficulty: str,
        question_type: Any,
        file: Optional[UploadedFile] = None,
        user: Optional[str] = None,
    ) -> Quiz:
        """
        Generate a quiz, substituting the fallback quiz on any stage failure.

        Only InvalidRequest (no topic and no file) reaches the caller.
        """
        qtype = QuestionType.parse(question_type)
        has_topic = topic is not None and bool(topic.strip())
        has_file = file is not None and not file.is_empty
        if not has_topic and not has_file:
            raise InvalidRequest("a topic or a file must be provided")

        if not count or count < 1:
            count = self.quiz_config.default_question_count

        try:
            return self.pipeline.run(
                topic=topic,
                count=count,
                difficulty=difficulty,
                question_type=qtype,
                file=file,
                user=user,
            )
        except InvalidRequest:
            raise
        except QuizError as e:
            logger.error(f"Quiz generation failed ({type(e).__name__}): {e}; serving fallback quiz")
        except Exception as e:
            logger.exception(f"Unexpected error during quiz generation: {e}; serving fallback quiz")

        return create_fallback_quiz(topic, difficulty, qtype)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def submit_quiz(
        self,
        quiz: Quiz,
        submitted_answers: Any,
        user: Optional[str] = None,
        save: bool = True,
    ) -> QuizResult:
        """Grade a submission and persist the result."""
        result = self.grading_engine.grade(quiz, submitted_answers, user)
        if save:
            location = self.result_store.save(result)
            logger.info(f"Stored result {result.result_id} at {location}")
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_history(self, user: str) -> List[QuizResult]:
        return self.result_store.find_by_user_order_by_time_desc(user)

    def get_profile(self, user: str) -> ProfileStats:
        return self.profiles.aggregate(user, self.get_history(user))


# ----------------------------------------------------------------------
# CLI Commands
# ----------------------------------------------------------------------

def _echo_quiz(quiz: Quiz):
    if quiz.note:
        click.echo(f"⚠️ {quiz.note}")
    click.echo(f"Topic: {quiz.topic or '(from document)'} | {quiz.question_type.value} | {quiz.difficulty}")
    for i, q in enumerate(quiz.questions):
        click.echo(f"q{i}. {q.text}")
        if q.type == QuestionType.MULTIPLE_CHOICE:
            for opt in q.options:
                click.echo(f"    - {opt}")


@click.group()
def cli():
    """QuizForge CLI."""
    log_cfg = get_logging_config()
    logging.basicConfig(level=log_cfg.level.upper(), format=log_cfg.format)


@cli.command()
@click.option("--topic", default=None, help="Topic to generate questions about.")
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Document (.pdf, .docx, .txt) to generate questions from.")
@click.option("--count", type=int, default=None, help="Number of questions.")
@click.option("--difficulty", default="Medium", show_default=True)
@click.option("--type", "question_type", default=QuestionType.MULTIPLE_CHOICE.value, show_default=True)
@click.option("--user", default=None, help="Requesting user (enables repeat avoidance).")
@click.option("--output", type=click.Path(dir_okay=False, writable=True), default=None,
              help="Write the quiz JSON to this path.")
def generate(topic, file_path, count, difficulty, question_type, user, output):
    """Generate a quiz from a topic or a document."""
    upload = None
    if file_path:
        with open(file_path, "rb") as f:
            upload = UploadedFile(filename=os.path.basename(file_path), content=f.read())

    service = QuizService()
    try:
        quiz = service.generate_quiz(topic, count, difficulty, question_type, file=upload, user=user)
    except InvalidRequest as e:
        click.echo(f"❌ {e}", err=True)
        exit(1)

    _echo_quiz(quiz)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(quiz.model_dump_json(indent=2))
        click.echo(f"Quiz written to {output}")


@cli.command()
@click.argument("quiz_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("answers_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--user", default=None)
@click.option("--save/--no-save", default=True, show_default=True)
def grade(quiz_path, answers_path, user, save):
    """Grade ANSWERS_PATH (JSON object of index → answer, or a list) against QUIZ_PATH."""
    with open(quiz_path, "r", encoding="utf-8") as f:
        quiz = Quiz.model_validate_json(f.read())
    with open(answers_path, "r", encoding="utf-8") as f:
        answers = json.load(f)

    service = QuizService()
    result = service.submit_quiz(quiz, answers, user=user, save=save)

    click.echo(f"Score: {result.score}/{result.total}")
    for i, qr in enumerate(result.question_results):
        mark = "✅" if qr.is_correct else "❌"
        click.echo(f"{mark} q{i}. {qr.question_text}")
        click.echo(f"    your answer: {qr.user_answer} | correct: {qr.correct_answer}")
        if qr.explanation:
            click.echo(f"    {qr.explanation}")


@cli.command()
@click.argument("user")
def history(user):
    """List a user's graded quizzes, most recent first."""
    service = QuizService()
    results = service.get_history(user)
    if not results:
        click.echo("No quiz history found")
        return
    for r in results:
        click.echo(f"{r.timestamp:%Y-%m-%d %H:%M} | {r.topic or '(document)'} | {r.score}/{r.total}")


@cli.command()
@click.argument("user")
def profile(user):
    """Show lifetime statistics for a user."""
    service = QuizService()
    stats = service.get_profile(user)
    click.echo(f"Total Quizzes: {stats.total_quizzes}")
    click.echo(f"Total Questions: {stats.total_questions}")
    click.echo(f"Average Score: {stats.average_score:.2f}%")
    for r in stats.recent_results:
        click.echo(f" - {r.topic or '(document)'}: {r.score}/{r.total}")


if __name__ == "__main__":
    cli()
