"""Configuration settings for QuizForge."""

import os
from typing import Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from functools import lru_cache
import logging

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
)


# ----------------------------------------------------------------------
# AI CONFIGURATION
# ----------------------------------------------------------------------

class AIConfig(BaseSettings):
    """Generative AI provider configuration."""
    model_config = {"env_prefix": "AI_"}

    provider: str = "gemini"

    gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY")
    gemini_api_url: str = os.getenv("GEMINI_API_URL", DEFAULT_GEMINI_API_URL)

    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    max_tokens: int = int(os.getenv("AI_MAX_TOKENS", "4000"))
    temperature: float = float(os.getenv("AI_TEMPERATURE", "0.7"))
    timeout_seconds: float = 60.0


# ----------------------------------------------------------------------
# QUIZ CONFIGURATION
# ----------------------------------------------------------------------

class QuizConfig(BaseSettings):
    """Quiz generation limits."""
    model_config = {"env_prefix": "QUIZ_"}

    max_context_chars: int = 25000
    default_question_count: int = 5
    recent_results_limit: int = 5


# ----------------------------------------------------------------------
# STORAGE CONFIGURATION
# ----------------------------------------------------------------------

class StorageConfig(BaseModel):
    """
    Result storage configuration for both local dev and cloud mode.
    """

    # environment mode: "local" writes JSON files, anything else uses S3
    env: str = os.getenv("QUIZ_ENV", "local")

    local_root: str = os.getenv("QUIZ_LOCAL_ROOT", "./local_store")

    region: str = os.getenv("AWS_REGION", "us-east-1")
    results_bucket: str = os.getenv("QUIZ_RESULTS_BUCKET", "quiz-results")


# ----------------------------------------------------------------------
# LOGGING CONFIGURATION
# ----------------------------------------------------------------------

class LoggingConfig(BaseSettings):
    """Logging configuration."""
    model_config = {"env_prefix": "LOG_"}

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ----------------------------------------------------------------------
# APP SETTINGS
# ----------------------------------------------------------------------

class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    ai: AIConfig = Field(default_factory=AIConfig)
    quiz: QuizConfig = Field(default_factory=QuizConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# ----------------------------------------------------------------------
# Lazy accessors (cached singletons)
# ----------------------------------------------------------------------

@lru_cache()
def get_config() -> Settings:
    """Return global app configuration."""
    return Settings()


@lru_cache()
def get_ai_config() -> AIConfig:
    """Return AI provider configuration."""
    return get_config().ai


@lru_cache()
def get_quiz_config() -> QuizConfig:
    """Return quiz generation configuration."""
    return get_config().quiz


@lru_cache()
def get_storage_config() -> StorageConfig:
    """Return result storage configuration."""
    return get_config().storage


@lru_cache()
def get_logging_config() -> LoggingConfig:
    """Return logging configuration."""
    return get_config().logging
