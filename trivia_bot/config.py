"""Configuration settings using pydantic-settings."""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    BOT_TOKEN: str = Field(..., description="Telegram Bot API token")

    # Database
    DATABASE_PATH: str = Field(
        default="data/trivia.db",
        description="Path to SQLite database file"
    )

    # Quiz
    QUIZ_PERIOD: int = Field(
        default=1,
        ge=1,
        description="Week number whose questions are served"
    )
    ANSWER_TIME_SECONDS: int = Field(
        default=10,
        ge=0,
        description="Elapsed time reported for every answer"
    )
    STORAGE_NAMESPACE: str = Field(
        default="trivia",
        description="Key prefix for the remembered participant"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    LOG_FILE: str = Field(
        default="data/logs/bot.log",
        description="Path to log file"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()
