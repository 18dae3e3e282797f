"""
Reading Insights Settings

Connection details for the reading club API, the signed-in user, and the
knobs that tune insight computation and AI summary retries. Values come from
the process environment or a local .env file.

    from reading_insights.config import settings

    settings.API_ROOT  # raises ValueError when API_BASE_URL is empty
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Reading Insights"
    DEBUG: bool = False

    # Reading club REST API
    API_BASE_URL: str = ""
    API_TIMEOUT_SECONDS: float = 30.0
    API_MAX_CONCURRENT_REQUESTS: int = 8

    # Session identity (empty means no signed-in user)
    SESSION_USER_ID: str = ""

    # Insights computation
    INSIGHTS_TOP_BOOKS_LIMIT: int = 3
    INSIGHTS_FREQUENCY_WEEKS: int = 4

    # AI summary retries
    INSIGHTS_SUMMARY_MAX_ATTEMPTS: int = 3
    INSIGHTS_SUMMARY_RETRY_MAX_WAIT: int = 10

    @property
    def API_ROOT(self) -> str:
        """Base URL without trailing slashes."""
        if not self.API_BASE_URL:
            raise ValueError("API_BASE_URL is not set")
        return self.API_BASE_URL.rstrip("/")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
