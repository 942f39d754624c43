"""
Application configuration.
Values loaded from environment variables or a local .env file.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Storage
    DATABASE_URL: str = "sqlite+aiosqlite:///./fittrack.db"
    DB_ECHO: bool = False

    # Calendar arithmetic (day/week/month windows, streaks) runs in this zone
    TIMEZONE: str = "UTC"

    # Daily goal used until the user saves one
    DEFAULT_TARGET_MINUTES: int = 30
    DEFAULT_TARGET_CALORIES: int = 500

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
