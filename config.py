"""
Configuration management for DoseKeeper
"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "DoseKeeper"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENV: str = "development"

    # API
    API_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # LLM Configuration (OpenAI-compatible chat completions)
    LLM_API_KEY: Optional[str] = None
    LLM_BASE_URL: str = "https://api.cerebras.ai/v1"
    LLM_MODEL: str = "llama3.1-8b"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1024
    SUGGESTION_TIMEOUT_SECONDS: float = 30.0

    # Adherence
    ADHERENCE_WINDOW_DAYS: int = 30
    DAILY_SERIES_DAYS: int = 7
    TIMEZONE: Optional[str] = None  # IANA name, system local time when unset

    # Demo data
    SEED_DEMO_DATA: bool = False
    DEMO_ADHERENCE_RATE: float = 0.85
    DEMO_SEED: Optional[int] = None

    # Sessions
    SESSION_MAX_COUNT: int = 1000
    SESSION_IDLE_TTL_SECONDS: float = 3600.0

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:9002"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


class TrackerConfig:
    """Constants shared by the tracker services"""

    # Weekday labels indexed 0=Sunday..6=Saturday
    WEEKDAY_LABELS: list[str] = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

    TIME_OF_DAY_PATTERN: str = r"^([01]\d|2[0-3]):([0-5]\d)$"

    # Smart schedule form
    MIN_ROUTINE_LENGTH: int = 10
    DEFAULT_DAILY_ROUTINE: str = (
        "I wake up around 7 AM, work from 9 AM to 5 PM, have dinner at 7 PM, "
        "and go to bed around 11 PM."
    )

    DEFAULT_SESSION_ID: str = "default"


settings = get_settings()
tracker_config = TrackerConfig()
