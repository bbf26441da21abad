"""
Application configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./ajanvaraus.db"

    # Application
    SITE_URL: str = "http://localhost:8000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    DEFAULT_LANGUAGE: str = "fi"

    # Booking Settings
    SLOT_STEP_MINUTES: int = 15
    BOOKING_DAYS_AHEAD: int = 60

    # Development
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        # .env lives in the project root
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Application settings (cached)"""
    return Settings()
