"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str = "sqlite:///./assessment.db"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True

    # Application
    APP_NAME: str = "Assessment Grading Platform"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Grading
    DEFAULT_PASSING_SCORE: int = 70
    MAX_TEST_QUESTIONS: int = 100
    CATALOG_CACHE_TTL: int = 300  # 5 minutes

    # Statistics
    STATS_RESULTS_LIMIT: int = 100
    STATS_QUESTIONS_LIMIT: int = 1000
    RECENT_RESULTS_LIMIT: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
