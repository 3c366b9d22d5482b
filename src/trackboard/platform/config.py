"""
Trackboard Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_NAME: str = "Trackboard"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "info"

    # =========================================================================
    # METRICS
    # =========================================================================
    VELOCITY_SPRINT_WINDOW: int = 10
    CONTRIBUTION_SPRINT_WINDOW: int = 10
    ENGINEER_ROLE: str = "Software Engineer"
    DEFAULT_TASK_TYPE: str = "Other"
    DEFAULT_PRIORITY: str = "Medium"

    # =========================================================================
    # RISK
    # =========================================================================
    HIGH_RISK_SCORE_THRESHOLD: int = 15
    TOP_RISKS_LIMIT: int = 3

    # =========================================================================
    # BACKLOG
    # =========================================================================
    BACKLOG_ID_PREFIX: str = "BL"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
