"""
Configuration settings for examprep.

Uses Pydantic Settings for environment variable management with .env file support.
Variables are read with the EXAMPREP_ prefix (e.g. EXAMPREP_LOG_LEVEL=DEBUG).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EXAMPREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    state_db_path: Path = Field(
        default=Path.home() / ".examprep" / "state.db",
        description="SQLite file used by the reference state store",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Review Scheduling
    # ========================================
    default_ease_factor: float = Field(
        default=2.5,
        description="Ease factor given to newly created items",
    )
    passing_score: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Lowest recall score (0-5) counted as a successful review",
    )
    due_limit: int = Field(
        default=20,
        description="Maximum items returned by a due-items query",
    )
    recent_tests_limit: int = Field(
        default=10,
        description="Number of tests shown in the progress summary",
    )

    # ========================================
    # Gamification
    # ========================================
    xp_per_level: int = Field(default=100, gt=0, description="XP needed per level")
    xp_login: int = Field(default=0, ge=0, description="XP for a login check-in")
    xp_chat: int = Field(default=5, ge=0, description="XP for a tutor chat exchange")
    xp_test_generated: int = Field(default=10, ge=0, description="XP for generating a test")
    xp_flashcards_created: int = Field(default=5, ge=0, description="XP for creating flashcards")
    xp_review: int = Field(default=2, ge=0, description="XP for reviewing one item")
    xp_challenge_completed: int = Field(
        default=15, ge=0, description="XP for completing a challenge"
    )

    def get_xp_awards(self) -> dict[str, int]:
        """Get XP awards keyed by activity name."""
        return {
            "login": self.xp_login,
            "chat": self.xp_chat,
            "test_generated": self.xp_test_generated,
            "flashcards_created": self.xp_flashcards_created,
            "review": self.xp_review,
            "challenge_completed": self.xp_challenge_completed,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
