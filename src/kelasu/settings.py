"""Application configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from KELASU_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KELASU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Match service
    move_timeout_seconds: int = 600  # Idle time before the side to move is resigned
    stale_game_seconds: int = 3600  # Finished matches older than this are dropped

    # CLI
    confirm_moves: bool = True  # Ask before applying each move

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def move_timeout_enabled(self) -> bool:
        """Check if idle resignation is turned on (a timeout of 0 disables it)."""
        return self.move_timeout_seconds > 0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
