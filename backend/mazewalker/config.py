"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (backend/)
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        env_prefix="MAZE_WALKER_",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Walker"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Where solved mazes are stored as JSON
    solutions_dir: Path = Path("solutions")

    # Uploads
    max_upload_bytes: int = 2 * 1024 * 1024

    # Replay animation
    animation_frame_ms: int = 20
    # Longer replays are subsampled down to this many frames
    animation_max_frames: int = 300

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080,http://127.0.0.1:5500"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("max_upload_bytes", "animation_frame_ms", "animation_max_frames")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Sizes and durations must be positive."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
