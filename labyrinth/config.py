"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from labyrinth.core.search import MAX_BRANCHING, SearchStrategy

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Keyed Labyrinth"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Redis
    redis_url: str = "redis://localhost:6379/0"
    session_ttl_seconds: int = 24 * 60 * 60

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    # Maze files
    mazes_dir: Path = BASE_DIR / "mazes"
    maze_rows: int = 6
    maze_cols: int = 9
    start_row: int = 0
    start_col: int = 0

    # Search
    search_strategy: SearchStrategy = SearchStrategy.PARALLEL
    search_global_dedup: bool = False
    search_max_workers: int = MAX_BRANCHING

    @field_validator("search_strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v):
        """Accept strategy names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("search_max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        """A cell has at most four neighbours, so more workers are never used."""
        if not 1 <= v <= MAX_BRANCHING:
            raise ValueError(f"SEARCH_MAX_WORKERS must be between 1 and {MAX_BRANCHING}")
        return v

    @field_validator("maze_rows", "maze_cols")
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Maze dimensions must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @property
    def start(self) -> tuple[int, int]:
        return (self.start_row, self.start_col)

    @property
    def maze_options(self) -> dict:
        """Keyword arguments for building mazes with the configured search."""
        return {
            "strategy": self.search_strategy,
            "global_dedup": self.search_global_dedup,
            "max_workers": self.search_max_workers,
        }

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
