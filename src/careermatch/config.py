"""Configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_EMBEDDING_DIMENSIONS = 1536


def _default_db_path() -> Path:
    return Path.home() / ".careermatch" / "careermatch.db"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    """Process-wide settings."""

    groq_api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float = 0.3
    max_turns: int = 5
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    embedding_dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS
    memory_limit: int = 5
    memory_threshold: float = 0.7
    db_path: Path = field(default_factory=_default_db_path)
    scraper_url: str | None = None
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")
    reflection_workers: int = 2
    reflection_queue_size: int = 100

    def __post_init__(self) -> None:
        if self.max_turns < 1:
            raise ConfigError("max_turns must be at least 1")
        if self.embedding_dimensions < 1:
            raise ConfigError("embedding_dimensions must be positive")
        if not 0.0 <= self.memory_threshold <= 1.0:
            raise ConfigError("memory_threshold must be within [0, 1]")
        if self.reflection_workers < 1:
            raise ConfigError("reflection_workers must be at least 1")
        if self.reflection_queue_size < 1:
            raise ConfigError("reflection_queue_size must be at least 1")

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> Settings:
        """Build settings from the environment, optionally reading .env first."""
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        db_path = os.getenv("CAREERMATCH_DB_PATH")
        log_dir = os.getenv("CAREERMATCH_LOG_DIR")

        return cls(
            groq_api_key=os.getenv("GROQ_API_KEY"),
            model=os.getenv("CAREERMATCH_MODEL", DEFAULT_MODEL),
            temperature=_env_float("CAREERMATCH_TEMPERATURE", 0.3),
            max_turns=_env_int("CAREERMATCH_MAX_TURNS", 5),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            embedding_model=os.getenv(
                "CAREERMATCH_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL
            ),
            embedding_dimensions=_env_int(
                "CAREERMATCH_EMBEDDING_DIMENSIONS", DEFAULT_EMBEDDING_DIMENSIONS
            ),
            memory_limit=_env_int("CAREERMATCH_MEMORY_LIMIT", 5),
            memory_threshold=_env_float("CAREERMATCH_MEMORY_THRESHOLD", 0.7),
            db_path=Path(db_path).expanduser() if db_path else _default_db_path(),
            scraper_url=os.getenv("CAREERMATCH_SCRAPER_URL") or None,
            log_dir=Path(log_dir) if log_dir else Path.cwd() / "logs",
            reflection_workers=_env_int("CAREERMATCH_REFLECTION_WORKERS", 2),
            reflection_queue_size=_env_int("CAREERMATCH_REFLECTION_QUEUE_SIZE", 100),
        )
