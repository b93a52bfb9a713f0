"""Tests for Settings."""

from pathlib import Path

import pytest

from careermatch.config import DEFAULT_EMBEDDING_DIMENSIONS, DEFAULT_MODEL, Settings
from careermatch.errors import ConfigError

ENV_VARS = [
    "GROQ_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "CAREERMATCH_MODEL",
    "CAREERMATCH_TEMPERATURE",
    "CAREERMATCH_MAX_TURNS",
    "CAREERMATCH_EMBEDDING_MODEL",
    "CAREERMATCH_EMBEDDING_DIMENSIONS",
    "CAREERMATCH_MEMORY_LIMIT",
    "CAREERMATCH_MEMORY_THRESHOLD",
    "CAREERMATCH_DB_PATH",
    "CAREERMATCH_SCRAPER_URL",
    "CAREERMATCH_LOG_DIR",
    "CAREERMATCH_REFLECTION_WORKERS",
    "CAREERMATCH_REFLECTION_QUEUE_SIZE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        # recorded so teardown also undoes .env writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env(load_env_file=False)

    assert settings.model == DEFAULT_MODEL
    assert settings.max_turns == 5
    assert settings.temperature == 0.3
    assert settings.memory_limit == 5
    assert settings.memory_threshold == 0.7
    assert settings.embedding_dimensions == DEFAULT_EMBEDDING_DIMENSIONS
    assert settings.scraper_url is None
    assert settings.db_path == Path.home() / ".careermatch" / "careermatch.db"


def test_reads_environment(clean_env, tmp_path: Path):
    clean_env.setenv("GROQ_API_KEY", "gsk_test")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("CAREERMATCH_MAX_TURNS", "8")
    clean_env.setenv("CAREERMATCH_MEMORY_THRESHOLD", "0.5")
    clean_env.setenv("CAREERMATCH_DB_PATH", str(tmp_path / "db.sqlite"))
    clean_env.setenv("CAREERMATCH_SCRAPER_URL", "https://scraper.test")

    settings = Settings.from_env(load_env_file=False)

    assert settings.groq_api_key == "gsk_test"
    assert settings.openai_api_key == "sk-test"
    assert settings.max_turns == 8
    assert settings.memory_threshold == 0.5
    assert settings.db_path == tmp_path / "db.sqlite"
    assert settings.scraper_url == "https://scraper.test"


def test_blank_values_use_defaults(clean_env):
    clean_env.setenv("CAREERMATCH_MAX_TURNS", "")
    clean_env.setenv("CAREERMATCH_SCRAPER_URL", "")

    settings = Settings.from_env(load_env_file=False)

    assert settings.max_turns == 5
    assert settings.scraper_url is None


def test_non_numeric_value_names_variable(clean_env):
    clean_env.setenv("CAREERMATCH_MAX_TURNS", "lots")
    with pytest.raises(ConfigError, match="CAREERMATCH_MAX_TURNS"):
        Settings.from_env(load_env_file=False)


def test_loads_dotenv_file(clean_env, tmp_path: Path):
    (tmp_path / ".env").write_text("CAREERMATCH_MODEL=from-dotenv\n")
    clean_env.chdir(tmp_path)

    settings = Settings.from_env()

    assert settings.model == "from-dotenv"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_turns": 0},
        {"memory_threshold": 1.5},
        {"embedding_dimensions": 0},
        {"reflection_workers": 0},
        {"reflection_queue_size": 0},
    ],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ConfigError):
        Settings(**kwargs)
