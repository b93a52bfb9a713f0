"""Shared fixtures."""

from pathlib import Path

import pytest

from careermatch.conversation_logger import ConversationLogger
from careermatch.jobs import JobStore
from careermatch.memory import MemoryStore
from fakes import FakeEmbedder


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def store(tmp_path: Path, embedder: FakeEmbedder) -> MemoryStore:
    """Create a MemoryStore with a temporary database."""
    store = MemoryStore(tmp_path / "test_memory.db", embedder)
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def job_store(tmp_path: Path) -> JobStore:
    store = JobStore(tmp_path / "test_jobs.db")
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def conv_logger(tmp_path: Path) -> ConversationLogger:
    return ConversationLogger(tmp_path / "logs")
