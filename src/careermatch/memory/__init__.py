"""Memory module: durable facts and embedded episodic memories."""

from .extractor import FactExtractor
from .models import Fact, FactCategory, Memory
from .resume_sync import extract_resume_facts, sync_resume_facts
from .store import MemoryStore
from .tools import RememberFactTool

__all__ = [
    "Fact",
    "FactCategory",
    "FactExtractor",
    "Memory",
    "MemoryStore",
    "RememberFactTool",
    "extract_resume_facts",
    "sync_resume_facts",
]
