"""SQLite storage for facts and embedded memories."""

from __future__ import annotations

import json
import math
import sqlite3
from pathlib import Path
from typing import Any

from ..errors import EmbeddingDimensionError, StoreError
from ..providers.base import EmbeddingProvider
from .models import Fact, FactCategory, Memory


def cosine_similarity(a: str, b: str) -> float | None:
    """SQL function: cosine similarity of two JSON-encoded vectors."""
    va = json.loads(a)
    vb = json.loads(b)
    if len(va) != len(vb):
        return None
    dot = sum(x * y for x, y in zip(va, vb))
    norm = math.sqrt(sum(x * x for x in va)) * math.sqrt(sum(y * y for y in vb))
    if norm == 0:
        return 0.0
    return dot / norm


class MemoryStore:
    """Persistent storage for facts and vector memories using SQLite.

    Facts are plain rows. Memories carry an embedding obtained from the
    configured EmbeddingProvider; nearest-neighbour search runs inside a
    single SQL query through a registered `cosine_similarity` function.
    All operations fail fast: no retries happen here.
    """

    def __init__(self, db_path: Path, embedder: EmbeddingProvider) -> None:
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
            embedder: Provider used for memory writes and searches.
        """
        self.db_path = db_path
        self.embedder = embedder
        self._conn: sqlite3.Connection | None = None

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
            self._conn.create_function(
                "cosine_similarity", 2, cosine_similarity, deterministic=True
            )
        return self._conn

    def init_db(self) -> None:
        """Create the facts and memories tables if they don't exist."""
        conn = self._get_connection()
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS facts (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id      TEXT NOT NULL,
                category     TEXT NOT NULL,
                content      TEXT NOT NULL,
                confidence   REAL NOT NULL DEFAULT 1.0,
                is_verified  INTEGER NOT NULL DEFAULT 0,
                source       TEXT,
                created_at   TEXT NOT NULL DEFAULT (datetime('now'))
            );
            CREATE INDEX IF NOT EXISTS idx_facts_user_category
                ON facts(user_id, category);

            CREATE TABLE IF NOT EXISTS memories (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id      TEXT NOT NULL,
                content      TEXT NOT NULL,
                embedding    TEXT NOT NULL,
                importance   INTEGER NOT NULL DEFAULT 1,
                metadata     TEXT NOT NULL DEFAULT '{}',
                created_at   TEXT NOT NULL DEFAULT (datetime('now'))
            );
            CREATE INDEX IF NOT EXISTS idx_memories_user ON memories(user_id);
        """)
        conn.commit()

    def add_fact(self, user_id: str, fact: Fact) -> Fact:
        """Insert a fact for a user.

        Confidence is expected to be within [0, 1]; the caller validates it.

        Returns:
            The stored fact with id and created_at assigned.
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """
                INSERT INTO facts (user_id, category, content, confidence, is_verified, source)
                VALUES (?, ?, ?, ?, ?, ?)
                RETURNING id, created_at
                """,
                (
                    user_id,
                    FactCategory(fact.category).value,
                    fact.content,
                    fact.confidence,
                    int(fact.is_verified),
                    fact.source,
                ),
            )
            row = cursor.fetchone()
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to insert fact: {e}") from e

        return Fact(
            user_id=user_id,
            category=FactCategory(fact.category),
            content=fact.content,
            confidence=fact.confidence,
            is_verified=fact.is_verified,
            source=fact.source,
            id=row["id"],
            created_at=row["created_at"],
        )

    def get_facts(
        self, user_id: str, category: FactCategory | str | None = None
    ) -> list[Fact]:
        """Get all facts for a user in insertion order, optionally by category."""
        query = (
            "SELECT id, user_id, category, content, confidence, is_verified, "
            "source, created_at FROM facts WHERE user_id = ?"
        )
        params: list[Any] = [user_id]
        if category is not None:
            query += " AND category = ?"
            params.append(FactCategory(category).value)
        query += " ORDER BY id"

        try:
            cursor = self._get_connection().execute(query, params)
            return [self._row_to_fact(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(f"Failed to load facts: {e}") from e

    async def add_memory(
        self,
        user_id: str,
        content: str,
        importance: int = 1,
        metadata: dict[str, Any] | None = None,
    ) -> Memory:
        """Embed content and persist it as a memory.

        Embedding happens before any write, so a provider failure leaves
        nothing behind.
        """
        embedding = await self.embedder.embed(content)
        self._check_dimensions(embedding)
        metadata = metadata or {}

        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """
                INSERT INTO memories (user_id, content, embedding, importance, metadata)
                VALUES (?, ?, ?, ?, ?)
                RETURNING id, created_at
                """,
                (
                    user_id,
                    content,
                    json.dumps(embedding),
                    importance,
                    json.dumps(metadata),
                ),
            )
            row = cursor.fetchone()
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to insert memory: {e}") from e

        return Memory(
            user_id=user_id,
            content=content,
            embedding=embedding,
            importance=importance,
            metadata=metadata,
            id=row["id"],
            created_at=row["created_at"],
        )

    async def search_memories(
        self,
        user_id: str,
        query: str,
        limit: int = 5,
        threshold: float = 0.7,
    ) -> list[Memory]:
        """Find the user's memories most similar to the query.

        Returns at most `limit` memories with similarity >= `threshold`,
        ordered by similarity descending; ties go to the newest memory.
        Never returns another user's memories.
        """
        if limit <= 0 or not query.strip():
            return []

        embedding = await self.embedder.embed(query)
        self._check_dimensions(embedding)

        try:
            cursor = self._get_connection().execute(
                """
                SELECT * FROM (
                    SELECT id, user_id, content, embedding, importance, metadata,
                           created_at,
                           cosine_similarity(embedding, ?) AS similarity
                    FROM memories
                    WHERE user_id = ?
                )
                WHERE similarity >= ?
                ORDER BY similarity DESC, id DESC
                LIMIT ?
                """,
                (json.dumps(embedding), user_id, threshold, limit),
            )
            return [self._row_to_memory(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(f"Memory search failed: {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _check_dimensions(self, embedding: list[float]) -> None:
        if len(embedding) != self.embedder.dimensions:
            raise EmbeddingDimensionError(self.embedder.dimensions, len(embedding))

    def _row_to_fact(self, row: sqlite3.Row) -> Fact:
        return Fact(
            user_id=row["user_id"],
            category=FactCategory(row["category"]),
            content=row["content"],
            confidence=row["confidence"],
            is_verified=bool(row["is_verified"]),
            source=row["source"],
            id=row["id"],
            created_at=row["created_at"],
        )

    def _row_to_memory(self, row: sqlite3.Row) -> Memory:
        return Memory(
            user_id=row["user_id"],
            content=row["content"],
            embedding=json.loads(row["embedding"]),
            importance=row["importance"],
            metadata=json.loads(row["metadata"]),
            id=row["id"],
            created_at=row["created_at"],
            similarity=row["similarity"],
        )
