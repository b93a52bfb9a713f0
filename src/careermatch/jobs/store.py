"""SQLite storage for saved job postings."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from ..errors import StoreError

JOB_COLUMNS = (
    "title",
    "company",
    "location",
    "job_type",
    "salary_min",
    "salary_max",
    "salary_currency",
    "description",
    "requirements",
    "benefits",
    "source_url",
    "posted_date",
    "deadline",
)


class JobStore:
    """User-scoped job records, the target of the save and import tools."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def init_db(self) -> None:
        """Create the jobs table if it doesn't exist."""
        conn = self._get_connection()
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS jobs (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id          TEXT NOT NULL,
                title            TEXT NOT NULL,
                company          TEXT NOT NULL,
                location         TEXT,
                job_type         TEXT,
                salary_min       REAL,
                salary_max       REAL,
                salary_currency  TEXT,
                description      TEXT,
                requirements     TEXT,
                benefits         TEXT,
                source_url       TEXT,
                posted_date      TEXT,
                deadline         TEXT,
                status           TEXT NOT NULL DEFAULT 'saved',
                created_at       TEXT NOT NULL DEFAULT (datetime('now'))
            );
            CREATE INDEX IF NOT EXISTS idx_jobs_user ON jobs(user_id);
        """)
        conn.commit()

    def save(self, user_id: str, job: dict[str, Any]) -> dict[str, Any]:
        """Insert a job with status 'saved' and return the stored record.

        Unknown keys in `job` are ignored. Title and company are required.
        """
        if not job.get("title") or not job.get("company"):
            raise ValueError("Job title and company are required")

        values = [job.get(column) for column in JOB_COLUMNS]
        placeholders = ", ".join("?" for _ in JOB_COLUMNS)
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                f"INSERT INTO jobs (user_id, {', '.join(JOB_COLUMNS)}, status) "
                f"VALUES (?, {placeholders}, 'saved') RETURNING *",
                [user_id, *values],
            )
            row = cursor.fetchone()
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to save job: {e}") from e
        return dict(row)

    def get(self, job_id: int) -> dict[str, Any] | None:
        """Get a job by id."""
        cursor = self._get_connection().execute("SELECT * FROM jobs WHERE id = ?", (job_id,))
        row = cursor.fetchone()
        return dict(row) if row else None

    def list_for_user(self, user_id: str) -> list[dict[str, Any]]:
        """List a user's jobs, oldest first."""
        cursor = self._get_connection().execute(
            "SELECT * FROM jobs WHERE user_id = ? ORDER BY id", (user_id,)
        )
        return [dict(row) for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
