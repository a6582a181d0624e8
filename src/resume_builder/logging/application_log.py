"""SQLite-backed log of generated applications."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from resume_builder.logging.models import ApplicationLogEntry

DEFAULT_DB_PATH = Path.home() / ".resume-builder" / "applications.db"

COLUMNS = (
    "id, timestamp, company, role, job_url, job_description, resume_path, "
    "profile_name, repaired, input_tokens, output_tokens, success, error_message"
)


class ApplicationLog:
    """SQLite-backed store for application entries with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS applications (
                    id TEXT PRIMARY KEY,
                    timestamp TEXT NOT NULL,
                    company TEXT NOT NULL DEFAULT '',
                    role TEXT NOT NULL DEFAULT '',
                    job_url TEXT NOT NULL DEFAULT '',
                    job_description TEXT NOT NULL DEFAULT '',
                    resume_path TEXT NOT NULL DEFAULT '',
                    profile_name TEXT NOT NULL DEFAULT '',
                    repaired INTEGER NOT NULL DEFAULT 0,
                    input_tokens INTEGER NOT NULL DEFAULT 0,
                    output_tokens INTEGER NOT NULL DEFAULT 0,
                    success INTEGER NOT NULL DEFAULT 1,
                    error_message TEXT
                )
            """)

    def save(self, entry: ApplicationLogEntry) -> None:
        """Persist an application entry."""
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO applications ({COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    entry.id,
                    entry.timestamp.isoformat(),
                    entry.company,
                    entry.role,
                    entry.job_url,
                    entry.job_description,
                    entry.resume_path,
                    entry.profile_name,
                    1 if entry.repaired else 0,
                    entry.input_tokens,
                    entry.output_tokens,
                    1 if entry.success else 0,
                    entry.error_message,
                ),
            )

    def get_recent(self, limit: int = 50) -> list[ApplicationLogEntry]:
        """Return the most recent entries, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {COLUMNS} FROM applications ORDER BY timestamp DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def search(self, query: str, limit: int = 50) -> list[ApplicationLogEntry]:
        """Case-insensitive match on company, role or job URL."""
        pattern = f"%{query.strip()}%"
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {COLUMNS} FROM applications "
                "WHERE company LIKE ? OR role LIKE ? OR job_url LIKE ? "
                "ORDER BY timestamp DESC LIMIT ?",
                (pattern, pattern, pattern, limit),
            ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM applications").fetchone()[0]

    @staticmethod
    def _row_to_entry(row: tuple) -> ApplicationLogEntry:
        return ApplicationLogEntry(
            id=row[0],
            timestamp=datetime.fromisoformat(row[1]),
            company=row[2],
            role=row[3],
            job_url=row[4],
            job_description=row[5],
            resume_path=row[6],
            profile_name=row[7],
            repaired=bool(row[8]),
            input_tokens=row[9],
            output_tokens=row[10],
            success=bool(row[11]),
            error_message=row[12],
        )
