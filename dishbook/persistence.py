"""SQLite-backed key-value slots for whole-blob persistence."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from dishbook.config import resolve_db_path


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _connect(db_path: str | Path | None = None) -> sqlite3.Connection:
    db_file = Path(resolve_db_path() if db_path is None else db_path)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_file)


def bootstrap_schema(db_path: str | Path | None = None) -> None:
    """Create the slots table if it does not already exist."""
    with _connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS slots (
                key TEXT PRIMARY KEY,
                value BLOB NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
    conn.close()


def read_slot(key: str, db_path: str | Path | None = None) -> bytes | None:
    """Return the value stored under ``key``, or None when the slot is empty."""
    bootstrap_schema(db_path)
    with _connect(db_path) as conn:
        row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
    conn.close()
    if row is None:
        return None
    return bytes(row[0])


def write_slot(key: str, value: bytes, db_path: str | Path | None = None) -> None:
    """Overwrite the slot ``key`` with ``value``."""
    bootstrap_schema(db_path)
    with _connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO slots (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """,
            (key, sqlite3.Binary(value), _utc_now_iso()),
        )
    conn.close()
