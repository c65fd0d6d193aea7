from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from typing import Optional


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    if db_path == ':memory:':
        return db_path
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        pass
    # Try common writable locations
    candidates = [
        os.getenv('MEMORY_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'memory.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
            return os.path.join(d, base)
        except OSError:
            continue
    # Last resort: current working directory
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the key-value table exists."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def db_get_value(db_path: str, key: str) -> Optional[str]:
    """Looks up a stored value by key; None when the key was never written."""
    resolved = _resolve_db_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if not row:
            return None
        return str(row[0])
    finally:
        conn.close()


def db_set_value(db_path: str, key: str, value: str) -> None:
    """Stores (or replaces) the value for a key."""
    resolved = _resolve_db_path(db_path)
    conn = sqlite3.connect(resolved)
    try:
        _ensure_db(conn)
        conn.execute(
            "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
            (key, value, datetime.now(timezone.utc).isoformat(timespec='seconds')),
        )
        conn.commit()
    finally:
        conn.close()
