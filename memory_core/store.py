from __future__ import annotations

import logging
import sqlite3
from typing import Dict, Optional

from .config import LEDGER_KEY
from .db import db_get_value, db_set_value
from .ledger import Ledger, LedgerFormatError, ledger_from_json, ledger_to_json

logger = logging.getLogger(__name__)


class SqliteStore:
    """Key-value store backed by a single SQLite table."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def get(self, key: str) -> Optional[str]:
        return db_get_value(self.db_path, key)

    def set(self, key: str, value: str) -> None:
        db_set_value(self.db_path, key, value)


class MemoryStore:
    """Process-local key-value store, for tests and for hosts without a disk."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class LedgerStore:
    """
    Reads and writes the high-score ledger under one key of a key-value store.

    Failures never propagate: a missing, corrupt or unreachable entry loads as
    None and a failed write returns False, so the caller keeps its in-memory
    ledger either way.
    """

    def __init__(self, kv, key: str = LEDGER_KEY) -> None:
        self.kv = kv
        self.key = key

    def load(self) -> Optional[Ledger]:
        try:
            raw = self.kv.get(self.key)
        except (sqlite3.Error, OSError):
            logger.exception("Failed to load high scores from %r", self.key)
            return None
        if raw is None:
            return None
        try:
            return ledger_from_json(raw)
        except LedgerFormatError as e:
            logger.warning("Ignoring corrupt high scores under %r: %s", self.key, e)
            return None

    def save(self, ledger: Ledger) -> bool:
        try:
            self.kv.set(self.key, ledger_to_json(ledger))
        except (sqlite3.Error, OSError):
            logger.exception("Failed to save high scores to %r", self.key)
            return False
        return True
