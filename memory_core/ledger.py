from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import LEDGER_SIZE, NAME_MAX_LENGTH


class LedgerFormatError(ValueError):
    """Raised when persisted high scores cannot be decoded."""


@dataclass(frozen=True)
class HighScoreEntry:
    """One finished game: who, how long it took and how many pair-checks it needed."""
    name: str
    elapsed_seconds: int
    moves: int

    def sort_key(self) -> Tuple[int, int]:
        return (self.elapsed_seconds, self.moves)


Ledger = Tuple[HighScoreEntry, ...]


def record(ledger: Iterable[HighScoreEntry], entry: HighScoreEntry, size: int = LEDGER_SIZE) -> Ledger:
    """Adds an entry and keeps the best `size` results, fastest first, then fewest moves."""
    ranked = sorted(list(ledger) + [entry], key=HighScoreEntry.sort_key)
    return tuple(ranked[:size])


def rank_of(ledger: Ledger, entry: HighScoreEntry) -> Optional[int]:
    """1-based place of an entry in the ledger, or None if it did not make the cut."""
    for pos, item in enumerate(ledger, start=1):
        if item is entry:
            return pos
    return None


def entry_to_json(entry: HighScoreEntry) -> Dict[str, Any]:
    return {"name": entry.name, "elapsedSeconds": int(entry.elapsed_seconds), "moves": int(entry.moves)}


def entry_from_json(obj: Any) -> HighScoreEntry:
    if not isinstance(obj, dict):
        raise LedgerFormatError(f"bad entry: {obj!r}")
    name = obj.get("name")
    # Older browser saves used "time" for the elapsed seconds.
    elapsed = obj.get("elapsedSeconds", obj.get("time"))
    moves = obj.get("moves")
    if not isinstance(name, str) or not name.strip():
        raise LedgerFormatError(f"bad name in entry: {obj!r}")
    for value in (elapsed, moves):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise LedgerFormatError(f"bad counters in entry: {obj!r}")
    return HighScoreEntry(name=name.strip()[:NAME_MAX_LENGTH], elapsed_seconds=elapsed, moves=moves)


def ledger_to_json(ledger: Ledger) -> str:
    return json.dumps([entry_to_json(e) for e in ledger])


def ledger_from_json(text: str, size: int = LEDGER_SIZE) -> Ledger:
    """Decodes a stored ledger. Re-ranks on the way in so hand-edited data still holds the ordering."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise LedgerFormatError(f"not JSON: {e}") from e
    except RecursionError as e:
        raise LedgerFormatError("nested too deeply") from e
    if not isinstance(data, list):
        raise LedgerFormatError("expected a list of entries")
    entries: List[HighScoreEntry] = [entry_from_json(item) for item in data]
    return tuple(sorted(entries, key=HighScoreEntry.sort_key)[:size])
