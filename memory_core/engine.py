from __future__ import annotations

import logging
import random
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from .cards import Signal, PLAYING, STARTABLE_PHASES, WRONG
from .config import GameConfig, check_config
from .deck import build_deck, check_deck_config
from .ledger import Ledger, HighScoreEntry, record, rank_of, entry_to_json
from .rules import Event, Flip, ResolveMismatch, Reset, Start, Step, SubmitName, Tick, reduce
from .scheduler import ThreadingScheduler
from .state import Session, format_time
from .store import LedgerStore, MemoryStore

logger = logging.getLogger(__name__)

Listener = Callable[[Tuple[Signal, ...], Session], None]


class GameEngine:
    """
    Owns the current session and feeds every command and timer event through
    the pure reducer, one at a time.

    Scheduled work (the per-second tick and the delayed re-hide of a wrong
    pair) captures the session generation when it is scheduled; a callback
    whose generation no longer matches is dropped, so a late timer can never
    touch a newer session.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[LedgerStore] = None,
        scheduler: Any = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or GameConfig()
        # Fail at construction rather than on the first start().
        check_config(self.config)
        check_deck_config(self.config.image_pool, self.config.rows, self.config.cols)
        self.store = store or LedgerStore(MemoryStore())
        self.scheduler = scheduler or ThreadingScheduler()
        self._rng = random.Random(seed)
        self._lock = threading.RLock()
        self._generation = 0
        self._session = Session.idle(self.config.duration, generation=0)
        self._tick_task: Any = None
        self._resolve_task: Any = None
        self._listeners: List[Listener] = []
        self.last_entry: Optional[HighScoreEntry] = None
        self._ledger: Ledger = self.store.load() or tuple()
        logger.info("Loaded %d high score(s)", len(self._ledger))

    # ---------- read side ----------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def phase(self) -> str:
        return self._session.phase

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the current session for renderers."""
        s = self._session
        return {
            "phase": s.phase,
            "cards": [
                {
                    "id": c.id,
                    "imageId": c.image_id,
                    "image": c.image,
                    "isFlipped": c.is_flipped,
                    "isMatched": c.is_matched,
                }
                for c in s.cards
            ],
            "flipped": list(s.flipped),
            "mismatched": list(s.flipped) if s.resolving else [],
            "resolving": s.resolving,
            "moves": s.moves,
            "timeRemaining": s.time_remaining,
            "timeText": format_time(s.time_remaining),
            "elapsed": s.elapsed,
            "rows": self.config.rows,
            "cols": self.config.cols,
        }

    def scores(self) -> List[Dict[str, Any]]:
        return [entry_to_json(e) for e in self._ledger]

    def last_rank(self) -> Optional[int]:
        if self.last_entry is None:
            return None
        return rank_of(self._ledger, self.last_entry)

    # ---------- commands ----------

    def start(self) -> Tuple[Signal, ...]:
        with self._lock:
            if self._session.phase not in STARTABLE_PHASES:
                return ()
            generation = self._next_generation()
            cards = build_deck(self.config.image_pool, self.config.rows, self.config.cols, rng=self._rng)
            signals = self._dispatch(Start(cards=cards, generation=generation))
            self.last_entry = None
            logger.info("Session %d started", generation)
            self._schedule_tick(generation)
            return signals

    def flip_card(self, index: int) -> Tuple[Signal, ...]:
        with self._lock:
            return self._dispatch(Flip(index))

    def submit_name(self, name: str) -> Tuple[Signal, ...]:
        with self._lock:
            return self._dispatch(SubmitName(name))

    def reset(self) -> Tuple[Signal, ...]:
        with self._lock:
            generation = self._next_generation()
            self._cancel_tasks()
            logger.info("Session reset (generation %d)", generation)
            return self._dispatch(Reset(generation=generation))

    # ---------- internals ----------

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _dispatch(self, event: Event) -> Tuple[Signal, ...]:
        before = self._session
        step = reduce(before, event)
        if not step.changed(before):
            logger.debug("Ignored %r in phase %s", event, before.phase)
            return ()
        self._session = step.session
        if step.entry is not None:
            self._record(step.entry)
        if WRONG in step.signals:
            self._schedule_resolve(step.session.generation, step.session.flipped)
        if before.phase == PLAYING and step.session.phase != PLAYING:
            self._cancel_tasks()
        self._notify(step)
        return step.signals

    def _record(self, entry: HighScoreEntry) -> None:
        self._ledger = record(self._ledger, entry)
        self.last_entry = entry
        if not self.store.save(self._ledger):
            logger.warning("High scores kept in memory only")

    def _notify(self, step: Step) -> None:
        for listener in list(self._listeners):
            try:
                listener(step.signals, step.session)
            except Exception:
                logger.exception("Listener %r failed", listener)

    def _schedule_tick(self, generation: int) -> None:
        self._tick_task = self.scheduler.schedule(self.config.tick_interval, self._on_tick, generation)

    def _schedule_resolve(self, generation: int, pair: Tuple[int, ...]) -> None:
        self._resolve_task = self.scheduler.schedule(
            self.config.mismatch_delay, self._on_resolve, generation, pair
        )

    def _cancel_tasks(self) -> None:
        for task in (self._tick_task, self._resolve_task):
            if task is not None:
                task.cancel()
        self._tick_task = None
        self._resolve_task = None

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._session.generation or self._session.phase != PLAYING:
                logger.debug("Dropped stale tick for session %d", generation)
                return
            self._dispatch(Tick())
            if self._session.phase == PLAYING:
                self._schedule_tick(generation)
            else:
                logger.info("Session %d ran out of time", generation)

    def _on_resolve(self, generation: int, pair: Tuple[int, ...]) -> None:
        with self._lock:
            if generation != self._session.generation:
                logger.debug("Dropped stale re-hide for session %d", generation)
                return
            self._dispatch(ResolveMismatch(pair))
