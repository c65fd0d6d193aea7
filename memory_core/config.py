from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

IMAGE_PATHS: Tuple[str, ...] = tuple(f"/images/image-{i}.png" for i in range(1, 11))

GRID_ROWS = 5
GRID_COLS = 4
GAME_DURATION = 180  # seconds
MISMATCH_DELAY = 1.0  # seconds before a wrong pair turns back over
TICK_INTERVAL = 1.0
LEDGER_SIZE = 5
NAME_MAX_LENGTH = 15
LEDGER_KEY = "memoryGameHighScores"


@dataclass(frozen=True)
class GameConfig:
    """Fixed game settings. Not mutable by the player once a process starts."""
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    duration: int = GAME_DURATION
    image_pool: Tuple[str, ...] = IMAGE_PATHS
    mismatch_delay: float = MISMATCH_DELAY
    tick_interval: float = TICK_INTERVAL

    @property
    def cells(self) -> int:
        return self.rows * self.cols

    @property
    def pairs_needed(self) -> int:
        return self.cells // 2


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    return int(raw)


def config_from_env(base: Optional[GameConfig] = None) -> GameConfig:
    """Builds a GameConfig, letting MEMORY_DURATION_SEC and MEMORY_IMAGE_POOL override the defaults."""
    base = base or GameConfig()
    duration = _env_int("MEMORY_DURATION_SEC", base.duration)
    pool_env = os.getenv("MEMORY_IMAGE_POOL")
    if pool_env:
        pool = tuple(p.strip() for p in pool_env.split(",") if p.strip())
    else:
        pool = base.image_pool
    return GameConfig(
        rows=base.rows,
        cols=base.cols,
        duration=duration,
        image_pool=pool,
        mismatch_delay=base.mismatch_delay,
        tick_interval=base.tick_interval,
    )


class GameConfigError(ValueError):
    """Raised when the fixed game settings cannot produce a playable session."""


def check_config(config: GameConfig) -> None:
    """Rejects timings that would leave the countdown unable to run out."""
    if config.duration <= 0:
        raise GameConfigError(f'Game duration must be positive, got {config.duration}')
    if config.tick_interval <= 0:
        raise GameConfigError(f'Tick interval must be positive, got {config.tick_interval}')
    if config.mismatch_delay < 0:
        raise GameConfigError(f'Mismatch delay cannot be negative, got {config.mismatch_delay}')
