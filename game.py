from __future__ import annotations

# Facade module that re-exports Memory Match core functionality.
# The Flask app, the CLI and the tests import from here.
# Single-responsibility modules live under memory_core/*.

from memory_core.cards import (  # noqa: F401
    Card,
    Phase,
    Signal,
    START,
    PLAYING,
    AWAITING_NAME,
    WON,
    LOST,
    CORRECT,
    WRONG,
    WIN,
    CELEBRATE,
    LOSS,
)
from memory_core.config import (  # noqa: F401
    GameConfig,
    config_from_env,
    check_config,
    GameConfigError,
    IMAGE_PATHS,
    GRID_ROWS,
    GRID_COLS,
    GAME_DURATION,
    LEDGER_KEY,
)
from memory_core.state import Session, format_time  # noqa: F401
from memory_core.deck import DeckConfigError, build_deck, check_deck_config  # noqa: F401
from memory_core.rules import (  # noqa: F401
    Start,
    Flip,
    ResolveMismatch,
    Tick,
    SubmitName,
    Reset,
    Step,
    reduce,
    can_flip,
    flip_card,
    resolve_mismatch,
    tick,
    submit_name,
    start_session,
    reset_session,
)
from memory_core.ledger import (  # noqa: F401
    HighScoreEntry,
    LedgerFormatError,
    record,
    rank_of,
    ledger_to_json,
    ledger_from_json,
)
from memory_core.db import _ensure_db_dir, _resolve_db_path, db_get_value, db_set_value  # noqa: F401
from memory_core.store import SqliteStore, MemoryStore, LedgerStore  # noqa: F401
from memory_core.scheduler import ThreadingScheduler, ManualScheduler  # noqa: F401
from memory_core.engine import GameEngine  # noqa: F401


def main() -> None:
    # CLI driver delegated to memory_core.cli
    from memory_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
