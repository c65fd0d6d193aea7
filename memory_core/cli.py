from __future__ import annotations

import argparse
import logging
import os
import time
from typing import Optional, Sequence, Tuple

from .cards import Signal, PLAYING, AWAITING_NAME, WON, LOST, CORRECT, WRONG, WIN, LOSS
from .config import config_from_env
from .engine import GameEngine
from .state import Session, format_time
from .store import LedgerStore, SqliteStore

MESSAGES = {
    CORRECT: 'Pair found!',
    WRONG: 'No match.',
    WIN: 'All pairs found!',
    LOSS: "Time's up!",
}


def print_scores(engine: GameEngine) -> None:
    print('Top 5 scores:')
    if not engine.ledger:
        print('  No scores yet. Be the first!')
        return
    for pos, entry in enumerate(engine.ledger, start=1):
        print(f'  {pos}. {entry.name:<15} {format_time(entry.elapsed_seconds)} / {entry.moves} moves')


def parse_card(text: str, cols: int) -> Optional[int]:
    """Accepts a 1-based card number, or 'r,c' / 'r c' with 0-based row and column."""
    text = text.strip()
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t != '']
    try:
        if len(parts) == 1:
            return int(parts[0]) - 1
        if len(parts) == 2:
            r, c = int(parts[0]), int(parts[1])
            if r < 0 or not 0 <= c < cols:
                return None
            return r * cols + c
    except ValueError:
        return None
    return None


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Memory Match: timed pair-finding game')
    parser.add_argument('--db', default=os.getenv('MEMORY_DB', 'data/memory.db'), help='SQLite DB file for high scores')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--play', action='store_true', help='Play a game in the terminal')
    parser.add_argument('--log-level', default=os.getenv('MEMORY_LOG_LEVEL', 'WARNING'), help='Logging level')
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s %(levelname)s [%(name)s] %(message)s')

    config = config_from_env()
    engine = GameEngine(config, store=LedgerStore(SqliteStore(args.db)), seed=args.seed)

    if not args.play:
        print_scores(engine)
        return

    def announce(signals: Tuple[Signal, ...], session: Session) -> None:
        for sig in signals:
            if sig in MESSAGES:
                print(MESSAGES[sig])

    engine.subscribe(announce)
    engine.start()
    print(f'Find all {config.pairs_needed} pairs in {format_time(config.duration)}.')

    while engine.phase == PLAYING:
        s = engine.session
        print(f'\nTime {format_time(s.time_remaining)}  Moves {s.moves}')
        print(s.pretty(config.cols))
        text = input(f'Pick a card (1-{config.cells}) or r,c: ')
        index = parse_card(text, config.cols)
        if index is None:
            print('Could not parse. Try again.')
            continue
        engine.flip_card(index)
        if engine.session.resolving:
            print(engine.session.pretty(config.cols))
            while engine.session.resolving and engine.phase == PLAYING:
                time.sleep(0.05)

    if engine.phase == LOST:
        print('Game over. Try again!')
        return

    s = engine.session
    print(f'You finished in {format_time(s.elapsed)} with {s.moves} moves.')
    while engine.phase == AWAITING_NAME:
        engine.submit_name(input('Enter your name to save your score: '))
    if engine.phase == WON:
        rank = engine.last_rank()
        if rank is not None:
            print(f'You placed #{rank}!')
        print_scores(engine)
