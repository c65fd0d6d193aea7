from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .cards import (
    Card,
    Signal,
    PLAYING,
    AWAITING_NAME,
    WON,
    LOST,
    STARTABLE_PHASES,
    CORRECT,
    WRONG,
    WIN,
    CELEBRATE,
    LOSS,
)
from .config import NAME_MAX_LENGTH
from .ledger import HighScoreEntry
from .state import Session


@dataclass(frozen=True)
class Start:
    cards: Tuple[Card, ...]
    generation: int


@dataclass(frozen=True)
class Flip:
    index: int


@dataclass(frozen=True)
class ResolveMismatch:
    pair: Tuple[int, ...]


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class SubmitName:
    name: str


@dataclass(frozen=True)
class Reset:
    generation: int


Event = Union[Start, Flip, ResolveMismatch, Tick, SubmitName, Reset]


@dataclass(frozen=True)
class Step:
    """Result of applying one command or event: the next session plus what happened."""
    session: Session
    signals: Tuple[Signal, ...] = ()
    entry: Optional[HighScoreEntry] = None

    def changed(self, before: Session) -> bool:
        return self.session is not before


def start_session(session: Session, cards: Tuple[Card, ...], generation: int) -> Step:
    """Deals a fresh game. Only valid from the start screen or a finished game."""
    if session.phase not in STARTABLE_PHASES:
        return Step(session)
    fresh = Session(
        cards=tuple(cards),
        flipped=tuple(),
        moves=0,
        time_remaining=session.duration,
        duration=session.duration,
        phase=PLAYING,
        resolving=False,
        generation=generation,
    )
    return Step(fresh)


def can_flip(session: Session, index: int) -> bool:
    """Checks every precondition for turning a card face up."""
    if session.phase != PLAYING or session.resolving or len(session.flipped) >= 2:
        return False
    if not isinstance(index, int) or isinstance(index, bool):
        return False
    if index < 0 or index >= len(session.cards):
        return False
    card = session.cards[index]
    return not card.is_flipped and not card.is_matched


def flip_card(session: Session, index: int) -> Step:
    """
    Turns a card face up. When it is the second card of a pair the pair-check
    runs in the same step: the move counter goes up first, then a match locks
    both cards (and may end the game) while a mismatch enters the resolving
    sub-state until ResolveMismatch arrives.
    """
    if not can_flip(session, index):
        return Step(session)
    card = session.cards[index]
    cards = session.with_cards([card.flipped()])
    flipped = session.flipped + (card.id,)
    if len(flipped) < 2:
        return Step(session.evolve(cards=cards, flipped=flipped))

    moves = session.moves + 1
    first, second = (cards[i] for i in flipped)
    if first.image_id != second.image_id:
        return Step(
            session.evolve(cards=cards, flipped=flipped, moves=moves, resolving=True),
            (WRONG,),
        )

    matched = session.evolve(cards=cards, flipped=tuple(), moves=moves)
    matched = matched.evolve(cards=matched.with_cards([first.matched(), second.matched()]))
    if matched.all_matched():
        return Step(matched.evolve(phase=AWAITING_NAME), (CORRECT, WIN, CELEBRATE))
    return Step(matched, (CORRECT,))


def resolve_mismatch(session: Session, pair: Tuple[int, ...]) -> Step:
    """Turns a wrong pair back over. Stale requests (other pair, other phase) are ignored."""
    if session.phase != PLAYING or not session.resolving or session.flipped != tuple(pair):
        return Step(session)
    hidden = [session.card(card_id).flipped(False) for card_id in pair]
    return Step(session.evolve(cards=session.with_cards(hidden), flipped=tuple(), resolving=False))


def tick(session: Session) -> Step:
    """One second of countdown. Reaching zero loses the game even mid-resolution."""
    if session.phase != PLAYING or session.time_remaining <= 0:
        return Step(session)
    remaining = session.time_remaining - 1
    if remaining == 0:
        return Step(session.evolve(time_remaining=0, phase=LOST), (LOSS,))
    return Step(session.evolve(time_remaining=remaining))


def clean_name(name: str) -> str:
    return (name or '').strip()[:NAME_MAX_LENGTH].strip()


def submit_name(session: Session, name: str) -> Step:
    """Records the winner's name; an empty or whitespace-only name is ignored."""
    if session.phase != AWAITING_NAME or not isinstance(name, str):
        return Step(session)
    cleaned = clean_name(name)
    if not cleaned:
        return Step(session)
    entry = HighScoreEntry(name=cleaned, elapsed_seconds=session.elapsed, moves=session.moves)
    return Step(session.evolve(phase=WON), entry=entry)


def reset_session(session: Session, generation: int) -> Step:
    return Step(Session.idle(session.duration, generation=generation))


def reduce(session: Session, event: Event) -> Step:
    """Applies one command or scheduled event to a session."""
    if isinstance(event, Flip):
        return flip_card(session, event.index)
    if isinstance(event, Tick):
        return tick(session)
    if isinstance(event, ResolveMismatch):
        return resolve_mismatch(session, event.pair)
    if isinstance(event, Start):
        return start_session(session, event.cards, event.generation)
    if isinstance(event, SubmitName):
        return submit_name(session, event.name)
    if isinstance(event, Reset):
        return reset_session(session, event.generation)
    raise TypeError(f'Unknown event: {event!r}')
