from __future__ import annotations

from dataclasses import dataclass, replace

Phase = str  # 'start', 'playing', 'awaiting_name', 'won', 'lost'
Signal = str  # 'correct', 'wrong', 'win', 'celebrate', 'loss'

START: Phase = 'start'
PLAYING: Phase = 'playing'
AWAITING_NAME: Phase = 'awaiting_name'
WON: Phase = 'won'
LOST: Phase = 'lost'

# Phases from which a new session may be started.
STARTABLE_PHASES = (START, WON, LOST)

CORRECT: Signal = 'correct'
WRONG: Signal = 'wrong'
WIN: Signal = 'win'
CELEBRATE: Signal = 'celebrate'
LOSS: Signal = 'loss'


@dataclass(frozen=True)
class Card:
    """A single card on the grid. Both cards of a pair share image_id."""
    id: int
    image_id: int
    image: str
    is_flipped: bool = False
    is_matched: bool = False

    @property
    def face_up(self) -> bool:
        return self.is_flipped or self.is_matched

    def flipped(self, value: bool = True) -> 'Card':
        return replace(self, is_flipped=value)

    def matched(self) -> 'Card':
        return replace(self, is_matched=True)
