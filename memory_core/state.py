from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from .cards import Card, Phase, START, PLAYING


def format_time(seconds: int) -> str:
    """Formats a number of seconds as m:ss."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


@dataclass(frozen=True)
class Session:
    """Immutable snapshot of one game: cards, face-up pair, counters and phase."""
    cards: Tuple[Card, ...]
    flipped: Tuple[int, ...]  # ids of face-up, unmatched cards; at most 2
    moves: int
    time_remaining: int
    duration: int
    phase: Phase
    resolving: bool = False
    generation: int = 0

    @classmethod
    def idle(cls, duration: int, generation: int = 0) -> 'Session':
        """The empty session shown before a game starts and after a reset."""
        return cls(cards=tuple(), flipped=tuple(), moves=0, time_remaining=duration,
                   duration=duration, phase=START, resolving=False, generation=generation)

    @property
    def elapsed(self) -> int:
        return self.duration - self.time_remaining

    @property
    def is_playing(self) -> bool:
        return self.phase == PLAYING

    def all_matched(self) -> bool:
        return bool(self.cards) and all(card.is_matched for card in self.cards)

    def card(self, card_id: int) -> Card:
        return self.cards[card_id]

    def with_cards(self, updates: List[Card]) -> Tuple[Card, ...]:
        """Returns the card tuple with the given cards swapped in by id."""
        by_id = {card.id: card for card in updates}
        return tuple(by_id.get(card.id, card) for card in self.cards)

    def evolve(self, **changes) -> 'Session':
        return replace(self, **changes)

    def pretty(self, cols: int) -> str:
        """Human-readable grid: '.' face down, image id when face up, '*' suffix when matched."""
        lines: List[str] = []
        for start in range(0, len(self.cards), cols):
            row: List[str] = []
            for card in self.cards[start:start + cols]:
                if card.is_matched:
                    row.append(f"{card.image_id:>2}*")
                elif card.is_flipped:
                    row.append(f"{card.image_id:>2} ")
                else:
                    row.append(" . ")
            lines.append(" ".join(row))
        return "\n".join(lines)
