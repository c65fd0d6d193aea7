from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .cards import Card
from .config import GameConfigError


class DeckConfigError(GameConfigError):
    """Raised when the grid cannot be filled from the configured image pool."""


def check_deck_config(image_pool: Sequence[str], rows: int, cols: int) -> int:
    """Validates the grid against the pool and returns the number of pairs needed."""
    cells = rows * cols
    if rows <= 0 or cols <= 0 or cells % 2 != 0:
        raise DeckConfigError(f'Grid {rows}x{cols} must have a positive, even number of cells')
    pairs_needed = cells // 2
    if len(image_pool) < pairs_needed:
        raise DeckConfigError(
            f'Image pool has {len(image_pool)} images; a {rows}x{cols} grid needs {pairs_needed}'
        )
    return pairs_needed


def build_deck(
    image_pool: Sequence[str],
    rows: int,
    cols: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Card, ...]:
    """Creates a shuffled deck using each of the first rows*cols/2 pool images exactly twice."""
    pairs_needed = check_deck_config(image_pool, rows, cols)
    rng = rng or random.Random(seed)
    # Deck composition: (image_id, image) twice per image.
    faces: List[Tuple[int, str]] = [(i, image_pool[i]) for i in range(pairs_needed)] * 2
    rng.shuffle(faces)
    return tuple(Card(id=pos, image_id=image_id, image=image) for pos, (image_id, image) in enumerate(faces))
