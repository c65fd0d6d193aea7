"""
Memory Match core Python package.

This package contains the data structures and pure-logic helpers behind the
timed memory-matching game, kept free of any rendering so the Flask app and
the terminal front end share one engine.
Modules:
- config.py: fixed grid/duration constants, GameConfig
- cards.py: Card, Phase, signal names
- state.py: Session
- deck.py: deck construction
- rules.py: pure reducer over commands and timer events
- scheduler.py: threading and manual schedulers
- ledger.py: high-score ranking and JSON codec
- db.py, store.py: key-value persistence
- engine.py: GameEngine orchestrating all of the above
"""
