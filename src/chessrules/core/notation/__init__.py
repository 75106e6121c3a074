"""Notation package: FEN parsing and serialization."""

from chessrules.core.notation.fen import (
    STARTING_FEN,
    position_key,
    state_from_fen,
    state_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "position_key",
    "state_from_fen",
    "state_to_fen",
]
