"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @classmethod
    def from_name(cls, name: str) -> Color:
        """Parse ``"white"`` / ``"black"``."""
        try:
            return cls[name.upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid color: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @classmethod
    def from_name(cls, name: str) -> PieceType:
        """Parse a lowercase piece name such as ``"knight"``."""
        try:
            return cls[name.upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid piece type: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class CastlingSide(str, Enum):
    """Which rook the king castled towards."""

    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


class StatusKind(str, Enum):
    """Top-level game status."""

    ACTIVE = "active"
    CHECKMATE = "checkmate"
    DRAW = "draw"


class DrawReason(str, Enum):
    """Why a game ended drawn, in detection priority order."""

    STALEMATE = "stalemate"
    INSUFFICIENT_MATERIAL = "insufficient-material"
    THREEFOLD_REPETITION = "threefold-repetition"
    FIFTY_MOVE_RULE = "fifty-move-rule"
