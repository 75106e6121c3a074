"""Move value objects."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType
from chessrules.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Castling is encoded as the king moving two files; en passant as the pawn
    moving onto the en-passant target. Only promotion needs extra data.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "?")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move that reached the back rank and awaits a piece choice."""

    from_sq: Square
    to_sq: Square
    color: Color

    def complete(self, piece_type: PieceType) -> Move:
        """Build the final move once the player has picked *piece_type*."""
        return Move(self.from_sq, self.to_sq, piece_type)
