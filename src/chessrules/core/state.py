"""Game state value objects: castling rights, state snapshots, move records, status."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chessrules.core.board import Board
from chessrules.core.enums import CastlingSide, Color, DrawReason, StatusKind
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square

FIFTY_MOVE_HALF_MOVES = 100  # 100 half-moves = 50 full moves by each side
REPETITION_LIMIT = 3


@dataclass(frozen=True, slots=True)
class CastlingRights:
    """Four independent castling flags. Updates only ever clear flags."""

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    @classmethod
    def none(cls) -> CastlingRights:
        return cls(False, False, False, False)

    def allows(self, color: Color, side: CastlingSide) -> bool:
        if color == Color.WHITE:
            if side == CastlingSide.KINGSIDE:
                return self.white_kingside
            return self.white_queenside
        if side == CastlingSide.KINGSIDE:
            return self.black_kingside
        return self.black_queenside

    def revoke(self, color: Color, side: CastlingSide | None = None) -> CastlingRights:
        """Clear *side* for *color*, or both sides when *side* is None."""
        sides = (side,) if side is not None else tuple(CastlingSide)
        updates: dict[str, bool] = {}
        for s in sides:
            updates[f"{color.name.lower()}_{s.value}"] = False
        return replace(self, **updates)


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Outcome of evaluating a state: active, checkmate or draw."""

    kind: StatusKind
    in_check: bool = False
    winner: Color | None = None
    reason: DrawReason | None = None

    @classmethod
    def active(cls, in_check: bool = False) -> GameStatus:
        return cls(StatusKind.ACTIVE, in_check=in_check)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner=winner)

    @classmethod
    def draw(cls, reason: DrawReason) -> GameStatus:
        return cls(StatusKind.DRAW, reason=reason)

    @property
    def is_over(self) -> bool:
        return self.kind != StatusKind.ACTIVE


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete game state.

    Treated as a value: every engine transition builds a new instance.
    ``position_history`` holds one key per position reached, so a state
    produced by play satisfies
    ``len(position_history) == len(move_history) + 1``.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_target: Square | None = None
    half_move_clock: int = 0
    full_move_number: int = 1
    move_history: tuple[MoveRecord, ...] = ()
    position_history: tuple[str, ...] = ()

    def copy(self) -> GameState:
        """Deep copy; the board is the only mutable-backed member."""
        return replace(self, board=self.board.copy())


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history.

    ``previous_state`` is the full state before the move; undo restores it.
    """

    move: Move
    piece: Piece
    previous_state: GameState
    captured: Piece | None = None
    is_check: bool = False
    is_checkmate: bool = False
    castling: CastlingSide | None = None
    is_en_passant: bool = False
