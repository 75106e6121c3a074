"""Move execution: board transformation plus castling / en-passant bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import CastlingSide, Color, PieceType
from chessrules.core.move import PROMOTION_TYPES, Move
from chessrules.core.piece import Piece
from chessrules.core.state import CastlingRights
from chessrules.core.types import Square

_ROOK_CORNERS: dict[Square, tuple[Color, CastlingSide]] = {
    Square("a", 1): (Color.WHITE, CastlingSide.QUEENSIDE),
    Square("h", 1): (Color.WHITE, CastlingSide.KINGSIDE),
    Square("a", 8): (Color.BLACK, CastlingSide.QUEENSIDE),
    Square("h", 8): (Color.BLACK, CastlingSide.KINGSIDE),
}

# side: (rook origin file, rook destination file)
_ROOK_SLIDES: dict[CastlingSide, tuple[str, str]] = {
    CastlingSide.KINGSIDE: ("h", "f"),
    CastlingSide.QUEENSIDE: ("a", "d"),
}


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of :func:`execute_move`."""

    board: Board
    captured: Piece | None = None
    is_en_passant: bool = False
    castling: CastlingSide | None = None


def castling_side(piece: Piece, move: Move) -> CastlingSide | None:
    """Which side a king move castles towards, or None for ordinary moves."""
    if piece.piece_type != PieceType.KING:
        return None
    file_diff = move.to_sq.file_index - move.from_sq.file_index
    if file_diff == 2:
        return CastlingSide.KINGSIDE
    if file_diff == -2:
        return CastlingSide.QUEENSIDE
    return None


def is_en_passant_capture(
    piece: Piece, move: Move, en_passant_target: Square | None
) -> bool:
    return (
        piece.piece_type == PieceType.PAWN
        and en_passant_target is not None
        and move.to_sq == en_passant_target
        and move.to_sq.file != move.from_sq.file
    )


def execute_move(
    board: Board, move: Move, en_passant_target: Square | None
) -> ExecutionResult:
    """Apply *move* to *board*, returning a new board and what happened.

    Does not check legality; callers validate first.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq.name}")

    side = castling_side(piece, move)
    if side is not None:
        rank = move.from_sq.rank
        rook_from_file, rook_to_file = _ROOK_SLIDES[side]
        rook_from = Square(rook_from_file, rank)
        changes: dict[Square, Piece | None] = {
            move.from_sq: None,
            move.to_sq: piece,
        }
        rook = board[rook_from]
        if rook is not None:
            changes[rook_from] = None
            changes[Square(rook_to_file, rank)] = rook
        return ExecutionResult(board.with_pieces(changes), castling=side)

    changes = {move.from_sq: None}
    en_passant = is_en_passant_capture(piece, move, en_passant_target)
    if en_passant:
        # The captured pawn shares the destination's file and the origin's rank.
        captured_sq = Square(move.to_sq.file, move.from_sq.rank)
        captured = board[captured_sq]
        changes[captured_sq] = None
    else:
        captured = board[move.to_sq]

    placed = piece
    if move.promotion is not None:
        placed = Piece(piece.color, move.promotion)
    changes[move.to_sq] = placed

    return ExecutionResult(
        board.with_pieces(changes),
        captured=captured,
        is_en_passant=en_passant,
    )


def update_castling_rights(
    rights: CastlingRights,
    move: Move,
    piece: Piece,
    captured: Piece | None,
) -> CastlingRights:
    """Rights after *move*: king moves, rook moves and rook captures revoke them."""
    if piece.piece_type == PieceType.KING:
        rights = rights.revoke(piece.color)

    if piece.piece_type == PieceType.ROOK and move.from_sq in _ROOK_CORNERS:
        color, side = _ROOK_CORNERS[move.from_sq]
        if color == piece.color:
            rights = rights.revoke(color, side)

    if (
        captured is not None
        and captured.piece_type == PieceType.ROOK
        and move.to_sq in _ROOK_CORNERS
    ):
        color, side = _ROOK_CORNERS[move.to_sq]
        if color == captured.color:
            rights = rights.revoke(color, side)

    return rights


def en_passant_rank(side_to_move: Color) -> int:
    """Rank an en-passant target must sit on when *side_to_move* may capture."""
    return 6 if side_to_move == Color.WHITE else 3


def calculate_en_passant_target(move: Move, piece: Piece) -> Square | None:
    """Square a pawn skipped over with a double step, else None."""
    if piece.piece_type != PieceType.PAWN:
        return None
    if abs(move.to_sq.rank - move.from_sq.rank) != 2:
        return None
    return Square(move.from_sq.file, 3 if piece.color == Color.WHITE else 6)


def requires_promotion(move: Move, piece: Piece) -> bool:
    """A pawn landing on the far back rank must promote."""
    if piece.piece_type != PieceType.PAWN:
        return False
    return move.to_sq.rank == (8 if piece.color == Color.WHITE else 1)


def is_valid_promotion(move: Move, piece: Piece) -> bool:
    """Promotion moves need a queen, rook, bishop or knight; others pass."""
    if not requires_promotion(move, piece):
        return True
    return move.promotion in PROMOTION_TYPES
