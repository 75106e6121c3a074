"""Pseudo-legal move generation, per piece and per side, plus castling candidates."""

from __future__ import annotations

from chessrules.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_square_attacked,
    pawn_direction,
)
from chessrules.core.board import Board
from chessrules.core.enums import CastlingSide, Color, PieceType
from chessrules.core.move import PROMOTION_TYPES, Move
from chessrules.core.piece import Piece
from chessrules.core.state import CastlingRights
from chessrules.core.types import Square, index_to_square, is_valid_index

# Files the king passes through and lands on, and files that must be empty.
_CASTLING_PATHS: dict[CastlingSide, tuple[str, str, tuple[str, ...], str]] = {
    # side: (rook file, king landing file, empty files, king transit file)
    CastlingSide.KINGSIDE: ("h", "g", ("f", "g"), "f"),
    CastlingSide.QUEENSIDE: ("a", "c", ("b", "c", "d"), "d"),
}


def home_rank(color: Color) -> int:
    """Back rank (1-based) of *color*."""
    return 1 if color == Color.WHITE else 8


class MoveGenerator:
    """Generates pseudo-legal moves on a :class:`Board`.

    Pseudo-legal moves follow each piece's geometry and blocking rules but
    ignore whether the mover's own king is left in check; filtering those out
    is the validator's job.
    """

    __slots__ = ("_board", "_en_passant")

    def __init__(self, board: Board, en_passant_target: Square | None = None) -> None:
        self._board = board
        self._en_passant = en_passant_target

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves for *color* (castling excluded)."""
        moves: list[Move] = []
        for sq, piece in self._board.occupied(color):
            moves.extend(self.generate_piece_moves(sq, piece))
        return moves

    def generate_piece_moves(self, sq: Square, piece: Piece) -> list[Move]:
        """Pseudo-legal moves for *piece* standing on *sq*."""
        moves: list[Move] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_stepping(sq, piece.color, KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, piece.color, BISHOP_RAYS[sq], moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, piece.color, ROOK_RAYS[sq], moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, piece.color, QUEEN_RAYS[sq], moves)
        else:
            self._gen_stepping(sq, piece.color, KING_TARGETS[sq], moves)
        return moves

    def generate_castling_moves(
        self, color: Color, castling_rights: CastlingRights
    ) -> list[Move]:
        """King moves of two files for every side where castling is available."""
        board = self._board
        rank = home_rank(color)
        king_sq = Square("e", rank)
        king = board[king_sq]
        if king != Piece(color, PieceType.KING):
            return []

        opponent = color.opposite
        if is_square_attacked(board, king_sq, opponent):
            return []

        moves: list[Move] = []
        for side, (rook_file, king_to_file, empty_files, transit_file) in (
            _CASTLING_PATHS.items()
        ):
            if not castling_rights.allows(color, side):
                continue
            if board[Square(rook_file, rank)] != Piece(color, PieceType.ROOK):
                continue
            if any(not board.is_empty(Square(f, rank)) for f in empty_files):
                continue
            transit_sq = Square(transit_file, rank)
            landing_sq = Square(king_to_file, rank)
            if is_square_attacked(board, transit_sq, opponent):
                continue
            if is_square_attacked(board, landing_sq, opponent):
                continue
            moves.append(Move(king_sq, landing_sq))
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        direction = pawn_direction(color)
        start_rank_index = 1 if color == Color.WHITE else 6
        promotion_rank_index = 7 if color == Color.WHITE else 0
        ep_rank_index = 5 if color == Color.WHITE else 2
        rank_index = sq.rank_index
        file_index = sq.file_index

        one_rank = rank_index + direction
        if not is_valid_index(one_rank, file_index):
            return

        one_step = index_to_square(one_rank, file_index)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, one_rank == promotion_rank_index, moves)
            if rank_index == start_rank_index:
                two_step = index_to_square(one_rank + direction, file_index)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for df in (-1, 1):
            cap_file = file_index + df
            if not is_valid_index(one_rank, cap_file):
                continue
            cap_sq = index_to_square(one_rank, cap_file)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(
                        sq, cap_sq, one_rank == promotion_rank_index, moves
                    )
            elif cap_sq == self._en_passant and one_rank == ep_rank_index:
                moves.append(Move(sq, cap_sq))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, promotes: bool, moves: list[Move]
    ) -> None:
        if promotes:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, pt))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_stepping(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break
