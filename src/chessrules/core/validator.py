"""Legal-move filtering: pseudo-legal moves that keep the mover's king safe."""

from __future__ import annotations

from chessrules.core.attacks import is_square_attacked
from chessrules.core.enums import Color, PieceType
from chessrules.core.executor import execute_move
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.state import GameState
from chessrules.core.types import Square


def leaves_king_in_check(state: GameState, move: Move) -> bool:
    """Simulate *move* on a scratch board and test the mover's king."""
    piece = state.board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq.name}")
    result = execute_move(state.board, move, state.en_passant_target)
    king_sq = result.board.king_square(piece.color)
    return is_square_attacked(result.board, king_sq, piece.color.opposite)


def _candidate_moves(state: GameState, square: Square) -> list[Move]:
    piece = state.board[square]
    if piece is None:
        return []
    gen = MoveGenerator(state.board, state.en_passant_target)
    moves = gen.generate_piece_moves(square, piece)
    if piece.piece_type == PieceType.KING:
        moves.extend(gen.generate_castling_moves(piece.color, state.castling_rights))
    return moves


def is_legal_move(state: GameState, move: Move) -> bool:
    """Whether *move* is legal for the side to move in *state*."""
    piece = state.board[move.from_sq]
    if piece is None or piece.color != state.current_player:
        return False
    # Move equality covers destination and promotion choice.
    if move not in _candidate_moves(state, move.from_sq):
        return False
    return not leaves_king_in_check(state, move)


def generate_legal_moves_for_piece(state: GameState, square: Square) -> list[Move]:
    """Legal moves of the piece on *square*; empty unless it is the mover's."""
    piece = state.board[square]
    if piece is None or piece.color != state.current_player:
        return []
    return [
        move
        for move in _candidate_moves(state, square)
        if not leaves_king_in_check(state, move)
    ]


def generate_all_legal_moves(
    state: GameState, color: Color | None = None
) -> list[Move]:
    """All legal moves for *color* (default: the side to move)."""
    if color is None:
        color = state.current_player
    legal: list[Move] = []
    for sq, _piece in state.board.occupied(color):
        for move in _candidate_moves(state, sq):
            if not leaves_king_in_check(state, move):
                legal.append(move)
    return legal
