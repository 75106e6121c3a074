"""Core rules layer — pure chess logic with zero external dependencies.

Quick start::

    from chessrules.core import STARTING_FEN, generate_all_legal_moves, state_from_fen

    state = state_from_fen(STARTING_FEN)
    for move in generate_all_legal_moves(state):
        print(move)
"""

from chessrules.core.attacks import is_square_attacked
from chessrules.core.board import Board, BoardInvariantError
from chessrules.core.enums import CastlingSide, Color, DrawReason, PieceType, StatusKind
from chessrules.core.executor import (
    ExecutionResult,
    calculate_en_passant_target,
    execute_move,
    is_valid_promotion,
    requires_promotion,
    update_castling_rights,
)
from chessrules.core.move import PROMOTION_TYPES, Move, PendingPromotion
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    STARTING_FEN,
    position_key,
    state_from_fen,
    state_to_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.state import (
    FIFTY_MOVE_HALF_MOVES,
    REPETITION_LIMIT,
    CastlingRights,
    GameState,
    GameStatus,
    MoveRecord,
)
from chessrules.core.types import (
    Square,
    index_to_square,
    parse_square,
    square_color,
    square_to_index,
)
from chessrules.core.validator import (
    generate_all_legal_moves,
    generate_legal_moves_for_piece,
    is_legal_move,
    leaves_king_in_check,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "DrawReason",
    "PieceType",
    "StatusKind",
    # Types / helpers
    "Square",
    "index_to_square",
    "parse_square",
    "square_color",
    "square_to_index",
    # Domain objects
    "Board",
    "BoardInvariantError",
    "CastlingRights",
    "GameState",
    "GameStatus",
    "Move",
    "MoveRecord",
    "PendingPromotion",
    "Piece",
    "PROMOTION_TYPES",
    # Rules
    "FIFTY_MOVE_HALF_MOVES",
    "REPETITION_LIMIT",
    "ExecutionResult",
    "MoveGenerator",
    "Rules",
    "calculate_en_passant_target",
    "execute_move",
    "generate_all_legal_moves",
    "generate_legal_moves_for_piece",
    "is_legal_move",
    "is_square_attacked",
    "is_valid_promotion",
    "leaves_king_in_check",
    "requires_promotion",
    "update_castling_rights",
    # Notation
    "STARTING_FEN",
    "position_key",
    "state_from_fen",
    "state_to_fen",
]
