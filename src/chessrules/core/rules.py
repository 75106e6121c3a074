"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from chessrules.core.attacks import is_square_attacked
from chessrules.core.enums import Color, DrawReason, PieceType
from chessrules.core.state import (
    FIFTY_MOVE_HALF_MOVES,
    REPETITION_LIMIT,
    GameState,
    GameStatus,
)
from chessrules.core.types import square_color
from chessrules.core.validator import generate_all_legal_moves

_MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Draws are automatic: the first matching condition ends the game.
    """

    @staticmethod
    def is_check(state: GameState, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = state.board.king_square(color)
        return is_square_attacked(state.board, king_sq, color.opposite)

    @staticmethod
    def legal_move_count(state: GameState) -> int:
        return len(generate_all_legal_moves(state))

    @staticmethod
    def has_legal_moves(state: GameState) -> bool:
        return bool(generate_all_legal_moves(state))

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        if not Rules.is_check(state, state.current_player):
            return False
        return not Rules.has_legal_moves(state)

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        if Rules.is_check(state, state.current_player):
            return False
        return not Rules.has_legal_moves(state)

    @staticmethod
    def is_insufficient_material(state: GameState) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        others = [
            (sq, piece)
            for sq, piece in state.board.occupied()
            if piece.piece_type != PieceType.KING
        ]

        # K vs K
        if not others:
            return True

        # K+minor vs K
        if len(others) == 1:
            return others[0][1].piece_type in _MINOR_PIECES

        # K+B vs K+B with same-colour bishops
        if len(others) == 2:
            (sq_a, a), (sq_b, b) = others
            return (
                a.piece_type == PieceType.BISHOP
                and b.piece_type == PieceType.BISHOP
                and a.color != b.color
                and square_color(sq_a) == square_color(sq_b)
            )

        return False

    @staticmethod
    def is_threefold_repetition(state: GameState) -> bool:
        history = state.position_history
        if not history:
            return False
        return history.count(history[-1]) >= REPETITION_LIMIT

    @staticmethod
    def is_fifty_move_rule(state: GameState) -> bool:
        return state.half_move_clock >= FIFTY_MOVE_HALF_MOVES

    @staticmethod
    def draw_reason(state: GameState) -> DrawReason | None:
        """First matching draw condition, in priority order.

        A checkmated position is never a draw, whatever its clocks or history.
        """
        if Rules.is_checkmate(state):
            return None
        if Rules.is_stalemate(state):
            return DrawReason.STALEMATE
        return Rules._rule_draw(state)

    @staticmethod
    def game_status(state: GameState) -> GameStatus:
        """Checkmate first, then draws, else active with the check flag."""
        in_check = Rules.is_check(state, state.current_player)
        has_moves = Rules.has_legal_moves(state)

        if in_check and not has_moves:
            return GameStatus.checkmate(state.current_player.opposite)
        if not has_moves:
            return GameStatus.draw(DrawReason.STALEMATE)

        reason = Rules._rule_draw(state)
        if reason is not None:
            return GameStatus.draw(reason)
        return GameStatus.active(in_check)

    @staticmethod
    def _rule_draw(state: GameState) -> DrawReason | None:
        if Rules.is_insufficient_material(state):
            return DrawReason.INSUFFICIENT_MATERIAL
        if Rules.is_threefold_repetition(state):
            return DrawReason.THREEFOLD_REPETITION
        if Rules.is_fifty_move_rule(state):
            return DrawReason.FIFTY_MOVE_RULE
        return None
