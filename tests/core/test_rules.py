"""Tests for Rules: check, checkmate, stalemate, draw detection."""

from dataclasses import replace

from chessrules.core.enums import Color, DrawReason, StatusKind
from chessrules.core.notation import STARTING_FEN, state_from_fen
from chessrules.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        state = state_from_fen(STARTING_FEN)
        assert not Rules.is_check(state, Color.WHITE)
        assert not Rules.is_check(state, Color.BLACK)

    def test_fools_mate_in_check(self) -> None:
        state = state_from_fen(FOOLS_MATE)
        assert Rules.is_check(state, Color.WHITE)

    def test_legal_move_count(self) -> None:
        assert Rules.legal_move_count(state_from_fen(STARTING_FEN)) == 20


class TestCheckmate:
    def test_fools_mate(self) -> None:
        state = state_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(state)
        status = Rules.game_status(state)
        assert status.kind == StatusKind.CHECKMATE
        assert status.winner == Color.BLACK
        assert status.is_over

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        state = state_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(state)
        assert Rules.game_status(state).winner == Color.WHITE

    def test_not_checkmate_when_can_escape(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert not Rules.is_checkmate(state)
        status = Rules.game_status(state)
        assert status.kind == StatusKind.ACTIVE
        assert status.in_check

    def test_checkmate_beats_fifty_move_rule(self) -> None:
        state = state_from_fen(FOOLS_MATE.replace(" 1 3", " 100 3"))
        assert Rules.game_status(state).kind == StatusKind.CHECKMATE

    def test_checkmate_has_no_draw_reason(self) -> None:
        state = state_from_fen(FOOLS_MATE.replace(" 1 3", " 100 3"))
        assert Rules.is_fifty_move_rule(state)
        assert Rules.draw_reason(state) is None


class TestStalemate:
    def test_king_trapped(self) -> None:
        state = state_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(state)
        assert not Rules.is_checkmate(state)
        assert Rules.draw_reason(state) == DrawReason.STALEMATE
        assert Rules.game_status(state).reason == DrawReason.STALEMATE

    def test_not_stalemate_when_has_moves(self) -> None:
        state = state_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(state)


class TestInsufficientMaterial:
    def test_k_vs_k(self) -> None:
        assert Rules.is_insufficient_material(state_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1"))

    def test_k_bishop_vs_k(self) -> None:
        assert Rules.is_insufficient_material(state_from_fen("8/8/4k3/8/8/4K3/3B4/8 w - - 0 1"))

    def test_k_knight_vs_k(self) -> None:
        assert Rules.is_insufficient_material(state_from_fen("8/8/4k3/8/8/4K3/3n4/8 w - - 0 1"))

    def test_bishops_on_same_color(self) -> None:
        # c1 and f8 are both dark squares
        state = state_from_fen("5b2/8/4k3/8/8/4K3/8/2B5 w - - 0 1")
        assert Rules.is_insufficient_material(state)

    def test_bishops_on_opposite_colors(self) -> None:
        state = state_from_fen("2b5/8/4k3/8/8/4K3/8/2B5 w - - 0 1")
        assert not Rules.is_insufficient_material(state)

    def test_two_bishops_same_side(self) -> None:
        state = state_from_fen("8/8/4k3/8/8/8/3B4/2B1K3 w - - 0 1")
        assert not Rules.is_insufficient_material(state)

    def test_k_rook_vs_k_sufficient(self) -> None:
        assert not Rules.is_insufficient_material(state_from_fen("8/8/4k3/8/8/4K3/3R4/8 w - - 0 1"))

    def test_kp_vs_k_sufficient(self) -> None:
        assert not Rules.is_insufficient_material(state_from_fen("8/8/4k3/8/4P3/4K3/8/8 w - - 0 1"))

    def test_status_is_draw(self) -> None:
        status = Rules.game_status(state_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1"))
        assert status.kind == StatusKind.DRAW
        assert status.reason == DrawReason.INSUFFICIENT_MATERIAL


class TestFiftyMoveRule:
    def test_not_triggered_at_start(self) -> None:
        assert not Rules.is_fifty_move_rule(state_from_fen(STARTING_FEN))

    def test_threshold(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 99 80")
        assert not Rules.is_fifty_move_rule(state)
        assert Rules.is_fifty_move_rule(replace(state, half_move_clock=100))

    def test_status_is_draw(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
        assert Rules.game_status(state).reason == DrawReason.FIFTY_MOVE_RULE

    def test_insufficient_material_reported_first(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 100 80")
        assert Rules.draw_reason(state) == DrawReason.INSUFFICIENT_MATERIAL


class TestThreefoldRepetition:
    def test_empty_history(self) -> None:
        assert not Rules.is_threefold_repetition(state_from_fen(STARTING_FEN))

    def test_counts_latest_key(self) -> None:
        state = state_from_fen(STARTING_FEN)
        assert Rules.is_threefold_repetition(
            replace(state, position_history=("a", "b", "a", "c", "a"))
        )
        assert not Rules.is_threefold_repetition(
            replace(state, position_history=("a", "b", "a", "c"))
        )

    def test_status_is_draw(self) -> None:
        state = replace(state_from_fen(STARTING_FEN), position_history=("x", "x", "x"))
        assert Rules.game_status(state).reason == DrawReason.THREEFOLD_REPETITION


class TestActive:
    def test_starting_position_active(self) -> None:
        status = Rules.game_status(state_from_fen(STARTING_FEN))
        assert status.kind == StatusKind.ACTIVE
        assert not status.in_check
        assert Rules.draw_reason(state_from_fen(STARTING_FEN)) is None
