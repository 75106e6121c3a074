"""Tests for FEN parsing, serialization and position keys."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.notation import (
    STARTING_FEN,
    position_key,
    state_from_fen,
    state_to_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.state import CastlingRights, GameState
from chessrules.core.types import E3, E4


class TestStateFromFen:
    def test_starting_position(self) -> None:
        state = state_from_fen(STARTING_FEN)
        assert state.board == Board.initial()
        assert state.current_player == Color.WHITE
        assert state.castling_rights == CastlingRights()
        assert state.en_passant_target is None
        assert state.half_move_clock == 0
        assert state.full_move_number == 1
        assert state.move_history == ()
        assert state.position_history == ()

    def test_matches_default_state(self) -> None:
        assert state_from_fen(STARTING_FEN) == GameState()

    def test_after_e4(self) -> None:
        state = state_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert state.current_player == Color.BLACK
        assert state.en_passant_target == E3
        assert state.board[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_partial_castling(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert state.castling_rights == CastlingRights(
            white_kingside=True,
            white_queenside=False,
            black_kingside=False,
            black_queenside=True,
        )

    def test_clocks_default_when_omitted(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert state.half_move_clock == 0
        assert state.full_move_number == 1

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - - 0 1",
            "9/8/8/8/8/8/8/8 w - - 0 1",
            "ppppppppp/8/8/8/8/8/8/8 w - - 0 1",
            "7/8/8/8/8/8/8/8 w - - 0 1",
            "x7/8/8/8/8/8/8/8 w - - 0 1",
            "8/8/8/8/8/8/8/8 x - - 0 1",
            "8/8/8/8/8/8/8/8 w KK - 0 1",
            "8/8/8/8/8/8/8/8 w Z - 0 1",
            "8/8/8/8/8/8/8/8 w - e4 0 1",
            "8/8/8/8/8/8/8/8 b - e6 0 1",
            "8/8/8/8/8/8/8/8 w - - -1 1",
            "8/8/8/8/8/8/8/8 w - - 0 0",
            "8/8/8/8/8/8/8/8 w - - a 1",
        ],
    )
    def test_invalid_fen_rejected(self, fen: str) -> None:
        with pytest.raises(ValueError):
            state_from_fen(fen)


class TestStateToFen:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 12 40",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert state_to_fen(state_from_fen(fen)) == fen


class TestPositionKey:
    def test_starting_key(self) -> None:
        key = position_key(state_from_fen(STARTING_FEN))
        assert key == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -"

    def test_ignores_clocks(self) -> None:
        a = state_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        b = state_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 37 60")
        assert position_key(a) == position_key(b)

    def test_distinguishes_side_castling_and_en_passant(self) -> None:
        base = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
        keys = {
            position_key(state_from_fen(f"{base} b KQkq e3 0 1")),
            position_key(state_from_fen(f"{base} b KQkq - 0 1")),
            position_key(state_from_fen(f"{base} b Kkq - 0 1")),
            position_key(state_from_fen(f"{base} w KQkq - 0 1")),
        }
        assert len(keys) == 4
