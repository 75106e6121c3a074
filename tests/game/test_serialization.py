"""Tests for JSON (de)serialization of game state."""

import copy
import json
import logging
from collections.abc import Callable
from typing import Any

import pytest

from chessrules.core.enums import Color
from chessrules.core.move import Move
from chessrules.core.types import E2, E4, parse_square
from chessrules.game.engine import ChessEngine
from chessrules.game.events import GameStarted
from chessrules.game.results import Err, Ok, SerializationErrorKind
from chessrules.game.serialization import (
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)


def _engine_after(*ucis: str) -> ChessEngine:
    engine = ChessEngine()
    for uci in ucis:
        result = engine.make_move(Move(parse_square(uci[:2]), parse_square(uci[2:4])))
        assert result.ok
    return engine


def _valid_dict() -> dict[str, Any]:
    return json.loads(_engine_after("e2e4").to_json())


class TestShape:
    def test_keys(self) -> None:
        data = _valid_dict()
        assert set(data) == {
            "board",
            "currentPlayer",
            "castlingRights",
            "enPassantTarget",
            "halfMoveClock",
            "fullMoveNumber",
            "positionHistory",
        }

    def test_values_after_e4(self) -> None:
        data = _valid_dict()
        assert data["currentPlayer"] == "black"
        assert data["enPassantTarget"] == {"file": "e", "rank": 3}
        assert data["halfMoveClock"] == 0
        assert data["fullMoveNumber"] == 1
        assert data["castlingRights"] == {
            "whiteKingside": True,
            "whiteQueenside": True,
            "blackKingside": True,
            "blackQueenside": True,
        }
        assert len(data["positionHistory"]) == 2

    def test_board_is_rank_major(self) -> None:
        board = _valid_dict()["board"]
        assert len(board) == 8 and all(len(row) == 8 for row in board)
        assert board[0][4] == {"type": "king", "color": "white"}
        assert board[7][3] == {"type": "queen", "color": "black"}
        assert board[3][4] == {"type": "pawn", "color": "white"}
        assert board[1][4] is None

    def test_no_move_history(self) -> None:
        assert "moveHistory" not in _valid_dict()


class TestRoundTrip:
    def test_state_round_trip(self) -> None:
        state = _engine_after("e2e4", "e7e5", "g1f3").get_state()
        restored = state_from_json(state_to_json(state))
        assert restored.board == state.board
        assert restored.current_player == state.current_player
        assert restored.castling_rights == state.castling_rights
        assert restored.en_passant_target == state.en_passant_target
        assert restored.half_move_clock == state.half_move_clock
        assert restored.full_move_number == state.full_move_number
        assert restored.position_history == state.position_history
        assert restored.move_history == ()

    def test_dict_round_trip(self) -> None:
        state = ChessEngine().get_state()
        assert state_from_dict(state_to_dict(state)) == state

    def test_engine_from_json(self) -> None:
        source = _engine_after("e2e4", "c7c5")
        target = ChessEngine()
        result = target.from_json(source.to_json())
        assert isinstance(result, Ok)
        assert result.value.board == source.get_state().board
        assert target.get_current_player() == Color.WHITE
        assert not target.can_undo()
        assert target.to_json() == source.to_json()

    def test_from_json_emits_game_started(self) -> None:
        engine = ChessEngine()
        events: list[object] = []
        engine.subscribe(events.append)
        engine.from_json(_engine_after("e2e4").to_json())
        assert len(events) == 1
        assert isinstance(events[0], GameStarted)

    def test_loaded_state_keeps_repetition_history(self) -> None:
        source = _engine_after("g1f3", "g8f6", "f3g1", "f6g8")
        engine = ChessEngine()
        engine.from_json(source.to_json())
        state = engine.get_state()
        assert state.position_history == source.get_state().position_history

    def test_en_passant_rank_follows_side_to_move(self) -> None:
        state = state_from_json(_engine_after("e2e4", "d7d5").to_json())
        assert state.current_player == Color.WHITE
        assert state.en_passant_target == parse_square("d6")


def _drop(key: str) -> Callable[[dict[str, Any]], None]:
    def mutate(data: dict[str, Any]) -> None:
        del data[key]

    return mutate


def _set(key: str, value: Any) -> Callable[[dict[str, Any]], None]:
    def mutate(data: dict[str, Any]) -> None:
        data[key] = value

    return mutate


def _remove_black_king(data: dict[str, Any]) -> None:
    data["board"][7][4] = None


def _add_white_king(data: dict[str, Any]) -> None:
    data["board"][4][0] = {"type": "king", "color": "white"}


def _bad_piece(data: dict[str, Any]) -> None:
    data["board"][0][0] = {"type": "dragon", "color": "white"}


def _bad_castling_flag(data: dict[str, Any]) -> None:
    data["castlingRights"]["whiteKingside"] = "yes"


def _short_rank(data: dict[str, Any]) -> None:
    data["board"][2] = data["board"][2][:7]


class TestInvalidInput:
    @pytest.mark.parametrize(
        "mutate",
        [
            _drop("board"),
            _drop("positionHistory"),
            _set("currentPlayer", "red"),
            _set("currentPlayer", 0),
            _set("halfMoveClock", -1),
            _set("halfMoveClock", True),
            _set("halfMoveClock", 1.5),
            _set("fullMoveNumber", 0),
            _set("board", []),
            _set("enPassantTarget", {"file": "z", "rank": 3}),
            _set("enPassantTarget", {"file": "e", "rank": 9}),
            _set("enPassantTarget", {"file": "e", "rank": 6}),
            _set("enPassantTarget", {"file": "e", "rank": 4}),
            _set("enPassantTarget", "e3"),
            _set("castlingRights", None),
            _set("positionHistory", [1, 2]),
            _remove_black_king,
            _add_white_king,
            _bad_piece,
            _bad_castling_flag,
            _short_rank,
        ],
    )
    def test_structural_errors(self, mutate: Callable[[dict[str, Any]], None]) -> None:
        data = copy.deepcopy(_valid_dict())
        mutate(data)
        with pytest.raises(ValueError):
            state_from_dict(data)

        engine = ChessEngine()
        before = engine.get_state()
        result = engine.from_json(json.dumps(data))
        assert isinstance(result, Err)
        assert result.error.kind == SerializationErrorKind.INVALID_JSON
        assert result.error.message
        assert engine.get_state() == before

    @pytest.mark.parametrize(
        "text",
        ["", "not json", "[1, 2", "[]", "null", "42", "[" * 100_000 + "]" * 100_000],
    )
    def test_unparsable_or_wrong_type(self, text: str) -> None:
        result = ChessEngine().from_json(text)
        assert not result.ok
        assert result.error.kind == SerializationErrorKind.INVALID_JSON

    def test_failed_load_emits_nothing(self) -> None:
        engine = ChessEngine()
        events: list[object] = []
        engine.subscribe(events.append)
        engine.from_json("{}")
        assert events == []

    def test_failed_load_keeps_history(self) -> None:
        engine = ChessEngine()
        engine.make_move(Move(E2, E4))
        engine.from_json("{}")
        assert engine.can_undo()
        assert engine.get_state().board[E4] is not None

    def test_rejection_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chessrules.game.engine"):
            ChessEngine().from_json("not json")
        assert any(r.levelno == logging.WARNING for r in caplog.records)
