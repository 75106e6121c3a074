"""JSON (de)serialization of :class:`GameState`.

Move history is not serialized: its records embed full prior-state snapshots
that only make sense inside a live engine.
"""

from __future__ import annotations

import json
from typing import Any

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.executor import en_passant_rank
from chessrules.core.piece import Piece
from chessrules.core.state import CastlingRights, GameState
from chessrules.core.types import Square

_CASTLING_KEYS: tuple[tuple[str, str], ...] = (
    ("whiteKingside", "white_kingside"),
    ("whiteQueenside", "white_queenside"),
    ("blackKingside", "black_kingside"),
    ("blackQueenside", "black_queenside"),
)


# ── Encoding ─────────────────────────────────────────────────────────────────


def _piece_to_dict(piece: Piece | None) -> dict[str, str] | None:
    if piece is None:
        return None
    return {"type": str(piece.piece_type), "color": str(piece.color)}


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Plain-data representation with camelCase keys."""
    ep = state.en_passant_target
    return {
        "board": [
            [_piece_to_dict(piece) for piece in row] for row in state.board.rows()
        ],
        "currentPlayer": str(state.current_player),
        "castlingRights": {
            key: getattr(state.castling_rights, attr) for key, attr in _CASTLING_KEYS
        },
        "enPassantTarget": {"file": ep.file, "rank": ep.rank} if ep else None,
        "halfMoveClock": state.half_move_clock,
        "fullMoveNumber": state.full_move_number,
        "positionHistory": list(state.position_history),
    }


def state_to_json(state: GameState) -> str:
    return json.dumps(state_to_dict(state))


# ── Decoding ─────────────────────────────────────────────────────────────────


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing key: {key!r}")
    return data[key]


def _require_int(data: dict[str, Any], key: str, minimum: int) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"{key} must be an integer >= {minimum}, got {value!r}")
    return value


def _name(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {value!r}")
    return value


def _piece_from_dict(data: Any) -> Piece | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"Invalid piece: {data!r}")
    ptype = PieceType.from_name(_name(_require(data, "type"), "piece type"))
    color = Color.from_name(_name(_require(data, "color"), "piece color"))
    return Piece(color, ptype)


def _board_from_list(data: Any) -> Board:
    if not isinstance(data, list) or len(data) != 8:
        raise ValueError("board must be a list of 8 ranks")
    rows: list[list[Piece | None]] = []
    for row in data:
        if not isinstance(row, list) or len(row) != 8:
            raise ValueError("each board rank must be a list of 8 cells")
        rows.append([_piece_from_dict(cell) for cell in row])
    board = Board.from_rows(rows)
    board.check_kings()
    return board


def _castling_from_dict(data: Any) -> CastlingRights:
    if not isinstance(data, dict):
        raise ValueError("castlingRights must be an object")
    flags: dict[str, bool] = {}
    for key, attr in _CASTLING_KEYS:
        value = _require(data, key)
        if not isinstance(value, bool):
            raise ValueError(f"castlingRights.{key} must be a boolean")
        flags[attr] = value
    return CastlingRights(**flags)


def _en_passant_from_dict(data: Any, side: Color) -> Square | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError("enPassantTarget must be an object or null")
    square = Square(_require(data, "file"), _require(data, "rank"))
    if square.rank != en_passant_rank(side):
        raise ValueError(
            f"enPassantTarget {square.name!r} is off the capture rank for "
            f"{side.name.lower()}"
        )
    return square


def state_from_dict(data: Any) -> GameState:
    """Validate and decode; raises ``ValueError`` on any structural problem."""
    if not isinstance(data, dict):
        raise ValueError("state must be a JSON object")

    history = _require(data, "positionHistory")
    if not isinstance(history, list) or not all(isinstance(h, str) for h in history):
        raise ValueError("positionHistory must be a list of strings")

    side = Color.from_name(_name(_require(data, "currentPlayer"), "currentPlayer"))
    return GameState(
        board=_board_from_list(_require(data, "board")),
        current_player=side,
        castling_rights=_castling_from_dict(_require(data, "castlingRights")),
        en_passant_target=_en_passant_from_dict(
            _require(data, "enPassantTarget"), side
        ),
        half_move_clock=_require_int(data, "halfMoveClock", 0),
        full_move_number=_require_int(data, "fullMoveNumber", 1),
        move_history=(),
        position_history=tuple(history),
    )


def state_from_json(text: str) -> GameState:
    """Parse and validate *text*; raises ``ValueError`` on malformed input."""
    try:
        data = json.loads(text)
    except (TypeError, RecursionError, json.JSONDecodeError) as exc:
        raise ValueError(f"Unparsable JSON: {exc}") from exc
    return state_from_dict(data)
