"""ChessEngine — the single owner of the current game state.

Validates and applies moves, keeps the undo history and notifies
subscribers through an :class:`EventBus`.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chessrules.core.enums import Color, PieceType
from chessrules.core.executor import (
    calculate_en_passant_target,
    execute_move,
    is_valid_promotion,
    requires_promotion,
    update_castling_rights,
)
from chessrules.core.move import Move
from chessrules.core.notation.fen import position_key, state_from_fen
from chessrules.core.rules import Rules
from chessrules.core.state import GameState, GameStatus, MoveRecord
from chessrules.core.types import Square
from chessrules.core.validator import (
    generate_legal_moves_for_piece,
    is_legal_move,
)
from chessrules.game.events import (
    EventBus,
    GameEvent,
    GameEventListener,
    GameOver,
    GameStarted,
    MoveMade,
    MoveUndone,
    Unsubscribe,
)
from chessrules.game.results import (
    Err,
    MoveError,
    MoveErrorKind,
    Ok,
    Result,
    SerializationError,
    UndoError,
)
from chessrules.game.serialization import state_from_json, state_to_json

_LOGGER = logging.getLogger(__name__)


class ReentrantMutationError(RuntimeError):
    """A listener tried to mutate the engine while an event was being delivered."""


def create_initial_state(fen: str | None = None) -> GameState:
    """Fresh state with its starting position recorded in the history.

    Without *fen* this is the standard initial position. Raises ``ValueError``
    for a malformed FEN or one without exactly one king per side.
    """
    state = GameState() if fen is None else state_from_fen(fen)
    state.board.check_kings()
    return replace(state, move_history=(), position_history=(position_key(state),))


def apply_move(state: GameState, move: Move) -> GameState:
    """Successor of *state* after *move*, with history and clocks updated.

    Does not check legality; :class:`ChessEngine` validates first.
    """
    piece = state.board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq.name}")

    result = execute_move(state.board, move, state.en_passant_target)
    mover = state.current_player
    resets_clock = piece.piece_type == PieceType.PAWN or result.captured is not None

    after = GameState(
        board=result.board,
        current_player=mover.opposite,
        castling_rights=update_castling_rights(
            state.castling_rights, move, piece, result.captured
        ),
        en_passant_target=calculate_en_passant_target(move, piece),
        half_move_clock=0 if resets_clock else state.half_move_clock + 1,
        full_move_number=state.full_move_number + (1 if mover == Color.BLACK else 0),
    )

    is_check = Rules.is_check(after, after.current_player)
    record = MoveRecord(
        move=move,
        piece=piece,
        previous_state=state.copy(),
        captured=result.captured,
        is_check=is_check,
        is_checkmate=is_check and not Rules.has_legal_moves(after),
        castling=result.castling,
        is_en_passant=result.is_en_passant,
    )
    return replace(
        after,
        move_history=(*state.move_history, record),
        position_history=(*state.position_history, position_key(after)),
    )


class ChessEngine:
    """Rules-enforcing game engine.

    Every accessor returns an independent copy; the engine's own state is
    only replaced through :meth:`make_move`, :meth:`undo_move`,
    :meth:`new_game` and :meth:`from_json`.

    Single-threaded: callbacks run synchronously on the caller's thread and
    may read from the engine but must not mutate it.
    """

    __slots__ = ("_state", "_status", "_bus")

    def __init__(self, start_fen: str | None = None) -> None:
        self._state = create_initial_state(start_fen)
        self._status = Rules.game_status(self._state)
        self._bus = EventBus()

    # ── Queries ──────────────────────────────────────────────────────────

    def get_state(self) -> GameState:
        return self._state.copy()

    def get_current_player(self) -> Color:
        return self._state.current_player

    def get_game_status(self) -> GameStatus:
        return self._status

    def get_legal_moves(self, square: Square) -> list[Move]:
        """Legal moves of the piece on *square*; empty once the game is over."""
        if self._status.is_over:
            return []
        return generate_legal_moves_for_piece(self._state, square)

    def can_undo(self) -> bool:
        return bool(self._state.move_history)

    def subscribe(self, listener: GameEventListener) -> Unsubscribe:
        return self._bus.subscribe(listener)

    # ── Mutations ────────────────────────────────────────────────────────

    def make_move(self, move: Move) -> Result[GameState, MoveError]:
        """Validate and apply *move*.

        Returns ``Ok(new_state)`` or ``Err(MoveError)``; a rejected move
        leaves the engine untouched.
        """
        self._check_not_dispatching("make_move")

        error = self._validate(move)
        if error is not None:
            _LOGGER.debug("Rejected %s: %s", move, error.kind.value)
            return Err(error)

        after = apply_move(self._state, move)
        record = after.move_history[-1]

        self._commit(after)
        _LOGGER.debug("Played %s; status %s", move, self._status.kind.value)

        self._emit(MoveMade(record, after.copy()))
        if self._status.is_over:
            _LOGGER.info(
                "Game over: %s (winner=%s, reason=%s)",
                self._status.kind.value,
                self._status.winner,
                self._status.reason.value if self._status.reason else None,
            )
            self._emit(GameOver(self._status))
        return Ok(after.copy())

    def undo_move(self) -> Result[GameState, UndoError]:
        """Restore the state from before the last move."""
        self._check_not_dispatching("undo_move")

        if not self._state.move_history:
            return Err(UndoError())

        record = self._state.move_history[-1]
        self._commit(record.previous_state.copy())
        _LOGGER.debug("Undid %s", record.move)

        self._emit(MoveUndone(self._state.copy()))
        return Ok(self._state.copy())

    def new_game(self, fen: str | None = None) -> GameState:
        """Reset to the initial position (or *fen*); raises ``ValueError`` on bad FEN."""
        self._check_not_dispatching("new_game")

        self._commit(create_initial_state(fen))
        _LOGGER.debug("New game from %s", fen or "the initial position")

        self._emit(GameStarted(self._state.copy()))
        return self._state.copy()

    # ── Serialization ────────────────────────────────────────────────────

    def to_json(self) -> str:
        return state_to_json(self._state)

    def from_json(self, text: str) -> Result[GameState, SerializationError]:
        """Replace the current state with a serialized one.

        Move history is cleared; invalid input leaves the engine untouched.
        """
        self._check_not_dispatching("from_json")

        try:
            state = state_from_json(text)
        except ValueError as exc:
            _LOGGER.warning("Rejected serialized state: %s", exc)
            return Err(SerializationError(str(exc)))

        self._commit(state)
        _LOGGER.debug("Loaded state; status %s", self._status.kind.value)

        self._emit(GameStarted(self._state.copy()))
        return Ok(self._state.copy())

    # ── Internal helpers ─────────────────────────────────────────────────

    def _validate(self, move: Move) -> MoveError | None:
        """First failing check for *move*, or None if it may be played."""
        if self._status.is_over:
            return MoveError(MoveErrorKind.GAME_OVER, "The game is over")

        state = self._state
        piece = state.board[move.from_sq]
        if piece is None:
            return MoveError(
                MoveErrorKind.NO_PIECE,
                f"No piece on {move.from_sq.name}",
                square=move.from_sq,
            )

        if piece.color != state.current_player:
            return MoveError(
                MoveErrorKind.WRONG_COLOR,
                f"It is {state.current_player.name.lower()}'s turn",
                expected=state.current_player,
                actual=piece.color,
            )

        if requires_promotion(move, piece) and not is_valid_promotion(move, piece):
            return MoveError(
                MoveErrorKind.ILLEGAL_MOVE,
                f"{move} needs a queen, rook, bishop or knight promotion",
            )

        if not is_legal_move(state, move):
            return MoveError(MoveErrorKind.ILLEGAL_MOVE, f"{move} is not legal")

        return None

    def _commit(self, state: GameState) -> None:
        status = Rules.game_status(state)
        self._state = state
        self._status = status

    def _check_not_dispatching(self, operation: str) -> None:
        if self._bus.dispatching:
            raise ReentrantMutationError(
                f"{operation}() called from an event listener"
            )

    def _emit(self, event: GameEvent) -> None:
        self._bus.emit(event)
