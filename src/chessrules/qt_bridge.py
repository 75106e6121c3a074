"""Qt bridge that re-emits engine events as PyQt6 signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from chessrules.game.engine import ChessEngine
from chessrules.game.events import (
    GameEvent,
    GameOver,
    GameStarted,
    MoveMade,
    MoveUndone,
    Unsubscribe,
)


class EngineSignals(QObject):
    """Subscribes to a :class:`ChessEngine` and forwards each event.

    Signals are emitted synchronously from the engine's callback, so with a
    direct connection slots run before the engine operation returns.
    """

    move_made = pyqtSignal(object, object)  # MoveRecord, GameState
    move_undone = pyqtSignal(object)  # GameState
    game_started = pyqtSignal(object)  # GameState
    game_over = pyqtSignal(object)  # GameStatus

    def __init__(self, engine: ChessEngine, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._unsubscribe: Unsubscribe | None = engine.subscribe(self._on_event)

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def detach(self) -> None:
        """Stop forwarding events; safe to call more than once."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None

    def _on_event(self, event: GameEvent) -> None:
        if isinstance(event, MoveMade):
            self.move_made.emit(event.record, event.new_state)
        elif isinstance(event, MoveUndone):
            self.move_undone.emit(event.previous_state)
        elif isinstance(event, GameStarted):
            self.game_started.emit(event.state)
        elif isinstance(event, GameOver):
            self.game_over.emit(event.status)
