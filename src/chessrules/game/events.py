"""Engine events and the synchronous event bus that delivers them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from chessrules.core.state import GameState, GameStatus, MoveRecord

# ── Event definitions ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveMade:
    kind: ClassVar[str] = "move-made"

    record: MoveRecord
    new_state: GameState


@dataclass(frozen=True, slots=True)
class MoveUndone:
    kind: ClassVar[str] = "move-undone"

    previous_state: GameState


@dataclass(frozen=True, slots=True)
class GameStarted:
    kind: ClassVar[str] = "game-started"

    state: GameState


@dataclass(frozen=True, slots=True)
class GameOver:
    kind: ClassVar[str] = "game-over"

    status: GameStatus


GameEvent: TypeAlias = "MoveMade | MoveUndone | GameStarted | GameOver"
GameEventListener = Callable[[GameEvent], None]
Unsubscribe = Callable[[], None]


# ── Bus ──────────────────────────────────────────────────────────────────────


class EventBus:
    """Ordered, synchronous fan-out of events to listeners.

    Listeners are called in registration order on the emitting thread.
    Dispatch iterates over the listener list as it was when :meth:`emit`
    started, so subscribing or unsubscribing from inside a callback only
    affects later events. :attr:`dispatching` lets the owner reject
    state-mutating calls made from inside a callback.
    """

    __slots__ = ("_listeners", "_depth")

    def __init__(self) -> None:
        self._listeners: list[GameEventListener] = []
        self._depth = 0

    @property
    def dispatching(self) -> bool:
        return self._depth > 0

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: GameEventListener) -> Unsubscribe:
        """Register *listener*; the returned callable removes it again."""
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: GameEvent) -> None:
        self._depth += 1
        try:
            for listener in tuple(self._listeners):
                listener(event)
        finally:
            self._depth -= 1
