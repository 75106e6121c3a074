"""Game layer — the engine state machine, typed results, events, JSON.

Quick start::

    from chessrules.core import parse_square, Move
    from chessrules.game import ChessEngine

    engine = ChessEngine()
    engine.subscribe(lambda event: print(event.kind))
    result = engine.make_move(Move(parse_square("e2"), parse_square("e4")))
    if not result.ok:
        print(result.error.message)
"""

from chessrules.game.engine import (
    ChessEngine,
    ReentrantMutationError,
    apply_move,
    create_initial_state,
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
    SerializationErrorKind,
    UndoError,
    UndoErrorKind,
)
from chessrules.game.serialization import (
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)

__all__ = [
    # Engine
    "ChessEngine",
    "ReentrantMutationError",
    "apply_move",
    "create_initial_state",
    # Events
    "EventBus",
    "GameEvent",
    "GameEventListener",
    "GameOver",
    "GameStarted",
    "MoveMade",
    "MoveUndone",
    "Unsubscribe",
    # Results
    "Err",
    "MoveError",
    "MoveErrorKind",
    "Ok",
    "Result",
    "SerializationError",
    "SerializationErrorKind",
    "UndoError",
    "UndoErrorKind",
    # Serialization
    "state_from_dict",
    "state_from_json",
    "state_to_dict",
    "state_to_json",
]
