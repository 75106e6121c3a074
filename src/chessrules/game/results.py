"""Typed operation results and error values.

User-facing failures are returned, never raised: ``make_move`` and friends
hand back either :class:`Ok` or :class:`Err` and leave the engine untouched
on failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeAlias, TypeVar

from chessrules.core.enums import Color
from chessrules.core.types import Square

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    @property
    def ok(self) -> bool:
        return False


Result: TypeAlias = "Ok[T] | Err[E]"


class MoveErrorKind(str, Enum):
    NO_PIECE = "no-piece"
    WRONG_COLOR = "wrong-color"
    ILLEGAL_MOVE = "illegal-move"
    GAME_OVER = "game-over"


class UndoErrorKind(str, Enum):
    NO_MOVES_TO_UNDO = "no-moves-to-undo"


class SerializationErrorKind(str, Enum):
    INVALID_JSON = "invalid-json"


@dataclass(frozen=True, slots=True)
class MoveError:
    """Why ``make_move`` rejected a move."""

    kind: MoveErrorKind
    message: str = ""
    square: Square | None = None
    expected: Color | None = None
    actual: Color | None = None


@dataclass(frozen=True, slots=True)
class UndoError:
    kind: UndoErrorKind = UndoErrorKind.NO_MOVES_TO_UNDO


@dataclass(frozen=True, slots=True)
class SerializationError:
    message: str
    kind: SerializationErrorKind = SerializationErrorKind.INVALID_JSON
