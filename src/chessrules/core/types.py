"""Square value type and coordinate helpers.

Board layout is rank-major with rank 1 first::

    (rank_index 0, file_index 0) = a1 ... (0, 7) = h1
    ...
    (rank_index 7, file_index 0) = a8 ... (7, 7) = h8
"""

from __future__ import annotations

from dataclasses import dataclass

FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Square:
    """A board square, e.g. ``Square("e", 4)``."""

    file: str
    rank: int

    def __post_init__(self) -> None:
        if (
            not isinstance(self.file, str)
            or len(self.file) != 1
            or self.file not in FILES
        ):
            raise ValueError(f"Invalid file: {self.file!r}")
        if isinstance(self.rank, bool) or not isinstance(self.rank, int):
            raise ValueError(f"Invalid rank: {self.rank!r}")
        if not 1 <= self.rank <= 8:
            raise ValueError(f"Invalid rank: {self.rank!r}")

    @property
    def name(self) -> str:
        return f"{self.file}{self.rank}"

    @property
    def file_index(self) -> int:
        return FILES.index(self.file)

    @property
    def rank_index(self) -> int:
        return self.rank - 1

    def __str__(self) -> str:
        return self.name


def square_to_index(sq: Square) -> tuple[int, int]:
    """``(rank_index, file_index)``, both 0–7."""
    return sq.rank - 1, FILES.index(sq.file)


def index_to_square(rank_index: int, file_index: int) -> Square:
    """Inverse of :func:`square_to_index`."""
    if not is_valid_index(rank_index, file_index):
        raise ValueError(f"Index out of range: ({rank_index}, {file_index})")
    return Square(FILES[file_index], rank_index + 1)


def is_valid_index(rank_index: int, file_index: int) -> bool:
    """Whether both indices lie on the board."""
    return 0 <= rank_index < 8 and 0 <= file_index < 8


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4'."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(name[0], int(name[1]))


def square_color(sq: Square) -> int:
    """Parity of rank index + file index; equal values mean same-colored squares."""
    rank_index, file_index = square_to_index(sq)
    return (rank_index + file_index) % 2


ALL_SQUARES: tuple[Square, ...] = tuple(
    index_to_square(r, f) for r in range(8) for f in range(8)
)

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[56:64]
