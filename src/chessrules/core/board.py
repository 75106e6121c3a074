"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, index_to_square, square_to_index

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class BoardInvariantError(RuntimeError):
    """The board violates a structural invariant (e.g. a king is missing)."""


class Board:
    """Immutable 8x8 grid, rank-major with rank 1 at index 0.

    Writes are copy-on-write at whole-board granularity: :meth:`with_piece`
    and :meth:`with_pieces` return a new board and leave ``self`` untouched.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        rank_index, file_index = square_to_index(sq)
        return self._cells[rank_index][file_index]

    def at(self, rank_index: int, file_index: int) -> Piece | None:
        return self._cells[rank_index][file_index]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def with_piece(self, sq: Square, piece: Piece | None) -> Board:
        """Copy of this board with *sq* set to *piece*."""
        return self.with_pieces({sq: piece})

    def with_pieces(self, changes: Mapping[Square, Piece | None]) -> Board:
        """Copy of this board with every square in *changes* overwritten."""
        b = self.copy()
        for sq, piece in changes.items():
            rank_index, file_index = square_to_index(sq)
            b._cells[rank_index][file_index] = piece
        return b

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, a1 first."""
        for rank_index, row in enumerate(self._cells):
            for file_index, piece in enumerate(row):
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                yield index_to_square(rank_index, file_index), piece

    def find_king(self, color: Color) -> Square | None:
        """Scan all 64 cells for *color*'s king."""
        for sq, piece in self.occupied(color):
            if piece.piece_type == PieceType.KING:
                return sq
        return None

    def king_square(self, color: Color) -> Square:
        """Return *color*'s king square; a missing king is fatal."""
        sq = self.find_king(color)
        if sq is None:
            raise BoardInvariantError(f"No {color.name.lower()} king on board")
        return sq

    def check_kings(self) -> None:
        """Raise ``ValueError`` unless each side has exactly one king."""
        for color in Color:
            kings = sum(
                1
                for _sq, piece in self.occupied(color)
                if piece.piece_type == PieceType.KING
            )
            if kings != 1:
                raise ValueError(
                    f"Board must hold exactly one {color.name.lower()} king, "
                    f"found {kings}"
                )

    def rows(self) -> list[list[Piece | None]]:
        """Nested-list copy of the grid, rank 1 first."""
        return [row.copy() for row in self._cells]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = [row.copy() for row in self._cells]
        return b

    # -- Factories ----------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b._cells[0][f] = Piece(Color.WHITE, pt)
            b._cells[1][f] = Piece(Color.WHITE, PieceType.PAWN)
            b._cells[6][f] = Piece(Color.BLACK, PieceType.PAWN)
            b._cells[7][f] = Piece(Color.BLACK, pt)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Piece | None]]) -> Board:
        """Build from an 8x8 rank-major grid."""
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Board must be 8x8")
        b = cls()
        b._cells = [list(row) for row in rows]
        return b

    @classmethod
    def from_pieces(cls, placement: Iterable[tuple[Square, Piece]]) -> Board:
        """Build from ``(square, piece)`` pairs; unlisted squares are empty."""
        return cls().with_pieces(dict(placement))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(tuple(tuple(row) for row in self._cells))

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank_index in range(7, -1, -1):
            row = [str(p) if p else "." for p in self._cells[rank_index]]
            rows.append(f"{rank_index + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
