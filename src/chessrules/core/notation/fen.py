"""FEN parsing and serialization, and the FEN-derived position key."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color
from chessrules.core.executor import en_passant_rank
from chessrules.core.piece import Piece
from chessrules.core.state import CastlingRights, GameState
from chessrules.core.types import Square, index_to_square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, str], ...] = (
    ("K", "white_kingside"),
    ("Q", "white_queenside"),
    ("k", "black_kingside"),
    ("q", "black_queenside"),
)


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState` with empty histories.

    The returned state has no position history; callers that start a game
    from it append the initial :func:`position_key` themselves.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    pieces: dict[Square, Piece | None] = {}
    for row_idx, rank_text in enumerate(ranks):
        rank_index = 7 - row_idx
        file_index = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file_index += step
            else:
                if file_index >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                pieces[index_to_square(rank_index, file_index)] = Piece.from_char(ch)
                file_index += 1
            if file_index > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file_index != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    board = Board.empty().with_pieces(pieces)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    flags = {attr: False for _, attr in _CASTLING_CHARS}
    if castling_part != "-":
        known = dict(_CASTLING_CHARS)
        for ch in castling_part:
            attr = known.get(ch)
            if attr is None or flags[attr]:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            flags[attr] = True
    castling = CastlingRights(**flags)

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        if ep.rank != en_passant_rank(side):
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")

    # 5-6. Clocks
    try:
        halfmove = int(parts[4]) if len(parts) > 4 else 0
        fullmove = int(parts[5]) if len(parts) > 5 else 1
    except ValueError:
        raise ValueError(f"Invalid FEN move counters: {fen!r}") from None
    if halfmove < 0 or fullmove < 1:
        raise ValueError(f"Invalid FEN move counters: {fen!r}")

    return GameState(
        board=board,
        current_player=side,
        castling_rights=castling,
        en_passant_target=ep,
        half_move_clock=halfmove,
        full_move_number=fullmove,
    )


def _placement(board: Board) -> str:
    rows: list[str] = []
    for rank_index in range(7, -1, -1):
        empty = 0
        row = ""
        for file_index in range(8):
            piece = board.at(rank_index, file_index)
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def position_key(state: GameState) -> str:
    """First four FEN fields: placement, side, castling, en passant.

    Two states share a key exactly when board, side to move, castling rights
    and en-passant target all match.
    """
    castling = "".join(
        ch for ch, attr in _CASTLING_CHARS if getattr(state.castling_rights, attr)
    )
    ep = state.en_passant_target.name if state.en_passant_target else "-"
    side = "w" if state.current_player == Color.WHITE else "b"
    return f"{_placement(state.board)} {side} {castling or '-'} {ep}"


def state_to_fen(state: GameState) -> str:
    """Serialize *state* to a full six-field FEN string."""
    return f"{position_key(state)} {state.half_move_clock} {state.full_move_number}"
