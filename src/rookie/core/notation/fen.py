"""FEN parsing and serialization."""

from __future__ import annotations

from rookie.core.attacks import is_square_attacked
from rookie.core.board import Board
from rookie.core.enums import CastlingRights, Color, PieceType
from rookie.core.errors import MalformedFENError
from rookie.core.piece import Piece
from rookie.core.position import Position
from rookie.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_counter(text: str, name: str, minimum: int) -> int:
    if not (text.isascii() and text.isdigit()):
        raise MalformedFENError(f"Invalid FEN {name}: {text!r}")
    value = int(text)
    if value < minimum:
        raise MalformedFENError(f"Invalid FEN {name}: {text!r}")
    return value


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedFENError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch in "12345678":
                col += int(ch)
            else:
                if col >= 8:
                    raise MalformedFENError(f"Invalid FEN rank width: {fen!r}")
                try:
                    # FEN carries no move history; treat everything as moved.
                    board[Square(row, col)] = Piece.from_char(ch, has_moved=True)
                except ValueError:
                    raise MalformedFENError(
                        f"Invalid FEN piece {ch!r}: {fen!r}"
                    ) from None
                col += 1
            if col > 8:
                raise MalformedFENError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise MalformedFENError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        if len(board.pieces(color, PieceType.KING)) != 1:
            raise MalformedFENError(
                f"Invalid FEN: {color} must have exactly one king: {fen!r}"
            )
    return board


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Raises:
        MalformedFENError: The text is not a structurally valid FEN record.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise MalformedFENError(f"Invalid FEN (need 6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedFENError(f"Invalid FEN side-to-move field: {side_part!r}")

    waiting = side.opposite
    if is_square_attacked(board, board.king_square(waiting), waiting):
        raise MalformedFENError(
            f"Invalid FEN: {waiting} is in check with {side} to move: {fen!r}"
        )

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise MalformedFENError(
                    f"Invalid FEN castling field: {castling_part!r}"
                )
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedFENError(
                f"Invalid FEN en-passant square: {ep_part!r}"
            ) from None
        expected_rank = 6 if side == Color.WHITE else 3
        if ep.rank != expected_rank:
            raise MalformedFENError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5-6. Clocks
    halfmove = _parse_counter(half_part, "halfmove clock", 0)
    fullmove = _parse_counter(full_part, "fullmove number", 1)

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = pos.board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = pos.en_passant.name if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
