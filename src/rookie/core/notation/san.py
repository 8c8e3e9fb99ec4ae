"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from rookie.core.enums import MoveType, PieceType
from rookie.core.move import Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.position import Position
from rookie.core.types import parse_square

_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_BY_LETTER: dict[str, PieceType] = {letter: pt for pt, letter in _LETTERS.items()}
_FILES = "abcdefgh"

_SAN_RE = re.compile(
    r"""
    ^(?P<piece>[NBRQK])?
    (?P<file>[a-h])?
    (?P<rank>[1-8])?
    x?
    (?P<dest>[a-h][1-8])
    (?:=(?P<promo>[NBRQ]))?$
    """,
    re.VERBOSE,
)
_CASTLES: dict[str, MoveType] = {
    "O-O": MoveType.CASTLE_KINGSIDE,
    "0-0": MoveType.CASTLE_KINGSIDE,
    "O-O-O": MoveType.CASTLE_QUEENSIDE,
    "0-0-0": MoveType.CASTLE_QUEENSIDE,
}


def _disambiguator(position: Position, move: Move, piece_type: PieceType) -> str:
    """File, rank or full square needed to tell *move* apart from rivals."""
    board = position.board
    rivals = []
    for other in MoveGenerator(position).legal_moves_to(move.to_sq):
        if other.from_sq == move.from_sq:
            continue
        rival = board[other.from_sq]
        if rival is not None and rival.piece_type == piece_type:
            rivals.append(other.from_sq)
    if not rivals:
        return ""
    origin = move.from_sq
    if all(sq.col != origin.col for sq in rivals):
        return _FILES[origin.col]
    if all(sq.row != origin.row for sq in rivals):
        return str(origin.rank)
    return origin.name


def _check_suffix(position: Position, move: Move) -> str:
    position.make_move(move)
    try:
        gen = MoveGenerator(position)
        if not gen.is_in_check(position.side_to_move):
            return ""
        return "+" if gen.generate_legal_moves() else "#"
    finally:
        position.unmake_move()


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    piece = position.board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq}")

    if move.move_type == MoveType.CASTLE_KINGSIDE:
        body = "O-O"
    elif move.move_type == MoveType.CASTLE_QUEENSIDE:
        body = "O-O-O"
    else:
        takes = (
            move.move_type == MoveType.EN_PASSANT
            or position.board[move.to_sq] is not None
        )
        if piece.piece_type == PieceType.PAWN:
            prefix = _FILES[move.from_sq.col] if takes else ""
        else:
            prefix = _LETTERS[piece.piece_type] + _disambiguator(
                position, move, piece.piece_type
            )
        body = f"{prefix}{'x' if takes else ''}{move.to_sq.name}"
        if move.is_promotion:
            body += "=" + _LETTERS[move.promotion or PieceType.QUEEN]

    return body + _check_suffix(position, move)


def parse_san(position: Position, san: str) -> Move:
    """Resolve *san* to the matching legal move in *position*.

    A pawn reaching the last rank without ``=X`` promotes to a queen.

    Raises:
        ValueError: The text is malformed, illegal here, or ambiguous.
    """
    text = san.strip().rstrip("+#!?")
    legal = MoveGenerator(position).generate_legal_moves()

    castle = _CASTLES.get(text)
    if castle is not None:
        for move in legal:
            if move.move_type == castle:
                return move
        raise ValueError(f"Illegal move: {san}")

    match = _SAN_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid SAN: {san}")

    letter = match["piece"]
    piece_type = _BY_LETTER[letter] if letter else PieceType.PAWN
    dest = parse_square(match["dest"])
    from_col = _FILES.index(match["file"]) if match["file"] else None
    from_rank = int(match["rank"]) if match["rank"] else None
    promotion = _BY_LETTER[match["promo"]] if match["promo"] else PieceType.QUEEN
    if piece_type == PieceType.PAWN and from_col is None:
        # A pawn without a file prefix is a push.
        from_col = dest.col

    board = position.board
    candidates: list[Move] = []
    for move in legal:
        if move.to_sq != dest:
            continue
        mover = board[move.from_sq]
        if mover is None or mover.piece_type != piece_type:
            continue
        if move.is_promotion and move.promotion != promotion:
            continue
        if from_col is not None and move.from_sq.col != from_col:
            continue
        if from_rank is not None and move.from_sq.rank != from_rank:
            continue
        candidates.append(move)

    if not candidates:
        raise ValueError(f"Illegal move: {san}")
    if len(candidates) > 1:
        raise ValueError(f"Ambiguous move: {san}")
    return candidates[0]
