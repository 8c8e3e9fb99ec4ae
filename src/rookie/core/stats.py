"""Material counts and captured-piece tallies."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from rookie.core.board import Board
from rookie.core.enums import Color, PieceType
from rookie.core.piece import Piece

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}


@dataclass(slots=True, frozen=True)
class SideMaterial:
    """Piece count and material value for one side, plus what it has taken."""

    pieces: int
    value: int
    captured: dict[PieceType, int] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class GameStats:
    """Snapshot of board material plus game progress."""

    white: SideMaterial
    black: SideMaterial
    move_number: int
    halfmove_clock: int
    in_check: bool
    game_over: bool
    result: str | None

    @property
    def total_pieces(self) -> int:
        return self.white.pieces + self.black.pieces

    @property
    def material_balance(self) -> int:
        """White's material minus Black's."""
        return self.white.value - self.black.value

    def side(self, color: Color) -> SideMaterial:
        return self.white if color == Color.WHITE else self.black


def material_value(pieces: Iterable[Piece]) -> int:
    return sum(PIECE_VALUES[p.piece_type] for p in pieces)


def side_material(
    board: Board, color: Color, captured: Iterable[Piece] = ()
) -> SideMaterial:
    """Count *color*'s pieces on *board*; *captured* are the pieces it took."""
    own = [piece for _, piece in board.occupied() if piece.color == color]
    return SideMaterial(
        pieces=len(own),
        value=material_value(own),
        captured=captured_tally(captured),
    )


def captured_tally(pieces: Iterable[Piece]) -> dict[PieceType, int]:
    """How many of each piece type are in *pieces*, in value order."""
    tally = {pt: 0 for pt in PieceType if pt != PieceType.KING}
    for piece in pieces:
        tally[piece.piece_type] = tally.get(piece.piece_type, 0) + 1
    return tally
