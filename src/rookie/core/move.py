"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from rookie.core.enums import MoveType, PieceType
from rookie.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move."""

    from_sq: Square
    to_sq: Square
    move_type: MoveType = MoveType.NORMAL
    promotion: PieceType | None = None

    @property
    def is_promotion(self) -> bool:
        return self.move_type == MoveType.PROMOTION

    @property
    def capture_square(self) -> Square:
        """Square emptied by a capture; beside the origin for en passant."""
        if self.move_type == MoveType.EN_PASSANT:
            return Square(self.from_sq.row, self.to_sq.col)
        return self.to_sq

    def rook_squares(self) -> tuple[Square, Square]:
        """``(rook_from, rook_to)`` of a castling move."""
        row = self.from_sq.row
        if self.move_type == MoveType.CASTLE_KINGSIDE:
            return Square(row, 7), Square(row, 5)
        if self.move_type == MoveType.CASTLE_QUEENSIDE:
            return Square(row, 0), Square(row, 3)
        raise ValueError(f"Not a castling move: {self}")

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
