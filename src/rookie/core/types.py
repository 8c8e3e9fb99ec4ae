"""Square value type and coordinate helpers.

Board layout (row-major, rank 8 first):
    row 0 = rank 8, row 7 = rank 1
    col 0 = file a, col 7 = file h

so ``Square(0, 0)`` is a8 and ``Square(7, 4)`` is e1.  The flat index used
by :class:`~rookie.core.board.Board` is ``row * 8 + col``.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Square:
    """A board coordinate.  Off-board values are representable on purpose."""

    row: int
    col: int

    @property
    def index(self) -> int:
        """Flat 0-63 index (only meaningful when :func:`in_bounds`)."""
        return self.row * 8 + self.col

    @property
    def rank(self) -> int:
        """Chess rank number 1-8."""
        return 8 - self.row

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(4, 4)`` → ``'e4'``."""
        return _FILES[self.col] + str(self.rank)

    def offset(self, drow: int, dcol: int) -> Square:
        return Square(self.row + drow, self.col + dcol)

    def __str__(self) -> str:
        if not in_bounds(self):
            return f"({self.row}, {self.col})"
        return self.name


def in_bounds(sq: Square) -> bool:
    """Whether *sq* lies on the 8x8 board."""
    return 0 <= sq.row < 8 and 0 <= sq.col < 8


def square_at(index: int) -> Square:
    """Square for a flat 0-63 index."""
    return ALL_SQUARES[index]


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. a8 for ``Square(0, 0)``."""
    return sq.name


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), _FILES.index(name[0]))


def is_light_square(sq: Square) -> bool:
    """a8 and h1 are light squares."""
    return (sq.row + sq.col) % 2 == 0


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
