"""Attack detection with precomputed offset and ray tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookie.core.enums import Color, PieceType
from rookie.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from rookie.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in ALL_SQUARES:
        moves: list[Square] = []
        for dr, dc in offsets:
            r = sq.row + dr
            c = sq.col + dc
            if 0 <= r < 8 and 0 <= c < 8:
                moves.append(ALL_SQUARES[r * 8 + c])
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r = sq.row + dr
            c = sq.col + dc
            ray: list[Square] = []
            while 0 <= r < 8 and 0 <= c < 8:
                ray.append(ALL_SQUARES[r * 8 + c])
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attackers() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[attacker color][target index] -> squares a pawn must stand on."""
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for color in Color:
        # A pawn attacks one row ahead of itself, so it sits one row behind.
        dr = -color.pawn_direction
        per_color.append(_build_targets(((dr, -1), (dr, 1))))
    return tuple(per_color)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)
_PAWN_ATTACKERS = _build_pawn_attackers()


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    attacker: Color,
    kinds: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for sq in ray:
            piece = board[sq]
            if piece is None:
                continue
            if piece.color == attacker and piece.piece_type in kinds:
                return True
            break
    return False


def is_square_attacked(board: Board, sq: Square, defender: Color) -> bool:
    """Is *sq* attacked by any piece of the side opposing *defender*?

    Checks pawns, knights, sliders, then the king, returning on the first hit.
    """
    attacker = defender.opposite
    idx = sq.index

    for from_sq in _PAWN_ATTACKERS[attacker][idx]:
        piece = board[from_sq]
        if piece is not None and piece.is_a(attacker, PieceType.PAWN):
            return True

    for from_sq in KNIGHT_TARGETS[idx]:
        piece = board[from_sq]
        if piece is not None and piece.is_a(attacker, PieceType.KNIGHT):
            return True

    if _ray_hits(board, BISHOP_RAYS[idx], attacker, _DIAGONAL_SLIDERS):
        return True
    if _ray_hits(board, ROOK_RAYS[idx], attacker, _ORTHOGONAL_SLIDERS):
        return True

    for from_sq in KING_TARGETS[idx]:
        piece = board[from_sq]
        if piece is not None and piece.is_a(attacker, PieceType.KING):
            return True

    return False
