"""Position keys for repetition detection.

A key is the XOR of one random word per (piece, square) pair plus words
for Black to move, the castling-rights value and "en passant available".
``has_moved`` and the exact target square are not part of it.
"""

from __future__ import annotations

import random
from typing import Final

from rookie.core.enums import CastlingRights
from rookie.core.piece import Piece
from rookie.core.types import Square

# 12 piece kinds x 64 squares, then side, 16 castling states, en passant.
_SIDE: Final = 12 * 64
_CASTLING: Final = _SIDE + 1
_EN_PASSANT: Final = _CASTLING + 16

_rng = random.Random(0x5EED_C0DE)
_KEYS: Final[tuple[int, ...]] = tuple(
    _rng.getrandbits(64) for _ in range(_EN_PASSANT + 1)
)
del _rng


def piece_key(piece: Piece, sq: Square) -> int:
    kind = int(piece.color) * 6 + int(piece.piece_type) - 1
    return _KEYS[kind * 64 + sq.index]


def side_to_move_key() -> int:
    """Toggled in while Black is to move."""
    return _KEYS[_SIDE]


def castling_key(castling: CastlingRights) -> int:
    return _KEYS[_CASTLING + (int(castling) & 0xF)]


def en_passant_key() -> int:
    return _KEYS[_EN_PASSANT]
