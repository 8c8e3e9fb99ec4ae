"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from rookie.core import Position, MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from rookie.core.attacks import is_square_attacked
from rookie.core.board import Board
from rookie.core.config import RulesConfig
from rookie.core.enums import (
    CastlingRights,
    Color,
    DrawReason,
    GameResult,
    MoveType,
    PieceType,
)
from rookie.core.errors import (
    ErrorKind,
    GameOverError,
    IllegalMoveError,
    InvalidSquareError,
    MalformedFENError,
    NoPieceAtSourceError,
    NothingToUndoError,
    RulesError,
    WrongTurnError,
)
from rookie.core.move import Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from rookie.core.piece import Piece
from rookie.core.position import Position
from rookie.core.rules import Rules
from rookie.core.types import (
    Square,
    in_bounds,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameResult",
    "MoveType",
    "PieceType",
    # Types / helpers
    "Square",
    "in_bounds",
    "parse_square",
    "square_name",
    # Errors
    "ErrorKind",
    "GameOverError",
    "IllegalMoveError",
    "InvalidSquareError",
    "MalformedFENError",
    "NoPieceAtSourceError",
    "NothingToUndoError",
    "RulesError",
    "WrongTurnError",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "RulesConfig",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
