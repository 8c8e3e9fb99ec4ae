"""Error kinds raised by the rules engine.

Every rejection leaves the board and game state untouched.  The game layer
raises these; :class:`~rookie.game.controller.GameController` turns them
into result values for callers that prefer not to handle exceptions.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-readable rejection reason."""

    INVALID_SQUARE = "invalid_square"
    NO_PIECE_AT_SOURCE = "no_piece_at_source"
    WRONG_TURN = "wrong_turn"
    ILLEGAL_MOVE = "illegal_move"
    NOTHING_TO_UNDO = "nothing_to_undo"
    MALFORMED_FEN = "malformed_fen"
    GAME_OVER = "game_over"


class RulesError(ValueError):
    """Base class for rejected operations."""

    kind: ErrorKind


class InvalidSquareError(RulesError):
    kind = ErrorKind.INVALID_SQUARE


class NoPieceAtSourceError(RulesError):
    kind = ErrorKind.NO_PIECE_AT_SOURCE


class WrongTurnError(RulesError):
    kind = ErrorKind.WRONG_TURN


class IllegalMoveError(RulesError):
    kind = ErrorKind.ILLEGAL_MOVE


class NothingToUndoError(RulesError):
    kind = ErrorKind.NOTHING_TO_UNDO


class MalformedFENError(RulesError):
    kind = ErrorKind.MALFORMED_FEN


class GameOverError(RulesError):
    kind = ErrorKind.GAME_OVER
