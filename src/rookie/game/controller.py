"""GameController, the caller-facing facade over :class:`GameState`.

Turns domain exceptions into result values and emits events via simple
callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookie.core.config import RulesConfig
from rookie.core.enums import PieceType
from rookie.core.errors import (
    IllegalMoveError,
    InvalidSquareError,
    MalformedFENError,
    NothingToUndoError,
    RulesError,
)
from rookie.core.piece import Piece
from rookie.core.stats import GameStats
from rookie.core.types import Square, parse_square
from rookie.game.interfaces import IGameController, MoveResult, OperationResult
from rookie.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
UndoCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[str], None]  # result token


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies moves, and notifies listeners.

    Never raises for bad input: every rejection comes back as a
    :class:`MoveResult` or :class:`OperationResult` with the state untouched.
    """

    __slots__ = ("_state", "events")

    def __init__(self, config: RulesConfig | None = None) -> None:
        self._state = GameState(config or RulesConfig())
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> RulesConfig:
        return self._state.config

    # ── IGameController impl ─────────────────────────────────────────────

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveResult:
        try:
            record = self._state.apply_move(from_sq, to_sq, promotion)
        except RulesError as exc:
            _LOGGER.debug("Move %s -> %s rejected: %s", from_sq, to_sq, exc)
            return MoveResult.rejected(exc, self._state)

        self._emit_move(record)
        phase = self._state.phase
        if phase.is_terminal:
            token = self._state.game_result()
            _LOGGER.info("Game over: %s (%s)", token, phase.name.lower())
            self._emit_game_over(token)
        return MoveResult.applied(record, self._state)

    def submit_uci(self, text: str) -> MoveResult:
        """Submit a move written as ``e2e4`` / ``e7e8q``."""
        text = text.strip().lower()
        try:
            if len(text) not in (4, 5):
                raise InvalidSquareError(f"Malformed move text: {text!r}")
            try:
                from_sq = parse_square(text[0:2])
                to_sq = parse_square(text[2:4])
            except ValueError as exc:
                raise InvalidSquareError(str(exc)) from exc
            promotion: PieceType | None = None
            if len(text) == 5:
                try:
                    promotion = Piece.from_char(text[4]).piece_type
                except ValueError as exc:
                    raise IllegalMoveError(f"Bad promotion piece: {text[4]!r}") from exc
        except RulesError as exc:
            _LOGGER.debug("Move text %r rejected: %s", text, exc)
            return MoveResult.rejected(exc, self._state)
        return self.submit_move(from_sq, to_sq, promotion)

    def legal_destinations(self, square: Square) -> list[Square]:
        return self._state.legal_destinations(square)

    def export_fen(self) -> str:
        return self._state.export_fen()

    def load_fen(self, fen: str) -> OperationResult:
        try:
            self._state.load_fen(fen)
        except MalformedFENError as exc:
            _LOGGER.warning("Rejected FEN %r: %s", fen, exc)
            return OperationResult.failure(exc)
        return OperationResult.success()

    def undo_move(self) -> OperationResult:
        try:
            record = self._state.undo_move()
        except NothingToUndoError as exc:
            _LOGGER.debug("Undo rejected: %s", exc)
            return OperationResult.failure(exc)
        self._emit_undo(record)
        return OperationResult.success()

    def reset(self, config: RulesConfig | None = None) -> None:
        self._state.reset(config)

    def game_result(self) -> str | None:
        return self._state.game_result()

    # ── Extras ───────────────────────────────────────────────────────────

    def export_pgn(self, headers: dict[str, str] | None = None) -> str:
        return self._state.export_pgn(headers)

    def stats(self) -> GameStats:
        return self._state.stats()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_undo(self, record: MoveRecord) -> None:
        for cb in self.events.on_undo:
            cb(record, self._state)

    def _emit_game_over(self, token: str | None) -> None:
        if token is None:
            return
        for cb in self.events.on_game_over:
            cb(token)
