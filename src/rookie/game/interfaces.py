"""Abstract interfaces and result types for the game layer.

Collaborators (board renderer, move advisor, persistence) depend on
:class:`IGameController` and the result values below, never on the
concrete state machine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from rookie.core.errors import ErrorKind, RulesError

if TYPE_CHECKING:
    from rookie.core.config import RulesConfig
    from rookie.core.enums import PieceType
    from rookie.core.types import Square
    from rookie.game.state import GameState, MoveRecord


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Derived status of the side to move."""

    ACTIVE = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.CHECKMATE, GamePhase.STALEMATE, GamePhase.DRAW)


# ── Result values ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Verdict on a submitted move plus the flags of the resulting state.

    When ``legal`` is false nothing changed and ``error`` says why.
    """

    legal: bool
    record: MoveRecord | None = None
    check: bool = False
    checkmate: bool = False
    stalemate: bool = False
    draw: bool = False
    error: ErrorKind | None = None
    message: str = ""

    @classmethod
    def applied(cls, record: MoveRecord, state: GameState) -> MoveResult:
        return cls(
            legal=True,
            record=record,
            check=state.check,
            checkmate=state.checkmate,
            stalemate=state.stalemate,
            draw=state.draw,
        )

    @classmethod
    def rejected(cls, exc: RulesError, state: GameState) -> MoveResult:
        return cls(
            legal=False,
            check=state.check,
            checkmate=state.checkmate,
            stalemate=state.stalemate,
            draw=state.draw,
            error=exc.kind,
            message=str(exc),
        )


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Success or failure of undo / FEN load."""

    ok: bool
    error: ErrorKind | None = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> OperationResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, exc: RulesError) -> OperationResult:
        return cls(ok=False, error=exc.kind, message=str(exc))


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveResult:
        """Try a move; the result says whether it was applied."""

    @abstractmethod
    def legal_destinations(self, square: Square) -> list[Square]:
        """Squares the piece on *square* may legally move to."""

    @abstractmethod
    def export_fen(self) -> str:
        """Current position as FEN."""

    @abstractmethod
    def load_fen(self, fen: str) -> OperationResult:
        """Replace the game with the position described by *fen*."""

    @abstractmethod
    def undo_move(self) -> OperationResult:
        """Take back the last move."""

    @abstractmethod
    def reset(self, config: RulesConfig | None = None) -> None:
        """Start over from the initial position."""

    @abstractmethod
    def game_result(self) -> str | None:
        """``"1-0"``, ``"0-1"``, ``"1/2-1/2"`` or ``None`` while in progress."""
