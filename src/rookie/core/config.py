"""Rule toggles handed to the game at construction or reset."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Immutable set of optional-rule switches.

    Args:
        en_passant: Allow en-passant captures.
        castling: Allow castling moves.
        pawn_double_move: Allow the two-square first pawn advance.
        auto_queen_promotion: Promote to a queen when no piece is chosen.
            When off, a promotion without an explicit choice is illegal.
        fifty_move_rule: End the game drawn at 100 half-moves without a
            capture or pawn move.
        threefold_repetition: End the game drawn on the third occurrence of
            a position.
    """

    en_passant: bool = True
    castling: bool = True
    pawn_double_move: bool = True
    auto_queen_promotion: bool = True
    fifty_move_rule: bool = True
    threefold_repetition: bool = True

    @classmethod
    def standard(cls) -> RulesConfig:
        """Every rule enabled."""
        return cls()

    def with_overrides(self, **changes: Any) -> RulesConfig:
        """Copy with the given fields changed, e.g. ``castling=False``."""
        return replace(self, **changes)
