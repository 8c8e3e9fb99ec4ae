"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookie.core.config import RulesConfig
from rookie.core.enums import Color, DrawReason, GameResult, PieceType
from rookie.core.move_generator import MoveGenerator
from rookie.core.types import is_light_square

if TYPE_CHECKING:
    from rookie.core.position import Position

_MATING_MATERIAL = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)
_MINORS = (PieceType.BISHOP, PieceType.KNIGHT)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Every draw condition ends the game automatically; nothing is claimable.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position, config: RulesConfig | None = None) -> bool:
        if not Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position, config)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_stalemate(position: Position, config: RulesConfig | None = None) -> bool:
        if Rules.is_in_check(position):
            return False
        gen = MoveGenerator(position, config)
        return len(gen.generate_legal_moves()) == 0

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        minors: list[tuple[Color, PieceType, bool]] = []
        total = 0
        for sq, piece in position.board.occupied():
            total += 1
            if piece.piece_type in _MATING_MATERIAL:
                return False
            if piece.piece_type in _MINORS:
                minors.append((piece.color, piece.piece_type, is_light_square(sq)))

        # K vs K
        if total == 2:
            return True

        # K+minor vs K
        if total == 3:
            return len(minors) == 1

        # K+B vs K+B with same-colour bishops
        if total == 4 and len(minors) == 2:
            (c1, t1, light1), (c2, t2, light2) = minors
            return (
                c1 != c2
                and t1 == t2 == PieceType.BISHOP
                and light1 == light2
            )

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def draw_reason(
        position: Position,
        config: RulesConfig | None = None,
        *,
        has_legal_moves: bool | None = None,
    ) -> DrawReason:
        """First draw condition that holds, or ``DrawReason.NONE``."""
        config = config if config is not None else RulesConfig()
        if has_legal_moves is None:
            has_legal_moves = bool(
                MoveGenerator(position, config).generate_legal_moves()
            )
        if not has_legal_moves:
            if Rules.is_in_check(position):
                return DrawReason.NONE
            return DrawReason.STALEMATE
        if config.fifty_move_rule and Rules.is_fifty_move_rule(position):
            return DrawReason.FIFTY_MOVE
        if Rules.is_insufficient_material(position):
            return DrawReason.INSUFFICIENT_MATERIAL
        if config.threefold_repetition and Rules.is_threefold_repetition(position):
            return DrawReason.THREEFOLD_REPETITION
        return DrawReason.NONE

    @staticmethod
    def game_result(
        position: Position, config: RulesConfig | None = None
    ) -> GameResult:
        """Determine the current game result."""
        gen = MoveGenerator(position, config)
        legal_moves = gen.generate_legal_moves()

        if not legal_moves and gen.is_in_check(position.side_to_move):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )

        reason = Rules.draw_reason(
            position, config, has_legal_moves=bool(legal_moves)
        )
        if reason != DrawReason.NONE:
            return GameResult.DRAW

        return GameResult.IN_PROGRESS
