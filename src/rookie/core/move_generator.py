"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookie.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_square_attacked,
)
from rookie.core.board import Board
from rookie.core.config import RulesConfig
from rookie.core.enums import CastlingRights, Color, MoveType, PieceType
from rookie.core.move import PROMOTION_TYPES, Move
from rookie.core.piece import Piece
from rookie.core.types import ALL_SQUARES, Square, in_bounds

if TYPE_CHECKING:
    from rookie.core.position import Position


_DEFAULT_CONFIG = RulesConfig()

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


def _sq(row: int, col: int) -> Square:
    return ALL_SQUARES[row * 8 + col]


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    Pseudo-legal generation never looks at the mover's own king safety;
    :meth:`generate_legal_moves` filters by replaying each candidate on a
    private board copy, so the position itself is never touched.
    """

    __slots__ = ("_pos", "_board", "_config")

    def __init__(self, position: Position, config: RulesConfig | None = None) -> None:
        self._pos = position
        self._board = position.board
        self._config = config if config is not None else _DEFAULT_CONFIG

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color* (default: side to move)."""
        if color is None:
            color = self._pos.side_to_move
        return [
            move
            for move in self.generate_pseudo_legal_moves(color)
            if not self.leaves_king_attacked(move, color)
        ]

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty if none or off-board)."""
        if not in_bounds(sq):
            return []
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            move
            for move in self.moves_for(sq, piece)
            if not self.leaves_king_attacked(move, piece.color)
        ]

    def legal_moves_to(self, sq: Square, color: Color | None = None) -> list[Move]:
        """Legal moves for *color* (default: side to move) that land on *sq*."""
        return [m for m in self.generate_legal_moves(color) if m.to_sq == sq]

    def generate_pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        if color is None:
            color = self._pos.side_to_move
        moves: list[Move] = []
        for sq, piece in self._board.occupied():
            if piece.color == color:
                moves.extend(self.moves_for(sq, piece))
        return moves

    def moves_for(self, sq: Square, piece: Piece) -> list[Move]:
        """Pseudo-legal moves of *piece* standing on *sq*."""
        moves: list[Move] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_stepper(sq, piece.color, KNIGHT_TARGETS[sq.index], moves)
        elif ptype == PieceType.KING:
            self._gen_stepper(sq, piece.color, KING_TARGETS[sq.index], moves)
            self._gen_castling(sq, piece.color, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_RAYS[ptype][sq.index], moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return is_square_attacked(self._board, king_sq, color)

    def is_square_attacked(self, sq: Square, defender: Color) -> bool:
        """Is *sq* attacked by the side opposing *defender*?"""
        return is_square_attacked(self._board, sq, defender)

    # -- Legality filter ----------------------------------------------------

    def leaves_king_attacked(self, move: Move, color: Color) -> bool:
        """Would *color*'s king be attacked after *move*?

        The move is replayed on a copy of the board; promotion is skipped
        because the promoted piece blocks exactly like the pawn did.
        """
        board = self._board.copy()
        self._play_geometry(board, move)
        king_sq = board.find_king(color)
        if king_sq is None:
            return False
        return is_square_attacked(board, king_sq, color)

    @staticmethod
    def _play_geometry(board: Board, move: Move) -> None:
        if move.move_type == MoveType.EN_PASSANT:
            board[move.capture_square] = None
        elif move.move_type.is_castling:
            rook_from, rook_to = move.rook_squares()
            board.move_piece(rook_from, rook_to)
        board.move_piece(move.from_sq, move.to_sq)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = color.pawn_direction
        last_row = 0 if color == Color.WHITE else 7
        start_row = 6 if color == Color.WHITE else 1

        one_step = sq.offset(step, 0)
        if board.is_empty(one_step):
            if one_step.row == last_row:
                self._add_promotions(sq, one_step, moves)
            else:
                moves.append(Move(sq, one_step))
                if sq.row == start_row and self._config.pawn_double_move:
                    two_step = sq.offset(2 * step, 0)
                    if board.is_empty(two_step):
                        moves.append(Move(sq, two_step, MoveType.PAWN_DOUBLE))

        for dcol in (-1, 1):
            cap_sq = sq.offset(step, dcol)
            if not in_bounds(cap_sq):
                continue
            if board.is_opponent_piece(cap_sq, color):
                if cap_sq.row == last_row:
                    self._add_promotions(sq, cap_sq, moves)
                else:
                    moves.append(Move(sq, cap_sq, MoveType.CAPTURE))
            elif self._is_en_passant_target(sq, cap_sq, color):
                moves.append(Move(sq, cap_sq, MoveType.EN_PASSANT))

    def _is_en_passant_target(self, sq: Square, cap_sq: Square, color: Color) -> bool:
        if not self._config.en_passant or cap_sq != self._pos.en_passant:
            return False
        # The target only ever belongs to the side to move.
        if color != self._pos.side_to_move or not self._board.is_empty(cap_sq):
            return False
        victim = self._board[Square(sq.row, cap_sq.col)]
        return victim is not None and victim.is_a(color.opposite, PieceType.PAWN)

    @staticmethod
    def _add_promotions(from_sq: Square, to_sq: Square, moves: list[Move]) -> None:
        for pt in PROMOTION_TYPES:
            moves.append(Move(from_sq, to_sq, MoveType.PROMOTION, pt))

    def _gen_stepper(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, MoveType.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, MoveType.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        if not self._config.castling:
            return
        row = color.home_row
        if king_sq != _sq(row, 4):
            return

        rights = self._pos.castling
        kingside = bool(rights & CastlingRights.kingside(color))
        queenside = bool(rights & CastlingRights.queenside(color))
        if not (kingside or queenside):
            return
        if self.is_square_attacked(king_sq, color):
            return

        board = self._board
        if (
            kingside
            and self._home_rook(row, 7, color)
            and board.is_empty(_sq(row, 5))
            and board.is_empty(_sq(row, 6))
            and not self.is_square_attacked(_sq(row, 5), color)
            and not self.is_square_attacked(_sq(row, 6), color)
        ):
            moves.append(Move(king_sq, _sq(row, 6), MoveType.CASTLE_KINGSIDE))

        if (
            queenside
            and self._home_rook(row, 0, color)
            and board.is_empty(_sq(row, 1))
            and board.is_empty(_sq(row, 2))
            and board.is_empty(_sq(row, 3))
            and not self.is_square_attacked(_sq(row, 3), color)
            and not self.is_square_attacked(_sq(row, 2), color)
        ):
            moves.append(Move(king_sq, _sq(row, 2), MoveType.CASTLE_QUEENSIDE))

    def _home_rook(self, row: int, col: int, color: Color) -> bool:
        rook = self._board[_sq(row, col)]
        return rook is not None and rook.is_a(color, PieceType.ROOK)
