"""Position: complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from rookie.core.board import Board
from rookie.core.enums import CastlingRights, Color, MoveType, PieceType
from rookie.core.move import Move
from rookie.core.piece import Piece
from rookie.core.types import Square
from rookie.core import zobrist


@dataclass(frozen=True, slots=True)
class _PositionState:
    """Diff saved before each move so we can undo it exactly."""

    move: Move
    moved_piece: Piece
    captured_piece: Piece | None
    castling_rook: Piece | None
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Supports :meth:`make_move` / :meth:`unmake_move` via an internal history
    stack (Command pattern).  Each history entry keeps the original piece
    objects, so unmaking restores the board cell for cell, ``has_moved``
    flags included.  Position keys are counted for repetition detection;
    the starting position counts as the first occurrence.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_zobrist_hash",
        "_history",
        "_key_stack",
        "_key_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._zobrist_hash = self._compute_zobrist_hash()
        self._history: list[_PositionState] = []
        key = self._zobrist_hash
        self._key_stack: list[int] = [key]
        self._key_counts: dict[int, int] = {key: 1}

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> Piece | None:
        """Apply *move*, pushing undo state onto the history stack.

        The move must be pseudo-legal here; no legality check is done.
        Returns the captured piece, if any.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.capture_square
        captured = board[capture_sq]

        rook: Piece | None = None
        if move.move_type.is_castling:
            rook_from, rook_to = move.rook_squares()
            rook = board[rook_from]
            if rook is None:
                raise ValueError(f"No rook on {rook_from} for {move}")

        # Save undo state
        self._history.append(
            _PositionState(
                move=move,
                moved_piece=piece,
                captured_piece=captured,
                castling_rook=rook,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
            )
        )

        # Lift piece from origin
        self._toggle_piece_hash(piece, move.from_sq)
        board[move.from_sq] = None

        # Remove captured piece from the board (normal capture or en passant)
        if captured is not None:
            self._toggle_piece_hash(captured, capture_sq)
            board[capture_sq] = None

        # Place piece (handle promotion)
        if move.move_type == MoveType.PROMOTION:
            placed = piece.promoted(move.promotion or PieceType.QUEEN)
        else:
            placed = piece.moved()
        board[move.to_sq] = placed
        self._toggle_piece_hash(placed, move.to_sq)

        # Slide the rook for castling
        if rook is not None:
            self._toggle_piece_hash(rook, rook_from)
            board[rook_from] = None
            moved_rook = rook.moved()
            board[rook_to] = moved_rook
            self._toggle_piece_hash(moved_rook, rook_to)

        # En passant target for the opponent
        next_en_passant: Square | None = None
        if move.move_type == MoveType.PAWN_DOUBLE:
            next_en_passant = Square(
                (move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col
            )
        self._set_en_passant(next_en_passant)

        self._update_castling(move, piece, captured, capture_sq)

        # Clocks
        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite
        self._toggle_side_hash()
        key = self._zobrist_hash
        self._key_stack.append(key)
        self._key_counts[key] = self._key_counts.get(key, 0) + 1
        return captured

    def unmake_move(self) -> Move:
        """Undo the last :meth:`make_move` and return the move undone."""
        if not self._history:
            raise ValueError("No move to unmake")
        state = self._history.pop()
        key = self._key_stack.pop()
        key_count = self._key_counts[key] - 1
        if key_count:
            self._key_counts[key] = key_count
        else:
            del self._key_counts[key]

        move = state.move
        board = self.board
        board[move.to_sq] = None
        board[move.from_sq] = state.moved_piece
        if state.captured_piece is not None:
            board[move.capture_square] = state.captured_piece

        # Undo rook slide for castling
        if state.castling_rook is not None:
            rook_from, rook_to = move.rook_squares()
            board[rook_to] = None
            board[rook_from] = state.castling_rook

        self.side_to_move = self.side_to_move.opposite
        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        self.fullmove_number = state.fullmove_number
        self._zobrist_hash = self._key_stack[-1]
        return move

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Square, CastlingRights] = {
        Square(7, 0): CastlingRights.WHITE_QUEENSIDE,
        Square(7, 7): CastlingRights.WHITE_KINGSIDE,
        Square(0, 0): CastlingRights.BLACK_QUEENSIDE,
        Square(0, 7): CastlingRights.BLACK_KINGSIDE,
    }

    def _update_castling(
        self,
        move: Move,
        piece: Piece,
        captured: Piece | None,
        capture_sq: Square,
    ) -> None:
        next_castling = self.castling
        if piece.piece_type == PieceType.KING:
            next_castling &= ~CastlingRights.both(piece.color)

        # A rook leaving its corner, or captured on it, ends that right.
        if piece.piece_type == PieceType.ROOK and move.from_sq in self._ROOK_CORNERS:
            next_castling &= ~self._ROOK_CORNERS[move.from_sq]
        if (
            captured is not None
            and captured.piece_type == PieceType.ROOK
            and capture_sq in self._ROOK_CORNERS
        ):
            next_castling &= ~self._ROOK_CORNERS[capture_sq]

        self._set_castling(next_castling)

    def _toggle_piece_hash(self, piece: Piece, sq: Square) -> None:
        self._zobrist_hash ^= zobrist.piece_key(piece, sq)

    def _toggle_side_hash(self) -> None:
        self._zobrist_hash ^= zobrist.side_to_move_key()

    def _set_castling(self, castling: CastlingRights) -> None:
        if castling == self.castling:
            return
        self._zobrist_hash ^= zobrist.castling_key(self.castling)
        self.castling = castling
        self._zobrist_hash ^= zobrist.castling_key(self.castling)

    def _set_en_passant(self, en_passant: Square | None) -> None:
        if (en_passant is None) != (self.en_passant is None):
            self._zobrist_hash ^= zobrist.en_passant_key()
        self.en_passant = en_passant

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def ply(self) -> int:
        """Number of moves made since this position was created."""
        return len(self._history)

    @property
    def last_move(self) -> Move | None:
        return self._history[-1].move if self._history else None

    def repetition_count(self) -> int:
        """How many times the current position key occurred in game history."""
        key = self._key_stack[-1]
        return self._key_counts.get(key, 0)

    @property
    def zobrist_hash(self) -> int:
        """Current Zobrist key for the full position."""
        return self._key_stack[-1]

    def repetition_counts(self) -> dict[int, int]:
        """Copy of the position-key → occurrence-count table."""
        return dict(self._key_counts)

    def _compute_zobrist_hash(self) -> int:
        key = zobrist.castling_key(self.castling)
        if self.side_to_move == Color.BLACK:
            key ^= zobrist.side_to_move_key()
        if self.en_passant is not None:
            key ^= zobrist.en_passant_key()

        for sq, piece in self.board.occupied():
            key ^= zobrist.piece_key(piece, sq)
        return key
