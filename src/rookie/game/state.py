"""Game state machine. Applies and reverts moves, tracks terminal flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

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
    GameOverError,
    IllegalMoveError,
    InvalidSquareError,
    NoPieceAtSourceError,
    NothingToUndoError,
    WrongTurnError,
)
from rookie.core.move import PROMOTION_TYPES, Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.notation import (
    STARTING_FEN,
    build_pgn,
    move_to_san,
    pgn_result_token,
    position_from_fen,
    position_to_fen,
)
from rookie.core.piece import Piece
from rookie.core.position import Position
from rookie.core.rules import Rules
from rookie.core.stats import GameStats, side_material
from rookie.core.types import Square, in_bounds
from rookie.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)

_TERMINATION: dict[DrawReason, str] = {
    DrawReason.STALEMATE: "Stalemate",
    DrawReason.FIFTY_MOVE: "Fifty-move rule",
    DrawReason.INSUFFICIENT_MATERIAL: "Insufficient material",
    DrawReason.THREEFOLD_REPETITION: "Threefold repetition",
}


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Every scalar game-state field, captured just before a move."""

    turn: Color
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int
    check: bool
    checkmate: bool
    stalemate: bool
    draw: bool
    draw_reason: DrawReason
    game_over: bool


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    piece: Piece
    captured: Piece | None
    san: str
    before: StateSnapshot

    @property
    def from_sq(self) -> Square:
        return self.move.from_sq

    @property
    def to_sq(self) -> Square:
        return self.move.to_sq

    @property
    def move_type(self) -> MoveType:
        return self.move.move_type

    @property
    def promotion(self) -> PieceType | None:
        return self.move.promotion

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


@dataclass
class GameState:
    """Owns the live position and the derived check / terminal flags.

    Pure data and logic, no threading or UI.  Every mutating
    method either completes or raises a :class:`~rookie.core.errors.RulesError`
    before touching anything.
    """

    config: RulesConfig = field(default_factory=RulesConfig)
    position: Position = field(init=False)
    check: bool = field(default=False, init=False)
    checkmate: bool = field(default=False, init=False)
    stalemate: bool = field(default=False, init=False)
    draw: bool = field(default=False, init=False)
    draw_reason: DrawReason = field(default=DrawReason.NONE, init=False)
    game_over: bool = field(default=False, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    captured_pieces: dict[Color, list[Piece]] = field(default_factory=dict, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    def __post_init__(self) -> None:
        self._install(Position(), STARTING_FEN)

    # ── Initialisation ───────────────────────────────────────────────────

    def reset(self, config: RulesConfig | None = None) -> None:
        """Start a new game from the standard position."""
        if config is not None:
            self.config = config
        self._install(Position(), STARTING_FEN)
        _LOGGER.debug("Game reset with %s", self.config)

    def load_fen(self, fen: str) -> None:
        """Replace the game with the position described by *fen*.

        Raises:
            MalformedFENError: *fen* is invalid; the current game is kept.
        """
        position = position_from_fen(fen)
        self._install(position, position_to_fen(position))
        _LOGGER.debug("Loaded FEN %s", self.start_fen)

    def export_fen(self) -> str:
        return position_to_fen(self.position)

    def _install(self, position: Position, start_fen: str) -> None:
        self.position = position
        self.start_fen = start_fen
        self.move_history = []
        self.captured_pieces = {Color.WHITE: [], Color.BLACK: []}
        self._refresh_status()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Validate and play a move, returning its history record.

        Raises:
            InvalidSquareError: Either square is off the board.
            NoPieceAtSourceError: *from_sq* is empty.
            WrongTurnError: The piece belongs to the side not on move.
            GameOverError: The game has already ended.
            IllegalMoveError: The move is not legal here.
        """
        if not in_bounds(from_sq) or not in_bounds(to_sq):
            raise InvalidSquareError(f"Square off the board: {from_sq} -> {to_sq}")
        piece = self.position.board[from_sq]
        if piece is None:
            raise NoPieceAtSourceError(f"No piece on {from_sq}")
        if piece.color != self.turn:
            raise WrongTurnError(f"It is {self.turn}'s turn, not {piece.color}'s")
        if self.game_over:
            raise GameOverError("The game is already over")

        move = self._match_legal_move(from_sq, to_sq, promotion)

        before = self.snapshot()
        san = move_to_san(self.position, move)
        captured = self.position.make_move(move)
        if captured is not None:
            self.captured_pieces[piece.color].append(captured)
        self._refresh_status()

        record = MoveRecord(
            move=move,
            piece=piece,
            captured=captured,
            san=san,
            before=before,
        )
        self.move_history.append(record)
        return record

    def _match_legal_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None,
    ) -> Move:
        gen = MoveGenerator(self.position, self.config)
        candidates = [m for m in gen.legal_moves_from(from_sq) if m.to_sq == to_sq]
        if not candidates:
            raise IllegalMoveError(f"Illegal move: {from_sq}{to_sq}")
        if not candidates[0].is_promotion:
            return candidates[0]

        if promotion is None:
            if not self.config.auto_queen_promotion:
                raise IllegalMoveError(f"Promotion piece required for {from_sq}{to_sq}")
            promotion = PieceType.QUEEN
        if promotion not in PROMOTION_TYPES:
            raise IllegalMoveError(f"Cannot promote to {promotion}")
        for move in candidates:
            if move.promotion == promotion:
                return move
        raise IllegalMoveError(f"Cannot promote to {promotion}")

    def undo_move(self) -> MoveRecord:
        """Take back the last move, restoring the exact prior state.

        Raises:
            NothingToUndoError: No move has been played.
        """
        if not self.move_history:
            raise NothingToUndoError("No move to undo")

        record = self.move_history.pop()
        self.position.unmake_move()
        if record.captured is not None:
            self.captured_pieces[record.piece.color].pop()
        self._restore_flags(record.before)
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def turn(self) -> Color:
        return self.position.side_to_move

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def castling_rights(self) -> CastlingRights:
        return self.position.castling

    @property
    def en_passant_target(self) -> Square | None:
        return self.position.en_passant

    @property
    def halfmove_clock(self) -> int:
        return self.position.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self.position.fullmove_number

    @property
    def repetition_counts(self) -> dict[int, int]:
        return self.position.repetition_counts()

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def phase(self) -> GamePhase:
        if self.checkmate:
            return GamePhase.CHECKMATE
        if self.stalemate:
            return GamePhase.STALEMATE
        if self.draw:
            return GamePhase.DRAW
        if self.check:
            return GamePhase.CHECK
        return GamePhase.ACTIVE

    @property
    def result(self) -> GameResult:
        if self.checkmate:
            # The side to move is the one mated.
            return GameResult.BLACK_WINS if self.turn == Color.WHITE else GameResult.WHITE_WINS
        if self.draw:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def game_result(self) -> str | None:
        """``"1-0"``, ``"0-1"``, ``"1/2-1/2"``, or ``None`` while in progress."""
        if not self.game_over:
            return None
        return pgn_result_token(self.result)

    def legal_moves(self, color: Color | None = None) -> list[Move]:
        """Legal moves for *color* (default: side to move)."""
        gen = MoveGenerator(self.position, self.config)
        return gen.generate_legal_moves(color)

    def legal_destinations(self, square: Square) -> list[Square]:
        """Target squares for the side-to-move piece on *square*."""
        if self.game_over or not in_bounds(square):
            return []
        piece = self.position.board[square]
        if piece is None or piece.color != self.turn:
            return []
        gen = MoveGenerator(self.position, self.config)
        targets: list[Square] = []
        for move in gen.legal_moves_from(square):
            if move.to_sq not in targets:
                targets.append(move.to_sq)
        return targets

    def snapshot(self) -> StateSnapshot:
        pos = self.position
        return StateSnapshot(
            turn=pos.side_to_move,
            castling=pos.castling,
            en_passant=pos.en_passant,
            halfmove_clock=pos.halfmove_clock,
            fullmove_number=pos.fullmove_number,
            check=self.check,
            checkmate=self.checkmate,
            stalemate=self.stalemate,
            draw=self.draw,
            draw_reason=self.draw_reason,
            game_over=self.game_over,
        )

    def stats(self) -> GameStats:
        board = self.position.board
        taken = self.captured_pieces
        return GameStats(
            white=side_material(board, Color.WHITE, taken[Color.WHITE]),
            black=side_material(board, Color.BLACK, taken[Color.BLACK]),
            move_number=self.fullmove_number,
            halfmove_clock=self.halfmove_clock,
            in_check=self.check,
            game_over=self.game_over,
            result=self.game_result(),
        )

    def export_pgn(self, headers: dict[str, str] | None = None) -> str:
        """The game so far as a PGN document; *headers* override defaults."""
        result_token = pgn_result_token(self.result)
        all_headers: dict[str, str] = {
            "Event": "Casual Game",
            "Site": "?",
            "Date": datetime.now().strftime("%Y.%m.%d"),
            "Round": "-",
            "White": "White",
            "Black": "Black",
            "Result": result_token,
        }
        if self.checkmate:
            all_headers["Termination"] = "Checkmate"
        elif self.draw_reason in _TERMINATION:
            all_headers["Termination"] = _TERMINATION[self.draw_reason]
        if self.start_fen != STARTING_FEN:
            all_headers["SetUp"] = "1"
            all_headers["FEN"] = self.start_fen
        all_headers.update(headers or {})

        start = position_from_fen(self.start_fen)
        return build_pgn(
            all_headers,
            [record.san for record in self.move_history],
            result_token,
            black_starts=start.side_to_move == Color.BLACK,
            first_move=start.fullmove_number,
        )

    # ── Internal ─────────────────────────────────────────────────────────

    def _refresh_status(self) -> None:
        """Recompute check and terminal flags for the side to move."""
        gen = MoveGenerator(self.position, self.config)
        self.check = gen.is_in_check(self.turn)
        has_moves = bool(gen.generate_legal_moves())
        self.checkmate = self.check and not has_moves
        if self.checkmate:
            reason = DrawReason.NONE
        else:
            reason = Rules.draw_reason(
                self.position, self.config, has_legal_moves=has_moves
            )
        self.draw_reason = reason
        self.stalemate = reason == DrawReason.STALEMATE
        self.draw = reason != DrawReason.NONE
        self.game_over = self.checkmate or self.draw

    def _restore_flags(self, snap: StateSnapshot) -> None:
        self.check = snap.check
        self.checkmate = snap.checkmate
        self.stalemate = snap.stalemate
        self.draw = snap.draw
        self.draw_reason = snap.draw_reason
        self.game_over = snap.game_over
