"""Tests for Board and Square helpers."""

import pytest

from rookie.core.board import Board
from rookie.core.enums import Color, PieceType
from rookie.core.piece import Piece
from rookie.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E2, E4, E5,
    Square,
    in_bounds,
    is_light_square,
    parse_square,
    square_at,
)


class TestSquare:
    def test_a8_is_origin(self) -> None:
        assert A8 == Square(0, 0)
        assert A8.index == 0
        assert A8.rank == 8

    def test_h1_is_last(self) -> None:
        assert H1 == Square(7, 7)
        assert H1.index == 63

    def test_parse_square(self) -> None:
        assert parse_square("e4") == E4
        assert E4 == Square(4, 4)

    @pytest.mark.parametrize("text", ["", "e", "i1", "a9", "a0", "e44"])
    def test_parse_square_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_square(text)

    def test_name_round_trip(self) -> None:
        for idx in range(64):
            sq = square_at(idx)
            assert parse_square(sq.name) == sq

    def test_off_board_is_representable(self) -> None:
        sq = Square(8, -1)
        assert not in_bounds(sq)
        assert str(sq) == "(8, -1)"

    def test_square_colors(self) -> None:
        assert is_light_square(A8)
        assert is_light_square(H1)
        assert not is_light_square(A1)
        assert not is_light_square(H8)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawn_ranks(self) -> None:
        board = Board.initial()
        white = board.pieces(Color.WHITE, PieceType.PAWN)
        black = board.pieces(Color.BLACK, PieceType.PAWN)
        assert len(white) == 8 and all(sq.rank == 2 for sq in white)
        assert len(black) == 8 and all(sq.rank == 7 for sq in black)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for idx in range(16, 48):
            assert board[square_at(idx)] is None

    def test_pieces_start_unmoved(self) -> None:
        board = Board.initial()
        assert all(not piece.has_moved for _, piece in board.occupied())


class TestBoardQueries:
    def test_occupancy_predicates(self) -> None:
        board = Board.initial()
        assert board.is_empty(E4)
        assert not board.is_empty(E2)
        assert board.is_own_piece(E2, Color.WHITE)
        assert board.is_opponent_piece(E2, Color.BLACK)
        assert not board.is_opponent_piece(E4, Color.BLACK)

    def test_off_board_queries_are_false(self) -> None:
        board = Board.initial()
        off = Square(-1, 4)
        assert not board.is_empty(off)
        assert not board.is_own_piece(off, Color.WHITE)
        assert not board.is_opponent_piece(off, Color.WHITE)
        assert not Board.in_bounds(off)

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_missing_king(self) -> None:
        board = Board()
        assert board.find_king(Color.WHITE) is None
        with pytest.raises(ValueError):
            board.king_square(Color.WHITE)

    def test_has_piece(self) -> None:
        board = Board()
        board[E4] = Piece(Color.BLACK, PieceType.QUEEN)
        assert board.has_piece(Color.BLACK, PieceType.QUEEN)
        assert not board.has_piece(Color.WHITE, PieceType.QUEEN)


class TestBoardMutation:
    def test_move_piece_tracks_king(self) -> None:
        board = Board.initial()
        board[E2] = None
        board.move_piece(E1, E2)
        assert board.king_square(Color.WHITE) == E2
        assert board[E1] is None

    def test_move_piece_returns_replaced(self) -> None:
        board = Board()
        board[E4] = Piece(Color.WHITE, PieceType.ROOK)
        board[E5] = Piece(Color.BLACK, PieceType.KNIGHT)
        replaced = board.move_piece(E4, E5)
        assert replaced == Piece(Color.BLACK, PieceType.KNIGHT)
        assert board[E5] == Piece(Color.WHITE, PieceType.ROOK)

    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[E2] = None
        clone.move_piece(E1, E2)
        assert board[E2] is not None
        assert board.king_square(Color.WHITE) == E1
        assert clone != board

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert list(board.occupied()) == []
        assert board.find_king(Color.BLACK) is None

    def test_repr_starts_at_rank_8(self) -> None:
        lines = repr(Board.initial()).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[-1] == "  a b c d e f g h"


class TestPiece:
    def test_fen_chars(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"

    def test_from_char(self) -> None:
        assert Piece.from_char("k") == Piece(Color.BLACK, PieceType.KING)

    def test_from_char_rejects(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_moved_and_promoted(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        assert pawn.moved().has_moved
        assert not pawn.has_moved
        queen = pawn.promoted(PieceType.QUEEN)
        assert queen.is_a(Color.WHITE, PieceType.QUEEN)
        assert queen.has_moved
