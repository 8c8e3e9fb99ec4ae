"""Move generation tests, including perft counts.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from rookie.core.config import RulesConfig
from rookie.core.enums import Color, MoveType, PieceType
from rookie.core.move import Move
from rookie.core.move_generator import MoveGenerator
from rookie.core.notation import STARTING_FEN, position_from_fen
from rookie.core.position import Position
from rookie.core.types import (
    A7, A8, C1, D1, D6, E1, E2, E3, E4, E5, F1, G1, G8,
    Square,
)


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* using make/unmake."""
    if depth == 0:
        return 1
    gen = MoveGenerator(position)
    moves = gen.generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        position.make_move(move)
        nodes += perft(position, depth - 1)
        position.unmake_move()
    return nodes


def _targets(moves: list[Move], from_sq: Square) -> set[Square]:
    return {m.to_sq for m in moves if m.from_sq == from_sq}


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self, start_position: Position) -> None:
        assert perft(start_position, 1) == 20

    def test_depth_2(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 2) == 400

    def test_depth_3(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert perft(pos, 1) == 48

    def test_depth_2(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert perft(pos, 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert perft(pos, 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        pos = position_from_fen(POS3)
        assert perft(pos, 1) == 14

    def test_depth_2(self) -> None:
        pos = position_from_fen(POS3)
        assert perft(pos, 2) == 191

    def test_depth_3(self) -> None:
        pos = position_from_fen(POS3)
        assert perft(pos, 3) == 2_812


# ── Position 4: mirrored, many promotions ────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        pos = position_from_fen(POS4)
        assert perft(pos, 1) == 6

    def test_depth_2(self) -> None:
        pos = position_from_fen(POS4)
        assert perft(pos, 2) == 264

    def test_depth_3(self) -> None:
        pos = position_from_fen(POS4)
        assert perft(pos, 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        pos = position_from_fen(POS5)
        assert perft(pos, 1) == 44

    def test_depth_2(self) -> None:
        pos = position_from_fen(POS5)
        assert perft(pos, 2) == 1_486

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos = position_from_fen(POS5)
        assert perft(pos, 3) == 62_379


# ── Piece rules ──────────────────────────────────────────────────────────────


class TestPawnMoves:
    def test_single_and_double_step(self) -> None:
        gen = MoveGenerator(Position())
        moves = gen.legal_moves_from(E2)
        assert set(moves) == {
            Move(E2, E3),
            Move(E2, E4, MoveType.PAWN_DOUBLE),
        }

    def test_double_step_blocked(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert MoveGenerator(pos).legal_moves_from(E2) == []

    def test_double_step_disabled(self) -> None:
        config = RulesConfig(pawn_double_move=False)
        moves = MoveGenerator(Position(), config).legal_moves_from(E2)
        assert moves == [Move(E2, E3)]

    def test_promotion_emits_four_choices(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves = MoveGenerator(pos).legal_moves_from(A7)
        assert {m.promotion for m in moves} == {
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        }
        assert all(m.to_sq == A8 and m.is_promotion for m in moves)

    def test_en_passant(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        moves = MoveGenerator(pos).legal_moves_from(E5)
        assert Move(E5, D6, MoveType.EN_PASSANT) in moves

    def test_en_passant_disabled(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        config = RulesConfig(en_passant=False)
        moves = MoveGenerator(pos, config).legal_moves_from(E5)
        assert all(m.move_type != MoveType.EN_PASSANT for m in moves)

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        # Removing both pawns would open the rank to the rook.
        pos = position_from_fen("4k3/8/8/r2pP2K/8/8/8/8 w - d6 0 1")
        moves = MoveGenerator(pos).legal_moves_from(E5)
        assert all(m.move_type != MoveType.EN_PASSANT for m in moves)


class TestCastling:
    CASTLE_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_both_sides_available(self) -> None:
        pos = position_from_fen(self.CASTLE_FEN)
        targets = _targets(MoveGenerator(pos).generate_legal_moves(), E1)
        assert {G1, C1} <= targets

    def test_blocked_by_piece(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/RN2K2R w KQkq - 0 1")
        targets = _targets(MoveGenerator(pos).generate_legal_moves(), E1)
        assert C1 not in targets
        assert G1 in targets

    def test_through_attacked_square(self) -> None:
        # Black rook on f8 covers f1, the kingside transit square.
        pos = position_from_fen("4kr2/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        targets = _targets(MoveGenerator(pos).generate_legal_moves(), E1)
        assert G1 not in targets
        assert C1 in targets

    def test_out_of_check(self) -> None:
        pos = position_from_fen("4r1k1/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        targets = _targets(MoveGenerator(pos).generate_legal_moves(), E1)
        assert G1 not in targets
        assert C1 not in targets

    def test_queenside_b_file_may_be_attacked(self) -> None:
        pos = position_from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        targets = _targets(MoveGenerator(pos).generate_legal_moves(), E1)
        assert C1 in targets

    def test_no_rights(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1")
        targets = _targets(MoveGenerator(pos).generate_legal_moves(), E1)
        assert targets == {D1, F1, Square(6, 3), Square(6, 4), Square(6, 5)}

    def test_disabled_by_config(self) -> None:
        pos = position_from_fen(self.CASTLE_FEN)
        gen = MoveGenerator(pos, RulesConfig(castling=False))
        targets = _targets(gen.generate_legal_moves(), E1)
        assert G1 not in targets and C1 not in targets

    def test_black_kingside(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        moves = MoveGenerator(pos).generate_legal_moves()
        assert any(m.move_type == MoveType.CASTLE_KINGSIDE and m.to_sq == G8 for m in moves)


class TestLegality:
    def test_pinned_piece_cannot_leave_line(self) -> None:
        pos = position_from_fen("4r1k1/8/8/8/8/8/4B3/4K3 w - - 0 1")
        moves = MoveGenerator(pos).legal_moves_from(E2)
        assert moves == []

    def test_legal_moves_never_leave_king_attacked(self) -> None:
        pos = position_from_fen(KIWIPETE)
        gen = MoveGenerator(pos)
        for move in gen.generate_legal_moves():
            pos.make_move(move)
            assert not MoveGenerator(pos).is_in_check(Color.WHITE)
            pos.unmake_move()

    def test_pseudo_legal_includes_self_check(self) -> None:
        pos = position_from_fen("4r1k1/8/8/8/8/8/4B3/4K3 w - - 0 1")
        gen = MoveGenerator(pos)
        assert len(gen.generate_pseudo_legal_moves()) > len(gen.generate_legal_moves())

    def test_generation_does_not_touch_position(self) -> None:
        pos = position_from_fen(KIWIPETE)
        before = pos.board.copy()
        MoveGenerator(pos).generate_legal_moves()
        assert pos.board == before

    def test_empty_or_off_board_square(self) -> None:
        gen = MoveGenerator(Position())
        assert gen.legal_moves_from(E4) == []
        assert gen.legal_moves_from(Square(9, 9)) == []

    def test_moves_for_other_color(self) -> None:
        gen = MoveGenerator(Position())
        assert len(gen.generate_legal_moves(Color.BLACK)) == 20

    def test_check_detection(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
        assert MoveGenerator(pos).is_in_check(Color.WHITE)
        assert E1 in {m.from_sq for m in MoveGenerator(pos).generate_legal_moves()}
