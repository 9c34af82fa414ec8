"""Tests for Rules: checkmate, stalemate, draw detection."""

from omegachess.core.enums import Color, DrawType, GameResult
from omegachess.core.move import Move
from omegachess.core.move_generator import MoveGenerator
from omegachess.core.notation import STARTING_FEN, position_from_fen
from omegachess.core.position import Position
from omegachess.core.rules import Rules
from omegachess.core.types import parse_square

BACK_RANK_MATE = "R2k4/8/3K4/8/8/8/8/8 b - - 0 1"
CORNER_MATE = "R6k/8/6K1/8/8/8/8/8 b - - 0 1"
STALEMATE = "k7/8/1K1B4/8/8/8/8/8 b - - 0 1"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_rook_check_along_rank(self) -> None:
        assert Rules.is_in_check(position_from_fen(BACK_RANK_MATE))


class TestCheckmate:
    def test_back_rank_mate(self) -> None:
        pos = position_from_fen(BACK_RANK_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_every_piece_has_no_moves(self) -> None:
        pos = position_from_fen(CORNER_MATE)
        gen = MoveGenerator(pos)
        assert Rules.is_checkmate(pos)
        for sq in pos.board.pieces(Color.BLACK):
            assert gen.legal_moves_from(sq) == []

    def test_status_reports_mate(self) -> None:
        status = Rules.status(position_from_fen(CORNER_MATE))
        assert status.check
        assert status.checkmate
        assert not status.stalemate
        assert status.result == GameResult.WHITE_WINS

    def test_hop_covers_square_behind_king(self) -> None:
        # e8 is reached by the rook hopping over the black king.
        pos = position_from_fen(BACK_RANK_MATE)
        assert MoveGenerator(pos).is_square_attacked(parse_square("e8"), Color.WHITE)

    def test_eligible_summon_does_not_escape_mate(self) -> None:
        # d8 and f8 are free summon targets, but a summon leaves the king in check.
        pos = position_from_fen("4K3/8/8/8/8/8/8/k2rrr2 w - - 0 1")
        assert MoveGenerator(pos).can_summon(parse_square("e8"))
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("R2k4/8/8/8/8/8/8/4K3 b - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_stalemate(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW

    def test_not_stalemate_at_start(self) -> None:
        assert not Rules.is_stalemate(position_from_fen(STARTING_FEN))


class TestDraws:
    def test_insufficient_material(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        info = Rules.draw_info(pos)
        assert info is not None
        assert info.type == DrawType.INSUFFICIENT_MATERIAL
        assert info.message == "Draw by insufficient material."

    def test_extra_piece_is_sufficient(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/7N w - - 0 1")
        assert not Rules.is_insufficient_material(pos)

    def test_fifty_move_rule(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
        info = Rules.draw_info(pos)
        assert info is not None
        assert info.type == DrawType.FIFTY_MOVE
        assert info.message == "Draw by fifty-move rule."

    def test_ninety_nine_is_not_enough(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 99 80")
        assert Rules.draw_info(pos) is None

    def test_insufficient_wins_over_fifty(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 120 90")
        info = Rules.draw_info(pos)
        assert info is not None and info.type == DrawType.INSUFFICIENT_MATERIAL

    def test_draws_are_advisory(self) -> None:
        status = Rules.status(position_from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80"))
        assert status.draw is not None
        assert status.result == GameResult.IN_PROGRESS


class TestThreefold:
    SHUFFLE = [("g1", "f3"), ("g8", "f6"), ("f3", "g1"), ("f6", "g8")]

    def _shuffle(self, pos: Position, times: int) -> None:
        for _ in range(times):
            for a, b in self.SHUFFLE:
                pos.make_move(Move(parse_square(a), parse_square(b)))

    def test_second_occurrence_is_not_a_draw(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        self._shuffle(pos, 1)
        assert pos.repetition_count() == 2
        assert not Rules.is_threefold_repetition(pos)

    def test_third_occurrence_is_a_draw(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        self._shuffle(pos, 2)
        assert pos.repetition_count() == 3
        info = Rules.draw_info(pos)
        assert info is not None
        assert info.type == DrawType.THREEFOLD
        assert info.message == "Draw by threefold repetition."

    def test_rights_change_breaks_repetition(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        moves = [("h1", "h2"), ("h8", "h7"), ("h2", "h1"), ("h7", "h8")]
        for _ in range(2):
            for a, b in moves:
                pos.make_move(Move(parse_square(a), parse_square(b)))
        # The first occurrence had full castling rights, the later ones do not.
        assert pos.repetition_count() == 2
