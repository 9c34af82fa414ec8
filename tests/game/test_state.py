"""Tests for GameState: commits, remote attach, status cache and view mode."""

from omegachess.core.enums import Color, MoveFlag, PieceType
from omegachess.core.move import Move
from omegachess.core.notation import STARTING_FEN, position_from_fen
from omegachess.core.types import E2, E4, E7, E8, parse_square
from omegachess.game.interfaces import PendingPromotion, ViewMode
from omegachess.game.record import MoveRecord
from omegachess.game.state import GameState


class TestSetup:
    def test_defaults(self) -> None:
        state = GameState()
        assert state.mode == ViewMode.PLAYING
        assert state.pending is None
        assert state.side_to_move == Color.WHITE
        assert state.position is state.history.root.position

    def test_setup_from_fen(self) -> None:
        state = GameState()
        state.commit(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        state.setup("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert len(state.history) == 1
        assert state.side_to_move == Color.BLACK
        assert state.start_fen == "4k3/8/8/8/8/8/8/4K3 b - - 0 1"


class TestCommit:
    def test_commit_records_at_latest(self) -> None:
        state = GameState()
        record = state.commit(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert state.history.latest.record is record
        assert state.live_position.board[E4] is not None
        assert state.side_to_move == Color.BLACK

    def test_commit_clears_pending(self) -> None:
        state = GameState(start_fen="k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
        move = Move(E7, E8, MoveFlag.PROMOTION)
        state.pending = PendingPromotion(move)
        state.commit(move, promotion=PieceType.QUEEN)
        assert state.pending is None


class TestAttachRemote:
    def test_repetitions_carry_over(self) -> None:
        state = GameState()
        elsewhere = position_from_fen(STARTING_FEN)
        for text in ("g1f3", "g8f6", "f3g1", "f6g8"):
            move = Move(parse_square(text[:2]), parse_square(text[2:4]))
            record = MoveRecord.from_move(elsewhere, move)
            state.attach_remote(record)
            elsewhere = record.position
        # The start position is seen again: once at the root, once now.
        assert state.live_position.repetition_count() == 2

    def test_attached_position_is_a_copy(self) -> None:
        state = GameState()
        record = MoveRecord.from_move(
            position_from_fen(STARTING_FEN), Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        )
        attached = state.attach_remote(record)
        assert attached.position is not record.position
        assert state.history.latest.record is attached


class TestStatusAndMode:
    def test_status_is_cached_per_node(self) -> None:
        state = GameState()
        assert state.status() is state.status()

    def test_game_over_at_latest(self) -> None:
        state = GameState(start_fen="3k4/R7/3K4/8/8/8/8/8 w - - 0 1")
        assert not state.is_game_over
        state.commit(Move(parse_square("a7"), parse_square("a8")))
        assert state.is_game_over

    def test_sync_mode(self) -> None:
        state = GameState()
        state.commit(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert not state.sync_mode()
        state.history.jump_to(state.history.root.id)
        assert state.sync_mode()
        assert state.mode == ViewMode.REVIEWING


class TestAnalysis:
    def test_enter_starts_from_visible_node(self) -> None:
        state = GameState()
        state.commit(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        line = state.enter_analysis()
        assert state.is_analyzing
        assert state.position is line.position
        assert state.sync_mode()
        assert state.mode == ViewMode.ANALYZING

    def test_commit_stays_off_the_tree(self) -> None:
        state = GameState()
        state.enter_analysis()
        record = state.commit(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert len(state.history) == 1
        assert state.position is record.position
        assert state.live_position is state.history.root.position
        assert state.play_position is record.position

    def test_exit_restores_game_view(self) -> None:
        state = GameState()
        state.enter_analysis()
        state.commit(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert state.exit_analysis()
        assert not state.exit_analysis()
        state.sync_mode()
        assert state.mode == ViewMode.PLAYING
        assert state.position is state.history.root.position

    def test_setup_drops_analysis(self) -> None:
        state = GameState()
        state.enter_analysis()
        state.setup()
        assert state.analysis is None
