"""
Tests for game sessions and the opponent move scheduler.

Tests:
- Opponent moves after the delay, not before
- Restart and close cancel the pending move
- Stale moves never land on a reset board
- Presentation helpers (cells, status text/tone)
- Session manager lifecycle
"""

import asyncio

import pytest

from ..bots import FirstLegalPolicy
from ..engine_core.action import IgnoreReason
from ..engine_core.state import GamePhase, GameState, Mark
from ..session import GameSession, MoveScheduler
from .conftest import TEST_DELAY

SETTLE = TEST_DELAY * 5


class TestOpponentScheduling:
    """Tests for the delayed opponent move."""

    @pytest.mark.asyncio
    async def test_opponent_moves_after_delay(self, session):
        assert session.on_cell_activated(4)

        assert session.get_status().phase == GamePhase.OPPONENT_TURN
        assert session.scheduler.pending
        assert session.get_cell_display(0) is None

        await asyncio.sleep(SETTLE)

        assert session.get_cell_display(0) == Mark.OPPONENT
        assert session.get_status().phase == GamePhase.HUMAN_TURN
        assert not session.scheduler.pending

    @pytest.mark.asyncio
    async def test_clicks_ignored_while_opponent_thinks(self, session):
        session.on_cell_activated(4)
        board = session.state.board

        assert not session.on_cell_activated(8)
        assert session.attempt_move(8).reason == IgnoreReason.NOT_YOUR_TURN
        assert session.state.board == board

    @pytest.mark.asyncio
    async def test_double_click_on_centre(self, session):
        assert session.on_cell_activated(4)
        await asyncio.sleep(SETTLE)
        board = session.state.board

        assert not session.on_cell_activated(4)
        assert session.state.board == board

    @pytest.mark.asyncio
    async def test_human_win_schedules_nothing(self, session):
        # Opponent answers with 0 then 2, human takes the middle column
        for index in (4, 1):
            session.on_cell_activated(index)
            await asyncio.sleep(SETTLE)
        assert session.on_cell_activated(7) is True

        assert session.get_status().phase == GamePhase.WON
        assert session.get_status().winner == Mark.HUMAN
        assert not session.scheduler.pending

    @pytest.mark.asyncio
    async def test_restart_before_delay_drops_pending_move(self, session):
        session.on_cell_activated(4)
        session.on_restart()

        assert not session.scheduler.pending
        await asyncio.sleep(SETTLE)

        assert session.state.board == GameState.initial().board
        assert session.get_status().phase == GamePhase.HUMAN_TURN
        assert session.state.epoch == 1

    @pytest.mark.asyncio
    async def test_stale_callback_after_restart_is_ignored(self, session):
        """Even if the timer fired anyway, the epoch check stops it."""
        session.on_cell_activated(4)
        old_epoch = session.state.epoch
        session.on_restart()
        session.on_cell_activated(8)
        session.scheduler.cancel()

        session._run_opponent_move(old_epoch)

        assert session.get_cell_display(0) is None
        assert session.get_status().phase == GamePhase.OPPONENT_TURN

    @pytest.mark.asyncio
    async def test_close_cancels_pending_move(self, session):
        session.on_cell_activated(4)
        session.close()

        await asyncio.sleep(SETTLE)

        assert session.get_cell_display(0) is None
        assert not session.scheduler.pending
        assert not session.on_cell_activated(8)
        assert session.attempt_move(8).reason == IgnoreReason.SESSION_CLOSED

    @pytest.mark.asyncio
    async def test_full_game_with_random_opponent(self):
        game = GameSession(opponent_delay=0.001)
        try:
            for _ in range(5):
                for index in range(9):
                    if game.on_cell_activated(index):
                        break
                while game.get_status().phase == GamePhase.OPPONENT_TURN:
                    await asyncio.sleep(0.005)
                if game.get_status().is_over:
                    break

            assert game.get_status().is_over
        finally:
            game.close()


class TestMoveScheduler:
    """Tests for MoveScheduler."""

    @pytest.mark.asyncio
    async def test_fires_with_epoch(self):
        fired = []
        scheduler = MoveScheduler(delay=TEST_DELAY)
        scheduler.schedule(3, fired.append)

        assert scheduler.pending
        assert scheduler.pending_epoch == 3
        await asyncio.sleep(SETTLE)

        assert fired == [3]
        assert not scheduler.pending

    @pytest.mark.asyncio
    async def test_only_one_pending(self):
        fired = []
        scheduler = MoveScheduler(delay=TEST_DELAY)
        scheduler.schedule(1, fired.append)
        scheduler.schedule(2, fired.append)

        await asyncio.sleep(SETTLE)

        assert fired == [2]

    @pytest.mark.asyncio
    async def test_cancel(self):
        fired = []
        scheduler = MoveScheduler(delay=TEST_DELAY)
        scheduler.schedule(1, fired.append)

        assert scheduler.cancel()
        assert not scheduler.cancel()
        await asyncio.sleep(SETTLE)

        assert fired == []

    def test_requires_running_loop(self):
        scheduler = MoveScheduler(delay=TEST_DELAY)
        with pytest.raises(RuntimeError):
            scheduler.schedule(0, lambda epoch: None)


class TestPresentation:
    """Tests for the display interface."""

    def test_initial_display(self, session):
        assert all(session.get_cell_display(i) is None for i in range(9))
        assert all(session.is_cell_enabled(i) for i in range(9))
        assert session.status_text() == "Your turn"
        assert session.status_tone() == "outline"

    @pytest.mark.asyncio
    async def test_thinking_disables_cells(self, session):
        session.on_cell_activated(4)

        assert session.status_text() == "Opponent thinking"
        assert not any(session.is_cell_enabled(i) for i in range(9))

    @pytest.mark.parametrize(
        "state, text, tone",
        [
            (GameState(winner=Mark.HUMAN, is_over=True), "Winner: Human", "default"),
            (GameState(winner=Mark.OPPONENT, is_over=True), "Winner: Opponent", "destructive"),
            (GameState(is_over=True), "Draw", "secondary"),
        ],
    )
    def test_final_status(self, session, state, text, tone):
        session.state = state
        assert session.status_text() == text
        assert session.status_tone() == tone
        assert not any(session.is_cell_enabled(i) for i in range(9))

    @pytest.mark.asyncio
    async def test_listener_notified(self, session):
        seen = []
        session.add_listener(lambda s: seen.append(s.get_status().phase))

        session.on_cell_activated(4)
        await asyncio.sleep(SETTLE)
        session.on_cell_activated(4)  # ignored, no notification

        assert seen == [GamePhase.OPPONENT_TURN, GamePhase.HUMAN_TURN]

    @pytest.mark.parametrize("index", [-1, 9, 42])
    def test_display_outside_board_is_empty(self, session, index):
        assert session.get_cell_display(index) is None
        assert not session.is_cell_enabled(index)

    def test_close_notifies_listener_once(self, session):
        seen = []
        session.add_listener(lambda s: seen.append(s.closed))

        session.close()
        session.close()

        assert seen == [True]

    def test_restart_notifies_listener(self, session):
        seen = []
        session.add_listener(lambda s: seen.append(s.state.epoch))
        session.on_restart()
        assert seen == [1]


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_and_get(self, session_manager):
        session = session_manager.create_session()

        assert session_manager.get_session(session.session_id) is session
        assert isinstance(session.bot, FirstLegalPolicy)
        assert session.scheduler.delay == TEST_DELAY

    def test_end_session(self, session_manager):
        session = session_manager.create_session()

        assert session_manager.end_session(session.session_id)
        assert session.closed
        assert session_manager.get_session(session.session_id) is None
        assert not session_manager.end_session(session.session_id)

    def test_list_active(self, session_manager):
        ids = {session_manager.create_session().session_id for _ in range(3)}
        assert set(session_manager.list_active_sessions()) == ids

    def test_cleanup_stale(self, session_manager):
        old = session_manager.create_session()
        fresh = session_manager.create_session()
        old.created_at -= 7200
        old.last_activity -= 7200

        removed = session_manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert old.closed
        assert session_manager.get_session(fresh.session_id) is fresh

    @pytest.mark.asyncio
    async def test_cleanup_keeps_long_running_game_in_play(self, session_manager):
        """Age counts from the last interaction, not from creation."""
        session = session_manager.create_session()
        session.created_at -= 7200
        session.last_activity -= 7200

        assert session.on_cell_activated(4)
        removed = session_manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 0
        assert not session.closed
        assert session_manager.get_session(session.session_id) is session

    def test_restart_counts_as_activity(self, session_manager):
        session = session_manager.create_session()
        session.last_activity -= 7200

        session.on_restart()

        assert session_manager.cleanup_stale_sessions(max_age_seconds=3600) == 0

    def test_ignored_click_counts_as_activity(self, session_manager):
        session = session_manager.create_session()
        session.last_activity -= 7200

        assert not session.on_cell_activated(42)

        assert session_manager.cleanup_stale_sessions(max_age_seconds=3600) == 0

    def test_sessions_are_independent(self, session_manager):
        a = session_manager.create_session()
        b = session_manager.create_session()
        a.on_restart()

        assert a.state.epoch == 1
        assert b.state.epoch == 0
