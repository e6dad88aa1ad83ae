"""
GestureSession state machine tests.

Covers snap-back vs commit at release, the single-flight guard while a commit
is in flight, deck exhaustion, failed decision writes, and teardown.

Run:
    pytest tests/test_gesture_session.py -v
"""

import asyncio

import pytest

from conftest import RecordingRecorder, make_quest
from swipe import EventKind, GestureConfig, GestureSession, GestureState, RollingLog
from swipe.models import Action, Direction

FAST = GestureConfig(exit_duration=0.01)


def run(coro):
    return asyncio.run(coro)


class TestSnapBack:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.recorder = RecordingRecorder()
        self.session = GestureSession([make_quest("A"), make_quest("B")], "user-1", self.recorder, config=FAST)

    @pytest.mark.parametrize("end_x", [0, 50, -50, 100, -100])
    def test_release_within_threshold_resets_to_idle(self, end_x):
        self.session.press(200)
        moved = self.session.move(200 + end_x)
        assert moved.offset == end_x
        outcome = self.session.release()
        assert outcome.accepted
        assert outcome.committed is None
        assert self.session.state is GestureState.IDLE
        assert self.session.offset == 0.0
        assert self.session.index == 0
        assert self.session.dispatched == []

    def test_release_without_drag_is_ignored(self):
        outcome = self.session.release(500)
        assert not outcome.accepted
        assert outcome.reason == "no active drag"
        assert self.session.state is GestureState.IDLE

    def test_move_without_drag_is_ignored(self):
        outcome = self.session.move(400)
        assert not outcome.accepted
        assert self.session.offset == 0.0

    def test_move_reports_visual_tuple(self):
        self.session.press(0)
        outcome = self.session.move(-150)
        assert outcome.feedback.rotation == pytest.approx(-15.0)
        assert outcome.feedback.reject_opacity == 1.0
        assert outcome.feedback.accept_opacity == 0.0

    def test_press_while_dragging_reanchors(self):
        self.session.press(0)
        self.session.move(90)
        self.session.press(90)
        assert self.session.move(120).offset == 30

    def test_non_finite_coordinate_rejected(self):
        with pytest.raises(ValueError):
            self.session.press(float("nan"))


class TestCommit:
    def test_worked_example_accept_snap_back_reject(self):
        """deck [A, B]: +150 accepts A, -50 snaps back on B, -120 rejects B and exhausts."""

        async def scenario():
            recorder = RecordingRecorder()
            session = GestureSession([make_quest("A"), make_quest("B")], "user-1", recorder, config=FAST)

            session.press(0)
            session.move(150)
            outcome = session.release()
            assert outcome.committed is Direction.RIGHT
            assert outcome.quest_id == "A"
            assert session.state is GestureState.COMMITTING
            assert session.offset == 300.0
            assert session.feedback.card_opacity == 0.0
            await session.settle()
            assert session.index == 1
            assert session.state is GestureState.IDLE
            assert session.offset == 0.0

            session.press(10)
            session.move(-40)
            assert session.release().committed is None
            assert session.index == 1
            assert session.offset == 0.0
            assert session.state is GestureState.IDLE

            session.press(0)
            outcome = session.release(-120)
            assert outcome.committed is Direction.LEFT
            await session.settle()
            assert session.index == 2
            assert session.state is GestureState.EXHAUSTED
            return recorder

        recorder = run(scenario())
        assert [(d.quest_id, d.action) for d in recorder.recorded] == [
            ("A", Action.ACCEPT),
            ("B", Action.REJECT),
        ]
        assert all(d.user_id == "user-1" for d in recorder.recorded)

    def test_manual_accept_during_commit_is_ignored(self):
        async def scenario():
            recorder = RecordingRecorder()
            session = GestureSession([make_quest("C"), make_quest("D")], "user-1", recorder, config=FAST)
            session.press(0)
            session.release(-200)
            assert session.state is GestureState.COMMITTING
            blocked = session.decide("like")
            assert not blocked.accepted
            assert blocked.reason == "commit in flight"
            assert not session.press(0).accepted
            assert not session.release(500).accepted
            await session.settle()
            return recorder, session

        recorder, session = run(scenario())
        assert [(d.quest_id, d.action) for d in recorder.recorded] == [("C", Action.REJECT)]
        assert session.index == 1

    def test_manual_decision_commits_immediately(self):
        async def scenario():
            recorder = RecordingRecorder()
            session = GestureSession([make_quest("A")], "user-1", recorder, config=FAST)
            outcome = session.decide("dislike")
            assert outcome.committed is Direction.LEFT
            assert session.offset == -300.0
            await session.settle()
            return recorder, session

        recorder, session = run(scenario())
        assert recorder.recorded[0].action is Action.REJECT
        assert session.state is GestureState.EXHAUSTED

    def test_manual_decision_during_drag_commits(self):
        async def scenario():
            session = GestureSession([make_quest("A"), make_quest("B")], "user-1", RecordingRecorder(), config=FAST)
            session.press(0)
            session.move(40)
            assert session.decide(Action.ACCEPT).committed is Direction.RIGHT
            await session.settle()
            return session

        session = run(scenario())
        assert session.index == 1

    def test_unknown_manual_action_raises(self):
        session = GestureSession([make_quest("A")], "user-1", RecordingRecorder(), config=FAST)
        with pytest.raises(ValueError):
            session.decide("maybe")

    def test_n_commits_exhaust_deck(self):
        async def scenario():
            recorder = RecordingRecorder()
            deck = [make_quest(str(i)) for i in range(4)]
            session = GestureSession(deck, "user-1", recorder, config=FAST)
            for i in range(4):
                session.press(0)
                session.release(150 if i % 2 else -150)
                await session.settle()
            assert session.state is GestureState.EXHAUSTED
            assert not session.press(0).accepted
            assert session.decide("like").reason == "deck exhausted"
            return recorder

        recorder = run(scenario())
        assert [d.quest_id for d in recorder.recorded] == ["0", "1", "2", "3"]

    def test_advance_does_not_wait_for_slow_store(self):
        async def scenario():
            recorder = RecordingRecorder(gate=True)
            session = GestureSession([make_quest("A"), make_quest("B")], "user-1", recorder, config=FAST)
            session.decide("like")
            await asyncio.sleep(0.05)
            assert session.index == 1
            assert session.state is GestureState.IDLE
            assert recorder.recorded == []
            recorder.release()
            await session.settle()
            return recorder

        recorder = run(scenario())
        assert [d.quest_id for d in recorder.recorded] == ["A"]


class TestEmptyDeck:
    def test_starts_exhausted(self):
        log = RollingLog()
        session = GestureSession([], "user-1", RecordingRecorder(), sink=log)
        assert session.state is GestureState.EXHAUSTED
        assert session.current_quest is None
        assert [e.kind for e in log.events] == [EventKind.LOADED, EventKind.EXHAUSTED]
        assert not session.press(0).accepted

    def test_blank_user_rejected(self):
        with pytest.raises(ValueError):
            GestureSession([make_quest("A")], "  ", RecordingRecorder())


class TestFailedCommit:
    def test_failure_reported_once_after_advance(self):
        async def scenario():
            log = RollingLog(maxlen=20)
            recorder = RecordingRecorder(fail=True)
            session = GestureSession([make_quest("A"), make_quest("B")], "user-1", recorder, sink=log, config=FAST)
            session.press(0)
            session.release(180)
            await session.settle()
            return session, log

        session, log = run(scenario())
        assert session.index == 1
        assert session.state is GestureState.IDLE
        failed = [e for e in log.events if e.kind is EventKind.COMMIT_FAILED]
        assert len(failed) == 1
        assert failed[0].quest_id == "A"
        assert "store unavailable" in failed[0].reason
        assert len(session.failures) == 1
        assert session.snapshot().failed_commits == 1


class TestTeardown:
    def test_close_during_commit_lets_write_finish_quietly(self):
        async def scenario():
            log = RollingLog(maxlen=20)
            recorder = RecordingRecorder(gate=True, fail=True)
            session = GestureSession([make_quest("A"), make_quest("B")], "user-1", recorder, sink=log, config=FAST)
            session.decide("like")
            session.close()
            assert session.closed
            recorder.release()
            await session.settle()
            return session, log, recorder

        session, log, recorder = run(scenario())
        assert recorder.calls == 1
        assert len(session.failures) == 1
        kinds = [e.kind for e in log.events]
        assert kinds[-1] is EventKind.CLOSED
        assert EventKind.COMMIT_FAILED not in kinds
        # Exit timer was cancelled, so the index never advanced.
        assert session.index == 0

    def test_closed_session_ignores_input(self):
        session = GestureSession([make_quest("A")], "user-1", RecordingRecorder())
        session.close()
        assert session.press(0).reason == "session closed"
        assert session.decide("like").reason == "session closed"
        session.close()


class TestSnapshot:
    def test_snapshot_fields(self):
        session = GestureSession([make_quest("A"), make_quest("B")], "user-1", RecordingRecorder(), session_id="abc")
        snap = session.snapshot()
        assert snap.session_id == "abc"
        assert snap.deck_size == 2
        assert snap.remaining == 2
        assert snap.current_quest.id == "A"
        assert snap.state is GestureState.IDLE
