"""
Event sink tests: rolling log, logging sink, composite fan-out, raising sinks.

Run:
    pytest tests/test_events.py -v
"""

import asyncio
import logging

import pytest

from conftest import RecordingRecorder, make_quest
from swipe import (
    CompositeSink,
    EventKind,
    GestureConfig,
    GestureSession,
    GestureState,
    LoggingSink,
    RollingLog,
    SessionEvent,
)


def _event(kind: EventKind, **fields) -> SessionEvent:
    return SessionEvent(kind=kind, session_id="s1", state=GestureState.IDLE, index=0, **fields)


class ExplodingSink:
    def notify(self, event):
        raise RuntimeError("sink broke")


class TestRollingLog:
    def test_keeps_last_maxlen_events(self):
        log = RollingLog(maxlen=3)
        for i in range(5):
            log.notify(_event(EventKind.IGNORED, reason=str(i)))
        assert [e.reason for e in log.events] == ["2", "3", "4"]

    def test_default_maxlen_is_five(self):
        log = RollingLog()
        for _ in range(8):
            log.notify(_event(EventKind.PRESS))
        assert len(log.events) == 5

    def test_lines_and_clear(self):
        log = RollingLog()
        log.notify(_event(EventKind.COMMIT, quest_id="q1", direction="right"))
        assert log.lines() == ["commit state=idle index=0 quest=q1 direction=right"]
        log.clear()
        assert log.events == []

    def test_rejects_zero_maxlen(self):
        with pytest.raises(ValueError):
            RollingLog(maxlen=0)


class TestSessionEvents:
    def test_transition_sequence(self):
        async def scenario():
            log = RollingLog(maxlen=50)
            session = GestureSession(
                [make_quest("A")], "user-1", RecordingRecorder(), sink=log,
                config=GestureConfig(exit_duration=0.0),
            )
            session.press(0)
            session.move(40)
            session.release()
            session.press(0)
            session.move(-150)
            session.release()
            await session.settle()
            session.press(0)
            return log

        log = asyncio.run(scenario())
        assert [e.kind for e in log.events] == [
            EventKind.LOADED,
            EventKind.PRESS,
            EventKind.DRAG,
            EventKind.SNAP_BACK,
            EventKind.PRESS,
            EventKind.DRAG,
            EventKind.COMMIT,
            EventKind.EXHAUSTED,
            EventKind.IGNORED,
        ]
        drag = log.events[2]
        assert drag.feedback.offset == 40
        assert log.events[-1].reason == "deck exhausted"

    def test_raising_sink_does_not_break_session(self, caplog):
        with caplog.at_level(logging.ERROR, logger="swipe.session"):
            session = GestureSession([make_quest("A")], "user-1", RecordingRecorder(), sink=ExplodingSink())
            assert session.press(0).accepted
        assert session.state is GestureState.DRAGGING
        assert "Event sink failed" in caplog.text


class TestCompositeAndLogging:
    def test_composite_fans_out_in_order(self):
        first, second = RollingLog(), RollingLog()
        CompositeSink(first, second).notify(_event(EventKind.ADVANCED))
        assert len(first.events) == len(second.events) == 1

    def test_logging_sink_levels(self, caplog):
        log = logging.getLogger("test.swipe.events")
        sink = LoggingSink(log)
        with caplog.at_level(logging.DEBUG, logger="test.swipe.events"):
            sink.notify(_event(EventKind.COMMIT_FAILED, reason="boom"))
            sink.notify(_event(EventKind.DRAG))
            sink.notify(_event(EventKind.PRESS))
        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.WARNING, logging.DEBUG, logging.INFO]
        assert "reason=boom" in caplog.records[0].getMessage()
