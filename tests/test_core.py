"""Tests for the state machine, event bus and frame scheduler."""

from flappy.core.events import Event, EventBus, EventType, jump_event, score_event, sound_event
from flappy.core.scheduler import FrameScheduler
from flappy.core.state import State, StateMachine


class TestStateMachine:
    def test_forward_transitions(self):
        sm = StateMachine()
        assert sm.state == State.NOT_STARTED
        assert sm.transition(State.RUNNING)
        assert sm.is_running
        assert sm.transition(State.GAME_OVER)
        assert sm.state == State.GAME_OVER

    def test_game_over_cannot_resume(self):
        sm = StateMachine(State.GAME_OVER)
        assert not sm.transition(State.RUNNING)
        assert not sm.transition(State.NOT_STARTED)
        assert sm.state == State.GAME_OVER

    def test_cannot_skip_running(self):
        sm = StateMachine()
        assert not sm.transition(State.GAME_OVER)
        assert sm.state == State.NOT_STARTED

    def test_reset_notifies_listeners(self):
        sm = StateMachine(State.GAME_OVER)
        seen = []
        sm.add_listener(lambda old, new: seen.append((old, new)))

        sm.reset()

        assert sm.state == State.NOT_STARTED
        assert seen == [(State.GAME_OVER, State.NOT_STARTED)]

    def test_reset_when_idle_is_silent(self):
        sm = StateMachine()
        seen = []
        sm.add_listener(lambda old, new: seen.append((old, new)))
        sm.reset()
        assert seen == []

    def test_failing_listener_does_not_block_transition(self):
        sm = StateMachine()

        def broken(old, new):
            raise ValueError("boom")

        seen = []
        sm.add_listener(broken)
        sm.add_listener(lambda old, new: seen.append(new))

        assert sm.transition(State.RUNNING)
        assert seen == [State.RUNNING]

    def test_remove_listener(self):
        sm = StateMachine()
        seen = []
        listener = lambda old, new: seen.append(new)  # noqa: E731
        sm.add_listener(listener)
        sm.remove_listener(listener)
        sm.transition(State.RUNNING)
        assert seen == []


class TestEventBus:
    def test_subscribe_and_emit(self):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.JUMP, received.append)

        bus.emit(jump_event())
        bus.emit(Event(EventType.RETRY))

        assert [e.type for e in received] == [EventType.JUMP]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe(EventType.JUMP, received.append)
        unsubscribe()
        bus.emit(jump_event())
        assert received == []

    def test_subscribe_all(self):
        bus = EventBus()
        received = []
        bus.subscribe_all(received.append)
        bus.emit(jump_event())
        bus.emit(score_event(5))
        assert len(received) == 2

    def test_handler_error_is_contained(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("speaker unplugged")

        bus.subscribe(EventType.SOUND_PLAY, broken)
        bus.subscribe(EventType.SOUND_PLAY, received.append)

        bus.emit(sound_event("jump"))

        assert received[0].data == {"sound": "jump"}

    def test_history_is_bounded(self):
        bus = EventBus(history_limit=3)
        for score in range(5):
            bus.emit(score_event(score))

        history = bus.get_history(EventType.SCORE_CHANGED, limit=10)
        assert [e.data["score"] for e in history] == [2, 3, 4]

        bus.clear_history()
        assert bus.get_history() == []


class TestFrameScheduler:
    def test_runs_pending_callbacks_once(self):
        scheduler = FrameScheduler()
        calls = []
        scheduler.schedule(lambda: calls.append("a"))
        scheduler.schedule(lambda: calls.append("b"))

        assert scheduler.run_frame() == 2
        assert calls == ["a", "b"]
        assert scheduler.run_frame() == 0
        assert scheduler.frame_count == 2

    def test_rescheduled_callback_waits_for_next_frame(self):
        scheduler = FrameScheduler()
        calls = []

        def loop():
            calls.append(scheduler.frame_count)
            scheduler.schedule(loop)

        scheduler.schedule(loop)
        for _ in range(3):
            assert scheduler.run_frame() == 1

        assert calls == [1, 2, 3]
        assert scheduler.pending == 1

    def test_clear(self):
        scheduler = FrameScheduler()
        scheduler.schedule(lambda: None)
        scheduler.clear()
        assert scheduler.pending == 0
        assert scheduler.run_frame() == 0
