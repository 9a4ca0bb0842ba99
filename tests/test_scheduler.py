import random

from dance_challenge.engine import ChallengeEngine
from dance_challenge.events import CountdownTick, ScoreFeedback, SessionComplete
from dance_challenge.pose import DanceMove
from dance_challenge.scheduler import SessionScheduler, schedule_session


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_call_later_fires_once():
    clock = FakeClock()
    sched = SessionScheduler(clock)
    fired = []
    sched.call_later(2, lambda: fired.append(clock.now))

    for t in range(5):
        clock.now = t
        sched.pump()
    assert fired == [2]


def test_call_every_and_render():
    clock = FakeClock()
    sched = SessionScheduler(clock)
    ticks, frames = [], []
    sched.call_every(1, lambda: ticks.append(clock.now))
    sched.on_render(lambda: frames.append(clock.now))

    for t in range(4):
        clock.now = t
        sched.pump()
    assert ticks == [1, 2, 3]
    assert frames == [0, 1, 2, 3]


def test_slow_frame_skips_missed_ticks():
    clock = FakeClock()
    sched = SessionScheduler(clock)
    ticks = []
    sched.call_every(1, lambda: ticks.append(clock.now))

    clock.now = 5
    sched.pump()
    clock.now = 6
    sched.pump()
    assert ticks == [5, 6]


def test_cancel_stops_everything():
    clock = FakeClock()
    sched = SessionScheduler(clock)
    calls = []
    sched.call_every(1, lambda: calls.append("tick"))
    sched.on_render(lambda: calls.append("frame"))

    clock.now = 1
    sched.pump()
    sched.cancel()
    clock.now = 2
    sched.pump()

    assert calls == ["tick", "frame"]
    assert not sched.active


def test_cancel_from_inside_a_timer():
    clock = FakeClock()
    sched = SessionScheduler(clock)
    calls = []
    sched.call_later(1, sched.cancel)
    sched.call_later(1, lambda: calls.append("late"))
    sched.on_render(lambda: calls.append("frame"))

    clock.now = 1
    sched.pump()
    assert calls == []


def test_schedule_session_runs_a_whole_game(make_pose):
    clock = FakeClock()
    sched = SessionScheduler(clock)
    moves = [DanceMove([make_pose()]) for _ in range(2)]
    engine = ChallengeEngine(moves, predicate=lambda target, live: 6, rng=random.Random(0))
    events = []
    engine.subscribe(events.append)
    started = []

    schedule_session(sched, engine, lambda: [], on_playback=lambda: started.append(clock.now),
                     setup_seconds=5, tick_seconds=1)

    for t in range(5):
        clock.now = t
        sched.pump()
    assert not [e for e in events if isinstance(e, CountdownTick)]

    for t in range(5, 40):
        clock.now = t
        sched.pump()

    assert started == [5]
    assert len([e for e in events if isinstance(e, ScoreFeedback)]) == 2
    assert [e for e in events if isinstance(e, SessionComplete)] == [SessionComplete(4, "Noice! :-)")]
    assert engine.finished
    assert not sched.active
