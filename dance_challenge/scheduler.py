"""Session scheduler: the timers that drive one engine.

Every timer of a session lives here: the one-shot setup delay, the fixed
countdown period and the per-refresh render callback.  ``cancel()`` drops
them all at once, so a finished or abandoned session can never touch the
engine again.
"""

import logging
import time
from typing import Callable

from .config import CALIBRATE_SETUP_SECONDS, TICK_PERIOD_MS
from .events import SessionComplete

logger = logging.getLogger(__name__)


class Timer:
    """A single scheduled callback, one-shot or repeating."""

    def __init__(self, callback: Callable[[], None], due: float,
                 interval: float | None = None):
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class SessionScheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._timers: list[Timer] = []
        self._render: Callable[[], None] | None = None
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(callback, self.clock() + delay)
        self._timers.append(timer)
        return timer

    def call_every(self, interval: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(callback, self.clock() + interval, interval)
        self._timers.append(timer)
        return timer

    def on_render(self, callback: Callable[[], None]):
        """Call ``callback`` once per ``pump`` (one display refresh) until cancelled."""
        self._render = callback

    def cancel(self):
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        self._render = None
        self.cancelled = True

    def pump(self, now: float | None = None):
        """Fire every timer that is due, then the render callback."""
        if self.cancelled:
            return
        now = self.clock() if now is None else now

        for timer in list(self._timers):
            if self.cancelled:
                return
            if timer.cancelled or timer.due > now:
                continue
            timer.callback()
            if timer.interval is None:
                timer.cancelled = True
            else:
                timer.due += timer.interval
                if timer.due <= now:
                    # Fell behind (slow frame); skip missed ticks, keep cadence
                    timer.due = now + timer.interval

        self._timers = [t for t in self._timers if not t.cancelled]
        if self._render is not None and not self.cancelled:
            self._render()


def schedule_session(scheduler: SessionScheduler, engine, latest_poses: Callable[[], list],
                     on_playback: Callable[[], None] | None = None,
                     setup_seconds: float = CALIBRATE_SETUP_SECONDS,
                     tick_seconds: float = TICK_PERIOD_MS / 1000.0):
    """Start ``engine`` and hand all of its timing to ``scheduler``."""

    def begin():
        engine.begin_playback()
        scheduler.call_every(tick_seconds, engine.on_tick)
        if on_playback is not None:
            on_playback()

    def stop_on_complete(event):
        if isinstance(event, SessionComplete):
            logger.debug("Session complete, cancelling timers")
            scheduler.cancel()

    engine.subscribe(stop_on_complete)
    engine.start_session()
    if engine.finished:
        return
    scheduler.call_later(setup_seconds, begin)
    scheduler.on_render(lambda: engine.on_frame(latest_poses()))
