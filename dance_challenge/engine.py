"""Challenge engine: one session of the dance game.

Two entry points share the engine's state and are driven from outside:

  * ``on_frame`` -- once per display refresh; refreshes the live body and
    keeps the target calibrated to it.
  * ``on_tick`` -- every ``TICK_PERIOD_MS``; runs the round clock, which
    scores each round once and moves on to the next dance move.

Both run on the same thread, in whatever order the scheduler calls them.
"""

import logging
import random
from enum import Enum
from typing import Callable

from .calibration import CalibrationCoordinator, CalibrationPhase
from .clock import ClockSignal, RoundClock
from .events import (
    CalibrationStatus,
    CountdownTick,
    EngineEvent,
    ScoreFeedback,
    SessionComplete,
)
from .ledger import ScoreLedger
from .matching import MatchEvaluator, MatchPredicate, confident_keypoints, point_matches
from .messages import feedback_message, final_message
from .pose import DanceMove, Pose
from .sequencer import DanceSequencer, GameComplete, MalformedMove

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    IDLE = "idle"                # created, not started
    WARMUP = "warmup"            # waiting out the setup delay
    PLAYING = "playing"
    COMPLETE = "complete"        # terminal, start a new engine to play again


class ChallengeEngine:
    """Sequences target poses, scores rounds and drives calibration."""

    def __init__(self, moves: list[DanceMove],
                 predicate: MatchPredicate = point_matches,
                 rng: random.Random | None = None):
        self.predicate = predicate
        self.rng = rng or random.Random()

        self.sequencer = DanceSequencer(moves)
        self.ledger = ScoreLedger()
        self.clock = RoundClock()
        self.evaluator = MatchEvaluator(predicate)
        self.calibration = CalibrationCoordinator()

        self.phase: SessionPhase = SessionPhase.IDLE
        self.target: Pose | None = None
        self.live_pose: Pose | None = None
        self._listeners: list[Callable[[EngineEvent], None]] = []

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def subscribe(self, listener: Callable[[EngineEvent], None]):
        self._listeners.append(listener)

    def _emit(self, event: EngineEvent):
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def score(self) -> int:
        return self.ledger.total

    @property
    def finished(self) -> bool:
        return self.phase is SessionPhase.COMPLETE

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def start_session(self):
        """Reset everything and load the first move; playback waits for setup."""
        self.ledger.reset()
        self.clock.reset()
        self.evaluator.reset()
        self.calibration.reset()
        self.sequencer.reset()
        self.target = None
        self.live_pose = None
        self.phase = SessionPhase.WARMUP

        logger.info("Session started with %d dance moves", len(self.sequencer))
        self._emit(CalibrationStatus(CalibrationPhase.UNCALIBRATED,
                                     "Status: Starting calibration process"))
        self._advance()

    def begin_playback(self):
        """End of the setup delay: calibrate once and start the round clock."""
        if self.phase is not SessionPhase.WARMUP:
            return
        self.phase = SessionPhase.PLAYING
        self.clock.reset()
        if self.target is None:
            self.clock.suspend_round()

        self._calibrate()
        self._emit(CountdownTick(self.clock.seconds_remaining(), self.clock.countdown_text()))

    # ------------------------------------------------------------------
    # Render-rate entry point
    # ------------------------------------------------------------------
    def on_frame(self, poses: list[Pose]):
        if self.phase in (SessionPhase.IDLE, SessionPhase.COMPLETE):
            return
        self.live_pose = poses[0] if poses else None
        self.evaluator.observe(confident_keypoints(self.live_pose))
        if self.phase is SessionPhase.PLAYING:
            self._calibrate()

    # ------------------------------------------------------------------
    # Fixed-period entry point
    # ------------------------------------------------------------------
    def on_tick(self):
        if self.phase is not SessionPhase.PLAYING:
            return

        for signal in self.clock.tick():
            if signal is ClockSignal.SCORE_DUE:
                self._score_round()
            elif signal is ClockSignal.ROUND_COMPLETE:
                self._advance()

        if not self.finished:
            self._emit(CountdownTick(self.clock.seconds_remaining(),
                                     self.clock.countdown_text()))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _score_round(self):
        # Scored on the reference shoulders, not wherever the last snap left it
        matches = self.evaluator.evaluate(self.clock.round_index,
                                          self.calibration.anchored(self.target))
        if matches is None:
            return
        result = self.ledger.record_round(matches)
        logger.info("Round %d: %d matches, %+d (%s), score %d",
                    self.clock.round_index, matches, result.awarded,
                    result.outcome.value, self.ledger.total)
        self._emit(ScoreFeedback(
            outcome=result.outcome,
            delta=result.delta,
            message=feedback_message(result.outcome, self.rng),
            total=self.ledger.total,
        ))

    def _advance(self):
        result = self.sequencer.advance()
        if isinstance(result, GameComplete):
            self._finish()
            return
        if isinstance(result, MalformedMove):
            # Keep the previous target on screen; this round does not count
            self.clock.suspend_round()
            return

        self.target = result.target.copy()
        self.calibration.adopt(self.target)

    def _calibrate(self):
        before = self.calibration.phase
        phase = self.calibration.maybe_calibrate(
            self.target, self.live_pose,
            lambda target: self.predicate(target, self.evaluator.live))
        if phase is not before:
            self._emit(CalibrationStatus(phase, "Status: calibration process completed"))

    def _finish(self):
        self.phase = SessionPhase.COMPLETE
        message = final_message(self.ledger.total)
        logger.info("Session complete, final score %d", self.ledger.total)
        self._emit(SessionComplete(self.ledger.total, message))
