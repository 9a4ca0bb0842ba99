"""Round clock: the fixed-period countdown that drives round boundaries."""

from enum import Enum

from .config import (
    COUNTDOWN_CAP_MS,
    COUNTDOWN_CYCLE_MS,
    ROUND_TICKS,
    SCORING_TICK,
    TICK_PERIOD_MS,
)


class ClockSignal(Enum):
    SCORE_DUE = "score_due"
    ROUND_COMPLETE = "round_complete"


class RoundPhase(Enum):
    OPEN = "open"                # waiting for the scoring tick
    SCORED = "scored"            # scored, nothing more this round
    SUSPENDED = "suspended"      # no target this round, never scores


class RoundClock:
    """Counts ticks within a round and says when to score and when to move on.

    ``tick()`` is the only thing that advances time; it never scores by
    itself, it only returns the signals due on this tick.
    """

    def __init__(self, tick_period_ms: int = TICK_PERIOD_MS,
                 scoring_tick: int = SCORING_TICK,
                 round_ticks: int = ROUND_TICKS,
                 cap_ms: int = COUNTDOWN_CAP_MS,
                 cycle_ms: int = COUNTDOWN_CYCLE_MS):
        self.tick_period_ms = tick_period_ms
        self.scoring_tick = scoring_tick
        self.round_ticks = round_ticks
        self.cap_ms = cap_ms
        self.cycle_ms = cycle_ms

        self.tick_count: int = 0
        self.round_index: int = 0
        self.phase: RoundPhase = RoundPhase.OPEN

    def reset(self):
        self.tick_count = 0
        self.round_index = 0
        self.phase = RoundPhase.OPEN

    @property
    def has_scored(self) -> bool:
        return self.phase is RoundPhase.SCORED

    def suspend_round(self):
        """Keep the current round from scoring (no valid target)."""
        self.phase = RoundPhase.SUSPENDED

    def tick(self) -> list[ClockSignal]:
        signals = []
        self.tick_count += 1

        if self.tick_count == self.scoring_tick and self.phase is RoundPhase.OPEN:
            self.phase = RoundPhase.SCORED
            signals.append(ClockSignal.SCORE_DUE)

        if self.tick_count >= self.round_ticks:
            self.tick_count = 0
            self.round_index += 1
            self.phase = RoundPhase.OPEN
            signals.append(ClockSignal.ROUND_COMPLETE)

        return signals

    # ------------------------------------------------------------------
    # Countdown display
    # ------------------------------------------------------------------
    def seconds_remaining(self) -> float:
        elapsed_ms = (self.tick_count * self.tick_period_ms) % self.cycle_ms
        remaining_ms = max(0, self.cap_ms - elapsed_ms)
        return round(remaining_ms / 1000.0, 1)

    def countdown_text(self) -> str:
        return f"{self.seconds_remaining():.1f}"
