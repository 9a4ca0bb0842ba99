"""Score ledger: per-round deltas, running total and the streak bonus."""

import logging
from dataclasses import dataclass
from enum import Enum

from .config import BONUS_MIN_ROUNDS, BONUS_WINDOW, MATCH_THRESHOLD

logger = logging.getLogger(__name__)


class RoundOutcome(Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    BONUS = "bonus"


@dataclass(frozen=True)
class RoundResult:
    outcome: RoundOutcome
    delta: int
    awarded: int                 # what the total actually moved by


class ScoreLedger:
    """Append-only history of round deltas, seeded with a single 0."""

    def __init__(self, match_threshold: int = MATCH_THRESHOLD):
        self.match_threshold = match_threshold
        self.total: int = 0
        self._history: list[int] = [0]

    def reset(self):
        self.total = 0
        self._history = [0]

    @property
    def history(self) -> tuple[int, ...]:
        return tuple(self._history)

    @property
    def rounds_scored(self) -> int:
        return len(self._history) - 1

    def record_round(self, match_count: int) -> RoundResult:
        """Score one round and return how it went.

        The delta is the number of matched parts above (or below) the
        threshold.  When the last ``BONUS_WINDOW`` deltas, this one included,
        are all positive the delta is counted twice.
        """
        delta = match_count - self.match_threshold
        if delta > 0:
            outcome = RoundOutcome.POSITIVE
        elif delta < 0:
            outcome = RoundOutcome.NEGATIVE
        else:
            outcome = RoundOutcome.NEUTRAL

        self._history.append(delta)
        self.total += delta
        awarded = delta

        if self._streak_bonus_due():
            self.total += delta
            awarded += delta
            outcome = RoundOutcome.BONUS

        logger.debug("Round %d: delta=%d outcome=%s total=%d",
                     self.rounds_scored, delta, outcome.value, self.total)
        return RoundResult(outcome, delta, awarded)

    def _streak_bonus_due(self) -> bool:
        # Rounds only, the seed 0 never counts
        if self.rounds_scored < BONUS_MIN_ROUNDS:
            return False
        window = self._history[-BONUS_WINDOW:]
        return all(d > 0 for d in window)
