"""Events the engine publishes to the HUD and the app."""

from dataclasses import dataclass

from .calibration import CalibrationPhase
from .ledger import RoundOutcome


@dataclass(frozen=True)
class ScoreFeedback:
    outcome: RoundOutcome
    delta: int
    message: str
    total: int


@dataclass(frozen=True)
class CountdownTick:
    seconds_remaining: float
    text: str


@dataclass(frozen=True)
class SessionComplete:
    final_score: int
    message: str


@dataclass(frozen=True)
class CalibrationStatus:
    phase: CalibrationPhase
    message: str


EngineEvent = ScoreFeedback | CountdownTick | SessionComplete | CalibrationStatus
