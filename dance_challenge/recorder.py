"""Dance recorder: capture the player's poses as a replayable playlist."""

import logging
from pathlib import Path

from .config import RECORD_INTERVAL_SECONDS
from .playlist import save_playlist
from .pose import DanceMove, Pose

logger = logging.getLogger(__name__)


class DanceRecorder:
    """Keeps one pose per round-length interval while recording."""

    def __init__(self, interval: float = RECORD_INTERVAL_SECONDS):
        self.interval = interval
        self.recording: bool = False
        self.moves: list[DanceMove] = []
        self._next_sample: float = 0.0

    def start(self, now: float):
        self.recording = True
        self.moves = []
        self._next_sample = now
        logger.info("Recording started")

    def stop(self) -> list[DanceMove]:
        self.recording = False
        logger.info("Recording stopped with %d moves", len(self.moves))
        return list(self.moves)

    def sample(self, pose: Pose | None, now: float) -> bool:
        """Store ``pose`` as a new move if the interval has elapsed."""
        if not self.recording or pose is None or now < self._next_sample:
            return False
        snapshot = pose.copy()
        snapshot.is_target = False
        self.moves.append(DanceMove([snapshot]))
        self._next_sample = now + self.interval
        return True

    def save(self, path: str | Path):
        save_playlist(path, self.moves)
