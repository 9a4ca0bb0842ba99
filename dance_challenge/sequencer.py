"""Dance sequencer: walks the playlist one move per round."""

import logging
from dataclasses import dataclass

from .pose import DanceMove, Pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NextMove:
    index: int
    target: Pose


@dataclass(frozen=True)
class GameComplete:
    moves_played: int


@dataclass(frozen=True)
class MalformedMove:
    index: int


AdvanceResult = NextMove | GameComplete | MalformedMove


class DanceSequencer:
    """Ordered playlist of dance moves with a current index.

    The index starts before the first move, so the first ``advance()``
    yields move 0.  Advancing past the last move wraps to 0 and reports
    ``GameComplete`` instead of a pose.
    """

    def __init__(self, moves: list[DanceMove]):
        self.moves = list(moves)
        self.index: int = -1

    def __len__(self) -> int:
        return len(self.moves)

    def reset(self):
        self.index = -1

    @property
    def started(self) -> bool:
        return self.index >= 0

    def advance(self) -> AdvanceResult:
        if self.index < len(self.moves) - 1:
            self.index += 1
        else:
            self.index = 0
            logger.info("Playlist finished after %d moves", len(self.moves))
            return GameComplete(len(self.moves))

        target = self.moves[self.index].target
        if target is None:
            logger.warning("Dance move %d has no target pose, skipping round", self.index)
            return MalformedMove(self.index)

        target.is_target = True
        return NextMove(self.index, target)
