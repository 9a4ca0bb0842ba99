"""Point matching between the live body and the target pose."""

import logging
from typing import Callable

import numpy as np

from .config import CORE_PARTS, MATCH_TOLERANCE_PX, MIN_PART_CONFIDENCE, PART_NAMES
from .pose import Keypoint, Pose

logger = logging.getLogger(__name__)

LiveKeypoints = dict[int, Keypoint]
MatchPredicate = Callable[[Pose, LiveKeypoints], int]


def confident_keypoints(pose: Pose | None,
                        min_confidence: float = MIN_PART_CONFIDENCE) -> LiveKeypoints:
    """Core-part keypoints of a live pose that are confident enough to use."""
    if pose is None:
        return {}
    live = {}
    for idx in CORE_PARTS:
        kp = pose.keypoint(PART_NAMES[idx])
        if kp is not None and kp.score > min_confidence:
            live[idx] = kp
    return live


def point_matches(target: Pose | None, live: LiveKeypoints,
                  tolerance: float = MATCH_TOLERANCE_PX,
                  min_confidence: float = MIN_PART_CONFIDENCE) -> int:
    """Count the core parts whose live keypoint sits close to the target's."""
    if target is None or not live:
        return 0

    matches = 0
    for idx in CORE_PARTS:
        live_kp = live.get(idx)
        if live_kp is None or live_kp.score <= min_confidence:
            continue
        target_kp = target.keypoint(PART_NAMES[idx])
        if target_kp is None:
            continue
        dist = np.hypot(live_kp.x - target_kp.x, live_kp.y - target_kp.y)
        if dist < tolerance:
            matches += 1
    return matches


class MatchEvaluator:
    """Round-scoped, fire-once wrapper around the matching predicate.

    The render loop calls ``observe`` every frame; the round clock asks
    ``evaluate`` once per round, which reads whatever frame came last.
    """

    def __init__(self, predicate: MatchPredicate = point_matches):
        self.predicate = predicate
        self.live: LiveKeypoints = {}
        self._last_round: int | None = None

    def reset(self):
        self.live = {}
        self._last_round = None

    def observe(self, live: LiveKeypoints):
        self.live = live

    def evaluate(self, round_index: int, target: Pose | None) -> int | None:
        """Match count for ``round_index``, or ``None`` if already evaluated."""
        if self._last_round == round_index:
            logger.warning("Round %d already evaluated, ignoring", round_index)
            return None
        self._last_round = round_index
        return self.predicate(target, self.live)
