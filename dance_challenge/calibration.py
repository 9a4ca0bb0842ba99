"""Calibration: fit the target pose onto the player's body.

Geometry helpers work in place on a ``Pose``'s keypoints.  The
``CalibrationCoordinator`` decides which of them to apply each frame:

  1. **UNCALIBRATED** -- look for the player's shoulders; once found, reflect,
     scale and shift the target onto them and remember that shoulder pair.
  2. **CALIBRATED** -- keep the target anchored to the remembered pair and,
     when the player is nearly there, pull it toward their live shoulders
     for the current frame.
"""

import logging
from enum import Enum
from typing import Callable

import numpy as np

from .config import NEAR_SUCCESS_MATCHES, SHOULDER_PAIR
from .pose import Bone, Keypoint, Pose

logger = logging.getLogger(__name__)

_EPS = 1e-6


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
def find_bone_pair(name_a: str, name_b: str, skeleton: list[Bone]) -> int | None:
    """Index of the bone joining ``name_a`` and ``name_b`` (either order)."""
    wanted = {name_a, name_b}
    for i, (part_a, part_b) in enumerate(skeleton):
        if {part_a.part, part_b.part} == wanted:
            return i
    return None


def _right_left(pair: Bone) -> tuple[np.ndarray, np.ndarray]:
    a, b = pair
    if a.part.startswith("left") and not b.part.startswith("left"):
        a, b = b, a
    return np.array([a.x, a.y], dtype=float), np.array([b.x, b.y], dtype=float)


def _target_shoulders(target: Pose) -> Bone | None:
    right = target.keypoint(SHOULDER_PAIR[0])
    left = target.keypoint(SHOULDER_PAIR[1])
    if right is None or left is None:
        return None
    return right, left


def scale_and_shift(target: Pose, shoulder_pair: Bone) -> bool:
    """Scale the target by shoulder width and move it onto ``shoulder_pair``.

    Returns ``False`` (and leaves the target alone) when either shoulder
    pair is missing or degenerate.
    """
    own = _target_shoulders(target)
    if own is None or shoulder_pair is None:
        return False

    t_right, t_left = _right_left(own)
    r_right, r_left = _right_left(shoulder_pair)
    t_width = np.linalg.norm(t_left - t_right)
    r_width = np.linalg.norm(r_left - r_right)
    if t_width < _EPS or r_width < _EPS:
        return False

    scale = r_width / t_width
    t_mid = (t_right + t_left) / 2.0
    r_mid = (r_right + r_left) / 2.0
    for kp in target.keypoints:
        p = r_mid + (np.array([kp.x, kp.y]) - t_mid) * scale
        kp.x, kp.y = float(p[0]), float(p[1])
    return True


def calibrate(target: Pose, shoulder_pair: Bone) -> bool:
    """One-shot reprojection of the target onto the player's shoulders.

    Mirrors the target horizontally first if the player faces the other way,
    then scales and shifts it.  A missing or degenerate shoulder pair on
    either side leaves the target untouched.
    """
    own = _target_shoulders(target)
    if own is None or shoulder_pair is None:
        return False

    t_right, t_left = _right_left(own)
    r_right, r_left = _right_left(shoulder_pair)
    if np.linalg.norm(t_left - t_right) < _EPS or np.linalg.norm(r_left - r_right) < _EPS:
        return False

    if np.sign(t_left[0] - t_right[0]) * np.sign(r_left[0] - r_right[0]) < 0:
        mid_x = (t_right[0] + t_left[0]) / 2.0
        for kp in target.keypoints:
            kp.x = 2.0 * mid_x - kp.x
    return scale_and_shift(target, shoulder_pair)


# ---------------------------------------------------------------------------
# Coordinator
# ---------------------------------------------------------------------------
class CalibrationPhase(Enum):
    UNCALIBRATED = "uncalibrated"
    CALIBRATED = "calibrated"


class CalibrationCoordinator:
    """Moves from UNCALIBRATED to CALIBRATED once per session."""

    def __init__(self, near_success: int = NEAR_SUCCESS_MATCHES):
        self.near_success = near_success
        self.phase: CalibrationPhase = CalibrationPhase.UNCALIBRATED
        self.reference_shoulder_pair: tuple[Keypoint, Keypoint] | None = None

    def reset(self):
        self.phase = CalibrationPhase.UNCALIBRATED
        self.reference_shoulder_pair = None

    @property
    def calibrated(self) -> bool:
        return self.phase is CalibrationPhase.CALIBRATED

    def maybe_calibrate(self, target: Pose | None, live: Pose | None,
                        count_matches: Callable[[Pose], int] | None = None) -> CalibrationPhase:
        """Run whichever calibration step the current phase calls for.

        Safe to call every frame: a missing shoulder pair is not an error,
        the next call simply tries again.  ``count_matches`` is asked about
        the target only after it is back on the reference shoulders, so a
        snap toward the live shoulders never outlives its frame.
        """
        if target is None:
            return self.phase

        if self.phase is CalibrationPhase.UNCALIBRATED:
            pair = self._live_shoulders(live)
            if pair is None:
                return self.phase
            if calibrate(target, pair):
                right, left = pair if pair[0].part == SHOULDER_PAIR[0] else pair[::-1]
                self.reference_shoulder_pair = (right.copy(), left.copy())
                self.phase = CalibrationPhase.CALIBRATED
                logger.info("Calibrated to shoulders at (%.0f, %.0f)-(%.0f, %.0f)",
                            right.x, right.y, left.x, left.y)
            return self.phase

        scale_and_shift(target, self.reference_shoulder_pair)
        if count_matches is None:
            return self.phase

        # Near success: snap toward the live shoulders, reference untouched
        if count_matches(target) > self.near_success:
            pair = self._live_shoulders(live)
            if pair is not None:
                scale_and_shift(target, pair)
        return self.phase

    def adopt(self, target: Pose) -> bool:
        """Fit a freshly loaded target onto the reference shoulders.

        Goes through ``calibrate`` so a new move faces the same way as the
        player, not just the first one.
        """
        if not self.calibrated:
            return False
        return calibrate(target, self.reference_shoulder_pair)

    def anchored(self, target: Pose | None) -> Pose | None:
        """Copy of ``target`` on the reference shoulders, any snap undone."""
        if target is None:
            return None
        pose = target.copy()
        if self.calibrated:
            scale_and_shift(pose, self.reference_shoulder_pair)
        return pose

    @staticmethod
    def _live_shoulders(live: Pose | None) -> Bone | None:
        if live is None:
            return None
        idx = find_bone_pair(SHOULDER_PAIR[0], SHOULDER_PAIR[1], live.skeleton)
        if idx is None:
            return None
        return live.skeleton[idx]
