"""Live pose source: webcam capture plus MediaPipe Pose.

MediaPipe reports 33 normalised landmarks; the game works with 17 named
parts in pixel coordinates, so each frame is mapped onto ``PART_NAMES``
with the landmark visibility as the keypoint score.
"""

import logging

import cv2
import mediapipe as mp
import numpy as np

from .config import (
    CAMERA_INDEX,
    CAMERA_WARMUP_READS,
    DETECTION_CONFIDENCE,
    HEIGHT,
    MIN_PART_CONFIDENCE,
    MODEL_COMPLEXITY,
    TRACKING_CONFIDENCE,
    WIDTH,
)
from .pose import Keypoint, Pose

logger = logging.getLogger(__name__)

# Game part name -> MediaPipe Pose landmark index
MEDIAPIPE_LANDMARKS = {
    "nose": 0,
    "leftEye": 2,
    "rightEye": 5,
    "leftEar": 7,
    "rightEar": 8,
    "leftShoulder": 11,
    "rightShoulder": 12,
    "leftElbow": 13,
    "rightElbow": 14,
    "leftWrist": 15,
    "rightWrist": 16,
    "leftHip": 23,
    "rightHip": 24,
    "leftKnee": 25,
    "rightKnee": 26,
    "leftAnkle": 27,
    "rightAnkle": 28,
}


class AcquisitionFailure(RuntimeError):
    """The camera could not be opened or never delivered a frame."""


def landmarks_to_pose(landmarks, width: int, height: int) -> Pose:
    """Convert MediaPipe pose landmarks to a live ``Pose`` in pixels."""
    keypoints = []
    for part, idx in MEDIAPIPE_LANDMARKS.items():
        lm = landmarks[idx]
        keypoints.append(Keypoint(
            part=part,
            x=float(lm.x * width),
            y=float(lm.y * height),
            score=float(getattr(lm, "visibility", 1.0)),
        ))
    return Pose(keypoints, is_target=False, bone_threshold=MIN_PART_CONFIDENCE)


class PoseTracker:
    """Owns the camera and the detector; ``read()`` once per display refresh."""

    def __init__(self, camera_index: int = CAMERA_INDEX):
        self.cap = cv2.VideoCapture(camera_index)
        if not self.cap.isOpened():
            self.cap.release()
            raise AcquisitionFailure(f"Camera {camera_index} is unavailable or access was denied")
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, WIDTH)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, HEIGHT)

        # Stream is only ready once it produces a frame
        for _ in range(CAMERA_WARMUP_READS):
            ok, _frame = self.cap.read()
            if ok:
                break
        else:
            self.cap.release()
            raise AcquisitionFailure(f"Camera {camera_index} opened but delivered no frames")

        self._pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=MODEL_COMPLEXITY,
            smooth_landmarks=True,
            enable_segmentation=False,
            min_detection_confidence=DETECTION_CONFIDENCE,
            min_tracking_confidence=TRACKING_CONFIDENCE,
        )
        logger.info("Camera %d ready", camera_index)

    def read(self) -> tuple[np.ndarray | None, list[Pose]]:
        """Next mirrored BGR frame and the poses found in it (zero or one)."""
        ok, frame = self.cap.read()
        if not ok:
            return None, []
        frame = cv2.resize(cv2.flip(frame, 1), (WIDTH, HEIGHT))

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        res = self._pose.process(rgb)
        if res.pose_landmarks is None:
            return frame, []
        return frame, [landmarks_to_pose(res.pose_landmarks.landmark, WIDTH, HEIGHT)]

    def close(self):
        self._pose.close()
        self.cap.release()
