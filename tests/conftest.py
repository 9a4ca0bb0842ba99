import pytest

from dance_challenge.pose import Keypoint, Pose

# Standing body, roughly centred in a 640x480 frame
STANDING = {
    "nose": (320, 120),
    "leftEye": (330, 110),
    "rightEye": (310, 110),
    "leftEar": (342, 116),
    "rightEar": (298, 116),
    "leftShoulder": (370, 170),
    "rightShoulder": (270, 170),
    "leftElbow": (410, 110),
    "rightElbow": (230, 110),
    "leftWrist": (440, 50),
    "rightWrist": (200, 50),
    "leftHip": (352, 300),
    "rightHip": (288, 300),
    "leftKnee": (354, 385),
    "rightKnee": (286, 385),
    "leftAnkle": (356, 462),
    "rightAnkle": (284, 462),
}


def build_pose(dx=0.0, dy=0.0, scale=1.0, score=0.9, low=(), is_target=False,
               bone_threshold=0.0):
    keypoints = []
    for part, (x, y) in STANDING.items():
        keypoints.append(Keypoint(
            part,
            320 + (x - 320) * scale + dx,
            240 + (y - 240) * scale + dy,
            0.05 if part in low else score,
        ))
    return Pose(keypoints, is_target=is_target, bone_threshold=bone_threshold)


@pytest.fixture
def make_pose():
    return build_pose


@pytest.fixture
def make_live_pose():
    def _make(**kwargs):
        kwargs.setdefault("bone_threshold", 0.2)
        return build_pose(**kwargs)
    return _make
