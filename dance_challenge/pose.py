"""Pose data model: keypoints, skeletons and dance moves."""

from dataclasses import dataclass, field

from .config import ADJACENT_PAIRS


# ---------------------------------------------------------------------------
# Keypoint
# ---------------------------------------------------------------------------
@dataclass
class Keypoint:
    """A tracked body landmark: pixel position plus detection confidence."""

    part: str
    x: float
    y: float
    score: float = 0.0

    def copy(self) -> "Keypoint":
        return Keypoint(self.part, self.x, self.y, self.score)

    def to_dict(self) -> dict:
        return {
            "part": self.part,
            "score": self.score,
            "position": {"x": self.x, "y": self.y},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Keypoint":
        pos = data.get("position", {})
        return cls(
            part=data["part"],
            x=float(pos.get("x", 0.0)),
            y=float(pos.get("y", 0.0)),
            score=float(data.get("score", 0.0)),
        )


Bone = tuple[Keypoint, Keypoint]


# ---------------------------------------------------------------------------
# Pose
# ---------------------------------------------------------------------------
@dataclass
class Pose:
    """One body: keypoints indexed by part, plus the bones joining them.

    The skeleton is derived from the keypoints and holds the very same
    ``Keypoint`` objects, so moving a keypoint in place moves its bones.
    """

    keypoints: list[Keypoint]
    is_target: bool = False
    bone_threshold: float = field(default=0.0, repr=False)
    skeleton: list[Bone] = field(init=False, repr=False)

    def __post_init__(self):
        self.skeleton = build_skeleton(self.keypoints, self.bone_threshold)

    def keypoint(self, part: str) -> Keypoint | None:
        for kp in self.keypoints:
            if kp.part == part:
                return kp
        return None

    def copy(self) -> "Pose":
        return Pose([kp.copy() for kp in self.keypoints], self.is_target,
                    self.bone_threshold)

    def to_dict(self) -> dict:
        return {
            "pose": {
                "score": max((kp.score for kp in self.keypoints), default=0.0),
                "keypoints": [kp.to_dict() for kp in self.keypoints],
            },
            "skeleton": [[a.to_dict(), b.to_dict()] for a, b in self.skeleton],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Pose":
        """Build a pose from a recorded ``{"pose": {"keypoints": [...]}}`` record.

        Any recorded skeleton is ignored and rebuilt from the keypoints.
        """
        body = data.get("pose", data)
        keypoints = [Keypoint.from_dict(kp) for kp in body["keypoints"]]
        return cls(keypoints, is_target=bool(body.get("target", False)))


def build_skeleton(keypoints: list[Keypoint], min_score: float = 0.0) -> list[Bone]:
    """Connect every adjacent pair of parts present in ``keypoints``.

    Parts scoring at or below ``min_score`` are left out (0.0 keeps all).
    """
    by_part = {kp.part: kp for kp in keypoints
               if min_score <= 0.0 or kp.score > min_score}
    bones = []
    for part_a, part_b in ADJACENT_PAIRS:
        if part_a in by_part and part_b in by_part:
            bones.append((by_part[part_a], by_part[part_b]))
    return bones


# ---------------------------------------------------------------------------
# Dance move
# ---------------------------------------------------------------------------
@dataclass
class DanceMove:
    """A recorded move; only its first pose is used as the round's target."""

    poses: list[Pose | None] = field(default_factory=list)

    @property
    def target(self) -> Pose | None:
        if not self.poses:
            return None
        return self.poses[0]

    def to_dict(self) -> dict:
        return {"poses": [p.to_dict() for p in self.poses if p is not None]}

    @classmethod
    def from_dict(cls, data: dict) -> "DanceMove":
        poses = []
        for raw in data.get("poses") or []:
            try:
                poses.append(Pose.from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError):
                poses.append(None)
        return cls(poses)
