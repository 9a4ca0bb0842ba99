import pytest

from dance_challenge.calibration import (
    CalibrationCoordinator,
    CalibrationPhase,
    calibrate,
    find_bone_pair,
    scale_and_shift,
)
from dance_challenge.pose import Keypoint


def _positions(pose):
    return [(kp.x, kp.y) for kp in pose.keypoints]


def _shoulders(pose):
    return pose.keypoint("rightShoulder"), pose.keypoint("leftShoulder")


def test_find_bone_pair_in_either_order(make_pose):
    skeleton = make_pose().skeleton
    idx = find_bone_pair("rightShoulder", "leftShoulder", skeleton)
    assert idx is not None
    assert {kp.part for kp in skeleton[idx]} == {"rightShoulder", "leftShoulder"}
    assert find_bone_pair("leftShoulder", "rightShoulder", skeleton) == idx


def test_find_bone_pair_missing(make_live_pose):
    live = make_live_pose(low=("leftShoulder",))
    assert find_bone_pair("rightShoulder", "leftShoulder", live.skeleton) is None


def test_scale_and_shift_lands_on_pair(make_pose):
    target = make_pose()
    pair = (Keypoint("rightShoulder", 100, 200, 0.9), Keypoint("leftShoulder", 300, 200, 0.9))

    assert scale_and_shift(target, pair)

    right, left = _shoulders(target)
    assert (right.x, right.y) == pytest.approx((100, 200))
    assert (left.x, left.y) == pytest.approx((300, 200))
    # Width doubled from 100 to 200, so the nose is twice as far above
    nose = target.keypoint("nose")
    assert nose.y == pytest.approx(200 - 2 * 50)


def test_calibrate_mirrors_when_facing_the_other_way(make_pose):
    target = make_pose()  # right shoulder at x=270, left at x=370
    pair = (Keypoint("rightShoulder", 370, 170, 0.9), Keypoint("leftShoulder", 270, 170, 0.9))

    assert calibrate(target, pair)

    right, left = _shoulders(target)
    assert right.x == pytest.approx(370)
    assert left.x == pytest.approx(270)
    assert target.keypoint("leftWrist").x == pytest.approx(200)


def test_stays_uncalibrated_without_shoulders(make_pose, make_live_pose):
    coordinator = CalibrationCoordinator()
    target = make_pose(is_target=True)
    before = _positions(target)
    live = make_live_pose(dx=40, low=("rightShoulder",))

    for _ in range(5):
        assert coordinator.maybe_calibrate(target, live) is CalibrationPhase.UNCALIBRATED
    assert coordinator.maybe_calibrate(target, None) is CalibrationPhase.UNCALIBRATED

    assert _positions(target) == before
    assert coordinator.reference_shoulder_pair is None


def test_calibrates_once_then_anchors_to_reference(make_pose, make_live_pose):
    coordinator = CalibrationCoordinator()
    target = make_pose(is_target=True)

    phase = coordinator.maybe_calibrate(target, make_live_pose(dx=40))
    assert phase is CalibrationPhase.CALIBRATED
    ref_right, ref_left = coordinator.reference_shoulder_pair
    assert ref_right.x == pytest.approx(310)
    assert target.keypoint("rightShoulder").x == pytest.approx(310)

    # Player moves; without near success the target stays on the reference
    moved = make_live_pose(dx=-60)
    coordinator.maybe_calibrate(target, moved, count_matches=lambda _: 2)
    assert target.keypoint("rightShoulder").x == pytest.approx(310)
    assert coordinator.phase is CalibrationPhase.CALIBRATED


def test_near_success_snaps_to_live_without_moving_reference(make_pose, make_live_pose):
    coordinator = CalibrationCoordinator()
    target = make_pose(is_target=True)
    coordinator.maybe_calibrate(target, make_live_pose(dx=40))

    coordinator.maybe_calibrate(target, make_live_pose(dx=20), count_matches=lambda _: 5)

    assert target.keypoint("rightShoulder").x == pytest.approx(290)
    assert coordinator.reference_shoulder_pair[0].x == pytest.approx(310)


def test_reference_is_a_copy(make_pose, make_live_pose):
    coordinator = CalibrationCoordinator()
    live = make_live_pose()
    coordinator.maybe_calibrate(make_pose(is_target=True), live)

    live.keypoint("rightShoulder").x = 0
    assert coordinator.reference_shoulder_pair[0].x == pytest.approx(270)


def test_match_count_is_taken_on_the_reference_anchored_target(make_pose, make_live_pose):
    coordinator = CalibrationCoordinator()
    target = make_pose(is_target=True)
    coordinator.maybe_calibrate(target, make_live_pose())
    coordinator.maybe_calibrate(target, make_live_pose(dx=40), count_matches=lambda _: 5)
    assert target.keypoint("rightShoulder").x == pytest.approx(310)

    seen = []

    def count(pose):
        seen.append(pose.keypoint("rightShoulder").x)
        return 0

    coordinator.maybe_calibrate(target, make_live_pose(dx=80), count_matches=count)
    assert seen == [pytest.approx(270)]
    assert target.keypoint("rightShoulder").x == pytest.approx(270)


def test_anchored_copy_undoes_the_snap(make_pose, make_live_pose):
    coordinator = CalibrationCoordinator()
    target = make_pose(is_target=True)
    coordinator.maybe_calibrate(target, make_live_pose())
    coordinator.maybe_calibrate(target, make_live_pose(dx=40), count_matches=lambda _: 5)

    scored = coordinator.anchored(target)
    assert scored is not target
    assert scored.keypoint("rightShoulder").x == pytest.approx(270)
    assert target.keypoint("rightShoulder").x == pytest.approx(310)


def test_adopt_mirrors_each_new_target_for_a_player_facing_away(make_pose):
    coordinator = CalibrationCoordinator()
    facing_away = make_pose(bone_threshold=0.2)
    for kp in facing_away.keypoints:
        kp.x = 640 - kp.x
    coordinator.maybe_calibrate(make_pose(is_target=True), facing_away)

    fresh = make_pose(dx=-50, is_target=True)
    assert coordinator.adopt(fresh)
    assert fresh.keypoint("rightShoulder").x == pytest.approx(370)
    assert fresh.keypoint("leftShoulder").x == pytest.approx(270)


def test_adopt_before_calibration_leaves_target_alone(make_pose):
    target = make_pose(is_target=True)
    before = _positions(target)
    assert not CalibrationCoordinator().adopt(target)
    assert _positions(target) == before


def test_calibrate_failure_does_not_mirror(make_pose):
    target = make_pose()
    before = _positions(target)
    # Facing the other way, but the shoulders are all but on top of each other
    pair = (Keypoint("rightShoulder", 300 + 5e-7, 170, 0.9), Keypoint("leftShoulder", 300, 170, 0.9))

    assert not calibrate(target, pair)
    assert _positions(target) == before
