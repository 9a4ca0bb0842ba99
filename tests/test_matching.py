from dance_challenge.matching import MatchEvaluator, confident_keypoints, point_matches


def test_confident_keypoints_keeps_core_parts_only(make_live_pose):
    live = confident_keypoints(make_live_pose(low=("leftWrist",)))
    assert sorted(live) == [5, 6, 7, 8, 10, 11, 12]
    assert confident_keypoints(None) == {}


def test_identical_pose_matches_all_core_parts(make_pose, make_live_pose):
    target = make_pose(is_target=True)
    live = confident_keypoints(make_live_pose())
    assert point_matches(target, live) == 8


def test_far_away_pose_matches_nothing(make_pose, make_live_pose):
    target = make_pose(is_target=True)
    live = confident_keypoints(make_live_pose(dx=200))
    assert point_matches(target, live) == 0


def test_small_offset_still_matches(make_pose, make_live_pose):
    target = make_pose(is_target=True)
    live = confident_keypoints(make_live_pose(dx=10, dy=-10))
    assert point_matches(target, live) == 8


def test_low_confidence_parts_do_not_count(make_pose, make_live_pose):
    target = make_pose(is_target=True)
    live = confident_keypoints(make_live_pose(low=("leftWrist", "rightWrist", "leftHip")))
    assert point_matches(target, live) == 5


def test_no_target_means_no_matches(make_live_pose):
    assert point_matches(None, confident_keypoints(make_live_pose())) == 0


def test_evaluator_fires_once_per_round(make_pose):
    calls = []

    def predicate(target, live):
        calls.append(dict(live))
        return 6

    evaluator = MatchEvaluator(predicate)
    target = make_pose(is_target=True)

    assert evaluator.evaluate(0, target) == 6
    assert evaluator.evaluate(0, target) is None
    assert evaluator.evaluate(1, target) == 6
    assert len(calls) == 2


def test_evaluator_reads_latest_frame(make_pose, make_live_pose):
    evaluator = MatchEvaluator()
    target = make_pose(is_target=True)

    evaluator.observe(confident_keypoints(make_live_pose()))
    evaluator.observe(confident_keypoints(make_live_pose(dx=300)))
    assert evaluator.evaluate(0, target) == 0
