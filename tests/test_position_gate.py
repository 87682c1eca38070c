from config import Config
from models.keypoints import Joint, PoseFrame
from models.position_gate import GateReason, PositionGate


gate = PositionGate(Config())


def test_plank_passes(make_frame):
    result = gate.check(make_frame(160))
    assert result.ok
    assert result.reason == GateReason.NONE


def test_bottom_of_pushup_passes(make_frame):
    assert gate.check(make_frame(80)).ok


def test_absent_frame_is_no_subject():
    result = gate.check(PoseFrame.absent())
    assert not result.ok
    assert result.reason == GateReason.NO_SUBJECT


def test_missing_hips_is_incomplete(make_frame):
    result = gate.check(make_frame(hide=(Joint.LEFT_HIP,)))
    assert result == (False, GateReason.INCOMPLETE_BODY)


def test_no_complete_arm_is_incomplete(make_frame):
    result = gate.check(make_frame(hide=(Joint.LEFT_WRIST, Joint.RIGHT_ELBOW)))
    assert result.reason == GateReason.INCOMPLETE_BODY


def test_one_complete_arm_is_enough(make_frame):
    assert gate.check(make_frame(hide=(Joint.RIGHT_ELBOW, Joint.RIGHT_WRIST))).ok


def test_low_confidence_counts_as_invisible(make_frame):
    result = gate.check(make_frame(visibility=0.3))
    assert result.reason == GateReason.INCOMPLETE_BODY


def test_tilted_body_is_not_horizontal(make_frame):
    frame = make_frame(positions={Joint.LEFT_HIP: (0.6, 0.95), Joint.RIGHT_HIP: (0.62, 0.95)})
    assert gate.check(frame).reason == GateReason.NOT_HORIZONTAL


def test_raised_hands_are_rejected(make_frame):
    frame = make_frame(positions={Joint.LEFT_WRIST: (0.3, 0.2), Joint.RIGHT_WRIST: (0.32, 0.2)})
    assert gate.check(frame).reason == GateReason.HANDS_TOO_HIGH


def test_only_visible_wrists_are_averaged(make_frame):
    # The hidden right wrist sits far above the shoulders but must be ignored
    frame = make_frame(positions={Joint.RIGHT_WRIST: (0.32, 0.0)}, hide=(Joint.RIGHT_WRIST,))
    assert gate.check(frame).ok


def test_upright_torso_is_standing(standing_frame):
    assert gate.check(standing_frame()).reason == GateReason.STANDING


def test_thresholds_come_from_config(make_frame):
    frame = make_frame(positions={Joint.LEFT_HIP: (0.6, 0.75), Joint.RIGHT_HIP: (0.62, 0.75)})
    assert gate.check(frame).ok
    strict = PositionGate(Config(horizontal_tolerance=0.1))
    assert strict.check(frame).reason == GateReason.NOT_HORIZONTAL
