import math

import pytest

from models.keypoints import Keypoint
from utils.geometry import angle_between, is_visible


def test_right_angle():
    assert angle_between((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)


def test_collinear_points_give_straight_angle():
    assert angle_between((-1, 0), (0, 0), (1, 0)) == pytest.approx(180.0)


def test_reflex_angle_is_folded():
    a = (math.cos(math.radians(170)), math.sin(math.radians(170)))
    c = (math.cos(math.radians(-170)), math.sin(math.radians(-170)))
    assert angle_between(a, (0, 0), c) == pytest.approx(20.0)


def test_angle_is_symmetric_in_outer_points():
    a, b, c = (0.2, 0.1), (0.5, 0.5), (0.9, 0.4)
    assert angle_between(a, b, c) == pytest.approx(angle_between(c, b, a))


def test_accepts_keypoints():
    angle = angle_between(Keypoint(0.0, 1.0, 0.9), Keypoint(0.0, 0.0, 0.9), Keypoint(1.0, 1.0, 0.9))
    assert angle == pytest.approx(45.0)


def test_coincident_points_stay_finite():
    assert math.isfinite(angle_between((0.5, 0.5), (0.5, 0.5), (0.5, 0.5)))


def test_visibility_threshold_is_strict():
    assert is_visible(Keypoint(0, 0, 0.5), 0.4)
    assert not is_visible(Keypoint(0, 0, 0.4), 0.4)
    assert not is_visible(Keypoint(0, 0), 0.0)


def test_visibility_uses_config_default():
    assert is_visible(Keypoint(0, 0, 0.36))
    assert not is_visible(Keypoint(0, 0, 0.35))
