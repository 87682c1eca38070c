import math

import numpy as np
import pytest

from config import Config
from models.keypoints import Joint, NUM_JOINTS, PoseFrame

# Side view of a plank: shoulders left, hips right, roughly level
PLANK = {
    Joint.LEFT_SHOULDER: (0.30, 0.50),
    Joint.RIGHT_SHOULDER: (0.32, 0.50),
    Joint.LEFT_HIP: (0.60, 0.55),
    Joint.RIGHT_HIP: (0.62, 0.55),
    Joint.LEFT_KNEE: (0.78, 0.58),
    Joint.RIGHT_KNEE: (0.80, 0.58),
    Joint.LEFT_ANKLE: (0.95, 0.60),
    Joint.RIGHT_ANKLE: (0.97, 0.60),
}

# Upright person facing the camera, arms hanging
STANDING = {
    Joint.LEFT_SHOULDER: (0.45, 0.30),
    Joint.RIGHT_SHOULDER: (0.55, 0.30),
    Joint.LEFT_ELBOW: (0.44, 0.45),
    Joint.RIGHT_ELBOW: (0.56, 0.45),
    Joint.LEFT_WRIST: (0.44, 0.60),
    Joint.RIGHT_WRIST: (0.56, 0.60),
    Joint.LEFT_HIP: (0.47, 0.60),
    Joint.RIGHT_HIP: (0.53, 0.60),
    Joint.LEFT_KNEE: (0.47, 0.78),
    Joint.RIGHT_KNEE: (0.53, 0.78),
    Joint.LEFT_ANKLE: (0.47, 0.95),
    Joint.RIGHT_ANKLE: (0.53, 0.95),
}

UPPER_ARM = 0.15


def arm_points(shoulder, angle_deg):
    """Elbow straight below the shoulder, wrist rotated so the elbow angle is angle_deg."""
    sx, sy = shoulder
    elbow = (sx, sy + UPPER_ARM)
    theta = math.radians(angle_deg)
    wrist = (elbow[0] + UPPER_ARM * math.sin(theta), elbow[1] - UPPER_ARM * math.cos(theta))
    return elbow, wrist


def build_keypoints(angle=160.0, right_angle=None, base=None, positions=None, hide=(), visibility=0.9):
    points = dict(base if base is not None else PLANK)
    if base is None:
        right_angle = angle if right_angle is None else right_angle
        points[Joint.LEFT_ELBOW], points[Joint.LEFT_WRIST] = arm_points(points[Joint.LEFT_SHOULDER], angle)
        points[Joint.RIGHT_ELBOW], points[Joint.RIGHT_WRIST] = arm_points(points[Joint.RIGHT_SHOULDER], right_angle)
    points.update(positions or {})

    keypoints = np.zeros((NUM_JOINTS, 3))
    for joint in Joint:
        x, y = points[joint]
        keypoints[joint] = (x, y, 0.0 if joint in hide else visibility)
    return keypoints


@pytest.fixture
def make_frame():
    """Factory for synthetic push-up frames with a chosen elbow angle."""
    def _make(angle=160.0, timestamp_ms=None, **kwargs):
        return PoseFrame(keypoints=build_keypoints(angle, **kwargs), timestamp_ms=timestamp_ms)
    return _make


@pytest.fixture
def standing_frame():
    def _make(timestamp_ms=None):
        return PoseFrame(keypoints=build_keypoints(base=STANDING), timestamp_ms=timestamp_ms)
    return _make


@pytest.fixture
def cfg():
    """Config with smoothing disabled so smoothed angle equals raw angle."""
    return Config(smoothing_factor=0.0)
