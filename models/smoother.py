# smoother.py
"""
Elbow angle extraction and exponential smoothing.
"""

from typing import Optional

from models.keypoints import Joint, PoseFrame
from utils.geometry import angle_between, is_visible


def _side_angle(frame: PoseFrame, shoulder: Joint, elbow: Joint, wrist: Joint, threshold: float) -> Optional[float]:
    points = [frame.keypoint(shoulder), frame.keypoint(elbow), frame.keypoint(wrist)]
    if not all(is_visible(point, threshold) for point in points):
        return None
    return angle_between(*points)


def elbow_angle(frame: PoseFrame, threshold: float) -> Optional[float]:
    """
    Raw elbow angle for the frame: mean of both arms when both are fully
    visible, otherwise whichever arm is, otherwise None.
    """
    if not frame.present:
        return None

    left = _side_angle(frame, Joint.LEFT_SHOULDER, Joint.LEFT_ELBOW, Joint.LEFT_WRIST, threshold)
    right = _side_angle(frame, Joint.RIGHT_SHOULDER, Joint.RIGHT_ELBOW, Joint.RIGHT_WRIST, threshold)

    if left is not None and right is not None:
        return (left + right) / 2
    if left is not None:
        return left
    return right


class AngleSmoother:
    """Exponential moving average; factor is the weight kept from the previous value."""

    def __init__(self, factor: float, neutral: float):
        if not 0.0 <= factor < 1.0:
            raise ValueError(f"Smoothing factor must be in [0, 1), got {factor}")
        self.factor = factor
        self.neutral = neutral
        self.value = neutral

    def reseed(self) -> float:
        self.value = self.neutral
        return self.value

    def update(self, raw: float) -> float:
        self.value = self.factor * self.value + (1 - self.factor) * raw
        return self.value
