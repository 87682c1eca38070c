import numpy as np
from config import config

def angle_between(a, b, c) -> float:
    """
    Unsigned angle in degrees at vertex b, between rays b->a and b->c.
    Points are anything with x/y attributes (Keypoint) or (x, y) sequences.
    Result is folded into [0, 180].
    """
    ax, ay = _xy(a)
    bx, by = _xy(b)
    cx, cy = _xy(c)

    radians = np.arctan2(cy - by, cx - bx) - np.arctan2(ay - by, ax - bx)
    angle = abs(float(np.degrees(radians)))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle

def is_visible(keypoint, threshold=None) -> bool:
    """True if the keypoint confidence is strictly above the threshold."""
    if threshold is None:
        threshold = config.visibility_threshold
    return keypoint.visibility > threshold

def _xy(point):
    if hasattr(point, "x"):
        return float(point.x), float(point.y)
    return float(point[0]), float(point[1])
