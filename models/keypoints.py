# keypoints.py
"""
Per-frame keypoint data contract for the push-up engine.
Pose models produce many more joints than the counter needs, so every frame is
reduced to the 12 joints below, stored as a (12, 3) array of [x, y, visibility]
in normalized image coordinates.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Optional, Sequence, Tuple

import numpy as np


class Joint(IntEnum):
    """Row index of each tracked joint in a compact frame"""
    LEFT_SHOULDER = 0
    RIGHT_SHOULDER = 1
    LEFT_ELBOW = 2
    RIGHT_ELBOW = 3
    LEFT_WRIST = 4
    RIGHT_WRIST = 5
    LEFT_HIP = 6
    RIGHT_HIP = 7
    LEFT_KNEE = 8
    RIGHT_KNEE = 9
    LEFT_ANKLE = 10
    RIGHT_ANKLE = 11


NUM_JOINTS = len(Joint)

# YOLO pose keypoint indices (COCO-17)
COCO_INDEX: Dict[Joint, int] = {
    Joint.LEFT_SHOULDER: 5, Joint.RIGHT_SHOULDER: 6,
    Joint.LEFT_ELBOW: 7, Joint.RIGHT_ELBOW: 8,
    Joint.LEFT_WRIST: 9, Joint.RIGHT_WRIST: 10,
    Joint.LEFT_HIP: 11, Joint.RIGHT_HIP: 12,
    Joint.LEFT_KNEE: 13, Joint.RIGHT_KNEE: 14,
    Joint.LEFT_ANKLE: 15, Joint.RIGHT_ANKLE: 16,
}

# MediaPipe Pose landmark indices (33 landmarks)
MEDIAPIPE_INDEX: Dict[Joint, int] = {
    Joint.LEFT_SHOULDER: 11, Joint.RIGHT_SHOULDER: 12,
    Joint.LEFT_ELBOW: 13, Joint.RIGHT_ELBOW: 14,
    Joint.LEFT_WRIST: 15, Joint.RIGHT_WRIST: 16,
    Joint.LEFT_HIP: 23, Joint.RIGHT_HIP: 24,
    Joint.LEFT_KNEE: 25, Joint.RIGHT_KNEE: 26,
    Joint.LEFT_ANKLE: 27, Joint.RIGHT_ANKLE: 28,
}

LAYOUTS: Dict[str, Tuple[int, Dict[Joint, int]]] = {
    "coco": (17, COCO_INDEX),
    "mediapipe": (33, MEDIAPIPE_INDEX),
    "compact": (NUM_JOINTS, {joint: int(joint) for joint in Joint}),
}


class Keypoint(NamedTuple):
    """Single joint position with model confidence"""
    x: float
    y: float
    visibility: float = 0.0


@dataclass(eq=False)
class PoseFrame:
    """
    One inference result. keypoints is None when the model found no subject,
    which is a different signal from a frame whose joints are all invisible.
    """
    keypoints: Optional[np.ndarray] = None
    timestamp_ms: Optional[float] = None

    @property
    def present(self) -> bool:
        return self.keypoints is not None

    def keypoint(self, joint: Joint) -> Keypoint:
        if self.keypoints is None:
            raise ValueError("Frame has no subject")
        x, y, visibility = self.keypoints[joint]
        return Keypoint(float(x), float(y), float(visibility))

    @classmethod
    def absent(cls, timestamp_ms: Optional[float] = None) -> "PoseFrame":
        return cls(keypoints=None, timestamp_ms=timestamp_ms)

    @classmethod
    def from_array(
        cls,
        array: Any,
        layout: str = "coco",
        timestamp_ms: Optional[float] = None,
        image_size: Optional[Tuple[float, float]] = None,
    ) -> "PoseFrame":
        """
        Build a frame from a pose-model output array.
        Accepts rows of [x, y, conf] (YOLO) or [x, y, z, visibility] (MediaPipe).
        Pixel coordinates are normalized when image_size=(width, height) is given.
        An all-NaN array means no subject was detected.
        """
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown keypoint layout: {layout}")
        expected_rows, index = LAYOUTS[layout]

        data = np.asarray(array, dtype=float)
        if data.ndim != 2 or data.shape[1] not in (3, 4):
            raise ValueError(f"Expected an (N, 3) or (N, 4) keypoint array, got shape {data.shape}")
        if data.shape[0] != expected_rows:
            raise ValueError(f"Layout '{layout}' needs {expected_rows} keypoints, got {data.shape[0]}")

        if np.isnan(data).all():
            return cls.absent(timestamp_ms)

        rows = data[[index[joint] for joint in Joint]]
        keypoints = np.empty((NUM_JOINTS, 3), dtype=float)
        keypoints[:, :2] = rows[:, :2]
        # Visibility is always the last column; NaN means the model gave no score
        keypoints[:, 2] = np.nan_to_num(rows[:, -1], nan=0.0)

        if image_size is not None:
            width, height = image_size
            keypoints[:, 0] /= width
            keypoints[:, 1] /= height

        return cls(keypoints=keypoints, timestamp_ms=timestamp_ms)

    @classmethod
    def from_landmarks(
        cls,
        landmarks: Optional[Sequence[Any]],
        timestamp_ms: Optional[float] = None,
    ) -> "PoseFrame":
        """Build a frame from MediaPipe landmark objects (.x, .y, optional .visibility)."""
        if landmarks is None:
            return cls.absent(timestamp_ms)

        rows = [
            (lm.x, lm.y, getattr(lm, "visibility", None) or 0.0)
            for lm in landmarks
        ]
        return cls.from_array(rows, layout="mediapipe", timestamp_ms=timestamp_ms)
