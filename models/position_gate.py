# position_gate.py
"""
Decides whether a frame shows the subject in a push-up (plank) position.
A handful of cheap geometric checks stand in for full 3D pose classification:
standing or seated people can produce the same elbow angles as a push-up,
so they have to be rejected before any counting happens.
"""

from enum import Enum
from typing import NamedTuple, Optional

from config import Config, config as default_config
from models.keypoints import Joint, PoseFrame
from utils.geometry import is_visible


class GateReason(Enum):
    """Why a frame was accepted or rejected"""
    NONE = "none"
    NO_SUBJECT = "no_subject"
    INCOMPLETE_BODY = "incomplete_body"
    NOT_HORIZONTAL = "not_horizontal"
    HANDS_TOO_HIGH = "hands_too_high"
    STANDING = "standing"


class GateResult(NamedTuple):
    ok: bool
    reason: GateReason = GateReason.NONE


PASSED = GateResult(True, GateReason.NONE)

LEFT_ARM = (Joint.LEFT_SHOULDER, Joint.LEFT_ELBOW, Joint.LEFT_WRIST)
RIGHT_ARM = (Joint.RIGHT_SHOULDER, Joint.RIGHT_ELBOW, Joint.RIGHT_WRIST)
TORSO = (Joint.LEFT_SHOULDER, Joint.RIGHT_SHOULDER, Joint.LEFT_HIP, Joint.RIGHT_HIP)


class PositionGate:
    """Stateless posture classifier; thresholds come from the config."""

    def __init__(self, cfg: Optional[Config] = None):
        self.cfg = cfg or default_config

    def _visible(self, frame: PoseFrame, joint: Joint) -> bool:
        return is_visible(frame.keypoint(joint), self.cfg.visibility_threshold)

    def arm_visible(self, frame: PoseFrame, arm) -> bool:
        return all(self._visible(frame, joint) for joint in arm)

    def check(self, frame: PoseFrame) -> GateResult:
        if not frame.present:
            return GateResult(False, GateReason.NO_SUBJECT)

        # 1. Torso plus at least one complete arm
        left_arm = self.arm_visible(frame, LEFT_ARM)
        right_arm = self.arm_visible(frame, RIGHT_ARM)
        torso = all(self._visible(frame, joint) for joint in TORSO)
        if not torso or not (left_arm or right_arm):
            return GateResult(False, GateReason.INCOMPLETE_BODY)

        kp = frame.keypoint
        shoulder_x = (kp(Joint.LEFT_SHOULDER).x + kp(Joint.RIGHT_SHOULDER).x) / 2
        shoulder_y = (kp(Joint.LEFT_SHOULDER).y + kp(Joint.RIGHT_SHOULDER).y) / 2
        hip_x = (kp(Joint.LEFT_HIP).x + kp(Joint.RIGHT_HIP).x) / 2
        hip_y = (kp(Joint.LEFT_HIP).y + kp(Joint.RIGHT_HIP).y) / 2

        # 2. Shoulders and hips at a similar height
        if abs(shoulder_y - hip_y) > self.cfg.horizontal_tolerance:
            return GateResult(False, GateReason.NOT_HORIZONTAL)

        # 3. Wrists on the floor, not raised above the shoulders
        wrists = []
        if left_arm:
            wrists.append(kp(Joint.LEFT_WRIST).y)
        if right_arm:
            wrists.append(kp(Joint.RIGHT_WRIST).y)
        wrist_y = sum(wrists) / len(wrists)
        if shoulder_y - wrist_y > self.cfg.hand_height_tolerance:
            return GateResult(False, GateReason.HANDS_TOO_HIGH)

        # 4. Near-vertical torso that slipped through check 2
        horizontal_spread = abs(shoulder_x - hip_x)
        vertical_spread = abs(shoulder_y - hip_y)
        if (horizontal_spread < self.cfg.standing_max_horizontal_spread
                and vertical_spread > self.cfg.standing_min_vertical_spread):
            return GateResult(False, GateReason.STANDING)

        return PASSED
