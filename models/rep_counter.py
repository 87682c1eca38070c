# rep_counter.py
"""
Push-up rep state machine.
Two separate thresholds (down / up) give a dead zone so noise around a single
boundary cannot toggle the stage, and a cooldown debounces whatever jitter
survives smoothing.
"""

from typing import NamedTuple, Optional

from config import Config, config as default_config
from models.position_gate import GateResult
from models.session_state import SessionState, Stage
from utils.logging_utils import logger


class StageChange(NamedTuple):
    """Result of a stage transition on one frame"""
    stage: Stage
    counted: bool = False


class RepStateMachine:
    """
    Drives SessionState.stage and SessionState.rep_count from smoothed angles.
    Holds no state of its own apart from the config.
    """

    def __init__(self, cfg: Optional[Config] = None):
        self.cfg = cfg or default_config

    def check_posture(self, state: SessionState, gate: GateResult) -> bool:
        """
        Track consecutive gate failures while locked.
        Returns False once the failures reach the tolerance, meaning the frame
        must not be used for counting. Brief glitches below it are ignored.
        """
        if gate.ok:
            state.bad_frame_streak = 0
            return True

        state.bad_frame_streak += 1
        if state.bad_frame_streak >= self.cfg.bad_frame_tolerance:
            if state.bad_frame_streak == self.cfg.bad_frame_tolerance:
                logger.info(f"⏸️ Counting paused: {gate.reason.value}")
            return False
        return True

    def update(self, state: SessionState, angle: float, now_ms: float) -> Optional[StageChange]:
        """Apply one smoothed angle. Returns the stage change, if any."""
        if state.stage == Stage.UP and angle < self.cfg.down_angle_deg:
            state.stage = Stage.DOWN
            logger.info(f"🔽 DOWN detected at {angle:.1f}° (threshold: {self.cfg.down_angle_deg}°)")
            return StageChange(Stage.DOWN)

        if state.stage == Stage.DOWN and angle > self.cfg.up_angle_deg:
            # Always leave DOWN so the machine cannot get stuck there
            state.stage = Stage.UP
            if not self._cooldown_elapsed(state, now_ms):
                logger.info(f"🔼 UP at {angle:.1f}° inside cooldown, rep not counted")
                return StageChange(Stage.UP, counted=False)

            state.rep_count += 1
            state.last_rep_timestamp = now_ms
            logger.info(f"✅ REP #{state.rep_count}! UP at {angle:.1f}° (threshold: {self.cfg.up_angle_deg}°)")
            return StageChange(Stage.UP, counted=True)

        return None

    def _cooldown_elapsed(self, state: SessionState, now_ms: float) -> bool:
        if state.last_rep_timestamp is None:
            return True
        return now_ms - state.last_rep_timestamp > self.cfg.rep_cooldown_ms

    def get_debug_info(self, state: SessionState):
        """Get current debug information."""
        return {
            'count': state.rep_count,
            'stage': state.stage.value,
            'bad_frame_streak': state.bad_frame_streak,
            'last_rep_timestamp': state.last_rep_timestamp,
            'thresholds': {
                'up': self.cfg.up_angle_deg,
                'down': self.cfg.down_angle_deg,
            },
            'settings': {
                'rep_cooldown_ms': self.cfg.rep_cooldown_ms,
                'bad_frame_tolerance': self.cfg.bad_frame_tolerance,
            }
        }
