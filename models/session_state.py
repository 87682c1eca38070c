# session_state.py
"""
Mutable per-session state. Only the SessionController creates one, and it is
handed by reference to the rep state machine on every frame.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(str, Enum):
    AWAITING_LOCK = "awaiting_lock"
    LOCKED = "locked"


class Stage(str, Enum):
    """Hysteresis state of the elbow angle"""
    UP = "up"
    DOWN = "down"


@dataclass
class SessionState:
    phase: Phase = Phase.AWAITING_LOCK
    rep_count: int = 0
    stage: Stage = Stage.UP
    smoothed_angle: Optional[float] = None  # Only set while locked
    lock_frame_streak: int = 0
    bad_frame_streak: int = 0
    last_rep_timestamp: Optional[float] = None  # ms, None until the first counted rep
    frame_count: int = 0
    started_at_ms: Optional[float] = None
    stopped_at_ms: Optional[float] = None

    @property
    def is_locked(self) -> bool:
        return self.phase == Phase.LOCKED

    @property
    def is_stopped(self) -> bool:
        return self.stopped_at_ms is not None
