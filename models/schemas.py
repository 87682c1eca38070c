# schemas.py
from pydantic import BaseModel
from typing import Optional

from models.session_state import Phase, Stage

class SessionSnapshot(BaseModel):
    """
    Point-in-time copy of the session state handed to collaborators.
    A fresh instance is built on every query, so callers never hold live state.
    """
    repCount: int = 0                           # Current repetition count
    phase: Phase = Phase.AWAITING_LOCK          # Lock-in phase
    stage: Stage = Stage.UP                     # Hysteresis stage of the elbow angle
    smoothedAngle: Optional[float] = None       # Smoothed elbow angle (degrees), only once locked
    isLocked: bool = False                      # Whether counting has started

class WorkoutRecord(BaseModel):
    """
    Final summary of a stopped session, ready for an external history store.
    """
    repCount: int = 0                           # Final repetition count
    durationSec: int = 0                        # Elapsed session time, rounded to seconds
    date: str                                   # ISO-8601 time the session was stopped
    framesProcessed: int = 0                    # Total frames seen during the session
