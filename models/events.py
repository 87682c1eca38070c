from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

class EventType(str, Enum):
    STATUS_CHANGED = "status_changed"
    REP_INCREMENTED = "rep_incremented"
    READINESS_CHANGED = "readiness_changed"

class StatusCode(str, Enum):
    WAITING = "waiting"
    LOCKING_IN = "locking_in"
    BAD_POSTURE = "bad_posture"
    READY = "ready"
    GOOD_DEPTH = "good_depth"
    REP = "rep"
    COUNTING_PAUSED = "counting_paused"
    STOPPED = "stopped"

@dataclass(frozen=True)
class StatusEvent:
    code: StatusCode
    text: str
    ts: float
    type: EventType = EventType.STATUS_CHANGED

@dataclass(frozen=True)
class RepEvent:
    count: int
    is_milestone: bool
    ts: float
    type: EventType = EventType.REP_INCREMENTED

@dataclass(frozen=True)
class ReadinessEvent:
    is_locked: bool
    ts: float
    type: EventType = EventType.READINESS_CHANGED

SessionEvent = Union[StatusEvent, RepEvent, ReadinessEvent]
