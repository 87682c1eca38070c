# session_controller.py
"""
Session controller for one push-up workout.
Owns the SessionState and runs every frame through the position gate, the
angle smoother and the rep state machine, turning the outcome into events for
UI, audio and history collaborators.
"""

import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from config import Config, config as default_config
from models.events import ReadinessEvent, RepEvent, SessionEvent, StatusCode, StatusEvent
from models.keypoints import PoseFrame
from models.position_gate import GateResult, PositionGate
from models.rep_counter import RepStateMachine
from models.schemas import SessionSnapshot, WorkoutRecord
from models.session_state import Phase, SessionState, Stage
from models.smoother import AngleSmoother, elbow_angle
from utils.logging_utils import logger
from utils.status_text import get_status_text

Listener = Callable[[SessionEvent], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class SessionController:
    """
    Frame-driven coordinator. Not thread-safe: the host must deliver frames
    one at a time, in capture order, with non-decreasing timestamps.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        clock: Callable[[], float] = monotonic_ms,
        started_at_ms: Optional[float] = None,
    ):
        self.cfg = (cfg or default_config).validate()
        self.clock = clock
        self.gate = PositionGate(self.cfg)
        self.smoother = AngleSmoother(self.cfg.smoothing_factor, self.cfg.neutral_angle_deg)
        self.rep_machine = RepStateMachine(self.cfg)
        self.state = SessionState(started_at_ms=started_at_ms)

        self._listeners: List[Listener] = []
        self._status: Tuple[StatusCode, str] = (StatusCode.WAITING, get_status_text(StatusCode.WAITING))
        self._record: Optional[WorkoutRecord] = None

        logger.info(
            f"SessionController initialized: down={self.cfg.down_angle_deg}°, "
            f"up={self.cfg.up_angle_deg}°, lock-in={self.cfg.body_ready_threshold} frames"
        )

    @property
    def count(self) -> int:
        """Get current repetition count"""
        return self.state.rep_count

    @property
    def status_text(self) -> str:
        return self._status[1]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an event listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def process_frame(self, frame: PoseFrame) -> List[SessionEvent]:
        """
        Feed one inference result. Returns the events it produced, which are
        also delivered to subscribed listeners.
        """
        state = self.state
        if state.is_stopped:
            logger.warning("Frame received after session stop, ignoring")
            return []

        now = frame.timestamp_ms if frame.timestamp_ms is not None else self.clock()
        if state.started_at_ms is None:
            state.started_at_ms = now
        state.frame_count += 1

        events: List[SessionEvent] = []
        gate = self.gate.check(frame)

        if state.phase == Phase.AWAITING_LOCK:
            self._lock_in(gate, now, events)
        else:
            self._count(frame, gate, now, events)

        if state.frame_count % 30 == 0:
            angle = f"{state.smoothed_angle:.1f}°" if state.smoothed_angle is not None else "n/a"
            logger.info(
                f"📊 Frame {state.frame_count}: Phase={state.phase.value}, Angle={angle}, "
                f"Stage={state.stage.value}, Count={state.rep_count}"
            )

        self._dispatch(events)
        return events

    def _lock_in(self, gate: GateResult, now: float, events: List[SessionEvent]):
        state = self.state
        if not gate.ok:
            # Decay instead of reset so single-frame flicker does not restart lock-in
            state.lock_frame_streak = max(0, state.lock_frame_streak - 1)
            self._set_status(events, now, StatusCode.BAD_POSTURE, reason=gate.reason)
            return

        state.lock_frame_streak += 1
        if state.lock_frame_streak < self.cfg.body_ready_threshold:
            self._set_status(
                events, now, StatusCode.LOCKING_IN,
                progress=state.lock_frame_streak, threshold=self.cfg.body_ready_threshold,
            )
            return

        state.phase = Phase.LOCKED
        state.stage = Stage.UP
        state.smoothed_angle = self.smoother.reseed()
        state.bad_frame_streak = 0
        logger.info(f"🔒 Locked in after {state.frame_count} frames")
        events.append(ReadinessEvent(is_locked=True, ts=now))
        self._set_status(events, now, StatusCode.READY)

    def _count(self, frame: PoseFrame, gate: GateResult, now: float, events: List[SessionEvent]):
        state = self.state
        if not self.rep_machine.check_posture(state, gate):
            self._set_status(events, now, StatusCode.COUNTING_PAUSED, reason=gate.reason)
            return

        if gate.ok and self._status[0] == StatusCode.COUNTING_PAUSED:
            logger.info("▶️ Posture valid again, counting resumed")
            self._set_status(events, now, StatusCode.READY)

        raw = elbow_angle(frame, self.cfg.visibility_threshold)
        if raw is None:
            return

        state.smoothed_angle = self.smoother.update(raw)
        change = self.rep_machine.update(state, state.smoothed_angle, now)
        if change is None:
            return

        if change.stage == Stage.DOWN:
            self._set_status(events, now, StatusCode.GOOD_DEPTH)
        elif change.counted:
            milestone = state.rep_count % self.cfg.milestone_interval == 0
            events.append(RepEvent(count=state.rep_count, is_milestone=milestone, ts=now))
            ordinal = state.rep_count // self.cfg.milestone_interval if milestone else 0
            self._set_status(events, now, StatusCode.REP, count=state.rep_count, milestone=ordinal)

    def _set_status(self, events: List[SessionEvent], now: float, code: StatusCode, **details):
        text = get_status_text(code, **details)
        if (code, text) == self._status:
            return
        self._status = (code, text)
        events.append(StatusEvent(code=code, text=text, ts=now))

    def _dispatch(self, events: List[SessionEvent]):
        for event in events:
            for listener in list(self._listeners):
                try:
                    listener(event)
                except Exception:
                    logger.exception(f"Listener failed on {event.type.value} event")

    def get_snapshot(self) -> SessionSnapshot:
        """Read-only copy of the current session state"""
        state = self.state
        return SessionSnapshot(
            repCount=state.rep_count,
            phase=state.phase,
            stage=state.stage,
            smoothedAngle=state.smoothed_angle,
            isLocked=state.is_locked,
        )

    def stop(self, now_ms: Optional[float] = None) -> WorkoutRecord:
        """
        Finalize the session and return its record. Later frames are ignored;
        calling stop again returns the same record.
        """
        if self._record is not None:
            return self._record

        state = self.state
        now = now_ms if now_ms is not None else self.clock()
        state.stopped_at_ms = now
        started = state.started_at_ms if state.started_at_ms is not None else now
        duration_sec = int(round(max(0.0, now - started) / 1000.0))

        self._record = WorkoutRecord(
            repCount=state.rep_count,
            durationSec=duration_sec,
            date=datetime.now(timezone.utc).isoformat(),
            framesProcessed=state.frame_count,
        )

        events: List[SessionEvent] = []
        self._set_status(events, now, StatusCode.STOPPED, count=state.rep_count)
        self._dispatch(events)
        logger.info(f"🏁 Session stopped: {state.rep_count} reps in {duration_sec}s")
        return self._record

    def get_status(self) -> Dict[str, Any]:
        """Get comprehensive session status for debugging"""
        state = self.state
        status = self.rep_machine.get_debug_info(state)
        status.update({
            "phase": state.phase.value,
            "frame_count": state.frame_count,
            "lock_frame_streak": state.lock_frame_streak,
            "smoothed_angle": state.smoothed_angle,
            "status": self._status[0].value,
            "status_text": self._status[1],
            "stopped": state.is_stopped,
        })
        return status
