from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from config import Config, config as default_config
from models.events import SessionEvent, StatusEvent
from models.keypoints import PoseFrame
from models.schemas import WorkoutRecord
from models.session_controller import SessionController
from utils.logging_utils import logger

class ReplayService:
    """
    Feeds recorded pose-model output through a session, one frame at a time.
    Stands in for a live capture loop: frames are stamped from the frame rate
    instead of the wall clock, so a replay is deterministic.
    """

    def __init__(self, cfg: Optional[Config] = None):
        self.cfg = cfg or default_config

    @staticmethod
    def load(path: Union[str, Path]) -> np.ndarray:
        """Load a (frames, joints, 3|4) keypoint recording saved with numpy.save."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Keypoint recording not found: {path}")

        recording = np.load(path, allow_pickle=False)
        if recording.ndim != 3:
            raise ValueError(f"Expected a (frames, joints, values) array, got shape {recording.shape}")

        logger.info(f"Loaded {recording.shape[0]} frames from {path.name}")
        return recording

    def frames(
        self,
        recording: Iterable,
        fps: float,
        layout: str,
        image_size: Optional[Tuple[float, float]] = None,
    ) -> Iterable[PoseFrame]:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        interval_ms = 1000.0 / fps
        for index, keypoints in enumerate(recording):
            timestamp = index * interval_ms
            if keypoints is None:
                yield PoseFrame.absent(timestamp)
            else:
                yield PoseFrame.from_array(keypoints, layout=layout, timestamp_ms=timestamp, image_size=image_size)

    def replay(
        self,
        recording: Iterable,
        fps: Optional[float] = None,
        layout: Optional[str] = None,
        image_size: Optional[Tuple[float, float]] = None,
        on_event=None,
    ) -> Tuple[WorkoutRecord, List[SessionEvent]]:
        """
        Run a whole recording through a fresh session and stop it at the last
        frame. Returns the workout record and every event emitted.
        """
        fps = fps or self.cfg.fps
        layout = layout or self.cfg.layout

        session = SessionController(self.cfg, started_at_ms=0.0)
        events: List[SessionEvent] = []
        session.subscribe(events.append)
        if on_event is not None:
            session.subscribe(on_event)

        last_timestamp = 0.0
        for frame in self.frames(recording, fps, layout, image_size):
            session.process_frame(frame)
            last_timestamp = frame.timestamp_ms

        record = session.stop(now_ms=last_timestamp)
        status_changes = sum(1 for event in events if isinstance(event, StatusEvent))
        logger.info(f"Replay finished: {record.repCount} reps, {status_changes} status changes")
        return record, events

# Global service instance
replay_service = ReplayService()
