import numpy as np
import pytest

from config import Config
from models.events import RepEvent
from services.replay_service import ReplayService

from conftest import build_keypoints


def recording(*angles, absent=()):
    frames = []
    for index, angle in enumerate(angles):
        if index in absent:
            frames.append(np.full((12, 3), np.nan))
        else:
            frames.append(build_keypoints(angle))
    return np.stack(frames)


@pytest.fixture
def service():
    return ReplayService(Config(smoothing_factor=0.0, layout="compact"))


def test_replay_counts_reps(service):
    data = recording(*([160] * 5 + [90, 160] * 3))
    record, events = service.replay(data, fps=10)

    assert record.repCount == 3
    assert record.framesProcessed == 11
    assert record.durationSec == 1
    assert [e.count for e in events if isinstance(e, RepEvent)] == [1, 2, 3]


def test_replay_tolerates_missing_frames(service):
    data = recording(160, 160, 160, 160, 160, 90, 90, 160, absent=(6,))
    record, _ = service.replay(data, fps=30)
    assert record.repCount == 1


def test_replay_forwards_events(service):
    seen = []
    service.replay(recording(*([160] * 5 + [90, 160])), fps=30, on_event=seen.append)
    assert any(isinstance(event, RepEvent) for event in seen)


def test_replay_accepts_none_frames(service):
    data = list(recording(*([160] * 5))) + [None] + list(recording(90, 160))
    record, _ = service.replay(data, fps=30)
    assert record.repCount == 1


def test_save_and_load_roundtrip(service, tmp_path):
    path = tmp_path / "session.npy"
    np.save(path, recording(*([160] * 5 + [90, 160])))

    loaded = ReplayService.load(path)
    assert loaded.shape == (7, 12, 3)
    assert service.replay(loaded, fps=30)[0].repCount == 1


def test_load_rejects_wrong_shape(tmp_path):
    path = tmp_path / "flat.npy"
    np.save(path, np.zeros((4, 3)))
    with pytest.raises(ValueError):
        ReplayService.load(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ReplayService.load(tmp_path / "nope.npy")


def test_fps_must_be_positive(service):
    with pytest.raises(ValueError):
        service.replay(recording(160), fps=-1)
