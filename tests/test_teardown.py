"""Session teardown: both schedules stop before the accumulator closes."""
import time

import numpy as np
import pytest

import app.main as main_mod
from app.config import AppConfig
from app.ui import ESC_KEY
from core.accumulator import TextAccumulator
from core.tick_timer import TickTimer
from domain.models import RawDetection


class FakeDetector:
    def __init__(self, *_args, **_kwargs):
        pass

    def detect(self, frame):
        return [RawDetection(box=(0, 0, 10, 10), score=0.95, class_id=7)]


class FakeCamera:
    def __init__(self, events, frames=3):
        self._events = events
        self._left = frames
        self.reads = 0
        self.released = False

    def read(self):
        self.reads += 1
        if self._left == 0:
            return None
        self._left -= 1
        return np.zeros((48, 64, 3), dtype=np.uint8)

    def release(self):
        self.released = True
        self._events.append("camera.release")


class FakeUI:
    def __init__(self, events, keys=()):
        self._events = events
        self._keys = list(keys)
        self.rendered = 0

    def interval_steps(self):
        return 4

    def render(self, frame, result, snapshot, tick_period):
        self.rendered += 1

    def poll_key(self):
        return self._keys.pop(0) if self._keys else -1

    def close(self):
        self._events.append("ui.close")


@pytest.fixture
def session(monkeypatch):
    """Patch app.main's collaborators and record teardown calls in order."""
    events = []
    made = {}

    class RecordingTimer(TickTimer):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            made["timer"] = self

        def cancel(self):
            events.append("timer.cancel")
            super().cancel()

    class RecordingAccumulator(TextAccumulator):
        def __init__(self):
            super().__init__()
            made["accumulator"] = self

        def close(self):
            events.append("accumulator.close")
            super().close()

    def make_camera(*_args, **_kwargs):
        made["camera"] = FakeCamera(events, frames=made.get("frames", 3))
        return made["camera"]

    def make_ui(*_args, **_kwargs):
        made["ui"] = FakeUI(events, made.get("keys", ()))
        return made["ui"]

    monkeypatch.setattr(main_mod, "SignDetector", FakeDetector)
    monkeypatch.setattr(main_mod, "Camera", make_camera)
    monkeypatch.setattr(main_mod, "OpenCVUI", make_ui)
    monkeypatch.setattr(main_mod, "TickTimer", RecordingTimer)
    monkeypatch.setattr(main_mod, "TextAccumulator", RecordingAccumulator)
    return events, made


def test_end_of_stream_cancels_timer_before_closing(session):
    events, made = session

    assert main_mod.run(AppConfig()) == 0

    assert made["timer"].cancelled
    assert made["accumulator"].closed
    assert made["camera"].released
    assert events.index("timer.cancel") < events.index("accumulator.close")
    assert made["ui"].rendered == 3


def test_esc_quits_and_tears_down(session):
    events, made = session
    made["keys"] = [ESC_KEY]
    made["frames"] = 100

    assert main_mod.run(AppConfig()) == 0

    assert made["camera"].reads == 1
    assert made["timer"].cancelled
    assert made["accumulator"].closed
    assert events == ["timer.cancel", "accumulator.close", "camera.release", "ui.close"]


def test_closed_session_ignores_late_frames(session):
    _events, made = session
    main_mod.run(AppConfig())
    acc = made["accumulator"]

    acc.observe(3)
    assert acc.tick() is None
    assert acc.output_text == ""


def test_worker_stopped_during_model_load_exits(monkeypatch):
    QtCore = pytest.importorskip("PyQt6.QtCore")
    import app.camera_worker as worker_mod

    events = []
    cameras = []

    class SlowDetector(FakeDetector):
        def __init__(self, *args, **kwargs):
            time.sleep(0.3)

    def make_camera(*_args, **_kwargs):
        cameras.append(FakeCamera(events, frames=1000))
        return cameras[-1]

    monkeypatch.setattr(worker_mod, "SignDetector", SlowDetector)
    monkeypatch.setattr(worker_mod, "Camera", make_camera)

    _app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    acc = TextAccumulator()
    worker = worker_mod.CameraWorker(AppConfig(), acc)
    loaded = []
    worker.model_loaded.connect(lambda: loaded.append(True),
                                type=QtCore.Qt.ConnectionType.DirectConnection)

    worker.start()
    time.sleep(0.05)
    worker.stop()

    assert worker.wait(1500)
    assert not worker.isRunning()
    assert loaded == []
    assert cameras[0].reads == 0
    assert cameras[0].released
    assert acc.latest_class_id is None
