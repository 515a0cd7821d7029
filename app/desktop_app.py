"""
DesktopApp — PyQt6 front-end that wires the worker, the window and the
tick timer around one TextAccumulator.

  • CameraWorker (thread)  → observe() per frame
  • QTimer (GUI thread)    → tick() every interval
  • CameraWindow (GUI)     → start / stop / clear, interval slider
  • Closing the window     → stop timer and worker, then close the session
"""
from __future__ import annotations
import sys
from typing import List, Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication

from app.camera_window import CameraWindow
from app.camera_worker import CameraWorker
from app.config import AppConfig, default_config
from app.main import build_config, parse_args
from core.accumulator import TextAccumulator
from core.tick_timer import validate_period
from domain.enums import ControlCommand
from domain.errors import ConfigError
from utils.constants import TICK_STEP_SECONDS


class DesktopApp:
    """
    Application controller.

    Owns the session: the accumulator, the tick QTimer and the worker.
    Connects CameraWorker (thread) ↔ CameraWindow (UI) through Qt signals.
    """

    def __init__(self, config: AppConfig = default_config) -> None:
        self._config      = config
        self._accumulator = TextAccumulator()
        self._shut_down   = False

        self._window = CameraWindow(config.tick_steps, config.input_size, config.mirror)
        self._window.command_requested.connect(self._on_command)
        self._window.interval_changed.connect(self._on_interval)
        self._window.closed.connect(self.shutdown)

        # ---- tick timer (wall clock, independent of frames) ------------
        self._timer = QTimer()
        self._timer.setInterval(int(config.tick_period * 1000))
        self._timer.timeout.connect(self._on_tick)

        # ---- worker on its own thread --------------------------------
        self._worker = CameraWorker(config, self._accumulator)
        self._worker.frame_ready.connect(self._window.on_frame)
        self._worker.result_ready.connect(self._window.on_result)
        self._worker.status_msg.connect(self._on_status)
        self._worker.fatal_error.connect(self._on_fatal)
        # Ticking starts once frames can be observed
        self._worker.model_loaded.connect(self._timer.start)

        self._window.show_snapshot(self._accumulator.snapshot())

    # ------------------------------------------------------------------
    # Start / stop
    # ------------------------------------------------------------------
    def start(self) -> None:
        self._window.show()
        self._worker.start()

    def shutdown(self) -> None:
        """Cancel both schedules before the session is torn down."""
        if self._shut_down:
            return
        self._shut_down = True
        # A queued model_loaded must not restart ticking
        self._worker.model_loaded.disconnect()
        self._timer.stop()
        self._worker.stop()
        self._accumulator.close()
        QApplication.quit()

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def _on_tick(self) -> None:
        letter = self._accumulator.tick()
        if letter is not None:
            self._on_status(f"[TEXT] +{letter!r}")
            self._window.show_snapshot(self._accumulator.snapshot())

    def _on_command(self, command: ControlCommand) -> None:
        self._accumulator.apply(command)
        self._on_status(f"[CONTROL] {command.value} → {self._accumulator.state.value}")
        self._window.show_snapshot(self._accumulator.snapshot())

    def _on_interval(self, steps: int) -> None:
        try:
            period = validate_period(steps * TICK_STEP_SECONDS,
                                     self._config.tick_min_period,
                                     self._config.tick_max_period)
        except ConfigError as exc:
            self._on_status(f"[WARN] {exc}")
            return
        # Takes effect from the next timeout
        self._timer.setInterval(int(period * 1000))
        self._on_status(f"[CONTROL] Interval → {period:g}s")

    def _on_status(self, msg: str) -> None:
        print(msg)
        self._window.on_status(msg)

    def _on_fatal(self, _msg: str) -> None:
        self._timer.stop()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigError as exc:
        print(f"[ERROR] {exc}")
        return 2

    qt_app = QApplication(sys.argv[:1])
    app = DesktopApp(config)
    app.start()
    code = qt_app.exec()
    app.shutdown()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
