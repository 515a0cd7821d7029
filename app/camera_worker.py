"""
CameraWorker — runs the frame pipeline on a QThread and emits signals with
what the window needs to draw.

Only observe() happens here; ticks and user commands stay on the GUI
thread and reach the accumulator through its lock.
"""
from __future__ import annotations
import time
from typing import Optional

import numpy as np
from PyQt6.QtCore import QThread, pyqtSignal

from app.config import AppConfig
from core.accumulator import TextAccumulator
from core.camera import Camera
from core.detector import SignDetector
from core.pipeline import FramePipeline
from domain.errors import ModelLoadError


class CameraWorker(QThread):
    """
    QThread that owns the camera, the detector and the frame pipeline.

    Signals emitted every frame:
        frame_ready   — BGR frame as np.ndarray
        result_ready  — FrameResult for the same frame
    Signals emitted on lifecycle changes:
        model_loaded  — detector ready, frames will follow
        fatal_error   — bootstrap failure (model / camera), worker exits
        status_msg    — tagged log string for the console panel

    stop() uses Qt's interruption flag, so a stop requested while the
    model is still loading is seen once loading returns.
    """

    frame_ready  = pyqtSignal(np.ndarray)
    result_ready = pyqtSignal(object)   # FrameResult
    model_loaded = pyqtSignal()
    fatal_error  = pyqtSignal(str)
    status_msg   = pyqtSignal(str)

    def __init__(self, config: AppConfig, accumulator: TextAccumulator, parent=None) -> None:
        super().__init__(parent)
        self._config      = config
        self._accumulator = accumulator

        # Created in run() so they live on the worker thread
        self._camera:   Optional[Camera]        = None
        self._pipeline: Optional[FramePipeline] = None

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Main loop, runs on the worker thread."""
        cfg = self._config

        self.status_msg.emit("[MODEL] Loading model...")
        try:
            detector = SignDetector(cfg.model_path, cfg.input_size)
            self._camera = Camera(cfg.camera_device, cfg.fps_limit)
        except (ModelLoadError, RuntimeError) as exc:
            self.status_msg.emit(f"[ERROR] Startup: {exc}")
            self.fatal_error.emit(str(exc))
            return

        if self.isInterruptionRequested():
            self._cleanup()
            return

        self._pipeline = FramePipeline(
            detector, self._accumulator,
            score_threshold=cfg.score_threshold,
            iou_threshold=cfg.iou_threshold,
            report=self.status_msg.emit,
        )
        self.model_loaded.emit()
        self.status_msg.emit("[MODEL] ✓ Model loaded, pipeline running")

        while not self.isInterruptionRequested():
            frame = self._camera.read()
            if frame is None:
                self.status_msg.emit("[WARN] Empty frame, retrying")
                time.sleep(0.05)
                continue

            result = self._pipeline.process(frame)
            self.result_ready.emit(result)
            # Copy for thread-safety
            self.frame_ready.emit(frame.copy())

        self._cleanup()

    # ------------------------------------------------------------------
    def stop(self) -> None:
        """Stop the loop and wait for the thread to finish (up to 3s)."""
        self.requestInterruption()
        self.wait(3000)

    def _cleanup(self) -> None:
        if self._camera:
            self._camera.release()
            self._camera = None
        self.status_msg.emit("🛑 Pipeline stopped")
