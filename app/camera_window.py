"""
CameraWindow — PyQt6 window with the camera feed, detection boxes, the
spelled text and the session controls (Start / Stop / Clear + interval
slider).

The window never touches the accumulator: it emits command_requested and
interval_changed, and displays the snapshots it is given.
"""
from __future__ import annotations
from typing import Optional

import cv2
import numpy as np
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QImage, QKeySequence, QPixmap, QShortcut
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QTextEdit, QSizePolicy, QSlider,
)

from app.ui import label_for, scale_box
from domain.enums import ControlCommand
from domain.models import AccumulatorSnapshot, FrameResult
from utils.constants import TICK_MAX_STEPS, TICK_MIN_STEPS, TICK_STEP_SECONDS

_BOX_RGB = (255, 0, 255)

_OUTPUT_STYLE = (
    "font-size:26px; font-family: Consolas, monospace; padding:10px;"
    "border-radius:6px; background:#181924; color:{color};"
)
_ADDING_COLOR = "#80ff9e"
_PAUSED_COLOR = "#888888"


def interval_text(steps: int) -> str:
    return f"Update Interval: {steps * TICK_STEP_SECONDS:g} seconds"


class CameraWindow(QWidget):
    """
    Main window.

    Signals:
        command_requested — ControlCommand from a button or S / Q / C
        interval_changed  — slider steps (1 step = 0.5 s)
        closed            — the user closed the window
    """

    command_requested = pyqtSignal(object)   # ControlCommand
    interval_changed  = pyqtSignal(int)
    closed            = pyqtSignal()

    def __init__(self, initial_steps: int, input_size=(512, 512), mirror: bool = True,
                 parent=None) -> None:
        super().__init__(parent)
        self._input_size = tuple(input_size)
        self._mirror     = mirror
        self._result: Optional[FrameResult] = None

        self._setup_ui(initial_steps)
        self._setup_shortcuts()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------
    def _setup_ui(self, initial_steps: int) -> None:
        self.setWindowTitle("SignSpell")
        self.setMinimumSize(860, 640)

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(8)

        self._camera_label = QLabel("Loading model...")
        self._camera_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._camera_label.setMinimumSize(640, 420)
        self._camera_label.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding
        )
        self._camera_label.setStyleSheet("background:#000; border:1px solid #334;")
        root.addWidget(self._camera_label, stretch=1)

        self._output = QLabel("")
        self._output.setWordWrap(True)
        self._output.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._output.setStyleSheet(_OUTPUT_STYLE.format(color=_ADDING_COLOR))
        root.addWidget(self._output)

        # ---- controls ------------------------------------------------
        buttons = QHBoxLayout()
        for text, command in (
            ("Stop Adding (Q)",  ControlCommand.STOP),
            ("Start Adding (S)", ControlCommand.START),
            ("Clear Output (C)", ControlCommand.CLEAR),
        ):
            btn = QPushButton(text)
            btn.clicked.connect(lambda _checked=False, c=command: self.command_requested.emit(c))
            buttons.addWidget(btn)
        root.addLayout(buttons)

        slider_row = QHBoxLayout()
        self._slider = QSlider(Qt.Orientation.Horizontal)
        self._slider.setRange(TICK_MIN_STEPS, TICK_MAX_STEPS)
        self._slider.setValue(initial_steps)
        self._slider.valueChanged.connect(self._on_slider)
        self._interval_label = QLabel(interval_text(initial_steps))
        slider_row.addWidget(self._slider, stretch=1)
        slider_row.addWidget(self._interval_label)
        root.addLayout(slider_row)

        self._log = QTextEdit()
        self._log.setReadOnly(True)
        self._log.setMaximumHeight(110)
        root.addWidget(self._log)

    def _setup_shortcuts(self) -> None:
        for keys, command in (
            ("S", ControlCommand.START),
            ("Q", ControlCommand.STOP),
            ("C", ControlCommand.CLEAR),
        ):
            shortcut = QShortcut(QKeySequence(keys), self)
            shortcut.activated.connect(lambda c=command: self.command_requested.emit(c))

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def _on_slider(self, steps: int) -> None:
        self._interval_label.setText(interval_text(steps))
        self.interval_changed.emit(steps)

    def on_result(self, result: FrameResult) -> None:
        self._result = result

    def on_frame(self, frame: np.ndarray) -> None:
        """Receive a BGR frame, draw the latest boxes and show it."""
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        if self._mirror:
            frame_rgb = cv2.flip(frame_rgb, 1)
        self._draw_boxes(frame_rgb)

        h, w, ch = frame_rgb.shape
        img = QImage(frame_rgb.data, w, h, ch * w, QImage.Format.Format_RGB888)
        pix = QPixmap.fromImage(img).scaled(
            self._camera_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._camera_label.setPixmap(pix)

    def show_snapshot(self, snapshot: AccumulatorSnapshot) -> None:
        """Output text, greyed out while paused."""
        color = _ADDING_COLOR if snapshot.is_adding else _PAUSED_COLOR
        self._output.setStyleSheet(_OUTPUT_STYLE.format(color=color))
        self._output.setText(snapshot.output_text)

    def on_status(self, msg: str) -> None:
        """Tagged console messages, colour-coded."""
        if msg.startswith("[ERROR]"):
            self._log.append(f"<span style='color:#ff6b6b'>{msg}</span>")
        elif msg.startswith("[WARN]"):
            self._log.append(f"<span style='color:#ffd166'>{msg}</span>")
        elif msg.startswith(("[TEXT]", "[CONTROL]", "[MODEL]")):
            self._log.append(f"<span style='color:#6699cc'>{msg}</span>")
        else:
            self._log.append(f"<span style='color:#555'>{msg}</span>")
        sb = self._log.verticalScrollBar()
        sb.setValue(sb.maximum())

    # ------------------------------------------------------------------
    def _draw_boxes(self, frame: np.ndarray) -> None:
        if self._result is None:
            return
        h, w = frame.shape[:2]
        for det in self._result.visible:
            x1, y1, x2, y2 = scale_box(det.box, self._input_size, (w, h), self._mirror)
            cv2.rectangle(frame, (x1, y1), (x2, y2), _BOX_RGB, 2)
            cv2.putText(frame, f"{label_for(det.class_id)} {det.score:.2f}",
                        (x1 + 4, max(18, y1 - 6)), cv2.FONT_HERSHEY_SIMPLEX, 0.6, _BOX_RGB, 2)

    def closeEvent(self, event) -> None:
        self.closed.emit()
        event.accept()
