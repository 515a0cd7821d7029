"""
OpenCVUI — all rendering and keyboard/trackbar handling for the OpenCV
front-end, isolated from detection and accumulation.

The pipeline never calls cv2 drawing functions directly; it delegates here.
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Tuple

import cv2

from app.config import AppConfig
from domain.enums import ControlCommand, RunState
from domain.labels import class_label_of, is_valid_class_id
from domain.models import AccumulatorSnapshot, FrameResult
from utils.constants import TICK_MAX_STEPS, TICK_MIN_STEPS

_STATE_COLORS = {
    RunState.ADDING: (0,   255,  0),
    RunState.PAUSED: (0,   165, 255),
}
_BOX_COLOR  = (255, 0, 255)
_TEXT_COLOR = (255, 255, 255)

ESC_KEY = 27
TRACKBAR_NAME = "Interval x0.5s"

_KEY_COMMANDS: Dict[int, ControlCommand] = {
    ord("s"): ControlCommand.START,
    ord("S"): ControlCommand.START,
    ord("q"): ControlCommand.STOP,
    ord("Q"): ControlCommand.STOP,
    ord("c"): ControlCommand.CLEAR,
    ord("C"): ControlCommand.CLEAR,
}


def command_for_key(key: int) -> Optional[ControlCommand]:
    """Map a cv2.waitKey code to a control command (s / q / c)."""
    if key < 0:
        return None
    return _KEY_COMMANDS.get(key & 0xFF)


def label_for(class_id: int) -> str:
    if not is_valid_class_id(class_id):
        return f"#{class_id}"
    letter = class_label_of(class_id)
    return "blank" if letter == " " else letter


def scale_box(
    box: Tuple[float, float, float, float],
    input_size: Tuple[int, int],
    frame_size: Tuple[int, int],
    mirror: bool = False,
) -> Tuple[int, int, int, int]:
    """Model-input box -> integer pixel box on a (width, height) frame."""
    in_w, in_h = input_size
    fr_w, fr_h = frame_size
    sx, sy = fr_w / in_w, fr_h / in_h
    x1, y1, x2, y2 = box
    x1, x2 = x1 * sx, x2 * sx
    if mirror:
        x1, x2 = fr_w - x2, fr_w - x1
    return int(round(x1)), int(round(y1 * sy)), int(round(x2)), int(round(y2 * sy))


class OpenCVUI:
    """Draws detections and the spelled text, shows them in a window."""

    def __init__(self, config: AppConfig, initial_steps: Optional[int] = None) -> None:
        self._cfg  = config
        self._name = config.window_name
        steps = initial_steps or config.tick_steps
        cv2.namedWindow(self._name)
        cv2.createTrackbar(TRACKBAR_NAME, self._name,
                           max(TICK_MIN_STEPS, steps), TICK_MAX_STEPS, lambda _v: None)

    def render(
        self,
        frame: Any,
        result: FrameResult,
        snapshot: AccumulatorSnapshot,
        tick_period: float,
    ) -> None:
        """Flip frame, draw boxes + text overlays, show window."""
        if self._cfg.mirror:
            frame = cv2.flip(frame, 1)
        h, w = frame.shape[:2]

        # Boxes the renderer trusts (its own threshold, independent of accumulation)
        for det in result.visible:
            x1, y1, x2, y2 = scale_box(det.box, self._cfg.input_size, (w, h), self._cfg.mirror)
            cv2.rectangle(frame, (x1, y1), (x2, y2), _BOX_COLOR, 2)
            cv2.putText(frame, f"{label_for(det.class_id)} {det.score:.2f}",
                        (x1 + 4, max(18, y1 - 6)), cv2.FONT_HERSHEY_SIMPLEX, 0.6, _BOX_COLOR, 2)

        # Run state
        color = _STATE_COLORS.get(snapshot.run_state, _TEXT_COLOR)
        cv2.putText(frame, snapshot.run_state.value,
                    (20, 40), cv2.FONT_HERSHEY_SIMPLEX, 1.0, color, 2)
        cv2.putText(frame, f"Update interval: {tick_period:.1f}s",
                    (20, 70), cv2.FONT_HERSHEY_SIMPLEX, 0.55, (200, 200, 200), 1)

        # Spelled text, bottom banner
        cv2.rectangle(frame, (0, h - 60), (w, h), (0, 0, 0), -1)
        cv2.putText(frame, snapshot.output_text[-40:] or "_",
                    (20, h - 22), cv2.FONT_HERSHEY_SIMPLEX, 1.0, color, 2)

        cv2.putText(frame, "S start  Q stop  C clear  ESC quit",
                    (w - 330, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.5, _TEXT_COLOR, 1)

        cv2.imshow(self._name, frame)

    def interval_steps(self) -> int:
        """Current trackbar value, clamped to the allowed slider range."""
        pos = cv2.getTrackbarPos(TRACKBAR_NAME, self._name)
        return max(TICK_MIN_STEPS, min(TICK_MAX_STEPS, pos))

    def poll_key(self) -> int:
        return cv2.waitKey(1)

    def close(self) -> None:
        cv2.destroyAllWindows()
