"""
Camera — thin wrapper around OpenCV VideoCapture with FPS limiting.
No inference, no post-processing.
"""
from __future__ import annotations
import time
from typing import Optional, Union

import cv2
import numpy as np


class Camera:
    """
    Parameters
    ----------
    device : int or str
        Camera index (0 = default webcam) or a video file / stream URL.
    fps_limit : int
        Maximum frames per second handed to the pipeline.
    """

    def __init__(self, device: Union[int, str] = 0, fps_limit: int = 30) -> None:
        if fps_limit <= 0:
            raise ValueError(f"fps_limit must be positive, got {fps_limit}")
        self._cap = cv2.VideoCapture(device)
        self._frame_time = 1.0 / fps_limit
        self._prev_time: float = 0.0

        if not self._cap.isOpened():
            raise RuntimeError(f"Cannot open camera device {device}")

    # ------------------------------------------------------------------
    def read(self) -> Optional[np.ndarray]:
        """
        Wait until the next frame is due (FPS limiter), then return it.
        Returns None on read failure or end of stream.
        """
        wait = self._frame_time - (time.monotonic() - self._prev_time)
        if wait > 0:
            time.sleep(wait)
        self._prev_time = time.monotonic()

        ret, frame = self._cap.read()
        return frame if ret else None

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, *_) -> None:
        self.release()
