"""
SignDetector — wraps the exported detection network.
Only raw per-frame candidates: suppression and thresholds live elsewhere.

The model is loaded through OpenCV's DNN module, so any ONNX export whose
output rows read (x1, y1, x2, y2, score, class_id) works.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Tuple

import cv2
import numpy as np

from domain.errors import ModelLoadError
from domain.models import FrameDetections, RawDetection
from utils.constants import DETECTION_FIELDS, MODEL_INPUT_SIZE


def preprocess(frame: np.ndarray, input_size: Tuple[int, int] = MODEL_INPUT_SIZE) -> np.ndarray:
    """
    BGR frame -> float32 NCHW blob in [0, 1].
    Bilinear resize to input_size (width, height), RGB channel order.
    """
    return cv2.dnn.blobFromImage(
        frame,
        scalefactor=1.0 / 255.0,
        size=tuple(input_size),
        swapRB=True,
        crop=False,
    )


def decode_predictions(output: Any) -> FrameDetections:
    """
    Convert a raw output tensor into RawDetection records.

    Accepts (N, 6), (1, N, 6) or deeper singleton-batched arrays; extra
    columns past the sixth are ignored. Rows with non-finite numbers or a
    fractional class id are skipped. Anything that can't be read as rows yields an empty list.
    """
    if output is None:
        return []
    arr = np.asarray(output, dtype=np.float64)

    # Peel leading singleton dimensions (batch-like)
    while arr.ndim > 2 and arr.shape[0] == 1:
        arr = arr[0]
    if arr.ndim == 1 and arr.size == DETECTION_FIELDS:
        arr = arr.reshape(1, DETECTION_FIELDS)
    if arr.ndim != 2 or arr.shape[1] < DETECTION_FIELDS:
        return []

    detections: FrameDetections = []
    for row in arr[:, :DETECTION_FIELDS]:
        if not np.all(np.isfinite(row)):
            continue
        x1, y1, x2, y2, score, class_id = row
        if not float(class_id).is_integer():
            continue
        detections.append(RawDetection(
            box=(float(x1), float(y1), float(x2), float(y2)),
            score=float(score),
            class_id=int(class_id),
        ))
    return detections


class SignDetector:
    """
    Parameters
    ----------
    model_path : Path
        Exported network (.onnx).
    input_size : (int, int)
        Network input (width, height); boxes come back in this space.
    """

    def __init__(self, model_path: Path, input_size: Tuple[int, int] = MODEL_INPUT_SIZE) -> None:
        model_path = Path(model_path)
        if not model_path.exists():
            raise ModelLoadError(f"Model not found: {model_path}")
        try:
            self._net = cv2.dnn.readNet(str(model_path))
        except cv2.error as exc:
            raise ModelLoadError(f"Cannot load model {model_path}: {exc}") from exc
        self._input_size = tuple(input_size)
        self.model_path = model_path

    def detect(self, frame: np.ndarray) -> FrameDetections:
        """Run one forward pass and return the undecorated candidates."""
        self._net.setInput(preprocess(frame, self._input_size))
        return decode_predictions(self._net.forward())
