"""
FramePipeline — one frame through the post-processing chain:

    detector → suppress → select_observation → accumulator.observe

Rendering and tick scheduling stay outside; the pipeline hands back a
FrameResult for whoever draws it.
"""
from __future__ import annotations
import time
from typing import Any, Callable, Optional, Protocol, Sequence

from core.accumulator import TextAccumulator
from core.suppressor import select_observation, suppress
from domain.models import FrameDetections, FrameResult, RawDetection
from utils.constants import IOU_THRESHOLD, SCORE_THRESHOLD


class Detector(Protocol):
    def detect(self, frame: Any) -> FrameDetections: ...


class FramePipeline:
    """
    Parameters
    ----------
    detector : Detector or None
        Inference collaborator. None is allowed when only
        process_detections() is used.
    accumulator : TextAccumulator
        Receives one observe() call per processed frame.
    score_threshold : float
        Minimum top score for an observation (also handed to rendering).
    iou_threshold : float
        Suppression overlap threshold.
    report : callable
        Receives tagged status lines (print by default; the Qt worker
        passes its status signal).
    """

    def __init__(
        self,
        detector: Optional[Detector],
        accumulator: TextAccumulator,
        score_threshold: float = SCORE_THRESHOLD,
        iou_threshold: float = IOU_THRESHOLD,
        report: Callable[[str], Any] = print,
    ) -> None:
        self._detector = detector
        self._accumulator = accumulator
        self.score_threshold = score_threshold
        self.iou_threshold = iou_threshold
        self._report = report

    @property
    def accumulator(self) -> TextAccumulator:
        return self._accumulator

    # ------------------------------------------------------------------
    def process(self, frame: Any) -> FrameResult:
        """
        Infer, suppress and observe for one frame.

        A failing inference is not retried: the frame counts as
        "no observation" and the accumulator is left as it was.
        """
        if self._detector is None:
            raise RuntimeError("FramePipeline has no detector; use process_detections()")
        try:
            raw = self._detector.detect(frame)
        except Exception as exc:
            self._report(f"[WARN] Inference failed: {type(exc).__name__}: {exc}")
            self._accumulator.observe(None)
            return FrameResult(
                accepted=[],
                observed_class_id=None,
                score_threshold=self.score_threshold,
                failed=True,
            )
        return self.process_detections(raw)

    def process_detections(self, raw: Sequence[RawDetection]) -> FrameResult:
        """Suppress and observe detections that were already inferred."""
        accepted = suppress(raw, self.iou_threshold)
        observed = select_observation(accepted, self.score_threshold)
        self._accumulator.observe(observed)
        return FrameResult(
            accepted=accepted,
            observed_class_id=observed,
            score_threshold=self.score_threshold,
            timestamp=time.time(),
        )
