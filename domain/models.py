from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import time

from domain.enums import RunState

# Type aliases
Box = Tuple[float, float, float, float]   # (x1, y1, x2, y2) in model-input coords


@dataclass(frozen=True)
class RawDetection:
    """One candidate box produced by the detector for a single frame."""
    box: Box
    score: float
    class_id: int


# A frame's raw output, in whatever order the detector produced it.
FrameDetections = List[RawDetection]
# Survivors of suppression, ordered by descending score.
AcceptedDetection = RawDetection


@dataclass(frozen=True)
class AccumulatorSnapshot:
    """Read-only copy of the accumulator, safe to hand to renderers."""
    output_text: str
    run_state: RunState
    latest_class_id: Optional[int] = None

    @property
    def is_adding(self) -> bool:
        return self.run_state == RunState.ADDING


@dataclass
class FrameResult:
    """
    Everything one pipeline step produced for a frame.
    Passed to rendering instead of individual arguments.
    """
    accepted: List[AcceptedDetection]
    observed_class_id: Optional[int]
    score_threshold: float
    timestamp: float = field(default_factory=time.time)
    failed: bool = False

    # ---- convenience accessors ----------------------------------------
    @property
    def top(self) -> Optional[AcceptedDetection]:
        return self.accepted[0] if self.accepted else None

    @property
    def visible(self) -> List[AcceptedDetection]:
        """Accepted detections confident enough to draw."""
        return [d for d in self.accepted if d.score >= self.score_threshold]
