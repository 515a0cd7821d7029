"""
Suppressor — greedy non-max suppression over one frame's raw detections.

Pure functions: no state, no I/O, no score filtering. Filtering by
confidence belongs to the caller (rendering and observation selection).
"""
from __future__ import annotations
from typing import List, Optional, Sequence

from domain.labels import BLANK_CLASS_ID, is_valid_class_id
from domain.models import AcceptedDetection, RawDetection
from utils.constants import IOU_THRESHOLD
from utils.geometry import iou


def suppress(
    detections: Sequence[RawDetection],
    iou_threshold: float = IOU_THRESHOLD,
) -> List[AcceptedDetection]:
    """
    Class-agnostic greedy NMS.

    Parameters
    ----------
    detections : sequence of RawDetection
        Candidates for a single frame, in any order.
    iou_threshold : float
        A candidate is dropped when its IoU with an already accepted box
        is strictly greater than this value.

    Returns
    -------
    list[RawDetection]
        Accepted detections by descending score. Equal scores keep their
        input order, so the result is deterministic.
    """
    if not 0.0 <= iou_threshold <= 1.0:
        raise ValueError(f"iou_threshold must be within [0, 1], got {iou_threshold}")

    # sorted() is stable, reverse=True included
    remaining = sorted(detections, key=lambda d: d.score, reverse=True)
    accepted: List[AcceptedDetection] = []

    while remaining:
        best = remaining.pop(0)
        accepted.append(best)
        remaining = [d for d in remaining if iou(best.box, d.box) <= iou_threshold]

    return accepted


def select_observation(
    accepted: Sequence[AcceptedDetection],
    score_threshold: float,
) -> Optional[int]:
    """
    Class id to feed the accumulator for this frame, or None.

    Only the top-ranked detection counts; it must clear the score
    threshold, carry a valid class id and not be the blank pose.
    """
    if not accepted:
        return None
    top = accepted[0]
    if top.score < score_threshold:
        return None
    if not is_valid_class_id(top.class_id) or top.class_id == BLANK_CLASS_ID:
        return None
    return int(top.class_id)
