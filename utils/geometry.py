"""
Pure box geometry.
No imports from the rest of the project.

Boxes are (x1, y1, x2, y2). Inverted boxes (x2 < x1 or y2 < y1) are not
rejected: their negative extents clamp to zero area.
"""
from __future__ import annotations
from typing import Sequence

BoxLike = Sequence[float]


def box_area(box: BoxLike) -> float:
    """Area of a box, zero for degenerate or inverted boxes."""
    x1, y1, x2, y2 = box
    return max(0.0, x2 - x1) * max(0.0, y2 - y1)


def intersection_area(a: BoxLike, b: BoxLike) -> float:
    """Overlap area of two boxes, clamped to zero when they don't touch."""
    ix1 = max(a[0], b[0])
    iy1 = max(a[1], b[1])
    ix2 = min(a[2], b[2])
    iy2 = min(a[3], b[3])
    return max(0.0, ix2 - ix1) * max(0.0, iy2 - iy1)


def iou(a: BoxLike, b: BoxLike) -> float:
    """
    Intersection-over-Union of two boxes.
    Returns 0.0 if the union is empty.
    """
    inter = intersection_area(a, b)
    if inter <= 0.0:
        return 0.0
    union = box_area(a) + box_area(b) - inter
    if union <= 0.0:
        return 0.0
    return inter / union
