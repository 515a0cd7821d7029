"""
Constants and geometry helpers for the spelling pipeline
"""

from .constants import *
from .geometry import box_area, intersection_area, iou

__all__ = [
    'box_area',
    'intersection_area',
    'iou',
    'MODEL_INPUT_SIZE',
    'DETECTION_FIELDS',
    'SCORE_THRESHOLD',
    'IOU_THRESHOLD',
    'TICK_STEP_SECONDS',
    'TICK_MIN_STEPS',
    'TICK_MAX_STEPS',
    'TICK_DEFAULT_STEPS',
    'TICK_MIN_PERIOD',
    'TICK_MAX_PERIOD',
    'TICK_DEFAULT_PERIOD',
    'FPS_LIMIT',
]
