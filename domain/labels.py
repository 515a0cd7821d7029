"""
Class id <-> character table.

0..24 map to the letters A..Y, 25 is the "blank" pose and maps to a space.
"""
from __future__ import annotations
import numbers

from domain.errors import InvalidClassIdError

BLANK_CLASS_ID = 25
NUM_CLASSES    = 26


def is_valid_class_id(class_id: object) -> bool:
    if isinstance(class_id, bool) or not isinstance(class_id, numbers.Integral):
        return False
    return 0 <= class_id < NUM_CLASSES


def class_label_of(class_id: int) -> str:
    """Character for a class id. Raises InvalidClassIdError outside 0..25."""
    if not is_valid_class_id(class_id):
        raise InvalidClassIdError(class_id)
    if class_id == BLANK_CLASS_ID:
        return " "
    return chr(ord("A") + int(class_id))
