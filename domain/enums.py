from enum import Enum


class RunState(str, Enum):
    """Whether the accumulator commits pending letters on each tick."""
    ADDING = "ADDING"
    PAUSED = "PAUSED"


class ControlCommand(str, Enum):
    """User commands accepted by the accumulator."""
    START = "START"   # resume adding, clears the text
    STOP  = "STOP"    # pause adding
    CLEAR = "CLEAR"   # empty the text
