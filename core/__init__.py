from core.accumulator import TextAccumulator
from core.pipeline import FramePipeline
from core.suppressor import select_observation, suppress
from core.tick_timer import TickTimer

__all__ = [
    "TextAccumulator",
    "FramePipeline",
    "TickTimer",
    "suppress",
    "select_observation",
]
