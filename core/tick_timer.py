"""
TickTimer — wall-clock schedule for committing letters.

Polled from a cooperative loop: call due() between frames and tick the
accumulator when it returns True. Frame rate has no effect on the cadence.
"""
from __future__ import annotations
import time
from typing import Callable, Optional

from domain.errors import ConfigError
from utils.constants import (
    TICK_DEFAULT_PERIOD,
    TICK_MAX_PERIOD,
    TICK_MIN_PERIOD,
    TICK_STEP_SECONDS,
)


def validate_period(
    period: float,
    min_period: float = TICK_MIN_PERIOD,
    max_period: float = TICK_MAX_PERIOD,
) -> float:
    """Return the period as float or raise ConfigError."""
    try:
        value = float(period)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Tick period must be a number, got {period!r}") from exc
    if value <= 0:
        raise ConfigError(f"Tick period must be positive, got {value}")
    if not min_period <= value <= max_period:
        raise ConfigError(
            f"Tick period {value}s outside [{min_period}, {max_period}]s"
        )
    return value


class TickTimer:
    """
    Parameters
    ----------
    period : float
        Seconds between ticks.
    min_period, max_period : float
        Bounds enforced by set_period().
    clock : callable
        Monotonic time source; injected in tests.
    """

    def __init__(
        self,
        period: float = TICK_DEFAULT_PERIOD,
        min_period: float = TICK_MIN_PERIOD,
        max_period: float = TICK_MAX_PERIOD,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if min_period <= 0 or min_period > max_period:
            raise ConfigError(f"Invalid tick bounds [{min_period}, {max_period}]")
        self._min = min_period
        self._max = max_period
        self._clock = clock
        self._period = validate_period(period, min_period, max_period)
        self._last = clock()
        self._cancelled = False

    # ------------------------------------------------------------------
    @property
    def period(self) -> float:
        return self._period

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def set_period(self, seconds: float) -> None:
        """Change the cadence live; the next tick uses the new period."""
        self._period = validate_period(seconds, self._min, self._max)

    def set_steps(self, steps: int) -> None:
        """Slider form: one step is TICK_STEP_SECONDS."""
        self.set_period(int(steps) * TICK_STEP_SECONDS)

    def due(self, now: Optional[float] = None) -> bool:
        """
        True (and re-arm) once a full period has elapsed since the last tick.
        Missed periods are not replayed: at most one tick per call.
        """
        if self._cancelled:
            return False
        now = self._clock() if now is None else now
        if now - self._last >= self._period:
            self._last = now
            return True
        return False

    def cancel(self) -> None:
        self._cancelled = True
