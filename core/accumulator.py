"""
TextAccumulator — turns the per-frame observation stream into text.

Frames only *observe*: they overwrite a single pending class id.
A periodic tick *commits*: it appends the pending letter and clears it.
Any number of sightings between two ticks collapse into one character.
"""
from __future__ import annotations
import threading
from typing import Optional

from domain.enums import ControlCommand, RunState
from domain.labels import BLANK_CLASS_ID, class_label_of, is_valid_class_id
from domain.models import AccumulatorSnapshot


class TextAccumulator:
    """
    Single owner of the spelled text and run state.

    Usage
    -----
    acc = TextAccumulator()
    acc.observe(0)        # every frame
    acc.tick()            # every period -> "A"
    acc.apply(ControlCommand.STOP)

    All operations take one lock: in the Qt front-end frames are observed
    on the worker thread while ticks and commands arrive on the GUI thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = RunState.ADDING
        self._latest: Optional[int] = None
        self._text: list[str] = []
        self._closed = False

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def observe(self, class_id: Optional[int]) -> None:
        """
        Record the most recent sighting.

        None, the blank pose and invalid ids are "no observation": the
        pending id is left as it was until a tick consumes it.
        """
        if class_id is None or not is_valid_class_id(class_id):
            return
        if class_id == BLANK_CLASS_ID:
            return
        with self._lock:
            if self._closed:
                return
            self._latest = int(class_id)

    def tick(self) -> Optional[str]:
        """
        Commit the pending letter if adding. Returns the appended
        character, or None when the tick was a no-op.
        """
        with self._lock:
            if self._closed or self._state != RunState.ADDING or self._latest is None:
                return None
            letter = class_label_of(self._latest)
            self._text.append(letter)
            self._latest = None
            return letter

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Resume adding. Previously accumulated text is discarded."""
        with self._lock:
            if self._closed:
                return
            self._state = RunState.ADDING
            self._text.clear()

    def stop(self) -> None:
        """Pause adding; text and pending id are kept."""
        with self._lock:
            if self._closed:
                return
            self._state = RunState.PAUSED

    def clear(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._text.clear()

    def apply(self, command: ControlCommand) -> None:
        """Dispatch a user command to start / stop / clear."""
        command = ControlCommand(command)
        if command == ControlCommand.START:
            self.start()
        elif command == ControlCommand.STOP:
            self.stop()
        else:
            self.clear()

    def close(self) -> None:
        """Tear down the session; later events and commands are ignored."""
        with self._lock:
            self._closed = True
            self._latest = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def output_text(self) -> str:
        with self._lock:
            return "".join(self._text)

    @property
    def is_adding(self) -> bool:
        return self._state == RunState.ADDING

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def latest_class_id(self) -> Optional[int]:
        """Pending class id, or None if nothing is waiting for a tick."""
        return self._latest

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> AccumulatorSnapshot:
        with self._lock:
            return AccumulatorSnapshot(
                output_text="".join(self._text),
                run_state=self._state,
                latest_class_id=self._latest,
            )
