"""Player state reconstruction from the game log line stream.

The StateEngine is the only writer of PlayerState. It consumes LogLines
one at a time, in arrival order, and applies the classified meaning of
each line. Other threads read the state through ``snapshot()``.

Coordinate conversion:
    ``/loc`` prints ``Your Location is A, B, C`` where A and B are the two
    horizontal axes in the game's right-handed convention. Map geometry is
    left-handed with the axes swapped, so the player's map position is
    ``x = -B, y = -A`` and ``z = C``.
"""

from __future__ import annotations

import math
import threading
from queue import Empty, Queue
from typing import Any, Callable

from nox_maps.core import constants
from nox_maps.core.logging import get_logger
from nox_maps.engine.classifier import Classification, LineKind, classify
from nox_maps.models.state import LogLine, PlayerState


logger = get_logger(__name__)

STOP = object()
"""Queue sentinel that ends ``StateEngine.run``."""

_GET_TIMEOUT = 0.5


class StateEngine:
    """Single-writer state machine over the game log.

    Attributes:
        zone_changes: Incremented every time the zone is replaced; pollers
            compare it with the value they last saw.
        lines_processed: Number of lines consumed.

    Example:
        >>> engine = StateEngine()
        >>> engine.process_line("Your Location is 10, 20, 3")
        <LineKind.LOCATION: 'location'>
        >>> engine.snapshot().x
        -20.0
    """

    def __init__(self, initial_zone: str | None = None) -> None:
        """Initialize the engine.

        Args:
            initial_zone: Zone found in the log history before streaming
                started; shown until the next zone change line arrives.
        """
        self._state = PlayerState()
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.zone_changes = 0
        self.lines_processed = 0

        self._handlers: dict[LineKind, Callable[[Classification], bool]] = {
            LineKind.LOCATION: self._apply_location,
            LineKind.ZONE: self._apply_zone,
            LineKind.DEATH: self._apply_death,
            LineKind.RECOVERY: self._apply_recovery,
        }

        if initial_zone:
            self.seed_zone(initial_zone)

    def seed_zone(self, zone: str) -> None:
        """Set the zone without a log line, e.g. from the tailer's startup scan."""
        with self._lock:
            self._state.zone = zone
            self.zone_changes += 1
        logger.info("Starting with zone", zone=zone)

    def snapshot(self) -> PlayerState:
        """Return a consistent copy of the current player state."""
        with self._lock:
            return self._state.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Line processing
    # -------------------------------------------------------------------------

    def process_line(self, line: LogLine | str) -> LineKind | None:
        """Apply one log line to the player state.

        Args:
            line: A LogLine from the tailer, or raw line text.

        Returns:
            The kind of line that changed (or refreshed) the state, or None
            for unrecognised lines and ignored zone annotations.
        """
        text = line.text if isinstance(line, LogLine) else line.strip()
        self.lines_processed += 1

        result = classify(text)
        if result is None or result.is_ignored:
            return None

        with self._lock:
            applied = self._handlers[result.kind](result)
        return result.kind if applied else None

    def _apply_location(self, result: Classification) -> bool:
        if result.location is None:
            return False
        first, second, elevation = result.location
        x = -second
        y = -first

        state = self._state
        if not state.has_position:
            logger.debug(
                "First position",
                log_position=(first, second),
                map_position=(x, y),
            )
            state.has_position = True
        else:
            dx = x - state.x
            dy = y - state.y
            threshold = constants.HEADING_NOISE_THRESHOLD
            if abs(dx) > threshold or abs(dy) > threshold:
                state.heading = math.atan2(dy, dx)

        state.x = x
        state.y = y
        state.z = elevation
        return True

    def _apply_zone(self, result: Classification) -> bool:
        if result.zone is None:
            return False
        if result.zone == self._state.zone:
            return False
        logger.info("Zone changed", previous=self._state.zone or None, zone=result.zone)
        self._state.zone = result.zone
        self.zone_changes += 1
        return True

    def _apply_death(self, result: Classification) -> bool:
        state = self._state
        state.corpse_x = state.x
        state.corpse_y = state.y
        state.corpse_z = state.z
        state.corpse_zone = state.zone
        state.has_corpse = True
        logger.info("Player died", zone=state.zone, x=state.x, y=state.y)
        return True

    def _apply_recovery(self, result: Classification) -> bool:
        if self._state.has_corpse:
            logger.info("Corpse recovered", zone=self._state.corpse_zone)
        self._state.has_corpse = False
        return True

    # -------------------------------------------------------------------------
    # Consumer loop
    # -------------------------------------------------------------------------

    def run(self, lines: Queue[Any]) -> None:
        """Consume lines until ``STOP`` is dequeued or ``stop()`` is called.

        A line that fails to apply is logged and skipped.
        """
        while not self._stop.is_set():
            try:
                item = lines.get(timeout=_GET_TIMEOUT)
            except Empty:
                continue
            try:
                if item is STOP:
                    break
                self.process_line(item)
            except Exception:
                logger.exception("Failed to process log line", line=getattr(item, "text", item))
            finally:
                lines.task_done()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, lines: Queue[Any]) -> threading.Thread:
        """Run the consumer loop in a daemon thread."""
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run,
            args=(lines,),
            name="nox-maps-state-engine",
            daemon=True,
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = 2.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None


__all__ = [
    "STOP",
    "StateEngine",
]
