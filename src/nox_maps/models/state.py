"""Log line and player state models.

LogLine is the unit handed from the log tailer to the state engine.
PlayerState is the single record the state engine derives from those lines;
it is owned and mutated by the engine and handed to everyone else as a copy.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LogLine(BaseModel):
    """One trimmed, non-empty line read from a game log.

    Attributes:
        text: The line content with surrounding whitespace removed.
        received_at: When the tailer read the line (UTC).
        source: Log file the line was read from, when known.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    received_at: datetime = Field(default_factory=_utc_now)
    source: Path | None = None


class PlayerState(BaseModel):
    """Live player state reconstructed from the game log.

    Positions are in map coordinates (see the state engine for the
    conversion from ``/loc`` output). Corpse fields are only meaningful
    while ``has_corpse`` is set.

    Attributes:
        x: Map X coordinate.
        y: Map Y coordinate.
        z: Elevation.
        heading: Direction of travel in radians, derived from movement.
        zone: Long zone name, empty until first detected.
        has_position: True once a location sample has been seen.
        has_corpse: True between a death and the matching recovery.
        corpse_x: Map X coordinate of the corpse.
        corpse_y: Map Y coordinate of the corpse.
        corpse_z: Elevation of the corpse.
        corpse_zone: Zone the player died in.
    """

    model_config = ConfigDict(validate_assignment=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    heading: float = 0.0
    zone: str = ""
    has_position: bool = False

    has_corpse: bool = False
    corpse_x: float = 0.0
    corpse_y: float = 0.0
    corpse_z: float = 0.0
    corpse_zone: str = ""

    @property
    def heading_degrees(self) -> float:
        return math.degrees(self.heading)

    def distance_to_corpse(self) -> float | None:
        """Planar distance to the corpse, or None without an active corpse."""
        if not self.has_corpse:
            return None
        return math.hypot(self.corpse_x - self.x, self.corpse_y - self.y)

    def corpse_in_zone(self) -> bool:
        """True when there is a corpse in the zone the player is currently in."""
        return self.has_corpse and self.corpse_zone == self.zone


__all__ = [
    "LogLine",
    "PlayerState",
]
