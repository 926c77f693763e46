"""Pydantic models for log lines, player state, and zone map geometry."""

from __future__ import annotations

from nox_maps.models.geometry import (
    MapBounds,
    MapColor,
    MapLabel,
    MapLine,
    ZoneMap,
)
from nox_maps.models.state import LogLine, PlayerState


__all__ = [
    # Log stream
    "LogLine",
    "PlayerState",
    # Geometry
    "MapBounds",
    "MapColor",
    "MapLabel",
    "MapLine",
    "ZoneMap",
]
