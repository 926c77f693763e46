"""Nox Maps - live zone maps driven by the EverQuest game log.

The game writes ``/loc`` output, zone changes, and deaths to a per-character
log file. nox-maps follows that log, rebuilds the player's position,
heading, zone, and corpse state from it, and loads the vector map for the
current zone.

Example:
    >>> from nox_maps import LogTailer, StateEngine, ZoneLookup, load_zone
    >>>
    >>> tailer = LogTailer("C:/EverQuest")
    >>> tailer.start()
    >>> engine = StateEngine(initial_zone=tailer.initial_zone)
    >>> engine.start(tailer.lines)
    >>>
    >>> state = engine.snapshot()
    >>> code = ZoneLookup.from_file("assets/maps/map_keys.json").resolve_or_default(state.zone)
    >>> zone_map = load_zone("assets/maps", code)

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic models for log lines, player state, and map geometry.
    eqlog: Log discovery, tailing, and line patterns.
    engine: Line classification, state engine, and zone map tracking.
    maps: Map file loading, zone name lookup, and map directory pruning.
    pipeline: Wiring of all of the above from Settings.
"""

from __future__ import annotations

# Core
from nox_maps.core.config import Settings, get_settings
from nox_maps.core.exceptions import NoxMapsError, ZoneNotFoundError
from nox_maps.core.logging import configure_logging, get_logger

# Models
from nox_maps.models import (
    LogLine,
    MapBounds,
    MapColor,
    MapLabel,
    MapLine,
    PlayerState,
    ZoneMap,
)

# Components
from nox_maps.engine import LineKind, StateEngine, ZoneMapTracker, classify
from nox_maps.eqlog import LogTailer
from nox_maps.maps import ZoneLookup, load_zone, prune_map_directory
from nox_maps.pipeline import Pipeline, start_pipeline


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "NoxMapsError",
    "ZoneNotFoundError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "LogLine",
    "PlayerState",
    "MapBounds",
    "MapColor",
    "MapLabel",
    "MapLine",
    "ZoneMap",
    # Components
    "LogTailer",
    "LineKind",
    "StateEngine",
    "ZoneMapTracker",
    "classify",
    "ZoneLookup",
    "load_zone",
    "prune_map_directory",
    "Pipeline",
    "start_pipeline",
]
