"""Application-wide constants for nox-maps.

Timing, buffer sizes, and colour defaults. Log-line patterns live in
``nox_maps.eqlog.patterns``.
"""

from __future__ import annotations

# =============================================================================
# Log Discovery and Tailing
# =============================================================================

LOG_FILE_PREFIX = "eqlog"
"""Game log filenames start with this prefix (``eqlog_<name>_<server>.txt``)."""

LOG_FILE_SUFFIX = ".txt"
"""Game log filenames end with this suffix."""

LOG_SUBDIRECTORY = "Logs"
"""Fallback directory, relative to the game directory, searched for logs."""

ROTATION_CHECK_INTERVAL = 3.0
"""Seconds between re-discovery of the newest log file."""

IDLE_READ_SLEEP = 0.1
"""Seconds to sleep when the open log has no new data."""

NO_LOG_SLEEP = 1.0
"""Seconds to sleep when no log file is open."""

LINE_QUEUE_SIZE = 1000
"""Capacity of the tailer-to-engine line queue."""

SWITCH_SEEK_BACK_BYTES = 5_000
"""Bytes re-read from the end of a newly opened log to catch the login zone line."""

INITIAL_SCAN_BYTES = 50_000
"""Bytes scanned from the end of the newest log to find the last known zone."""

# =============================================================================
# Player State
# =============================================================================

HEADING_NOISE_THRESHOLD = 0.1
"""Minimum per-axis displacement before heading is recomputed."""

# =============================================================================
# Map Files
# =============================================================================

MAP_FILE_SUFFIX = ".txt"

MAP_LAYER_SUFFIXES = ("", "_1", "_2", "_3")
"""Base layer followed by the numbered sub-layers, in load order."""

DEFAULT_LINE_COLOR = (150, 150, 150)
"""Colour of line segments that carry no colour fields."""

ZERO_COLOR_SUBSTITUTE = (130, 130, 130)
"""Colour used in place of an all-zero (black) colour field."""

MAP_SAMPLE_FILE_COUNT = 5
"""Number of directory entries reported when a zone map is not found."""

LOOKUP_FILE_NAMES = ("map_keys.json", "map_keys.ini")
"""Zone lookup files that live alongside the map files."""
