"""Zone map loading, zone name lookup, and map directory maintenance."""

from __future__ import annotations

from nox_maps.maps.cleanup import (
    PruneReport,
    find_orphan_map_files,
    is_known_map_file,
    prune_map_directory,
)
from nox_maps.maps.loader import (
    load_zone,
    parse_map_file,
    parse_map_line,
)
from nox_maps.maps.lookup import ZoneLookup, normalize_zone_name


__all__ = [
    # Loading
    "load_zone",
    "parse_map_file",
    "parse_map_line",
    # Lookup
    "ZoneLookup",
    "normalize_zone_name",
    # Maintenance
    "PruneReport",
    "find_orphan_map_files",
    "is_known_map_file",
    "prune_map_directory",
]
