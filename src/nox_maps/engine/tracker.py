"""Reload the zone map when the player's zone changes.

Renderers poll PlayerState every frame; ZoneMapTracker turns those polls
into at most one map load per zone change and keeps a usable map around
when a zone has no map files.
"""

from __future__ import annotations

from pathlib import Path

from nox_maps.core.exceptions import MapError
from nox_maps.core.logging import get_logger
from nox_maps.maps.loader import load_zone
from nox_maps.maps.lookup import ZoneLookup
from nox_maps.models.geometry import ZoneMap
from nox_maps.models.state import PlayerState


logger = get_logger(__name__)


class ZoneMapTracker:
    """Keep ``current_map`` in step with the player's zone.

    Attributes:
        map_dir: Directory containing the zone map files.
        lookup: Long zone name to file code table.
        keep_previous_on_failure: On a failed load, keep the last good map
            instead of switching to an empty one.
        current_zone: Zone the current map was requested for.
        current_map: The map to display, if any.
        last_error: The error from the most recent failed load.
    """

    def __init__(
        self,
        map_dir: Path | str,
        lookup: ZoneLookup | None = None,
        *,
        keep_previous_on_failure: bool = True,
    ) -> None:
        self.map_dir = Path(map_dir)
        self.lookup = lookup if lookup is not None else ZoneLookup()
        self.keep_previous_on_failure = keep_previous_on_failure
        self.current_zone = ""
        self.current_map: ZoneMap | None = None
        self.last_error: MapError | None = None

    def update(self, state: PlayerState) -> bool:
        """Load a new map if ``state.zone`` differs from the tracked zone.

        Returns:
            True if the zone changed.
        """
        if state.zone == self.current_zone:
            return False
        self.current_zone = state.zone
        if state.zone:
            self.load(state.zone)
        return True

    def load(self, zone: str) -> ZoneMap | None:
        """Resolve and load the map for a long zone name.

        Unknown names are tried as file codes directly.
        """
        code = self.lookup.resolve_or_default(zone)
        if code == zone and zone not in self.lookup:
            logger.debug("No lookup entry, using zone name as file code", zone=zone)

        try:
            zone_map = load_zone(self.map_dir, code)
        except MapError as exc:
            self.last_error = exc
            logger.warning("Could not load zone map", zone=zone, **exc.details)
            if not self.keep_previous_on_failure or self.current_map is None:
                self.current_map = ZoneMap.empty(code)
            return self.current_map

        self.last_error = None
        self.current_map = zone_map
        logger.info(
            "Zone map loaded",
            zone=zone,
            code=code,
            lines=len(zone_map.lines),
            labels=len(zone_map.labels),
        )
        return zone_map


__all__ = ["ZoneMapTracker"]
