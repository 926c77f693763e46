"""Wire the log tailer, state engine, and zone map tracker together.

Example:
    >>> from nox_maps.pipeline import start_pipeline
    >>> pipeline = start_pipeline()
    >>> while True:
    ...     if pipeline.refresh():
    ...         redraw(pipeline.tracker.current_map)
    ...     draw_player(pipeline.engine.snapshot())
"""

from __future__ import annotations

from dataclasses import dataclass

from nox_maps.core.config import Settings, get_settings
from nox_maps.core.exceptions import ConfigurationError, ZoneLookupError
from nox_maps.core.logging import configure_logging, get_logger
from nox_maps.engine.state_engine import StateEngine
from nox_maps.engine.tracker import ZoneMapTracker
from nox_maps.eqlog.tailer import LogTailer
from nox_maps.maps.lookup import ZoneLookup


logger = get_logger(__name__)


@dataclass
class Pipeline:
    """Running components of a nox-maps session."""

    tailer: LogTailer
    engine: StateEngine
    tracker: ZoneMapTracker

    def refresh(self) -> bool:
        """Feed the latest player state to the tracker.

        Returns:
            True if the zone changed (and a map load was attempted).
        """
        return self.tracker.update(self.engine.snapshot())

    def stop(self) -> None:
        self.tailer.stop()
        self.engine.stop()


def load_lookup(settings: Settings) -> ZoneLookup:
    """Load the configured zone lookup, or an empty one if it is unavailable."""
    try:
        return ZoneLookup.from_file(settings.maps.lookup_file)
    except ZoneLookupError as exc:
        logger.warning("Zone lookup unavailable, using zone names as file codes", **exc.details)
        return ZoneLookup()


def start_pipeline(settings: Settings | None = None) -> Pipeline:
    """Start tailing the configured game directory.

    Args:
        settings: Application settings; the cached settings are used when
            omitted.

    Returns:
        The running Pipeline.

    Raises:
        ConfigurationError: If no game directory is configured.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.effective_log_level, json_format=settings.json_logs)
    if not settings.has_eq_path:
        raise ConfigurationError(
            "No game directory configured",
            config_key="eq_path",
        )

    tailer = LogTailer(settings.eq_path, settings=settings.tailer)
    tailer.start()

    engine = StateEngine(initial_zone=tailer.initial_zone)
    engine.start(tailer.lines)

    tracker = ZoneMapTracker(
        settings.maps.map_dir,
        load_lookup(settings),
        keep_previous_on_failure=settings.maps.keep_previous_on_failure,
    )
    logger.info(
        "Pipeline started",
        eq_path=str(settings.eq_path),
        map_dir=str(settings.maps.map_dir),
        initial_zone=tailer.initial_zone,
    )
    return Pipeline(tailer=tailer, engine=engine, tracker=tracker)


__all__ = [
    "Pipeline",
    "load_lookup",
    "start_pipeline",
]
