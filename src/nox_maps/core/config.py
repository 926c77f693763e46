"""Configuration management for nox-maps.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file, and can be overridden at construction time.

Example:
    >>> from nox_maps.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.tailer.poll_interval
    3.0

Environment Variables:
    NOX_MAPS_EQ_PATH: Game installation directory holding the logs
    NOX_MAPS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    NOX_MAPS_TAILER_POLL_INTERVAL: Seconds between log rotation checks
    NOX_MAPS_MAP_MAP_DIR: Directory holding the zone map files
    NOX_MAPS_MAP_LOOKUP_FILE: Zone name lookup file (JSON or ini-style)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nox_maps.core import constants
from nox_maps.core.exceptions import ConfigurationError


class TailerSettings(BaseSettings):
    """Configuration for the game log tailer.

    Attributes:
        poll_interval: Seconds between checks for a newer log file.
        idle_sleep: Seconds to sleep when no new data is available.
        missing_sleep: Seconds to sleep when no log file is open.
        queue_size: Capacity of the line queue handed to the state engine.
        switch_seek_back: Bytes re-read from the end of a newly opened log.
        initial_scan_bytes: Bytes scanned at startup for the last zone.
        encoding: Text encoding used to decode log lines.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOX_MAPS_TAILER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    poll_interval: float = Field(
        default=constants.ROTATION_CHECK_INTERVAL,
        gt=0,
        description="Seconds between log rotation checks",
    )
    idle_sleep: float = Field(
        default=constants.IDLE_READ_SLEEP,
        gt=0,
        description="Sleep when the open log has no new data",
    )
    missing_sleep: float = Field(
        default=constants.NO_LOG_SLEEP,
        gt=0,
        description="Sleep when no log file is open",
    )
    queue_size: int = Field(
        default=constants.LINE_QUEUE_SIZE,
        ge=1,
        description="Line queue capacity",
    )
    switch_seek_back: int = Field(
        default=constants.SWITCH_SEEK_BACK_BYTES,
        ge=0,
        description="Bytes re-read when switching to a new log",
    )
    initial_scan_bytes: int = Field(
        default=constants.INITIAL_SCAN_BYTES,
        ge=0,
        description="Bytes scanned at startup for the initial zone",
    )
    encoding: str = Field(
        default="utf-8",
        description="Log file text encoding",
    )


class MapSettings(BaseSettings):
    """Configuration for zone map loading.

    Attributes:
        map_dir: Directory containing ``<code>.txt`` map files.
        lookup_file: Long zone name to file code lookup. A bare filename is
            resolved relative to ``map_dir``.
        keep_previous_on_failure: Keep showing the last good map when a
            zone's map cannot be loaded.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOX_MAPS_MAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    map_dir: Path = Field(
        default=Path("assets/maps"),
        description="Directory containing zone map files",
    )
    lookup_file: Path = Field(
        default=Path(constants.LOOKUP_FILE_NAMES[0]),
        description="Zone name lookup file",
    )
    keep_previous_on_failure: bool = Field(
        default=True,
        description="Keep the previous map when a zone map fails to load",
    )

    @model_validator(mode="after")
    def resolve_lookup_file(self) -> "MapSettings":
        """Anchor a bare lookup filename inside the map directory.

        Returns:
            Self with ``lookup_file`` resolved.
        """
        if not self.lookup_file.is_absolute() and self.lookup_file.parent == Path("."):
            self.lookup_file = self.map_dir / self.lookup_file
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        debug: Log at DEBUG level regardless of ``log_level``.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        eq_path: Game installation directory (logs live here or in ``Logs``).
        tailer: Log tailer settings.
        maps: Zone map settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOX_MAPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    debug: bool = Field(
        default=False,
        description="Force DEBUG logging",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON formatted logs",
    )
    eq_path: Path | None = Field(
        default=None,
        description="Game installation directory",
    )

    tailer: TailerSettings = Field(default_factory=TailerSettings)
    maps: MapSettings = Field(default_factory=MapSettings)

    @property
    def has_eq_path(self) -> bool:
        """Check whether a game directory has been configured."""
        return self.eq_path is not None and str(self.eq_path) != ""

    @property
    def effective_log_level(self) -> str:
        """Logging level after applying ``debug``."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "TailerSettings",
    "MapSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
