"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        NoxMapsError: Base exception for all application errors.
        ConfigurationError, ZoneLookupError: Configuration errors.
        LogError, LogDiscoveryError, TailerError: Log tailing errors.
        MapError, ZoneNotFoundError, MapParseError: Zone map errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from nox_maps.core.config import (
    MapSettings,
    Settings,
    TailerSettings,
    clear_settings_cache,
    get_settings,
)
from nox_maps.core.exceptions import (
    ConfigurationError,
    LogDiscoveryError,
    LogError,
    MapError,
    MapParseError,
    NoxMapsError,
    TailerError,
    ZoneLookupError,
    ZoneNotFoundError,
)
from nox_maps.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "NoxMapsError",
    "ConfigurationError",
    "ZoneLookupError",
    "LogError",
    "LogDiscoveryError",
    "TailerError",
    "MapError",
    "ZoneNotFoundError",
    "MapParseError",
    # Configuration
    "Settings",
    "TailerSettings",
    "MapSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
