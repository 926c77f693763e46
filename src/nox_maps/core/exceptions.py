"""Custom exception hierarchy for nox-maps.

All exceptions inherit from NoxMapsError so callers at the application
boundary can catch a single type while still inspecting domain-specific
context through the ``details`` dictionary.

Example:
    >>> from nox_maps.core.exceptions import ZoneNotFoundError
    >>> raise ZoneNotFoundError("No map files for zone", zone_code="gfaydark")
"""

from __future__ import annotations

from typing import Any


class NoxMapsError(Exception):
    """Base exception for all nox-maps errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(NoxMapsError):
    """Raised when application configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with the offending key.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ZoneLookupError(ConfigurationError):
    """Raised when the zone name lookup file cannot be loaded.

    A lookup *miss* is never an error; this only covers missing,
    unreadable, or malformed lookup files.
    """

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        super().__init__(message, details=combined_details)


# =============================================================================
# Log Tailing Exceptions
# =============================================================================


class LogError(NoxMapsError):
    """Base exception for game log discovery and tailing errors."""


class LogDiscoveryError(LogError):
    """Raised when no candidate log file can be found.

    The tailer treats this as a transient condition and keeps polling;
    direct callers of discovery receive it with the searched directories.
    """

    def __init__(
        self,
        message: str,
        *,
        searched: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize discovery error with the directories searched.

        Args:
            message: Human-readable error description.
            searched: Directories that were scanned for log files.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if searched:
            combined_details["searched"] = searched
        super().__init__(message, details=combined_details)


class TailerError(LogError):
    """Raised when the log tailer is used incorrectly (e.g. started twice)."""


# =============================================================================
# Map Exceptions
# =============================================================================


class MapError(NoxMapsError):
    """Base exception for zone map loading errors."""

    def __init__(
        self,
        message: str,
        *,
        zone_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize map error with the zone code involved.

        Args:
            message: Human-readable error description.
            zone_code: Short file code of the zone being loaded.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if zone_code:
            combined_details["zone_code"] = zone_code
        super().__init__(message, details=combined_details)


class ZoneNotFoundError(MapError):
    """Raised when no map file for a zone exists or all of them are empty.

    Carries a short sample of the files that *are* present in the map
    directory to help diagnose misplaced or misnamed maps.
    """

    def __init__(
        self,
        message: str,
        *,
        zone_code: str | None = None,
        map_dir: str | None = None,
        sample_files: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize zone-not-found error with directory diagnostics.

        Args:
            message: Human-readable error description.
            zone_code: Short file code that was requested.
            map_dir: Directory that was searched.
            sample_files: A few filenames actually present in ``map_dir``.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if map_dir:
            combined_details["map_dir"] = map_dir
        if sample_files is not None:
            combined_details["sample_files"] = sample_files
        super().__init__(message, zone_code=zone_code, details=combined_details)

    @property
    def sample_files(self) -> list[str]:
        """Filenames observed in the map directory when the lookup failed."""
        return list(self.details.get("sample_files", []))


class MapParseError(MapError):
    """Raised when a map file cannot be read at all.

    Malformed lines never raise; they are skipped or parsed leniently.
    """

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        line_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        if line_number is not None:
            combined_details["line_number"] = line_number
        super().__init__(message, details=combined_details)


__all__ = [
    "NoxMapsError",
    "ConfigurationError",
    "ZoneLookupError",
    "LogError",
    "LogDiscoveryError",
    "TailerError",
    "MapError",
    "ZoneNotFoundError",
    "MapParseError",
]
