"""Game log discovery, tailing, and line patterns."""

from __future__ import annotations

from nox_maps.eqlog.patterns import (
    extract_zone_name,
    is_recovery_line,
    is_zone_annotation,
)
from nox_maps.eqlog.tailer import LogTailer, is_log_file_name


__all__ = [
    "LogTailer",
    "is_log_file_name",
    "extract_zone_name",
    "is_recovery_line",
    "is_zone_annotation",
]
