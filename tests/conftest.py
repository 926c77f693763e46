"""Pytest configuration and shared fixtures.

This module provides common fixtures for the nox-maps test suite:
temporary game directories with log files, sample map directories, and
fast tailer settings for threaded tests.
"""

from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING, Callable

import pytest
import structlog


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

    from nox_maps.core.config import TailerSettings


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from nox_maps.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo logging configuration applied by a test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def fast_tailer_settings() -> TailerSettings:
    """Tailer settings with short intervals for threaded tests."""
    from nox_maps.core.config import TailerSettings

    return TailerSettings(
        poll_interval=0.2,
        idle_sleep=0.01,
        missing_sleep=0.05,
        queue_size=100,
    )


# =============================================================================
# Game Log Fixtures
# =============================================================================


def log_line(message: str) -> str:
    """Format a message the way the game writes it to the log."""
    return f"[Mon Oct 19 21:04:12 2026] {message}\n"


@pytest.fixture
def eq_dir(tmp_path: Path) -> Path:
    """An empty game installation directory."""
    directory = tmp_path / "EverQuest"
    directory.mkdir()
    return directory


@pytest.fixture
def write_log() -> Callable[..., Path]:
    """Factory that writes game log lines and sets the file's mtime.

    Returns:
        ``write(path, *messages, mtime=None, append=True) -> Path``
    """

    def write(
        path: Path,
        *messages: str,
        mtime: float | None = None,
        append: bool = True,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a" if append else "w", encoding="utf-8") as handle:
            for message in messages:
                handle.write(log_line(message))
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return write


@pytest.fixture
def now() -> float:
    """Current wall-clock time, used as a base for file mtimes."""
    return time.time()


# =============================================================================
# Map Fixtures
# =============================================================================


SAMPLE_BASE_MAP = """\
L 100.0, 200.0, 0.0, 300.0, -50.0, 0.0, 255, 0, 0
L -400.5, 10, 5, 0, 0, 5
P 150.0, 120.0, 1.0, 0, 0, 255, 2, Zone_to_Commonlands
"""

SAMPLE_LAYER_MAP = """\
L 500, 500, 20, 600, 700, 20, 0, 0, 0
P 10, 10, 0, 0, 0, 0, 1, Bank,_Guild_Hall
"""

SAMPLE_LOOKUP_INI = """\
[Zones]
# Long name = file code
Greater Faydark = gfaydark
East Commonlands = ecommons
The Nexus = nexus
"""


@pytest.fixture
def map_dir(tmp_path: Path) -> Path:
    """A map directory with a two-layer zone and a lookup file.

    Contains ``GFayDark.txt`` (mixed case on purpose), ``gfaydark_1.txt``,
    an unrelated ``qeynos.txt``, and ``map_keys.ini``.
    """
    directory = tmp_path / "maps"
    directory.mkdir()
    (directory / "GFayDark.txt").write_text(SAMPLE_BASE_MAP, encoding="utf-8")
    (directory / "gfaydark_1.txt").write_text(SAMPLE_LAYER_MAP, encoding="utf-8")
    (directory / "qeynos.txt").write_text("L 0, 0, 0, 1, 1, 0\n", encoding="utf-8")
    (directory / "map_keys.ini").write_text(SAMPLE_LOOKUP_INI, encoding="utf-8")
    return directory
