"""State engine, line classification, and zone map tracking."""

from __future__ import annotations

from nox_maps.engine.classifier import (
    Classification,
    LineKind,
    LineRule,
    classify,
)
from nox_maps.engine.state_engine import STOP, StateEngine
from nox_maps.engine.tracker import ZoneMapTracker


__all__ = [
    "Classification",
    "LineKind",
    "LineRule",
    "classify",
    "STOP",
    "StateEngine",
    "ZoneMapTracker",
]
