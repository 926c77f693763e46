"""Patterns for the game log lines nox-maps understands.

Log lines look like ``[Mon Oct 19 21:04:12 2026] You have entered The Nexus.``;
all patterns are searched anywhere in the line so the timestamp prefix is
irrelevant.
"""

from __future__ import annotations

import re

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)"

LOCATION_PATTERN = re.compile(
    rf"Your Location is ({_NUMBER}), ({_NUMBER}), ({_NUMBER})"
)
"""``/loc`` output: two horizontal axes followed by elevation."""

ZONE_ENTERED_PATTERN = re.compile(r"You have entered (.+)\.")
"""Zone transition message; the capture is the long zone name."""

PVP_MARKER = "(PvP)"
AREA_SUFFIX = " area"

DEATH_PHRASE = "You have been slain"

RECOVERY_PHRASES = (
    "You receive a resurrection",
    "You have been resurrected",
    "corpse decays",
    "You summon your corpse",
)
"""Substrings that end a corpse run, besides a corpse summoning line."""


def is_zone_annotation(name: str) -> bool:
    """True for "entered" messages that are status notes, not zone changes.

    The server reports entering PvP or arena areas inside a zone with the
    same wording as a real zone change.
    """
    return PVP_MARKER in name or name.endswith(AREA_SUFFIX)


def extract_zone_name(text: str) -> str | None:
    """Return the zone named by a "You have entered" line.

    Returns:
        The long zone name, or None when the line is not a zone change or
        is only a PvP/area annotation.
    """
    match = ZONE_ENTERED_PATTERN.search(text)
    if match is None:
        return None
    name = match.group(1)
    if is_zone_annotation(name):
        return None
    return name


def is_recovery_line(text: str) -> bool:
    """True when the line ends a corpse run (summon, resurrection, decay)."""
    if "Summoning" in text and "corpse" in text:
        return True
    return any(phrase in text for phrase in RECOVERY_PHRASES)


__all__ = [
    "LOCATION_PATTERN",
    "ZONE_ENTERED_PATTERN",
    "DEATH_PHRASE",
    "RECOVERY_PHRASES",
    "is_zone_annotation",
    "extract_zone_name",
    "is_recovery_line",
]
