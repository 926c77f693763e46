"""Prioritized classification of game log lines.

A line is tested against an ordered list of rules and the first rule that
matches decides what the line means. The order matters: a ``/loc`` line is
never considered as a zone change, and a zone change never as a death.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable

from nox_maps.eqlog.patterns import (
    DEATH_PHRASE,
    LOCATION_PATTERN,
    ZONE_ENTERED_PATTERN,
    is_recovery_line,
    is_zone_annotation,
)


class LineKind(StrEnum):
    """What a classified log line reports."""

    LOCATION = "location"
    """``Your Location is A, B, C`` from the ``/loc`` command."""

    ZONE = "zone"
    """``You have entered <zone>.``"""

    DEATH = "death"
    """The player was slain and left a corpse."""

    RECOVERY = "recovery"
    """The corpse run ended (summon, resurrection, or decay)."""


@dataclass(frozen=True)
class Classification:
    """Result of classifying one line.

    Attributes:
        kind: The matching rule.
        location: The three raw ``/loc`` values, in log order.
        zone: Captured zone name. None for a LOCATION line, and for a ZONE
            line that is only a PvP/area annotation.
    """

    kind: LineKind
    location: tuple[float, float, float] | None = None
    zone: str | None = None

    @property
    def is_ignored(self) -> bool:
        return self.kind is LineKind.ZONE and self.zone is None


@dataclass(frozen=True)
class LineRule:
    """A named matcher; returns a Classification or None."""

    kind: LineKind
    match: Callable[[str], Classification | None]


def _match_location(text: str) -> Classification | None:
    match = LOCATION_PATTERN.search(text)
    if match is None:
        return None
    first, second, third = (float(value) for value in match.groups())
    return Classification(LineKind.LOCATION, location=(first, second, third))


def _match_zone(text: str) -> Classification | None:
    match = ZONE_ENTERED_PATTERN.search(text)
    if match is None:
        return None
    name = match.group(1)
    # Annotations still consume the line so no later rule sees it
    if is_zone_annotation(name):
        return Classification(LineKind.ZONE)
    return Classification(LineKind.ZONE, zone=name)


def _match_death(text: str) -> Classification | None:
    if DEATH_PHRASE in text:
        return Classification(LineKind.DEATH)
    return None


def _match_recovery(text: str) -> Classification | None:
    if is_recovery_line(text):
        return Classification(LineKind.RECOVERY)
    return None


DEFAULT_RULES: tuple[LineRule, ...] = (
    LineRule(LineKind.LOCATION, _match_location),
    LineRule(LineKind.ZONE, _match_zone),
    LineRule(LineKind.DEATH, _match_death),
    LineRule(LineKind.RECOVERY, _match_recovery),
)


def classify(text: str, rules: tuple[LineRule, ...] = DEFAULT_RULES) -> Classification | None:
    """Classify a log line with first-match-wins semantics.

    Args:
        text: The log line, with or without its timestamp prefix.
        rules: Rules in priority order.

    Returns:
        The first matching Classification, or None.

    Example:
        >>> classify("[Mon Oct 19 21:04:12 2026] You have entered The Nexus.").zone
        'The Nexus'
    """
    for rule in rules:
        result = rule.match(text)
        if result is not None:
            return result
    return None


__all__ = [
    "LineKind",
    "Classification",
    "LineRule",
    "DEFAULT_RULES",
    "classify",
]
