"""Tests for game log line patterns."""

from __future__ import annotations

import pytest

from nox_maps.eqlog.patterns import (
    LOCATION_PATTERN,
    extract_zone_name,
    is_recovery_line,
    is_zone_annotation,
)


class TestLocationPattern:
    """Tests for the /loc pattern."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("Your Location is 10, 20, 3", ("10", "20", "3")),
            ("[Mon Oct 19 21:04:12 2026] Your Location is -1.5, 300.25, -7.00", ("-1.5", "300.25", "-7.00")),
            ("Your Location is 10., -.5, +3", ("10.", "-.5", "+3")),
        ],
    )
    def test_matches(self, line: str, expected: tuple[str, str, str]) -> None:
        """Test location lines with and without timestamps."""
        match = LOCATION_PATTERN.search(line)
        assert match is not None
        assert match.groups() == expected

    def test_rejects_other_text(self) -> None:
        """Test chat mentioning a location does not match."""
        assert LOCATION_PATTERN.search("Soandso says, 'Your Location is nowhere'") is None


class TestZoneExtraction:
    """Tests for zone change extraction."""

    def test_real_zone(self) -> None:
        """Test a zone change returns the long name."""
        assert extract_zone_name("[Mon Oct 19 21:04:12 2026] You have entered The Nexus.") == "The Nexus"

    def test_pvp_area_ignored(self) -> None:
        """Test PvP area annotations are not zone changes."""
        assert extract_zone_name("You have entered an Arena (PvP) area.") is None

    def test_area_suffix_ignored(self) -> None:
        """Test generic area annotations are not zone changes."""
        assert extract_zone_name("You have entered a safe area.") is None
        assert is_zone_annotation("a safe area") is True

    def test_trailing_period_required(self) -> None:
        """Test the message must end its name with a period."""
        assert extract_zone_name("You have entered The Nexus") is None

    def test_non_zone_line(self) -> None:
        """Test unrelated lines yield nothing."""
        assert extract_zone_name("You have been slain by a gnoll!") is None


class TestRecoveryLines:
    """Tests for corpse recovery detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "Summoning your corpse.",
            "You receive a resurrection from Cleric.",
            "You have been resurrected.",
            "Your corpse decays.",
            "You summon your corpse.",
        ],
    )
    def test_recovery_phrases(self, line: str) -> None:
        """Test every recovery phrase clears a corpse run."""
        assert is_recovery_line(line) is True

    def test_summoning_without_corpse(self) -> None:
        """Test summoning something else is not a recovery."""
        assert is_recovery_line("Summoning a pet.") is False
