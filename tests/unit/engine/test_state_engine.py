"""Tests for the player state engine."""

from __future__ import annotations

import math
import queue
import time
from unittest.mock import patch

import pytest

from nox_maps.engine.classifier import Classification, LineKind, LineRule, classify
from nox_maps.engine.state_engine import STOP, StateEngine
from nox_maps.models.state import LogLine


def feed(engine: StateEngine, *lines: str) -> list[LineKind | None]:
    return [engine.process_line(line) for line in lines]


class TestPosition:
    """Tests for location updates and coordinate conversion."""

    def test_coordinate_conversion(self) -> None:
        """Test /loc values are swapped and negated into map space."""
        engine = StateEngine()

        assert engine.process_line("Your Location is 10, 20, 3") is LineKind.LOCATION

        state = engine.snapshot()
        assert (state.x, state.y, state.z) == (-20.0, -10.0, 3.0)
        assert state.has_position is True

    def test_trailing_dot_coordinates(self) -> None:
        """Test values written with a trailing decimal point are accepted."""
        engine = StateEngine()

        assert engine.process_line("Your Location is 10., 20., 3.") is LineKind.LOCATION
        state = engine.snapshot()
        assert (state.x, state.y, state.z) == (-20.0, -10.0, 3.0)

    def test_location_without_values_is_skipped(self) -> None:
        """Test a location classification with no values leaves the state alone."""
        engine = StateEngine()
        rules = (LineRule(LineKind.LOCATION, lambda text: Classification(LineKind.LOCATION)),)

        with patch("nox_maps.engine.state_engine.classify", lambda text: classify(text, rules)):
            assert engine.process_line("anything") is None

        assert engine.snapshot().has_position is False

    def test_first_sample_keeps_default_heading(self) -> None:
        """Test the first sample has no previous position to derive heading from."""
        engine = StateEngine()
        engine.process_line("Your Location is 100, 100, 0")

        assert engine.snapshot().heading == 0.0

    def test_heading_from_movement(self) -> None:
        """Test heading follows a diagonal move from (0,0) to (5,5)."""
        engine = StateEngine()
        # Map (0, 0) then map (5, 5)
        feed(engine, "Your Location is 0, 0, 0", "Your Location is -5, -5, 0")

        state = engine.snapshot()
        assert (state.x, state.y) == (5.0, 5.0)
        assert state.heading == pytest.approx(math.atan2(5, 5))
        assert state.heading == pytest.approx(0.785, abs=1e-3)

    def test_small_moves_keep_heading(self) -> None:
        """Test sub-threshold jitter leaves heading unchanged but moves the player."""
        engine = StateEngine()
        feed(engine, "Your Location is 0, 0, 0", "Your Location is -5, -5, 0")
        before = engine.snapshot().heading

        engine.process_line("Your Location is -5.05, -4.95, 2")

        state = engine.snapshot()
        assert state.heading == before
        assert state.x == pytest.approx(4.95)
        assert state.y == pytest.approx(5.05)
        assert state.z == 2.0

    def test_single_axis_move_updates_heading(self) -> None:
        """Test movement along one axis is enough to update heading."""
        engine = StateEngine()
        feed(engine, "Your Location is 0, 0, 0", "Your Location is 0, -10, 0")

        assert engine.snapshot().heading == pytest.approx(0.0)

        engine.process_line("Your Location is -10, -10, 0")
        assert engine.snapshot().heading == pytest.approx(math.pi / 2)


class TestZone:
    """Tests for zone tracking."""

    def test_zone_change(self) -> None:
        """Test a zone line sets the zone."""
        engine = StateEngine()

        assert engine.process_line("You have entered The Nexus.") is LineKind.ZONE
        assert engine.snapshot().zone == "The Nexus"
        assert engine.zone_changes == 1

    def test_pvp_annotation_ignored(self) -> None:
        """Test PvP area messages do not change the zone."""
        engine = StateEngine()
        engine.process_line("You have entered The Nexus.")

        assert engine.process_line("You have entered an Arena (PvP) area.") is None
        assert engine.snapshot().zone == "The Nexus"
        assert engine.zone_changes == 1

    def test_same_zone_not_counted(self) -> None:
        """Test re-entering the current zone is not a change."""
        engine = StateEngine()
        feed(engine, "You have entered The Nexus.", "You have entered The Nexus.")

        assert engine.zone_changes == 1

    def test_initial_zone_seeded(self) -> None:
        """Test the zone from the tailer's history scan is shown immediately."""
        engine = StateEngine(initial_zone="Greater Faydark")

        assert engine.snapshot().zone == "Greater Faydark"

        engine.process_line("You have entered East Commonlands.")
        assert engine.snapshot().zone == "East Commonlands"


class TestCorpse:
    """Tests for the death and corpse recovery lifecycle."""

    def test_corpse_lifecycle(self) -> None:
        """Test the corpse stays at the death spot until recovered."""
        engine = StateEngine(initial_zone="A")
        engine.process_line("Your Location is -5, -5, 1")

        assert engine.process_line("You have been slain by a gnoll!") is LineKind.DEATH
        engine.process_line("Your Location is -9, -9, 1")

        state = engine.snapshot()
        assert state.has_corpse is True
        assert (state.corpse_x, state.corpse_y, state.corpse_zone) == (5.0, 5.0, "A")
        assert (state.x, state.y) == (9.0, 9.0)

        assert engine.process_line("You have been resurrected.") is LineKind.RECOVERY
        state = engine.snapshot()
        assert state.has_corpse is False

    def test_second_death_overwrites_corpse(self) -> None:
        """Test a new death replaces the previous corpse location."""
        engine = StateEngine(initial_zone="A")
        feed(engine, "Your Location is 0, 0, 0", "You have been slain by a bat!")
        feed(engine, "You have entered B.", "Your Location is -1, -2, 0", "You have been slain by a rat!")

        state = engine.snapshot()
        assert (state.corpse_x, state.corpse_y, state.corpse_zone) == (2.0, 1.0, "B")

    @pytest.mark.parametrize(
        "line",
        [
            "Summoning your corpse.",
            "You receive a resurrection from Soandso.",
            "You have been resurrected.",
            "Your corpse decays.",
            "You summon your corpse.",
        ],
    )
    def test_recovery_phrases(self, line: str) -> None:
        """Test each recovery phrase clears the corpse flag."""
        engine = StateEngine()
        engine.process_line("You have been slain by a gnoll!")

        engine.process_line(line)

        assert engine.snapshot().has_corpse is False


class TestSnapshot:
    """Tests for state snapshots."""

    def test_snapshot_is_a_copy(self) -> None:
        """Test modifying a snapshot does not affect the engine."""
        engine = StateEngine()
        snapshot = engine.snapshot()
        snapshot.zone = "Elsewhere"

        assert engine.snapshot().zone == ""

    def test_accepts_log_lines(self) -> None:
        """Test LogLine objects from the tailer are processed."""
        engine = StateEngine()

        assert engine.process_line(LogLine(text="You have entered The Nexus.")) is LineKind.ZONE
        assert engine.lines_processed == 1


class TestConsumerLoop:
    """Tests for the queue consumer loop."""

    def test_run_until_stop_sentinel(self) -> None:
        """Test lines are applied in queue order until STOP."""
        lines: queue.Queue = queue.Queue()
        for text in (
            "You have entered A.",
            "You have entered B.",
            "Your Location is 1, 2, 3",
        ):
            lines.put(LogLine(text=text))
        lines.put(STOP)

        engine = StateEngine()
        engine.run(lines)

        state = engine.snapshot()
        assert state.zone == "B"
        assert (state.x, state.y) == (-2.0, -1.0)
        assert engine.lines_processed == 3

    def test_bad_item_does_not_stop_loop(self) -> None:
        """Test a line that fails to apply is skipped."""
        lines: queue.Queue = queue.Queue()
        lines.put(42)
        lines.put(LogLine(text="You have entered The Nexus."))
        lines.put(STOP)

        engine = StateEngine()
        engine.run(lines)

        assert engine.snapshot().zone == "The Nexus"

    def test_background_thread(self) -> None:
        """Test the engine consumes lines from a daemon thread."""
        lines: queue.Queue = queue.Queue()
        engine = StateEngine()
        thread = engine.start(lines)
        try:
            lines.put(LogLine(text="You have entered The Nexus."))
            lines.join()
        finally:
            engine.stop()

        assert thread.daemon is True
        assert engine.snapshot().zone == "The Nexus"

    def test_order_preserved(self) -> None:
        """Test the final state reflects the last line in queue order."""
        lines: queue.Queue = queue.Queue()
        for index in range(200):
            lines.put(LogLine(text=f"Your Location is {index}, 0, 0"))
        lines.put(STOP)

        engine = StateEngine()
        started = time.monotonic()
        engine.run(lines)

        assert engine.snapshot().y == -199.0
        assert time.monotonic() - started < 5.0
