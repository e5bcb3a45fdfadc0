#!/usr/bin/env python3
"""Unit tests for the gas and capture evaluation policy."""

from managers.inventory_manager import AirlockRecord
from utilities import gas_policy

from test_helpers import MockTank, MockVent, settings


def _record(*levels, can_pressurize=True):
    rec = AirlockRecord("A1")
    rec.vents = [MockVent(f"Vent {i}", o2=o2, can_pressurize=can_pressurize) for i, o2 in enumerate(levels)]
    return rec


class TestReadings:
    def test_room_o2_is_mean_of_vents(self):
        assert abs(gas_policy.room_o2(_record(0.9, 0.5)) - 0.7) < 1e-9

    def test_room_o2_without_vents_is_zero(self):
        assert gas_policy.room_o2(_record()) == 0.0

    def test_proc_fill(self):
        assert gas_policy.proc_fill(MockTank("T", fill=0.25)) == 0.25

    def test_any_vent_can_pressurize(self):
        assert gas_policy.any_vent_can_pressurize(_record(0.5))
        assert not gas_policy.any_vent_can_pressurize(_record(0.5, can_pressurize=False))
        assert not gas_policy.any_vent_can_pressurize(_record())


class TestCapturing:
    def setup_method(self):
        self.s = settings()

    def test_oxygen_drop_counts(self):
        assert gas_policy.is_capturing(0.50, 0.48, 0.1, 0.1, self.s)

    def test_tank_rise_counts(self):
        assert gas_policy.is_capturing(0.50, 0.50, 0.100, 0.101, self.s)

    def test_jitter_does_not_count(self):
        assert not gas_policy.is_capturing(0.5000, 0.4995, 0.1000, 0.1004, self.s)

    def test_rising_oxygen_does_not_count(self):
        assert not gas_policy.is_capturing(0.48, 0.50, 0.1, 0.1, self.s)


class TestDepressurizeComplete:
    def setup_method(self):
        self.s = settings()

    def test_never_before_minimum(self):
        assert not gas_policy.depressurize_complete(29, 0.0, True, self.s)

    def test_vacuum_reached(self):
        assert gas_policy.depressurize_complete(30, 0.02, False, self.s)

    def test_capturing_inside_band(self):
        assert gas_policy.depressurize_complete(30, 0.06, True, self.s)
        assert not gas_policy.depressurize_complete(30, 0.06, False, self.s)

    def test_capturing_above_band(self):
        assert not gas_policy.depressurize_complete(30, 0.08, True, self.s)

    def test_safety_cap(self):
        assert gas_policy.depressurize_complete(300, 0.95, False, self.s)
        assert not gas_policy.depressurize_complete(299, 0.95, False, self.s)


class TestStability:
    def setup_method(self):
        self.s = settings()

    def test_rising_and_flat_increment(self):
        assert gas_policy.update_stability(0, 0.5, 0.6, self.s) == 1
        assert gas_policy.update_stability(1, 0.6, 0.6, self.s) == 2
        assert gas_policy.update_stability(2, 0.6, 0.5995, self.s) == 3, "Dip inside epsilon is flat"

    def test_drop_resets(self):
        assert gas_policy.update_stability(5, 0.6, 0.55, self.s) == 0


class TestPressurizeComplete:
    def setup_method(self):
        self.s = settings()

    def test_never_before_minimum(self):
        assert not gas_policy.pressurize_complete(29, 0.95, 0.0, 10, True, self.s)

    def test_full_and_stable(self):
        assert gas_policy.pressurize_complete(30, 0.92, 0.0, 3, False, self.s)
        assert not gas_policy.pressurize_complete(30, 0.92, 0.0, 2, False, self.s)

    def test_risen_with_vent_able_to_pressurize(self):
        assert gas_policy.pressurize_complete(30, 0.40, 0.30, 3, True, self.s)
        assert not gas_policy.pressurize_complete(30, 0.40, 0.30, 3, False, self.s)
        assert not gas_policy.pressurize_complete(30, 0.305, 0.30, 3, True, self.s), "Rise below MIN_O2_DELTA"

    def test_safety_cap(self):
        assert gas_policy.pressurize_complete(300, 0.10, 0.10, 0, False, self.s)
