"""Tests for passive energy regeneration."""

import pytest
from datetime import timedelta

from paws_core.state import Afflicted, apply_delta
from paws_core.systems import energy

from conftest import NOW, make_dog


class TestCareQuality:
    """Care quality multiplier bands."""

    def test_well_cared(self):
        dog = make_dog(hunger=100, happiness=100, health=100)
        assert energy.care_quality_multiplier(dog) == 1.5

    def test_neglected(self):
        dog = make_dog(hunger=30, happiness=30, health=30)
        assert energy.care_quality_multiplier(dog) == 0.5

    def test_middle_band_interpolates(self):
        dog = make_dog(hunger=60, happiness=60, health=60)
        assert energy.care_quality_multiplier(dog) == pytest.approx(1.1)


class TestRate:
    """Hourly regen rate."""

    def test_well_cared_rate(self):
        """5 x 1.5 = 7.5 rounds half up to 8."""
        dog = make_dog(energy=50)
        assert energy.energy_regen_rate(dog) == 8

    def test_low_energy_bonus_rounds_half_up(self):
        """7.5 + 3 = 10.5 is 11."""
        dog = make_dog(energy=20)
        assert energy.energy_regen_rate(dog) == 11

    def test_ailment_halves_rate(self):
        dog = make_dog(energy=20, ailment=Afflicted(ailment_id="kennel_cough", onset=NOW))
        assert energy.energy_regen_rate(dog) == 5

    def test_kennel_bonus_added(self):
        dog = make_dog(energy=50)
        assert energy.energy_regen_rate(dog, kennel_level=10) == 13


class TestRegenerate:
    """Regeneration deltas."""

    def test_regains_by_hour(self):
        dog = make_dog(hours_ago=2, energy=50)
        delta = energy.regenerate_energy(dog, NOW)
        assert delta == {"energy": 66, "last_played": NOW}

    def test_caps_at_100(self):
        dog = make_dog(hours_ago=10, energy=95)
        assert energy.regenerate_energy(dog, NOW)["energy"] == 100

    def test_not_due_within_an_hour(self):
        dog = make_dog(energy=50, last_played=NOW - timedelta(minutes=30))
        assert energy.regenerate_energy(dog, NOW) == {}

    def test_full_energy_nothing_to_do(self):
        dog = make_dog(hours_ago=5, energy=100)
        assert energy.regenerate_energy(dog, NOW) == {}

    def test_repeat_with_same_now_is_empty(self):
        """Merging a regen and asking again at the same instant changes nothing."""
        dog = make_dog(hours_ago=3, energy=40)
        dog = apply_delta(dog, energy.regenerate_energy(dog, NOW))
        assert energy.regenerate_energy(dog, NOW) == {}

    def test_latest_activity_wins(self):
        """A recent feeding restarts the regen clock."""
        dog = make_dog(hours_ago=5, energy=50, last_fed=NOW - timedelta(minutes=10))
        assert energy.regenerate_energy(dog, NOW) == {}


class TestRegenInfo:
    def test_hours_to_full(self):
        info = energy.energy_regen_info(make_dog(energy=50))
        assert info.rate_per_hour == 8
        assert info.hours_to_full == 7
        assert info.care_bonus
        assert not info.low_energy_bonus
        assert info.is_regenerating

    def test_full_dog(self):
        info = energy.energy_regen_info(make_dog(energy=100))
        assert not info.is_regenerating
        assert info.hours_to_full == 0
