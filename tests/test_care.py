"""Tests for hunger, thirst and care checks."""

import pytest
from datetime import timedelta

from paws_core.state import ActivityKind, apply_delta
from paws_core.systems import care

from conftest import NOW, make_dog


class TestDecay:
    """Hunger and thirst drain over four days."""

    def test_half_drained_after_two_days(self):
        dog = make_dog(hours_ago=48)
        assert care.current_hunger(dog, NOW) == pytest.approx(50)

    def test_empty_after_four_days(self):
        dog = make_dog(hours_ago=120)
        assert care.current_hunger(dog, NOW) == 0

    def test_thirst_falls_back_to_last_fed(self):
        dog = make_dog(hours_ago=48)
        assert care.current_thirst(dog, NOW) == care.current_hunger(dog, NOW)

    def test_thirst_uses_last_watered(self):
        dog = make_dog(hours_ago=48, last_watered=NOW)
        assert care.current_thirst(dog, NOW) == 100


class TestPenalties:
    """Low hunger or thirst caps happiness and energy."""

    def test_penalty_bands(self):
        assert care.happiness_penalty(100, 100) == 0
        assert care.happiness_penalty(40, 100) == 15
        assert care.happiness_penalty(10, 40) == 45
        assert care.energy_penalty(10, 10) == 80

    def test_decay_delta(self):
        """72 hours: both at 25, moderate band on each."""
        dog = make_dog(hours_ago=72)
        delta = care.apply_hunger_thirst_decay(dog, NOW)
        assert delta["hunger"] == pytest.approx(25)
        assert delta["thirst"] == pytest.approx(25)
        assert delta["happiness"] == 70
        assert delta["energy"] == 60

    def test_penalty_never_raises(self):
        """A dog already below the cap keeps its lower value."""
        dog = make_dog(hours_ago=72, happiness=40, energy=10)
        delta = care.apply_hunger_thirst_decay(dog, NOW)
        assert "happiness" not in delta
        assert "energy" not in delta

    def test_fixed_point(self):
        """Merging the decay and re-running at the same instant is a no-op."""
        dog = make_dog(hours_ago=90)
        dog = apply_delta(dog, care.apply_hunger_thirst_decay(dog, NOW))
        assert care.apply_hunger_thirst_decay(dog, NOW) == {}

    def test_well_fed_no_change(self):
        assert care.apply_hunger_thirst_decay(make_dog(), NOW) == {}


class TestFeeding:
    def test_feed_settles_health(self):
        """Decay so far is kept when the clock resets."""
        dog = make_dog(hours_ago=49)
        delta = care.feed(dog, NOW)
        assert delta == {
            "hunger": 100, "last_fed": NOW, "health": 80, "last_watered": NOW - timedelta(hours=49),
        }

    def test_feed_dead_dog_refused(self):
        dog = make_dog(hours_ago=24 * 12)
        assert care.feed(dog, NOW) == {}

    def test_water(self):
        dog = make_dog(hours_ago=30)
        assert care.water(dog, NOW) == {"thirst": 100, "last_watered": NOW}

    def test_feed_then_no_decay(self):
        dog = make_dog(hours_ago=50)
        dog = apply_delta(dog, care.feed(dog, NOW))
        assert care.current_hunger(dog, NOW) == 100
        assert dog.health == 80

    def test_feed_does_not_quench_thirst(self):
        """A never-watered dog stays thirsty after eating."""
        dog = make_dog(hours_ago=48)
        assert dog.last_watered is None

        dog = apply_delta(dog, care.feed(dog, NOW))
        assert care.current_hunger(dog, NOW) == 100
        assert care.current_thirst(dog, NOW) == pytest.approx(50)

    def test_feed_keeps_existing_water_time(self):
        dog = make_dog(hours_ago=48, last_watered=NOW - timedelta(hours=6))
        assert "last_watered" not in care.feed(dog, NOW)


class TestChecks:
    """Status messages and activity gates."""

    def test_status_good(self):
        assert care.hunger_thirst_status(90, 90) == ("good", None)

    def test_status_starving(self):
        assert care.hunger_thirst_status(10, 50) == ("critical", "CRITICAL: Your dog is starving!")

    def test_status_thirsty(self):
        assert care.hunger_thirst_status(70, 40) == ("warning", "Your dog needs water")

    def test_energy_gate(self):
        """35% is enough to train but not to compete."""
        dog = make_dog(energy=35)
        assert care.has_enough_energy(dog, ActivityKind.TRAINING).allowed

        check = care.has_enough_energy(dog, ActivityKind.COMPETITION)
        assert not check.allowed
        assert "too tired to compete" in check.reason
        assert "needs 40%" in check.reason

    def test_care_quality(self):
        assert care.care_quality(make_dog()) == 100

    def test_urgent_needs(self):
        dog = make_dog(hunger=10, energy=5)
        needs = care.urgent_care_needs(dog)
        assert "Starving! Feed immediately!" in needs
        assert "Exhausted! Let them rest!" in needs
        assert len(needs) == 2

    def test_needs_care(self):
        reminders = care.needs_care(make_dog(thirst=50))
        assert reminders == {"food": False, "water": True, "rest": False, "play": False}

    def test_watered_dog_skips_thirst_penalty(self):
        dog = make_dog(hours_ago=72, last_watered=NOW - timedelta(hours=1))
        delta = care.apply_hunger_thirst_decay(dog, NOW)
        assert delta["happiness"] == 85
        assert delta["energy"] == 80
