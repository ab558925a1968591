"""Tests for snapshot models and delta merging."""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from paws_core.state import (
    Afflicted,
    Dog,
    Healthy,
    Owner,
    Recovering,
    TierId,
    apply_delta,
)
from paws_core.state.schema import merge_deltas

from conftest import NOW, make_dog


class TestDogDefaults:
    """A new dog starts full and healthy."""

    def test_fresh_dog_is_full(self):
        """Care stats and TP start at 100."""
        dog = Dog(name="Biscuit")
        assert dog.hunger == 100
        assert dog.thirst == 100
        assert dog.training_points == 100
        assert dog.health == 100

    def test_fresh_dog_is_healthy(self):
        """No ailment by default."""
        dog = Dog(name="Biscuit")
        assert isinstance(dog.ailment, Healthy)
        assert not dog.has_ailment

    def test_naive_timestamps_become_utc(self):
        """Naive datetimes are read as UTC."""
        dog = Dog(name="Biscuit", last_fed=datetime(2024, 1, 1, 8, 0))
        assert dog.last_fed.tzinfo == timezone.utc

    def test_watered_is_optional(self):
        dog = Dog(name="Biscuit")
        assert dog.last_watered is None


class TestBounds:
    """Percentages and counters are range-checked."""

    def test_health_above_100_rejected(self):
        with pytest.raises(ValidationError):
            Dog(name="Biscuit", health=101)

    def test_negative_trained_rejected(self):
        with pytest.raises(ValidationError):
            Dog(name="Biscuit", speed_trained=-0.5)

    def test_bond_level_capped(self):
        with pytest.raises(ValidationError):
            Dog(name="Biscuit", bond_level=11)

    def test_owner_kennel_level_range(self):
        with pytest.raises(ValidationError):
            Owner(kennel_level=0)


class TestApplyDelta:
    """Deltas merge into new, re-validated snapshots."""

    def test_returns_new_instance(self):
        """The input snapshot is not modified."""
        dog = make_dog(energy=40)
        updated = apply_delta(dog, {"energy": 70})
        assert updated.energy == 70
        assert dog.energy == 40

    def test_empty_delta_is_identity(self):
        dog = make_dog()
        assert apply_delta(dog, {}) is dog

    def test_unknown_field_rejected(self):
        """A typo in a delta raises instead of vanishing."""
        dog = make_dog()
        with pytest.raises(ValueError, match="enrgy"):
            apply_delta(dog, {"enrgy": 50})

    def test_out_of_range_rejected(self):
        dog = make_dog()
        with pytest.raises(ValidationError):
            apply_delta(dog, {"happiness": 150})

    def test_ailment_state_merges(self):
        """Ailment models in a delta are accepted."""
        dog = make_dog()
        updated = apply_delta(dog, {"ailment": Afflicted(ailment_id="kennel_cough", onset=NOW)})
        assert updated.is_afflicted
        assert updated.ailment.ailment_id == "kennel_cough"

    def test_owner_wins_merge(self):
        owner = Owner()
        updated = apply_delta(owner, {"competition_wins": {TierId.LOCAL: 2}})
        assert updated.wins(TierId.LOCAL) == 2
        assert updated.wins(TierId.REGIONAL) == 0

    def test_merge_deltas_later_wins(self):
        merged = merge_deltas({"energy": 10, "hunger": 50}, {"energy": 20})
        assert merged == {"energy": 20, "hunger": 50}


class TestAilmentState:
    """The ailment field is a tagged union."""

    def test_recovering_survives_json(self):
        """The discriminator picks the right variant when reading back."""
        dog = make_dog(ailment=Recovering(ailment_id="sprained_paw", due=NOW))
        restored = Dog.model_validate_json(dog.model_dump_json())
        assert isinstance(restored.ailment, Recovering)
        assert restored.ailment.due == NOW

    def test_exactly_one_state(self):
        """Afflicted and recovering never hold together."""
        afflicted = make_dog(ailment=Afflicted(ailment_id="kennel_cough", onset=NOW))
        recovering = make_dog(ailment=Recovering(ailment_id="kennel_cough", due=NOW))

        assert afflicted.is_afflicted and not afflicted.is_recovering
        assert recovering.is_recovering and not recovering.is_afflicted
        assert afflicted.has_ailment and recovering.has_ailment

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            Dog(name="Biscuit", ailment={"status": "zombie"})
