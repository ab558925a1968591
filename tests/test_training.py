"""Tests for training gains and sessions."""

import pytest

from paws_core.state import Owner, StatName, TrainerType, apply_delta
from paws_core.systems import training

from conftest import ScriptedRng, make_dog


def session(dog, owner, type_id="speed", trainer=TrainerType.SELF, rng=None, **kwargs):
    return training.train(
        dog, training.TRAINING_TYPES[type_id], trainer, owner, rng or ScriptedRng(), **kwargs,
    )


class TestMultiplier:
    def test_novice_owner(self):
        assert training.user_training_multiplier(1) == pytest.approx(0.812)

    def test_expert_owner(self):
        assert training.user_training_multiplier(100) == pytest.approx(2.0)


class TestGain:
    """calculate_training_gain."""

    def test_midpoint_draw(self):
        """A 0.5 draw gives the 0.2 midpoint with no modifiers."""
        dog = make_dog(trainability=0)
        gain = training.calculate_training_gain(dog, StatName.SPEED, 1.0, 0, 1, ScriptedRng([0.5]))
        assert gain == pytest.approx(0.2)

    def test_obedience_is_harder(self):
        dog = make_dog(trainability=0)
        gain = training.calculate_training_gain(dog, StatName.OBEDIENCE, 1.0, 0, 1, ScriptedRng([0.5]))
        assert gain == pytest.approx(0.18)

    def test_all_modifiers(self):
        """0.1 x 1.2 x 1.5 x 1.5 = 0.27, +8% kennel bonus = 0.29."""
        dog = make_dog(trainability=50)
        gain = training.calculate_training_gain(dog, StatName.SPEED, 1.2, 50, 3, ScriptedRng([0.0]))
        assert gain == pytest.approx(0.29)

    def test_never_negative(self):
        dog = make_dog()
        gain = training.calculate_training_gain(dog, StatName.SPEED, 0.0, 0, 1, ScriptedRng())
        assert gain == 0


class TestSelfTraining:
    """Owner-led sessions."""

    def test_tp_and_gain_travel_together(self):
        dog = make_dog()
        result = session(dog, Owner())
        assert result.success
        assert result.gain == pytest.approx(0.17)
        assert result.dog_delta["training_points"] == 90
        assert result.dog_delta["speed_trained"] == pytest.approx(0.17)
        assert result.owner_delta == {}

    def test_adds_bond_xp(self):
        result = session(make_dog(), Owner())
        assert result.dog_delta["bond_xp"] == 3

    def test_message(self):
        result = session(make_dog(), Owner(), performance_multiplier=1.5)
        assert result.message.startswith("Perfect performance! Rex gained +")
        assert result.message.endswith(" speed!")

    def test_zero_performance_zero_gain(self):
        result = session(make_dog(), Owner(), performance_multiplier=0)
        assert result.success
        assert result.gain == 0

    def test_negative_performance_clamped(self):
        result = session(make_dog(), Owner(), performance_multiplier=-2)
        assert result.gain == 0
        assert result.dog_delta["speed_trained"] == 0

    def test_rescue_bond_helps(self):
        plain = session(make_dog(), Owner())
        rescue = session(make_dog(is_rescue=True, bond_level=10), Owner())
        assert rescue.gain > plain.gain

    def test_not_enough_tp(self):
        """Failure leaves nothing to merge."""
        result = session(make_dog(training_points=5), Owner())
        assert not result.success
        assert result.message == "Not enough Training Points! Need 10 TP."
        assert result.dog_delta == {}
        assert result.owner_delta == {}

    def test_delta_merges(self):
        dog = make_dog(speed_trained=1.0)
        result = session(dog, Owner(), type_id="speed")
        updated = apply_delta(dog, result.dog_delta)
        assert updated.speed_trained == pytest.approx(1.17)
        assert updated.training_points == 90


class TestNpcTraining:
    """Paid trainer sessions."""

    def test_basic_trainer_charges(self):
        result = session(make_dog(), Owner(cash=500), trainer=TrainerType.BASIC_NPC)
        assert result.success
        assert result.owner_delta == {"cash": 450}
        assert "bond_xp" not in result.dog_delta

    def test_pro_trainer_charges_more(self):
        result = session(make_dog(), Owner(cash=500), trainer=TrainerType.PRO_NPC)
        assert result.owner_delta == {"cash": 300}

    def test_cannot_afford_trainer(self):
        result = session(make_dog(), Owner(cash=30), trainer=TrainerType.BASIC_NPC)
        assert not result.success
        assert result.message == "Not enough cash! Need $50."
        assert result.dog_delta == {}

    def test_pro_gains_more_than_basic(self):
        basic = session(make_dog(), Owner(), trainer=TrainerType.BASIC_NPC)
        pro = session(make_dog(), Owner(), trainer=TrainerType.PRO_NPC)
        assert pro.gain > basic.gain

    def test_npc_tp_cost(self):
        result = session(make_dog(), Owner(), type_id="strength", trainer=TrainerType.BASIC_NPC)
        assert result.dog_delta["training_points"] == 80
        assert "strength_trained" in result.dog_delta
