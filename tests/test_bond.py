"""Tests for owner-dog bond progression."""

import pytest

from paws_core.systems import bond

from conftest import make_dog


class TestEvaluateBond:
    def test_xp_rolls_into_levels(self):
        assert bond.evaluate_bond(0, 250) == (2, 50)

    def test_reaching_max(self):
        assert bond.evaluate_bond(9, 150) == (10, 50)

    def test_held_below_threshold_at_max(self):
        """Max level never shows a pending level-up."""
        assert bond.evaluate_bond(10, 500) == (10, 99)


class TestAddBondXp:
    def test_level_up_included(self):
        dog = make_dog(bond_level=0, bond_xp=98)
        assert bond.add_bond_xp(dog, 3) == {"bond_xp": 1, "bond_level": 1}

    def test_xp_only(self):
        dog = make_dog(bond_level=2, bond_xp=10)
        assert bond.add_bond_xp(dog, 3) == {"bond_xp": 13}


class TestBonuses:
    def test_non_rescue_gets_nothing(self):
        assert bond.rescue_training_bonus(make_dog(bond_level=10)) == 0

    def test_rescue_settling_in(self):
        assert bond.rescue_training_bonus(make_dog(is_rescue=True, bond_level=2)) == 0

    def test_rescue_scale(self):
        assert bond.rescue_training_bonus(make_dog(is_rescue=True, bond_level=3)) == 0.04
        assert bond.rescue_training_bonus(make_dog(is_rescue=True, bond_level=10)) == 0.25

    def test_rescue_description(self):
        dog = make_dog(is_rescue=True, bond_level=7)
        assert bond.rescue_bonus_description(dog) == "Rescue Bond: +18% training (Strong bond!)"
        assert bond.rescue_bonus_description(make_dog()) is None

    def test_competition_bonus_linear(self):
        assert bond.bond_competition_bonus(0) == 0
        assert bond.bond_competition_bonus(5) == pytest.approx(0.05)
        assert bond.bond_competition_bonus(10) == pytest.approx(0.1)
