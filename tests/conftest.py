"""
Pytest fixtures for paws-core tests.

Provides a fixed clock, a scripted RNG and ready-made dogs/owners so each
test can assert exact numbers.
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from paws_core.state import Dog, Owner, Kennel, MemoryKennelStore
from paws_core.tools import FixedClock


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class ScriptedRng:
    """
    Deterministic stand-in for random.Random.

    random() returns queued values in order, then ``default`` forever.
    choice() always picks the first element.
    """

    def __init__(self, values=None, default: float = 0.5):
        self.values = list(values or [])
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default

    def choice(self, seq):
        return seq[0]


def make_dog(hours_ago: float = 0, **overrides) -> Dog:
    """
    Dog whose timestamps all sit ``hours_ago`` before NOW.

    Any field can be overridden.
    """
    when = NOW - timedelta(hours=hours_ago)
    fields = {
        "name": "Rex",
        "created_at": when - timedelta(days=30),
        "last_fed": when,
        "last_played": when,
        "last_training_reset": when,
        "last_illness_check": when,
    }
    fields.update(overrides)
    return Dog(**fields)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def rng():
    """RNG that never rolls an ailment (0.5 beats every risk)."""
    return ScriptedRng()


@pytest.fixture
def dog():
    """Well cared-for dog, everything just happened."""
    return make_dog()


@pytest.fixture
def neglected_dog():
    """Dog nobody has looked at for three days."""
    return make_dog(
        hours_ago=72,
        hunger=20,
        thirst=20,
        happiness=25,
        energy=20,
        health=60,
    )


@pytest.fixture
def owner():
    return Owner(name="Sam", cash=500, gems=100)


@pytest.fixture
def memory_store():
    """In-memory kennel store for testing."""
    return MemoryKennelStore()


@pytest.fixture
def kennel(owner, dog):
    return Kennel(owner=owner, dogs=[dog])
