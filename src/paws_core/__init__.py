"""
paws-core: simulation core for a dog-kennel management game.

Pure functions over Dog/Owner snapshots that decay and regenerate care
stats, roll and resolve ailments, turn training into stat gains, and score
competitions. Results come back as deltas for the caller to merge.
"""

from .state import Dog, Owner, Kennel, apply_delta
from .systems import ActivityOrchestrator
from .tools import FixedClock, SystemClock, make_rng

__version__ = "0.1.0"

__all__ = [
    "Dog",
    "Owner",
    "Kennel",
    "apply_delta",
    "ActivityOrchestrator",
    "FixedClock",
    "SystemClock",
    "make_rng",
]
