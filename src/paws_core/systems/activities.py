"""
Activity orchestrator for paws-core.

The systems are pure and never call each other's updates. This class plays
the caller: it reads the clock, runs checks in the right order, and merges
the returned deltas into fresh snapshots.

Usage:
    orchestrator = ActivityOrchestrator(SystemClock(), make_rng())

    outcome = orchestrator.tick(dog, owner)
    outcome = orchestrator.train(outcome.dog, outcome.owner, "agility")
    if not outcome.success:
        print(outcome.message)

Nothing is persisted here; hand ``outcome.dog`` / ``outcome.owner`` to a
KennelStore.
"""

from __future__ import annotations

import logging
from typing import Mapping

from ..state.results import ActivityOutcome
from ..state.schema import (
    ActivityKind,
    Ailment,
    CareAction,
    Dog,
    HealthLevel,
    Owner,
    TierId,
    TrainerType,
    TrainingIntensity,
    apply_delta,
)
from ..tools.clock import Clock
from ..tools.rng import Rng
from . import ailments, care, competition, energy, health, kennel, training, training_points

logger = logging.getLogger(__name__)


class ActivityOrchestrator:
    """
    Sequences the systems for one dog and its owner.

    Responsibilities:
    - Time passing (tick): recovery, regen, hunger/thirst, illness
    - Gated activities: training and competition, with injury rolls after
    - Paid care: treatment, vet visits, revival, kennel upgrades

    Every method returns new snapshots; inputs are never modified.
    """

    def __init__(
        self,
        clock: Clock,
        rng: Rng,
        catalog: Mapping[str, Ailment] | None = None,
        opponent_count: int = competition.DEFAULT_OPPONENTS,
    ):
        self.clock = clock
        self.rng = rng
        self.catalog = catalog
        self.opponent_count = opponent_count

    @staticmethod
    def _outcome(
        success: bool, message: str, dog: Dog, owner: Owner, notices: list[str] | None = None,
    ) -> ActivityOutcome:
        return ActivityOutcome(
            success=success, message=message, dog=dog, owner=owner, notices=notices or [],
        )

    def _ailment_name(self, ailment_id: str) -> str:
        return ailments.resolve_ailment(ailment_id, self.catalog).name

    def _contract(self, dog: Dog, ailment: Ailment | None, notices: list[str]) -> Dog:
        if ailment is None:
            return dog
        dog = apply_delta(dog, ailments.apply_ailment(dog, ailment, self.clock.now()))
        notices.append(f"{dog.name} has come down with {ailment.name}!")
        return dog

    # -------------------------------------------------------------------------
    # Time
    # -------------------------------------------------------------------------

    def tick(self, dog: Dog, owner: Owner, check_illness: bool = True) -> ActivityOutcome:
        """
        Bring a dog up to date with the clock.

        Order matters: recovery first so a recovered dog regenerates at the
        full rate, and energy regen before the hunger/thirst cap so the cap
        has the last word. Energy, TP and illness all weigh decayed health.
        The illness roll happens at most once per check interval, so a
        second tick at the same instant returns the same dog.
        """
        now = self.clock.now()
        notices: list[str] = []
        level = owner.kennel_level

        if ailments.is_recovery_complete(dog, now):
            name = self._ailment_name(dog.ailment.ailment_id)
            dog = apply_delta(dog, ailments.complete_recovery(dog, now))
            notices.append(f"{dog.name} has fully recovered from {name}.")

        current = health.with_current_health(dog, now)
        dog = apply_delta(dog, energy.regenerate_energy(current, now, level))
        dog = apply_delta(dog, care.apply_hunger_thirst_decay(dog, now))

        tp_delta = training_points.regenerate_tp(health.with_current_health(dog, now), now)
        if tp_delta:
            dog = apply_delta(dog, tp_delta)
            notices.append(f"{dog.name} is rested: {dog.training_points} training points.")

        status = health.health_status(dog, now)
        if status.warning:
            notices.append(status.warning)

        if (
            check_illness
            and status.level != HealthLevel.DEAD
            and ailments.should_check_for_illness(dog, now)
        ):
            illness = ailments.check_for_illness(
                health.with_current_health(dog, now), self.rng, self.catalog,
            )
            dog = apply_delta(dog, {"last_illness_check": now})
            dog = self._contract(dog, illness, notices)

        logger.debug(f"Tick for {dog.name}: {len(notices)} notices")
        return self._outcome(True, f"{dog.name} is up to date.", dog, owner, notices)

    def feed(self, dog: Dog, owner: Owner) -> ActivityOutcome:
        delta = care.feed(dog, self.clock.now())
        if not delta:
            return self._outcome(False, f"{dog.name} can't eat. A revival is needed.", dog, owner)
        return self._outcome(True, f"{dog.name} has been fed.", apply_delta(dog, delta), owner)

    def water(self, dog: Dog, owner: Owner) -> ActivityOutcome:
        delta = care.water(dog, self.clock.now())
        if not delta:
            return self._outcome(False, f"{dog.name} can't drink. A revival is needed.", dog, owner)
        return self._outcome(True, f"{dog.name} has fresh water.", apply_delta(dog, delta), owner)

    # -------------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------------

    def _gate(self, dog: Dog, owner: Owner, activity: ActivityKind) -> ActivityOutcome | None:
        """Failure outcome if the dog can't take part, else None."""
        for check in (
            ailments.can_perform_activity(dog, self.catalog),
            care.has_enough_energy(dog, activity),
        ):
            if not check.allowed:
                return self._outcome(False, check.reason or "Not allowed", dog, owner)
        return None

    def train(
        self,
        dog: Dog,
        owner: Owner,
        training_type_id: str,
        trainer: TrainerType = TrainerType.SELF,
        performance_multiplier: float | None = None,
        intensity: TrainingIntensity = TrainingIntensity.MODERATE,
    ) -> ActivityOutcome:
        training_type = training.get_training_type(training_type_id)
        if training_type is None:
            return self._outcome(False, f"Unknown training type: {training_type_id}", dog, owner)

        blocked = self._gate(dog, owner, ActivityKind.TRAINING)
        if blocked:
            return blocked

        result = training.train(dog, training_type, trainer, owner, self.rng, performance_multiplier)
        if not result.success:
            return self._outcome(False, result.message, dog, owner)

        dog = apply_delta(dog, result.dog_delta)
        owner = apply_delta(owner, result.owner_delta)

        notices: list[str] = []
        current = health.with_current_health(dog, self.clock.now())
        injury = ailments.check_for_training_injury(current, intensity, self.rng, self.catalog)
        dog = self._contract(dog, injury, notices)
        return self._outcome(True, result.message, dog, owner, notices)

    def compete(
        self,
        dog: Dog,
        owner: Owner,
        competition_id: str,
        tier_id: TierId | str,
        player_skill: float = 0,
    ) -> ActivityOutcome:
        discipline = competition.get_competition_type(competition_id)
        if discipline is None:
            return self._outcome(False, f"Unknown competition: {competition_id}", dog, owner)
        tier = competition.get_tier(tier_id)
        if tier is None:
            return self._outcome(False, f"Unknown tier: {tier_id}", dog, owner)

        blocked = self._gate(dog, owner, ActivityKind.COMPETITION)
        if blocked:
            return blocked

        result = competition.run_competition(
            dog, owner, discipline, tier, self.rng,
            player_skill=player_skill, opponent_count=self.opponent_count,
        )
        if not result.success:
            return self._outcome(False, result.message, dog, owner)

        owner = apply_delta(owner, result.owner_delta)

        notices = [f"{p.placement}. {p.name} ({p.score})" for p in result.placements[:3]]
        current = health.with_current_health(dog, self.clock.now())
        injury = ailments.check_for_competition_injury(current, tier.id, self.rng, self.catalog)
        dog = self._contract(dog, injury, notices)
        return self._outcome(True, result.message, dog, owner, notices)

    # -------------------------------------------------------------------------
    # Paid care
    # -------------------------------------------------------------------------

    def treat(self, dog: Dog, owner: Owner) -> ActivityOutcome:
        """Pay for treatment of the current ailment."""
        result = ailments.treat_ailment(
            dog, self.clock.now(), owner.kennel_level, self.catalog, funds=owner.cash,
        )
        if not result.success:
            return self._outcome(False, result.message, dog, owner)

        dog = apply_delta(dog, result.delta)
        owner = apply_delta(owner, {"cash": owner.cash - result.cost})
        return self._outcome(True, result.message, dog, owner)

    def vet_visit(self, dog: Dog, owner: Owner) -> ActivityOutcome:
        """
        Vet visit for neglect. Emergency cases get the emergency vet and its
        stat penalty; a dead dog needs revive() instead.
        """
        now = self.clock.now()
        status = health.health_status(dog, now)

        if status.level == HealthLevel.DEAD:
            return self._outcome(False, f"{dog.name} has died. Revival is required.", dog, owner)
        if status.action == CareAction.NONE:
            return self._outcome(False, f"{dog.name} doesn't need a vet.", dog, owner)

        action = CareAction.EMERGENCY_VET if status.action == CareAction.EMERGENCY_VET else CareAction.VET
        cost = health.vet_cost(action, owner.kennel_level)
        if owner.cash < cost:
            return self._outcome(False, f"Not enough cash! Need ${cost}, have ${owner.cash}", dog, owner)

        if action == CareAction.EMERGENCY_VET:
            delta = health.visit_emergency_vet(dog, now)
            message = f"{dog.name} pulled through, but lost some training."
        else:
            delta = health.visit_vet(dog, now)
            message = f"{dog.name} is back to full health."

        dog = apply_delta(dog, delta)
        owner = apply_delta(owner, {"cash": owner.cash - cost})
        return self._outcome(True, message, dog, owner)

    def revive(self, dog: Dog, owner: Owner) -> ActivityOutcome:
        now = self.clock.now()
        status = health.health_status(dog, now)

        if status.level != HealthLevel.DEAD:
            return self._outcome(False, f"{dog.name} is alive and doesn't need reviving.", dog, owner)
        if not status.can_revive:
            return self._outcome(False, f"It's too late to revive {dog.name}.", dog, owner)
        if owner.gems < health.REVIVAL_GEM_COST:
            return self._outcome(
                False,
                f"Not enough gems! Need {health.REVIVAL_GEM_COST}, have {owner.gems}",
                dog, owner,
            )

        dog = apply_delta(dog, health.revive(dog, now))
        owner = apply_delta(owner, {"gems": owner.gems - health.REVIVAL_GEM_COST})
        logger.info(f"{dog.name} revived")
        return self._outcome(True, f"{dog.name} has been revived!", dog, owner)

    def upgrade_kennel(self, owner: Owner) -> tuple[bool, str, Owner]:
        """Buy the next kennel level. Returns (success, message, owner)."""
        check = kennel.can_upgrade(owner.kennel_level, owner.cash)
        if not check.allowed:
            return False, check.reason or "Cannot upgrade", owner

        level = owner.kennel_level + 1
        owner = apply_delta(owner, {"cash": owner.cash - check.cost, "kennel_level": level})
        new = kennel.new_features_at_level(level)
        message = f"Upgraded to {kennel.level_info(level).name}!"
        if new:
            message += f" Unlocked: {', '.join(new)}"
        return True, message, owner
