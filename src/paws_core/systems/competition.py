"""
Competition scoring engine.

A dog's score is its weighted stats for the discipline, scaled into a
readable range with a little luck mixed in, then lifted by manual play and
the owner bond. Synthetic opponents are drawn at the tier's strength and
everyone is ranked by score.

Tiers are gated twice: by the owner's wins at the previous tier and by the
dog's total in the discipline's stats. The entry fee is paid before the dog
runs and is never refunded.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..state.results import CompetitionResult, Competitor, Eligibility, Placement
from ..state.schema import (
    CompetitionTier,
    CompetitionType,
    Dog,
    Owner,
    Prizes,
    StatName,
    TierId,
)
from ..state.stats import total_value
from ..tools.numbers import round_half_up
from ..tools.rng import Rng, uniform
from .bond import bond_competition_bonus
from .kennel import apply_competition_bonus

logger = logging.getLogger(__name__)


SCORE_SCALE = 10
SCORE_VARIANCE = 0.1            # Total spread, so +/-5%
MANUAL_PLAY_MAX_BONUS = 0.2
OPPONENT_JITTER = 0.2           # Total spread, so +/-10%
DEFAULT_OPPONENTS = 7

OPPONENT_NAMES = [
    "Max", "Bella", "Charlie", "Luna", "Cooper", "Daisy", "Rocky", "Sadie",
    "Duke", "Molly", "Bear", "Maggie", "Zeus", "Sophie", "Jack", "Chloe",
]


COMPETITION_TYPES: dict[str, CompetitionType] = {c.id: c for c in [
    CompetitionType(
        id="agility", name="Agility Trial",
        description="Navigate obstacle courses at speed",
        primary_stat=StatName.AGILITY,
        stat_weights={StatName.AGILITY: 0.5, StatName.SPEED: 0.3, StatName.INTELLIGENCE: 0.2},
    ),
    CompetitionType(
        id="obedience", name="Obedience Trial",
        description="Demonstrate control and training",
        primary_stat=StatName.OBEDIENCE,
        stat_weights={StatName.OBEDIENCE: 0.5, StatName.INTELLIGENCE: 0.3, StatName.TRAINABILITY: 0.2},
    ),
    CompetitionType(
        id="weight_pull", name="Weight Pull",
        description="Pull maximum weight",
        primary_stat=StatName.STRENGTH,
        stat_weights={StatName.STRENGTH: 0.7, StatName.ENDURANCE: 0.3},
    ),
    CompetitionType(
        id="racing", name="Racing",
        description="Pure speed competition",
        primary_stat=StatName.SPEED,
        stat_weights={StatName.SPEED: 0.6, StatName.ENDURANCE: 0.2, StatName.AGILITY: 0.2},
    ),
]}


COMPETITION_TIERS: dict[TierId, CompetitionTier] = {t.id: t for t in [
    CompetitionTier(
        id=TierId.LOCAL, name="Local Competition",
        entry_fee=25, min_requirement=15,
        prizes=Prizes(first=150, second=75, third=40, participation=10),
        opponent_min=5, opponent_max=7,
    ),
    CompetitionTier(
        id=TierId.REGIONAL, name="Regional Competition",
        entry_fee=100, min_requirement=30,
        prizes=Prizes(first=750, second=400, third=200, participation=50),
        opponent_min=7, opponent_max=9,
        unlock_tier=TierId.LOCAL, unlock_wins=15,
    ),
    CompetitionTier(
        id=TierId.NATIONAL, name="National Championship",
        entry_fee=500, min_requirement=50,
        prizes=Prizes(first=5000, second=2500, third=1000, participation=250),
        opponent_min=9, opponent_max=11,
        unlock_tier=TierId.REGIONAL, unlock_wins=25,
    ),
    CompetitionTier(
        id=TierId.CHAMPIONSHIP, name="Grand Championship",
        entry_fee=2000, min_requirement=75,
        prizes=Prizes(first=20000, second=10000, third=5000, participation=1000),
        opponent_min=11, opponent_max=13,
        unlock_tier=TierId.NATIONAL, unlock_wins=10,
    ),
]}


def get_competition_type(competition_id: str) -> CompetitionType | None:
    return COMPETITION_TYPES.get(competition_id)


def get_tier(tier_id: TierId | str) -> CompetitionTier | None:
    try:
        return COMPETITION_TIERS.get(TierId(tier_id))
    except ValueError:
        return None


# -----------------------------------------------------------------------------
# Scoring
# -----------------------------------------------------------------------------

def weighted_stat_total(dog: Dog, competition: CompetitionType) -> float:
    """Sum of (base + trained) x weight over the discipline's stats."""
    return sum(total_value(dog, stat) * weight for stat, weight in competition.stat_weights.items())


def relevant_stat_total(dog: Dog, competition: CompetitionType) -> float:
    """Unweighted total of the discipline's stats, used for tier eligibility."""
    return sum(total_value(dog, stat) for stat in competition.stat_weights)


def score(dog: Dog, competition: CompetitionType, player_skill: float, rng: Rng) -> int:
    """
    One run's score.

    Not deterministic: a +/-5% variance comes from ``rng``. A non-zero
    ``player_skill`` (manual play, 0-100) adds up to +20%, and bond adds
    up to +10%.
    """
    total = weighted_stat_total(dog, competition) * SCORE_SCALE
    total *= 1 + uniform(rng, -SCORE_VARIANCE / 2, SCORE_VARIANCE / 2)

    if player_skill > 0:
        total *= 1 + player_skill / 100 * MANUAL_PLAY_MAX_BONUS

    total *= 1 + bond_competition_bonus(dog.bond_level)
    result = round_half_up(total)
    logger.debug(f"{dog.name} scored {result} in {competition.id}")
    return result


def generate_opponents(count: int, min_stat: float, max_stat: float, rng: Rng) -> list[Competitor]:
    """Synthetic competitors with stat levels drawn from [min_stat, max_stat)."""
    opponents = []
    for _ in range(count):
        name = rng.choice(OPPONENT_NAMES)
        base = uniform(rng, min_stat, max_stat)
        jitter = 1 + uniform(rng, -OPPONENT_JITTER / 2, OPPONENT_JITTER / 2)
        opponents.append(Competitor(name=name, score=round_half_up(base * SCORE_SCALE * jitter)))
    return opponents


def determine_winner(entries: Sequence[Competitor]) -> list[Placement]:
    """
    Rank by score, highest first, placements 1..N.

    Equal scores keep their input order (the sort is stable); there is no
    further tie-break.
    """
    ranked = sorted(entries, key=lambda c: c.score, reverse=True)
    return [
        Placement(name=c.name, score=c.score, placement=i, is_player=c.is_player)
        for i, c in enumerate(ranked, start=1)
    ]


def prize_for_placement(tier: CompetitionTier, placement: int, kennel_level: int = 1) -> int:
    """Tier prize for a finishing position with the kennel prize bonus applied."""
    prizes = tier.prizes
    base = {1: prizes.first, 2: prizes.second, 3: prizes.third}.get(placement, prizes.participation)
    return apply_competition_bonus(base, kennel_level)


# -----------------------------------------------------------------------------
# Entry gating
# -----------------------------------------------------------------------------

def is_tier_unlocked(tier: CompetitionTier, wins: dict[TierId, int]) -> bool:
    if tier.unlock_tier is None:
        return True
    return wins.get(tier.unlock_tier, 0) >= tier.unlock_wins


def meets_stat_requirement(dog: Dog, competition: CompetitionType, tier: CompetitionTier) -> bool:
    return relevant_stat_total(dog, competition) >= tier.min_requirement


def check_entry(
    owner: Owner, dog: Dog, competition: CompetitionType, tier: CompetitionTier,
) -> Eligibility:
    """Tier unlocked, dog strong enough, owner can pay the fee."""
    if not is_tier_unlocked(tier, owner.competition_wins):
        have = owner.wins(tier.unlock_tier)
        return Eligibility.blocked(
            f"{tier.name} requires {tier.unlock_wins} {tier.unlock_tier.value} wins "
            f"({have}/{tier.unlock_wins})",
            cost=tier.entry_fee,
        )

    if not meets_stat_requirement(dog, competition, tier):
        total = round_half_up(relevant_stat_total(dog, competition))
        return Eligibility.blocked(
            f"Need {tier.min_requirement:g} total stats (have {total})",
            cost=tier.entry_fee,
        )

    if owner.cash < tier.entry_fee:
        return Eligibility.blocked(
            f"Not enough cash! Entry fee is ${tier.entry_fee}.",
            cost=tier.entry_fee,
        )

    return Eligibility.ok(cost=tier.entry_fee)


def run_competition(
    dog: Dog,
    owner: Owner,
    competition: CompetitionType,
    tier: CompetitionTier,
    rng: Rng,
    player_skill: float = 0,
    opponents: Sequence[Competitor] | None = None,
    opponent_count: int = DEFAULT_OPPONENTS,
) -> CompetitionResult:
    """
    Enter, score, rank and pay out.

    A rejected entry costs nothing. An accepted one pays the fee first,
    then receives the prize; a first place counts toward the tier's wins.
    Pass ``opponents`` to run against a fixed field.
    """
    entry = check_entry(owner, dog, competition, tier)
    if not entry.allowed:
        return CompetitionResult(success=False, message=entry.reason or "Entry refused")

    cash = owner.cash - tier.entry_fee

    player_score = score(dog, competition, player_skill, rng)
    if opponents is None:
        opponents = generate_opponents(opponent_count, tier.opponent_min, tier.opponent_max, rng)

    field = [Competitor(name=dog.name, score=player_score, is_player=True), *opponents]
    placements = determine_winner(field)
    placement = next(p.placement for p in placements if p.is_player)
    prize = prize_for_placement(tier, placement, owner.kennel_level)

    owner_delta = {"cash": cash + prize}
    if placement == 1:
        wins = dict(owner.competition_wins)
        wins[tier.id] = wins.get(tier.id, 0) + 1
        owner_delta["competition_wins"] = wins

    logger.info(
        f"{dog.name} placed {placement}/{len(placements)} in {tier.name} "
        f"{competition.name} (score {player_score}, prize ${prize})"
    )
    return CompetitionResult(
        success=True,
        message=f"{dog.name} placed #{placement} of {len(placements)} and won ${prize}!",
        score=player_score,
        placements=placements,
        placement=placement,
        prize=prize,
        owner_delta=owner_delta,
    )
