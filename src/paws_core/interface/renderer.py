"""
Display helpers for the paws CLI.

Rich tables and panels over read-only results; nothing here changes state.
"""

from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..state.results import CompetitionResult, EnergyRegenInfo, HealthStatus
from ..state.schema import Afflicted, Dog, HealthLevel, KennelLevel, Owner, Recovering
from ..state.store import Kennel
from ..systems.ailments import resolve_ailment
from ..systems.care import hunger_thirst_status

# Shared console instance
console = Console()

THEME = {
    "primary": "steel_blue",
    "secondary": "grey70",
    "warning": "dark_goldenrod",
    "danger": "dark_red",
    "accent": "cyan",
    "good": "green3",
    "dim": "dim",
}

LEVEL_COLORS = {
    HealthLevel.HEALTHY: THEME["good"],
    HealthLevel.DECLINING: THEME["warning"],
    HealthLevel.CRITICAL: THEME["danger"],
    HealthLevel.EMERGENCY: THEME["danger"],
    HealthLevel.DEAD: THEME["dim"],
}


def stat_bar(percent: float, width: int = 10) -> str:
    """Block bar for a 0-100 value."""
    filled = int((max(0, min(100, percent)) / 100) * width)
    return "█" * filled + "░" * (width - filled)


def _bar_color(percent: float) -> str:
    if percent > 50:
        return THEME["accent"]
    if percent > 25:
        return THEME["warning"]
    return THEME["danger"]


def ailment_label(dog: Dog, catalog=None) -> str:
    state = dog.ailment
    if isinstance(state, Afflicted):
        return f"[{THEME['danger']}]{resolve_ailment(state.ailment_id, catalog).name}[/{THEME['danger']}]"
    if isinstance(state, Recovering):
        name = resolve_ailment(state.ailment_id, catalog).name
        return f"[{THEME['warning']}]Recovering from {name} until {state.due:%Y-%m-%d %H:%M}[/{THEME['warning']}]"
    return f"[{THEME['good']}]Healthy[/{THEME['good']}]"


def show_dog_status(
    dog: Dog,
    status: HealthStatus,
    regen: EnergyRegenInfo,
    tp_capacity: int,
    now: datetime,
    catalog=None,
) -> None:
    """One dog's condition at ``now``."""
    color = LEVEL_COLORS[status.level]
    table = Table(
        title=f"[bold {THEME['primary']}]{dog.name}[/bold {THEME['primary']}]"
              f" [{THEME['dim']}]{now:%Y-%m-%d %H:%M} UTC[/{THEME['dim']}]",
        show_header=False,
        box=None,
    )
    table.add_column("Key", style=THEME["dim"])
    table.add_column("Value", style=THEME["secondary"])

    table.add_row("Status", f"[{color}]{status.level.value}[/{color}] ({status.action.value})")
    for label, value in (
        ("Health", status.health),
        ("Energy", dog.energy),
        ("Hunger", dog.hunger),
        ("Thirst", dog.thirst),
        ("Happiness", dog.happiness),
    ):
        c = _bar_color(value)
        table.add_row(label, f"[{c}]{stat_bar(value)}[/{c}] {value:.0f}%")

    table.add_row("Training points", f"{dog.training_points} (next refill up to {tp_capacity})")
    table.add_row(
        "Energy regen",
        f"{regen.rate_per_hour}/h, full in {regen.hours_to_full}h" if regen.is_regenerating else "full",
    )
    table.add_row("Ailment", ailment_label(dog, catalog))
    table.add_row("Bond", f"level {dog.bond_level} ({dog.bond_xp}/100 XP)")
    console.print(table)

    feeding, message = hunger_thirst_status(dog.hunger, dog.thirst)
    if message:
        style = THEME["danger"] if feeding == "critical" else THEME["warning"]
        console.print(f"  [{style}]{message}[/{style}]")
    if status.warning:
        console.print(f"  [{color}]{status.warning}[/{color}]")


def show_owner(owner: Owner) -> None:
    wins = ", ".join(f"{tier.value} {n}" for tier, n in owner.competition_wins.items()) or "none"
    console.print(
        f"[bold {THEME['secondary']}]{owner.name}[/bold {THEME['secondary']}] "
        f"[{THEME['dim']}]${owner.cash} | {owner.gems} gems | kennel level {owner.kennel_level} "
        f"| wins: {wins}[/{THEME['dim']}]"
    )


def show_kennel_levels(levels: list[KennelLevel], current: int, next_cost: int) -> None:
    """Kennel level table with the current level highlighted."""
    table = Table(title=f"[bold {THEME['primary']}]Kennel Levels[/bold {THEME['primary']}]")
    table.add_column("Lvl", justify="right")
    table.add_column("Name")
    table.add_column("Cost", justify="right")
    table.add_column("Dogs", justify="right")
    table.add_column("Energy/h", justify="right")
    table.add_column("Training", justify="right")
    table.add_column("Prizes", justify="right")
    table.add_column("Vet", justify="right")
    table.add_column("Recovery", justify="right")

    for info in levels:
        style = f"bold {THEME['accent']}" if info.level == current else None
        table.add_row(
            str(info.level),
            info.name,
            f"${info.upgrade_cost}",
            str(info.capacity),
            f"+{info.energy_regen_bonus:g}",
            f"+{info.training_effectiveness_bonus:g}%",
            f"+{info.prize_bonus:g}%",
            f"-{info.vet_cost_reduction:g}%",
            f"-{info.recovery_reduction:g}%",
            style=style,
        )
    console.print(table)

    if next_cost:
        console.print(f"[{THEME['dim']}]Next upgrade: ${next_cost}[/{THEME['dim']}]")
    else:
        console.print(f"[{THEME['dim']}]Maximum level reached[/{THEME['dim']}]")


def show_kennel_list(kennels: list[Kennel], directory: Path) -> None:
    if not kennels:
        console.print(f"[{THEME['dim']}]No kennels in {directory}[/{THEME['dim']}]")
        return

    table = Table(title=f"[bold {THEME['primary']}]Kennels[/bold {THEME['primary']}]")
    table.add_column("Id")
    table.add_column("Owner")
    table.add_column("Lvl", justify="right")
    table.add_column("Dogs")
    for k in kennels:
        dogs = ", ".join(d.name for d in k.dogs) or "-"
        table.add_row(k.id, k.owner.name, str(k.owner.kennel_level), dogs)
    console.print(table)


def show_competition(result: CompetitionResult) -> None:
    if not result.success:
        console.print(f"[{THEME['warning']}]{result.message}[/{THEME['warning']}]")
        return

    table = Table(box=None)
    table.add_column("#", justify="right")
    table.add_column("Dog")
    table.add_column("Score", justify="right")
    for p in result.placements:
        style = f"bold {THEME['accent']}" if p.is_player else THEME["secondary"]
        table.add_row(str(p.placement), p.name, str(p.score), style=style)

    console.print(Panel(table, title=result.message, border_style=THEME["primary"]))


def show_notices(name: str, notices: list[str]) -> None:
    if not notices:
        console.print(f"[{THEME['dim']}]{name}: nothing new[/{THEME['dim']}]")
        return
    for notice in notices:
        console.print(f"[{THEME['secondary']}]{name}:[/{THEME['secondary']}] {notice}")


def show_error(message: str) -> None:
    console.print(f"[{THEME['danger']}]{escape(message)}[/{THEME['danger']}]")
