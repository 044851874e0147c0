"""Rich rendering for profiles, compatibility scores and decks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from cube_draft.data.models import (
        CompatibilityScore,
        DeckPowerResult,
        DraftDeck,
        ThemeProfile,
    )

console = Console()

RATING_STYLES = {
    "Amazing": "bold bright_green",
    "Excellent": "bright_green",
    "Good": "green",
    "Neutral": "yellow",
    "Poor": "dark_orange",
    "Bad": "red",
    "Terrible": "bold red",
}


def format_power_bar(score: float, width: int = 20) -> tuple[str, str]:
    """Format a 0-100 power score as a bar with a color style."""
    filled = int(score / 100 * width)
    bar = "█" * filled + "░" * (width - filled)

    if score >= 80:
        style = "red"
    elif score >= 60:
        style = "dark_orange"
    elif score >= 40:
        style = "yellow"
    else:
        style = "green"
    return bar, style


def print_profile(pack_name: str, profile: ThemeProfile) -> None:
    table = Table(title=pack_name, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Cards", str(profile.card_count))
    table.add_row("Colors", "".join(profile.color_identity) or "Colorless")
    table.add_row("Average CMC", f"{profile.average_cmc:.2f}")
    table.add_row("Curve", profile.curve_archetype)
    table.add_row("Strategy", f"{profile.primary_strategy} ({profile.theme_strength:.1f})")
    table.add_row("Sub-themes", ", ".join(profile.sub_themes) or "-")
    table.add_row("Tribes", ", ".join(profile.tribes) or "-")
    table.add_row("Mechanics", ", ".join(profile.keywords) or "-")
    console.print(table)

    if profile.card_synergies:
        console.print("\n[bold]Card synergies:[/]")
        for finding in profile.card_synergies:
            console.print(
                f"  • {finding.enabler} → {finding.payoff} "
                f"[dim]({finding.synergy_type}, {finding.strength:g})[/dim]"
            )


def print_compatibility(pack1: str, scores: dict[str, CompatibilityScore]) -> None:
    table = Table(title=f"Compatibility with {pack1}")
    table.add_column("Pack", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Rating")
    table.add_column("Reasons", style="dim")

    ranked = sorted(scores.items(), key=lambda item: item[1].score, reverse=True)
    for pack_name, score in ranked:
        style = RATING_STYLES.get(score.rating, "")
        table.add_row(
            pack_name,
            f"{score.score:+g}",
            f"[{style}]{score.rating}[/]",
            "; ".join(score.reasons),
        )
    console.print(table)


def print_deck(deck: DraftDeck) -> None:
    console.print(f"\n[bold]{deck.pack1} + {deck.pack2}[/] ({deck.card_count} cards)")
    if deck.commanders:
        names = ", ".join(c.name for c in deck.commanders)
        console.print(f"[bold]Commanders:[/] {names}")

    for group, names in deck.type_groups.items():
        if not names:
            continue
        console.print(f"\n[cyan]{group}[/] ({len(names)})")
        for name in sorted(names):
            console.print(f"  {name}")


def print_power(power: DeckPowerResult) -> None:
    bar, style = format_power_bar(power.score)
    console.print(f"\n[bold]Bully meter:[/] [{style}]{bar}[/] {power.score:g} {power.label}")
    hits = {k: v for k, v in power.category_counts.items() if v}
    if hits:
        breakdown = ", ".join(f"{k.replace('_', ' ')} {v}" for k, v in hits.items())
        console.print(f"[dim]{breakdown}[/dim]")
