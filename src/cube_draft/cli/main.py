"""Cube draft CLI - pack analysis and deck building for two-pack cube drafts."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from cube_draft.cli.context import CubeContext, output_json, run_async, setup_logging
from cube_draft.cli.display import print_compatibility, print_deck, print_power, print_profile
from cube_draft.data.models import CompatibilityScore, DeckPowerResult, DraftDeck
from cube_draft.exceptions import CubeDraftError, PackNotFoundError
from cube_draft.tools.decklist import build_draft_deck
from cube_draft.tools.power import score_deck_power

console = Console()

# =============================================================================
# Main CLI app
# =============================================================================

cli = typer.Typer(
    name="cube-draft",
    help="Cube draft tools - pack synergy analysis and deck building.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

CubeFile = Annotated[
    Path,
    typer.Argument(help="Cube CSV export", exists=True, dir_okay=False, readable=True),
]
Offline = Annotated[bool, typer.Option("--offline", help="Skip the card database")]
AsJson = Annotated[bool, typer.Option("--json", help="Output JSON")]


@cli.callback()
def main() -> None:
    setup_logging()


def _fail(error: CubeDraftError) -> typer.Exit:
    console.print(f"[red]Error: {error.message}[/]")
    return typer.Exit(code=1)


# =============================================================================
# Commands
# =============================================================================


@cli.command()
def packs(cube_file: CubeFile, as_json: AsJson = False) -> None:
    """List the packs a cube offers."""
    ctx = CubeContext(cube_file, offline=True)
    try:
        themes = ctx.pool.pack_themes()
    except CubeDraftError as e:
        raise _fail(e) from e

    if as_json:
        output_json({"packs": themes})
        return

    table = Table(title=f"Packs in {cube_file.name}")
    table.add_column("Pack", style="cyan")
    table.add_column("Cards", justify="right")
    for theme in themes:
        table.add_row(theme, str(len(ctx.pool.cards_for_pack(theme))))
    console.print(table)


@cli.command()
def profile(
    cube_file: CubeFile,
    pack: Annotated[str, typer.Argument(help="Pack name")],
    offline: Offline = False,
    as_json: AsJson = False,
) -> None:
    """Show the theme profile of a pack."""
    ctx = CubeContext(cube_file, offline=offline)

    async def _run() -> None:
        result = await ctx.analyzer.analyze_pack(pack)
        if as_json:
            output_json(result)
        else:
            print_profile(pack, result)

    try:
        run_async(_run())
    except CubeDraftError as e:
        raise _fail(e) from e


@cli.command()
def compat(
    cube_file: CubeFile,
    pack1: Annotated[str, typer.Argument(help="First pack")],
    candidates: Annotated[
        list[str] | None,
        typer.Option("--with", "-w", help="Candidate second pack (repeatable)"),
    ] = None,
    offline: Offline = False,
    as_json: AsJson = False,
) -> None:
    """Score a pack against candidate second packs (default: every other pack)."""
    ctx = CubeContext(cube_file, offline=offline)

    async def _run() -> dict[str, CompatibilityScore]:
        themes = ctx.pool.pack_themes()
        if pack1 not in themes:
            raise PackNotFoundError(pack1)
        names = candidates or [t for t in themes if t != pack1]
        options = {name: name for name in names}
        results = await ctx.analyzer.sweep(pack1, options)
        return {r.pack_name: r.compatibility for r in results.values()}

    try:
        scores = run_async(_run())
    except CubeDraftError as e:
        raise _fail(e) from e

    if as_json:
        output_json({name: score.model_dump() for name, score in scores.items()})
    else:
        print_compatibility(pack1, scores)


@cli.command()
def deck(
    cube_file: CubeFile,
    pack1: Annotated[str, typer.Argument(help="First pack")],
    pack2: Annotated[str, typer.Argument(help="Second pack")],
    commander: Annotated[
        bool, typer.Option("--commander", help="Commander cube: include commanders")
    ] = False,
    offline: Offline = False,
    as_json: AsJson = False,
) -> None:
    """Build the merged decklist of two packs and rate its power."""
    ctx = CubeContext(cube_file, offline=offline)

    async def _run() -> tuple[DraftDeck, DeckPowerResult]:
        draft_deck = build_draft_deck(ctx.pool, pack1, pack2, commander=commander)
        metadata = ctx.analyzer.metadata
        cards = await metadata.get([c.name for c in draft_deck.cards])
        commanders = await metadata.get([c.name for c in draft_deck.commanders])
        return draft_deck, score_deck_power(cards, commanders)

    try:
        draft_deck, power = run_async(_run())
    except CubeDraftError as e:
        raise _fail(e) from e

    if as_json:
        output_json({"deck": draft_deck.model_dump(), "power": power.model_dump()})
        return

    print_deck(draft_deck)
    console.print("\n[bold]Decklist:[/]")
    console.print(draft_deck.decklist_text, markup=False)
    print_power(power)


if __name__ == "__main__":
    cli()
