"""Draft deck assembly and decklist formatting."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..data.models import DraftDeck, PoolCard, TypeGroup
from ..data.pool import EXCLUDED_CARD_NAMES, CubePool
from ..exceptions import DeckBuildError, PackNotFoundError
from ..utils.mana import BARE_COLOR_PATTERN, colors_from_text

logger = logging.getLogger(__name__)

TYPE_GROUPS: tuple[TypeGroup, ...] = (
    "Creature",
    "Instant / Sorcery",
    "Artifact / Enchantment",
    "Planeswalker",
    "Other",
)

BASIC_LANDS = ("Plains", "Island", "Swamp", "Mountain", "Forest")
COMMAND_TOWER = "Command Tower"
MAX_FIXING_LANDS = 6


def type_group(type_line: str) -> TypeGroup:
    """Display group for a type line; creature wins over everything else."""
    lowered = type_line.lower()
    if "creature" in lowered:
        return "Creature"
    if "instant" in lowered or "sorcery" in lowered:
        return "Instant / Sorcery"
    if "artifact" in lowered or "enchantment" in lowered:
        return "Artifact / Enchantment"
    if "planeswalker" in lowered:
        return "Planeswalker"
    return "Other"


def categorize_cards(cards: Iterable[PoolCard]) -> dict[str, list[str]]:
    """Group card names by display type, every group present."""
    groups: dict[str, list[str]] = {group: [] for group in TYPE_GROUPS}
    for card in cards:
        groups[type_group(card.type_line)].append(card.name)
    return groups


def format_decklist(cards: Iterable[PoolCard], commanders: Iterable[PoolCard] = ()) -> str:
    """Plain-text decklist: sorted "1 Name" lines, commanders after a blank line."""
    main = sorted(f"1 {card.name}" for card in cards)
    command_zone = sorted(f"1 {card.name}" for card in commanders)
    if command_zone:
        return "\n".join(main) + "\n\n" + "\n".join(command_zone)
    return "\n".join(main)


def _assemble(
    pack1: str, pack2: str, cards: list[PoolCard], commanders: list[PoolCard]
) -> DraftDeck:
    return DraftDeck(
        pack1=pack1,
        pack2=pack2,
        cards=cards,
        commanders=commanders,
        type_groups=categorize_cards(cards),
        decklist_text=format_decklist(cards, commanders),
    )


def build_draft_deck(
    pool: CubePool,
    pack1: str,
    pack2: str,
    commander: bool = False,
) -> DraftDeck:
    """
    Merge the cards of two packs into a draft deck.

    Args:
        pool: Loaded cube pool
        pack1: First chosen pack
        pack2: Second chosen pack
        commander: Include the packs' commanders (commander cubes)

    Returns:
        DraftDeck with grouped names and decklist text

    Raises:
        DeckBuildError: If a pack was not chosen.
        PackNotFoundError: If a chosen pack has no cards.
    """
    if not pack1 or not pack2:
        raise DeckBuildError("Two packs must be selected before building a deck")

    for pack in (pack1, pack2):
        if not pool.cards_for_pack(pack):
            raise PackNotFoundError(pack)

    # Pool order; a row tagged with both packs is dealt once
    cards = [
        card
        for card in pool.cards
        if (pack1 in card.tags or pack2 in card.tags)
        and not card.maybeboard
        and not card.is_commander
        and card.name not in EXCLUDED_CARD_NAMES
    ]

    commanders = pool.commanders_for(pack1, pack2) if commander else []

    logger.info("Built deck from %s + %s: %d cards", pack1, pack2, len(cards))
    return _assemble(pack1, pack2, cards, commanders)


def basic_lands(deck: DraftDeck) -> list[str]:
    """Names of the basic lands in a deck, one entry per copy."""
    return [card.name for card in deck.cards if card.name in BASIC_LANDS]


def apply_commander_additions(
    deck: DraftDeck,
    koffers_card: PoolCard,
    fixing_lands: Sequence[str],
    lands_to_remove: Sequence[str],
) -> DraftDeck:
    """
    Add the commander cube extras to a deck.

    Adds the Koffers pick and Command Tower, then swaps one basic land out
    for each chosen fixing land.

    Raises:
        DeckBuildError: If more than six fixing lands are chosen, or a basic
            land to remove is missing for a fixing land.
    """
    if len(fixing_lands) > MAX_FIXING_LANDS:
        raise DeckBuildError(
            f"At most {MAX_FIXING_LANDS} fixing lands can be added, got {len(fixing_lands)}"
        )
    if len(lands_to_remove) < len(fixing_lands):
        raise DeckBuildError("Each fixing land needs a basic land to replace")

    cards = [*deck.cards, koffers_card, PoolCard(name=COMMAND_TOWER, type_line="Land")]
    for land_name, removed in zip(fixing_lands, lands_to_remove):
        index = next((i for i, c in enumerate(cards) if c.name == removed), None)
        if index is None:
            raise DeckBuildError(f"No {removed} left in the deck to replace")
        del cards[index]
        cards.append(PoolCard(name=land_name, type_line="Land"))

    return _assemble(deck.pack1, deck.pack2, cards, list(deck.commanders))


def fixing_land_colors(pack1: str | None, pack2: str | None) -> list[str]:
    """Colors named by pack prefixes, e.g. "WU - Fliers" gives W and U."""
    colors: list[str] = []
    for pack in (pack1, pack2):
        if not pack:
            continue
        colors.extend(BARE_COLOR_PATTERN.findall(pack.split(" - ")[0]))
    return list(dict.fromkeys(colors))


def filter_fixing_pool(pool_cards: Iterable[PoolCard], colors: Sequence[str]) -> list[PoolCard]:
    """Fixing lands that share a color with the deck. Colorless lands always fit."""
    matching: list[PoolCard] = []
    for card in pool_cards:
        land_colors = colors_from_text(card.color)
        if not land_colors or any(c in colors for c in land_colors):
            matching.append(card)
    return matching
