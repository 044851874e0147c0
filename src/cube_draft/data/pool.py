"""Cube card pool loading and pack membership."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import PoolLoadError
from .models import PoolCard

logger = logging.getLogger(__name__)

# Cards that are never dealt into a pack (dungeons, emblems and similar helpers)
EXCLUDED_CARD_NAMES = frozenset({
    "Dungeon of the Mad Mage",
    "Lost Mine of Phandelver",
    "Tomb of Annihilation",
    "The Ring",
    "Undercity",
    "Cragflame",
})

KOFFERS_TAG = "z_Kvatch Koffers"
FIXING_TAG = "z_Fixing Roster_z"

# Tags that exist in the cube file but are not offered as packs
EXCLUDED_TAGS = frozenset({
    "Other",
    FIXING_TAG,
    KOFFERS_TAG,
    "B - The Big Top",
    "WUR - Mutate",
    "WU - Studies",
    "WU - Studies (Lessons)",
    "UBR - Mirror Breakers",
    "G - Mutate",
    "W - Cats",
    "UR - Draw 2",
    "G - Grow Tall",
    "G - Constructs",
    "U - Flash 2",
    "U - Sea Monsters",
})


@dataclass
class CubePool:
    """An in-memory cube card pool."""

    cards: list[PoolCard]
    source: str = "<memory>"
    _by_name: dict[str, PoolCard] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for card in self.cards:
            self._by_name.setdefault(card.name, card)

    @classmethod
    def from_csv_text(cls, text: str, source: str = "<memory>") -> CubePool:
        """Parse a cube CSV export."""
        if not text or not text.strip():
            raise PoolLoadError(source, "CSV data is empty")

        try:
            reader = csv.DictReader(io.StringIO(text.strip()), skipinitialspace=True)
            cards = [PoolCard.from_row(row) for row in reader]
        except csv.Error as e:
            raise PoolLoadError(source, str(e)) from e

        cards = [c for c in cards if c.name]
        if not cards:
            raise PoolLoadError(source, "no card rows found")

        logger.info("Loaded %d cards from %s", len(cards), source)
        return cls(cards=cards, source=source)

    @classmethod
    def from_csv(cls, path: Path) -> CubePool:
        """Load a cube CSV export from disk."""
        try:
            text = path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise PoolLoadError(str(path), str(e)) from e
        return cls.from_csv_text(text, source=str(path))

    def __len__(self) -> int:
        return len(self.cards)

    def find(self, name: str) -> PoolCard | None:
        """Look up the pool row for a card name."""
        return self._by_name.get(name)

    def pack_themes(self) -> list[str]:
        """Sorted pack names that can be offered to the drafter."""
        themes: set[str] = set()
        for card in self.cards:
            if card.maybeboard or card.name in EXCLUDED_CARD_NAMES:
                continue
            if card.is_commander:
                continue
            themes.update(t for t in card.tags if t not in EXCLUDED_TAGS)
        return sorted(themes)

    def cards_for_pack(self, pack_name: str) -> list[PoolCard]:
        """Non-commander cards dealt into a pack."""
        return [
            card
            for card in self.cards
            if pack_name in card.tags
            and not card.maybeboard
            and not card.is_commander
            and card.name not in EXCLUDED_CARD_NAMES
        ]

    def commanders_for(self, *pack_names: str) -> list[PoolCard]:
        """Commanders belonging to any of the given packs, one per name."""
        commanders: list[PoolCard] = []
        seen: set[str] = set()
        for card in self.cards:
            if card.maybeboard:
                continue
            pack = card.commander_pack()
            if pack in pack_names and card.name not in seen:
                seen.add(card.name)
                commanders.append(card)
        return commanders

    def koffers_pool(self) -> list[PoolCard]:
        """Cards offered in the commander cube's Koffers pick."""
        return [c for c in self.cards if KOFFERS_TAG in c.raw_tags]

    def fixing_pool(self) -> list[PoolCard]:
        """Fixing lands offered in the commander cube."""
        return [c for c in self.cards if FIXING_TAG in c.raw_tags]


def load_pool(path: Path | str) -> CubePool:
    """Load a cube pool from a CSV export path."""
    return CubePool.from_csv(Path(path))
