"""Pytest fixtures for cube draft tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import httpx
import pytest

from cube_draft.data.models import CardRecord
from cube_draft.data.pool import CubePool
from cube_draft.data.scryfall import ScryfallClient

SAMPLE_CSV = """\
Name,Type,Mana,Color,Tags,Maybe
Favorable Winds,Enchantment,{1}{U},U,WU - Fliers,false
Healer's Hawk,Creature - Bird,{W},W,WU - Fliers,false
Spectral Sailor,Creature - Spirit Pirate,{U},U,WU - Fliers,false
Plains,Basic Land - Plains,,,WU - Fliers,false
Island,Basic Land - Island,,,WU - Fliers,false
Island,Basic Land - Island,,,WU - Fliers,false
Raff Capashen,Legendary Creature - Human Wizard,{2}{W}{U},WU,WU - Fliers;zz_Commander,false
Viscera Seer,Creature - Vampire Wizard,{B},B,BR - Sacrifice,false
Goblin Bombardment,Enchantment,{1}{R},R,BR - Sacrifice,false
Blood Artist,Creature - Vampire,{1}{B},B,BR - Sacrifice,false
Swamp,Basic Land - Swamp,,,BR - Sacrifice,false
Mountain,Basic Land - Mountain,,,BR - Sacrifice,false
Judith the Scourge Diva,Legendary Creature,{1}{B}{R},BR,zz_Commander;BR - Sacrifice,false
Cultivate,Sorcery,{2}{G},G,G - Ramp,false
Llanowar Elves,Creature - Elf Druid,{G},G,G - Ramp,false
Forest,Basic Land - Forest,,,G - Ramp,false
Sol Ring,Artifact,{1},,G - Ramp,false
Stray Cat,Creature - Cat,{1}{W},W,W - Cats,false
Maybe Card,Instant,{U},U,WU - Fliers,true
The Ring,Emblem,,,WU - Fliers,false
Lorehold Koffer,Artifact,{2},,z_Kvatch Koffers,false
Locked Koffer,Artifact,{3},,z_Kvatch Koffers,false
Hallowed Fountain,Land - Plains Island,,WU,z_Fixing Roster_z,false
Blood Crypt,Land - Swamp Mountain,,BR,z_Fixing Roster_z,false
Command Beacon,Land,,,z_Fixing Roster_z,false
"""

# Card database answers for a subset of the sample pool
SCRYFALL_CARDS: dict[str, dict[str, Any]] = {
    "Viscera Seer": {
        "name": "Viscera Seer",
        "oracle_text": "Sacrifice a creature: Scry 1.",
        "type_line": "Creature — Vampire Wizard",
        "mana_cost": "{B}",
        "color_identity": ["B"],
        "keywords": [],
        "cmc": 1.0,
    },
    "Blood Artist": {
        "name": "Blood Artist",
        "oracle_text": (
            "Whenever Blood Artist or another creature dies, target player loses "
            "1 life and you gain 1 life."
        ),
        "type_line": "Creature — Vampire",
        "mana_cost": "{1}{B}",
        "color_identity": ["B"],
        "keywords": [],
        "cmc": 2.0,
    },
    "Goblin Bombardment": {
        "name": "Goblin Bombardment",
        "oracle_text": "Sacrifice a creature: Goblin Bombardment deals 1 damage to any target.",
        "type_line": "Enchantment",
        "mana_cost": "{1}{R}",
        "color_identity": ["R"],
        "keywords": [],
        "cmc": 2.0,
    },
    "Sol Ring": {
        "name": "Sol Ring",
        "oracle_text": "{T}: Add {C}{C}.",
        "type_line": "Artifact",
        "mana_cost": "{1}",
        "color_identity": [],
        "keywords": [],
        "cmc": 1.0,
    },
}


class FakeScryfall:
    """Records collection requests and answers from a fixed card table."""

    def __init__(self, cards: dict[str, dict[str, Any]], fail: bool = False) -> None:
        self.cards = cards
        self.fail = fail
        self.requests: list[list[str]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        names = [ident["name"] for ident in json.loads(request.content)["identifiers"]]
        self.requests.append(names)
        if self.fail:
            return httpx.Response(503, json={"object": "error"})
        found = [self.cards[n] for n in names if n in self.cards]
        missing = [{"name": n} for n in names if n not in self.cards]
        return httpx.Response(200, json={"object": "list", "data": found, "not_found": missing})

    def client(self) -> ScryfallClient:
        return ScryfallClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def pool() -> CubePool:
    """The sample cube pool."""
    return CubePool.from_csv_text(SAMPLE_CSV, source="sample.csv")


@pytest.fixture
def fake_scryfall() -> FakeScryfall:
    """A card database that knows a few of the sample cards."""
    return FakeScryfall(SCRYFALL_CARDS)


@pytest.fixture
def make_card() -> Callable[..., CardRecord]:
    """Factory for card records with sensible empty defaults."""

    def _make(
        name: str = "Test Card",
        text: str = "",
        type_line: str = "",
        colors: Iterable[str] = (),
        cmc: float = 0,
        keywords: Iterable[str] = (),
    ) -> CardRecord:
        return CardRecord(
            name=name,
            oracle_text=text,
            type_line=type_line,
            color_identity=frozenset(colors),  # type: ignore[arg-type]
            cmc=cmc,
            keywords=tuple(keywords),
        )

    return _make


@pytest.fixture
def cube_csv(tmp_path: Path) -> Path:
    """The sample cube written to disk."""
    path = tmp_path / "cube.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
