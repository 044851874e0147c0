"""Card-related models."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import Color

COMMANDER_TAG = "zz_Commander"


def _first(row: Mapping[str, str | None], *keys: str) -> str:
    """Return the first non-empty value among alternative column names."""
    for key in keys:
        value = row.get(key)
        if value:
            return value.strip()
    return ""


class CardRecord(BaseModel):
    """Normalized metadata for one named card.

    Records are immutable once built; the metadata cache hands out the same
    instance for a name for the whole session.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    oracle_text: str = ""
    type_line: str = ""
    mana_cost: str = ""
    color_identity: frozenset[Color] = Field(default_factory=frozenset)
    keywords: tuple[str, ...] = ()
    cmc: float = Field(default=0.0, ge=0)

    @field_validator("oracle_text")
    @classmethod
    def lowercase_text(cls, v: str) -> str:
        """Oracle text is stored lowercased for matching."""
        return v.lower()


class PoolCard(BaseModel):
    """One row of a cube card pool, normalized from its CSV shape."""

    model_config = ConfigDict(frozen=True)

    name: str
    raw_tags: str = ""
    tags: tuple[str, ...] = ()
    type_line: str = ""
    mana_cost: str = ""
    color: str = ""
    maybeboard: bool = False

    @classmethod
    def from_row(cls, row: Mapping[str, str | None]) -> PoolCard:
        """Build a pool card from a CSV row.

        Cube exports use either capitalized (``Name``, ``Tags``, ``Type``,
        ``Mana``, ``Color``, ``Maybe``) or lowercase column names.
        """
        raw_tags = _first(row, "Tags", "tags")
        return cls(
            name=_first(row, "Name", "name"),
            raw_tags=raw_tags,
            tags=tuple(t.strip() for t in raw_tags.split(";") if t.strip()),
            type_line=_first(row, "Type", "type", "type_line"),
            mana_cost=_first(row, "Mana", "mana_cost"),
            color=_first(row, "Color", "color"),
            maybeboard=_first(row, "Maybe", "maybeboard").lower() == "true",
        )

    @property
    def is_commander(self) -> bool:
        """Whether the row is tagged as a pack commander."""
        return COMMANDER_TAG in self.raw_tags

    @property
    def oracle_text(self) -> str:
        """Pool rows carry no rules text."""
        return ""

    def commander_pack(self) -> str | None:
        """Name of the pack this commander belongs to, if tagged as one."""
        if not self.is_commander:
            return None
        others = [t for t in self.tags if COMMANDER_TAG not in t]
        return others[0] if others else None
