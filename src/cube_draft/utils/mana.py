"""Mana cost parsing and color helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import NamedTuple

# Color mappings
COLORS = {
    "W": "White",
    "U": "Blue",
    "B": "Black",
    "R": "Red",
    "G": "Green",
}

COLOR_ORDER = ["W", "U", "B", "R", "G"]

# Mana symbol patterns
MANA_SYMBOL_PATTERN = re.compile(r"\{([^}]+)\}")
BARE_NUMBER_PATTERN = re.compile(r"\d+")
BARE_COLOR_PATTERN = re.compile(r"[WUBRG]")


class ManaCost(NamedTuple):
    """Parsed mana cost."""

    raw: str
    cmc: int
    colors: list[str]


def sort_colors(colors: Iterable[str]) -> list[str]:
    """Return colors in WUBRG order, dropping anything that is not a color."""
    present = set(colors)
    return [c for c in COLOR_ORDER if c in present]


def _parse_symbols(mana_cost: str, symbols: list[str]) -> ManaCost:
    cmc = 0
    colors: set[str] = set()

    for symbol in symbols:
        symbol_upper = symbol.upper()

        # X counts as zero
        if symbol_upper == "X":
            continue

        if symbol_upper.isdigit():
            cmc += int(symbol_upper)
            continue

        if symbol_upper == "C":
            cmc += 1
            continue

        # Phyrexian and hybrid symbols ("W/P", "W/U", "2/W")
        if "/" in symbol_upper:
            parts = symbol_upper.split("/")
            colors.update(p for p in parts if p in COLORS)
            cmc += int(parts[0]) if parts[0].isdigit() else 1
            continue

        if symbol_upper in COLORS:
            colors.add(symbol_upper)
            cmc += 1

    return ManaCost(raw=mana_cost, cmc=cmc, colors=sort_colors(colors))


def parse_mana_cost(mana_cost: str | None) -> ManaCost:
    """
    Best-effort parse of a mana cost string.

    Handles braced costs like "{2}{W}{W}" and the bare shorthand some cube
    exports use ("2WW"). In the bare form every number is generic mana and
    every color letter is one pip.

    Args:
        mana_cost: Mana cost string

    Returns:
        ManaCost with converted mana cost and colors in WUBRG order
    """
    if not mana_cost:
        return ManaCost(raw="", cmc=0, colors=[])

    symbols = MANA_SYMBOL_PATTERN.findall(mana_cost)
    if symbols:
        return _parse_symbols(mana_cost, symbols)

    upper = mana_cost.upper()
    generic = sum(int(n) for n in BARE_NUMBER_PATTERN.findall(upper))
    pips = BARE_COLOR_PATTERN.findall(upper)
    return ManaCost(raw=mana_cost, cmc=generic + len(pips), colors=sort_colors(pips))


def colors_from_text(value: str | None) -> list[str]:
    """Extract color letters from free text such as a pool "Color" column."""
    if not value:
        return []
    return sort_colors(BARE_COLOR_PATTERN.findall(value.upper()))
