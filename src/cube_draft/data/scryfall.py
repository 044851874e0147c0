"""Scryfall card collection client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..utils.mana import COLORS
from .models import CardRecord

logger = logging.getLogger(__name__)


def _face_values(data: dict[str, Any], key: str, sep: str) -> str:
    """Join a field across card faces when the card object lacks it."""
    faces = data.get("card_faces") or []
    values = [face.get(key) or "" for face in faces if isinstance(face, dict)]
    return sep.join(v for v in values if v)


def parse_card_data(data: dict[str, Any]) -> CardRecord:
    """Parse a Scryfall card object into a CardRecord.

    Missing fields default to empty values. Double-faced cards carry their
    rules text and mana cost on the faces, so those are joined.
    """
    oracle_text = data.get("oracle_text") or _face_values(data, "oracle_text", "\n")
    mana_cost = data.get("mana_cost") or _face_values(data, "mana_cost", " // ")
    colors = [c for c in data.get("color_identity") or [] if c in COLORS]

    try:
        cmc = max(float(data.get("cmc") or 0), 0.0)
    except (TypeError, ValueError):
        cmc = 0.0

    return CardRecord(
        name=data.get("name") or "",
        oracle_text=oracle_text,
        type_line=data.get("type_line") or "",
        mana_cost=mana_cost,
        color_identity=frozenset(colors),
        keywords=tuple(data.get("keywords") or ()),
        cmc=cmc,
    )


class ScryfallClient:
    """Looks up batches of cards by name via the /cards/collection endpoint."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._base_url = settings.scryfall_api_url.rstrip("/")
        self._headers = {
            "User-Agent": settings.user_agent,
            "Accept": "application/json;q=0.9,*/*;q=0.8",
        }
        self._timeout = httpx.Timeout(settings.lookup_timeout_seconds)
        self._transport = transport

    async def fetch_collection(self, names: Sequence[str]) -> list[CardRecord]:
        """Fetch card records for up to 75 names.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response.
            ValueError: If the response body is not valid JSON or not a card
                collection object.
        """
        payload = {"identifiers": [{"name": name} for name in names]}

        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.post("/cards/collection", json=payload)
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Expected a card collection object, got {type(data).__name__}")
        cards = data.get("data") or []
        if not isinstance(cards, list):
            raise ValueError(f"Expected a list of cards, got {type(cards).__name__}")

        not_found = data.get("not_found") or []
        if not_found:
            logger.debug("Card database did not recognise %d names", len(not_found))

        skipped = sum(1 for card in cards if not isinstance(card, dict))
        if skipped:
            logger.warning("Skipping %d malformed card entries", skipped)
        return [parse_card_data(card) for card in cards if isinstance(card, dict)]
