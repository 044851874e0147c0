"""Cube pool and analyzer context for CLI commands."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from cube_draft.config import get_settings
from cube_draft.data.cache import CardMetadataCache
from cube_draft.data.pool import CubePool, load_pool
from cube_draft.data.scryfall import ScryfallClient
from cube_draft.tools.synergy import PackSynergyAnalyzer


class CubeContext:
    """Lazily loaded cube pool and analyzer for one CLI invocation."""

    def __init__(self, cube_file: Path, offline: bool = False) -> None:
        self.cube_file = cube_file
        self.offline = offline
        self._pool: CubePool | None = None
        self._analyzer: PackSynergyAnalyzer | None = None

    @property
    def pool(self) -> CubePool:
        """Cube pool, loaded on first use."""
        if self._pool is None:
            self._pool = load_pool(self.cube_file)
        return self._pool

    @property
    def analyzer(self) -> PackSynergyAnalyzer:
        """Analyzer over the pool; offline mode skips the card database."""
        if self._analyzer is None:
            client = None if self.offline else ScryfallClient()
            cache = CardMetadataCache(client=client, fallback_lookup=self.pool.find)
            self._analyzer = PackSynergyAnalyzer(self.pool, metadata_cache=cache)
        return self._analyzer


def setup_logging() -> None:
    """Configure logging from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )


def run_async(coro: Any) -> Any:
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


def output_json(data: Any) -> None:
    """Output data as JSON (plain text, no Rich formatting)."""
    if hasattr(data, "model_dump"):
        data = data.model_dump()
    # Use regular print, not rprint, to avoid ANSI codes in JSON output
    print(json.dumps(data, indent=2, default=str))
