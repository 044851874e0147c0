"""Custom exceptions for cube drafting tools."""


class CubeDraftError(Exception):
    """Base exception for cube draft errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PoolLoadError(CubeDraftError):
    """Raised when a cube card pool cannot be loaded."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Could not load cube pool from {source}: {reason}")
        self.source = source
        self.reason = reason


class PackNotFoundError(CubeDraftError):
    """Raised when no cards in the pool carry a pack tag."""

    def __init__(self, pack_name: str):
        super().__init__(f"Pack not found: {pack_name}")
        self.pack_name = pack_name


class DeckBuildError(CubeDraftError):
    """Raised when a draft deck cannot be assembled."""

    pass
