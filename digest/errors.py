from __future__ import annotations
from typing import Optional


class DigestError(Exception):
    """Base class for failures that end a digest run."""

    stage = "run"


class ConfigError(DigestError):
    stage = "configuration"


class PlexConnectionError(DigestError):
    stage = "connection"


class TraversalError(DigestError):
    """A library, artist or album fetch failed; nothing gets delivered."""

    stage = "traversal"

    def __init__(self, library: Optional[str], cause: Exception):
        self.library = library
        self.cause = cause
        if library is None:
            msg = f"Failed to list libraries: {cause}"
        else:
            msg = f"Failed to walk library '{library}': {cause}"
        super().__init__(msg)


class DeliveryError(DigestError):
    stage = "delivery"
