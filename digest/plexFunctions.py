# digest/plexFunctions.py
from __future__ import annotations
import logging
from enum import Enum
from xml.etree.ElementTree import ParseError
from typing import List, Optional

import requests
from plexapi.exceptions import PlexApiException
from plexapi.server import PlexServer

from .errors import PlexConnectionError

logger = logging.getLogger(__name__)

# Errors a Plex round trip can end with: API-level (401, 404), unparseable XML, or transport.
PLEX_ERRORS = (PlexApiException, ParseError, requests.exceptions.RequestException)


class LibraryKind(Enum):
    MOVIE = "movie"
    TV = "show"
    MUSIC = "artist"
    OTHER = "other"


def connect(host: str, token: str, timeout: Optional[int] = None) -> PlexServer:
    """
    Open an authenticated handle to the Plex server at `host`.
    `timeout=None` leaves plexapi's own default in place for every later call.
    """
    try:
        plex = PlexServer(host, token, timeout=timeout)
    except PLEX_ERRORS as e:
        raise PlexConnectionError(f"Could not connect to Plex at {host}: {e}") from e
    logger.info("Connected to Plex server '%s' (%s)", plex.friendlyName, host)
    return plex


def listLibraries(plex: PlexServer) -> List:
    # Server order is the report order; do not sort.
    return plex.library.sections()


def libraryKind(section) -> LibraryKind:
    try:
        return LibraryKind(getattr(section, "type", None))
    except ValueError:
        return LibraryKind.OTHER
