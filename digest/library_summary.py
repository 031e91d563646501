# digest/library_summary.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import TraversalError
from .plexFunctions import PLEX_ERRORS, LibraryKind, libraryKind, listLibraries
from .snapshot import SnapshotLog

logger = logging.getLogger(__name__)

__all__ = ["LibraryKind", "LibrarySummary", "summarize_library", "summarize_libraries"]


@dataclass(frozen=True)
class LibrarySummary:
    title: str
    kind: LibraryKind
    counts: Dict[str, int] = field(default_factory=dict)


def _count_music(section) -> Dict[str, int]:
    """
    Walk artist -> album -> track. Both totals cover the whole library,
    not a single artist.
    """
    albums = 0
    tracks = 0
    for artist in section.searchArtists():
        artist_albums = artist.albums()
        albums += len(artist_albums)
        for album in artist_albums:
            tracks += len(album.tracks())
        logger.debug("  %s: %d albums so far, %d tracks so far", artist.title, albums, tracks)
    return {"albums": albums, "tracks": tracks}


def summarize_library(section) -> Optional[LibrarySummary]:
    """
    Count one library. Returns None for kinds the digest does not cover
    (photos, home videos...); those are logged and left out of the report.
    Plex errors propagate unchanged.
    """
    kind = libraryKind(section)
    title = section.title

    if kind is LibraryKind.MOVIE:
        counts = {"movies": len(section.all())}
    elif kind is LibraryKind.TV:
        counts = {"shows": len(section.all())}
    elif kind is LibraryKind.MUSIC:
        counts = _count_music(section)
    else:
        logger.info("Skipping library '%s' (type=%s)", title, getattr(section, "type", None))
        return None

    logger.debug("Library '%s' counted: %s", title, counts)
    return LibrarySummary(title=title, kind=kind, counts=counts)


def summarize_libraries(plex, snapshot: Optional[SnapshotLog] = None) -> List[LibrarySummary]:
    """
    Summaries for every supported library on `plex`, in the order the server
    lists them. One request at a time; the first failed request aborts the
    run with TraversalError and nothing partial is returned.
    """
    try:
        sections = listLibraries(plex)
    except PLEX_ERRORS as e:
        raise TraversalError(None, e) from e

    summaries: List[LibrarySummary] = []
    for section in sections:
        try:
            summary = summarize_library(section)
        except PLEX_ERRORS as e:
            raise TraversalError(section.title, e) from e

        if snapshot is not None:
            if summary is None:
                snapshot.add(title=section.title, kind=getattr(section, "type", None),
                             skipped_reason="unsupported_kind")
            else:
                snapshot.add(title=summary.title, kind=summary.kind.value,
                             summarized=True, counts=dict(summary.counts))
        if summary is not None:
            summaries.append(summary)

    return summaries
