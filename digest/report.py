from __future__ import annotations
from typing import Iterable

from .library_summary import LibraryKind, LibrarySummary


def format_summary_line(summary: LibrarySummary) -> str:
    c = summary.counts
    if summary.kind is LibraryKind.MOVIE:
        return f"{summary.title}: {c['movies']} movies"
    if summary.kind is LibraryKind.TV:
        return f"{summary.title}: {c['shows']} shows"
    if summary.kind is LibraryKind.MUSIC:
        return f"{summary.title}: {c['albums']} albums, {c['tracks']} tracks"
    raise ValueError(f"No report line for library kind {summary.kind!r}")


def build_report(summaries: Iterable[LibrarySummary]) -> str:
    """One newline-terminated line per summary, in the given order. No summaries -> ""."""
    return "".join(format_summary_line(s) + "\n" for s in summaries)
