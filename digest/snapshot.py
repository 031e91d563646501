# digest/snapshot.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class LibraryEvent:
    title: Optional[str] = None
    kind: Optional[str] = None
    summarized: bool = False
    counts: Dict[str, int] = field(default_factory=dict)
    skipped_reason: Optional[str] = None  # e.g. "unsupported_kind"


@dataclass
class SnapshotLog:
    """What happened to each library during one run. Operator log only."""
    events: List[LibraryEvent] = field(default_factory=list)

    def add(self, **kwargs) -> None:
        self.events.append(LibraryEvent(**kwargs))

    def summary(self) -> Dict[str, int]:
        s = {
            "libraries": 0,
            "summarized": 0,
            "skipped": 0,
        }
        for e in self.events:
            s["libraries"] += 1
            if e.skipped_reason:
                s["skipped"] += 1
            elif e.summarized:
                s["summarized"] += 1
        return s

    def skipped(self) -> List[LibraryEvent]:
        return [e for e in self.events if e.skipped_reason]
