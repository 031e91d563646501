from __future__ import annotations
import logging
from .snapshot import SnapshotLog

logger = logging.getLogger(__name__)

def log_run_summary(snapshot: SnapshotLog) -> None:
    s = snapshot.summary()
    logger.info(
        "Run summary: libraries=%d summarized=%d skipped=%d",
        s["libraries"], s["summarized"], s["skipped"]
    )
    for e in snapshot.skipped():
        logger.debug("Skipped library '%s' (type=%s, reason=%s)", e.title, e.kind, e.skipped_reason)
