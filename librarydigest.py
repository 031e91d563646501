# librarydigest.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from digest import configFunctions, discordFunctions, plexFunctions
from digest.errors import (
    ConfigError,
    DeliveryError,
    DigestError,
    PlexConnectionError,
    TraversalError,
)
from digest.library_summary import summarize_libraries
from digest.log_summary import log_run_summary
from digest.report import build_report
from digest.snapshot import SnapshotLog


CONFIG_FILE = os.getenv("LIBRARYDIGEST_CONFIG", "./config/config.yml")
LOG_FILE = os.getenv("LIBRARYDIGEST_LOG", "")

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_CONNECTION = 3
EXIT_TRAVERSAL = 4
EXIT_DELIVERY = 5

EXIT_CODES = {
    ConfigError: EXIT_CONFIG,
    PlexConnectionError: EXIT_CONNECTION,
    TraversalError: EXIT_TRAVERSAL,
    DeliveryError: EXIT_DELIVERY,
}


# ----- logging -----
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _setup_logging(verbose: bool, log_file: str) -> Optional[logging.FileHandler]:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    root = logging.getLogger()
    # basicConfig leaves level and handlers alone once the root logger has handlers
    root.setLevel(level)

    fileHandler = None
    if log_file:
        fileHandler = logging.FileHandler(log_file)
        fileHandler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(fileHandler)

    # plexapi and urllib3 are chatty at DEBUG
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
    return fileHandler


# ========= Orchestration =========

def runDigest(configFile: str, dryrun: bool = False) -> int:
    config = configFunctions.loadConfig(configFile)
    logging.info("Configuration file loaded successfully")

    plex = plexFunctions.connect(config.host, config.token)

    snapshot = SnapshotLog()
    summaries = summarize_libraries(plex, snapshot)
    log_run_summary(snapshot)

    report = build_report(summaries)

    if dryrun:
        logging.info("DRY-RUN: would post %d line(s) to webhook as '%s'", len(summaries), config.username)
        print(report, end="")
        return EXIT_OK

    resp = discordFunctions.sendReport(config.webhook, report, config.username)
    print(f"{resp.status_code} {resp.reason}")
    return EXIT_OK


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Post a Plex library digest to a chat webhook")
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to config.yml (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--dry-run", action="store_true", dest="dryrun", help="Print the digest instead of posting it")
    parser.add_argument("--log-file", default=LOG_FILE, help="Also write the log to this file")

    args = parser.parse_args(argv)
    fileHandler = _setup_logging(args.verbose, args.log_file)
    logging.info("CLI parsed: config=%s, dryrun=%s", args.config, args.dryrun)

    try:
        return runDigest(args.config, dryrun=args.dryrun)
    except DigestError as e:
        logging.error("Digest run failed during %s: %s", e.stage, e)
        return EXIT_CODES.get(type(e), 1)
    finally:
        if fileHandler is not None:
            logging.getLogger().removeHandler(fileHandler)
            fileHandler.close()


if __name__ == "__main__":
    sys.exit(main())
