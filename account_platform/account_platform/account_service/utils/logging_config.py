"""
Logging setup for the account service: stdout, plus a log file when LOG_DIR is set.
"""
import logging
import os
import sys

from ..config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "account_service.log"


def configure_logging(settings: Settings) -> None:
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if settings.LOG_DIR:
        try:
            os.makedirs(settings.LOG_DIR, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, LOG_FILE_NAME)))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
