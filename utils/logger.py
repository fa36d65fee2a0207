"""Logging setup shared by the CLI and the GUI."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

PLAIN_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
JSON_FORMAT = "{\"time\": \"%(asctime)s\", \"level\": \"%(levelname)s\", \"message\": \"%(message)s\"}"

logger = logging.getLogger("edit_chunks")


def setup_logger(
    logfile: Optional[str] = None,
    *,
    structured: bool = False,
    verbose: bool = False,
) -> logging.Logger:
    """Configure root logger for diagnostic (stderr) and optional file output.

    Parameters
    ----------
    logfile:
        Optional destination file for log messages.
    structured:
        If ``True`` use JSON formatted records.
    verbose:
        If ``True`` log at DEBUG level instead of INFO.
    """
    fmt = JSON_FORMAT if structured else PLAIN_FORMAT
    handlers = [logging.StreamHandler(sys.stderr)]
    if logfile:
        handlers.append(RotatingFileHandler(logfile, maxBytes=500000, backupCount=3, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=fmt,
        handlers=handlers,
        force=True,
    )
    return logger
