"""
Logging configuration for the API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called.  Debug mode
forces the ``DEBUG`` level and adds the source location to every
record; otherwise the configured level is used and the chatty
per-request access log of uvicorn is limited to warnings.
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.  Ignored when
        ``debug`` is set.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.
    debug : bool
        Log everything, with file and line of the call site.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    if debug:
        numeric_level = logging.DEBUG
    else:
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt=DEBUG_FORMAT if debug else DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
