"""
Logging configuration for the Users API.

``setup_logging`` attaches a console handler, and optionally a file
handler, to the root logger.  It is safe to call repeatedly: once the
root logger has handlers, later calls only adjust levels.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger()
    logger.setLevel(numeric_level)

    # aiosqlite logs every proxied call at DEBUG; keep it quiet unless
    # the application itself runs at DEBUG.
    logging.getLogger("aiosqlite").setLevel(
        logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    )

    if logger.handlers:
        # Tests and repeated ``create_app`` calls must not stack handlers.
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
