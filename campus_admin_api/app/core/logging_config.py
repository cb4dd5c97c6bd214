"""
Logging configuration for the Campus Admin API.

``setup_logging`` attaches a console handler (and a file handler when
``LOG_FILE`` is set) to the root logger, once.  The level from
``LOG_LEVEL`` applies to the ``campus_admin_api`` loggers.  The HTTP
stack underneath the record client (``urllib3``, ``requests``) is held
at ``WARNING`` unless the project itself runs at ``DEBUG``, so a busy
remote backend does not drown the service log in connection chatter.

Services log every mutation at ``INFO``, tolerated dangling references
at ``WARNING`` and record API failures at ``ERROR``.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PROJECT_LOGGER = "campus_admin_api"
QUIET_LOGGERS = ("urllib3", "requests")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root and project loggers.

    Parameters
    ----------
    level : str
        Level name for the project loggers (e.g. ``"DEBUG"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of an extra log file.  If omitted or empty, only the
        console handler is added.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(PROJECT_LOGGER).setLevel(numeric_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by pytest or a repeated ``create_app``.
        return
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
