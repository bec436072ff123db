"""
Logging configuration for the Skills Hub service.

``setup_logging`` installs a console handler (and optionally a file
handler) on the root logger the first time it is called.  Store
mutations and query failures are logged by the service layer through
module-level loggers, so configuring the root logger is enough to see
them.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> bool:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  Parent directories are
        created when missing.

    Returns
    -------
    bool
        ``True`` if handlers were installed, ``False`` if the root
        logger was already configured and left untouched.
    """
    root = logging.getLogger()
    if root.handlers:
        # create_app may run several times in one process (tests).
        return False

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    return True
