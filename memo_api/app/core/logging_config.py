"""
Logging setup for the memo API.

``setup_logging`` attaches a console handler, plus a file handler
when ``LOG_FILE`` is set, to the root logger.  Level and file default
to the values in :mod:`memo_api.app.core.config`.  Loggers of the HTTP
client libraries are kept at ``WARNING`` unless the API itself runs at
``DEBUG``, so request chatter does not drown the memo audit lines.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : Optional[str]
        Level name, case insensitive.  Defaults to ``settings.log_level``.
    logfile : Optional[str]
        Log file path.  Defaults to ``settings.log_file``; an empty
        value means console only.  Missing parent directories are
        created.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by uvicorn or pytest.
        return

    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    logfile = settings.log_file if logfile is None else logfile
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
