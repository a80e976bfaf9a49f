"""
Logging setup for the registry.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger using a single shared format.  Handlers
installed here are tagged so that calling the function again, for
example when several applications are built in one test session, only
adjusts the level instead of duplicating output.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO.
NOISY_LOGGERS = ("urllib3", "httpx", "uvicorn.access")

_HANDLER_TAG = "_exhibition_registry_handler"


def _resolve_level(level: str) -> int:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def _tagged(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Unknown
        names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file to mirror log records to.  Resolved relative to
        the current working directory.
    quiet : Iterable[str]
        Logger names raised to ``WARNING`` unless ``level`` is ``DEBUG``.
    """
    numeric_level = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    if numeric_level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)

    if any(getattr(handler, _HANDLER_TAG, False) for handler in root.handlers):
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.addHandler(_tagged(logging.StreamHandler(), formatter))

    if logfile:
        log_path = Path(logfile).resolve()
        root.addHandler(_tagged(logging.FileHandler(log_path, encoding="utf-8"), formatter))
