"""Root logger setup for preview-fit commands.

Logs go to stderr, and optionally to a size-capped file, so that stdout
carries nothing but command output.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MAX_BYTES = 500 * 1024
LOG_FILE_BACKUP_COUNT = 2


def coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        name = level.upper()
        if not isinstance(getattr(logging, name, None), int):
            raise ValueError(f"Unknown log level '{level}'")
        return getattr(logging, name)
    return int(level)


def _file_handler(log_file: Union[str, Path]) -> logging.Handler:
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )


def configure_logging(
    log_level: Union[int, str],
    log_file: Optional[Union[str, Path]] = None,
    *,
    quiet_loggers: Iterable[str] = (),
) -> None:
    """Replace the root handlers with stderr and, if given, ``log_file``.

    ``log_level`` and ``log_file`` are the ``preview.log_level`` and
    ``preview.log_file`` settings; ``quiet_loggers`` are raised to ERROR.
    """

    level = coerce_level(log_level)
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(_file_handler(log_file))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.ERROR)


__all__ = ["configure_logging", "coerce_level", "LOG_FORMAT", "LOG_DATEFMT"]
