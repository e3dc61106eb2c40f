from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FILE = "mkprivacy.log"


def _file_handlers(logger: logging.Logger) -> list[RotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def setup_logging(log_dir: str = "logs", level: str = "INFO") -> logging.Logger:
    """
    Configure the "mkprivacy" logger. Safe to call again: the level is
    updated, and the file handler is moved only when `log_dir` changes.
    """
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger("mkprivacy")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    logger.propagate = False

    path = os.path.abspath(os.path.join(log_dir, LOG_FILE))
    current = _file_handlers(logger)
    if not any(h.baseFilename == path for h in current):
        for old in current:
            logger.removeHandler(old)
            old.close()
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(fh)

    # Console gets warnings only; stdout belongs to command output.
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        sh.setLevel(logging.WARNING)
        logger.addHandler(sh)

    return logger
