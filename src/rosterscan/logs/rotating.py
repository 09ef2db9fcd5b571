from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from rosterscan.fs.exports import data_home

LOG_NAME = "rosterscan.log"


def log_path() -> Path:
    return data_home() / "logs" / LOG_NAME


def get_logger(name: str = "rosterscan") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    target = log_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target, maxBytes=1_500_000, backupCount=5, encoding="utf-8"
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
