# txn_summary/utilities/config_logging.py
from __future__ import annotations

import copy
import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

LOGGING: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s "
            "[%(process)d:%(threadName)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "simple",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "verbose",
            "filename": "logs/txn_summary.log",
            "maxBytes": 5_000_000,
            "backupCount": 5,
            "encoding": "utf-8",
        },
    },
    "loggers": {
        "txn_summary": {
            "level": "DEBUG",
            "handlers": ["console", "file"],
            "propagate": False,
        },
    },
}


def configure_logging(
    log_dir: Optional[Path] = None, level: int | str = logging.INFO
) -> Dict[str, Any]:
    """
    Apply `LOGGING` via dictConfig and return the effective config.

    • log_dir=None  → console only (no file handler)
    • log_dir=Path  → rotating file at <log_dir>/txn_summary.log (dir created)

    `level` sets the console handler threshold; the file handler keeps DEBUG.
    """
    config = copy.deepcopy(LOGGING)
    config["handlers"]["console"]["level"] = level
    if log_dir is None:
        del config["handlers"]["file"]
        config["loggers"]["txn_summary"]["handlers"] = ["console"]
    else:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"]["filename"] = str(log_dir / "txn_summary.log")
    logging.config.dictConfig(config)
    return config
