"""Initiate logging for tabgrid."""

from __future__ import annotations

import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from tabgrid.utils import dict_merge

if TYPE_CHECKING:
    from typing import Any, TextIO

log = logging.getLogger(__name__)

LOG_FORMAT = (
    "{asctime}.{msecs:03.0f} {levelname:<7} [{name}.{funcName}:{lineno}] {message}"
)


def setup_logs(
    level: str = "WARNING",
    stream: TextIO | None = None,
    log_file: str | Path | None = None,
    log_config: dict[str, Any] | None = None,
) -> None:
    """Configure the logger for tabgrid.

    The library never adds handlers by itself; applications which want to see its
    log messages call this function once.

    Args:
        level: The minimum level of messages to show
        stream: The stream messages are written to. Defaults to standard error
        log_file: An optional path of a file which also receives messages
        log_config: Extra :py:func:`logging.config.dictConfig` settings merged into
            the default configuration

    """
    level = level.upper()
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "stream_format": {
                "format": LOG_FORMAT,
                "style": "{",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "stream": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "stream_format",
                "stream": stream or sys.stderr,
            },
        },
        "loggers": {
            "tabgrid": {
                "level": level,
                "handlers": ["stream"],
                "propagate": False,
            },
        },
    }

    # Configure file handler
    if log_file:
        config["handlers"]["file"] = {
            "level": level,
            "class": "logging.FileHandler",
            "filename": str(Path(log_file).expanduser()),
            "formatter": "stream_format",
        }
        config["loggers"]["tabgrid"]["handlers"].append("file")

    # Update the configuration based on the additional config dict provided
    if log_config:
        dict_merge(config, log_config)

    logging.config.dictConfig(config)

    # Capture warnings so they show up in the logs
    logging.captureWarnings(True)
    log.debug("Logging configured at level %s", level)
