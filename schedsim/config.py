from __future__ import annotations

import logging
import os
from typing import Optional

from rich.logging import RichHandler

DEFAULT_QUANTUM = 2
MAX_QUANTUM = 100

DEFAULT_COMPARE_ALGORITHMS = ["fcfs", "sjf", "rr", "srtf", "priority", "priority-p"]

LOG_LEVEL_ENV = "SCHEDSIM_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Route the package's log records through a RichHandler.

    The level comes from the argument, then SCHEDSIM_LOG_LEVEL, then the
    default.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=level_name,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
