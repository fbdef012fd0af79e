import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"


def configure_logging(level: Optional[int] = None) -> None:
    """Configure the root logger with a single stdout handler.

    Respects SIGDUNGEON_LOG_LEVEL when no explicit level is given.
    """
    if level is None:
        level = logging.INFO
        level_name = os.getenv("SIGDUNGEON_LOG_LEVEL")
        if level_name:
            level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates in repeated test runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
