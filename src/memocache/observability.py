"""Logging setup for applications embedding the cache.

The cache logs through the standard :mod:`logging` package. This module
registers a ``NOTICE`` level between INFO and WARNING, used for bulk
operations such as clearing or grooming, and offers an opt-in
``setup_logging`` helper. The library itself never configures handlers.
"""

from __future__ import annotations

import logging
from typing import Optional

from memocache.config import log_level_from_env

NOTICE = 25

logging.addLevelName(NOTICE, "NOTICE")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure application logging.

    Parameters
    ----------
    level: str, optional
        Logging level name (e.g., "DEBUG", "NOTICE", "INFO"). Defaults to
        the ``MEMOCACHE_LOG_LEVEL`` environment variable, then "INFO".
    """
    name = (level or log_level_from_env()).upper()
    numeric_level = logging.getLevelName(name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(
        level=numeric_level,
        format=("%(asctime)s %(levelname)s %(name)s - %(message)s"),
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
