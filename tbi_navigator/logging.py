"""Logging helpers for host applications embedding the navigator."""
from __future__ import annotations

import logging
from typing import Optional

from .config import get_settings, normalise_level


def setup_logging(level: Optional[int | str] = None) -> None:
    """Configure global logging handlers.

    *level* defaults to ``TBI_NAVIGATOR_LOG_LEVEL``.
    """

    settings = get_settings()
    if level is None:
        level = settings.log_level_number
    elif isinstance(level, str):
        level = logging.getLevelName(normalise_level(level))
    logging.basicConfig(level=level, format=settings.log_format)
    logging.getLogger("tbi_navigator").setLevel(level)
