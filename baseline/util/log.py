"""Debug logging helpers."""

from __future__ import annotations

import logging
import os

from ..constants import DEBUG_ENV

LOGGER = logging.getLogger("baseline")


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get(DEBUG_ENV, "").strip() == "1"


def debug_log(message: str, *args: object) -> None:
    """Emit debug logs in debug mode only."""
    if debug_enabled():
        LOGGER.debug(message, *args)
