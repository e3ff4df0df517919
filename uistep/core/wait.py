"""Core — bounded polling."""

from __future__ import annotations

import logging
import time
from typing import Callable

from uistep.core.config import get_settings

logger = logging.getLogger(__name__)


def resolve_timeout(timeout: float | None) -> float:
    return get_settings().default_timeout if timeout is None else timeout


def poll_until(
    condition: Callable[[], bool],
    timeout: float | None = None,
    interval: float | None = None,
) -> bool:
    """
    Poll ``condition`` until it holds or ``timeout`` seconds elapse.

    The condition is always checked at least once, and once more at the
    deadline, so a zero timeout degrades to a single immediate check.
    Returns whether the condition held.
    """
    timeout = resolve_timeout(timeout)
    interval = get_settings().poll_interval if interval is None else interval
    deadline = time.monotonic() + timeout
    polls = 0

    while True:
        polls += 1
        if condition():
            logger.debug("condition met after %d poll(s)", polls)
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug("condition not met within %.2fs (%d poll(s))", timeout, polls)
            return False
        time.sleep(min(interval, remaining))
