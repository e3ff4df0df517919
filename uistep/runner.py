"""Runs a composed step against a live driver and reports the outcome."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from uistep.core.errors import StepError
from uistep.core.result import Err
from uistep.core.step import Step

if TYPE_CHECKING:
    from uistep.drivers.base import Driver

logger = logging.getLogger(__name__)


@dataclass
class StepRun:
    success: bool
    error: StepError | None = None
    latency_ms: float = 0.0

    @property
    def message(self) -> str | None:
        """Rendered diagnostic, ready for a test framework's failure reporter."""
        return self.error.render() if self.error is not None else None

    @property
    def file(self) -> str | None:
        return self.error.file if self.error is not None else None

    @property
    def line(self) -> int | None:
        return self.error.line if self.error is not None else None


def execute(driver: Driver, step: Step[Any]) -> StepRun:
    """
    Run ``step`` to completion or first failure.

    Step failures are returned; exceptions raised by the driver itself
    propagate to the caller.
    """
    start = time.monotonic()
    result = step.run(driver)
    latency = (time.monotonic() - start) * 1000

    if isinstance(result, Err):
        logger.info(
            "step failed after %.1fms at %s: %s",
            latency,
            result.error.location,
            type(result.error.cause).__name__,
        )
        return StepRun(success=False, error=result.error, latency_ms=latency)

    logger.info("step succeeded in %.1fms", latency)
    return StepRun(success=True, latency_ms=latency)
