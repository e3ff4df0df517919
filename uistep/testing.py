"""pytest glue: report a failing step as a test failure at its call site.

Imports pytest, so it needs the ``test`` extra (``pip install uistep[test]``).
The top-level ``uistep`` package does not import this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from uistep.runner import StepRun, execute

if TYPE_CHECKING:
    from uistep.core.step import Step
    from uistep.drivers.base import Driver


def run_step(driver: Driver, step: Step[Any]) -> StepRun:
    """
    Run ``step`` and fail the current test if it fails.

    The failure message leads with the ``file:line`` of the call that built
    the failing step, followed by the diagnostic.
    """
    outcome = execute(driver, step)
    if not outcome.success:
        pytest.fail(outcome.message or "step failed", pytrace=False)
    return outcome
