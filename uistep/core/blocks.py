"""Core — sequential block composition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from uistep.core.result import Err, Ok, Result
from uistep.core.step import Step

if TYPE_CHECKING:
    from uistep.drivers.base import Driver

S = TypeVar("S", bound=Step[Any])


def steps(*components: Step[Any]) -> Step[None]:
    """
    Run ``components`` strictly in order against the same driver.

    Results are discarded. The first failure stops the block and becomes its
    failure; an empty block succeeds.
    """
    captured = tuple(components)

    def run(driver: Driver) -> Result[None]:
        for component in captured:
            result = component.run(driver)
            if isinstance(result, Err):
                return result
        return Ok(None)

    return Step(run)


def screen_steps(screen: type[S], *components: Step[Any]) -> S:
    """A block that finishes on ``screen``."""
    return steps(*components).haunt(screen)


# Readable grouping for Given/When/Then style scenarios.
def given(*components: Step[Any]) -> Step[None]:
    return steps(*components)


def when(*components: Step[Any]) -> Step[None]:
    return steps(*components)


def then(*components: Step[Any]) -> Step[None]:
    return steps(*components)
