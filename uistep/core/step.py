"""Core — the deferred, failable, composable Step type and its combinators."""

from __future__ import annotations

import builtins
import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, Union

from uistep.core.errors import AssertionFailed, ErrorCause, SourceLocation, StepError, call_site
from uistep.core.result import Err, Either, Left, Ok, Result, Right

if TYPE_CHECKING:
    from uistep.drivers.base import Driver

logger = logging.getLogger(__name__)

R = TypeVar("R")
B = TypeVar("B")
S = TypeVar("S", bound="Step[Any]")


class Step(Generic[R]):
    """
    A deferred unit of work from a driver to a result ``R``, or a failure.

    Nothing touches the driver until ``run`` (or calling the step) is given
    one, so steps can be defined, named and reused before any application
    is running. Composition short-circuits on the first failure.

    Usage:
        login = find(TEXT_FIELDS).placeholder_containing("Username").first().tap()
        result = login.run(driver)      # Ok(...) or Err(StepError)
        login(driver)                   # raises StepError on failure
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[Driver], Result[R]]) -> None:
        self._run = run

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def run(self, driver: Driver) -> Result[R]:
        return self._run(driver)

    def __call__(self, driver: Driver) -> R:
        result = self._run(driver)
        if isinstance(result, Err):
            raise result.error
        return result.value

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def always(cls, value: R) -> Step[R]:
        """Constant success; never touches the driver."""
        return Step(lambda _driver: Ok(value))

    @classmethod
    def fail(
        cls,
        error: StepError | ErrorCause,
        location: SourceLocation | None = None,
    ) -> Step[Any]:
        """Constant failure; never touches the driver.

        A bare cause is wrapped into a ``StepError`` attributed to the caller.
        """
        if not isinstance(error, StepError):
            error = StepError(error, call_site(location))
        failure = Err(error)
        return Step(lambda _driver: failure)

    @classmethod
    def from_driver(cls, fn: Callable[[Driver], R]) -> Step[R]:
        """Lift a plain function of the driver into a step.

        A ``StepError`` raised by ``fn`` becomes the step's failure; any other
        exception is a driver fault and propagates.
        """

        def run(driver: Driver) -> Result[R]:
            try:
                return Ok(fn(driver))
            except StepError as exc:
                return Err(exc)

        return Step(run)

    @classmethod
    def debug(cls, fn: Callable[[Driver], Any]) -> Step[Driver]:
        """Start a chain with a side effect on the driver itself."""

        def run(driver: Driver) -> Result[Driver]:
            fn(driver)
            return Ok(driver)

        return Step(run)

    def _rewrap(self: S, run: Callable[[Driver], Result[Any]]) -> S:
        return type(self)(run)

    def _cast(self, cls: type[S]) -> S:
        return cls(self._run)

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def map(self, f: Callable[[R], B]) -> Step[B]:
        def run(driver: Driver) -> Result[B]:
            result = self._run(driver)
            if isinstance(result, Err):
                return result
            return Ok(f(result.value))

        return Step(run)

    def flat_map(self, f: Callable[[R], Step[B]]) -> Step[B]:
        def run(driver: Driver) -> Result[B]:
            result = self._run(driver)
            if isinstance(result, Err):
                return result
            return f(result.value).run(driver)

        return Step(run)

    def zip(self, *others: Step[Any]) -> Step[tuple]:
        """Run the receiver then ``others`` left to right; all must succeed."""
        return zip_n(self, *others)

    def or_else(self, other: Step[B]) -> Step[Either[R, B]]:
        """Fall back to ``other`` if the receiver fails, tagging which side won."""

        def run(driver: Driver) -> Result[Either[R, B]]:
            result = self._run(driver)
            if isinstance(result, Ok):
                return Ok(Left(result.value))
            logger.debug("or_else discarding failure: %r", result.error)
            fallback = other.run(driver)
            if isinstance(fallback, Err):
                return fallback
            return Ok(Right(fallback.value))

        return Step(run)

    def or_else_same(self: S, other: Step[R]) -> S:
        """Like ``or_else`` for alternatives of the same result type."""

        def run(driver: Driver) -> Result[R]:
            result = self._run(driver)
            if isinstance(result, Ok):
                return result
            logger.debug("or_else discarding failure: %r", result.error)
            return other.run(driver)

        return self._rewrap(run)

    def optional(self) -> Step[Union[R, None]]:
        def run(driver: Driver) -> Result[Union[R, None]]:
            result = self._run(driver)
            if isinstance(result, Err):
                return Ok(None)
            return result

        return Step(run)

    def do(self: S, observer: Callable[[R], Any]) -> S:
        """Run ``observer`` on a successful result, passing the result through."""

        def run(driver: Driver) -> Result[R]:
            result = self._run(driver)
            if isinstance(result, Ok):
                observer(result.value)
            return result

        return self._rewrap(run)

    def to_void_step(self) -> Step[None]:
        return self.map(lambda _value: None)

    def then(self, other: Step[Any]) -> Step[None]:
        return self.zip(other).to_void_step()

    def assert_true(self, detail: str = "", location: SourceLocation | None = None) -> Step[R]:
        """Fail with ``AssertionFailed`` unless the result is truthy."""
        loc = call_site(location)
        failure = Err(StepError(AssertionFailed(detail), loc))

        def run(driver: Driver) -> Result[R]:
            result = self._run(driver)
            if isinstance(result, Ok) and not result.value:
                return failure
            return result

        return Step(run)

    def print_result(self: S, prefix: str = "") -> S:
        return self.do(lambda value: print(f"{prefix}{value}"))

    def breakpoint(self: S) -> S:
        """Drop into the debugger once the receiver has succeeded."""
        return self.do(lambda _value: builtins.breakpoint())

    def haunt(self, screen: type[S]) -> S:
        """Discard the result and retag the chain as ``screen``."""
        return screen(self.map(lambda _value: screen)._run)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


def always(value: R) -> Step[R]:
    return Step.always(value)


def fail(error: StepError | ErrorCause, location: SourceLocation | None = None) -> Step[Any]:
    return Step.fail(error, call_site(location))


def zip_n(*steps: Step[Any]) -> Step[tuple]:
    """Run ``steps`` in order against the same driver; stop at the first failure."""

    def run(driver: Driver) -> Result[tuple]:
        values = []
        for step in steps:
            result = step.run(driver)
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(tuple(values))

    return Step(run)
