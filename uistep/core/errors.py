"""Core — failure taxonomy and call-site capture."""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from uistep.core.types import AnnotatedElement, AnnotatedQuery
    from uistep.query.predicates import Predicate


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"

    @classmethod
    def capture(cls, depth: int = 0) -> SourceLocation:
        """Location of the caller of ``capture``, or of the frame ``depth`` levels above it."""
        frame = inspect.currentframe()
        try:
            target = frame.f_back if frame is not None else None
            for _ in range(depth):
                if target is None or target.f_back is None:
                    break
                target = target.f_back
            if target is None:
                return cls(file="<unknown>", line=0)
            return cls(file=os.path.abspath(target.f_code.co_filename), line=target.f_lineno)
        finally:
            del frame


def call_site(location: SourceLocation | None) -> SourceLocation:
    """Return ``location`` or the location of whoever called the public API method.

    Must be called directly from the public method, never through a helper.
    """
    if location is not None:
        return location
    return SourceLocation.capture(depth=2)


# ---------------------------------------------------------------------------
# Causes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ElementDoesNotExist:
    element: AnnotatedElement

    @property
    def message(self) -> str:
        from uistep.core.types import Keyboard

        if isinstance(self.element.kind, Keyboard):
            return (
                "⌨️ Input surface not shown, cannot type!\n"
                f"   * {self.element.kind.description}"
            )
        return (
            f"👻 {self.element.element!r} doesn't exist, are you sure it's on screen?\n"
            f"   * Element: {self.element.element!r}\n"
            f"   * Query: {self.element.kind.description}\n"
            "\n"
            "   * Try:\n"
            "      - Adding a `.wait()` call before trying to interact with the element\n"
            "      - Loosening your predicate. Try a `containing()` variant if not using one already."
        )


@dataclass(frozen=True)
class TimedOutWaitingForElement:
    element: AnnotatedElement
    predicate: Predicate | None = None

    @property
    def message(self) -> str:
        if self.predicate is None:
            return (
                f"⏰ Timed out waiting for {self.element.element!r} to exist!\n"
                f"    * Query: {self.element.kind.description}"
            )
        return (
            f"⏰ Timed out waiting for {self.element.element!r}!\n"
            f"    * Query: {self.element.kind.description}\n"
            f"    * Predicate: {self.predicate.format}"
        )


@dataclass(frozen=True)
class TimedOutWaitingForQuery:
    query: AnnotatedQuery

    @property
    def message(self) -> str:
        return (
            f"⏰ Timed out waiting for {self.query.kind.description}!\n"
            "    * Try:\n"
            "       - Increasing the timeout\n"
            "       - Loosening your query. Could you use a `containing()` variant?"
        )


@dataclass(frozen=True)
class TimedOutWaitingForQueryWithPredicate:
    query: AnnotatedQuery
    predicate: Predicate

    @property
    def message(self) -> str:
        return (
            f"⏰ Timed out waiting for {self.query.kind.description}!\n"
            f"    * Predicate: {self.predicate.format}"
        )


@dataclass(frozen=True)
class NoElementsMatchingQuery:
    query: AnnotatedQuery

    @property
    def message(self) -> str:
        return (
            "🔍 No element found matching query.\n"
            f"    * Query: {self.query.kind.description}\n"
            "\n"
            "    * Try:\n"
            "       - Adding a `.wait()` before narrowing to a single element\n"
            "       - Loosening your query. Could you use a `containing()` variant?"
        )


@dataclass(frozen=True)
class AmbiguousMatch:
    query: AnnotatedQuery
    count: int

    @property
    def message(self) -> str:
        return (
            f"🔍 Expected exactly one element, found {self.count}.\n"
            f"    * Query: {self.query.kind.description}\n"
            "\n"
            "    * Try:\n"
            "       - Tightening your query, e.g. `matching_exactly()` or `matching_identifier()`\n"
            "       - Using `first()` or `bound_by()` if any of the matches will do"
        )


@dataclass(frozen=True)
class AssertionFailed:
    detail: str = ""

    @property
    def message(self) -> str:
        if self.detail:
            return f"❌ Assertion failed: {self.detail}"
        return "❌ Assertion failed."


ErrorCause = Union[
    ElementDoesNotExist,
    TimedOutWaitingForElement,
    TimedOutWaitingForQuery,
    TimedOutWaitingForQueryWithPredicate,
    NoElementsMatchingQuery,
    AmbiguousMatch,
    AssertionFailed,
]


class StepError(Exception):
    """A typed step failure attributed to the call site that built the step."""

    def __init__(self, cause: ErrorCause, location: SourceLocation) -> None:
        super().__init__(cause.message)
        self.cause = cause
        self.location = location

    @property
    def file(self) -> str:
        return self.location.file

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def description(self) -> str:
        return self.cause.message

    def render(self) -> str:
        return f"{self.location}\n{self.cause.message}"

    def __repr__(self) -> str:
        return f"StepError({type(self.cause).__name__}, {self.location})"
