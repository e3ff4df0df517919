"""Query layer — narrowing queries to elements and interacting with them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Union

from uistep.core.errors import (
    AmbiguousMatch,
    ElementDoesNotExist,
    NoElementsMatchingQuery,
    SourceLocation,
    StepError,
    TimedOutWaitingForElement,
    TimedOutWaitingForQuery,
    TimedOutWaitingForQueryWithPredicate,
    call_site,
)
from uistep.core.result import Ok, Result
from uistep.core.step import Step
from uistep.core.types import (
    AnnotatedElement,
    AnnotatedQuery,
    BoundBy,
    ElementCategory,
    First,
    Keyboard,
    MatchingIdentifier,
    MatchingPredicate,
    MatchingText,
    OnlyElementOf,
    SwipeDirection,
)
from uistep.core.wait import poll_until, resolve_timeout
from uistep.query.predicates import (
    ENABLED,
    Predicate,
    count_at_least,
    label_contains,
    placeholder_contains,
)

if TYPE_CHECKING:
    from uistep.drivers.base import Driver, QueryHandle

logger = logging.getLogger(__name__)


class ElementStep(Step[AnnotatedElement]):
    """Operations on a single candidate element. Every interaction checks existence first."""

    def exists(self, location: SourceLocation | None = None) -> ElementStep:
        """Continue only if the element exists right now; never waits."""
        loc = call_site(location)

        def check(element: AnnotatedElement) -> Step[AnnotatedElement]:
            if element.element.exists():
                return Step.always(element)
            return Step.fail(StepError(ElementDoesNotExist(element), loc))

        return self.flat_map(check)._cast(ElementStep)

    def wait(self, timeout: float | None = None, location: SourceLocation | None = None) -> ElementStep:
        """Wait up to ``timeout`` seconds for the element to exist."""
        loc = call_site(location)

        def check(element: AnnotatedElement) -> Step[AnnotatedElement]:
            seconds = resolve_timeout(timeout)
            logger.debug("waiting %.2fs for %s", seconds, element)
            if element.element.wait_for_existence(seconds):
                return Step.always(element)
            return Step.fail(StepError(TimedOutWaitingForElement(element), loc))

        return self.flat_map(check)._cast(ElementStep)

    def wait_for(
        self,
        predicate: Predicate,
        timeout: float | None = None,
        location: SourceLocation | None = None,
    ) -> ElementStep:
        """Wait up to ``timeout`` seconds for the element to satisfy ``predicate``."""
        loc = call_site(location)

        def check(element: AnnotatedElement) -> Step[AnnotatedElement]:
            logger.debug("waiting for %s on %s", predicate.format, element)
            if poll_until(lambda: predicate.evaluate(element.element), timeout):
                return Step.always(element)
            return Step.fail(StepError(TimedOutWaitingForElement(element, predicate), loc))

        return self.flat_map(check)._cast(ElementStep)

    def wait_to_enable(
        self, timeout: float | None = None, location: SourceLocation | None = None
    ) -> ElementStep:
        """Being enabled implies existence."""
        return self.wait_for(ENABLED, timeout, location=call_site(location))

    def tap(self, location: SourceLocation | None = None) -> ElementStep:
        return self.exists(call_site(location)).do(_gesture("tap", lambda e: e.tap()))

    def double_tap(self, location: SourceLocation | None = None) -> ElementStep:
        return self.exists(call_site(location)).do(_gesture("double tap", lambda e: e.double_tap()))

    def long_press(self, duration: float = 1.0, location: SourceLocation | None = None) -> ElementStep:
        return self.exists(call_site(location)).do(
            _gesture("long press", lambda e: e.long_press(duration))
        )

    def swipe(
        self,
        direction: SwipeDirection,
        velocity: float | None = None,
        location: SourceLocation | None = None,
    ) -> ElementStep:
        return self.exists(call_site(location)).do(
            _gesture(f"swipe {direction.value}", lambda e: e.swipe(direction, velocity))
        )

    def type(self, text: str, location: SourceLocation | None = None) -> ElementStep:
        """
        Type ``text`` into the element.

        Requires the element to exist and an input surface (software keyboard,
        focused editable field) to be shown. Tap the element first to focus it.
        """
        loc = call_site(location)
        checked = (
            self.exists(loc)
            .zip(find_keyboard().exists(loc))
            .map(lambda pair: pair[0])
            ._cast(ElementStep)
        )
        return checked.do(_gesture("type", lambda e: e.type_text(text)))

    def drag(
        self,
        to: ElementStep,
        press_duration: float = 0.2,
        location: SourceLocation | None = None,
    ) -> Step[None]:
        """Press on the receiver, then drag it onto ``to``."""
        loc = call_site(location)

        def perform(pair: tuple) -> None:
            source, target = pair
            logger.debug("drag %s -> %s", source, target)
            source.element.drag_to(target.element, press_duration)

        return self.exists(loc).zip(to.exists(loc)).do(perform).to_void_step()

    def attribute(self, key: str, location: SourceLocation | None = None) -> Step[Any]:
        """The element's live value for ``key`` (``"value"``, ``"label"``, ``"enabled"`` ...)."""
        return self.exists(call_site(location)).map(lambda e: e.element.value_for(key))


def _gesture(name: str, perform: Callable[[Any], None]) -> Callable[[AnnotatedElement], None]:
    def observer(element: AnnotatedElement) -> None:
        logger.debug("%s %s", name, element)
        perform(element.element)

    return observer


class QueryStep(Step[AnnotatedQuery]):
    """Operations on an annotated, not yet narrowed, query."""

    def first(self) -> ElementStep:
        """The first match; does not assert how many there are."""
        return self.map(
            lambda q: AnnotatedElement(kind=First(of=q.kind), element=q.query.first())
        )._cast(ElementStep)

    def bound_by(self, index: int) -> ElementStep:
        return self.map(
            lambda q: AnnotatedElement(
                kind=BoundBy(index, of=q.kind), element=q.query.element_bound_by(index)
            )
        )._cast(ElementStep)

    def only_element(self, location: SourceLocation | None = None) -> ElementStep:
        """Narrow to the single match, failing unless the live count is exactly one."""
        loc = call_site(location)

        def narrow(query: AnnotatedQuery) -> Step[AnnotatedElement]:
            # Count first: extracting from an ambiguous query is not meaningful.
            count = query.query.count()
            if count == 0:
                return Step.fail(StepError(NoElementsMatchingQuery(query), loc))
            if count > 1:
                return Step.fail(StepError(AmbiguousMatch(query, count), loc))
            return Step.always(
                AnnotatedElement(kind=OnlyElementOf(query.kind), element=query.query.first())
            )

        return self.flat_map(narrow)._cast(ElementStep)

    def wait(
        self,
        timeout: float | None = None,
        min_count: int = 1,
        predicate: Predicate | None = None,
        location: SourceLocation | None = None,
    ) -> QueryStep:
        """
        Poll the live query until it matches at least ``min_count`` elements
        (and ``predicate``, when given) within ``timeout`` seconds.
        """
        loc = call_site(location)
        condition: Predicate = count_at_least(min_count)
        if predicate is not None:
            condition = condition & predicate

        def check(query: AnnotatedQuery) -> Step[AnnotatedQuery]:
            logger.debug("waiting for %s on %s", condition.format, query)
            if poll_until(lambda: condition.evaluate(query.query), timeout):
                return Step.always(query)
            if predicate is None:
                return Step.fail(StepError(TimedOutWaitingForQuery(query), loc))
            return Step.fail(
                StepError(TimedOutWaitingForQueryWithPredicate(query, predicate), loc)
            )

        return self.flat_map(check)._cast(QueryStep)

    def count(self) -> Step[int]:
        return self.map(lambda q: q.query.count())


class FindStep(Step["QueryHandle"]):
    """A raw driver query, before it has been annotated."""

    def first(self) -> ElementStep:
        return self.map(lambda q: AnnotatedElement(kind=First(), element=q.first()))._cast(
            ElementStep
        )

    def bound_by(self, index: int) -> ElementStep:
        return self.map(
            lambda q: AnnotatedElement(kind=BoundBy(index), element=q.element_bound_by(index))
        )._cast(ElementStep)

    def matching_exactly(self, text: str, location: SourceLocation | None = None) -> ElementStep:
        """The element whose label or identifier is exactly ``text``; must exist."""
        return (
            self.map(
                lambda q: AnnotatedElement(kind=MatchingText(text), element=q.element_matching(text))
            )
            ._cast(ElementStep)
            .exists(call_site(location))
        )

    def matching(self, predicate: Predicate) -> QueryStep:
        return self.map(
            lambda q: AnnotatedQuery(
                kind=MatchingPredicate(predicate.format), query=q.matching(predicate)
            )
        )._cast(QueryStep)

    def matching_identifier(self, identifier: str) -> QueryStep:
        return self.map(
            lambda q: AnnotatedQuery(
                kind=MatchingIdentifier(identifier), query=q.matching_identifier(identifier)
            )
        )._cast(QueryStep)

    def containing(self, text: str) -> QueryStep:
        """Elements whose label contains ``text``, ignoring case."""
        return self.matching(label_contains(text))

    def placeholder_containing(self, text: str) -> QueryStep:
        """Elements whose placeholder contains ``text``, ignoring case."""
        return self.matching(placeholder_contains(text))


class ScreenGestureStep(Step["Driver"]):
    """Gestures on the whole screen; these cannot fail."""

    def tap(self) -> Step[None]:
        return self.do(lambda driver: driver.root().tap()).to_void_step()

    def double_tap(self) -> Step[None]:
        return self.do(lambda driver: driver.root().double_tap()).to_void_step()

    def swipe(self, direction: SwipeDirection, velocity: float | None = None) -> Step[None]:
        return self.do(lambda driver: driver.root().swipe(direction, velocity)).to_void_step()

    def press(self, duration: float) -> Step[None]:
        return self.do(lambda driver: driver.root().long_press(duration)).to_void_step()


QuerySource = Union[ElementCategory, Callable[["Driver"], "QueryHandle"]]


def find(*source: QuerySource) -> FindStep:
    """
    Describe where to find elements, deferring the lookup until the step runs.

    ``find(BUTTONS)`` queries every button; ``find(NAVIGATION_BARS, BUTTONS)``
    queries buttons inside navigation bars; ``find(fn)`` lets ``fn`` build the
    query from the driver.
    """
    if not source:
        raise ValueError("find() needs at least one element category or a query function")
    if len(source) == 1 and callable(source[0]):
        build = source[0]
    else:
        categories = tuple(ElementCategory(c) for c in source)

        def build(driver: Driver) -> QueryHandle:
            return driver.query(*categories)

    def run(driver: Driver) -> Result[QueryHandle]:
        return Ok(build(driver))

    return FindStep(run)


def find_keyboard() -> ElementStep:
    """The input surface typing requires."""

    def run(driver: Driver) -> Result[AnnotatedElement]:
        return Ok(AnnotatedElement(kind=Keyboard(), element=driver.keyboard()))

    return ElementStep(run)


def screen() -> ScreenGestureStep:
    """Start a chain on the whole screen, for gestures that need no element."""

    def run(driver: Driver) -> Result[Driver]:
        return Ok(driver)

    return ScreenGestureStep(run)
