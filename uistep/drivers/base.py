"""Driver boundary: what the step core needs from a UI-automation backend."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from uistep.core.types import ElementCategory, SwipeDirection
from uistep.query.predicates import Predicate


@runtime_checkable
class ElementHandle(Protocol):
    """A single (possibly absent) on-screen element."""

    def exists(self) -> bool: ...

    def wait_for_existence(self, timeout: float) -> bool: ...

    def value_for(self, key: str) -> Any: ...

    def tap(self) -> None: ...

    def double_tap(self) -> None: ...

    def long_press(self, duration: float) -> None: ...

    def swipe(self, direction: SwipeDirection, velocity: float | None = None) -> None: ...

    def drag_to(self, other: ElementHandle, press_duration: float) -> None: ...

    def type_text(self, text: str) -> None: ...


@runtime_checkable
class QueryHandle(Protocol):
    """A live query; every call re-resolves against the current screen."""

    def count(self) -> int: ...

    def first(self) -> ElementHandle: ...

    def element_bound_by(self, index: int) -> ElementHandle: ...

    def element_matching(self, text: str) -> ElementHandle: ...

    def matching(self, predicate: Predicate) -> QueryHandle: ...

    def matching_identifier(self, identifier: str) -> QueryHandle: ...

    def value_for(self, key: str) -> Any: ...


@runtime_checkable
class Driver(Protocol):
    """Root automation handle. Owned by the caller; steps only read through it."""

    def query(self, *categories: ElementCategory) -> QueryHandle: ...

    def keyboard(self) -> ElementHandle: ...

    def root(self) -> ElementHandle: ...
