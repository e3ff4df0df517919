"""In-memory simulated driver for exercising step chains without a browser."""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from uistep.core.types import ElementCategory, SwipeDirection
from uistep.core.wait import poll_until
from uistep.query.predicates import Predicate

logger = logging.getLogger(__name__)

_EDITABLE = {ElementCategory.TEXT_FIELDS, ElementCategory.SECURE_TEXT_FIELDS}

_ids = itertools.count(1)


@dataclass(eq=False)
class SimElement:
    """A node on the simulated screen."""

    category: ElementCategory
    label: str = ""
    identifier: str = ""
    placeholder: str = ""
    value: str = ""
    enabled: bool = True
    visible: bool = True
    appears_at: float | None = None  # time.monotonic() after which it exists
    children: list[SimElement] = field(default_factory=list)
    on_tap: Callable[[SimDriver], None] | None = None
    ref: int = field(default_factory=lambda: next(_ids))

    @property
    def editable(self) -> bool:
        return self.category in _EDITABLE and self.enabled

    def is_present(self) -> bool:
        if not self.visible:
            return False
        return self.appears_at is None or time.monotonic() >= self.appears_at

    def present_descendants(self) -> Iterator[SimElement]:
        for child in self.children:
            if child.is_present():
                yield child
                yield from child.present_descendants()

    def value_for(self, key: str) -> Any:
        if key == "exists":
            return self.is_present()
        if key == "category":
            return self.category.value
        return getattr(self, key, None)

    def __repr__(self) -> str:
        name = self.label or self.identifier or self.placeholder or f"#{self.ref}"
        return f"{self.category.value}[{name!r}]"


class SimDriver:
    """
    A screen of ``SimElement`` trees plus a log of every gesture performed.

    Tapping an editable element focuses it and tapping anything else drops
    focus. Text only goes into the focused element. The software keyboard is
    shown while an editable element has focus (unless ``software_keyboard``
    is off, the equivalent of a connected hardware keyboard).
    """

    def __init__(self, *elements: SimElement, software_keyboard: bool = True) -> None:
        self.elements: list[SimElement] = list(elements)
        self.software_keyboard = software_keyboard
        self.focused: SimElement | None = None
        self.gestures: list[tuple[str, str]] = []

    # ------------------------------------------------------------------
    # Screen management
    # ------------------------------------------------------------------

    def add(self, *elements: SimElement) -> None:
        self.elements.extend(elements)

    def remove(self, element: SimElement) -> None:
        self.elements = [e for e in self.elements if e is not element]
        if self.focused is element:
            self.focused = None

    def show_later(self, element: SimElement, delay: float) -> SimElement:
        """Put ``element`` on screen ``delay`` seconds from now."""
        element.appears_at = time.monotonic() + delay
        self.add(element)
        return element

    def present(self) -> list[SimElement]:
        found: list[SimElement] = []
        for root in self.elements:
            if root.is_present():
                found.append(root)
                found.extend(root.present_descendants())
        return found

    @property
    def keyboard_shown(self) -> bool:
        return (
            self.software_keyboard
            and self.focused is not None
            and self.focused.editable
            and self.focused.is_present()
        )

    def record(self, gesture: str, target: Any) -> None:
        logger.debug("sim %s on %r", gesture, target)
        self.gestures.append((gesture, repr(target)))

    # ------------------------------------------------------------------
    # Driver protocol
    # ------------------------------------------------------------------

    def query(self, *categories: ElementCategory) -> SimQuery:
        return SimQuery(self, tuple(categories))

    def keyboard(self) -> SimKeyboard:
        return SimKeyboard(self)

    def root(self) -> SimScreen:
        return SimScreen(self)


class SimQuery:
    """Live query: every call re-resolves against the current screen."""

    def __init__(
        self,
        driver: SimDriver,
        categories: tuple[ElementCategory, ...],
        filters: tuple[Callable[[SimElement], bool], ...] = (),
    ) -> None:
        self._driver = driver
        self._categories = categories
        self._filters = filters

    def resolve(self) -> list[SimElement]:
        candidates = [e for e in self._driver.present() if _is(e, self._categories[0])]
        for category in self._categories[1:]:
            nested: list[SimElement] = []
            for parent in candidates:
                nested.extend(c for c in parent.present_descendants() if _is(c, category))
            candidates = nested
        return [e for e in candidates if all(f(e) for f in self._filters)]

    def _refine(self, keep: Callable[[SimElement], bool]) -> SimQuery:
        return SimQuery(self._driver, self._categories, self._filters + (keep,))

    def count(self) -> int:
        return len(self.resolve())

    def first(self) -> SimElementHandle:
        return SimElementHandle(self._driver, self, 0)

    def element_bound_by(self, index: int) -> SimElementHandle:
        return SimElementHandle(self._driver, self, index)

    def element_matching(self, text: str) -> SimElementHandle:
        return self._refine(lambda e: e.label == text or e.identifier == text).first()

    def matching(self, predicate: Predicate) -> SimQuery:
        return self._refine(lambda e: predicate.evaluate(e))

    def matching_identifier(self, identifier: str) -> SimQuery:
        return self._refine(lambda e: e.identifier == identifier)

    def value_for(self, key: str) -> Any:
        if key == "count":
            return self.count()
        return None

    def __repr__(self) -> str:
        path = ".".join(c.value for c in self._categories)
        return f"SimQuery({path}, filters={len(self._filters)})"


def _is(element: SimElement, category: ElementCategory) -> bool:
    return category is ElementCategory.ANY or element.category is category


class SimElementHandle:
    """A lazily resolved element: the ``index``-th live match of a query."""

    def __init__(self, driver: SimDriver, query: SimQuery, index: int) -> None:
        self._driver = driver
        self._query = query
        self._index = index

    def resolve(self) -> SimElement | None:
        matches = self._query.resolve()
        if 0 <= self._index < len(matches):
            return matches[self._index]
        return None

    def _require(self) -> SimElement:
        element = self.resolve()
        if element is None:
            raise LookupError(f"{self!r} is not on screen")
        return element

    def exists(self) -> bool:
        return self.resolve() is not None

    def wait_for_existence(self, timeout: float) -> bool:
        return poll_until(self.exists, timeout)

    def value_for(self, key: str) -> Any:
        element = self.resolve()
        if element is None:
            return False if key == "exists" else None
        return element.value_for(key)

    def tap(self) -> None:
        element = self._require()
        self._driver.record("tap", element)
        self._driver.focused = element if element.editable else None
        if element.on_tap is not None:
            element.on_tap(self._driver)

    def double_tap(self) -> None:
        self._driver.record("double_tap", self._require())

    def long_press(self, duration: float) -> None:
        self._driver.record(f"long_press:{duration}", self._require())

    def swipe(self, direction: SwipeDirection, velocity: float | None = None) -> None:
        self._driver.record(f"swipe:{direction.value}", self._require())

    def drag_to(self, other: Any, press_duration: float) -> None:
        source = self._require()
        target = other.resolve() if isinstance(other, SimElementHandle) else other
        self._driver.record(f"drag_to:{target!r}", source)

    def type_text(self, text: str) -> None:
        element = self._require()
        if not element.editable:
            raise RuntimeError(f"{element!r} does not accept text")
        if self._driver.focused is not element:
            raise RuntimeError(f"{element!r} does not have focus")
        self._driver.record(f"type:{text}", element)
        element.value += text

    def __repr__(self) -> str:
        return f"{self._query!r}[{self._index}]"


class _SimSurface:
    """Something gestures can target that is not a queried element."""

    def __init__(self, driver: SimDriver) -> None:
        self._driver = driver

    def exists(self) -> bool:
        return True

    def wait_for_existence(self, timeout: float) -> bool:
        return poll_until(self.exists, timeout)

    def value_for(self, key: str) -> Any:
        return self.exists() if key == "exists" else None

    def tap(self) -> None:
        self._driver.record("tap", self)

    def double_tap(self) -> None:
        self._driver.record("double_tap", self)

    def long_press(self, duration: float) -> None:
        self._driver.record(f"long_press:{duration}", self)

    def swipe(self, direction: SwipeDirection, velocity: float | None = None) -> None:
        self._driver.record(f"swipe:{direction.value}", self)

    def drag_to(self, other: Any, press_duration: float) -> None:
        self._driver.record(f"drag_to:{other!r}", self)

    def type_text(self, text: str) -> None:
        raise RuntimeError(f"{self!r} does not accept text")


class SimKeyboard(_SimSurface):
    """The software keyboard; typing goes to the focused element."""

    def exists(self) -> bool:
        return self._driver.keyboard_shown

    def type_text(self, text: str) -> None:
        focused = self._driver.focused
        if focused is None or not self.exists():
            raise RuntimeError("keyboard is not shown")
        self._driver.record(f"type:{text}", focused)
        focused.value += text

    def __repr__(self) -> str:
        return "keyboard"


class SimScreen(_SimSurface):
    """The whole screen; always present."""

    def __repr__(self) -> str:
        return "screen"
