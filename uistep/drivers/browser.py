"""Playwright driver: runs step chains against a live browser page."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from uistep.core.types import ElementCategory, SwipeDirection
from uistep.core.wait import poll_until
from uistep.query.predicates import AllOf, Contains, Equals, Predicate

logger = logging.getLogger(__name__)

# CSS used to resolve each element category
_CATEGORY_SELECTORS: dict[ElementCategory, str] = {
    ElementCategory.ANY: "*",
    ElementCategory.BUTTONS: (
        "button, [role=button], input[type=button], input[type=submit], input[type=reset]"
    ),
    ElementCategory.TEXT_FIELDS: (
        "input:not([type]), input[type=text], input[type=email], input[type=search], "
        "input[type=tel], input[type=url], input[type=number], textarea, [role=textbox]"
    ),
    ElementCategory.SECURE_TEXT_FIELDS: "input[type=password]",
    ElementCategory.STATIC_TEXTS: "p, span, label, h1, h2, h3, h4, h5, h6, [role=heading]",
    ElementCategory.LINKS: "a[href], [role=link]",
    ElementCategory.IMAGES: "img, svg[role=img], [role=img]",
    ElementCategory.CELLS: "td, th, li, [role=cell], [role=gridcell], [role=listitem]",
    ElementCategory.TABLES: "table, ul, ol, [role=table], [role=grid], [role=list]",
    ElementCategory.SWITCHES: "input[type=checkbox], [role=switch], [role=checkbox]",
    ElementCategory.NAVIGATION_BARS: "nav, header, [role=navigation], [role=banner]",
    ElementCategory.SHEETS: "dialog, [role=dialog], [role=alertdialog]",
}

# True when keyboard input would land in an editable element
_JS_INPUT_SURFACE_SHOWN = """
() => {
    const el = document.activeElement;
    if (!el || el === document.body) return false;
    if (el.isContentEditable) return true;
    const tag = el.tagName.toLowerCase();
    if (tag === 'textarea') return !el.disabled && !el.readOnly;
    if (tag !== 'input') return false;
    const blocked = ['button', 'submit', 'reset', 'checkbox', 'radio', 'file', 'image', 'range', 'color'];
    return !blocked.includes((el.type || 'text').toLowerCase()) && !el.disabled && !el.readOnly;
}
"""

_SWIPE_DISTANCE_PX = 200
_DEFAULT_SWIPE_VELOCITY = 1000.0  # px/s
_MOUSE_STEP_SECONDS = 1 / 60


class UnsupportedPredicateError(ValueError):
    """The predicate cannot be expressed as a Playwright locator."""


class PlaywrightDriver:
    """
    Adapts a ``playwright.sync_api.Page`` to the driver boundary.

    Usage:
        with sync_playwright() as pw:
            page = pw.chromium.launch().new_page()
            page.goto("https://example.com/login")
            result = login_flow.run(PlaywrightDriver(page))

    ``touch=True`` performs taps as touch events (the browser context must
    be created with ``has_touch=True``); otherwise taps are mouse clicks.
    """

    def __init__(self, page: Page, *, touch: bool = False) -> None:
        self.page = page
        self.touch = touch

    def query(self, *categories: ElementCategory) -> PlaywrightQuery:
        locator: Locator | None = None
        for category in categories:
            selector = _CATEGORY_SELECTORS.get(ElementCategory(category))
            if selector is None:
                raise ValueError(f"{category!r} cannot be queried in a browser page")
            locator = self.page.locator(selector) if locator is None else locator.locator(selector)
        if locator is None:
            raise ValueError("query() needs at least one element category")
        logger.debug("query %s", ".".join(ElementCategory(c).value for c in categories))
        return PlaywrightQuery(self, locator)

    def keyboard(self) -> PlaywrightInputSurface:
        return PlaywrightInputSurface(self, self.page.locator(":focus"))

    def root(self) -> PlaywrightElement:
        return PlaywrightElement(self, self.page.locator("body"))


class PlaywrightQuery:
    """Wraps a locator; Playwright locators are re-resolved on every call."""

    def __init__(self, driver: PlaywrightDriver, locator: Locator) -> None:
        self._driver = driver
        self._locator = locator

    @property
    def locator(self) -> Locator:
        return self._locator

    def count(self) -> int:
        return self._locator.count()

    def first(self) -> PlaywrightElement:
        return PlaywrightElement(self._driver, self._locator.first)

    def element_bound_by(self, index: int) -> PlaywrightElement:
        return PlaywrightElement(self._driver, self._locator.nth(index))

    def element_matching(self, text: str) -> PlaywrightElement:
        page = self._driver.page
        exact = (
            page.get_by_text(text, exact=True)
            .or_(page.get_by_label(text, exact=True))
            .or_(page.get_by_test_id(text))
            .or_(page.locator(f"[id={json.dumps(text)}]"))
        )
        return PlaywrightElement(self._driver, self._locator.and_(exact).first)

    def matching(self, predicate: Predicate) -> PlaywrightQuery:
        return PlaywrightQuery(self._driver, _narrow(self._driver.page, self._locator, predicate))

    def matching_identifier(self, identifier: str) -> PlaywrightQuery:
        page = self._driver.page
        by_id = page.locator(f"[id={json.dumps(identifier)}]").or_(page.get_by_test_id(identifier))
        return PlaywrightQuery(self._driver, self._locator.and_(by_id))

    def value_for(self, key: str) -> Any:
        if key == "count":
            return self.count()
        return None

    def __repr__(self) -> str:
        return f"PlaywrightQuery({self._locator})"


def _narrow(page: Page, locator: Locator, predicate: Predicate) -> Locator:
    """Translate ``predicate`` into locator filters."""
    if isinstance(predicate, AllOf):
        for part in predicate.predicates:
            locator = _narrow(page, locator, part)
        return locator

    if isinstance(predicate, Contains):
        if predicate.key == "label":
            flags = re.IGNORECASE if predicate.ignore_case else 0
            pattern = re.compile(re.escape(predicate.value), flags)
            by_aria = page.locator(_attr_contains("aria-label", predicate.value, predicate.ignore_case))
            return locator.filter(has_text=pattern).or_(locator.and_(by_aria))
        if predicate.key in ("placeholder", "value", "identifier"):
            attribute = "id" if predicate.key == "identifier" else predicate.key
            css = _attr_contains(attribute, predicate.value, predicate.ignore_case)
            return locator.and_(page.locator(css))

    if isinstance(predicate, Equals) and predicate.key == "enabled":
        return locator.and_(page.locator(":enabled" if predicate.value else ":disabled"))

    raise UnsupportedPredicateError(f"cannot translate predicate {predicate.format!r}")


def _attr_contains(attribute: str, value: str, ignore_case: bool) -> str:
    flag = " i" if ignore_case else ""
    return f"[{attribute}*={json.dumps(value)}{flag}]"


class PlaywrightElement:
    """A single-element locator."""

    def __init__(self, driver: PlaywrightDriver, locator: Locator) -> None:
        self._driver = driver
        self._locator = locator

    @property
    def locator(self) -> Locator:
        return self._locator

    def exists(self) -> bool:
        return self._locator.count() > 0

    def wait_for_existence(self, timeout: float) -> bool:
        # Playwright reads timeout=0 as "wait forever"
        if timeout <= 0:
            return self.exists()
        try:
            self._locator.wait_for(state="attached", timeout=timeout * 1000)
        except PlaywrightTimeoutError:
            return False
        return True

    def value_for(self, key: str) -> Any:
        if key == "exists":
            return self.exists()
        # locator reads auto-wait for a missing element
        if not self.exists():
            return None
        if key == "enabled":
            return self._locator.is_enabled()
        if key == "label":
            return self._locator.get_attribute("aria-label") or self._locator.inner_text()
        if key == "value":
            return self._locator.input_value()
        if key == "identifier":
            return self._locator.get_attribute("id")
        return self._locator.get_attribute(key)

    def tap(self) -> None:
        if self._driver.touch:
            self._locator.tap()
        else:
            self._locator.click()

    def double_tap(self) -> None:
        self._locator.dblclick()

    def long_press(self, duration: float) -> None:
        self._locator.click(delay=duration * 1000)

    def swipe(self, direction: SwipeDirection, velocity: float | None = None) -> None:
        box = self._locator.bounding_box()
        if box is None:
            raise RuntimeError(f"{self!r} has no bounding box to swipe on")
        x = box["x"] + box["width"] / 2
        y = box["y"] + box["height"] / 2
        dx, dy = {
            SwipeDirection.LEFT: (-_SWIPE_DISTANCE_PX, 0),
            SwipeDirection.RIGHT: (_SWIPE_DISTANCE_PX, 0),
            SwipeDirection.UP: (0, -_SWIPE_DISTANCE_PX),
            SwipeDirection.DOWN: (0, _SWIPE_DISTANCE_PX),
        }[SwipeDirection(direction)]
        seconds = _SWIPE_DISTANCE_PX / (velocity or _DEFAULT_SWIPE_VELOCITY)
        steps = max(1, round(seconds / _MOUSE_STEP_SECONDS))

        mouse = self._driver.page.mouse
        mouse.move(x, y)
        mouse.down()
        mouse.move(x + dx, y + dy, steps=steps)
        mouse.up()

    def drag_to(self, other: Any, press_duration: float) -> None:
        if not isinstance(other, PlaywrightElement):
            raise TypeError(f"cannot drag onto {other!r}")
        mouse = self._driver.page.mouse
        self._locator.hover()
        mouse.down()
        self._driver.page.wait_for_timeout(press_duration * 1000)
        other.locator.hover()
        mouse.up()

    def type_text(self, text: str) -> None:
        self._locator.press_sequentially(text)

    def __repr__(self) -> str:
        return f"PlaywrightElement({self._locator})"


class PlaywrightInputSurface(PlaywrightElement):
    """The focused editable element, standing in for a software keyboard."""

    def exists(self) -> bool:
        return bool(self._driver.page.evaluate(_JS_INPUT_SURFACE_SHOWN))

    def wait_for_existence(self, timeout: float) -> bool:
        return poll_until(self.exists, timeout)

    def type_text(self, text: str) -> None:
        self._driver.page.keyboard.type(text)

    def __repr__(self) -> str:
        return "PlaywrightInputSurface(:focus)"
