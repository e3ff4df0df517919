"""Element interactions: existence checks, typing and gestures."""

from __future__ import annotations

import inspect
import os
from unittest.mock import MagicMock

from uistep.core.errors import ElementDoesNotExist, TimedOutWaitingForElement
from uistep.core.result import Err, Ok
from uistep.core.types import ElementCategory, Keyboard, SwipeDirection
from uistep.drivers.sim import SimDriver, SimElement
from uistep.query.steps import find, screen

BUTTONS = ElementCategory.BUTTONS
TEXT_FIELDS = ElementCategory.TEXT_FIELDS
SECURE_TEXT_FIELDS = ElementCategory.SECURE_TEXT_FIELDS


def make_driver(element_exists=True, keyboard_shown=True) -> MagicMock:
    """A driver double whose every query resolves to the same element."""
    driver = MagicMock()
    element = MagicMock()
    element.exists.return_value = element_exists
    query = MagicMock()
    query.first.return_value = element
    query.element_bound_by.return_value = element
    query.matching.return_value = query
    query.count.return_value = 1
    driver.query.return_value = query
    keyboard = MagicMock()
    keyboard.exists.return_value = keyboard_shown
    driver.keyboard.return_value = keyboard
    return driver


class TestExistenceGate:
    def test_tap_on_missing_element_never_reaches_driver(self):
        driver = make_driver(element_exists=False)
        result = find(BUTTONS).first().tap().run(driver)
        assert isinstance(result.error.cause, ElementDoesNotExist)
        driver.query.return_value.first.return_value.tap.assert_not_called()

    def test_each_gesture_checks_existence(self):
        driver = make_driver(element_exists=False)
        element = driver.query.return_value.first.return_value
        gestures = [
            find(BUTTONS).first().double_tap(),
            find(BUTTONS).first().long_press(0.5),
            find(BUTTONS).first().swipe(SwipeDirection.UP),
            find(BUTTONS).first().type("x"),
            find(BUTTONS).first().drag(to=find(BUTTONS).bound_by(1)),
            find(BUTTONS).first().attribute("value"),
        ]
        for step in gestures:
            assert isinstance(step.run(driver), Err)
        assert element.double_tap.call_count == 0
        assert element.long_press.call_count == 0
        assert element.swipe.call_count == 0
        assert element.type_text.call_count == 0
        assert element.drag_to.call_count == 0
        assert element.value_for.call_count == 0

    def test_gestures_reach_driver_when_element_exists(self):
        driver = make_driver()
        element = driver.query.return_value.first.return_value
        find(BUTTONS).first().tap().double_tap().long_press(0.5).swipe(SwipeDirection.LEFT, velocity=300.0).run(
            driver
        )
        element.tap.assert_called_once_with()
        element.double_tap.assert_called_once_with()
        element.long_press.assert_called_once_with(0.5)
        element.swipe.assert_called_once_with(SwipeDirection.LEFT, 300.0)

    def test_failure_attributed_to_call_site(self):
        driver = make_driver(element_exists=False)
        expected_line = inspect.currentframe().f_lineno + 1
        step = find(BUTTONS).first().tap()
        error = step.run(driver).error
        assert error.file == os.path.abspath(__file__)
        assert error.line == expected_line

    def test_drag_uses_both_elements(self):
        driver = make_driver()
        element = driver.query.return_value.first.return_value
        result = find(BUTTONS).first().drag(to=find(BUTTONS).bound_by(1), press_duration=0.4).run(driver)
        assert result == Ok(None)
        element.drag_to.assert_called_once_with(element, 0.4)


class TestTyping:
    def test_type_requires_input_surface(self):
        driver = make_driver(keyboard_shown=False)
        element = driver.query.return_value.first.return_value
        result = find(TEXT_FIELDS).first().type("hello").run(driver)
        assert isinstance(result.error.cause, ElementDoesNotExist)
        assert isinstance(result.error.cause.element.kind, Keyboard)
        assert "Input surface not shown" in result.error.render()
        element.type_text.assert_not_called()

    def test_typing_without_focus_fails_on_sim(self):
        field = SimElement(category=TEXT_FIELDS, placeholder="Username")
        driver = SimDriver(field)
        result = find(TEXT_FIELDS).placeholder_containing("user").first().type("FooBarson").run(driver)
        assert isinstance(result.error.cause.element.kind, Keyboard)
        assert field.value == ""

    def test_hardware_keyboard_hides_input_surface(self):
        field = SimElement(category=TEXT_FIELDS, placeholder="Username")
        driver = SimDriver(field, software_keyboard=False)
        result = find(TEXT_FIELDS).first().tap().type("x").run(driver)
        assert isinstance(result, Err)


class TestScenarios:
    def test_fill_username_field(self):
        field = SimElement(category=TEXT_FIELDS, placeholder="Username")
        driver = SimDriver(field, SimElement(category=SECURE_TEXT_FIELDS, placeholder="Password"))

        step = find(TEXT_FIELDS).placeholder_containing("Username").first().tap().type("FooBarson")

        assert isinstance(step.run(driver), Ok)
        assert field.value == "FooBarson"
        assert [g for g, _ in driver.gestures] == ["tap", "type:FooBarson"]

    def test_typed_text_readable_through_attribute(self):
        field = SimElement(category=TEXT_FIELDS, placeholder="Username")
        driver = SimDriver(field)
        step = (
            find(TEXT_FIELDS).placeholder_containing("Username").first().tap().type("FooBarson")
            .attribute("value")
            .map(lambda value: value == "FooBarson")
            .assert_true()
        )
        assert step.run(driver) == Ok(True)

    def test_field_that_never_appears_times_out(self, monkeypatch):
        monkeypatch.setenv("UISTEP_DEFAULT_TIMEOUT", "0.2")
        driver = SimDriver()

        step = find(TEXT_FIELDS).placeholder_containing("Username").first().wait().tap().type("FooBarson")

        result = step.run(driver)
        assert isinstance(result.error.cause, TimedOutWaitingForElement)
        assert 'placeholder CONTAINS[c] "Username"' in result.error.render()
        assert driver.gestures == []


class TestScreenGestures:
    def test_screen_gestures_go_to_root(self):
        driver = SimDriver()
        screen().swipe(SwipeDirection.UP).run(driver)
        screen().tap().run(driver)
        screen().double_tap().run(driver)
        screen().press(1.5).run(driver)
        assert driver.gestures == [
            ("swipe:up", "screen"),
            ("tap", "screen"),
            ("double_tap", "screen"),
            ("long_press:1.5", "screen"),
        ]
