"""Unit tests for Step and its combinators (no driver needed beyond a stand-in)."""

from __future__ import annotations

import inspect
import os
from unittest.mock import MagicMock

import pytest

from uistep.core.errors import AssertionFailed, SourceLocation, StepError
from uistep.core.result import Err, Left, Ok, Right
from uistep.core.step import Step, always, fail, zip_n


def make_error(detail: str = "boom") -> StepError:
    return StepError(AssertionFailed(detail), SourceLocation(file="flows.py", line=7))


def counting(value, calls: list, name: str = "step") -> Step:
    """A step that records each evaluation in ``calls``."""

    def run(driver):
        calls.append(name)
        return Ok(value)

    return Step(run)


class TestConstructors:
    def test_always_never_touches_driver(self):
        driver = MagicMock()
        assert always(3).run(driver) == Ok(3)
        assert driver.mock_calls == []

    def test_fail_never_touches_driver(self):
        driver = MagicMock()
        error = make_error()
        result = fail(error).run(driver)
        assert isinstance(result, Err)
        assert result.error is error
        assert driver.mock_calls == []

    def test_fail_with_bare_cause_records_call_site(self):
        expected_line = inspect.currentframe().f_lineno + 1
        step = fail(AssertionFailed("nope"))
        result = step.run(MagicMock())
        assert result.error.location.line == expected_line
        assert result.error.location.file == os.path.abspath(__file__)

    def test_from_driver_turns_step_error_into_failure(self):
        error = make_error()

        def leaf(driver):
            raise error

        result = Step.from_driver(leaf).run(MagicMock())
        assert result == Err(error)

    def test_from_driver_lets_driver_faults_propagate(self):
        def leaf(driver):
            raise ConnectionError("driver went away")

        with pytest.raises(ConnectionError):
            Step.from_driver(leaf).run(MagicMock())

    def test_call_returns_value_or_raises(self):
        assert always("ok")(MagicMock()) == "ok"
        with pytest.raises(StepError):
            fail(make_error())(MagicMock())

    def test_debug_runs_side_effect_on_driver(self):
        driver = MagicMock()
        seen = []
        assert Step.debug(seen.append).run(driver) == Ok(driver)
        assert seen == [driver]

    def test_step_is_reusable(self):
        calls: list = []
        step = counting(1, calls)
        step.run(MagicMock())
        step.run(MagicMock())
        assert calls == ["step", "step"]


class TestMap:
    def test_functor_identity(self):
        driver = MagicMock()
        for step in (always(5), always(None), fail(make_error())):
            assert step.map(lambda x: x).run(driver) == step.run(driver)

    def test_map_transforms_success(self):
        assert always(2).map(lambda x: x * 10).run(MagicMock()) == Ok(20)

    def test_map_propagates_failure_untouched(self):
        error = make_error()
        f = MagicMock()
        assert fail(error).map(f).run(MagicMock()) == Err(error)
        f.assert_not_called()


class TestFlatMap:
    def test_never_invoked_on_failure(self):
        f = MagicMock()
        fail(make_error()).flat_map(f).run(MagicMock())
        f.assert_not_called()

    def test_invoked_exactly_once_on_success(self):
        f = MagicMock(return_value=always("next"))
        assert always(1).flat_map(f).run(MagicMock()) == Ok("next")
        f.assert_called_once_with(1)

    def test_inner_step_receives_same_driver(self):
        driver = MagicMock()
        seen = []
        always(1).flat_map(lambda _: Step.debug(seen.append)).run(driver)
        assert seen == [driver]


class TestZip:
    def test_zip_collects_results_in_order(self):
        assert always(1).zip(always("a")).run(MagicMock()) == Ok((1, "a"))

    def test_zip_many(self):
        assert always(1).zip(always(2), always(3), always(4)).run(MagicMock()) == Ok((1, 2, 3, 4))

    def test_runs_left_to_right(self):
        calls: list = []
        zip_n(counting(1, calls, "a"), counting(2, calls, "b"), counting(3, calls, "c")).run(
            MagicMock()
        )
        assert calls == ["a", "b", "c"]

    def test_failure_short_circuits_later_operands(self):
        calls: list = []
        error = make_error()
        result = counting(1, calls, "a").zip(fail(error), counting(3, calls, "c")).run(MagicMock())
        assert result == Err(error)
        assert calls == ["a"]

    def test_first_failure_wins(self):
        first, second = make_error("first"), make_error("second")
        result = zip_n(fail(first), fail(second)).run(MagicMock())
        assert result.error is first

    def test_empty_zip_n_succeeds(self):
        assert zip_n().run(MagicMock()) == Ok(())


class TestOrElse:
    def test_fallback_used_on_failure(self):
        assert fail(make_error()).or_else(always("v")).run(MagicMock()) == Ok(Right("v"))

    def test_receiver_success_skips_alternative(self):
        calls: list = []
        result = always("v").or_else(counting("other", calls)).run(MagicMock())
        assert result == Ok(Left("v"))
        assert calls == []

    def test_alternative_failure_propagates(self):
        second = make_error("second")
        result = fail(make_error("first")).or_else(fail(second)).run(MagicMock())
        assert result.error is second

    def test_same_type_overload_returns_bare_value(self):
        assert fail(make_error()).or_else_same(always("v")).run(MagicMock()) == Ok("v")
        assert always("w").or_else_same(always("v")).run(MagicMock()) == Ok("w")


class TestOptionalDoVoid:
    def test_optional_turns_failure_into_none(self):
        assert fail(make_error()).optional().run(MagicMock()) == Ok(None)
        assert always(4).optional().run(MagicMock()) == Ok(4)

    def test_do_observes_and_passes_through(self):
        seen = []
        assert always(9).do(seen.append).run(MagicMock()) == Ok(9)
        assert seen == [9]

    def test_do_not_run_on_failure(self):
        observer = MagicMock()
        fail(make_error()).do(observer).run(MagicMock())
        observer.assert_not_called()

    def test_to_void_step_keeps_failure(self):
        error = make_error()
        assert always(1).to_void_step().run(MagicMock()) == Ok(None)
        assert fail(error).to_void_step().run(MagicMock()) == Err(error)

    def test_then_runs_both_in_order(self):
        calls: list = []
        result = counting(1, calls, "a").then(counting(2, calls, "b")).run(MagicMock())
        assert result == Ok(None)
        assert calls == ["a", "b"]

    def test_print_result(self, capsys):
        always(42).print_result(prefix="answer: ").run(MagicMock())
        assert capsys.readouterr().out == "answer: 42\n"


class TestAssertTrue:
    def test_true_passes(self):
        assert always(True).assert_true().run(MagicMock()) == Ok(True)

    def test_false_fails_at_call_site(self):
        expected_line = inspect.currentframe().f_lineno + 1
        result = always(False).assert_true("should be on home").run(MagicMock())
        assert isinstance(result.error.cause, AssertionFailed)
        assert result.error.line == expected_line
        assert "should be on home" in result.error.render()

    def test_earlier_failure_passes_through(self):
        error = make_error()
        assert fail(error).assert_true().run(MagicMock()) == Err(error)
