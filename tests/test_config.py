from __future__ import annotations

import pytest
from pydantic import ValidationError

from uistep.core.config import StepSettings, get_settings, reset_settings
from uistep.core.wait import poll_until, resolve_timeout


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("UISTEP_DEFAULT_TIMEOUT", "UISTEP_POLL_INTERVAL", "UISTEP_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = StepSettings(_env_file=None)
        assert settings.default_timeout == 5.0
        assert settings.poll_interval == 0.1
        assert settings.log_level == "WARNING"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("UISTEP_DEFAULT_TIMEOUT", "2.5")
        monkeypatch.setenv("UISTEP_LOG_LEVEL", "debug")
        settings = get_settings()
        assert settings.default_timeout == 2.5
        assert settings.log_level == "debug"

    def test_cached_until_reset(self, monkeypatch):
        monkeypatch.setenv("UISTEP_DEFAULT_TIMEOUT", "1.0")
        assert get_settings() is get_settings()
        monkeypatch.setenv("UISTEP_DEFAULT_TIMEOUT", "3.0")
        assert get_settings().default_timeout == 1.0
        reset_settings()
        assert get_settings().default_timeout == 3.0

    def test_timeout_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("UISTEP_DEFAULT_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            get_settings()


class TestPolling:
    def test_resolve_timeout(self, monkeypatch):
        monkeypatch.setenv("UISTEP_DEFAULT_TIMEOUT", "0.7")
        assert resolve_timeout(None) == 0.7
        assert resolve_timeout(2.0) == 2.0

    def test_condition_checked_at_least_once(self):
        calls = []
        assert poll_until(lambda: calls.append(1) or True, timeout=0.0)
        assert calls == [1]

    def test_returns_false_at_deadline(self):
        assert poll_until(lambda: False, timeout=0.05, interval=0.01) is False

    def test_returns_as_soon_as_true(self):
        answers = iter([False, False, True])
        assert poll_until(lambda: next(answers), timeout=1.0, interval=0.01)
