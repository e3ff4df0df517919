from __future__ import annotations

import pytest

from uistep.core.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make every test read its own environment."""
    reset_settings()
    yield
    reset_settings()
