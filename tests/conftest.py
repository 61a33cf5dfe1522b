"""Shared fixtures."""

from __future__ import annotations

import pytest

from evexpr.logging.events import set_log_path


@pytest.fixture(autouse=True)
def _reset_event_sink():
    """Every test starts and ends with event logging disabled."""
    set_log_path(None)
    yield
    set_log_path(None)
