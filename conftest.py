"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest

pytest_plugins = ("mocksmith.pytest_plugin", "pytester")


@pytest.fixture
def invocation_log(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture verbose invocation logging emitted by mocksmith listeners."""
    caplog.set_level(logging.INFO, logger="mocksmith.listeners")
    return caplog
