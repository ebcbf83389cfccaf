"""Pytest plugin providing the ``mocksmith`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .mocking import mock, spy

logger = logging.getLogger(__name__)

T = t.TypeVar("T")


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("mocksmith")
    group.addoption(
        "--mocksmith-verbose-logging",
        action="store_true",
        dest="mocksmith_verbose_logging",
        default=None,
        help=(
            "Log every invocation on mocks created through the mocksmith "
            "fixture. Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-mocksmith-verbose-logging",
        action="store_false",
        dest="mocksmith_verbose_logging",
        default=None,
        help=(
            "Do not log invocations on mocks created through the mocksmith "
            "fixture. Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "mocksmith_verbose_logging",
        "Log every invocation on mocks created through the mocksmith fixture.",
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "mocksmith(verbose_logging: bool = False): override invocation "
            "logging for mocks created by the mocksmith fixture in one test."
        ),
    )


class MockFactory:
    """Creates mocks for one test and resets them afterwards.

    ``verbose_logging`` is the default applied when a call does not pass the
    option itself.
    """

    def __init__(self, *, verbose_logging: bool = False) -> None:
        self.verbose_logging = verbose_logging
        self.created: list[object] = []

    def mock(self, type_to_mock: type[T], **options: t.Any) -> T:
        """Create a mock via :func:`mocksmith.mock` and remember it."""
        options.setdefault("verbose_logging", self.verbose_logging)
        created = mock(type_to_mock, **options)
        self.created.append(created)
        return created

    def spy(self, instance: T, **options: t.Any) -> T:
        """Create a spy via :func:`mocksmith.spy` and remember it."""
        options.setdefault("verbose_logging", self.verbose_logging)
        created = spy(instance, **options)
        self.created.append(created)
        return created

    def reset_all(self) -> None:
        """Reset every mock created by this factory."""
        for created in self.created:
            t.cast("t.Any", created).reset_mock()
        self.created.clear()


def _verbose_logging_enabled(request: pytest.FixtureRequest) -> bool:
    """Return the verbose logging default for this test."""
    # Priority order: marker > CLI option > INI setting
    marker = request.node.get_closest_marker("mocksmith")
    if marker is not None and "verbose_logging" in marker.kwargs:
        return bool(marker.kwargs["verbose_logging"])

    config = request.config
    cli_value = config.getoption("mocksmith_verbose_logging")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("mocksmith_verbose_logging"))


@pytest.fixture
def mocksmith(request: pytest.FixtureRequest) -> t.Generator[MockFactory, None, None]:
    """Provide a :class:`MockFactory` whose mocks are reset after the test."""
    factory = MockFactory(verbose_logging=_verbose_logging_enabled(request))
    try:
        yield factory
    finally:
        try:
            factory.reset_all()
        except Exception:
            logger.exception("Error during mocksmith fixture cleanup")
            pytest.fail("mocksmith fixture cleanup failed")


__all__ = ["MockFactory", "mocksmith"]
