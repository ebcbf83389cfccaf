"""Steps for testing the pytest plugin."""

from __future__ import annotations

import shutil
import subprocess
import sys
import tempfile
import typing as t
from pathlib import Path

from behave import given, then, when  # type: ignore[attr-defined]


class BehaveContext(t.Protocol):
    """Behave step context for plugin tests."""

    test_file: Path
    tmpdir: Path
    result: subprocess.CompletedProcess[str]


_FIXTURE_TEST = """
class Service:
    def run(self) -> str:
        return "ran"


def test_example(mocksmith):
    service = mocksmith.mock(
        Service,
        name="service",
        stubbing=lambda s, m: s.on(m.run).returns("stubbed"),
    )
    assert service.run() == "stubbed"
    service.run.assert_called_once_with()
"""

_LOGGING_TEST = """
import logging


class Service:
    def run(self) -> str:
        return "ran"


def test_example(mocksmith, caplog):
    caplog.set_level(logging.INFO, logger="mocksmith.listeners")
    service = mocksmith.mock(
        Service, stubbing=lambda s, m: s.on(m.run).returns("ran")
    )
    service.run()
    for record in caplog.records:
        print(record.getMessage())
"""


def _write_test_file(context: BehaveContext, code: str) -> None:
    tmpdir = Path(tempfile.mkdtemp())
    context.test_file = tmpdir / "test_example.py"
    context.tmpdir = tmpdir
    context.test_file.write_text(code)


def _run_pytest(context: BehaveContext, *options: str) -> None:
    result = subprocess.run(  # noqa: S603
        [
            sys.executable,
            "-m",
            "pytest",
            "-p",
            "mocksmith.pytest_plugin",
            "-s",
            *options,
            str(context.test_file),
        ],
        capture_output=True,
        text=True,
    )
    context.result = result
    shutil.rmtree(context.tmpdir)


@given("a temporary test file using the mocksmith fixture")
def step_create_test_file(context: BehaveContext) -> None:
    """Write a pytest file that exercises the fixture."""
    _write_test_file(context, _FIXTURE_TEST)


@given("a temporary test file logging mocksmith invocations")
def step_create_logging_test_file(context: BehaveContext) -> None:
    """Write a pytest file that prints the verbose invocation log."""
    _write_test_file(context, _LOGGING_TEST)


@when("I run pytest on the file")
def step_run_pytest(context: BehaveContext) -> None:
    """Execute pytest on the generated file."""
    _run_pytest(context)


@when('I run pytest on the file with "{option}"')
def step_run_pytest_with_option(context: BehaveContext, option: str) -> None:
    """Execute pytest on the generated file with one extra option."""
    _run_pytest(context, option)


@then("the run should pass")
def step_check_pass(context: BehaveContext) -> None:
    """Assert that pytest exited successfully."""
    assert context.result.returncode == 0  # noqa: S101


@then('the output should contain "{text}"')
def step_check_output(context: BehaveContext, text: str) -> None:
    """Assert that the run printed *text*."""
    assert text in context.result.stdout  # noqa: S101
