"""Behavioural test of the mocksmith pytest plug-in, expressed with pytest-bdd."""

from __future__ import annotations

import textwrap
import typing as t
from pathlib import Path

from pytest_bdd import given, parsers, scenario, then, when

if t.TYPE_CHECKING:  # pragma: no cover - used for type checking only
    from _pytest.pytester import Pytester, RunResult

FEATURES_DIR = Path(__file__).resolve().parent.parent / "features"


@scenario(str(FEATURES_DIR / "pytest_plugin.feature"), "mocksmith fixture basic usage")
def test_mocksmith_plugin() -> None:
    """Bind scenario steps for the pytest plugin."""


@scenario(
    str(FEATURES_DIR / "pytest_plugin.feature"),
    "verbose logging from the command line",
)
def test_mocksmith_plugin_verbose_logging() -> None:
    """Bind scenario steps for verbose logging."""


TEST_CODE = textwrap.dedent(
    """
    class Service:
        def run(self) -> str:
            return "ran"

        def stop(self) -> None:
            pass


    def test_example(mocksmith):
        service = mocksmith.mock(
            Service,
            name="service",
            stubbing=lambda s, m: s.on(m.run).returns("stubbed"),
        )
        assert service.run() == "stubbed"
        service.run.assert_called_once_with()
        assert mocksmith.created == [service]
    """
)

LOGGING_CODE = textwrap.dedent(
    """
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
)


@given("a temporary test file using the mocksmith fixture", target_fixture="test_file")
def create_test_file(pytester: Pytester) -> Path:
    """Write the example test file."""
    return pytester.makepyfile(TEST_CODE)


@given(
    "a temporary test file logging mocksmith invocations", target_fixture="test_file"
)
def create_logging_test_file(pytester: Pytester) -> Path:
    """Write a test file that prints the verbose invocation log."""
    return pytester.makepyfile(LOGGING_CODE)


@when("I run pytest on the file", target_fixture="result")
def run_pytest(pytester: Pytester, test_file: Path) -> RunResult:
    """Run the inner pytest instance."""
    return pytester.runpytest("-p", "mocksmith.pytest_plugin", str(test_file))


@when(parsers.cfparse('I run pytest on the file with "{option}"'), target_fixture="result")
def run_pytest_with_option(
    pytester: Pytester, test_file: Path, option: str
) -> RunResult:
    """Run the inner pytest instance with one extra command-line option."""
    return pytester.runpytest(
        "-p", "mocksmith.pytest_plugin", "-s", option, str(test_file)
    )


@then("the run should pass")
def assert_success(result: RunResult) -> None:
    """Assert that the test passed."""
    result.assert_outcomes(passed=1)


@then(parsers.cfparse('the output should contain "{text}"'))
def assert_output(result: RunResult, text: str) -> None:
    """Assert that the inner run printed *text*."""
    assert text in result.stdout.str()
