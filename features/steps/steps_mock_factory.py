"""Step definitions for mock factory behavioural tests."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import typing as t

from behave import given, then, when  # type: ignore[attr-defined]

from mocksmith import MockCreationError, SerializableMode, mock, mocking_details


class Repository:
    """Class mocked by the scenarios."""

    def fetch(self, key: int) -> str:
        """Return a value for *key*."""
        return f"real-{key}"


class Exploding:
    """Class whose constructor always fails."""

    def __init__(self) -> None:
        msg = "constructor exploded"
        raise ValueError(msg)


class BehaveContext(t.Protocol):
    """Behave step context with attributes used in tests."""

    repo: t.Any
    returned: object
    failure: AssertionError
    creation_error: MockCreationError


@given('a mock of the repository named "{name}"')
def step_named_mock(context: BehaveContext, name: str) -> None:
    """Create a named mock."""
    context.repo = mock(Repository, name=name)


@given("a stub-only mock of the repository")
def step_stub_only_mock(context: BehaveContext) -> None:
    """Create a mock that does not record calls."""
    context.repo = mock(
        Repository,
        stub_only=True,
        stubbing=lambda s, m: s.on(m.fetch).returns("stubbed"),
    )


@given('a mock of the repository stubbed to return "{value}" for key {key:d}')
def step_stubbed_mock(context: BehaveContext, value: str, key: int) -> None:
    """Create a mock configured by a stubbing block."""
    context.repo = mock(
        Repository,
        stubbing=lambda s, m: s.on(m.fetch).with_args(key).returns(value),
    )


@given("a mock of the repository serializable across processes")
def step_serializable_mock(context: BehaveContext) -> None:
    """Create a mock with both the flag and a specific mode."""
    context.repo = mock(
        Repository,
        serializable=True,
        serializable_mode=SerializableMode.ACROSS_PROCESSES,
    )


@when("the mock is verified for a call that never happened")
def step_verify_missing_call(context: BehaveContext) -> None:
    """Capture the assertion error raised by the engine."""
    try:
        context.repo.fetch.assert_called_once_with(1)
    except AssertionError as exc:
        context.failure = exc
    else:
        msg = "verification unexpectedly passed"
        raise AssertionError(msg)


@when("the stubbed fetch method is called with {key:d}")
def step_call_fetch(context: BehaveContext, key: int) -> None:
    """Call the mocked method."""
    context.returned = context.repo.fetch(key)


@when("a mock of an exploding class is created with its constructor")
def step_create_exploding_mock(context: BehaveContext) -> None:
    """Capture the creation error."""
    try:
        mock(Exploding, use_constructor=True)
    except MockCreationError as exc:
        context.creation_error = exc
    else:
        msg = "mock creation unexpectedly succeeded"
        raise AssertionError(msg)


@then('the failure mentions "{text}"')
def step_failure_mentions(context: BehaveContext, text: str) -> None:
    """Check the engine's failure text."""
    assert text in str(context.failure)  # noqa: S101


@then("the call is not recorded")
def step_call_not_recorded(context: BehaveContext) -> None:
    """Stub-only mocks keep answering but do not record."""
    assert context.returned == "stubbed"  # noqa: S101
    assert context.repo.fetch.call_count == 0  # noqa: S101
    assert mocking_details(context.repo).invocations == ()  # noqa: S101


@then('the call returns "{value}"')
def step_call_returns(context: BehaveContext, value: str) -> None:
    """Check the stubbed value."""
    assert context.returned == value  # noqa: S101


@then('the mock has serializable mode "{mode}"')
def step_has_serializable_mode(context: BehaveContext, mode: str) -> None:
    """Check the mode recorded in the creation settings."""
    settings = mocking_details(context.repo).creation_settings
    assert settings is not None  # noqa: S101
    assert settings.serializable_mode is SerializableMode(mode)  # noqa: S101


@then('mock creation fails with "{text}"')
def step_creation_fails(context: BehaveContext, text: str) -> None:
    """The constructor error is kept as the cause."""
    assert isinstance(context.creation_error.__cause__, ValueError)  # noqa: S101
    assert text in str(context.creation_error)  # noqa: S101
