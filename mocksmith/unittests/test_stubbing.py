"""Unit tests for :mod:`mocksmith.stubbing`."""

from __future__ import annotations

from unittest import mock as um

import pytest

from mocksmith.answers import RETURNS_EMPTY_VALUES
from mocksmith.errors import StubbingError
from mocksmith.mocking import mock
from mocksmith.stubbing import OngoingStubbing, Stubbing, on
from mocksmith.unittests._doubles import Repository


@pytest.fixture
def repo() -> Repository:
    """Return a fresh repository mock."""
    return mock(Repository, name="repo")


def test_returns_value_for_any_arguments(repo: Repository) -> None:
    """A rule without argument constraints matches every call."""
    on(repo.fetch).returns("value")

    assert repo.fetch(1) == "value"
    assert repo.fetch(2) == "value"


def test_with_args_restricts_rule(repo: Repository) -> None:
    """Calls with other arguments fall through to the engine."""
    on(repo.fetch).with_args(1).returns("one")

    assert repo.fetch(1) == "one"
    assert isinstance(repo.fetch(2), um.MagicMock)


def test_with_args_compares_keywords(repo: Repository) -> None:
    """Keyword arguments are part of the match."""
    on(repo.fetch).with_args(key=1).returns("by-name")

    assert repo.fetch(key=1) == "by-name"
    assert repo.fetch(1) != "by-name"


def test_consecutive_values_repeat_last(repo: Repository) -> None:
    """Consecutive values are used in order and the last one sticks."""
    on(repo.fetch).returns("first", "second")

    assert [repo.fetch(0) for _ in range(4)] == ["first", "second", "second", "second"]


def test_returns_then_raises(repo: Repository) -> None:
    """Outcomes of different kinds chain on one rule."""
    on(repo.fetch).with_args(1).returns("once").raises(KeyError("gone"))

    assert repo.fetch(1) == "once"
    with pytest.raises(KeyError, match="gone"):
        repo.fetch(1)
    with pytest.raises(KeyError):
        repo.fetch(1)


def test_newest_rule_wins(repo: Repository) -> None:
    """Later rules shadow earlier ones for the calls they match."""
    on(repo.fetch).returns("general")
    on(repo.fetch).with_args(1).returns("specific")

    assert repo.fetch(1) == "specific"
    assert repo.fetch(2) == "general"


def test_answers_receive_call_arguments(repo: Repository) -> None:
    """answers() computes the result from the actual arguments."""
    on(repo.fetch).answers(lambda key: f"computed-{key}")

    assert repo.fetch(3) == "computed-3"


def test_with_matching_args(repo: Repository) -> None:
    """Predicates select calls by their positional arguments."""
    on(repo.fetch).with_matching_args(lambda key: key > 10).returns("large")

    assert repo.fetch(11) == "large"
    assert repo.fetch(1) != "large"
    assert repo.fetch(11, 12) != "large"  # type: ignore[call-arg]


def test_stubbed_calls_are_still_recorded(repo: Repository) -> None:
    """Stubbing does not hide calls from engine assertions."""
    on(repo.fetch).returns("value")

    repo.fetch(1)

    repo.fetch.assert_called_once_with(1)  # type: ignore[attr-defined]


def test_unmatched_calls_use_default_answer() -> None:
    """Calls matching no rule get the mock's default answer."""
    repo = mock(
        Repository,
        default_answer=RETURNS_EMPTY_VALUES,
        stubbing=lambda s, m: s.on(m.fetch).with_args(1).returns("one"),
    )

    assert repo.fetch(1) == "one"
    assert repo.fetch(2) == ""


def test_stubbing_scope_accepts_own_methods(repo: Repository) -> None:
    """Stubbing.on() returns an ongoing stubbing for the bound mock."""
    stubbing = Stubbing(repo)

    ongoing = stubbing.on(repo.fetch)

    assert isinstance(ongoing, OngoingStubbing)
    ongoing.returns("scoped")
    assert repo.fetch(0) == "scoped"


def test_stubbing_scope_rejects_other_mocks(repo: Repository) -> None:
    """A scope refuses methods of a different mock."""
    other = mock(Repository, name="other")

    with pytest.raises(StubbingError, match=r"other\.fetch is not a method of repo"):
        Stubbing(repo).on(other.fetch)


def test_stubbing_scope_requires_mock() -> None:
    """Only mocks can be stubbed."""
    with pytest.raises(StubbingError, match="requires a mock"):
        Stubbing(Repository())


@pytest.mark.parametrize(
    "target",
    [
        pytest.param("fetch", id="string"),
        pytest.param(Repository().fetch, id="real-method"),
    ],
)
def test_on_rejects_non_mocks(target: object) -> None:
    """on() refuses anything that is not a mocked method."""
    with pytest.raises(StubbingError, match="requires a method of a mock"):
        on(target)


def test_on_rejects_non_callable_mock(repo: Repository) -> None:
    """The mock itself is not a method."""
    with pytest.raises(StubbingError):
        on(repo)


def test_returns_requires_values(repo: Repository) -> None:
    """returns() without values is a stubbing error."""
    with pytest.raises(StubbingError, match="at least one value"):
        on(repo.fetch).returns()
