"""Unit tests for :mod:`mocksmith.answers` and invocation helpers."""

from __future__ import annotations

import typing as t
from unittest import mock as um

import pytest

from mocksmith.answers import (
    CALLS_REAL_METHODS,
    RETURNS_DEFAULTS,
    RETURNS_EMPTY_VALUES,
    RETURNS_MOCKS,
    RETURNS_SELF,
)
from mocksmith.engine import create_mock, mocking_details
from mocksmith.invocation import Invocation
from mocksmith.settings import MockSettings
from mocksmith.unittests._doubles import (
    Closeable,
    Helpers,
    QueryBuilder,
    Repository,
    Shape,
    Values,
)


def _mock_with(type_to_mock: type, answer: t.Any) -> t.Any:
    return create_mock(type_to_mock, MockSettings().default_answer(answer))


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        ("count", 0),
        ("ratio", 0.0),
        ("flag", False),
        ("text", ""),
        ("raw", b""),
        ("items", []),
        ("mapping", {}),
        ("unique", set()),
        ("pair", ()),
        ("sequence", []),
        ("maybe", None),
        ("unannotated", None),
        ("unresolved", None),
    ],
)
def test_returns_empty_values(method: str, expected: object) -> None:
    """Empty values follow the annotated return type."""
    values = _mock_with(Values, RETURNS_EMPTY_VALUES)

    assert getattr(values, method)() == expected


def test_returns_empty_values_iterator() -> None:
    """Iterator return types get an exhausted iterator."""
    values = _mock_with(Values, RETURNS_EMPTY_VALUES)

    assert list(values.stream()) == []


def test_returns_defaults_leaves_result_to_unittest_mock() -> None:
    """RETURNS_DEFAULTS produces the usual child mock."""
    repo = _mock_with(Repository, RETURNS_DEFAULTS)

    result = repo.fetch(1)

    assert result is repo.fetch.return_value
    assert isinstance(result, um.MagicMock)


def test_returns_mocks_builds_mock_of_return_class() -> None:
    """Class return types yield a fresh mock of that class."""
    repo = _mock_with(Repository, RETURNS_MOCKS)

    connection = repo.connection()

    assert isinstance(connection, Closeable)
    assert mocking_details(connection).is_mock
    assert repo.fetch(1) == ""


def test_returns_self_for_builder_methods() -> None:
    """Methods returning the mocked type return the mock itself."""
    query = _mock_with(QueryBuilder, RETURNS_SELF)

    assert query.where("a = 1") is query
    assert query.limit(10) is query
    assert query.anything() is None
    assert query.build() == ""


def test_calls_real_methods_on_spy() -> None:
    """Spies given CALLS_REAL_METHODS run the real methods on the spy."""
    real = Repository("db://")
    repo = create_mock(
        Repository,
        MockSettings().spied_instance(real).default_answer(CALLS_REAL_METHODS),
    )

    assert repo.fetch(3) == "real-3"
    assert repo.describe() == "db://:real-0"


def test_calls_real_methods_static_and_class_methods() -> None:
    """Static and class methods are called without binding the mock."""
    helpers = _mock_with(Helpers, CALLS_REAL_METHODS)

    assert helpers.double(4) == 8
    assert helpers.label() == "Helpers"


def test_calls_real_methods_skips_abstract_methods() -> None:
    """Abstract methods fall back to unittest.mock defaults."""
    shape = _mock_with(Shape, CALLS_REAL_METHODS)

    assert isinstance(shape.area(), um.MagicMock)


def test_invocation_str() -> None:
    """Invocations render like the call that produced them."""
    invocation = Invocation(
        mock=None,
        mock_name="repo",
        method_name="fetch",
        args=(1,),
        kwargs={"fresh": True},
        mocked_type=Repository,
    )

    assert str(invocation) == "repo.fetch(1, fresh=True)"
    assert invocation.real_function is Repository.fetch
    assert not invocation.is_abstract


def test_invocation_without_real_method() -> None:
    """Calling a real method that does not exist is a TypeError."""
    invocation = Invocation(
        mock=None,
        mock_name="repo",
        method_name="missing",
        args=(),
        kwargs={},
        mocked_type=Repository,
    )

    assert invocation.real_function is None
    with pytest.raises(TypeError, match="missing"):
        invocation.call_real_method()


@pytest.mark.parametrize(
    ("answer", "expected"),
    [
        (RETURNS_DEFAULTS, "RETURNS_DEFAULTS"),
        (RETURNS_EMPTY_VALUES, "RETURNS_EMPTY_VALUES"),
        (RETURNS_MOCKS, "RETURNS_MOCKS"),
        (RETURNS_SELF, "RETURNS_SELF"),
        (CALLS_REAL_METHODS, "CALLS_REAL_METHODS"),
    ],
)
def test_answer_reprs(answer: object, expected: str) -> None:
    """Built-in answers have readable reprs."""
    assert repr(answer) == expected
