"""Classes mocked throughout the unit tests.

They live at module level so that return annotations resolve and pickled
mocks can find their type again.
"""

from __future__ import annotations

import abc
import collections.abc as cabc
import typing as t


class Closeable:
    """Extra interface mixed into mocks."""

    def close(self) -> None:
        """Release resources."""


class Repository:
    """Small real class with state and methods that call each other."""

    def __init__(self, url: str = "memory://") -> None:
        self.url = url
        self.opened = False

    def fetch(self, key: int) -> str:
        """Return a value for *key*."""
        return f"real-{key}"

    def keys(self) -> list[str]:
        """Return every key."""
        return ["real"]

    def describe(self) -> str:
        """Combine the URL with the value stored under key ``0``."""
        return f"{self.url}:{self.fetch(0)}"

    def connection(self) -> Closeable:
        """Return the underlying connection."""
        return Closeable()


class Counter:
    """Class whose methods change its own state."""

    def __init__(self) -> None:
        self.count = 0

    def increment(self) -> int:
        """Add one and return the new count."""
        self.count += 1
        return self.count


class MockLookalike:
    """Class whose attributes share names with the mock API."""

    def __init__(self) -> None:
        self.return_value = "real"
        self.side_effect = "real"
        self.method_calls = ["real"]
        self.label = "lookalike"

    def describe(self) -> str:
        """Describe the instance."""
        return self.label


class Exploding:
    """Class whose constructor always fails."""

    def __init__(self) -> None:
        msg = "constructor exploded"
        raise ValueError(msg)

    def ping(self) -> str:
        """Answer a ping."""
        return "pong"


class Outer:
    """Owner of a nested class needing its outer instance."""

    class Inner:
        """Nested class taking its owner as the first constructor argument."""

        def __init__(self, outer: Outer, label: str = "inner") -> None:
            self.outer = outer
            self.label = label

        def owner(self) -> Outer:
            """Return the owning instance."""
            return self.outer


class Shape(abc.ABC):
    """Abstract class with real state and one abstract method."""

    def __init__(self, sides: int) -> None:
        self.sides = sides

    @abc.abstractmethod
    def area(self) -> float:
        """Return the area."""

    def describe(self) -> str:
        """Describe the shape."""
        return f"{self.sides} sides"


class Helpers:
    """Class with static and class methods."""

    @staticmethod
    def double(value: int) -> int:
        """Return twice *value*."""
        return value * 2

    @classmethod
    def label(cls) -> str:
        """Return the class name."""
        return cls.__name__


class Values:
    """Methods covering the empty values produced for annotations."""

    def count(self) -> int: ...
    def ratio(self) -> float: ...
    def flag(self) -> bool: ...
    def text(self) -> str: ...
    def raw(self) -> bytes: ...
    def items(self) -> list[int]: ...
    def mapping(self) -> dict[str, int]: ...
    def unique(self) -> set[str]: ...
    def pair(self) -> tuple[int, int]: ...
    def sequence(self) -> cabc.Sequence[int]: ...
    def stream(self) -> cabc.Iterator[int]: ...
    def maybe(self) -> str | None: ...
    def unannotated(self): ...  # noqa: ANN201
    def unresolved(self) -> UndefinedName: ...  # noqa: F821


class QueryBuilder:
    """Builder with chainable methods."""

    def where(self, clause: str) -> QueryBuilder: ...
    def limit(self, count: int) -> t.Self: ...
    def anything(self) -> object: ...
    def build(self) -> str: ...


class AsyncClient:
    """Class with a coroutine method."""

    async def get(self, path: str) -> str:
        """Fetch *path*."""
        return path


class ReportCollector:
    """Picklable invocation listener storing every report."""

    def __init__(self) -> None:
        self.reports: list[t.Any] = []

    def __call__(self, report: t.Any) -> None:
        """Store *report*."""
        self.reports.append(report)
