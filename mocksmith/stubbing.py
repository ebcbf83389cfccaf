"""Inline stubbing helpers.

Rules are installed as the ``side_effect`` of the stubbed method. A call that
matches no rule returns :data:`unittest.mock.DEFAULT`, so the mock's default
answer (or plain :mod:`unittest.mock` behaviour) still applies to it.
"""

from __future__ import annotations

import dataclasses as dc
import typing as t
from unittest import mock as um

from .errors import StubbingError

T = t.TypeVar("T")

Outcome = t.Callable[[tuple[object, ...], dict[str, object]], object]


@dc.dataclass(slots=True)
class _StubRule:
    """Argument constraints plus the consecutive outcomes for matching calls."""

    args: tuple[object, ...] | None = None
    kwargs: dict[str, object] | None = None
    match_args: tuple[t.Callable[[object], bool], ...] | None = None
    outcomes: list[Outcome] = dc.field(default_factory=list)
    calls: int = 0

    def matches(self, args: tuple[object, ...], kwargs: dict[str, object]) -> bool:
        if self.args is not None and args != self.args:
            return False
        if self.kwargs is not None and kwargs != self.kwargs:
            return False
        if self.match_args is not None:
            if len(args) != len(self.match_args):
                return False
            return all(
                matcher(arg) for arg, matcher in zip(args, self.match_args, strict=True)
            )
        return True

    def respond(self, args: tuple[object, ...], kwargs: dict[str, object]) -> object:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        return outcome(args, kwargs)


class _StubbedMethod:
    """Side effect dispatching calls to stub rules, newest rule first."""

    def __init__(self) -> None:
        self.rules: list[_StubRule] = []

    def __call__(self, *args: object, **kwargs: object) -> object:
        for rule in reversed(self.rules):
            if rule.matches(args, kwargs):
                return rule.respond(args, kwargs)
        return um.DEFAULT

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        """Return a debug representation."""
        return f"_StubbedMethod(rules={len(self.rules)})"


def _dispatcher_for(method: um.NonCallableMock) -> _StubbedMethod:
    effect = method.side_effect
    if isinstance(effect, _StubbedMethod):
        return effect
    dispatcher = _StubbedMethod()
    method.side_effect = dispatcher
    return dispatcher


def _returning(value: object) -> Outcome:
    return lambda args, kwargs: value


def _raising(error: BaseException | type[BaseException]) -> Outcome:
    def outcome(args: tuple[object, ...], kwargs: dict[str, object]) -> object:
        raise error

    return outcome


class OngoingStubbing:
    """Fluent stubbing of one mocked method.

    Argument constraints come first, followed by one or more outcomes::

        on(repo.fetch).with_args(1).returns("first", "second").raises(KeyError)

    Outcomes are used in order and the last one repeats.
    """

    def __init__(self, method: um.NonCallableMock) -> None:
        self.method = method
        self._rule = _StubRule()
        self._registered = False

    def with_args(self, *args: object, **kwargs: object) -> OngoingStubbing:
        """Apply the stub only to calls with exactly these arguments."""
        self._rule.args = args
        self._rule.kwargs = kwargs
        return self

    def with_matching_args(
        self, *matchers: t.Callable[[object], bool]
    ) -> OngoingStubbing:
        """Apply the stub to calls whose positional arguments satisfy *matchers*."""
        self._rule.match_args = matchers
        return self

    def returns(self, *values: object) -> OngoingStubbing:
        """Return *values* from consecutive matching calls."""
        if not values:
            msg = "returns() requires at least one value"
            raise StubbingError(msg)
        return self._then(*(_returning(value) for value in values))

    def raises(self, error: BaseException | type[BaseException]) -> OngoingStubbing:
        """Raise *error* from the next matching call."""
        return self._then(_raising(error))

    def answers(self, func: t.Callable[..., object]) -> OngoingStubbing:
        """Compute the result by calling *func* with the call's arguments."""
        return self._then(lambda args, kwargs: func(*args, **kwargs))

    def _then(self, *outcomes: Outcome) -> OngoingStubbing:
        self._rule.outcomes.extend(outcomes)
        if not self._registered:
            _dispatcher_for(self.method).rules.append(self._rule)
            self._registered = True
        return self


def _require_method(method: object) -> um.NonCallableMock:
    if not isinstance(method, um.NonCallableMock) or not callable(method):
        msg = f"on() requires a method of a mock, got {method!r}"
        raise StubbingError(msg)
    return method


def on(method: object) -> OngoingStubbing:
    """Start stubbing *method*, an attribute of a mock."""
    return OngoingStubbing(_require_method(method))


class Stubbing(t.Generic[T]):
    """Stubbing scope bound to a single mock.

    :func:`mocksmith.mock` hands one to its ``stubbing`` block together with
    the new mock, so rules are only registered on the mock being configured::

        mock(Repository, stubbing=lambda s, repo: s.on(repo.fetch).returns("x"))
    """

    mock: T

    def __init__(self, mock: T) -> None:
        if not isinstance(mock, um.NonCallableMock):
            msg = f"Stubbing requires a mock, got {mock!r}"
            raise StubbingError(msg)
        self.mock = mock

    def on(self, method: object) -> OngoingStubbing:
        """Start stubbing *method*, which must belong to this scope's mock."""
        checked = _require_method(method)
        owner = t.cast("um.NonCallableMock", self.mock)
        if checked._mock_new_parent is not owner:
            msg = (
                f"{checked._extract_mock_name()} is not a method of "
                f"{owner._extract_mock_name()}"
            )
            raise StubbingError(msg)
        return OngoingStubbing(checked)


__all__ = ["OngoingStubbing", "Stubbing", "on"]
