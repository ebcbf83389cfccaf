"""Default answer strategies for unstubbed calls.

An answer is any callable taking an :class:`~mocksmith.invocation.Invocation`
and returning the value for the call. Returning :data:`unittest.mock.DEFAULT`
hands the call back to :mod:`unittest.mock`, which produces its usual child
mock.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as t
from unittest import mock as um

from .engine import create_mock
from .settings import MockSettings

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Invocation


class Answer(t.Protocol):
    """Callable producing the result of an unstubbed invocation."""

    def __call__(self, invocation: Invocation) -> object:
        """Return the value for *invocation*."""
        ...


_EMPTY_FACTORIES: dict[object, t.Callable[[], object]] = {
    int: int,
    float: float,
    complex: complex,
    bool: bool,
    str: str,
    bytes: bytes,
    bytearray: bytearray,
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    cabc.Sequence: list,
    cabc.MutableSequence: list,
    cabc.Mapping: dict,
    cabc.MutableMapping: dict,
    cabc.Set: set,
    cabc.MutableSet: set,
    cabc.Collection: list,
    cabc.Iterable: list,
    cabc.Iterator: lambda: iter(()),
}


def return_annotation(invocation: Invocation) -> object | None:
    """Return the resolved return annotation of the invoked method."""
    func = invocation.real_function
    if func is None:
        return None
    try:
        hints = t.get_type_hints(func)
    except (NameError, TypeError):
        return None
    return hints.get("return")


def _empty_value_for(annotation: object | None) -> object:
    if annotation is None:
        return None
    origin = t.get_origin(annotation) or annotation
    factory = _EMPTY_FACTORIES.get(origin)
    return None if factory is None else factory()


class ReturnsDefaults:
    """Leave the result to :mod:`unittest.mock`."""

    def __call__(self, invocation: Invocation) -> object:
        """Return :data:`unittest.mock.DEFAULT`."""
        return um.DEFAULT

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "RETURNS_DEFAULTS"


class ReturnsEmptyValues:
    """Return an empty value matching the annotated return type.

    Numbers become zero, strings and collections become empty and anything
    else becomes ``None``.
    """

    def __call__(self, invocation: Invocation) -> object:
        """Return the empty value for the invoked method's return type."""
        return _empty_value_for(return_annotation(invocation))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "RETURNS_EMPTY_VALUES"


class ReturnsMocks:
    """Return empty values where possible and mocks of the return class otherwise."""

    def __call__(self, invocation: Invocation) -> object:
        """Return an empty value or a fresh mock of the annotated class."""
        annotation = return_annotation(invocation)
        value = _empty_value_for(annotation)
        if value is not None:
            return value
        if isinstance(annotation, type) and annotation is not type(None):
            return create_mock(annotation, MockSettings())
        return None

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "RETURNS_MOCKS"


class ReturnsSelf:
    """Return the mock itself from builder-style methods."""

    def __call__(self, invocation: Invocation) -> object:
        """Return the mock when the method's return type accepts it."""
        annotation = return_annotation(invocation)
        if annotation is t.Self:
            return invocation.mock
        if (
            isinstance(annotation, type)
            and annotation is not object
            and issubclass(invocation.mocked_type, annotation)
        ):
            return invocation.mock
        return _empty_value_for(annotation)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "RETURNS_SELF"


class CallsRealMethods:
    """Run the real implementation; abstract methods fall back to defaults."""

    def __call__(self, invocation: Invocation) -> object:
        """Return the result of the real method."""
        if not invocation.has_real_method:
            return um.DEFAULT
        return invocation.call_real_method()

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "CALLS_REAL_METHODS"


RETURNS_DEFAULTS: Answer = ReturnsDefaults()
RETURNS_EMPTY_VALUES: Answer = ReturnsEmptyValues()
RETURNS_MOCKS: Answer = ReturnsMocks()
RETURNS_SELF: Answer = ReturnsSelf()
CALLS_REAL_METHODS: Answer = CallsRealMethods()

__all__ = [
    "CALLS_REAL_METHODS",
    "RETURNS_DEFAULTS",
    "RETURNS_EMPTY_VALUES",
    "RETURNS_MOCKS",
    "RETURNS_SELF",
    "Answer",
    "CallsRealMethods",
    "ReturnsDefaults",
    "ReturnsEmptyValues",
    "ReturnsMocks",
    "ReturnsSelf",
    "return_annotation",
]
