"""Mock creation on top of :mod:`unittest.mock`.

:func:`create_mock` turns a :class:`~mocksmith.settings.MockSettings` into a
``NonCallableMagicMock`` specced to the requested class. Method attributes of
the mock are created lazily by :mod:`unittest.mock`; mocksmith only changes how
those children are built so that default answers, listeners and stub-only
recording apply to them.
"""

from __future__ import annotations

import dataclasses as dc
import inspect
import logging
import types
import typing as t
from unittest import mock as um

from .errors import InvocationListenerError, MockCreationError, NotSerializableError
from .invocation import Invocation, InvocationReport
from .settings import CreationSettings

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .settings import MockSettings

logger = logging.getLogger(__name__)

T = t.TypeVar("T")

_STATE_KEY = "_mocksmith_state"


@dc.dataclass(slots=True)
class _MockState:
    """Per-mock bookkeeping shared by the mock and its method children."""

    settings: CreationSettings
    spec_class: type
    invocations: list[Invocation] = dc.field(default_factory=list)
    calls: int = 0

    def new_invocation(
        self,
        owner: object,
        method_name: str,
        args: tuple[object, ...],
        kwargs: dict[str, object],
    ) -> Invocation:
        self.calls += 1
        invocation = Invocation(
            mock=owner,
            mock_name=self.settings.mock_name,
            method_name=method_name,
            args=args,
            kwargs=dict(kwargs),
            mocked_type=self.spec_class,
            spied_instance=self.settings.spied_instance,
            sequence=self.calls,
        )
        if not self.settings.stub_only:
            self.invocations.append(invocation)
        return invocation

    def report(self, report: InvocationReport) -> None:
        for listener in self.settings.invocation_listeners:
            try:
                listener(report)
            except Exception as exc:
                msg = (
                    f"Invocation listener {listener!r} raised while reporting "
                    f"{report.invocation}"
                )
                raise InvocationListenerError(msg) from exc


def _state_of(obj: object) -> _MockState | None:
    if not isinstance(obj, um.NonCallableMock):
        return None
    return obj.__dict__.get(_STATE_KEY)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _real_method_answer(invocation: Invocation) -> object:
    if not invocation.has_real_method:
        return um.DEFAULT
    return invocation.call_real_method()


def _is_plain_callable(effect: object) -> bool:
    if isinstance(effect, BaseException):
        return False
    if isinstance(effect, type) and issubclass(effect, BaseException):
        return False
    return callable(effect)


class _MethodMock(um.MagicMock):
    """Child mock standing in for one method of a mocksmith mock.

    :mod:`unittest.mock` builds grandchildren (return values, nested
    attributes) from the same class. Those have no settings on their direct
    parent and behave like a plain ``MagicMock``.
    """

    def _owner_state(self) -> _MockState | None:
        return _state_of(self._mock_new_parent)

    def _root_state(self) -> _MockState | None:
        parent = self._mock_new_parent
        while parent is not None:
            state = _state_of(parent)
            if state is not None:
                return state
            parent = parent._mock_new_parent
        return None

    def _increment_mock_call(self, /, *args: object, **kwargs: object) -> None:
        state = self._root_state()
        if state is not None and state.settings.stub_only:
            return
        super()._increment_mock_call(*args, **kwargs)

    def _execute_mock_call(self, /, *args: object, **kwargs: object) -> object:
        state = self._owner_state()
        if state is None:
            return super()._execute_mock_call(*args, **kwargs)
        invocation = state.new_invocation(
            self._mock_new_parent, self._mock_new_name, args, kwargs
        )
        try:
            result = self._answer(state, invocation)
        except Exception as exc:
            state.report(InvocationReport(invocation, thrown=exc))
            raise
        state.report(InvocationReport(invocation, returned_value=result))
        return result

    def _answer(self, state: _MockState, invocation: Invocation) -> object:
        args, kwargs = invocation.args, invocation.kwargs
        answer = state.settings.default_answer
        if answer is None and state.settings.spied_instance is not None:
            answer = _real_method_answer
        effect = self._mock_side_effect
        if answer is None or (effect is not None and not _is_plain_callable(effect)):
            return super()._execute_mock_call(*args, **kwargs)
        # a callable side effect returning DEFAULT declines the call
        if effect is not None:
            result = effect(*args, **kwargs)
            if result is not um.DEFAULT:
                return result
        if self._mock_return_value is not um.DEFAULT:
            return self.return_value
        value = answer(invocation)
        if value is not um.DEFAULT:
            return value
        return self.return_value


class _ConfiguredMock(um.NonCallableMagicMock):
    """Root mock carrying the settings it was created with."""

    def _get_child_mock(self, /, **kw: t.Any) -> um.NonCallableMock:
        state = _state_of(self)
        new_name = kw.get("_new_name", "")
        if (
            state is None
            or self._mock_sealed
            or kw.get("_new_parent") is not self
            or _is_dunder(new_name)
            or inspect.iscoroutinefunction(getattr(state.spec_class, new_name, None))
        ):
            return super()._get_child_mock(**kw)
        if state.settings.name is not None:
            kw["name"] = f"{state.settings.name}.{new_name}"
        return _MethodMock(**kw)

    def reset_mock(self, /, *args: t.Any, **kwargs: t.Any) -> None:
        """Reset the mock and forget the invocations mocksmith recorded."""
        super().reset_mock(*args, **kwargs)
        state = _state_of(self)
        if state is not None:
            state.invocations.clear()

    def __reduce_ex__(self, protocol: t.SupportsIndex) -> tuple[t.Any, ...]:
        state = _state_of(self)
        if state is None or not state.settings.serializable:
            name = state.settings.mock_name if state is not None else "mock"
            msg = (
                f"{name} is not serializable; create it with serializable=True "
                "or a serializable_mode"
            )
            raise NotSerializableError(msg)
        return (
            _restore_mock,
            (state.settings.serialization_payload(), self._stubbed_return_values()),
        )

    def _stubbed_return_values(self) -> dict[str, object]:
        values: dict[str, object] = {}
        for name, child in self._mock_children.items():
            if not isinstance(child, um.NonCallableMock):
                continue
            value = child._mock_return_value
            if value is um.DEFAULT or isinstance(value, um.NonCallableMock):
                continue
            values[name] = value
        return values


def _restore_mock(
    payload: dict[str, t.Any], return_values: dict[str, object]
) -> um.NonCallableMock:
    restored = _create_from(CreationSettings(**payload))
    for name, value in return_values.items():
        getattr(restored, name).return_value = value
    return restored


def _spec_class_for(settings: CreationSettings) -> type:
    target = settings.type_to_mock
    if not settings.extra_interfaces:
        return target
    try:
        return types.new_class(target.__name__, (target, *settings.extra_interfaces))
    except TypeError as exc:
        names = ", ".join(cls.__qualname__ for cls in settings.extra_interfaces)
        msg = f"Cannot mock {target.__qualname__} with extra interfaces {names}"
        raise MockCreationError(msg) from exc


def _unimplemented(self: object, *args: object, **kwargs: object) -> None:
    return None


def _constructible(target: type) -> type:
    abstract = getattr(target, "__abstractmethods__", frozenset())
    if not abstract:
        return target
    namespace = {name: _unimplemented for name in abstract}
    return types.new_class(
        target.__name__, (target,), exec_body=lambda ns: ns.update(namespace)
    )


def _construct(settings: CreationSettings) -> object:
    args = settings.constructor_args
    if settings.outer_instance is not None:
        args = (settings.outer_instance, *args)
    target = settings.type_to_mock
    try:
        return _constructible(target)(*args)
    except Exception as exc:
        msg = (
            f"Unable to create mock instance of type {target.__qualname__}: "
            f"the constructor raised {exc!r}"
        )
        raise MockCreationError(msg) from exc


def _copy_state(
    source: object, mock: um.NonCallableMock, reserved: t.AbstractSet[str]
) -> None:
    for key, value in getattr(source, "__dict__", {}).items():
        if key in reserved:
            logger.debug(
                "Not copying %s.%s: the name belongs to the mock itself",
                type(source).__qualname__,
                key,
            )
            continue
        setattr(mock, key, value)


def _create_from(settings: CreationSettings) -> um.NonCallableMock:
    spec_class = _spec_class_for(settings)
    constructed = _construct(settings) if settings.use_constructor else None
    mock = _ConfiguredMock(spec=spec_class, name=settings.name)
    mock.__dict__[_STATE_KEY] = _MockState(settings=settings, spec_class=spec_class)
    # attributes unittest.mock uses for its own bookkeeping and configuration
    reserved = frozenset(vars(mock)).union(dir(type(mock)))
    if constructed is not None:
        _copy_state(constructed, mock, reserved)
    if settings.spied_instance is not None:
        _copy_state(settings.spied_instance, mock, reserved)
    logger.debug(
        "Created mock %s for %s", settings.mock_name, settings.type_to_mock.__qualname__
    )
    return mock


def create_mock(type_to_mock: type[T], settings: MockSettings) -> T:
    """Return a mock of *type_to_mock* configured by *settings*.

    Raises :class:`~mocksmith.errors.MockCreationError` when the settings do
    not fit the type or the real constructor fails.
    """
    return t.cast("T", _create_from(settings.build(type_to_mock)))


@dc.dataclass(slots=True, frozen=True)
class MockingDetails:
    """What mocksmith knows about an object."""

    target: object
    creation_settings: CreationSettings | None
    invocations: tuple[Invocation, ...] = ()

    @property
    def is_mock(self) -> bool:
        """Return ``True`` when *target* was created by mocksmith."""
        return self.creation_settings is not None

    @property
    def is_spy(self) -> bool:
        """Return ``True`` when *target* is backed by a spied instance."""
        return (
            self.creation_settings is not None
            and self.creation_settings.spied_instance is not None
        )


def mocking_details(obj: object) -> MockingDetails:
    """Describe *obj*, which need not be a mock."""
    state = _state_of(obj)
    if state is None:
        return MockingDetails(target=obj, creation_settings=None)
    return MockingDetails(
        target=obj,
        creation_settings=state.settings,
        invocations=tuple(state.invocations),
    )


__all__ = ["MockingDetails", "create_mock", "mocking_details"]
