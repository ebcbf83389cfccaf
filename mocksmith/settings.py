"""Settings builder consumed by :func:`mocksmith.engine.create_mock`."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as t

from .errors import InvalidSettingsError, MockCreationError
from .listeners import VerboseInvocationLogger

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .answers import Answer
    from .listeners import InvocationListener


class SerializableMode(enum.StrEnum):
    """How a mock behaves when pickled."""

    NONE = "NONE"
    BASIC = "BASIC"
    ACROSS_PROCESSES = "ACROSS_PROCESSES"


@dc.dataclass(slots=True, frozen=True)
class CreationSettings:
    """Validated, immutable settings a mock was created with."""

    type_to_mock: type
    extra_interfaces: tuple[type, ...] = ()
    name: str | None = None
    spied_instance: object | None = None
    default_answer: Answer | None = None
    serializable_mode: SerializableMode = SerializableMode.NONE
    verbose_logging: bool = False
    invocation_listeners: tuple[InvocationListener, ...] = ()
    stub_only: bool = False
    use_constructor: bool = False
    constructor_args: tuple[object, ...] = ()
    outer_instance: object | None = None

    @property
    def serializable(self) -> bool:
        """Return ``True`` when the mock may be pickled."""
        return self.serializable_mode is not SerializableMode.NONE

    @property
    def mock_name(self) -> str:
        """Return the configured name, or ``"mock"`` when unnamed."""
        return self.name if self.name is not None else "mock"

    def serialization_payload(self) -> dict[str, object]:
        """Return the fields to pickle for this mock.

        ``ACROSS_PROCESSES`` leaves out listeners and verbose logging because
        they observe the process that created the mock.
        """
        payload = {field.name: getattr(self, field.name) for field in dc.fields(self)}
        if self.serializable_mode is SerializableMode.ACROSS_PROCESSES:
            payload["invocation_listeners"] = ()
            payload["verbose_logging"] = False
        return payload


class MockSettings:
    """Fluent accumulator of mock configuration.

    Each method records one setting and returns the builder. Nothing is
    validated against the mocked type until :meth:`build` runs.
    """

    def __init__(self) -> None:
        self._extra_interfaces: tuple[type, ...] = ()
        self._name: str | None = None
        self._spied_instance: object | None = None
        self._default_answer: Answer | None = None
        self._serializable_mode = SerializableMode.NONE
        self._verbose_logging = False
        self._listeners: list[InvocationListener] = []
        self._stub_only = False
        self._use_constructor = False
        self._constructor_args: tuple[object, ...] = ()
        self._outer_instance: object | None = None

    def extra_interfaces(self, *interfaces: type) -> MockSettings:
        """Make the mock an instance of *interfaces* as well."""
        if not interfaces:
            msg = "extra_interfaces() requires at least one interface"
            raise InvalidSettingsError(msg)
        for interface in interfaces:
            if not isinstance(interface, type):
                msg = f"extra_interfaces() accepts only classes, got {interface!r}"
                raise InvalidSettingsError(msg)
        self._extra_interfaces = tuple(interfaces)
        return self

    def name(self, name: str) -> MockSettings:
        """Label the mock in reprs and assertion messages."""
        self._name = name
        return self

    def spied_instance(self, instance: object) -> MockSettings:
        """Back the mock with the real *instance*."""
        self._spied_instance = instance
        return self

    def default_answer(self, answer: Answer) -> MockSettings:
        """Use *answer* for calls that were not stubbed."""
        if not callable(answer):
            msg = f"default_answer() requires a callable answer, got {answer!r}"
            raise InvalidSettingsError(msg)
        self._default_answer = answer
        return self

    def serializable(
        self, mode: SerializableMode = SerializableMode.BASIC
    ) -> MockSettings:
        """Allow the mock to be pickled using *mode*."""
        self._serializable_mode = SerializableMode(mode)
        return self

    def verbose_logging(self) -> MockSettings:
        """Log every invocation on the mock."""
        if not self._verbose_logging:
            self._verbose_logging = True
            self._listeners.append(VerboseInvocationLogger())
        return self

    def invocation_listeners(self, *listeners: InvocationListener) -> MockSettings:
        """Notify each of *listeners* after every invocation."""
        if not listeners:
            msg = "invocation_listeners() requires at least one listener"
            raise InvalidSettingsError(msg)
        for listener in listeners:
            if not callable(listener):
                msg = f"invocation listeners must be callable, got {listener!r}"
                raise InvalidSettingsError(msg)
        self._listeners.extend(listeners)
        return self

    def stub_only(self) -> MockSettings:
        """Stop recording invocations; the mock can then not be verified."""
        self._stub_only = True
        return self

    def use_constructor(self, *constructor_args: object) -> MockSettings:
        """Run the real constructor with *constructor_args* to seed state."""
        self._use_constructor = True
        self._constructor_args = constructor_args
        return self

    def outer_instance(self, instance: object) -> MockSettings:
        """Pass *instance* as the first constructor argument."""
        self._outer_instance = instance
        return self

    def build(self, type_to_mock: type) -> CreationSettings:
        """Validate the accumulated settings against *type_to_mock*."""
        if not isinstance(type_to_mock, type):
            msg = f"Cannot mock {type_to_mock!r}: a class is required"
            raise MockCreationError(msg)
        if type_to_mock in self._extra_interfaces:
            msg = (
                f"extra_interfaces() must not repeat the mocked type "
                f"{type_to_mock.__qualname__}"
            )
            raise MockCreationError(msg)
        if (
            self._spied_instance is not None
            and type_to_mock not in type(self._spied_instance).__mro__
        ):
            msg = (
                f"Mocked type {type_to_mock.__qualname__} does not match the "
                f"spied instance of type {type(self._spied_instance).__qualname__}"
            )
            raise MockCreationError(msg)
        if self._outer_instance is not None and not self._use_constructor:
            msg = "outer_instance() only makes sense together with use_constructor()"
            raise MockCreationError(msg)
        if (
            self._use_constructor
            and self._serializable_mode is SerializableMode.ACROSS_PROCESSES
        ):
            msg = (
                "Mocks created with use_constructor() cannot use the "
                f"{self._serializable_mode} serializable mode"
            )
            raise MockCreationError(msg)
        return CreationSettings(
            type_to_mock=type_to_mock,
            extra_interfaces=self._extra_interfaces,
            name=self._name,
            spied_instance=self._spied_instance,
            default_answer=self._default_answer,
            serializable_mode=self._serializable_mode,
            verbose_logging=self._verbose_logging,
            invocation_listeners=tuple(self._listeners),
            stub_only=self._stub_only,
            use_constructor=self._use_constructor,
            constructor_args=self._constructor_args,
            outer_instance=self._outer_instance,
        )


__all__ = ["CreationSettings", "MockSettings", "SerializableMode"]
