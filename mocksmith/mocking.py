"""Keyword-argument front end for mock creation."""

from __future__ import annotations

import typing as t

from .engine import create_mock
from .settings import MockSettings
from .stubbing import Stubbing

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .answers import Answer
    from .listeners import InvocationListener
    from .settings import SerializableMode

T = t.TypeVar("T")


def with_settings(
    *,
    extra_interfaces: t.Iterable[type] | None = None,
    name: str | None = None,
    spied_instance: object | None = None,
    default_answer: Answer | None = None,
    serializable: bool = False,
    serializable_mode: SerializableMode | None = None,
    verbose_logging: bool = False,
    invocation_listeners: t.Iterable[InvocationListener] | None = None,
    stub_only: bool = False,
    use_constructor: bool = False,
    outer_instance: object | None = None,
) -> MockSettings:
    """Build :class:`~mocksmith.settings.MockSettings` from keyword options.

    Parameters
    ----------
    extra_interfaces:
        Further classes the mock should be an instance of.
    name:
        Name used in the mock's repr and in assertion messages.
    spied_instance:
        Real object backing the mock; unstubbed calls go to it.
    default_answer:
        Strategy for calls that were not stubbed.
    serializable:
        Allow the mock to be pickled with :attr:`SerializableMode.BASIC`.
    serializable_mode:
        Allow the mock to be pickled with the given mode. Applied after
        ``serializable`` so it wins when both are given.
    verbose_logging:
        Log every invocation on the mock.
    invocation_listeners:
        Callables notified after every invocation.
    stub_only:
        Do not record invocations. Saves memory; the mock cannot be verified.
    use_constructor:
        Run the real constructor to initialise the mock's state.
    outer_instance:
        First constructor argument; only valid with ``use_constructor``.

    Options left at their defaults configure nothing, so the engine's own
    defaults apply.
    """
    settings = MockSettings()
    if extra_interfaces is not None:
        settings.extra_interfaces(*tuple(extra_interfaces))
    if name is not None:
        settings.name(name)
    if spied_instance is not None:
        settings.spied_instance(spied_instance)
    if default_answer is not None:
        settings.default_answer(default_answer)
    if serializable:
        settings.serializable()
    if serializable_mode is not None:
        settings.serializable(serializable_mode)
    if verbose_logging:
        settings.verbose_logging()
    if invocation_listeners is not None:
        settings.invocation_listeners(*tuple(invocation_listeners))
    if stub_only:
        settings.stub_only()
    if use_constructor:
        settings.use_constructor()
    if outer_instance is not None:
        settings.outer_instance(outer_instance)
    return settings


def mock(
    type_to_mock: type[T],
    *,
    extra_interfaces: t.Iterable[type] | None = None,
    name: str | None = None,
    spied_instance: object | None = None,
    default_answer: Answer | None = None,
    serializable: bool = False,
    serializable_mode: SerializableMode | None = None,
    verbose_logging: bool = False,
    invocation_listeners: t.Iterable[InvocationListener] | None = None,
    stub_only: bool = False,
    use_constructor: bool = False,
    outer_instance: object | None = None,
    stubbing: t.Callable[[Stubbing[T], T], object] | None = None,
) -> T:
    """Create a mock of *type_to_mock*.

    The keyword options are those of :func:`with_settings`. When *stubbing* is
    given it is called with a :class:`~mocksmith.stubbing.Stubbing` scope bound
    to the new mock and the mock itself, before the mock is returned, so rules
    it registers are active immediately. Errors from the engine or from the
    block propagate unchanged.
    """
    created = create_mock(
        type_to_mock,
        with_settings(
            extra_interfaces=extra_interfaces,
            name=name,
            spied_instance=spied_instance,
            default_answer=default_answer,
            serializable=serializable,
            serializable_mode=serializable_mode,
            verbose_logging=verbose_logging,
            invocation_listeners=invocation_listeners,
            stub_only=stub_only,
            use_constructor=use_constructor,
            outer_instance=outer_instance,
        ),
    )
    if stubbing is not None:
        stubbing(Stubbing(created), created)
    return created


def spy(
    instance: T,
    *,
    stubbing: t.Callable[[Stubbing[T], T], object] | None = None,
    **options: t.Any,
) -> T:
    """Create a mock of ``type(instance)`` that delegates to *instance*."""
    return mock(
        type(instance), spied_instance=instance, stubbing=stubbing, **options
    )


__all__ = ["mock", "spy", "with_settings"]
