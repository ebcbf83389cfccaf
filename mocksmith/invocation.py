"""Value objects describing a single call made on a mock."""

from __future__ import annotations

import dataclasses as dc
import inspect
import typing as t


def _format_arguments(args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return ", ".join(parts)


@dc.dataclass(slots=True, eq=False)
class Invocation:
    """A method call observed on a mock.

    ``mock`` is the mock the method belongs to, ``mocked_type`` the class it
    was created for and ``spied_instance`` the real object behind a spy.
    ``sequence`` counts calls on that mock, starting at ``1``.
    """

    mock: t.Any
    mock_name: str
    method_name: str
    args: tuple[object, ...]
    kwargs: dict[str, object]
    mocked_type: type
    spied_instance: object | None = None
    sequence: int = 0

    def __str__(self) -> str:
        """Return ``name.method(args)``."""
        arguments = _format_arguments(self.args, self.kwargs)
        return f"{self.mock_name}.{self.method_name}({arguments})"

    @property
    def real_type(self) -> type:
        """Return the class real methods are looked up on.

        That is the spied object's class for a spy, else the mocked type.
        """
        if self.spied_instance is not None:
            return type(self.spied_instance)
        return self.mocked_type

    def _static_attribute(self) -> object | None:
        try:
            return inspect.getattr_static(self.real_type, self.method_name)
        except AttributeError:
            return None

    @property
    def real_function(self) -> t.Callable[..., object] | None:
        """Return the function defined on :attr:`real_type`, if any."""
        attr = self._static_attribute()
        if isinstance(attr, staticmethod | classmethod):
            return attr.__func__
        if callable(attr):
            return t.cast("t.Callable[..., object]", attr)
        return None

    @property
    def has_real_method(self) -> bool:
        """Return ``True`` when a concrete implementation exists to call."""
        return self.real_function is not None and not self.is_abstract

    @property
    def is_abstract(self) -> bool:
        """Return ``True`` when the mocked type declares the method abstract."""
        return bool(getattr(self._static_attribute(), "__isabstractmethod__", False))

    def call_real_method(self) -> object:
        """Run the real implementation of the invoked method.

        The method runs with the mock bound as ``self``, so attribute changes
        land on the mock and calls to other methods go through the mock. A spy
        never touches the object it was created from.
        """
        attr = self._static_attribute()
        if isinstance(attr, staticmethod):
            return attr.__func__(*self.args, **self.kwargs)
        if isinstance(attr, classmethod):
            return attr.__func__(self.real_type, *self.args, **self.kwargs)
        if not callable(attr):
            msg = (
                f"{self.real_type.__qualname__} has no real method "
                f"{self.method_name!r} to call"
            )
            raise TypeError(msg)
        return attr(self.mock, *self.args, **self.kwargs)


@dc.dataclass(slots=True, frozen=True)
class InvocationReport:
    """Outcome of an invocation, handed to invocation listeners."""

    invocation: Invocation
    returned_value: object = None
    thrown: BaseException | None = None

    @property
    def threw_exception(self) -> bool:
        """Return ``True`` when the invocation raised."""
        return self.thrown is not None


__all__ = ["Invocation", "InvocationReport"]
