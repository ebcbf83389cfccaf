"""Invocation listeners and the verbose invocation logger."""

from __future__ import annotations

import logging
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import InvocationReport

logger = logging.getLogger(__name__)


class InvocationListener(t.Protocol):
    """Callable notified after every method call on a mock."""

    def __call__(self, report: InvocationReport) -> None:
        """Receive the outcome of one invocation."""
        ...


class VerboseInvocationLogger:
    """Log every invocation together with its result.

    Records go to the ``mocksmith.listeners`` logger at ``INFO`` level, or to
    *log* when one is given.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self._count = 0

    def __call__(self, report: InvocationReport) -> None:
        """Write one record describing *report*."""
        self._count += 1
        if report.threw_exception:
            self._log.info(
                "Invocation #%d: %s has thrown %r",
                self._count,
                report.invocation,
                report.thrown,
            )
        else:
            self._log.info(
                "Invocation #%d: %s has returned %r",
                self._count,
                report.invocation,
                report.returned_value,
            )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        """Return a debug representation."""
        return f"VerboseInvocationLogger(logger={self._log.name!r})"


__all__ = ["InvocationListener", "VerboseInvocationLogger"]
