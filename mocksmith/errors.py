"""Exception hierarchy for mocksmith."""

from __future__ import annotations

import pickle


class MocksmithError(Exception):
    """Base class for all mocksmith errors."""


class InvalidSettingsError(MocksmithError, ValueError):
    """Raised when a settings builder method receives unusable input."""


class MockCreationError(MocksmithError):
    """Raised when a mock cannot be created from the given settings."""


class StubbingError(MocksmithError):
    """Raised when stubbing is attempted on something that is not a mock."""


class InvocationListenerError(MocksmithError):
    """Raised when an invocation listener fails while being notified."""


class NotSerializableError(MocksmithError, pickle.PicklingError):
    """Raised when pickling a mock that was not configured as serializable."""


__all__ = [
    "InvalidSettingsError",
    "InvocationListenerError",
    "MockCreationError",
    "MocksmithError",
    "NotSerializableError",
    "StubbingError",
]
