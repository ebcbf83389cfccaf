"""Keyword-argument mock creation on top of :mod:`unittest.mock`.

``mock()`` and ``with_settings()`` translate optional keyword arguments into a
:class:`~mocksmith.settings.MockSettings` builder, which the engine turns into
a specced mock. ``on()`` and :class:`Stubbing` register canned behaviour.
"""

from __future__ import annotations

from .answers import (
    CALLS_REAL_METHODS,
    RETURNS_DEFAULTS,
    RETURNS_EMPTY_VALUES,
    RETURNS_MOCKS,
    RETURNS_SELF,
    Answer,
)
from .engine import MockingDetails, create_mock, mocking_details
from .errors import (
    InvalidSettingsError,
    InvocationListenerError,
    MockCreationError,
    MocksmithError,
    NotSerializableError,
    StubbingError,
)
from .invocation import Invocation, InvocationReport
from .listeners import InvocationListener, VerboseInvocationLogger
from .mocking import mock, spy, with_settings
from .settings import CreationSettings, MockSettings, SerializableMode
from .stubbing import OngoingStubbing, Stubbing, on

__all__ = [
    "CALLS_REAL_METHODS",
    "RETURNS_DEFAULTS",
    "RETURNS_EMPTY_VALUES",
    "RETURNS_MOCKS",
    "RETURNS_SELF",
    "Answer",
    "CreationSettings",
    "InvalidSettingsError",
    "Invocation",
    "InvocationListener",
    "InvocationListenerError",
    "InvocationReport",
    "MockCreationError",
    "MockSettings",
    "MockingDetails",
    "MocksmithError",
    "NotSerializableError",
    "OngoingStubbing",
    "SerializableMode",
    "Stubbing",
    "StubbingError",
    "VerboseInvocationLogger",
    "create_mock",
    "mock",
    "mocking_details",
    "on",
    "spy",
    "with_settings",
]
