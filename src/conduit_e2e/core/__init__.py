"""Core building blocks: exceptions, waiting and page-error policy."""

from conduit_e2e.core.exceptions import (
    AssertionMismatchError,
    CommandFailedError,
    CommandNotFoundError,
    ConditionTimeoutError,
    ConduitE2EError,
    ConfigurationError,
    DuplicateSelectorError,
    FixtureNotFoundError,
    NetworkExpectationError,
    SelectorNotFoundError,
    UncaughtPageError,
    UpstreamResponseError,
)
from conduit_e2e.core.page_errors import PageErrorGuard
from conduit_e2e.core.waiting import Waiter, await_condition

__all__ = [
    "AssertionMismatchError",
    "CommandFailedError",
    "CommandNotFoundError",
    "ConditionTimeoutError",
    "ConduitE2EError",
    "ConfigurationError",
    "DuplicateSelectorError",
    "FixtureNotFoundError",
    "NetworkExpectationError",
    "PageErrorGuard",
    "SelectorNotFoundError",
    "UncaughtPageError",
    "UpstreamResponseError",
    "Waiter",
    "await_condition",
]
