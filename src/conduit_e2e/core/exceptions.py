"""Conduit E2E exception hierarchy.

This module defines the base exception class and the failure categories a
test step can end in. Failures that represent a failed check also derive
from AssertionError so pytest reports them as test failures rather than
errors.
"""

from typing import Any


class ConduitE2EError(Exception):
    """Base exception for all Conduit E2E errors.

    All custom exceptions in the suite should inherit from this class
    to enable consistent error handling and logging.
    """

    pass


class ConfigurationError(ConduitE2EError):
    """Raised when configuration is invalid or required tooling is missing.

    Example:
        raise ConfigurationError("Required pytest plugin not installed: playwright")
    """

    pass


class DuplicateSelectorError(ConduitE2EError):
    """Raised when two selectors in one registry share a symbolic name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Selector '{name}' is registered more than once")


class ConditionTimeoutError(ConduitE2EError):
    """Raised by await_condition when a predicate never holds.

    Attributes:
        description: What was being waited for.
        timeout: Seconds waited.
        last_value: Last value returned by the predicate.
    """

    def __init__(self, description: str, timeout: float, last_value: Any = None) -> None:
        self.description = description
        self.timeout = timeout
        self.last_value = last_value
        super().__init__(
            f"Timed out after {timeout:.2f}s waiting for {description}. "
            f"Last result: {last_value!r}"
        )


class SelectorNotFoundError(ConduitE2EError, AssertionError):
    """Raised when a symbolic selector matches no element before the timeout.

    Example:
        raise SelectorNotFoundError("email-input", '[data-cy="email-input"]', 10.0)
    """

    def __init__(self, name: str, query: str, timeout: float) -> None:
        self.name = name
        self.query = query
        self.timeout = timeout
        super().__init__(
            f"Element '{name}' not found after {timeout:.2f}s (query: {query})"
        )


class AssertionMismatchError(ConduitE2EError, AssertionError):
    """Raised when observed state differs from the expected state.

    Attributes:
        description: The check that failed.
        expected: Expected value.
        actual: Last observed value.
    """

    def __init__(self, description: str, expected: Any, actual: Any) -> None:
        self.description = description
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {description}\n  expected: {expected!r}\n  actual:   {actual!r}"
        )


class NetworkExpectationError(ConduitE2EError, AssertionError):
    """Raised when an aliased network expectation cannot be satisfied.

    Covers an unknown alias, an alias already consumed by a previous wait,
    and a wait that timed out with no matching request.
    """

    def __init__(self, alias: str, message: str) -> None:
        self.alias = alias
        super().__init__(f"@{alias}: {message}")


class FixtureNotFoundError(ConduitE2EError):
    """Raised when a named response fixture file does not exist."""

    pass


class CommandNotFoundError(ConduitE2EError):
    """Raised when a command is invoked by a name that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown command: {name}")


class CommandFailedError(ConduitE2EError, AssertionError):
    """Raised when a command's embedded step or post-condition fails.

    Attributes:
        command: Name of the command.
        cause: The underlying failure.
    """

    def __init__(self, command: str, cause: BaseException) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"Command '{command}' failed: {cause}")


class UpstreamResponseError(ConduitE2EError):
    """Raised when the backend answers with a non-2xx status unexpectedly.

    Attributes:
        method: HTTP method.
        endpoint: Request path relative to the API base.
        status_code: HTTP status code.
        errors: The `errors` map of a 422 body, if any.
    """

    def __init__(
        self,
        method: str,
        endpoint: str,
        status_code: int,
        errors: dict[str, Any] | None = None,
    ) -> None:
        self.method = method
        self.endpoint = endpoint
        self.status_code = status_code
        self.errors = errors
        detail = f" {errors}" if errors else ""
        super().__init__(f"{method} {endpoint} returned {status_code}{detail}")


class UncaughtPageError(ConduitE2EError, AssertionError):
    """Raised when the page under test threw an exception that is not benign."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        joined = "\n  ".join(messages)
        super().__init__(f"Uncaught exception in page under test:\n  {joined}")
