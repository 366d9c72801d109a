"""Policy for exceptions thrown by the page under test."""

from collections.abc import Iterable
from typing import Any

import structlog

from conduit_e2e.core.exceptions import UncaughtPageError

log = structlog.get_logger(__name__)


class PageErrorGuard:
    """Collects uncaught page exceptions and drops the benign ones.

    Expected validation and auth failures surface in the app as unhandled
    promise rejections ("Request failed with status code 422"). Those are
    ignored; anything else fails the test at the next wait point.
    """

    def __init__(self, benign_patterns: Iterable[str]) -> None:
        self.benign_patterns = tuple(benign_patterns)
        self._errors: list[str] = []

    def is_benign(self, message: str) -> bool:
        return any(pattern in message for pattern in self.benign_patterns)

    def record(self, error: Any) -> None:
        """Page `pageerror` listener."""
        message = getattr(error, "message", None) or str(error)
        if self.is_benign(message):
            log.debug("page_error_ignored", error=message)
            return
        log.warning("page_error_uncaught", error=message)
        self._errors.append(message)

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    def raise_if_errors(self) -> None:
        """Raise once for everything collected so far."""
        if self._errors:
            errors, self._errors = self._errors, []
            raise UncaughtPageError(errors)
