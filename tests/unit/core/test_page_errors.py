"""Tests for the uncaught page exception policy."""

import pytest
from playwright.sync_api import Error as PlaywrightError

from conduit_e2e.core.exceptions import UncaughtPageError
from conduit_e2e.core.page_errors import PageErrorGuard

pytestmark = pytest.mark.unit

BENIGN = ["Request failed with status code 422", "Request failed with status code 401"]


class TestPageErrorGuard:
    """Tests for PageErrorGuard."""

    def test_benign_errors_are_ignored(self) -> None:
        """
        Given: The default benign patterns
        When: The page rejects a promise with a 422
        Then: Nothing is collected
        """
        guard = PageErrorGuard(BENIGN)

        guard.record(PlaywrightError("Uncaught (in promise) Request failed with status code 422"))

        assert guard.errors == []
        guard.raise_if_errors()

    def test_other_errors_are_raised_once(self) -> None:
        """
        Given: A non-benign page exception
        When: raise_if_errors is called twice
        Then: The first call raises UncaughtPageError, the second does nothing
        """
        guard = PageErrorGuard(BENIGN)
        guard.record(PlaywrightError("TypeError: Cannot read properties of undefined"))

        with pytest.raises(UncaughtPageError) as exc_info:
            guard.raise_if_errors()

        assert exc_info.value.messages == ["TypeError: Cannot read properties of undefined"]
        guard.raise_if_errors()

    def test_500_rejection_is_not_benign(self) -> None:
        """
        Given: The default benign patterns
        When: The page rejects a promise with a 500
        Then: It is collected
        """
        guard = PageErrorGuard(BENIGN)

        guard.record(PlaywrightError("Request failed with status code 500"))

        assert guard.errors == ["Request failed with status code 500"]

    def test_plain_objects_are_stringified(self) -> None:
        """
        Given: An error object without a message attribute
        When: Recording it
        Then: Its string form is kept
        """
        guard = PageErrorGuard([])

        guard.record("ReferenceError: foo is not defined")

        assert guard.errors == ["ReferenceError: foo is not defined"]
