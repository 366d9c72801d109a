"""Tests for BrowserStorage."""

import pytest

from conduit_e2e.dsl.storage import BrowserStorage
from tests.support.fake_browser import FakePage

pytestmark = pytest.mark.unit


class TestBrowserStorage:
    """Tests for local storage and cookie access."""

    def test_reads_return_none_before_navigation(self) -> None:
        """
        Given: A page at about:blank with a stored value
        When: Reading local storage
        Then: None is returned without touching the page
        """
        page = FakePage()
        page.local_storage["jwt"] = "token"

        assert BrowserStorage(page).get("jwt") is None

    def test_set_get_remove(self) -> None:
        """
        Given: A page with an http origin
        When: Setting, reading and removing a key
        Then: Each operation reaches window.localStorage
        """
        page = FakePage()
        page.goto("http://app.conduit.test/")
        storage = BrowserStorage(page)

        storage.set("jwt", "abc")
        assert storage.get("jwt") == "abc"

        storage.remove("jwt")
        assert storage.get("jwt") is None

    def test_clear_drops_storage_and_cookies(self) -> None:
        """
        Given: A page with stored values
        When: Clearing
        Then: Local storage is empty and cookies are cleared
        """
        page = FakePage()
        page.goto("http://app.conduit.test/")
        page.local_storage.update(jwt="abc", theme="dark")

        BrowserStorage(page).clear()

        assert page.local_storage == {}
        page.context.clear_cookies.assert_called_once_with()

    def test_clear_before_navigation_only_clears_cookies(self) -> None:
        """
        Given: A page at about:blank
        When: Clearing
        Then: Local storage is left alone and cookies are cleared
        """
        page = FakePage()
        page.local_storage["jwt"] = "abc"

        BrowserStorage(page).clear()

        assert page.local_storage == {"jwt": "abc"}
        page.context.clear_cookies.assert_called_once_with()
