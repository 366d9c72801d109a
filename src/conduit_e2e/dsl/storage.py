"""Browser local storage and cookie access for the page under test."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from playwright.sync_api import Page

log = structlog.get_logger(__name__)


class BrowserStorage:
    """Thin wrapper over window.localStorage of the current page.

    Local storage only exists once the page has an http(s) origin; before
    the first navigation every read returns None and clear() only drops
    cookies.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    def _has_origin(self) -> bool:
        return self.page.url.startswith(("http://", "https://"))

    def get(self, key: str) -> str | None:
        if not self._has_origin():
            return None
        return self.page.evaluate("key => window.localStorage.getItem(key)", key)

    def set(self, key: str, value: str) -> None:
        self.page.evaluate(
            "([key, value]) => window.localStorage.setItem(key, value)", [key, value]
        )

    def remove(self, key: str) -> None:
        if self._has_origin():
            self.page.evaluate("key => window.localStorage.removeItem(key)", key)

    def clear(self) -> None:
        """Clear local storage and cookies."""
        if self._has_origin():
            self.page.evaluate("() => window.localStorage.clear()")
        self.page.context.clear_cookies()
        log.debug("browser_storage_cleared", url=self.page.url)
