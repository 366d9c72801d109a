"""
Lazy element handles.

An Element never caches a DOM node: every read or action re-runs its locate
function, so it tolerates elements that render late or re-render. State
reads never wait; actions first wait for the element to exist and fail with
SelectorNotFoundError naming the symbolic selector.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from conduit_e2e.core.exceptions import ConditionTimeoutError, SelectorNotFoundError

if TYPE_CHECKING:
    from playwright.sync_api import Locator

    from conduit_e2e.core.waiting import Waiter


class Element:
    """A named, lazily resolved handle to zero or more DOM nodes."""

    def __init__(
        self,
        name: str,
        query: str,
        locate: Callable[[], Locator],
        waiter: Waiter,
    ) -> None:
        self.name = name
        self.query = query
        self._locate = locate
        self._waiter = waiter

    def __repr__(self) -> str:
        return f"Element({self.name!r}, {self.query!r})"

    @property
    def locator(self) -> Locator:
        """A fresh Playwright locator."""
        return self._locate()

    # -------------------------------------------------------------------------
    # Scoping
    # -------------------------------------------------------------------------

    def child(self, query: str, name: str | None = None) -> Element:
        """Descendants of this element matching query."""
        return Element(
            name or f"{self.name} {query}",
            f"{self.query} {query}",
            lambda: self.locator.locator(query),
            self._waiter,
        )

    def nth(self, index: int) -> Element:
        return Element(
            f"{self.name}[{index}]",
            f"{self.query} >> nth={index}",
            lambda: self.locator.nth(index),
            self._waiter,
        )

    @property
    def first(self) -> Element:
        return self.nth(0)

    def containing(self, text: str) -> Element:
        """Only the matches whose text contains text."""
        return Element(
            f"{self.name} containing {text!r}",
            f"{self.query} >> has-text={text!r}",
            lambda: self.locator.filter(has_text=text),
            self._waiter,
        )

    # -------------------------------------------------------------------------
    # State (never waits)
    # -------------------------------------------------------------------------

    def count(self) -> int:
        return self.locator.count()

    def exists(self) -> bool:
        return self.count() > 0

    def is_visible(self) -> bool:
        return self.exists() and self.locator.first.is_visible()

    def texts(self) -> list[str]:
        if not self.exists():
            return []
        return self.locator.all_inner_texts()

    def text(self) -> str | None:
        """Text of all matches joined, or None when nothing matches."""
        if not self.exists():
            return None
        return "\n".join(self.texts())

    def value(self) -> str | None:
        if not self.exists():
            return None
        return self.locator.first.input_value()

    def attribute(self, name: str) -> str | None:
        if not self.exists():
            return None
        return self.locator.first.get_attribute(name)

    def classes(self) -> list[str]:
        return (self.attribute("class") or "").split()

    def is_disabled(self) -> bool:
        return self.exists() and self.locator.first.is_disabled()

    def is_focused(self) -> bool:
        if not self.exists():
            return False
        return bool(self.locator.first.evaluate("el => el === document.activeElement"))

    def tag_name(self) -> str | None:
        if not self.exists():
            return None
        return str(self.locator.first.evaluate("el => el.tagName"))

    # -------------------------------------------------------------------------
    # Waiting
    # -------------------------------------------------------------------------

    def wait_present(self, timeout: float | None = None) -> Element:
        """Block until at least one node matches."""
        try:
            self._waiter.until(self.exists, f"'{self.name}' to exist", timeout)
        except ConditionTimeoutError as e:
            raise SelectorNotFoundError(self.name, self.query, e.timeout) from None
        return self

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def click(self) -> Element:
        self.wait_present().locator.first.click()
        return self

    def fill(self, text: str) -> Element:
        """Replace the current value with text."""
        self.wait_present().locator.first.fill(text)
        return self

    def append(self, text: str) -> Element:
        """Type text after the current value, key by key."""
        self.wait_present().locator.first.press_sequentially(text)
        return self

    def press(self, key: str) -> Element:
        self.wait_present().locator.first.press(key)
        return self

    def clear(self) -> Element:
        self.wait_present().locator.first.clear()
        return self

    def clear_all(self) -> Element:
        """Clear every matching input."""
        self.wait_present()
        for index in range(self.count()):
            self.locator.nth(index).clear()
        return self

    def focus(self) -> Element:
        self.wait_present().locator.first.focus()
        return self
