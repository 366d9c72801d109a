"""
Fluent Page Object base.

Pattern:
    - One class per screen, elements declared with `data_cy("<test-id>")`
    - Action methods perform one interaction and return self
    - Assertion methods poll until the condition holds and return self
    - Network expectations are registered before the action that triggers them

Usage:
    class LoginPage(BasePage):
        path = "/login"
        email_input = data_cy("email-input")

    LoginPage(context).visit().fill("email-input", "a@b.c").should_have_token()
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self, TypeVar

import structlog

from conduit_e2e.core.exceptions import (
    AssertionMismatchError,
    ConditionTimeoutError,
    SelectorNotFoundError,
)
from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.selectors import SelectorRegistry

if TYPE_CHECKING:
    from conduit_e2e.context import RunContext
    from conduit_e2e.network.interceptor import Interception, StubResponse

log = structlog.get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


class data_cy:  # noqa: N801
    """Declares a page element by its test id.

    Reading the attribute on a page instance returns a fresh Element.
    """

    def __init__(self, test_id: str) -> None:
        self.test_id = test_id
        self.attr_name = test_id

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr_name = name

    def __get__(self, instance: BasePage | None, owner: type) -> Any:
        if instance is None:
            return self
        return instance.element(self.test_id)


class BasePage:
    """Shared chaining contract for every screen."""

    # Subclasses override with the screen's route
    path: str = "/"

    _test_ids: tuple[str, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                if isinstance(value, data_cy):
                    declared[attr] = value.test_id
        cls._test_ids = tuple(declared.values())

    def __init__(self, context: RunContext) -> None:
        self.context = context
        self.page = context.page
        self.settings = context.settings
        self.waiter = context.waiter
        self.network = context.network
        self.storage = context.storage
        self.registry = SelectorRegistry.from_test_ids(
            self._test_ids, attribute=self.settings.test_id_attribute
        )

    # -------------------------------------------------------------------------
    # Element lookup
    # -------------------------------------------------------------------------

    def element(self, name: str) -> Element:
        """Element for a declared or ad-hoc test id."""
        selector = self.registry.get_selector(name)
        return Element(
            selector.name,
            selector.query,
            lambda: self.context.lookup(selector.query),
            self.waiter,
        )

    def css(self, query: str, name: str | None = None) -> Element:
        """Element for a raw CSS query (structural checks only)."""
        return Element(name or query, query, lambda: self.context.lookup(query), self.waiter)

    def _target(self, target: str | Element) -> Element:
        return target if isinstance(target, Element) else self.element(target)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def url_for(self, path: str) -> str:
        return f"{self.settings.base_url}/{path.lstrip('/')}"

    def visit(self, path: str | None = None) -> Self:
        url = self.url_for(self.path if path is None else path)
        log.debug("page_visit", page=type(self).__name__, url=url)
        self.page.goto(url)
        return self

    def reload(self) -> Self:
        self.page.reload()
        return self

    @property
    def url(self) -> str:
        return self.page.url

    # -------------------------------------------------------------------------
    # Generic actions
    # -------------------------------------------------------------------------

    def click(self, target: str | Element) -> Self:
        self._target(target).click()
        return self

    def fill(self, target: str | Element, text: str) -> Self:
        self._target(target).fill(text)
        return self

    def append(self, target: str | Element, text: str) -> Self:
        self._target(target).append(text)
        return self

    def press(self, target: str | Element, key: str) -> Self:
        self._target(target).press(key)
        return self

    def clear(self, target: str | Element) -> Self:
        self._target(target).clear()
        return self

    def pause(self, seconds: float) -> Self:
        self.waiter.pause(seconds)
        return self

    def screenshot(self, name: str, full_page: bool = True) -> Path:
        path = self.settings.artifacts_dir / "screenshots" / f"{name}.png"
        path.parent.mkdir(parents=True, exist_ok=True)
        self.page.screenshot(path=str(path), full_page=full_page)
        log.info("screenshot_saved", path=str(path))
        return path

    # -------------------------------------------------------------------------
    # Assertion core
    # -------------------------------------------------------------------------

    def _assert(
        self,
        description: str,
        observe: Callable[[], T],
        accept: Callable[[T], bool],
        expected: Any,
        element: Element | None = None,
        require_present: bool = True,
    ) -> Self:
        """Poll observe() until accept() holds.

        When element is given and require_present is set, an element that
        never appears is reported as a lookup failure rather than a mismatch.
        """
        last: list[Any] = [None]

        def check() -> bool:
            if element is not None and require_present and not element.exists():
                last[0] = _MISSING
                return False
            value = observe()
            last[0] = value
            return accept(value)

        try:
            self.waiter.until(check, description)
        except ConditionTimeoutError as e:
            if last[0] is _MISSING and element is not None:
                raise SelectorNotFoundError(element.name, element.query, e.timeout) from None
            log.debug("assertion_failed", check=description, actual=last[0])
            raise AssertionMismatchError(description, expected, last[0]) from None
        return self

    # -------------------------------------------------------------------------
    # Generic assertions
    # -------------------------------------------------------------------------

    def should_exist(self, target: str | Element) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to exist", el.count, lambda c: c > 0, "at least 1 element", el
        )

    def should_not_exist(self, target: str | Element) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' not to exist", el.count, lambda c: c == 0, 0, el, require_present=False
        )

    def should_be_visible(self, target: str | Element) -> Self:
        el = self._target(target)
        return self._assert(f"'{el.name}' to be visible", el.is_visible, bool, True, el)

    def should_contain(self, target: str | Element, text: Any) -> Self:
        el = self._target(target)
        expected = str(text)
        return self._assert(
            f"'{el.name}' to contain {expected!r}",
            el.text,
            lambda actual: expected in (actual or ""),
            expected,
            el,
        )

    def should_not_contain(self, target: str | Element, text: Any) -> Self:
        el = self._target(target)
        unexpected = str(text)
        return self._assert(
            f"'{el.name}' not to contain {unexpected!r}",
            el.text,
            lambda actual: unexpected not in (actual or ""),
            f"no {unexpected!r}",
            el,
        )

    def should_have_value(self, target: str | Element, value: str) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to have value {value!r}", el.value, lambda v: v == value, value, el
        )

    def should_have_attribute(
        self, target: str | Element, attribute: str, value: str | None = None
    ) -> Self:
        el = self._target(target)
        if value is None:
            return self._assert(
                f"'{el.name}' to have attribute {attribute!r}",
                lambda: el.attribute(attribute),
                lambda v: v is not None,
                f"{attribute} present",
                el,
            )
        return self._assert(
            f"'{el.name}' to have {attribute}={value!r}",
            lambda: el.attribute(attribute),
            lambda v: v == value,
            value,
            el,
        )

    def should_have_any_attribute(self, target: str | Element, *attributes: str) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to have one of {attributes}",
            lambda: {a: el.attribute(a) for a in attributes},
            lambda found: any(v is not None for v in found.values()),
            f"any of {attributes}",
            el,
        )

    def should_have_class(self, target: str | Element, class_name: str) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to have class {class_name!r}",
            el.classes,
            lambda classes: class_name in classes,
            class_name,
            el,
        )

    def should_not_have_class(self, target: str | Element, class_name: str) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' not to have class {class_name!r}",
            el.classes,
            lambda classes: class_name not in classes,
            f"no {class_name!r}",
            el,
        )

    def should_have_count(self, target: str | Element, count: int) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to match {count} element(s)",
            el.count,
            lambda c: c == count,
            count,
            el,
            require_present=False,
        )

    def should_have_count_greater_than(self, target: str | Element, count: int) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to match more than {count} element(s)",
            el.count,
            lambda c: c > count,
            f"> {count}",
            el,
            require_present=False,
        )

    def should_be_disabled(self, target: str | Element) -> Self:
        el = self._target(target)
        return self._assert(f"'{el.name}' to be disabled", el.is_disabled, bool, True, el)

    def should_be_enabled(self, target: str | Element) -> Self:
        el = self._target(target)
        return self._assert(
            f"'{el.name}' to be enabled", el.is_disabled, lambda d: not d, True, el
        )

    def should_have_focus(self, target: str | Element) -> Self:
        el = self._target(target)
        return self._assert(f"'{el.name}' to have focus", el.is_focused, bool, True, el)

    def should_have_tag_name(self, target: str | Element, tag_name: str) -> Self:
        el = self._target(target)
        expected = tag_name.upper()
        return self._assert(
            f"'{el.name}' to be a <{tag_name.lower()}>",
            el.tag_name,
            lambda t: (t or "").upper() == expected,
            expected,
            el,
        )

    def should_have_url_containing(self, fragment: str) -> Self:
        return self._assert(
            f"url to include {fragment!r}", lambda: self.page.url, lambda u: fragment in u, fragment
        )

    def should_not_have_url_containing(self, fragment: str) -> Self:
        return self._assert(
            f"url not to include {fragment!r}",
            lambda: self.page.url,
            lambda u: fragment not in u,
            f"no {fragment!r}",
        )

    def should_be_at(self, path: str) -> Self:
        expected = self.url_for(path)
        return self._assert(
            f"url to equal {expected!r}", lambda: self.page.url, lambda u: u == expected, expected
        )

    def should_have_token(self) -> Self:
        key = self.settings.token_storage_key
        return self._assert(
            f"local storage '{key}' to exist",
            lambda: self.storage.get(key),
            lambda token: bool(token),
            "a token",
        )

    def should_not_have_token(self) -> Self:
        key = self.settings.token_storage_key
        return self._assert(
            f"local storage '{key}' not to exist",
            lambda: self.storage.get(key),
            lambda token: token is None,
            None,
        )

    # -------------------------------------------------------------------------
    # Network expectations
    # -------------------------------------------------------------------------

    def expect_request(
        self,
        alias: str,
        method: str,
        pattern: str,
        stub: StubResponse | None = None,
    ) -> Self:
        self.network.register(alias, method, pattern, stub)
        return self

    def wait_for(self, alias: str) -> Interception:
        """Block until the aliased request completes and return it."""
        return self.network.wait(alias)

    def should_receive_response(self, alias: str, status_code: int = 200) -> Self:
        self.network.wait(alias).should_have_status(status_code)
        return self

    def should_not_have_requested(self, alias: str, settle: float = 0.5) -> Self:
        """Give the page a moment, then check the alias saw no request."""
        self.waiter.pause(settle)
        calls = self.network.call_count(alias)
        if calls:
            raise AssertionMismatchError(f"no request for @{alias}", 0, calls)
        return self
