"""
Command Library

Reusable multi-step flows shared by every test. Each command performs its
steps and then asserts its own post-condition, so callers can rely on it
without re-checking. Any failure inside a command is raised as
CommandFailedError naming the command.

Usage:
    commands.login("test@example.com", "testpassword123")
    slug = commands.create_article("Title", "About", "Body", ["tag"])
    commands.run("add_comment", "Nice article")
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from conduit_e2e.api.models import ApiResponse, User
from conduit_e2e.core.exceptions import (
    AssertionMismatchError,
    CommandFailedError,
    CommandNotFoundError,
)
from conduit_e2e.dsl.element import Element
from conduit_e2e.dsl.page import BasePage

if TYPE_CHECKING:
    from conduit_e2e.context import RunContext

log = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_BREAKPOINTS = (320, 768, 1024, 1920)
PAGE_LOAD_THRESHOLD_MS = 5000

NAVIGATION_METRICS_JS = """
() => {
    const entries = window.performance.getEntriesByType('navigation');
    if (entries.length === 0) {
        return null;
    }
    const entry = entries[0];
    return {
        domContentLoaded: entry.domContentLoadedEventEnd - entry.domContentLoadedEventStart,
        loadComplete: entry.loadEventEnd - entry.loadEventStart,
        totalTime: entry.loadEventEnd - entry.startTime,
    };
}
"""


def command(func: F) -> F:
    """Register a CommandLibrary method as a named command.

    Failures are re-raised as CommandFailedError; a failure from a nested
    command keeps the innermost command name.
    """
    name = func.__name__

    @functools.wraps(func)
    def wrapper(self: CommandLibrary, *args: Any, **kwargs: Any) -> Any:
        log.debug("command_started", command=name)
        try:
            result = func(self, *args, **kwargs)
        except CommandFailedError:
            raise
        except Exception as e:
            log.warning("command_failed", command=name, error=str(e))
            raise CommandFailedError(name, e) from e
        log.debug("command_succeeded", command=name)
        return result

    wrapper.command_name = name  # type: ignore[attr-defined]
    return wrapper  # type: ignore[return-value]


class CommandLibrary:
    """The command set of one test, bound to its run context."""

    def __init__(self, context: RunContext) -> None:
        self.context = context
        self.screen = BasePage(context)
        self._registry: dict[str, Callable[..., Any]] = {
            member.command_name: member
            for _, member in inspect.getmembers(self, predicate=inspect.ismethod)
            if hasattr(member, "command_name")
        }

    def names(self) -> list[str]:
        return sorted(self._registry)

    def run(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke a command by name."""
        try:
            handler = self._registry[name]
        except KeyError:
            raise CommandNotFoundError(name) from None
        return handler(*args, **kwargs)

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    @command
    def login(self, email: str, password: str) -> None:
        self.context.auth_page.login(email, password).should_redirect_to_home().should_have_token()

    @command
    def login_api(self, email: str, password: str) -> User:
        """Log in over the API and hand the token to the browser."""
        user = (
            self.context.api.login(email, password, fail_on_status_code=False)
            .should_have_status(200)
            .user()
        )
        self.context.api.token = user.token
        home = self.context.home_page.visit()
        self.context.set_token(user.token)
        home.reload().should_have_token()
        return user

    @command
    def register(self, username: str, email: str, password: str) -> None:
        self.context.auth_page.register(
            username, email, password
        ).should_redirect_to_home().should_have_token()

    @command
    def logout(self) -> None:
        self.context.navigation.go_to_settings()
        self.context.settings_page.logout()
        self.screen.should_be_at("/").should_not_have_token()

    # -------------------------------------------------------------------------
    # Articles
    # -------------------------------------------------------------------------

    @command
    def create_article(
        self,
        title: str,
        description: str,
        body: str,
        tags: Iterable[str] = (),
    ) -> str:
        """Publish through the editor and return the new article's slug."""
        self.context.navigation.go_to_editor()
        editor = self.context.editor_page
        editor.fill_complete_form(title, description, body, tags).publish()
        editor.should_redirect_to_article()
        return slug_from_url(self.context.page.url)

    @command
    def edit_article(self, title: str, description: str, body: str) -> None:
        self.context.article_page.edit_article()
        self.context.editor_page.fill_title(title).fill_description(description).fill_body(
            body
        ).publish().should_redirect_to_article()
        self.context.article_page.should_have_title(title)

    @command
    def delete_article(self, confirm: bool = True) -> None:
        """Delete the open article, or open the confirmation and cancel it."""
        article = self.context.article_page.delete_article()
        if confirm:
            article.confirm_delete().should_redirect_to_home()
        else:
            article.cancel_delete().should_not_exist(article.delete_confirmation)
            article.should_have_url_containing("/article/")

    @command
    def favorite_article(self) -> None:
        self.context.article_page.favorite_article().should_be_favorited()

    @command
    def unfavorite_article(self) -> None:
        self.context.article_page.unfavorite_article().should_not_be_favorited()

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    @command
    def add_comment(self, text: str) -> None:
        self.context.article_page.add_comment(text).should_have_comment(text)

    @command
    def delete_comment(self, text: str) -> None:
        self.context.article_page.delete_comment(text).should_not_have_comment(text)

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    @command
    def visit_profile(self, username: str) -> None:
        self.context.profile_page.visit_profile(username).should_show_username(username)

    @command
    def follow_user(self, username: str) -> None:
        self.visit_profile(username)
        self.context.profile_page.toggle_follow().should_be_following()

    @command
    def unfollow_user(self, username: str) -> None:
        self.visit_profile(username)
        self.context.profile_page.toggle_follow().should_not_be_following()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @command
    def navigate_to_home(self) -> None:
        self.context.navigation.go_home()
        self.screen.should_be_at("/")

    @command
    def navigate_to_editor(self) -> None:
        self.context.navigation.go_to_editor()
        self.screen.should_have_url_containing("/editor")

    @command
    def navigate_to_settings(self) -> None:
        self.context.navigation.go_to_settings()
        self.screen.should_have_url_containing("/settings")

    @command
    def navigate_to_profile(self) -> None:
        self.context.navigation.go_to_profile()
        self.screen.should_have_url_containing("/@")

    # -------------------------------------------------------------------------
    # Forms
    # -------------------------------------------------------------------------

    @command
    def check_form_validation(self, target: str | Element, message: str) -> None:
        self.screen.should_contain(target, message)

    @command
    def check_required_field(self, target: str | Element) -> None:
        self.screen.should_have_attribute(target, "required")

    @command
    def clear_form(self, form: str | Element) -> None:
        """Clear every input and textarea inside form."""
        form_element = self.screen._target(form)
        fields = form_element.child("input, textarea", name=f"{form_element.name} fields")
        fields.clear_all()
        for index in range(fields.count()):
            self.screen.should_have_value(fields.nth(index), "")

    @command
    def fill_form(self, values: Mapping[str, str]) -> None:
        """Fill inputs keyed by test id."""
        for test_id, value in values.items():
            self.screen.fill(test_id, value)
        for test_id, value in values.items():
            self.screen.should_have_value(test_id, value)

    # -------------------------------------------------------------------------
    # API
    # -------------------------------------------------------------------------

    @command
    def api_request(self, method: str, endpoint: str, body: Any = None) -> ApiResponse:
        """Call the API as the browser's user. Never fails on status."""
        token = self.context.token()
        return self.context.api.request(
            method, endpoint, json=body, token=token or "", fail_on_status_code=False
        )

    @command
    def seed_database(self) -> None:
        self.context.storage.clear()
        self.screen.should_not_have_token()

    # -------------------------------------------------------------------------
    # Elements and assertions
    # -------------------------------------------------------------------------

    @command
    def get_by_data_cy(self, test_id: str) -> Element:
        return self.screen.element(test_id)

    @command
    def should_be_visible(self, target: str | Element) -> None:
        self.screen.should_be_visible(target)

    @command
    def should_contain_text(self, target: str | Element, text: str) -> None:
        self.screen.should_contain(target, text)

    @command
    def should_have_length(self, target: str | Element, length: int) -> None:
        self.screen.should_have_count(target, length)

    @command
    def should_be_loading(self, target: str | Element) -> None:
        self.screen.should_have_class(target, "loading")

    @command
    def should_not_be_loading(self, target: str | Element) -> None:
        self.screen.should_not_have_class(target, "loading")

    @command
    def should_have_validation_error(self, target: str | Element, message: str) -> None:
        self.screen.should_contain(target, message).should_have_class(target, "error")

    @command
    def check_a11y(self) -> None:
        """Every test-id element carries an accessible name."""
        attribute = self.context.settings.test_id_attribute
        tagged = self.screen.css(f"[{attribute}]", name="test-id elements")
        for index in range(tagged.count()):
            self.screen.should_have_any_attribute(
                tagged.nth(index), "aria-label", "aria-labelledby"
            )

    # -------------------------------------------------------------------------
    # Page state
    # -------------------------------------------------------------------------

    @command
    def wait_for_page_load(self) -> None:
        self.screen.should_not_exist("loading").should_be_visible(self.screen.css("body"))

    @command
    def wait_for_network_idle(self, settle: float = 1.0) -> None:
        """Wait until no request is in flight, then let the page settle."""
        network = self.context.network
        self.context.waiter.until(lambda: network.in_flight == 0, "network to be idle")
        self.context.waiter.pause(settle)

    @command
    def take_screenshot(self, name: str) -> Path:
        return self.screen.screenshot(name)

    @command
    def check_responsive(
        self,
        breakpoints: Iterable[int] = DEFAULT_BREAKPOINTS,
        height: int = 720,
    ) -> list[Path]:
        """Screenshot the current page at each viewport width."""
        page = self.context.page
        original = page.viewport_size
        shots = []
        try:
            for width in breakpoints:
                page.set_viewport_size({"width": width, "height": height})
                self.context.waiter.pause(0.5)
                shots.append(self.screen.screenshot(f"responsive-{width}"))
        finally:
            if original is not None:
                page.set_viewport_size(original)
        return shots

    @command
    def measure_performance(self, test_name: str) -> dict[str, Any] | None:
        """Navigation timing of the current page, or None before any navigation."""
        metrics = self.context.page.evaluate(NAVIGATION_METRICS_JS)
        if metrics is None:
            return None
        metrics = {"test_name": test_name, **metrics}
        log.info("performance_metrics", **metrics)
        return metrics

    @command
    def performance_check(self, threshold_ms: float = PAGE_LOAD_THRESHOLD_MS) -> None:
        metrics = self.measure_performance("performance_check")
        if metrics is None:
            return
        if metrics["totalTime"] >= threshold_ms:
            raise AssertionMismatchError(
                f"page load under {threshold_ms}ms", f"< {threshold_ms}", metrics["totalTime"]
            )


def slug_from_url(url: str) -> str:
    """Extract the slug from an /article/<slug> URL."""
    _, marker, rest = url.partition("/article/")
    if not marker:
        raise AssertionMismatchError("an article url", "/article/<slug>", url)
    return rest.split("?")[0].split("#")[0].strip("/")
