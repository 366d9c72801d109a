"""Per-test run context.

RunContext is the one object a test needs: settings, the browser page, the
waiter every assertion polls with, the network interceptor, storage, the
API client, every page object and the command library. It is built fresh
for each test, so nothing is shared through module globals.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.commands.library import CommandLibrary
from conduit_e2e.core.page_errors import PageErrorGuard
from conduit_e2e.core.waiting import Waiter
from conduit_e2e.dsl.storage import BrowserStorage
from conduit_e2e.network.interceptor import NetworkInterceptor
from conduit_e2e.pages import (
    ArticlePage,
    AuthPage,
    EditorPage,
    HomePage,
    NavigationBar,
    ProfilePage,
    SettingsPage,
)

if TYPE_CHECKING:
    from playwright.sync_api import Page

    from conduit_e2e.config.settings import Settings
    from conduit_e2e.dsl.selectors import Lookup

log = structlog.get_logger(__name__)


class RunContext:
    """Dependencies of one test, wired together.

    Attributes:
        page: Playwright page under test.
        settings: Run settings.
        waiter: Polling policy for assertions (command timeout).
        network: Aliased network expectations and stubs.
        storage: Local storage and cookies of the page.
        api: Direct REST client.
        commands: Named multi-step flows.

    Example:
        context = RunContext(page, get_settings()).start()
        context.commands.login(email, password)
        context.finish()
    """

    def __init__(
        self,
        page: Page,
        settings: Settings,
        api: ConduitApiClient | None = None,
        *,
        lookup: Lookup | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.page = page
        self.settings = settings
        self.lookup: Lookup = lookup or page.locator
        self.page_errors = PageErrorGuard(settings.benign_error_patterns)
        self.network = NetworkInterceptor(
            page,
            response_timeout=settings.response_timeout,
            poll_interval=settings.poll_interval,
            fixtures_dir=settings.fixtures_dir,
            api_url=settings.api_url,
            page_errors=self.page_errors,
            clock=clock,
        )
        # Every poll sleeps through the browser event pump
        self.waiter = Waiter(
            timeout=settings.command_timeout,
            interval=settings.poll_interval,
            sleep=self.network.pump,
            clock=clock,
        )
        self.storage = BrowserStorage(page)
        self._owns_api = api is None
        self.api = api or ConduitApiClient.from_settings(settings)

        self.auth_page = AuthPage(self)
        self.editor_page = EditorPage(self)
        self.article_page = ArticlePage(self)
        self.home_page = HomePage(self)
        self.profile_page = ProfilePage(self)
        self.settings_page = SettingsPage(self)
        self.navigation = NavigationBar(self)
        self.commands = CommandLibrary(self)

    def start(self) -> RunContext:
        """Apply timeouts and viewport, attach listeners, reset storage."""
        self.page.set_default_timeout(self.settings.default_command_timeout_ms)
        self.page.set_default_navigation_timeout(self.settings.page_load_timeout_ms)
        self.page.set_viewport_size(self.settings.viewport)
        self.page.on("pageerror", self.page_errors.record)
        self.network.install()
        self.storage.clear()
        if self.settings.stub_read_endpoints:
            self.network.install_default_stubs()
        log.debug("run_context_started", base_url=self.settings.base_url)
        return self

    def finish(self) -> None:
        """Drop stubs, clear storage and surface late page errors."""
        self.network.reset()
        self.storage.clear()
        if self._owns_api:
            self.api.close()
        log.debug("run_context_finished")
        self.page_errors.raise_if_errors()

    def token(self) -> str | None:
        return self.storage.get(self.settings.token_storage_key)

    def set_token(self, token: str) -> None:
        self.storage.set(self.settings.token_storage_key, token)

    def reset(self) -> None:
        """Clear storage and cookies mid-test."""
        self.storage.clear()
