"""pytest integration: markers, retries, logging and the run-context fixtures.

Enable it from a conftest:

    pytest_plugins = ["conduit_e2e.pytest_plugin"]

Fixtures:
    conduit_settings   session settings
    api_client         REST client, closed after the test
    conduit            RunContext bound to pytest-playwright's `page`
    auth_page, editor_page, article_page, home_page, profile_page,
    settings_page, navigation, commands
"""

from collections.abc import Callable, Generator, Iterable

import pytest
import structlog
from playwright.sync_api import Page

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.commands.library import CommandLibrary
from conduit_e2e.config.logging import bound_test, configure_logging
from conduit_e2e.config.settings import Settings, get_settings
from conduit_e2e.context import RunContext
from conduit_e2e.core.exceptions import ConfigurationError
from conduit_e2e.pages import (
    ArticlePage,
    AuthPage,
    EditorPage,
    HomePage,
    NavigationBar,
    ProfilePage,
    SettingsPage,
)

log = structlog.get_logger(__name__)

# Plugin names as registered with pytest's plugin manager
REQUIRED_PLUGINS = ("playwright", "rerunfailures")

# Only live suites are retried
RETRIED_MARKERS = ("e2e", "api")

MARKERS = (
    "unit: fast tests without browser or network",
    "e2e: browser tests against the running application",
    "api: direct REST tests against the backend",
    "browser: real Chromium against routed pages, no application needed",
    "smoke: minimal health checks",
    "auth: login, registration and logout",
    "crud: article create, read, update and delete",
    "social: comments, favorites and follows",
    "tags: tag browsing and filtering",
    "responsive: viewport and layout checks",
    "performance: timing thresholds",
    "security: authorization checks",
    "retries(n): rerun a failing live test n times instead of the configured count",
)


def check_required_plugins(
    has_plugin: Callable[[str], bool], required: Iterable[str] = REQUIRED_PLUGINS
) -> None:
    """Fail fast when a plugin the suite depends on is not installed."""
    missing = [name for name in required if not has_plugin(name)]
    if missing:
        raise ConfigurationError(
            f"Required pytest plugin(s) not installed: {', '.join(missing)}"
        )


def retry_count(item: pytest.Item, settings: Settings) -> int:
    """Reruns for a collected test: its retries marker, else the run-mode default."""
    marker = item.get_closest_marker("retries")
    if marker is not None and marker.args:
        return int(marker.args[0])
    return settings.retries


# =============================================================================
# Hooks
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    for marker in MARKERS:
        config.addinivalue_line("markers", marker)

    try:
        check_required_plugins(config.pluginmanager.hasplugin)
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e

    settings = get_settings()
    configure_logging(settings)
    log.debug(
        "test_run_configured",
        base_url=settings.base_url,
        api_url=settings.api_url,
        retries=settings.retries,
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    settings = get_settings()
    for item in items:
        if not any(item.get_closest_marker(name) for name in RETRIED_MARKERS):
            continue
        if item.get_closest_marker("flaky") is not None:
            continue
        reruns = retry_count(item, settings)
        if reruns > 0:
            item.add_marker(pytest.mark.flaky(reruns=reruns))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_protocol(item: pytest.Item, nextitem: pytest.Item | None) -> Generator:
    with bound_test(item.nodeid):
        yield


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]) -> Generator:
    outcome = yield
    report = outcome.get_result()
    if report.when == "call" and report.failed:
        log.warning("test_failed", error=call.excinfo.typename if call.excinfo else None)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def conduit_settings() -> Settings:
    return get_settings()


@pytest.fixture
def api_client(conduit_settings: Settings) -> Generator[ConduitApiClient, None, None]:
    """REST client for the configured API."""
    client = ConduitApiClient.from_settings(conduit_settings)
    yield client
    client.close()


@pytest.fixture
def conduit(
    page: Page, conduit_settings: Settings, api_client: ConduitApiClient
) -> Generator[RunContext, None, None]:
    """Run context for one browser test.

    Storage and cookies are cleared before and after the test; page errors
    that were not benign fail the test at teardown.
    """
    context = RunContext(page, conduit_settings, api_client).start()
    yield context
    context.finish()


@pytest.fixture
def auth_page(conduit: RunContext) -> AuthPage:
    return conduit.auth_page


@pytest.fixture
def editor_page(conduit: RunContext) -> EditorPage:
    return conduit.editor_page


@pytest.fixture
def article_page(conduit: RunContext) -> ArticlePage:
    return conduit.article_page


@pytest.fixture
def home_page(conduit: RunContext) -> HomePage:
    return conduit.home_page


@pytest.fixture
def profile_page(conduit: RunContext) -> ProfilePage:
    return conduit.profile_page


@pytest.fixture
def settings_page(conduit: RunContext) -> SettingsPage:
    return conduit.settings_page


@pytest.fixture
def navigation(conduit: RunContext) -> NavigationBar:
    return conduit.navigation


@pytest.fixture
def commands(conduit: RunContext) -> CommandLibrary:
    return conduit.commands
