"""Playwright E2E fixtures for the Conduit frontend.

This module provides fixtures for:
- Browser context setup from the run settings (base URL, viewport)
- Skipping the suite when the application is not reachable
- Starting every test from the home page with clean storage
- Signed-in sessions and seeded articles through the REST API

Usage:
    @pytest.mark.e2e
    def test_something(auth_page, conduit_settings):
        auth_page.visit_login().login(email, password).should_have_token()
"""

from collections.abc import Generator
from typing import Any

import httpx
import pytest

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.api.models import Article, User
from conduit_e2e.config.settings import Settings
from conduit_e2e.context import RunContext
from tests.factories import ArticleDraftFactory

# =============================================================================
# Browser Configuration
# =============================================================================


@pytest.fixture(scope="session")
def browser_context_args(
    browser_context_args: dict[str, Any], conduit_settings: Settings
) -> dict[str, Any]:
    """Configure the browser context for the application under test."""
    return {
        **browser_context_args,
        "base_url": conduit_settings.base_url,
        "viewport": conduit_settings.viewport,
    }


@pytest.fixture(scope="session")
def app_available(conduit_settings: Settings) -> None:
    """Skip live browser tests when the frontend does not answer."""
    try:
        httpx.get(conduit_settings.base_url, timeout=5.0)
    except httpx.HTTPError as e:
        pytest.skip(f"Conduit app not reachable at {conduit_settings.base_url}: {e}")


@pytest.fixture(autouse=True)
def start_at_home(app_available: None, conduit: RunContext) -> None:
    """Every test starts on the home page with clean storage."""
    conduit.home_page.visit()


# =============================================================================
# Arranged State
# =============================================================================


@pytest.fixture
def signed_in_user(conduit: RunContext, conduit_settings: Settings) -> User:
    """Log in the test user over the API and hand the token to the browser."""
    credentials = conduit_settings.test_user
    return conduit.commands.login_api(credentials.email, credentials.password.get_secret_value())


@pytest.fixture
def own_article(
    signed_in_user: User, api_client: ConduitApiClient
) -> Generator[Article, None, None]:
    """Article by the signed-in user, deleted after the test if still present."""
    article = api_client.create_article(ArticleDraftFactory()).article()
    yield article
    api_client.delete_article(article.slug, fail_on_status_code=False)
