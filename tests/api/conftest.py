"""Fixtures for the live REST API suite.

Tests here talk to the configured backend directly and are skipped when it
cannot be reached.
"""

from collections.abc import Generator

import httpx
import pytest

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.api.models import Article
from conduit_e2e.config.settings import Settings
from tests.factories import ArticleDraftFactory


@pytest.fixture(scope="session")
def api_available(conduit_settings: Settings) -> None:
    """Skip the suite when the API does not answer."""
    try:
        httpx.get(f"{conduit_settings.api_url}/tags", timeout=5.0)
    except httpx.HTTPError as e:
        pytest.skip(f"Conduit API not reachable at {conduit_settings.api_url}: {e}")


@pytest.fixture
def authed_client(
    api_available: None, api_client: ConduitApiClient, conduit_settings: Settings
) -> ConduitApiClient:
    """API client holding the test user's token."""
    user = conduit_settings.test_user
    api_client.authenticate(user.email, user.password.get_secret_value())
    return api_client


@pytest.fixture
def created_article(authed_client: ConduitApiClient) -> Generator[Article, None, None]:
    """Fresh article by the test user, removed afterwards."""
    article = authed_client.create_article(ArticleDraftFactory()).article()
    yield article
    authed_client.delete_article(article.slug, fail_on_status_code=False)
