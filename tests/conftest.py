"""Shared pytest fixtures for Conduit E2E tests.

This module provides fixtures for:
- Settings pointed at the in-memory backend and fake application
- The fake browser page, fake Conduit app and run context for DSL tests
- The respx-served Conduit backend for API client tests
- Test data factories

Usage:
    @pytest.mark.unit
    def test_something(context):
        context.auth_page.login("test@example.com", "testpassword123")
        context.auth_page.should_have_token()
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.config.settings import Settings
from tests.factories import ArticleDraftFactory, CommentBodyFactory, UserFactory
from tests.fixtures.conduit_api_mock import API_URL, TEST_USER, ConduitBackend
from tests.support.fake_app import BASE_URL, FakeConduitApp
from tests.support.fake_browser import FakePage

pytest_plugins = [
    "conduit_e2e.pytest_plugin",
    "tests.fixtures.conduit_api_mock",
]

# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings for unit tests: fake app, in-memory API, short timeouts.

    Uses _env_file=None so a developer's .env never leaks in.
    """
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        base_url=BASE_URL,
        api_url=API_URL,
        default_command_timeout_ms=5_000,
        response_timeout_ms=5_000,
        poll_interval_ms=100,
        artifacts_dir=tmp_path / "artifacts",
    )


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def user_factory() -> type[UserFactory]:
    """Provide user factory for creating sign-up data."""
    return UserFactory


@pytest.fixture
def article_factory() -> type[ArticleDraftFactory]:
    """Provide article factory for creating drafts."""
    return ArticleDraftFactory


@pytest.fixture
def comment_factory() -> type[CommentBodyFactory]:
    """Provide comment factory for creating comment text."""
    return CommentBodyFactory


# =============================================================================
# Fake Browser
# =============================================================================


@pytest.fixture
def fake_page() -> FakePage:
    """Empty fake page at about:blank."""
    return FakePage()


@pytest.fixture
def fake_app(fake_page: FakePage, conduit_backend: ConduitBackend) -> FakeConduitApp:
    """Fake Conduit frontend bound to fake_page and the in-memory backend."""
    return FakeConduitApp(fake_page, conduit_backend)


@pytest.fixture
def api(settings: Settings) -> Generator[ConduitApiClient, None, None]:
    """API client for the in-memory backend (use with mock_conduit_api)."""
    client = ConduitApiClient.from_settings(settings)
    yield client
    client.close()


@pytest.fixture
def signed_in(fake_page: FakePage, conduit_backend: ConduitBackend) -> str:
    """Put a valid token for the test user in local storage.

    Returns:
        The token.
    """
    token = conduit_backend.token_for(TEST_USER["username"])
    fake_page.local_storage["jwt"] = token
    return token
