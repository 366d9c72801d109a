"""Unit-test fixtures.

The fake-page run context lives here, not in the root conftest, so its
``context`` name does not shadow pytest-playwright's ``context`` fixture
for the e2e and browser suites.
"""

from collections.abc import Generator

import pytest

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.config.settings import Settings
from conduit_e2e.context import RunContext
from tests.support.fake_app import FakeConduitApp
from tests.support.fake_browser import FakePage


@pytest.fixture
def context(
    fake_page: FakePage,
    fake_app: FakeConduitApp,
    settings: Settings,
    api: ConduitApiClient,
) -> Generator[RunContext, None, None]:
    """Started run context on the fake page, finished after the test."""
    run_context = RunContext(fake_page, settings, api, clock=fake_page.clock).start()
    yield run_context
    run_context.finish()
