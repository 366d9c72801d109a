"""Configuration module for Conduit E2E.

Usage:
    from conduit_e2e.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.base_url)

Note:
    Settings are read from CONDUIT_* environment variables and an optional
    .env file. Use `get_settings()` to get the cached instance at runtime.
"""

from conduit_e2e.config.logging import bound_test, configure_logging
from conduit_e2e.config.settings import Credentials, Settings, get_settings

__all__ = ["Credentials", "Settings", "bound_test", "configure_logging", "get_settings"]
