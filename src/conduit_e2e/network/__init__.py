"""Network expectations, stubs and URL glob matching."""

from conduit_e2e.network.interceptor import (
    Interception,
    NetworkExpectation,
    NetworkInterceptor,
    StubResponse,
)
from conduit_e2e.network.patterns import UrlPattern, glob_to_regex

__all__ = [
    "Interception",
    "NetworkExpectation",
    "NetworkInterceptor",
    "StubResponse",
    "UrlPattern",
    "glob_to_regex",
]
