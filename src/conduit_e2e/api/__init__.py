"""Conduit REST API client and wire models."""

from conduit_e2e.api.client import ConduitApiClient
from conduit_e2e.api.models import (
    ApiResponse,
    Article,
    ArticleDraft,
    Comment,
    Profile,
    User,
)

__all__ = [
    "ApiResponse",
    "Article",
    "ArticleDraft",
    "Comment",
    "ConduitApiClient",
    "Profile",
    "User",
]
